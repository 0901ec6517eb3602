from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.catalog.serializers import PlaceListSerializer, RouteListSerializer, ServiceListSerializer
from .serializers import (
    UserSerializer,
    AdminUserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    ProfileUpdateSerializer,
    AvatarUploadSerializer,
    RoleUpdateSerializer,
    UserListQuerySerializer,
)
from .permissions import IsAdminRole
from .services import (
    register_user,
    authenticate_user,
    update_profile as update_profile_service,
    set_avatar,
    add_favorite as add_favorite_service,
    remove_favorite as remove_favorite_service,
    get_favorites,
    list_users,
    change_user_role,
    set_user_ban,
    UserRegistrationError,
    InvalidCredentialsError,
    BannedAccountError,
    UserNotFoundError,
    ProfileUpdateError,
    ForbiddenError,
    InvalidRoleError,
    FavoriteTargetNotFoundError,
    InvalidFavoriteTypeError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class UserPagination(PageNumberPagination):
    """Pagination for the administration user list."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _auth_response(user, message, status_code=status.HTTP_200_OK):
    refresh = RefreshToken.for_user(user)
    return Response({
        'message': message,
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    }, status=status_code)


# =============================================================================
# AUTHENTICATION
# =============================================================================

@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return _auth_response(user, 'Registration successful', status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with login and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with login and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except BannedAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return _auth_response(user, 'Login successful')


# =============================================================================
# PROFILE
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['profile'],
)
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Update name, email, profile information or password.",
    tags=['profile'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def me(request):
    """Get or update the current user's profile."""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = ProfileUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = update_profile_service(user=request.user, **serializer.validated_data)
    except ProfileUpdateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)


@extend_schema(
    request={'multipart/form-data': AvatarUploadSerializer},
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Upload a new avatar. Raster images are converted to WebP.",
    tags=['profile'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_avatar(request):
    """Upload avatar image."""
    from apps.content.services import MediaValidationError

    serializer = AvatarUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = set_avatar(user=request.user, upload=serializer.validated_data['avatar'])
    except MediaValidationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)


# =============================================================================
# FAVORITES
# =============================================================================

@extend_schema(
    description="List the current user's favorite routes, places and services.",
    tags=['profile'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def favorites(request):
    """Get resolved favorites."""
    data = get_favorites(user=request.user)
    return Response({
        'routes': RouteListSerializer(data['routes'], many=True).data,
        'places': PlaceListSerializer(data['places'], many=True).data,
        'services': ServiceListSerializer(data['services'], many=True).data,
    })


@extend_schema(
    request=None,
    responses={200: OpenApiTypes.OBJECT, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Add (POST) or remove (DELETE) an entity from favorites.",
    tags=['profile'],
)
@api_view(['POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def favorite_detail(request, entity_type, entity_id):
    """Add or remove a favorite."""
    try:
        if request.method == 'POST':
            ids = add_favorite_service(
                user_id=request.user.id,
                entity_type=entity_type,
                entity_id=entity_id,
            )
        else:
            ids = remove_favorite_service(
                user_id=request.user.id,
                entity_type=entity_type,
                entity_id=entity_id,
            )
    except InvalidFavoriteTypeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except FavoriteTargetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({'entity_type': entity_type, 'ids': ids})


# =============================================================================
# USER ADMINISTRATION
# =============================================================================

@extend_schema(
    parameters=[
        OpenApiParameter('search', OpenApiTypes.STR, description='Search in email, login and name'),
        OpenApiParameter('role', OpenApiTypes.STR, description='USER, ADMIN or SUPERADMIN (super admin only)'),
        OpenApiParameter('include_superadmin', OpenApiTypes.BOOL),
        OpenApiParameter('sort_by', OpenApiTypes.STR, description='email, login, name, role, created_at'),
        OpenApiParameter('sort_order', OpenApiTypes.STR, description='asc or desc'),
    ],
    responses={200: AdminUserSerializer(many=True)},
    description="List users visible to the current administrator.",
    tags=['admin-users'],
)
@api_view(['GET'])
@permission_classes([IsAdminRole])
def admin_user_list(request):
    """Paginated user list for administrators."""
    query_serializer = UserListQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    queryset = list_users(actor=request.user, **query_serializer.validated_data)

    paginator = UserPagination()
    page = paginator.paginate_queryset(queryset, request)
    return paginator.get_paginated_response(AdminUserSerializer(page, many=True).data)


@extend_schema(
    request=RoleUpdateSerializer,
    responses={
        200: AdminUserSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Change a user's role (super administrator only).",
    tags=['admin-users'],
)
@api_view(['PATCH'])
@permission_classes([IsAdminRole])
def admin_user_role(request, user_id):
    """Change user role."""
    serializer = RoleUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = change_user_role(
            actor=request.user,
            user_id=user_id,
            role=serializer.validated_data['role'],
        )
    except ForbiddenError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidRoleError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(AdminUserSerializer(user).data)


def _set_ban(request, user_id, banned):
    try:
        user = set_user_ban(actor=request.user, user_id=user_id, banned=banned)
    except ForbiddenError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(AdminUserSerializer(user).data)


@extend_schema(
    request=None,
    responses={200: AdminUserSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Ban a user. Administrators cannot be banned.",
    tags=['admin-users'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_user_ban(request, user_id):
    """Ban user."""
    return _set_ban(request, user_id, True)


@extend_schema(
    request=None,
    responses={200: AdminUserSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Lift a ban.",
    tags=['admin-users'],
)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_user_unban(request, user_id):
    """Unban user."""
    return _set_ban(request, user_id, False)
