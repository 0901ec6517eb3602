from rest_framework import viewsets, status, mixins, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRole
from apps.analytics.services import record_unique_view
from .serializers import (
    NewsSerializer,
    NewsListSerializer,
    NewsWriteSerializer,
    SiteContentSerializer,
    SiteContentUpdateSerializer,
    MediaSerializer,
    MediaUploadSerializer,
    FeedbackSerializer,
)
from .services import (
    list_news,
    list_public_news,
    get_news_by_id,
    get_public_news,
    create_news,
    update_news,
    delete_news,
    get_section_content,
    update_section_content,
    get_footer_content,
    update_footer_content,
    get_page_content,
    update_page_content,
    store_image,
    store_document,
    store_video,
    list_media,
    delete_media,
    send_feedback,
    HOME_KEY,
    REGION_KEY,
    ContentServiceError,
    NewsNotFoundError,
    PageNotFoundError,
    MediaNotFoundError,
    FeedbackNotConfiguredError,
    FeedbackDeliveryError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ContentPagination(PageNumberPagination):
    """Custom pagination for news and media."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


ERROR_STATUSES = (
    ((NewsNotFoundError, PageNotFoundError, MediaNotFoundError), status.HTTP_404_NOT_FOUND),
    ((FeedbackNotConfiguredError,), status.HTTP_503_SERVICE_UNAVAILABLE),
    ((FeedbackDeliveryError,), status.HTTP_502_BAD_GATEWAY),
)


def _error_response(error: ContentServiceError):
    for error_types, error_status in ERROR_STATUSES:
        if isinstance(error, error_types):
            return Response({'error': str(error)}, status=error_status)
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


# ============================================
# News
# ============================================

@extend_schema_view(
    list=extend_schema(
        parameters=[OpenApiParameter('search', OpenApiTypes.STR, description="Substring over title and content")],
        tags=['admin-news'],
    ),
    retrieve=extend_schema(responses={200: NewsSerializer, 404: ErrorResponseSerializer}, tags=['admin-news']),
    create=extend_schema(responses={201: NewsSerializer, 400: ErrorResponseSerializer}, tags=['admin-news']),
    update=extend_schema(responses={200: NewsSerializer, 404: ErrorResponseSerializer}, tags=['admin-news']),
    partial_update=extend_schema(responses={200: NewsSerializer, 404: ErrorResponseSerializer}, tags=['admin-news']),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-news']),
)
class AdminNewsViewSet(viewsets.ModelViewSet):
    """Admin CRUD for news and articles."""

    permission_classes = [IsAdminRole]
    pagination_class = ContentPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        return list_news(search=self.request.query_params.get('search'))

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return NewsWriteSerializer
        if self.action == 'list':
            return NewsListSerializer
        return NewsSerializer

    def retrieve(self, request, *args, **kwargs):
        try:
            news = get_news_by_id(news_id=kwargs['pk'])
        except ContentServiceError as e:
            return _error_response(e)
        return Response(NewsSerializer(news).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            news = create_news(data=serializer.validated_data)
        except ContentServiceError as e:
            return _error_response(e)

        return Response(NewsSerializer(news).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            news = update_news(news_id=kwargs['pk'], data=serializer.validated_data)
        except ContentServiceError as e:
            return _error_response(e)

        return Response(NewsSerializer(news).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_news(news_id=kwargs['pk'])
        except ContentServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('type', OpenApiTypes.STR, enum=['news', 'article'], description="Defaults to news"),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('search', OpenApiTypes.STR, description="Substring over title and short description"),
        ],
        tags=['news'],
    ),
    retrieve=extend_schema(responses={200: NewsSerializer, 404: ErrorResponseSerializer}, tags=['news']),
)
class PublicNewsViewSet(viewsets.ReadOnlyModelViewSet):
    """Active news and articles; detail by id or slug records a unique view."""

    permission_classes = [AllowAny]
    pagination_class = ContentPagination
    serializer_class = NewsListSerializer
    lookup_value_regex = '[^/]+'

    def get_queryset(self):
        params = self.request.query_params
        return list_public_news(
            news_type=params.get('type'),
            category=params.get('category'),
            search=params.get('search'),
        )

    def retrieve(self, request, *args, **kwargs):
        try:
            news = get_public_news(id_or_slug=kwargs['pk'])
        except ContentServiceError as e:
            return _error_response(e)

        record_unique_view(
            entity_type='news',
            entity_id=news.id,
            visitor_id=getattr(request, 'visitor_id', None),
            user=request.user if request.user.is_authenticated else None,
        )
        return Response(NewsSerializer(news).data)


# ============================================
# Site content
# ============================================

def _section_response(request, key):
    if request.method == 'GET':
        return Response({'key': key, 'content': get_section_content(key=key)})

    serializer = SiteContentUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        content = update_section_content(key=key, content=serializer.validated_data['content'])
    except ContentServiceError as e:
        return _error_response(e)
    return Response({'key': key, 'content': content})


SECTION_UPDATE_SCHEMA = extend_schema(
    methods=['PUT'],
    request=SiteContentUpdateSerializer,
    responses={200: SiteContentSerializer, 400: ErrorResponseSerializer},
    tags=['admin-content'],
)


@extend_schema(responses={200: OpenApiTypes.OBJECT}, description="Home page content.", tags=['content'])
@api_view(['GET'])
@permission_classes([AllowAny])
def home_content(request):
    """Public home page content merged over its defaults."""
    return Response(get_section_content(key=HOME_KEY))


@extend_schema(methods=['GET'], responses={200: SiteContentSerializer}, tags=['admin-content'])
@SECTION_UPDATE_SCHEMA
@api_view(['GET', 'PUT'])
@permission_classes([IsAdminRole])
def admin_home_content(request):
    """Read or replace the home page document."""
    return _section_response(request, HOME_KEY)


@extend_schema(responses={200: OpenApiTypes.OBJECT}, description="Region page content.", tags=['content'])
@api_view(['GET'])
@permission_classes([AllowAny])
def region_content(request):
    """Public region page content merged over its defaults."""
    return Response(get_section_content(key=REGION_KEY))


@extend_schema(methods=['GET'], responses={200: SiteContentSerializer}, tags=['admin-content'])
@SECTION_UPDATE_SCHEMA
@api_view(['GET', 'PUT'])
@permission_classes([IsAdminRole])
def admin_region_content(request):
    """Read or replace the region page document."""
    return _section_response(request, REGION_KEY)


@extend_schema(responses={200: OpenApiTypes.OBJECT}, description="Footer content.", tags=['content'])
@api_view(['GET'])
@permission_classes([AllowAny])
def footer_content(request):
    """Public footer."""
    return Response(get_footer_content())


@extend_schema(
    methods=['GET'],
    responses={200: SiteContentSerializer},
    description="Saved footer, or an empty skeleton.",
    tags=['admin-content'],
)
@extend_schema(
    methods=['PUT'],
    request=SiteContentUpdateSerializer,
    responses={200: SiteContentSerializer, 400: ErrorResponseSerializer},
    description="Replace the footer document.",
    tags=['admin-content'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAdminRole])
def admin_footer_content(request):
    """Read or replace the footer."""
    if request.method == 'GET':
        return Response({'key': 'footer', 'content': get_footer_content()})

    serializer = SiteContentUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        content = update_footer_content(content=serializer.validated_data['content'])
    except ContentServiceError as e:
        return _error_response(e)
    return Response({'key': 'footer', 'content': content})


@extend_schema(
    responses={200: OpenApiTypes.OBJECT, 404: ErrorResponseSerializer},
    description="Header content of the routes, places, news or services page.",
    tags=['content'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def page_content(request, page_name):
    """Public page header."""
    try:
        return Response(get_page_content(page_name=page_name))
    except ContentServiceError as e:
        return _error_response(e)


@extend_schema(
    methods=['GET'],
    responses={200: SiteContentSerializer, 404: ErrorResponseSerializer},
    tags=['admin-content'],
)
@extend_schema(
    methods=['PUT'],
    request=SiteContentUpdateSerializer,
    responses={200: SiteContentSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    tags=['admin-content'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAdminRole])
def admin_page_content(request, page_name):
    """Read or replace a page header."""
    try:
        if request.method == 'GET':
            content = get_page_content(page_name=page_name)
        else:
            serializer = SiteContentUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            content = update_page_content(page_name=page_name, content=serializer.validated_data['content'])
    except ContentServiceError as e:
        return _error_response(e)

    return Response({'key': f'page:{page_name}', 'content': content})


# ============================================
# Media library
# ============================================

@extend_schema_view(
    list=extend_schema(responses={200: MediaSerializer(many=True)}, tags=['admin-media']),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-media']),
)
class MediaViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Admin media library.

    Images are converted to WebP (SVG kept); documents and videos are
    stored unchanged.
    """

    permission_classes = [IsAdminRole]
    pagination_class = ContentPagination
    serializer_class = MediaSerializer
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        return list_media()

    def destroy(self, request, *args, **kwargs):
        try:
            delete_media(media_id=kwargs['pk'])
        except ContentServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _upload(self, request, store):
        serializer = MediaUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            media = store(upload=serializer.validated_data['file'])
        except ContentServiceError as e:
            return _error_response(e)

        return Response(MediaSerializer(media).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request={'multipart/form-data': MediaUploadSerializer},
        responses={201: MediaSerializer, 400: ErrorResponseSerializer},
        description="Upload an image (max 15 MB).",
        tags=['admin-media'],
    )
    @action(detail=False, methods=['post'], parser_classes=[MultiPartParser, FormParser])
    def upload(self, request):
        return self._upload(request, store_image)

    @extend_schema(
        request={'multipart/form-data': MediaUploadSerializer},
        responses={201: MediaSerializer, 400: ErrorResponseSerializer},
        description="Upload a PDF, DOC or DOCX file (max 20 MB).",
        tags=['admin-media'],
    )
    @action(detail=False, methods=['post'], url_path='upload-document', parser_classes=[MultiPartParser, FormParser])
    def upload_document(self, request):
        return self._upload(request, store_document)

    @extend_schema(
        request={'multipart/form-data': MediaUploadSerializer},
        responses={201: MediaSerializer, 400: ErrorResponseSerializer},
        description="Upload an MP4, WebM, MOV, AVI or MKV video (max 200 MB).",
        tags=['admin-media'],
    )
    @action(detail=False, methods=['post'], url_path='upload-video', parser_classes=[MultiPartParser, FormParser])
    def upload_video(self, request):
        return self._upload(request, store_video)


# ============================================
# Feedback
# ============================================

@extend_schema(
    request=FeedbackSerializer,
    responses={200: OpenApiTypes.OBJECT, 400: ErrorResponseSerializer, 503: ErrorResponseSerializer},
    description="Send a message from the footer form to the site's feedback address.",
    tags=['content'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def feedback(request):
    """Footer feedback form."""
    serializer = FeedbackSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        send_feedback(**serializer.validated_data)
    except ContentServiceError as e:
        return _error_response(e)

    return Response({'success': True})
