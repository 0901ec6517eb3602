from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRole
from .serializers import (
    ReviewSerializer,
    AdminReviewSerializer,
    ReviewCreateSerializer,
    ReviewListQuerySerializer,
    ReviewModerationSerializer,
    ReviewStatisticsSerializer,
)
from .services import (
    create_review,
    list_approved_reviews,
    list_reviews,
    get_review_by_id,
    moderate_review,
    delete_review,
    get_review_statistics,
    ReviewsServiceError,
    ReviewNotFoundError,
    ReviewTargetNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ReviewPagination(PageNumberPagination):
    """Custom pagination for reviews."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(error: ReviewsServiceError):
    if isinstance(error, (ReviewNotFoundError, ReviewTargetNotFoundError)):
        return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('entity_type', OpenApiTypes.STR, required=True, description='place, route or service'),
        OpenApiParameter('entity_id', OpenApiTypes.UUID, required=True),
    ],
    responses={200: ReviewSerializer(many=True)},
    description="Approved reviews of a place, route or service.",
    tags=['reviews'],
)
@extend_schema(
    methods=['POST'],
    request=ReviewCreateSerializer,
    responses={201: ReviewSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Submit a review. It stays hidden until a moderator approves it.",
    tags=['reviews'],
)
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def reviews(request):
    """Public review list and submission."""
    if request.method == 'GET':
        query_serializer = ReviewListQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        queryset = list_approved_reviews(**query_serializer.validated_data)
        paginator = ReviewPagination()
        page = paginator.paginate_queryset(queryset, request)
        return paginator.get_paginated_response(ReviewSerializer(page, many=True).data)

    serializer = ReviewCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        review = create_review(
            user=request.user if request.user.is_authenticated else None,
            **serializer.validated_data
        )
    except ReviewsServiceError as e:
        return _error_response(e)

    return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, description='pending, approved or rejected'),
            OpenApiParameter('entity_type', OpenApiTypes.STR, description='place, route or service'),
        ],
        tags=['admin-reviews'],
    ),
    retrieve=extend_schema(responses={200: AdminReviewSerializer, 404: ErrorResponseSerializer}, tags=['admin-reviews']),
    update=extend_schema(
        request=ReviewModerationSerializer,
        responses={200: AdminReviewSerializer, 404: ErrorResponseSerializer},
        tags=['admin-reviews'],
    ),
    partial_update=extend_schema(
        request=ReviewModerationSerializer,
        responses={200: AdminReviewSerializer, 404: ErrorResponseSerializer},
        tags=['admin-reviews'],
    ),
    destroy=extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['admin-reviews']),
)
class AdminReviewViewSet(viewsets.ModelViewSet):
    """
    Review moderation.

    list: All reviews, newest first (?status=&entity_type=)
    retrieve: One review
    update / partial_update: Change status or text; recomputes the rating
    destroy: Delete a review; recomputes the rating
    """

    serializer_class = AdminReviewSerializer
    permission_classes = [IsAdminRole]
    pagination_class = ReviewPagination
    http_method_names = ['get', 'put', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        return list_reviews(
            status=self.request.query_params.get('status'),
            entity_type=self.request.query_params.get('entity_type'),
        )

    def retrieve(self, request, *args, **kwargs):
        try:
            review = get_review_by_id(review_id=kwargs['pk'])
        except ReviewsServiceError as e:
            return _error_response(e)
        return Response(AdminReviewSerializer(review).data)

    def update(self, request, *args, **kwargs):
        serializer = ReviewModerationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = moderate_review(review_id=kwargs['pk'], **serializer.validated_data)
        except ReviewsServiceError as e:
            return _error_response(e)

        return Response(AdminReviewSerializer(review).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_review(review_id=kwargs['pk'])
        except ReviewsServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[
            OpenApiParameter('entity_type', OpenApiTypes.STR),
            OpenApiParameter('entity_id', OpenApiTypes.UUID),
        ],
        responses={200: ReviewStatisticsSerializer},
        tags=['admin-reviews'],
    )
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Get review statistics using service layer."""
        data = get_review_statistics(
            entity_type=request.query_params.get('entity_type'),
            entity_id=request.query_params.get('entity_id'),
        )
        return Response(ReviewStatisticsSerializer(data).data)
