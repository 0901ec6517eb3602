from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRole
from .analytics import AnalyticsQueries
from .serializers import (
    TopEntitiesQuerySerializer,
    TimeseriesQuerySerializer,
    DashboardStatsSerializer,
    TopEntitiesResponseSerializer,
    TimeseriesResponseSerializer,
    TimeseriesPointSerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


@extend_schema(
    responses={200: DashboardStatsSerializer},
    description="Counts of routes, places, news, services and reviews for the admin dashboard.",
    tags=['admin-stats'],
)
@api_view(['GET'])
@permission_classes([IsAdminRole])
def dashboard_stats(request):
    """Dashboard counters - thin HTTP handler."""
    return Response(AnalyticsQueries.dashboard_stats())


@extend_schema(
    parameters=[
        OpenApiParameter('entity_type', OpenApiTypes.STR, description='place, route, service or news'),
        OpenApiParameter('metric', OpenApiTypes.STR, description='views, rating or reviews'),
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results (1-100)'),
    ],
    responses={200: TopEntitiesResponseSerializer, 400: ErrorSerializer},
    description="Most viewed or best rated active records.",
    tags=['admin-stats'],
)
@api_view(['GET'])
@permission_classes([IsAdminRole])
def top_entities(request):
    """Top records ranking."""
    query_serializer = TopEntitiesQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        results = AnalyticsQueries.top_entities(
            entity_type=params['entity_type'],
            metric=params['metric'],
            limit=params['limit'],
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'entity_type': params['entity_type'],
        'metric': params['metric'],
        'results': results,
    })


@extend_schema(
    parameters=[
        OpenApiParameter('days', OpenApiTypes.INT, description='Window size in days (1-365)'),
        OpenApiParameter('entity_type', OpenApiTypes.STR, description='Optional entity type filter'),
    ],
    responses={200: TimeseriesResponseSerializer, 400: ErrorSerializer},
    description="Unique views per day for charts.",
    tags=['admin-stats'],
)
@api_view(['GET'])
@permission_classes([IsAdminRole])
def views_timeseries(request):
    """Unique views over time."""
    query_serializer = TimeseriesQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = AnalyticsQueries.views_timeseries(
        days=params['days'],
        entity_type=params.get('entity_type'),
    )

    return Response({
        'days': params['days'],
        'entity_type': params.get('entity_type'),
        'data': TimeseriesPointSerializer(data, many=True).data,
    })
