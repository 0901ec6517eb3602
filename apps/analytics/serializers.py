"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting
"""

from rest_framework import serializers

from .models import TrackedEntity
from .analytics import RANKING_METRICS


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class TopEntitiesQuerySerializer(serializers.Serializer):
    """
    Validate top entities query parameters.

    Query Parameters:
        entity_type (str): place, route, service or news (default: place)
        metric (str): views, rating or reviews (default: views)
        limit (int): Number of results, 1-100 (default: 10)
    """

    entity_type = serializers.ChoiceField(choices=TrackedEntity.values, default=TrackedEntity.PLACE)
    metric = serializers.ChoiceField(choices=list(RANKING_METRICS), default='views')
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class TimeseriesQuerySerializer(serializers.Serializer):
    """
    Validate timeseries query parameters.

    Query Parameters:
        days (int): Window size, 1-365 (default: 30)
        entity_type (str): Optional entity type filter
    """

    days = serializers.IntegerField(min_value=1, max_value=365, default=30)
    entity_type = serializers.ChoiceField(choices=TrackedEntity.values, required=False)


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DashboardStatsSerializer(serializers.Serializer):
    routes = serializers.IntegerField()
    places = serializers.IntegerField()
    news = serializers.IntegerField()
    services = serializers.IntegerField()
    reviews = serializers.IntegerField()
    pending_reviews = serializers.IntegerField()


class TopEntitySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    slug = serializers.CharField()
    unique_views_count = serializers.IntegerField()
    rating = serializers.DecimalField(max_digits=2, decimal_places=1, required=False)
    reviews_count = serializers.IntegerField(required=False)


class TopEntitiesResponseSerializer(serializers.Serializer):
    entity_type = serializers.CharField()
    metric = serializers.CharField()
    results = TopEntitySerializer(many=True)


class TimeseriesPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    views = serializers.IntegerField()


class TimeseriesResponseSerializer(serializers.Serializer):
    days = serializers.IntegerField()
    entity_type = serializers.CharField(allow_null=True)
    data = TimeseriesPointSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response."""
    error = serializers.CharField()
