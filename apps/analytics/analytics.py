"""
Analytics Module
=================

Read-only queries that power the admin dashboard: record counts, the most
viewed or best rated records, and unique views over time.

Classes:
    AnalyticsQueries: Static methods for dashboard queries.

Example:
    Getting dashboard numbers::

        from apps.analytics.analytics import AnalyticsQueries

        stats = AnalyticsQueries.dashboard_stats()
        print(f"{stats['reviews']} reviews, {stats['pending_reviews']} waiting")

Note:
    This module doesn't modify any data. All methods are static and return
    plain dictionaries or lists suitable for JSON responses.
"""

from datetime import timedelta

from django.db.models import Count
from django.db.models.functions import TruncDate
from django.utils import timezone

from apps.catalog.models import Place, Route, Service
from apps.content.models import News
from apps.reviews.models import Review, ReviewStatus
from .exceptions import InvalidMetricError
from .models import ViewTracking
from .services import get_entity_model

RANKING_METRICS = {
    'views': ('-unique_views_count',),
    'rating': ('-rating', '-reviews_count'),
    'reviews': ('-reviews_count', '-rating'),
}
# Only these entity types aggregate reviews
RATED_ENTITY_TYPES = ('place', 'service')


class AnalyticsQueries:
    """
    Queries for the admin dashboard.

    Methods:
        dashboard_stats: Counts of every content type.
        top_entities: Records ranked by views, rating or review count.
        views_timeseries: Unique views per day for charts.
    """

    @staticmethod
    def dashboard_stats():
        """
        Count routes, places, news, services and reviews.

        Returns:
            dict: A dictionary containing:
                - routes, places, news, services (int): All records,
                  active or not.
                - reviews (int): All reviews regardless of status.
                - pending_reviews (int): Reviews waiting for moderation.
        """
        return {
            'routes': Route.objects.count(),
            'places': Place.objects.count(),
            'news': News.objects.count(),
            'services': Service.objects.count(),
            'reviews': Review.objects.count(),
            'pending_reviews': Review.objects.filter(status=ReviewStatus.PENDING).count(),
        }

    @staticmethod
    def top_entities(entity_type, metric='views', limit=10):
        """
        Rank active records of one type.

        Args:
            entity_type (str): place, route, service or news.
            metric (str): 'views', 'rating' or 'reviews'. Rating and review
                metrics only apply to places and services.
            limit (int): Maximum number of records returned.

        Returns:
            list[dict]: Items with id, title, slug, unique_views_count and,
            for rated types, rating and reviews_count.

        Raises:
            InvalidEntityTypeError: If the entity type is not tracked.
            InvalidMetricError: If the metric is unknown or does not apply.
        """
        model = get_entity_model(entity_type)

        if metric not in RANKING_METRICS:
            raise InvalidMetricError(
                f"Invalid metric: '{metric}'. Valid options: {', '.join(RANKING_METRICS)}"
            )
        if metric != 'views' and entity_type not in RATED_ENTITY_TYPES:
            raise InvalidMetricError(f"Metric '{metric}' is not available for {entity_type}")

        fields = ['id', 'title', 'slug', 'unique_views_count']
        if entity_type in RATED_ENTITY_TYPES:
            fields += ['rating', 'reviews_count']

        queryset = (
            model.objects
            .filter(is_active=True)
            .order_by(*RANKING_METRICS[metric], '-created_at')
            .values(*fields)
        )
        return list(queryset[:limit])

    @staticmethod
    def views_timeseries(days=30, entity_type=None):
        """
        Unique views per day.

        Args:
            days (int): Window size ending today.
            entity_type (str, optional): Limit to one entity type.

        Returns:
            list[dict]: ``{'date': date, 'views': int}`` for each day with
            at least one view, oldest first.

        Raises:
            InvalidEntityTypeError: If ``entity_type`` is not tracked.
        """
        since = timezone.now() - timedelta(days=days)
        views = ViewTracking.objects.filter(created_at__gte=since)
        if entity_type:
            get_entity_model(entity_type)
            views = views.filter(entity_type=entity_type)

        rows = (
            views
            .annotate(date=TruncDate('created_at'))
            .values('date')
            .annotate(views=Count('id'))
            .order_by('date')
        )
        return [{'date': row['date'], 'views': row['views']} for row in rows]
