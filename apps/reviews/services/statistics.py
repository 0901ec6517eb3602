"""Statistics service - Review analytics and aggregations."""

from django.db.models import Count, Avg
from django.db.models.functions import TruncMonth
from uuid import UUID
from typing import Optional

from apps.reviews.models import Review, ReviewStatus


def get_review_statistics(
    *,
    entity_type: Optional[str] = None,
    entity_id: Optional[UUID] = None
) -> dict:
    """
    Calculate review statistics for the moderation dashboard.

    Can be narrowed to one entity type or to one record.

    This operation:
    1. Filters reviews by optional entity_type / entity_id
    2. Counts reviews per status
    3. Averages approved ratings and builds their 1-5 distribution
    4. Aggregates reviews by month (last 12 months)

    Args:
        entity_type: Optional review target type
        entity_id: Optional review target UUID

    Returns:
        Dictionary with statistics:
        - total_reviews: int - All reviews in scope
        - by_status: dict - Count per status
        - avg_rating: float - Mean approved rating (2 decimals)
        - rating_distribution: dict - Approved count for each rating (1-5)
        - reviews_by_month: list - {month, count}, newest first

    Example:
        >>> stats = get_review_statistics(entity_type='place')
        >>> stats['by_status']['pending']
        3
    """
    queryset = Review.objects.all()

    if entity_type:
        queryset = queryset.filter(entity_type=entity_type)

    if entity_id:
        queryset = queryset.filter(entity_id=entity_id)

    status_counts = dict(
        queryset.values('status').annotate(count=Count('id')).values_list('status', 'count')
    )
    by_status = {status: status_counts.get(status, 0) for status in ReviewStatus.values}

    approved = queryset.filter(status=ReviewStatus.APPROVED)
    avg_rating = approved.aggregate(avg=Avg('rating'))['avg'] or 0

    rating_counts = dict(
        approved.values('rating').annotate(count=Count('id')).values_list('rating', 'count')
    )
    rating_dist = {str(i): rating_counts.get(i, 0) for i in range(1, 6)}

    # TruncMonth groups by month, Count aggregates
    reviews_by_month = list(
        queryset
        .annotate(month=TruncMonth('created_at'))
        .values('month')
        .annotate(count=Count('id'))
        .order_by('-month')[:12]
    )

    return {
        'total_reviews': queryset.count(),
        'by_status': by_status,
        'avg_rating': round(float(avg_rating), 2),
        'rating_distribution': rating_dist,
        'reviews_by_month': reviews_by_month,
    }
