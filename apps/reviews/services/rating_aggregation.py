"""Rating aggregation service with concurrency protection."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from django.apps import apps
from django.db import transaction
from django.db.models import Avg, Count

from apps.reviews.models import Review, ReviewStatus

# Entity types that carry rating and reviews_count
RATED_MODELS = {
    'place': 'catalog.Place',
    'service': 'catalog.Service',
}


def round_rating(value) -> Decimal:
    """Round a mean rating to one decimal place, halves up."""
    return Decimal(str(value or 0)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


@transaction.atomic
def update_entity_rating(*, entity_type: str, entity_id: UUID) -> Optional[object]:
    """
    Recalculate a place's or service's rating from approved reviews.

    Uses select_for_update() so concurrent moderation actions on the same
    target serialize.

    Args:
        entity_type: Review target type
        entity_id: Target UUID

    Returns:
        Updated instance, or None for types without a rating (routes) and
        for targets that no longer exist
    """
    label = RATED_MODELS.get(entity_type)
    if label is None:
        return None

    model = apps.get_model(label)
    target = model.objects.select_for_update().filter(id=entity_id).first()
    if target is None:
        return None

    aggregates = Review.objects.filter(
        entity_type=entity_type,
        entity_id=entity_id,
        status=ReviewStatus.APPROVED,
    ).aggregate(avg=Avg('rating'), count=Count('id'))

    target.rating = round_rating(aggregates['avg'])
    target.reviews_count = aggregates['count']
    target.save(update_fields=['rating', 'reviews_count', 'updated_at'])

    return target
