"""Review management service - submission and moderation of reviews."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.catalog.services import (
    get_public_place,
    get_public_route,
    get_public_service,
    CatalogServiceError,
)
from apps.reviews.models import Review, ReviewEntityType, ReviewStatus
from .exceptions import (
    ReviewNotFoundError,
    ReviewValidationError,
    InvalidRatingError,
    InvalidEntityTypeError,
    ReviewTargetNotFoundError,
)
from .rating_aggregation import update_entity_rating

logger = logging.getLogger(__name__)

TARGET_LOOKUPS = {
    ReviewEntityType.PLACE: get_public_place,
    ReviewEntityType.ROUTE: get_public_route,
    ReviewEntityType.SERVICE: get_public_service,
}


def _validate_entity_type(entity_type: str) -> str:
    if entity_type not in ReviewEntityType.values:
        raise InvalidEntityTypeError(
            f"Invalid entity type: '{entity_type}'. Valid options: {', '.join(ReviewEntityType.values)}"
        )
    return entity_type


def _validate_rating(rating) -> int:
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        raise InvalidRatingError("Rating must be between 1 and 5")
    if not (1 <= rating <= 5):
        raise InvalidRatingError("Rating must be between 1 and 5")
    return rating


@transaction.atomic
def create_review(
    *,
    entity_type: str,
    entity: str,
    author_name: str,
    text: str,
    rating: int,
    author_avatar: str = '',
    user: Optional[User] = None
) -> Review:
    """
    Submit a review for moderation.

    The target must be active and is looked up by id or slug. The review is
    created pending and does not affect the rating until approved.

    Args:
        entity_type: place, route or service
        entity: Target id or slug
        author_name: Displayed author name (required)
        text: Review text (required)
        rating: Rating 1-5
        author_avatar: Optional avatar URL
        user: Signed-in author, if any

    Returns:
        Created Review instance

    Raises:
        InvalidEntityTypeError: If entity_type is not reviewable
        ReviewValidationError: If author name or text is blank
        InvalidRatingError: If rating not in 1-5 range
        ReviewTargetNotFoundError: If target doesn't exist or is inactive
    """
    _validate_entity_type(entity_type)

    author_name = (author_name or '').strip()
    if not author_name:
        raise ReviewValidationError("Author name is required")
    rating = _validate_rating(rating)
    text = (text or '').strip()
    if not text:
        raise ReviewValidationError("Review text is required")

    try:
        target = TARGET_LOOKUPS[entity_type](id_or_slug=str(entity))
    except CatalogServiceError:
        raise ReviewTargetNotFoundError(f"{entity_type.capitalize()} not found")

    review = Review.objects.create(
        entity_type=entity_type,
        entity_id=target.id,
        entity_title=target.title,
        user=user,
        author_name=author_name,
        author_avatar=(author_avatar or '').strip(),
        text=text,
        rating=rating,
        status=ReviewStatus.PENDING,
    )
    logger.info("Review %s submitted for %s %s", review.id, entity_type, target.id)
    return review


def list_approved_reviews(*, entity_type: str, entity_id: UUID) -> QuerySet:
    """
    Approved reviews of one record, newest first.

    Raises:
        InvalidEntityTypeError: If entity_type is not reviewable
    """
    _validate_entity_type(entity_type)
    return Review.objects.filter(
        entity_type=entity_type,
        entity_id=entity_id,
        status=ReviewStatus.APPROVED,
    ).order_by('-created_at')


def list_reviews(*, status: Optional[str] = None, entity_type: Optional[str] = None) -> QuerySet:
    """All reviews for moderation, optionally filtered."""
    queryset = Review.objects.select_related('user').order_by('-created_at')
    if status:
        queryset = queryset.filter(status=status)
    if entity_type:
        queryset = queryset.filter(entity_type=entity_type)
    return queryset


def get_review_by_id(*, review_id: UUID) -> Review:
    """
    Retrieve a review by ID.

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    try:
        return Review.objects.select_related('user').get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")


@transaction.atomic
def moderate_review(
    *,
    review_id: UUID,
    status: Optional[str] = None,
    text: Optional[str] = None
) -> Review:
    """
    Change a review's status or text.

    The target's rating and review count are recomputed afterwards.

    Args:
        review_id: UUID of review
        status: New status (pending/approved/rejected)
        text: Corrected text; blank keeps the current text

    Returns:
        Updated Review instance

    Raises:
        ReviewNotFoundError: If review doesn't exist
        ReviewValidationError: If status is invalid
    """
    try:
        review = Review.objects.select_for_update().get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")

    if status is not None:
        if status not in ReviewStatus.values:
            raise ReviewValidationError(
                f"Invalid status: '{status}'. Valid options: {', '.join(ReviewStatus.values)}"
            )
        review.status = status

    if text is not None and text.strip():
        review.text = text.strip()

    review.save()
    update_entity_rating(entity_type=review.entity_type, entity_id=review.entity_id)
    return review


@transaction.atomic
def delete_review(*, review_id: UUID) -> None:
    """
    Delete a review and recompute its target's rating.

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    try:
        review = Review.objects.select_for_update().get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")

    entity_type, entity_id = review.entity_type, review.entity_id
    review.delete()
    update_entity_rating(entity_type=entity_type, entity_id=entity_id)
