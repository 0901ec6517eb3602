"""
Reviews services - Business logic layer.

This package contains all business operations for the reviews app:
- Public review submission (pending until moderated)
- Moderation: status/text changes and deletion
- Rating aggregation for places and services
- Review statistics
"""

from .review_management import (
    create_review,
    list_approved_reviews,
    list_reviews,
    get_review_by_id,
    moderate_review,
    delete_review,
)
from .rating_aggregation import (
    update_entity_rating,
    round_rating,
)
from .statistics import (
    get_review_statistics,
)

# Domain Exceptions
from .exceptions import (
    ReviewsServiceError,
    ReviewNotFoundError,
    ReviewValidationError,
    InvalidRatingError,
    InvalidEntityTypeError,
    ReviewTargetNotFoundError,
)

__all__ = [
    # Review Management
    'create_review',
    'list_approved_reviews',
    'list_reviews',
    'get_review_by_id',
    'moderate_review',
    'delete_review',
    # Rating Aggregation
    'update_entity_rating',
    'round_rating',
    # Statistics
    'get_review_statistics',
    # Exceptions
    'ReviewsServiceError',
    'ReviewNotFoundError',
    'ReviewValidationError',
    'InvalidRatingError',
    'InvalidEntityTypeError',
    'ReviewTargetNotFoundError',
]
