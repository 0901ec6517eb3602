"""Domain exceptions for reviews app."""


class ReviewsServiceError(Exception):
    """Base exception for all reviews service errors."""
    pass


class ReviewNotFoundError(ReviewsServiceError):
    """Review does not exist."""
    pass


class ReviewValidationError(ReviewsServiceError):
    """Missing author name or text, or bad status."""
    pass


class InvalidRatingError(ReviewsServiceError):
    """Rating must be between 1 and 5."""
    pass


class InvalidEntityTypeError(ReviewsServiceError):
    """Reviews are accepted for places, routes and services only."""
    pass


class ReviewTargetNotFoundError(ReviewsServiceError):
    """Reviewed record does not exist or is inactive."""
    pass
