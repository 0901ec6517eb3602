"""Domain exceptions for content services."""


class ContentServiceError(Exception):
    """Base exception for content service errors."""
    pass


class ContentValidationError(ContentServiceError):
    """Raised when submitted content is malformed."""
    pass


class NewsNotFoundError(ContentServiceError):
    """Raised when news item doesn't exist."""
    pass


class PageNotFoundError(ContentServiceError):
    """Raised when a page name has no content section."""
    pass


class MediaNotFoundError(ContentServiceError):
    """Raised when media file doesn't exist."""
    pass


class MediaValidationError(ContentServiceError):
    """Raised when an upload is missing, too large or of a wrong type."""
    pass


class FeedbackNotConfiguredError(ContentServiceError):
    """Raised when no recipient is configured for the feedback form."""
    pass


class FeedbackDeliveryError(ContentServiceError):
    """Raised when the feedback email could not be sent."""
    pass
