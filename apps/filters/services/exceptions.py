"""Domain-specific exceptions for filter configuration services."""


class FiltersServiceError(Exception):
    """Base exception for filter services."""
    pass


class FilterValidationError(FiltersServiceError):
    """Raised when input is malformed (blank label, blank value, bad payload)."""
    pass


class GroupKeyConflictError(FiltersServiceError):
    """Raised when an extra group key collides with a fixed or existing key."""
    pass


class FilterFamilyNotFoundError(FiltersServiceError):
    """Raised when the entity family is not registered."""
    pass


class FilterGroupNotFoundError(FiltersServiceError):
    """Raised when a filter group does not exist."""
    pass


class FilterValueNotFoundError(FiltersServiceError):
    """Raised when a value is not present in its group."""
    pass
