"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class CatalogValidationError(CatalogServiceError):
    """Raised when catalog input is invalid."""
    pass


class PlaceNotFoundError(CatalogServiceError):
    """Raised when place does not exist."""
    pass


class RouteNotFoundError(CatalogServiceError):
    """Raised when route does not exist."""
    pass


class ServiceNotFoundError(CatalogServiceError):
    """Raised when service does not exist."""
    pass
