"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class BannedAccountError(AccountsServiceError):
    """Raised when a banned or deactivated account tries to log in."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class ProfileUpdateError(AccountsServiceError):
    """Raised when profile data is invalid (duplicate email, wrong password)."""
    pass


class ForbiddenError(AccountsServiceError):
    """Raised when the acting user's role does not allow the operation."""
    pass


class InvalidRoleError(AccountsServiceError):
    """Raised when an unknown role is requested."""
    pass


class FavoriteTargetNotFoundError(AccountsServiceError):
    """Raised when a favorited entity does not exist."""
    pass


class InvalidFavoriteTypeError(AccountsServiceError):
    """Raised when the favorite entity type is not route, place or service."""
    pass
