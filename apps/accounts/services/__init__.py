"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    BannedAccountError,
    UserNotFoundError,
    ProfileUpdateError,
    ForbiddenError,
    InvalidRoleError,
    FavoriteTargetNotFoundError,
    InvalidFavoriteTypeError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .profile_management import update_profile, set_avatar
from .favorites import add_favorite, remove_favorite, get_favorites, FAVORITE_TYPES
from .user_administration import list_users, change_user_role, set_user_ban

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'BannedAccountError',
    'UserNotFoundError',
    'ProfileUpdateError',
    'ForbiddenError',
    'InvalidRoleError',
    'FavoriteTargetNotFoundError',
    'InvalidFavoriteTypeError',
    # Services
    'register_user',
    'authenticate_user',
    'update_profile',
    'set_avatar',
    'add_favorite',
    'remove_favorite',
    'get_favorites',
    'FAVORITE_TYPES',
    'list_users',
    'change_user_role',
    'set_user_ban',
]
