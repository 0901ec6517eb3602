"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, BannedAccountError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, login: str, password: str) -> User:
    """
    Authenticate user with login and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        login: User's login
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        BannedAccountError: If account is banned or deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(login=login)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid login or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid login or password")

    if user.is_banned or not user.is_active:
        raise BannedAccountError("Account is blocked")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
