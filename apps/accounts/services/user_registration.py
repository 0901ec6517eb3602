"""User registration service."""

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


@transaction.atomic
def register_user(
    *,
    login: str,
    email: str,
    password: str,
    name: str = ""
) -> User:
    """
    Register a new portal user with the USER role.

    Args:
        login: Unique login
        email: Unique email address
        password: Raw password (will be hashed)
        name: Optional display name, defaults to the login

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If a field is missing, the password is too
            short, or the login/email is already taken
    """
    login = (login or '').strip()
    email = (email or '').strip().lower()

    if not login or not email or not password:
        raise UserRegistrationError("Login, email and password are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise UserRegistrationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    if User.objects.filter(login=login).exists():
        raise UserRegistrationError("User with this login already exists")

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("User with this email already exists")

    try:
        return User.objects.create_user(
            login=login,
            email=email,
            password=password,
            name=(name or '').strip() or login,
        )
    except IntegrityError:
        raise UserRegistrationError("User with this login or email already exists")
