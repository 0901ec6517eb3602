"""Profile management service: personal data, password and avatar."""

from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import ProfileUpdateError

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


@transaction.atomic
def update_profile(
    *,
    user: User,
    name: Optional[str] = None,
    email: Optional[str] = None,
    user_information: Optional[dict] = None,
    current_password: Optional[str] = None,
    new_password: Optional[str] = None,
) -> User:
    """
    Update the current user's profile. ``None`` leaves a field untouched.

    Args:
        user: User being edited
        name: New display name
        email: New email, must not belong to another user
        user_information: Replacement for the free-form profile blob
        current_password: Required together with new_password
        new_password: New raw password

    Returns:
        Updated User instance

    Raises:
        ProfileUpdateError: If the email is taken or the password change
            is rejected
    """
    update_fields = []

    if email is not None:
        email = email.strip().lower()
        if not email:
            raise ProfileUpdateError("Email cannot be empty")
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            raise ProfileUpdateError("User with this email already exists")
        user.email = email
        update_fields.append('email')

    if name is not None:
        user.name = name.strip()
        update_fields.append('name')

    if user_information is not None:
        user.user_information = user_information
        update_fields.append('user_information')

    if new_password is not None:
        if not current_password or not user.check_password(current_password):
            raise ProfileUpdateError("Current password is incorrect")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ProfileUpdateError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        user.set_password(new_password)
        update_fields.append('password')

    if update_fields:
        update_fields.append('updated_at')
        user.save(update_fields=update_fields)

    return user


def set_avatar(*, user: User, upload) -> User:
    """
    Store an uploaded avatar (transcoded to WebP) and point the user at it.

    Raises:
        MediaValidationError: If the upload is not an acceptable image
    """
    from apps.content.services import store_image

    stored = store_image(upload=upload)
    user.avatar = stored.url
    user.save(update_fields=['avatar', 'updated_at'])
    return user
