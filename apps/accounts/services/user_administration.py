"""Administrative user management: listing, roles and bans."""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet
from django.contrib.auth import get_user_model

from ..models import UserRole
from .exceptions import ForbiddenError, InvalidRoleError, UserNotFoundError

User = get_user_model()

SORTABLE_FIELDS = {
    'email': 'email',
    'login': 'login',
    'name': 'name',
    'role': 'role',
    'created_at': 'created_at',
}


def list_users(
    *,
    actor: User,
    search: str = '',
    role: Optional[str] = None,
    include_superadmin: bool = False,
    sort_by: str = 'created_at',
    sort_order: str = 'desc',
) -> QuerySet:
    """
    List users visible to the acting administrator.

    ADMIN sees only USER accounts. SUPERADMIN sees everybody; super
    administrators are hidden unless ``include_superadmin`` is set or the
    ``role`` filter asks for them explicitly.
    """
    queryset = User.objects.all()

    if actor.is_superadmin:
        if role in UserRole.values:
            queryset = queryset.filter(role=role)
        elif not include_superadmin:
            queryset = queryset.exclude(role=UserRole.SUPERADMIN)
    else:
        queryset = queryset.filter(role=UserRole.USER)

    search = (search or '').strip()
    if search:
        queryset = queryset.filter(
            Q(email__icontains=search) |
            Q(login__icontains=search) |
            Q(name__icontains=search)
        )

    field = SORTABLE_FIELDS.get(sort_by, 'created_at')
    prefix = '' if sort_order == 'asc' else '-'
    return queryset.order_by(f'{prefix}{field}')


def _get_user_for_update(user_id: UUID) -> User:
    try:
        return User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")


@transaction.atomic
def change_user_role(*, actor: User, user_id: UUID, role: str) -> User:
    """
    Change a user's role. Only super administrators may do this.

    Raises:
        ForbiddenError: If the actor is not SUPERADMIN
        InvalidRoleError: If the role is unknown
        UserNotFoundError: If the user doesn't exist
    """
    if not actor.is_superadmin:
        raise ForbiddenError("Only a super administrator can change roles")

    if role not in UserRole.values:
        raise InvalidRoleError(f"Invalid role '{role}'")

    user = _get_user_for_update(user_id)
    user.role = role
    user.is_staff = role in (UserRole.ADMIN, UserRole.SUPERADMIN)
    user.save(update_fields=['role', 'is_staff', 'updated_at'])
    return user


@transaction.atomic
def set_user_ban(*, actor: User, user_id: UUID, banned: bool) -> User:
    """
    Ban or unban a user account.

    Administrators cannot be banned, and an ADMIN may only touch USER accounts.

    Raises:
        ForbiddenError: If the target is an administrator
        UserNotFoundError: If the user doesn't exist
    """
    user = _get_user_for_update(user_id)

    if user.is_admin:
        raise ForbiddenError("Administrators cannot be banned")

    user.is_banned = banned
    user.save(update_fields=['is_banned', 'updated_at'])
    return user
