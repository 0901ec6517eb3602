from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission: User must be an active, non-banned ADMIN or SUPERADMIN.
    """

    message = 'Administrator access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated
            and not user.is_banned
            and user.is_admin
        )


class IsSuperAdmin(permissions.BasePermission):
    """
    Permission: User must be a SUPERADMIN.
    """

    message = 'Super administrator access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated
            and not user.is_banned
            and user.is_superadmin
        )
