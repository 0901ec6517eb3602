from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.USER: ('#ccc', '#666'),
    UserRole.ADMIN: ('#2F6F8F', 'white'),
    UserRole.SUPERADMIN: ('#8F2F4A', 'white'),
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for portal users.

    Provides:
    - User listing with role and ban status
    - Filtering by role and ban flag
    - Search by login, email and name
    - Bulk ban/unban actions (administrators are never banned)
    """

    list_display = [
        'login',
        'email',
        'name',
        'role_badge',
        'is_banned_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_banned',
        'is_active',
        'created_at',
    ]

    search_fields = [
        'login',
        'email',
        'name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('login', 'email', 'name', 'avatar', 'password')
        }),
        ('Role & Status', {
            'fields': ('role', 'is_banned', 'is_active', 'is_staff', 'is_superuser'),
        }),
        ('Profile', {
            'fields': ('user_information',),
            'classes': ('collapse',),
        }),
        ('Favorites', {
            'fields': ('favorite_route_ids', 'favorite_place_ids', 'favorite_service_ids'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('login', 'email', 'name', 'password1', 'password2'),
        }),
        ('Role', {
            'fields': ('role',),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        background, color = ROLE_COLORS.get(obj.role, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            background, color, obj.get_role_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def is_banned_badge(self, obj):
        if obj.is_banned:
            return format_html(
                '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Banned</span>'
            )
        return format_html(
            '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Active</span>'
        )
    is_banned_badge.short_description = 'Status'
    is_banned_badge.admin_order_field = 'is_banned'

    actions = ['ban_users', 'unban_users']

    @admin.action(description='Ban selected users')
    def ban_users(self, request, queryset):
        """Ban selected users (administrators are skipped)."""
        safe_queryset = queryset.filter(role=UserRole.USER)
        count = safe_queryset.update(is_banned=True)
        skipped = queryset.count() - count
        msg = f'Banned {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} administrator(s).'
        self.message_user(request, msg)

    @admin.action(description='Unban selected users')
    def unban_users(self, request, queryset):
        count = queryset.update(is_banned=False)
        self.message_user(request, f'Unbanned {count} user(s).')
