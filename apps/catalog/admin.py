from django.contrib import admin
from apps.catalog.models import Place, Route, RoutePoint, Service


@admin.register(Place)
class PlaceAdmin(admin.ModelAdmin):
    """Admin interface for places."""

    list_display = ['title', 'location', 'rating', 'reviews_count', 'unique_views_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['title', 'location', 'description']
    readonly_fields = ['slug', 'rating', 'reviews_count', 'unique_views_count', 'created_at', 'updated_at']
    ordering = ['-created_at']


class RoutePointInline(admin.TabularInline):
    """Inline admin for route points."""
    model = RoutePoint
    extra = 1
    fields = ['order', 'title', 'description', 'image']


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    """
    Admin interface for routes.

    Guide links edited here are not mirrored onto services; use the API or
    the repair_references command.
    """

    list_display = ['title', 'season', 'transport', 'difficulty', 'distance', 'is_active', 'created_at']
    list_filter = ['season', 'transport', 'difficulty', 'is_family', 'has_overnight', 'is_active']
    search_fields = ['title', 'description']
    readonly_fields = ['slug', 'unique_views_count', 'created_at', 'updated_at']
    inlines = [RoutePointInline]
    ordering = ['-created_at']


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """Admin interface for services."""

    list_display = ['title', 'category', 'is_verified', 'rating', 'reviews_count', 'is_active', 'created_at']
    list_filter = ['category', 'is_verified', 'is_active']
    search_fields = ['title', 'category', 'description']
    readonly_fields = ['slug', 'route_ids', 'rating', 'reviews_count', 'unique_views_count', 'created_at', 'updated_at']
    ordering = ['-created_at']
