from django.contrib import admin
from apps.analytics.models import ViewTracking


@admin.register(ViewTracking)
class ViewTrackingAdmin(admin.ModelAdmin):
    """Read-only view of tracked unique views."""

    list_display = ['entity_type', 'entity_id', 'visitor_id', 'user', 'created_at']
    list_filter = ['entity_type', 'created_at']
    search_fields = ['entity_id', 'visitor_id', 'user__login']
    readonly_fields = ['entity_type', 'entity_id', 'visitor_id', 'user', 'created_at']
    date_hierarchy = 'created_at'
