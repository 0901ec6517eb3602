from django.contrib import admin
from apps.content.models import News, SiteContent, Media


@admin.register(News)
class NewsAdmin(admin.ModelAdmin):
    """Admin interface for news and articles."""

    list_display = ['title', 'type', 'category', 'published_at', 'unique_views_count', 'is_active']
    list_filter = ['type', 'is_active', 'category']
    search_fields = ['title', 'short_description', 'content']
    readonly_fields = ['slug', 'unique_views_count', 'created_at', 'updated_at']
    ordering = ['-published_at']


@admin.register(SiteContent)
class SiteContentAdmin(admin.ModelAdmin):
    list_display = ['key', 'updated_at']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    """Uploaded files are read-only here; use the media API to add or delete them."""

    list_display = ['filename', 'mimetype', 'size', 'created_at']
    list_filter = ['mimetype']
    search_fields = ['filename']
    readonly_fields = ['filename', 'url', 'mimetype', 'size', 'created_at']

    def has_add_permission(self, request):
        return False
