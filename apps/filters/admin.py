from django.contrib import admin
from .models import FilterConfig


@admin.register(FilterConfig)
class FilterConfigAdmin(admin.ModelAdmin):
    """
    Raw view of filter configs.

    Edits made here bypass the value cascade; use the API (or the
    ``refilter`` command) to rename or remove values that entities use.
    """

    list_display = ['family', 'extra_group_count', 'updated_at']
    readonly_fields = ['family', 'created_at', 'updated_at']

    def extra_group_count(self, obj):
        return len(obj.extra_groups or [])
    extra_group_count.short_description = 'Extra groups'
