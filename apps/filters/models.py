from django.db import models
import uuid


class FilterConfig(models.Model):
    """
    Filter groups for one entity family (places, routes).

    Fixed groups are backed by schema fields on the entity model; extra
    groups are defined by administrators and stored on entities inside the
    ``custom_filters`` JSON map.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.CharField(max_length=32, unique=True, db_index=True)

    # {"seasons": ["Зима", ...], ...}
    fixed_groups = models.JSONField(default=dict, blank=True)
    hidden_fixed_groups = models.JSONField(default=list, blank=True)
    # {"seasons": {"label": ..., "icon": ..., "icon_type": ...}}
    fixed_group_meta = models.JSONField(default=dict, blank=True)
    # [{"key": ..., "label": ..., "icon": ..., "icon_type": ..., "values": [...]}]
    extra_groups = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'filter_configs'
        ordering = ['family']

    def __str__(self):
        return f"Filters: {self.family}"

    def get_fixed_values(self, key):
        return list((self.fixed_groups or {}).get(key) or [])

    def find_extra_group(self, key):
        """Return (index, group) for an extra group key, or (None, None)."""
        for index, group in enumerate(self.extra_groups or []):
            if group.get('key') == key:
                return index, group
        return None, None

    @property
    def extra_group_keys(self):
        return [group.get('key') for group in (self.extra_groups or [])]
