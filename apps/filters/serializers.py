from rest_framework import serializers
from .models import FilterConfig


class FilterConfigSerializer(serializers.ModelSerializer):
    """Full filter config as edited in the admin panel."""

    class Meta:
        model = FilterConfig
        fields = [
            'family',
            'fixed_groups',
            'hidden_fixed_groups',
            'fixed_group_meta',
            'extra_groups',
            'updated_at',
        ]
        read_only_fields = fields


class PublicFilterConfigSerializer(serializers.Serializer):
    fixed_groups = serializers.DictField(child=serializers.ListField(child=serializers.CharField()))
    hidden_fixed_groups = serializers.ListField(child=serializers.CharField())
    fixed_group_meta = serializers.DictField()
    extra_groups = serializers.ListField(child=serializers.DictField())


class ReplaceConfigSerializer(serializers.Serializer):
    """
    Full replacement payload. Values are sanitized by the service layer,
    so the fields accept arbitrary JSON here.
    """

    fixed_groups = serializers.JSONField(required=False)
    extra_groups = serializers.JSONField(required=False)
    fixed_group_meta = serializers.JSONField(required=False, allow_null=True)
    hidden_fixed_groups = serializers.JSONField(required=False, allow_null=True)


class AddGroupSerializer(serializers.Serializer):
    label = serializers.CharField(allow_blank=True)
    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    icon = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    icon_type = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    values = serializers.JSONField(required=False)


class RemoveGroupSerializer(serializers.Serializer):
    key = serializers.CharField()


class GroupMetaSerializer(serializers.Serializer):
    """Absent fields are left untouched; explicit null clears them."""

    key = serializers.CharField()
    label = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    icon = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    icon_type = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ReplaceValueSerializer(serializers.Serializer):
    group = serializers.CharField()
    old_value = serializers.CharField(trim_whitespace=False)
    new_value = serializers.CharField(allow_blank=True, trim_whitespace=False)


class RemoveValueSerializer(serializers.Serializer):
    group = serializers.CharField()
    value = serializers.CharField(trim_whitespace=False)


class CascadeResultSerializer(serializers.Serializer):
    visited = serializers.IntegerField()
    updated = serializers.IntegerField()
    failed = serializers.IntegerField()


class CascadeResponseSerializer(serializers.Serializer):
    config = FilterConfigSerializer()
    cascade = CascadeResultSerializer()
