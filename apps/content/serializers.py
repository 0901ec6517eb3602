from rest_framework import serializers
from .models import News, NewsType, Media


# ============================================
# News
# ============================================

class NewsListSerializer(serializers.ModelSerializer):
    """News card; ``image`` falls back to the preview or first gallery image."""

    image = serializers.CharField(source='cover', read_only=True, allow_null=True)

    class Meta:
        model = News
        fields = [
            'id',
            'title',
            'slug',
            'type',
            'category',
            'short_description',
            'author',
            'image',
            'published_at',
            'unique_views_count',
            'is_active',
            'created_at',
        ]


class NewsSerializer(serializers.ModelSerializer):
    """Full news item."""

    cover = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = News
        fields = [
            'id',
            'title',
            'slug',
            'type',
            'category',
            'short_description',
            'content',
            'author',
            'image',
            'preview',
            'images',
            'cover',
            'published_at',
            'unique_views_count',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class NewsWriteSerializer(serializers.ModelSerializer):
    """Admin input for news. Every field is optional so updates can be partial."""

    type = serializers.ChoiceField(choices=NewsType.choices, required=False)
    images = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = News
        fields = [
            'title',
            'type',
            'category',
            'short_description',
            'content',
            'author',
            'image',
            'preview',
            'images',
            'published_at',
            'is_active',
        ]
        extra_kwargs = {'title': {'required': False}}


# ============================================
# Site content
# ============================================

class SiteContentUpdateSerializer(serializers.Serializer):
    """
    ``{"content": {...}}`` body for site content updates.

    ``content`` is taken as-is; the service rejects anything but an object.
    """
    content = serializers.JSONField()


class SiteContentSerializer(serializers.Serializer):
    key = serializers.CharField()
    content = serializers.JSONField()


# ============================================
# Media
# ============================================

class MediaSerializer(serializers.ModelSerializer):
    class Meta:
        model = Media
        fields = ['id', 'filename', 'url', 'mimetype', 'size', 'created_at']
        read_only_fields = fields


class MediaUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


# ============================================
# Feedback
# ============================================

class FeedbackSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    text = serializers.CharField(max_length=5000)
