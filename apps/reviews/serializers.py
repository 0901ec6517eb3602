from rest_framework import serializers
from .models import Review, ReviewEntityType, ReviewStatus
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ReviewSerializer(serializers.ModelSerializer):
    """Public review (approved only)."""

    class Meta:
        model = Review
        fields = [
            'id',
            'entity_type',
            'entity_id',
            'author_name',
            'author_avatar',
            'text',
            'rating',
            'created_at',
        ]
        read_only_fields = fields


class AdminReviewSerializer(serializers.ModelSerializer):
    """Review with moderation data."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'entity_type',
            'entity_id',
            'entity_title',
            'user',
            'author_name',
            'author_avatar',
            'text',
            'rating',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """Public review submission."""

    entity_type = serializers.ChoiceField(choices=ReviewEntityType.choices)
    entity = serializers.CharField(help_text="Target id or slug")
    author_name = serializers.CharField(max_length=100)
    author_avatar = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    text = serializers.CharField()
    rating = serializers.IntegerField(min_value=1, max_value=5)


class ReviewListQuerySerializer(serializers.Serializer):
    entity_type = serializers.ChoiceField(choices=ReviewEntityType.choices)
    entity_id = serializers.UUIDField()


class ReviewModerationSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReviewStatus.choices, required=False)
    text = serializers.CharField(required=False, allow_blank=True)


class ReviewStatisticsSerializer(serializers.Serializer):
    """Serializer for review statistics."""

    total_reviews = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())
    avg_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
    reviews_by_month = serializers.ListField(child=serializers.DictField())
