from rest_framework import serializers
from .models import Place, Route, RoutePoint, Service
from .services import resolve_in_order, get_route_guides, get_service_routes


def _id_list(**kwargs):
    return serializers.ListField(child=serializers.CharField(), required=False, **kwargs)


def _value_list(**kwargs):
    return serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, **kwargs)


class CustomFiltersField(serializers.DictField):
    """{extra group key: [values]}"""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(child=serializers.ListField(child=serializers.CharField()), **kwargs)


# ============================================
# Places
# ============================================

class PlaceListSerializer(serializers.ModelSerializer):
    """Compact place card for lists."""

    class Meta:
        model = Place
        fields = [
            'id',
            'title',
            'slug',
            'location',
            'short_description',
            'image',
            'images',
            'rating',
            'reviews_count',
            'directions',
            'seasons',
            'object_types',
            'accessibility',
            'custom_filters',
            'unique_views_count',
            'is_active',
            'created_at',
        ]


class PlaceSerializer(serializers.ModelSerializer):
    """Main serializer for places."""

    class Meta:
        model = Place
        fields = [
            'id',
            'title',
            'slug',
            'location',
            'short_description',
            'description',
            'how_to_get',
            'audio_guide',
            'video',
            'map_url',
            'latitude',
            'longitude',
            'image',
            'images',
            'rating',
            'reviews_count',
            'directions',
            'seasons',
            'object_types',
            'accessibility',
            'custom_filters',
            'nearby_place_ids',
            'unique_views_count',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PlaceDetailSerializer(PlaceSerializer):
    """Public place page with resolved nearby places."""

    nearby_places = serializers.SerializerMethodField()

    class Meta(PlaceSerializer.Meta):
        fields = PlaceSerializer.Meta.fields + ['nearby_places']
        read_only_fields = fields

    def get_nearby_places(self, obj):
        return PlaceListSerializer(resolve_in_order(Place, obj.nearby_place_ids), many=True).data


class PlaceWriteSerializer(serializers.ModelSerializer):
    """Admin input for places. Every field is optional so updates can be partial."""

    images = _value_list()
    directions = _value_list()
    seasons = _value_list()
    object_types = _value_list()
    accessibility = _value_list()
    custom_filters = CustomFiltersField()
    nearby_place_ids = _id_list()

    class Meta:
        model = Place
        fields = [
            'title',
            'location',
            'short_description',
            'description',
            'how_to_get',
            'audio_guide',
            'video',
            'map_url',
            'latitude',
            'longitude',
            'image',
            'images',
            'directions',
            'seasons',
            'object_types',
            'accessibility',
            'custom_filters',
            'nearby_place_ids',
            'is_active',
        ]
        extra_kwargs = {'title': {'required': False}}


# ============================================
# Routes
# ============================================

class RoutePointSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoutePoint
        fields = ['id', 'title', 'description', 'image', 'order']
        read_only_fields = ['id', 'order']


class RoutePointInputSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, required=False, default='')
    description = serializers.CharField(allow_blank=True, required=False, default='')
    image = serializers.CharField(allow_blank=True, required=False, default='')


class RouteListSerializer(serializers.ModelSerializer):
    """Compact route card for lists."""

    class Meta:
        model = Route
        fields = [
            'id',
            'title',
            'slug',
            'short_description',
            'season',
            'transport',
            'duration',
            'distance',
            'difficulty',
            'elevation_gain',
            'is_family',
            'has_overnight',
            'images',
            'custom_filters',
            'unique_views_count',
            'is_active',
            'created_at',
        ]


class RouteSerializer(serializers.ModelSerializer):
    """Main serializer for routes."""

    points = RoutePointSerializer(many=True, read_only=True)

    class Meta:
        model = Route
        fields = [
            'id',
            'title',
            'slug',
            'short_description',
            'description',
            'season',
            'transport',
            'duration',
            'distance',
            'difficulty',
            'elevation_gain',
            'is_family',
            'has_overnight',
            'what_to_bring',
            'important_info',
            'map_url',
            'images',
            'place_ids',
            'nearby_place_ids',
            'guide_ids',
            'similar_route_ids',
            'custom_filters',
            'points',
            'unique_views_count',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class RouteDetailSerializer(RouteSerializer):
    """Public route page with resolved places and guides."""

    places = serializers.SerializerMethodField()
    guides = serializers.SerializerMethodField()

    class Meta(RouteSerializer.Meta):
        fields = RouteSerializer.Meta.fields + ['places', 'guides']
        read_only_fields = fields

    def get_places(self, obj):
        return PlaceListSerializer(resolve_in_order(Place, obj.place_ids), many=True).data

    def get_guides(self, obj):
        return ServiceListSerializer(get_route_guides(obj), many=True).data


class RouteWriteSerializer(serializers.ModelSerializer):
    """Admin input for routes. ``points`` replaces the whole list when sent."""

    images = _value_list()
    place_ids = _id_list()
    nearby_place_ids = _id_list()
    guide_ids = _id_list()
    similar_route_ids = _id_list()
    custom_filters = CustomFiltersField()
    points = RoutePointInputSerializer(many=True, required=False)

    class Meta:
        model = Route
        fields = [
            'title',
            'short_description',
            'description',
            'season',
            'transport',
            'duration',
            'distance',
            'difficulty',
            'elevation_gain',
            'is_family',
            'has_overnight',
            'what_to_bring',
            'important_info',
            'map_url',
            'images',
            'place_ids',
            'nearby_place_ids',
            'guide_ids',
            'similar_route_ids',
            'custom_filters',
            'points',
            'is_active',
        ]
        extra_kwargs = {'title': {'required': False}}


# ============================================
# Services
# ============================================

class ServiceListSerializer(serializers.ModelSerializer):
    """Compact service card for lists."""

    class Meta:
        model = Service
        fields = [
            'id',
            'title',
            'slug',
            'category',
            'short_description',
            'images',
            'is_verified',
            'rating',
            'reviews_count',
            'is_active',
            'created_at',
        ]


class ServiceSerializer(serializers.ModelSerializer):
    """Main serializer for services."""

    class Meta:
        model = Service
        fields = [
            'id',
            'title',
            'slug',
            'category',
            'short_description',
            'description',
            'phone',
            'email',
            'telegram',
            'address',
            'is_verified',
            'images',
            'certificates',
            'prices',
            'data',
            'route_ids',
            'rating',
            'reviews_count',
            'unique_views_count',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ServiceDetailSerializer(ServiceSerializer):
    """Public service page; guides list their routes."""

    routes = serializers.SerializerMethodField()

    class Meta(ServiceSerializer.Meta):
        fields = ServiceSerializer.Meta.fields + ['routes']
        read_only_fields = fields

    def get_routes(self, obj):
        return RouteListSerializer(get_service_routes(obj), many=True).data


class ServiceWriteSerializer(serializers.ModelSerializer):
    """Admin input for services."""

    images = _value_list()
    certificates = _value_list()
    prices = serializers.ListField(required=False)
    data = serializers.JSONField(required=False, allow_null=True)

    class Meta:
        model = Service
        fields = [
            'title',
            'category',
            'short_description',
            'description',
            'phone',
            'email',
            'telegram',
            'address',
            'is_verified',
            'images',
            'certificates',
            'prices',
            'data',
            'is_active',
        ]
        extra_kwargs = {'title': {'required': False}}
