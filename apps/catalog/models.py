from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


GUIDE_CATEGORIES = ('Гид', 'Guide')


class Place(models.Model):
    """Point of interest (lake, waterfall, resort ...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=300, unique=True)
    location = models.CharField(max_length=255, blank=True)
    short_description = models.TextField(blank=True)
    description = models.TextField(blank=True)
    how_to_get = models.TextField(blank=True)
    audio_guide = models.CharField(max_length=500, blank=True)
    video = models.CharField(max_length=500, blank=True)
    map_url = models.CharField(max_length=1000, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    image = models.CharField(max_length=500, blank=True)
    images = models.JSONField(default=list, blank=True)

    # Aggregated from approved reviews
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal('0.0'),
        validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    reviews_count = models.PositiveIntegerField(default=0)

    # Fixed filter groups
    directions = models.JSONField(default=list, blank=True)
    seasons = models.JSONField(default=list, blank=True)
    object_types = models.JSONField(default=list, blank=True)
    accessibility = models.JSONField(default=list, blank=True)
    # Extra filter groups: {group_key: [values]}
    custom_filters = models.JSONField(default=dict, blank=True)

    # Symmetric: if A lists B, B lists A
    nearby_place_ids = models.JSONField(default=list, blank=True)

    unique_views_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'places'
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='places_active_created_idx'),
            models.Index(fields=['unique_views_count'], name='places_views_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Route(models.Model):
    """Hiking/driving route through one or more places."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=300, unique=True)
    short_description = models.TextField(blank=True)
    description = models.TextField(blank=True)

    # Scalar filter fields (cascaded by the routes filter family)
    season = models.CharField(max_length=100, null=True, blank=True)
    transport = models.CharField(max_length=100, null=True, blank=True)

    duration = models.CharField(max_length=100, blank=True)
    distance = models.FloatField(null=True, blank=True)
    difficulty = models.PositiveSmallIntegerField(
        default=3,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    elevation_gain = models.PositiveIntegerField(null=True, blank=True)
    is_family = models.BooleanField(default=False)
    has_overnight = models.BooleanField(default=False)
    what_to_bring = models.TextField(blank=True)
    important_info = models.TextField(blank=True)
    map_url = models.CharField(max_length=1000, blank=True)
    images = models.JSONField(default=list, blank=True)

    # Denormalized references (string ids)
    place_ids = models.JSONField(default=list, blank=True)
    nearby_place_ids = models.JSONField(default=list, blank=True)
    # Mirrored by Service.route_ids on guide services
    guide_ids = models.JSONField(default=list, blank=True)
    similar_route_ids = models.JSONField(default=list, blank=True)

    custom_filters = models.JSONField(default=dict, blank=True)

    unique_views_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'routes'
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='routes_active_created_idx'),
            models.Index(fields=['season'], name='routes_season_idx'),
            models.Index(fields=['transport'], name='routes_transport_idx'),
            models.Index(fields=['difficulty'], name='routes_difficulty_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class RoutePoint(models.Model):
    """Ordered stop along a route."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    route = models.ForeignKey(Route, on_delete=models.CASCADE, related_name='points')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image = models.CharField(max_length=500, blank=True)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'route_points'
        ordering = ['route', 'order']

    def __str__(self):
        return f"{self.route.title} #{self.order}: {self.title}"


class Service(models.Model):
    """Tourist service: guides, equipment rental, accommodation ..."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=300, unique=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    short_description = models.TextField(blank=True)
    description = models.TextField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    telegram = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    is_verified = models.BooleanField(default=False)
    images = models.JSONField(default=list, blank=True)
    certificates = models.JSONField(default=list, blank=True)
    prices = models.JSONField(default=list, blank=True)
    # Category-specific extra attributes
    data = models.JSONField(default=dict, blank=True)

    # Guides only: mirrored by Route.guide_ids
    route_ids = models.JSONField(default=list, blank=True)

    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal('0.0'),
        validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    reviews_count = models.PositiveIntegerField(default=0)
    unique_views_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'services'
        indexes = [
            models.Index(fields=['category', 'is_active'], name='services_category_active_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def is_guide(self):
        return self.category in GUIDE_CATEGORIES
