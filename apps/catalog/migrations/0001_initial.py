# Generated manually for the tourism portal

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Place',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('slug', models.SlugField(max_length=300, unique=True)),
                ('location', models.CharField(blank=True, max_length=255)),
                ('short_description', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('how_to_get', models.TextField(blank=True)),
                ('audio_guide', models.CharField(blank=True, max_length=500)),
                ('video', models.CharField(blank=True, max_length=500)),
                ('map_url', models.CharField(blank=True, max_length=1000)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('image', models.CharField(blank=True, max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('rating', models.DecimalField(decimal_places=1, default=Decimal('0.0'), max_digits=2, validators=[MinValueValidator(0), MaxValueValidator(5)])),
                ('reviews_count', models.PositiveIntegerField(default=0)),
                ('directions', models.JSONField(blank=True, default=list)),
                ('seasons', models.JSONField(blank=True, default=list)),
                ('object_types', models.JSONField(blank=True, default=list)),
                ('accessibility', models.JSONField(blank=True, default=list)),
                ('custom_filters', models.JSONField(blank=True, default=dict)),
                ('nearby_place_ids', models.JSONField(blank=True, default=list)),
                ('unique_views_count', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'places',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Route',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('slug', models.SlugField(max_length=300, unique=True)),
                ('short_description', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('season', models.CharField(blank=True, max_length=100, null=True)),
                ('transport', models.CharField(blank=True, max_length=100, null=True)),
                ('duration', models.CharField(blank=True, max_length=100)),
                ('distance', models.FloatField(blank=True, null=True)),
                ('difficulty', models.PositiveSmallIntegerField(default=3, validators=[MinValueValidator(1), MaxValueValidator(5)])),
                ('elevation_gain', models.PositiveIntegerField(blank=True, null=True)),
                ('is_family', models.BooleanField(default=False)),
                ('has_overnight', models.BooleanField(default=False)),
                ('what_to_bring', models.TextField(blank=True)),
                ('important_info', models.TextField(blank=True)),
                ('map_url', models.CharField(blank=True, max_length=1000)),
                ('images', models.JSONField(blank=True, default=list)),
                ('place_ids', models.JSONField(blank=True, default=list)),
                ('nearby_place_ids', models.JSONField(blank=True, default=list)),
                ('guide_ids', models.JSONField(blank=True, default=list)),
                ('similar_route_ids', models.JSONField(blank=True, default=list)),
                ('custom_filters', models.JSONField(blank=True, default=dict)),
                ('unique_views_count', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'routes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('slug', models.SlugField(max_length=300, unique=True)),
                ('category', models.CharField(blank=True, db_index=True, max_length=100)),
                ('short_description', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('telegram', models.CharField(blank=True, max_length=100)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('is_verified', models.BooleanField(default=False)),
                ('images', models.JSONField(blank=True, default=list)),
                ('certificates', models.JSONField(blank=True, default=list)),
                ('prices', models.JSONField(blank=True, default=list)),
                ('data', models.JSONField(blank=True, default=dict)),
                ('route_ids', models.JSONField(blank=True, default=list)),
                ('rating', models.DecimalField(decimal_places=1, default=Decimal('0.0'), max_digits=2, validators=[MinValueValidator(0), MaxValueValidator(5)])),
                ('reviews_count', models.PositiveIntegerField(default=0)),
                ('unique_views_count', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'services',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='RoutePoint',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('image', models.CharField(blank=True, max_length=500)),
                ('order', models.PositiveIntegerField(default=0)),
                ('route', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='points', to='catalog.route')),
            ],
            options={
                'db_table': 'route_points',
                'ordering': ['route', 'order'],
            },
        ),
        migrations.AddIndex(
            model_name='place',
            index=models.Index(fields=['is_active', 'created_at'], name='places_active_created_idx'),
        ),
        migrations.AddIndex(
            model_name='place',
            index=models.Index(fields=['unique_views_count'], name='places_views_idx'),
        ),
        migrations.AddIndex(
            model_name='route',
            index=models.Index(fields=['is_active', 'created_at'], name='routes_active_created_idx'),
        ),
        migrations.AddIndex(
            model_name='route',
            index=models.Index(fields=['season'], name='routes_season_idx'),
        ),
        migrations.AddIndex(
            model_name='route',
            index=models.Index(fields=['transport'], name='routes_transport_idx'),
        ),
        migrations.AddIndex(
            model_name='route',
            index=models.Index(fields=['difficulty'], name='routes_difficulty_idx'),
        ),
        migrations.AddIndex(
            model_name='service',
            index=models.Index(fields=['category', 'is_active'], name='services_category_active_idx'),
        ),
    ]
