# Generated manually for the tourism portal

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='News',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('slug', models.SlugField(max_length=300, unique=True)),
                ('type', models.CharField(choices=[('news', 'News'), ('article', 'Article')], default='news', max_length=20)),
                ('category', models.CharField(blank=True, db_index=True, max_length=100)),
                ('short_description', models.TextField(blank=True)),
                ('content', models.TextField(blank=True)),
                ('author', models.CharField(blank=True, max_length=255)),
                ('image', models.CharField(blank=True, max_length=500)),
                ('preview', models.CharField(blank=True, max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('unique_views_count', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'news',
                'verbose_name_plural': 'news',
                'ordering': ['-published_at', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='SiteContent',
            fields=[
                ('key', models.CharField(max_length=100, primary_key=True, serialize=False)),
                ('content', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'site_content',
                'ordering': ['key'],
            },
        ),
        migrations.CreateModel(
            name='Media',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('filename', models.CharField(max_length=255, unique=True)),
                ('url', models.CharField(max_length=500)),
                ('mimetype', models.CharField(max_length=100)),
                ('size', models.PositiveBigIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'media',
                'verbose_name_plural': 'media',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='news',
            index=models.Index(fields=['type', 'is_active', 'published_at'], name='news_type_active_pub_idx'),
        ),
    ]
