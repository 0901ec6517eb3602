from django.db import models
import uuid


class NewsType(models.TextChoices):
    NEWS = 'news', 'News'
    ARTICLE = 'article', 'Article'


class News(models.Model):
    """News item or long-form article."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=300, unique=True)
    type = models.CharField(max_length=20, choices=NewsType.choices, default=NewsType.NEWS)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    short_description = models.TextField(blank=True)
    content = models.TextField(blank=True)
    author = models.CharField(max_length=255, blank=True)
    image = models.CharField(max_length=500, blank=True)
    preview = models.CharField(max_length=500, blank=True)
    images = models.JSONField(default=list, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)

    unique_views_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'news'
        verbose_name_plural = 'news'
        indexes = [
            models.Index(fields=['type', 'is_active', 'published_at'], name='news_type_active_pub_idx'),
        ]
        ordering = ['-published_at', '-created_at']

    def __str__(self):
        return self.title

    @property
    def cover(self):
        """First available picture: image, preview, then the gallery."""
        return self.image or self.preview or (self.images[0] if self.images else None)


class SiteContent(models.Model):
    """
    Editable JSON document behind a site section.

    Keys: ``home``, ``region``, ``footer`` and ``page:<name>``.
    """

    key = models.CharField(max_length=100, primary_key=True)
    content = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_content'
        ordering = ['key']

    def __str__(self):
        return self.key


class Media(models.Model):
    """Uploaded file in the media library."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    filename = models.CharField(max_length=255, unique=True)
    url = models.CharField(max_length=500)
    mimetype = models.CharField(max_length=100)
    size = models.PositiveBigIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'media'
        verbose_name_plural = 'media'
        ordering = ['-created_at']

    def __str__(self):
        return self.filename
