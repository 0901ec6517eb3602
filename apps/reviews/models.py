# ==========================================
# apps/reviews/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


class ReviewEntityType(models.TextChoices):
    PLACE = 'place', 'Place'
    ROUTE = 'route', 'Route'
    SERVICE = 'service', 'Service'


class ReviewStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class Review(models.Model):
    """
    Visitor review of a place, route or service.

    Reviews start pending and only approved ones are public and count
    towards the target's rating.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    entity_type = models.CharField(max_length=20, choices=ReviewEntityType.choices)
    entity_id = models.UUIDField()
    # Title at submission time, kept for the moderation list
    entity_title = models.CharField(max_length=255, blank=True)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviews'
    )
    author_name = models.CharField(max_length=100)
    author_avatar = models.CharField(max_length=500, blank=True)
    text = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    status = models.CharField(max_length=20, choices=ReviewStatus.choices, default=ReviewStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews'
        indexes = [
            models.Index(fields=['entity_type', 'entity_id', 'status'], name='reviews_entity_status_idx'),
            models.Index(fields=['status', 'created_at'], name='reviews_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.author_name} - {self.entity_type}:{self.entity_title or self.entity_id} ({self.rating}★)"
