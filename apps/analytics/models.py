from django.db import models
from django.conf import settings
import uuid


class TrackedEntity(models.TextChoices):
    PLACE = 'place', 'Place'
    ROUTE = 'route', 'Route'
    SERVICE = 'service', 'Service'
    NEWS = 'news', 'News'


class ViewTracking(models.Model):
    """
    One row per unique visitor of a public detail page.

    ``visitor_id`` is the user id for signed-in visitors and the visitor
    cookie otherwise.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    entity_type = models.CharField(max_length=20, choices=TrackedEntity.choices)
    entity_id = models.UUIDField()
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tracked_views'
    )
    visitor_id = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'view_tracking'
        constraints = [
            models.UniqueConstraint(
                fields=['entity_type', 'entity_id', 'visitor_id'],
                name='unique_view_per_visitor'
            ),
        ]
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='view_tracking_entity_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.entity_type}:{self.entity_id} by {self.visitor_id}"
