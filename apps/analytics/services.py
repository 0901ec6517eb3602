"""
Unique view tracking.

A detail page view is counted once per visitor: the first view inserts a
``ViewTracking`` row and bumps the entity's ``unique_views_count`` with an
``F()`` expression. Tracking never breaks the page: database failures are
logged and swallowed.
"""

import logging
from typing import Dict, List, Optional, Tuple

from django.apps import apps
from django.db import transaction, DatabaseError
from django.db.models import Count, F

from .exceptions import InvalidEntityTypeError
from .models import TrackedEntity, ViewTracking

logger = logging.getLogger(__name__)

ENTITY_MODELS = {
    TrackedEntity.PLACE: 'catalog.Place',
    TrackedEntity.ROUTE: 'catalog.Route',
    TrackedEntity.SERVICE: 'catalog.Service',
    TrackedEntity.NEWS: 'content.News',
}


def get_entity_model(entity_type: str):
    """
    Model class behind a tracked entity type.

    Raises:
        InvalidEntityTypeError: If the type is not tracked
    """
    try:
        return apps.get_model(ENTITY_MODELS[TrackedEntity(entity_type)])
    except (KeyError, ValueError):
        raise InvalidEntityTypeError(
            f"Invalid entity type: '{entity_type}'. "
            f"Valid options: {', '.join(TrackedEntity.values)}"
        )


def record_unique_view(*, entity_type: str, entity_id, visitor_id: Optional[str], user=None) -> bool:
    """
    Count a view of an entity once per visitor.

    Args:
        entity_type: place, route, service or news
        entity_id: Viewed record id
        visitor_id: Visitor cookie value; ignored when ``user`` is given
        user: Authenticated user, if any

    Returns:
        True if this was the visitor's first view
    """
    visitor_key = str(user.id) if user is not None else visitor_id
    if not visitor_key:
        return False

    model = get_entity_model(entity_type)

    try:
        with transaction.atomic():
            _, created = ViewTracking.objects.get_or_create(
                entity_type=entity_type,
                entity_id=entity_id,
                visitor_id=visitor_key,
                defaults={'user': user},
            )
            if created:
                model.objects.filter(pk=entity_id).update(
                    unique_views_count=F('unique_views_count') + 1
                )
    except DatabaseError:
        logger.warning("Failed to record view of %s %s", entity_type, entity_id, exc_info=True)
        return False

    return created


def recompute_view_counts(*, dry_run: bool = False) -> List[Tuple[str, str, int, int]]:
    """
    Reset ``unique_views_count`` of every tracked record from ``ViewTracking``.

    Returns:
        List of (entity_type, id, stored count, tracked count) for records
        whose counter was (or would be) changed
    """
    changes = []

    for entity_type in TrackedEntity.values:
        model = get_entity_model(entity_type)
        tracked: Dict = dict(
            ViewTracking.objects
            .filter(entity_type=entity_type)
            .values('entity_id')
            .annotate(total=Count('id'))
            .values_list('entity_id', 'total')
        )

        for pk, stored in list(model.objects.values_list('pk', 'unique_views_count')):
            actual = tracked.get(pk, 0)
            if actual == stored:
                continue
            changes.append((entity_type, str(pk), stored, actual))
            if not dry_run:
                model.objects.filter(pk=pk).update(unique_views_count=actual)

    logger.info("View count sync%s: %d record(s) changed", ' (dry run)' if dry_run else '', len(changes))
    return changes
