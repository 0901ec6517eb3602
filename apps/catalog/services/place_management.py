"""Place CRUD operations service."""

import logging
from typing import Any, Dict
from uuid import UUID

from django.db import transaction

from ..models import Place
from .exceptions import CatalogValidationError, PlaceNotFoundError
from .relationship_sync import normalize_ids, sync_nearby_places
from .slugs import generate_unique_slug

logger = logging.getLogger(__name__)

PLACE_FIELDS = (
    'title', 'location', 'short_description', 'description', 'how_to_get',
    'audio_guide', 'video', 'map_url', 'latitude', 'longitude', 'image',
    'images', 'directions', 'seasons', 'object_types', 'accessibility',
    'custom_filters', 'nearby_place_ids', 'is_active',
)


def _clean_place_data(data: Dict[str, Any], place_id=None) -> Dict[str, Any]:
    cleaned = {field: value for field, value in data.items() if field in PLACE_FIELDS}

    if 'custom_filters' in cleaned and not isinstance(cleaned['custom_filters'], dict):
        raise CatalogValidationError("custom_filters must be an object")

    if 'nearby_place_ids' in cleaned:
        owner = str(place_id) if place_id is not None else None
        cleaned['nearby_place_ids'] = [
            ref for ref in normalize_ids(cleaned['nearby_place_ids']) if ref != owner
        ]

    return cleaned


def get_place_by_id(*, place_id: UUID) -> Place:
    """
    Get place by id, active or not.

    Raises:
        PlaceNotFoundError: If place doesn't exist
    """
    try:
        return Place.objects.get(id=place_id)
    except Place.DoesNotExist:
        raise PlaceNotFoundError(f"Place {place_id} not found")


def create_place(*, data: Dict[str, Any]) -> Place:
    """
    Create a place and mirror its nearby list.

    Args:
        data: Place fields; ``title`` is required

    Returns:
        Created Place instance

    Raises:
        CatalogValidationError: If title is missing or data is malformed
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise CatalogValidationError("Title is required")

    fields = _clean_place_data(data)
    fields['title'] = title

    with transaction.atomic():
        place = Place.objects.create(slug=generate_unique_slug(Place, title), **fields)
        nearby = list(place.nearby_place_ids)
        transaction.on_commit(
            lambda: sync_nearby_places(place_id=place.id, new_refs=nearby, old_refs=[])
        )

    logger.info("Created place %s (%s)", place.id, place.slug)
    return place


def update_place(*, place_id: UUID, data: Dict[str, Any]) -> Place:
    """
    Partially update a place.

    Keys absent from ``data`` keep their stored values. A title change
    regenerates the slug. When ``nearby_place_ids`` changes, the delta is
    mirrored onto the affected places after commit.

    Raises:
        PlaceNotFoundError: If place doesn't exist
        CatalogValidationError: If data is malformed
    """
    with transaction.atomic():
        try:
            place = Place.objects.select_for_update().get(id=place_id)
        except Place.DoesNotExist:
            raise PlaceNotFoundError(f"Place {place_id} not found")

        fields = _clean_place_data(data, place_id=place.id)
        if 'title' in fields:
            fields['title'] = (fields['title'] or '').strip()
            if not fields['title']:
                raise CatalogValidationError("Title cannot be empty")
            if fields['title'] != place.title:
                place.slug = generate_unique_slug(Place, fields['title'], exclude_pk=place.pk)

        old_nearby = list(place.nearby_place_ids or [])
        for field, value in fields.items():
            setattr(place, field, value)
        place.save()

        if 'nearby_place_ids' in fields:
            new_nearby = list(place.nearby_place_ids)
            transaction.on_commit(
                lambda: sync_nearby_places(place_id=place.id, new_refs=new_nearby, old_refs=old_nearby)
            )

    return place


def delete_place(*, place_id: UUID) -> None:
    """
    Delete a place and detach it from every place that lists it as nearby.

    Raises:
        PlaceNotFoundError: If place doesn't exist
    """
    with transaction.atomic():
        try:
            place = Place.objects.select_for_update().get(id=place_id)
        except Place.DoesNotExist:
            raise PlaceNotFoundError(f"Place {place_id} not found")

        owner_id = place.id
        old_nearby = list(place.nearby_place_ids or [])
        place.delete()
        transaction.on_commit(
            lambda: sync_nearby_places(place_id=owner_id, new_refs=[], old_refs=old_nearby)
        )

    logger.info("Deleted place %s", owner_id)
