"""Route CRUD operations service."""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.db import transaction

from ..models import Route, RoutePoint, Service
from .exceptions import CatalogValidationError, RouteNotFoundError
from .relationship_sync import normalize_ids, sync_route_guides
from .slugs import generate_unique_slug

logger = logging.getLogger(__name__)

ROUTE_FIELDS = (
    'title', 'short_description', 'description', 'season', 'transport',
    'duration', 'distance', 'difficulty', 'elevation_gain', 'is_family',
    'has_overnight', 'what_to_bring', 'important_info', 'map_url', 'images',
    'place_ids', 'nearby_place_ids', 'guide_ids', 'similar_route_ids',
    'custom_filters', 'is_active',
)
REFERENCE_FIELDS = ('place_ids', 'nearby_place_ids', 'guide_ids', 'similar_route_ids')


def _clean_route_data(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {field: value for field, value in data.items() if field in ROUTE_FIELDS}

    if 'custom_filters' in cleaned and not isinstance(cleaned['custom_filters'], dict):
        raise CatalogValidationError("custom_filters must be an object")

    if 'difficulty' in cleaned:
        try:
            difficulty = int(cleaned['difficulty'])
        except (TypeError, ValueError):
            raise CatalogValidationError("Difficulty must be an integer from 1 to 5")
        if not 1 <= difficulty <= 5:
            raise CatalogValidationError("Difficulty must be an integer from 1 to 5")
        cleaned['difficulty'] = difficulty

    for field in REFERENCE_FIELDS:
        if field in cleaned:
            cleaned[field] = normalize_ids(cleaned[field])

    return cleaned


def _replace_points(route: Route, points: Optional[List[Dict[str, Any]]]) -> None:
    route.points.all().delete()
    RoutePoint.objects.bulk_create([
        RoutePoint(
            route=route,
            title=point.get('title') or '',
            description=point.get('description') or '',
            image=point.get('image') or '',
            order=index,
        )
        for index, point in enumerate(points or [])
    ])


def get_route_by_id(*, route_id: UUID) -> Route:
    """
    Get route by id, active or not.

    Raises:
        RouteNotFoundError: If route doesn't exist
    """
    try:
        return Route.objects.prefetch_related('points').get(id=route_id)
    except Route.DoesNotExist:
        raise RouteNotFoundError(f"Route {route_id} not found")


def create_route(*, data: Dict[str, Any]) -> Route:
    """
    Create a route with its points and attach it to the listed guides.

    Args:
        data: Route fields; ``title`` is required, ``points`` is an optional
            list of {title, description, image} stored in list order

    Returns:
        Created Route instance

    Raises:
        CatalogValidationError: If title is missing or data is malformed
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise CatalogValidationError("Title is required")

    fields = _clean_route_data(data)
    fields['title'] = title

    with transaction.atomic():
        route = Route.objects.create(slug=generate_unique_slug(Route, title), **fields)
        if data.get('points'):
            _replace_points(route, data['points'])
        guides = list(route.guide_ids)
        transaction.on_commit(
            lambda: sync_route_guides(route_id=route.id, new_refs=guides, old_refs=[])
        )

    logger.info("Created route %s (%s)", route.id, route.slug)
    return route


def update_route(*, route_id: UUID, data: Dict[str, Any]) -> Route:
    """
    Partially update a route.

    Absent keys keep their values; ``points``, when supplied, replaces the
    whole point list. Guide services gain or lose this route in their
    ``route_ids`` by the delta of ``guide_ids``, after commit.

    Raises:
        RouteNotFoundError: If route doesn't exist
        CatalogValidationError: If data is malformed
    """
    with transaction.atomic():
        try:
            route = Route.objects.select_for_update().get(id=route_id)
        except Route.DoesNotExist:
            raise RouteNotFoundError(f"Route {route_id} not found")

        fields = _clean_route_data(data)
        if 'title' in fields:
            fields['title'] = (fields['title'] or '').strip()
            if not fields['title']:
                raise CatalogValidationError("Title cannot be empty")
            if fields['title'] != route.title:
                route.slug = generate_unique_slug(Route, fields['title'], exclude_pk=route.pk)

        old_guides = list(route.guide_ids or [])
        for field, value in fields.items():
            setattr(route, field, value)
        route.save()

        if 'points' in data:
            _replace_points(route, data['points'])

        if 'guide_ids' in fields:
            new_guides = list(route.guide_ids)
            transaction.on_commit(
                lambda: sync_route_guides(route_id=route.id, new_refs=new_guides, old_refs=old_guides)
            )

    return route


def _services_listing_route(route_id) -> List[str]:
    route_id = str(route_id)
    return [
        str(pk)
        for pk, route_ids in Service.objects.values_list('pk', 'route_ids')
        if route_id in [str(ref) for ref in (route_ids or [])]
    ]


def delete_route(*, route_id: UUID) -> None:
    """
    Delete a route and remove its id from every guide's ``route_ids``.

    Guides are found both through the route's own ``guide_ids`` and by
    scanning services, so stale one-sided links are cleaned up too.

    Raises:
        RouteNotFoundError: If route doesn't exist
    """
    with transaction.atomic():
        try:
            route = Route.objects.select_for_update().get(id=route_id)
        except Route.DoesNotExist:
            raise RouteNotFoundError(f"Route {route_id} not found")

        owner_id = route.id
        linked = list(route.guide_ids or []) + _services_listing_route(owner_id)
        route.delete()
        transaction.on_commit(
            lambda: sync_route_guides(route_id=owner_id, new_refs=[], old_refs=linked)
        )

    logger.info("Deleted route %s", owner_id)
