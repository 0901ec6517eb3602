"""
Catalog read operations for the admin panel and the public site.

Filter values live in JSON lists. "List contains any of" matches become
JSON containment lookups on backends that support them (PostgreSQL). On
the others (SQLite) they are evaluated in Python over (pk, field) pairs and
turned back into a ``pk__in`` queryset.
"""

import uuid
from typing import Dict, Iterable, List, Optional

from django.db import connections
from django.db.models import Q, QuerySet

from apps.filters.families import PLACES
from apps.filters.models import FilterConfig
from ..models import Place, Route, Service
from .exceptions import PlaceNotFoundError, RouteNotFoundError, ServiceNotFoundError

SORT_ORDERINGS = {
    'popularity': ('-unique_views_count', '-created_at'),
    'difficulty': ('difficulty', '-created_at'),
}
DEFAULT_ORDERING = ('-created_at',)

# Route filter option labels mapped to numeric ranges
DISTANCE_BUCKETS = {
    'до 10 км': Q(distance__lte=10),
    '10–50 км': Q(distance__gte=10, distance__lte=50),
    '50–100 км': Q(distance__gte=50, distance__lte=100),
    '100+ км': Q(distance__gte=100),
}
ELEVATION_BUCKETS = {
    'до 500 м': Q(elevation_gain__lte=500),
    '500–1000 м': Q(elevation_gain__gte=500, elevation_gain__lte=1000),
    '1000+ м': Q(elevation_gain__gte=1000),
}

SEARCH_FIELDS = {
    Place: ('title', 'location', 'short_description', 'description'),
    Route: ('title', 'short_description', 'description'),
    Service: ('title', 'category', 'short_description', 'description'),
}


def _search(queryset: QuerySet, search: Optional[str]) -> QuerySet:
    search = (search or '').strip()
    if not search:
        return queryset
    condition = Q()
    for field in SEARCH_FIELDS[queryset.model]:
        condition |= Q(**{f'{field}__icontains': search})
    return queryset.filter(condition)


def _order(queryset: QuerySet, sort_by: Optional[str], allowed: Iterable[str]) -> QuerySet:
    sort_by = (sort_by or '').lower()
    if sort_by in allowed:
        return queryset.order_by(*SORT_ORDERINGS[sort_by])
    return queryset.order_by(*DEFAULT_ORDERING)


def _any_of(stored, wanted: set) -> bool:
    return isinstance(stored, list) and bool(wanted.intersection(stored))


def _supports_json_contains(queryset: QuerySet) -> bool:
    return connections[queryset.db].features.supports_json_field_contains


def contains_any_q(lookup: str, wanted: Iterable[str]) -> Q:
    """OR of JSON containment checks, one per wanted value."""
    condition = Q()
    for value in sorted(wanted):
        condition |= Q(**{f'{lookup}__contains': [value]})
    return condition


def _filter_list_fields(queryset: QuerySet, filters: Dict[str, List[str]]) -> QuerySet:
    """Keep records whose list field holds any requested value, for every field."""
    active = {field: set(values) for field, values in filters.items() if values}
    if not active:
        return queryset

    if _supports_json_contains(queryset):
        for field, wanted in active.items():
            queryset = queryset.filter(contains_any_q(field, wanted))
        return queryset

    fields = list(active)
    ids = [
        row[0]
        for row in queryset.values_list('pk', *fields)
        if all(_any_of(stored, active[field]) for field, stored in zip(fields, row[1:]))
    ]
    return queryset.filter(pk__in=ids)


def _filter_custom(queryset: QuerySet, extra_filters: Dict[str, List[str]]) -> QuerySet:
    """Keep records whose ``custom_filters[key]`` holds any requested value, for every key."""
    active = {key: set(values) for key, values in (extra_filters or {}).items() if values}
    if not active:
        return queryset

    if _supports_json_contains(queryset):
        for key, wanted in active.items():
            queryset = queryset.filter(contains_any_q(f'custom_filters__{key}', wanted))
        return queryset

    ids = [
        pk
        for pk, custom_filters in queryset.values_list('pk', 'custom_filters')
        if isinstance(custom_filters, dict)
        and all(_any_of(custom_filters.get(key), wanted) for key, wanted in active.items())
    ]
    return queryset.filter(pk__in=ids)


def _buckets(options: List[str], buckets: Dict[str, Q]) -> Optional[Q]:
    condition = None
    for option in options or []:
        bucket = buckets.get(str(option).strip())
        if bucket is not None:
            condition = bucket if condition is None else condition | bucket
    return condition


def get_extra_group_keys(*, family: str) -> List[str]:
    """Keys of the administrator-defined groups that can be filtered on."""
    config = FilterConfig.objects.filter(family=family).first()
    if config is None:
        return []
    return [key for key in config.extra_group_keys if key]


def admin_list(*, model, search: Optional[str] = None) -> QuerySet:
    """All records of a catalog model, newest first, optionally searched."""
    return _search(model.objects.all(), search).order_by(*DEFAULT_ORDERING)


def list_public_places(
    *,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    fixed_filters: Optional[Dict[str, List[str]]] = None,
    extra_filters: Optional[Dict[str, List[str]]] = None,
) -> QuerySet:
    """
    Active places for the public catalog.

    Args:
        search: Substring over title, location and descriptions
        sort_by: 'popularity' (views desc); anything else is newest first
        fixed_filters: {fixed group key: values}; a place matches a group
            when its field holds any of the values
        extra_filters: {extra group key: values} matched against
            ``custom_filters`` the same way

    Returns:
        QuerySet of active places
    """
    queryset = _search(Place.objects.filter(is_active=True), search)

    list_filters = {}
    for key, values in (fixed_filters or {}).items():
        group = PLACES.get_group(key)
        if group is not None and group.field:
            list_filters[group.field] = values

    queryset = _filter_list_fields(queryset, list_filters)
    queryset = _filter_custom(queryset, extra_filters)
    return _order(queryset, sort_by, allowed=('popularity',))


def list_public_routes(
    *,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    fixed_filters: Optional[Dict[str, List[str]]] = None,
    extra_filters: Optional[Dict[str, List[str]]] = None,
) -> QuerySet:
    """
    Active routes for the public catalog.

    Fixed filter keys follow the routes filter family: ``seasons`` and
    ``transport`` match the scalar fields, ``duration_options`` matches
    ``duration`` exactly, ``difficulty_levels`` are integers,
    ``distance_options`` and ``elevation_options`` are range labels
    (unknown labels are ignored), and any value in ``is_family_options`` or
    ``has_overnight_options`` requires the flag.
    """
    filters = fixed_filters or {}
    queryset = _search(Route.objects.filter(is_active=True), search)

    if filters.get('seasons'):
        queryset = queryset.filter(season__in=filters['seasons'])
    if filters.get('transport'):
        queryset = queryset.filter(transport__in=filters['transport'])
    if filters.get('duration_options'):
        queryset = queryset.filter(duration__in=filters['duration_options'])

    levels = []
    for level in filters.get('difficulty_levels') or []:
        try:
            levels.append(int(level))
        except (TypeError, ValueError):
            continue
    if levels:
        queryset = queryset.filter(difficulty__in=levels)

    distance = _buckets(filters.get('distance_options'), DISTANCE_BUCKETS)
    if distance is not None:
        queryset = queryset.filter(distance)
    elevation = _buckets(filters.get('elevation_options'), ELEVATION_BUCKETS)
    if elevation is not None:
        queryset = queryset.filter(elevation)

    if filters.get('is_family_options'):
        queryset = queryset.filter(is_family=True)
    if filters.get('has_overnight_options'):
        queryset = queryset.filter(has_overnight=True)

    queryset = _filter_custom(queryset, extra_filters)
    return _order(queryset, sort_by, allowed=('popularity', 'difficulty')).prefetch_related('points')


def list_public_services(
    *,
    search: Optional[str] = None,
    categories: Optional[List[str]] = None,
) -> QuerySet:
    """Active services, optionally limited to some categories."""
    queryset = _search(Service.objects.filter(is_active=True), search)
    if categories:
        queryset = queryset.filter(category__in=categories)
    return queryset.order_by(*DEFAULT_ORDERING)


def _get_active(model, id_or_slug: str):
    try:
        lookup = {'id': uuid.UUID(str(id_or_slug))}
    except ValueError:
        lookup = {'slug': id_or_slug}
    return model.objects.filter(is_active=True, **lookup).first()


def resolve_in_order(model, ids: Iterable) -> list:
    """Active records for ``ids`` in list order; dangling ids are dropped."""
    wanted = []
    for ref in ids or []:
        try:
            wanted.append(uuid.UUID(str(ref)))
        except ValueError:
            continue
    by_id = {record.id: record for record in model.objects.filter(id__in=wanted, is_active=True)}
    return [by_id[ref] for ref in dict.fromkeys(wanted) if ref in by_id]


def get_public_place(*, id_or_slug: str) -> Place:
    """
    Active place by id or slug.

    Raises:
        PlaceNotFoundError: If no active place matches
    """
    place = _get_active(Place, id_or_slug)
    if place is None:
        raise PlaceNotFoundError("Place not found")
    return place


def get_public_route(*, id_or_slug: str) -> Route:
    """
    Active route by id or slug.

    Raises:
        RouteNotFoundError: If no active route matches
    """
    route = _get_active(Route, id_or_slug)
    if route is None:
        raise RouteNotFoundError("Route not found")
    return route


def get_public_service(*, id_or_slug: str) -> Service:
    """
    Active service by id or slug.

    Raises:
        ServiceNotFoundError: If no active service matches
    """
    service = _get_active(Service, id_or_slug)
    if service is None:
        raise ServiceNotFoundError("Service not found")
    return service


def get_route_guides(route: Route) -> List[Service]:
    """Active guide services listed on the route."""
    return [service for service in resolve_in_order(Service, route.guide_ids) if service.is_guide]


def get_service_routes(service: Service) -> List[Route]:
    """Routes of a guide in ``route_ids`` order; other categories have none."""
    if not service.is_guide:
        return []
    return resolve_in_order(Route, service.route_ids)
