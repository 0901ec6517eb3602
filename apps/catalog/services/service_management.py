"""Service (guides, rentals, lodging) CRUD operations."""

from typing import Any, Dict
from uuid import UUID

from django.db import transaction

from ..models import Service
from .exceptions import CatalogValidationError, ServiceNotFoundError
from .slugs import generate_unique_slug

SERVICE_FIELDS = (
    'title', 'category', 'short_description', 'description', 'phone', 'email',
    'telegram', 'address', 'is_verified', 'is_active', 'images', 'certificates',
    'prices', 'data',
)


def _clean_service_data(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {field: value for field, value in data.items() if field in SERVICE_FIELDS}
    if 'data' in cleaned:
        # Anything but an object clears the category attributes
        cleaned['data'] = cleaned['data'] if isinstance(cleaned['data'], dict) else {}
    return cleaned


def get_service_by_id(*, service_id: UUID) -> Service:
    """
    Get service by id, active or not.

    Raises:
        ServiceNotFoundError: If service doesn't exist
    """
    try:
        return Service.objects.get(id=service_id)
    except Service.DoesNotExist:
        raise ServiceNotFoundError(f"Service {service_id} not found")


@transaction.atomic
def create_service(*, data: Dict[str, Any]) -> Service:
    """
    Create a service.

    ``route_ids`` is not accepted here: it is maintained from the route
    side through ``Route.guide_ids``.

    Raises:
        CatalogValidationError: If title is missing
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise CatalogValidationError("Title is required")

    fields = _clean_service_data(data)
    fields['title'] = title
    return Service.objects.create(slug=generate_unique_slug(Service, title), **fields)


@transaction.atomic
def update_service(*, service_id: UUID, data: Dict[str, Any]) -> Service:
    """
    Partially update a service.

    Raises:
        ServiceNotFoundError: If service doesn't exist
        CatalogValidationError: If title is emptied
    """
    try:
        service = Service.objects.select_for_update().get(id=service_id)
    except Service.DoesNotExist:
        raise ServiceNotFoundError(f"Service {service_id} not found")

    fields = _clean_service_data(data)
    if 'title' in fields:
        fields['title'] = (fields['title'] or '').strip()
        if not fields['title']:
            raise CatalogValidationError("Title cannot be empty")
        if fields['title'] != service.title:
            service.slug = generate_unique_slug(Service, fields['title'], exclude_pk=service.pk)

    for field, value in fields.items():
        setattr(service, field, value)
    service.save()
    return service


@transaction.atomic
def delete_service(*, service_id: UUID) -> None:
    """
    Hard delete a service.

    Raises:
        ServiceNotFoundError: If service doesn't exist
    """
    deleted, _ = Service.objects.filter(id=service_id).delete()
    if not deleted:
        raise ServiceNotFoundError(f"Service {service_id} not found")
