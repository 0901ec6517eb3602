"""
Catalog services - Business logic layer.

This package contains all business operations for the catalog app:
- Place, route and service CRUD
- Public listing, filtering and lookup by id or slug
- Mirrored reference lists (nearby places, route guides) and their repair
"""

from .place_management import (
    get_place_by_id,
    create_place,
    update_place,
    delete_place,
)
from .route_management import (
    get_route_by_id,
    create_route,
    update_route,
    delete_route,
)
from .service_management import (
    get_service_by_id,
    create_service,
    update_service,
    delete_service,
)
from .queries import (
    admin_list,
    get_extra_group_keys,
    list_public_places,
    list_public_routes,
    list_public_services,
    get_public_place,
    get_public_route,
    get_public_service,
    resolve_in_order,
    get_route_guides,
    get_service_routes,
)
from .relationship_sync import (
    MirrorRecord,
    ModelReferenceStore,
    SyncResult,
    compute_reference_delta,
    sync_symmetric,
    sync_asymmetric,
    sync_nearby_places,
    sync_route_guides,
)
from .reference_repair import (
    RepairReport,
    repair_nearby_places,
    repair_route_guides,
)
from .slugs import generate_slug, generate_unique_slug

# Domain Exceptions
from .exceptions import (
    CatalogServiceError,
    CatalogValidationError,
    PlaceNotFoundError,
    RouteNotFoundError,
    ServiceNotFoundError,
)

__all__ = [
    # Places
    'get_place_by_id',
    'create_place',
    'update_place',
    'delete_place',
    # Routes
    'get_route_by_id',
    'create_route',
    'update_route',
    'delete_route',
    # Services
    'get_service_by_id',
    'create_service',
    'update_service',
    'delete_service',
    # Queries
    'admin_list',
    'get_extra_group_keys',
    'list_public_places',
    'list_public_routes',
    'list_public_services',
    'get_public_place',
    'get_public_route',
    'get_public_service',
    'resolve_in_order',
    'get_route_guides',
    'get_service_routes',
    # Relationship sync
    'MirrorRecord',
    'ModelReferenceStore',
    'SyncResult',
    'compute_reference_delta',
    'sync_symmetric',
    'sync_asymmetric',
    'sync_nearby_places',
    'sync_route_guides',
    'RepairReport',
    'repair_nearby_places',
    'repair_route_guides',
    'generate_slug',
    'generate_unique_slug',
    # Exceptions
    'CatalogServiceError',
    'CatalogValidationError',
    'PlaceNotFoundError',
    'RouteNotFoundError',
    'ServiceNotFoundError',
]
