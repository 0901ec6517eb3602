"""Favorites service: routes, places and services bookmarked by a user."""

from django.apps import apps
from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import FavoriteTargetNotFoundError, InvalidFavoriteTypeError

User = get_user_model()

# entity type -> (model label, user field)
FAVORITE_TYPES = {
    'route': ('catalog.Route', 'favorite_route_ids'),
    'place': ('catalog.Place', 'favorite_place_ids'),
    'service': ('catalog.Service', 'favorite_service_ids'),
}


def _resolve(entity_type: str):
    try:
        model_label, field = FAVORITE_TYPES[entity_type]
    except KeyError:
        raise InvalidFavoriteTypeError(
            f"Unknown favorite type '{entity_type}'. Use route, place or service"
        )
    return apps.get_model(model_label), field


@transaction.atomic
def add_favorite(*, user_id, entity_type: str, entity_id) -> list[str]:
    """
    Add an entity to the user's favorites. Adding twice is a no-op.

    Returns:
        The user's updated favorite id list for that entity type

    Raises:
        InvalidFavoriteTypeError: If entity_type is unknown
        FavoriteTargetNotFoundError: If the entity does not exist
    """
    model, field = _resolve(entity_type)

    if not model.objects.filter(id=entity_id).exists():
        raise FavoriteTargetNotFoundError(f"{entity_type.capitalize()} not found")

    user = User.objects.select_for_update().get(id=user_id)
    ids = list(getattr(user, field) or [])
    if str(entity_id) not in ids:
        ids.append(str(entity_id))
        setattr(user, field, ids)
        user.save(update_fields=[field])
    return ids


@transaction.atomic
def remove_favorite(*, user_id, entity_type: str, entity_id) -> list[str]:
    """Remove an entity from the user's favorites (absent ids are ignored)."""
    _, field = _resolve(entity_type)

    user = User.objects.select_for_update().get(id=user_id)
    ids = [i for i in (getattr(user, field) or []) if i != str(entity_id)]
    setattr(user, field, ids)
    user.save(update_fields=[field])
    return ids


def get_favorites(*, user: User) -> dict:
    """
    Resolve the user's favorites into entity lists.

    Dangling ids are dropped from the response but kept in storage.
    """
    result = {}
    for entity_type, (model_label, field) in FAVORITE_TYPES.items():
        ids = list(getattr(user, field) or [])
        model = apps.get_model(model_label)
        by_id = {str(obj.id): obj for obj in model.objects.filter(id__in=ids)}
        result[f'{entity_type}s'] = [by_id[i] for i in ids if i in by_id]
    return result
