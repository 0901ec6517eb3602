"""
Propagation of filter value edits into entity records.

Every cascade visits each entity record of a family once and writes only the
records whose data changes. Writes are per-record and not wrapped in a shared
transaction: a failure on one record is logged and counted, and the cascade
moves on. Re-running the same cascade is a no-op for records already
migrated, so a partially applied cascade converges on retry.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.db import DatabaseError

from ..families import FilterFamily

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    visited: int = 0
    updated: int = 0
    failed: int = 0

    def as_dict(self):
        return {'visited': self.visited, 'updated': self.updated, 'failed': self.failed}


def rename_in_list(values, old_value: str, new_value: str) -> list:
    return [new_value if value == old_value else value for value in (values or [])]


def remove_from_list(values, value: str) -> list:
    return [item for item in (values or []) if item != value]


def _rewrite_field(model, field: str, transform: Callable) -> CascadeResult:
    """Apply ``transform`` to ``field`` on every record, saving only changes."""
    result = CascadeResult()

    # Materialized up front: SQLite gives no isolation between a cursor and
    # writes to the same table on one connection.
    for pk, current in list(model.objects.values_list('pk', field)):
        result.visited += 1
        updated = transform(current)
        if updated == current:
            continue
        try:
            model.objects.filter(pk=pk).update(**{field: updated})
        except DatabaseError:
            result.failed += 1
            logger.exception("Cascade write failed for %s %s.%s", model.__name__, pk, field)
            continue
        result.updated += 1

    return result


def cascade_fixed_value(
    *,
    family: FilterFamily,
    group_key: str,
    old_value: str,
    new_value: Optional[str] = None,
) -> CascadeResult:
    """
    Rename (``new_value`` given) or remove a fixed-group value on entities.

    Array fields get element replacement/removal; scalar fields get an
    equality match-and-set (removal sets the field to null).
    """
    group = family.get_group(group_key)
    if group is None or group.field is None:
        return CascadeResult()

    model = family.get_entity_model()

    if group.scalar:
        matches = model.objects.filter(**{group.field: old_value})
        count = matches.update(**{group.field: new_value})
        result = CascadeResult(visited=count, updated=count)
    elif new_value is None:
        result = _rewrite_field(model, group.field, lambda values: remove_from_list(values, old_value))
    else:
        result = _rewrite_field(
            model, group.field, lambda values: rename_in_list(values, old_value, new_value)
        )

    logger.info(
        "Cascaded %s of %s/%s value %r: %s",
        'rename' if new_value is not None else 'removal',
        family.name, group_key, old_value, result.as_dict(),
    )
    return result


def _custom_filters_transform(group_key: str, change: Callable) -> Callable:
    def transform(custom_filters):
        if not isinstance(custom_filters, dict) or not isinstance(custom_filters.get(group_key), list):
            return custom_filters
        values = change(custom_filters[group_key])
        if values == custom_filters[group_key]:
            return custom_filters
        updated = dict(custom_filters)
        if values:
            updated[group_key] = values
        else:
            del updated[group_key]
        return updated
    return transform


def cascade_custom_value(
    *,
    family: FilterFamily,
    group_key: str,
    old_value: str,
    new_value: Optional[str] = None,
) -> CascadeResult:
    """
    Rename or remove a value inside ``custom_filters[group_key]``.

    The key is dropped from the map when its list becomes empty.
    """
    def change(values):
        if new_value is None:
            return remove_from_list(values, old_value)
        return rename_in_list(values, old_value, new_value)

    result = _rewrite_field(
        family.get_entity_model(),
        family.custom_filters_field,
        _custom_filters_transform(group_key, change),
    )
    logger.info(
        "Cascaded custom %s of %s/%s value %r: %s",
        'rename' if new_value is not None else 'removal',
        family.name, group_key, old_value, result.as_dict(),
    )
    return result


def cascade_custom_group_removal(*, family: FilterFamily, group_key: str) -> CascadeResult:
    """Delete ``group_key`` from every entity's ``custom_filters`` map."""

    def transform(custom_filters):
        if not isinstance(custom_filters, dict) or group_key not in custom_filters:
            return custom_filters
        return {key: values for key, values in custom_filters.items() if key != group_key}

    result = _rewrite_field(family.get_entity_model(), family.custom_filters_field, transform)
    logger.info("Removed custom group %s/%s from entities: %s", family.name, group_key, result.as_dict())
    return result
