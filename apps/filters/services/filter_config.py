"""
Filter configuration service - group and value lifecycle per entity family.

Configs are created lazily with the family defaults on first access. Every
operation edits the config first and only then cascades into entity
records, so a rejected edit never touches entities.

Concurrent edits of the same config are last-write-wins: the row is read,
modified and saved without a version check.
"""

import logging
from typing import Optional

from ..families import FAMILIES, FilterFamily
from ..models import FilterConfig
from .exceptions import (
    FilterValidationError,
    GroupKeyConflictError,
    FilterFamilyNotFoundError,
    FilterGroupNotFoundError,
    FilterValueNotFoundError,
)
from .normalization import (
    ICON_TYPES,
    clean_values,
    clean_text,
    infer_icon_type,
    normalize_key,
    normalize_extra_groups,
    normalize_fixed_group_meta,
)
from .transliteration import slug_from_label
from .value_cascade import (
    CascadeResult,
    cascade_fixed_value,
    cascade_custom_value,
    cascade_custom_group_removal,
)

logger = logging.getLogger(__name__)

META_FIELDS = ('label', 'icon', 'icon_type')

# Distinguishes "argument not passed" from an explicit None
ABSENT = object()


def get_family(name: str) -> FilterFamily:
    """
    Look up a registered family.

    Raises:
        FilterFamilyNotFoundError: If the family is unknown
    """
    try:
        return FAMILIES[name]
    except KeyError:
        raise FilterFamilyNotFoundError(f"Unknown filter family '{name}'")


def get_config(*, family: str) -> FilterConfig:
    """
    Return the config for a family, creating it with defaults if absent.

    Args:
        family: Family name (places, routes)

    Returns:
        FilterConfig instance

    Raises:
        FilterFamilyNotFoundError: If the family is unknown
    """
    family_def = get_family(family)
    config, created = FilterConfig.objects.get_or_create(
        family=family_def.name,
        defaults={'fixed_groups': family_def.default_fixed_groups()},
    )
    if created:
        logger.info("Created default filter config for %s", family_def.name)
    return config


def get_public_config(*, family: str) -> dict:
    """
    Read-only view of a family's filters for the public site.

    Missing configs are not created: every group is reported empty instead.
    Hidden fixed groups are reported as empty lists.
    """
    family_def = get_family(family)
    config = FilterConfig.objects.filter(family=family_def.name).first()

    if config is None:
        return {
            'fixed_groups': {key: [] for key in family_def.fixed_keys},
            'hidden_fixed_groups': [],
            'fixed_group_meta': {},
            'extra_groups': [],
        }

    hidden = [key for key in (config.hidden_fixed_groups or []) if family_def.is_fixed(key)]
    return {
        'fixed_groups': {
            key: [] if key in hidden else clean_values(config.get_fixed_values(key))
            for key in family_def.fixed_keys
        },
        'hidden_fixed_groups': hidden,
        'fixed_group_meta': config.fixed_group_meta or {},
        'extra_groups': normalize_extra_groups(config.extra_groups, ()),
    }


def replace_config(
    *,
    family: str,
    fixed_groups: Optional[dict] = None,
    extra_groups: Optional[list] = None,
    fixed_group_meta=ABSENT,
    hidden_fixed_groups=ABSENT,
) -> FilterConfig:
    """
    Replace all group value lists and metadata of a family's config.

    Fixed keys missing from ``fixed_groups`` keep their current values.
    ``fixed_group_meta`` and ``hidden_fixed_groups`` are only replaced when
    passed. No entity cascade is performed.

    Args:
        family: Family name
        fixed_groups: Mapping fixed key -> list of values
        extra_groups: Full list of extra groups
        fixed_group_meta: Mapping fixed key -> display override
        hidden_fixed_groups: Fixed keys to hide

    Returns:
        Updated FilterConfig

    Raises:
        FilterValidationError: If an extra key collides with a fixed key
    """
    family_def = get_family(family)
    fixed_keys = family_def.fixed_keys

    # Validate before touching the stored config
    normalized_extra = normalize_extra_groups(extra_groups or [], fixed_keys)

    config = get_config(family=family)

    values = dict(config.fixed_groups or {})
    for key in fixed_keys:
        if isinstance(fixed_groups, dict) and key in fixed_groups:
            values[key] = clean_values(fixed_groups[key])
    config.fixed_groups = values
    config.extra_groups = normalized_extra

    if fixed_group_meta is not ABSENT:
        config.fixed_group_meta = normalize_fixed_group_meta(fixed_group_meta, fixed_keys)

    if hidden_fixed_groups is not ABSENT:
        requested = hidden_fixed_groups if isinstance(hidden_fixed_groups, (list, tuple)) else []
        config.hidden_fixed_groups = [key for key in fixed_keys if key in requested]

    config.save()
    return config


def add_extra_group(
    *,
    family: str,
    label: str,
    key: Optional[str] = None,
    icon: Optional[str] = None,
    icon_type: Optional[str] = None,
    values: Optional[list] = None,
) -> FilterConfig:
    """
    Append a new extra group.

    Args:
        family: Family name
        label: Human label (required)
        key: Explicit key; derived from the label when omitted
        icon: Icon URL or library name
        icon_type: 'upload' or 'library', inferred when omitted
        values: Initial values

    Returns:
        Updated FilterConfig

    Raises:
        FilterValidationError: If the label is blank
        GroupKeyConflictError: If the key is taken by a fixed or extra group
    """
    family_def = get_family(family)

    label = clean_text(label)
    if not label:
        raise FilterValidationError("Group label is required")

    key = normalize_key(key) or slug_from_label(label)
    if family_def.is_fixed(key):
        raise GroupKeyConflictError(f"Key '{key}' is reserved by a fixed group")

    config = get_config(family=family)
    if key in config.extra_group_keys:
        raise GroupKeyConflictError(f"Group with key '{key}' already exists")

    icon = clean_text(icon)
    config.extra_groups = list(config.extra_groups or []) + [{
        'key': key,
        'label': label,
        'icon': icon,
        'icon_type': infer_icon_type(icon, icon_type),
        'values': clean_values(values),
    }]
    config.save(update_fields=['extra_groups', 'updated_at'])
    logger.info("Added extra group %s/%s", family_def.name, key)
    return config


def remove_group(*, family: str, key: str) -> tuple[FilterConfig, CascadeResult]:
    """
    Remove a filter group.

    A fixed group is only hidden and emptied on the config; entity fields
    keep their values. An extra group is deleted and its key is removed from
    every entity's ``custom_filters``.

    Raises:
        FilterGroupNotFoundError: If the key matches no group
    """
    family_def = get_family(family)
    config = get_config(family=family)

    if family_def.is_fixed(key):
        hidden = list(config.hidden_fixed_groups or [])
        if key not in hidden:
            hidden.append(key)
        config.hidden_fixed_groups = hidden
        config.fixed_groups = {**(config.fixed_groups or {}), key: []}
        config.save(update_fields=['hidden_fixed_groups', 'fixed_groups', 'updated_at'])
        return config, CascadeResult()

    index, _ = config.find_extra_group(key)
    if index is None:
        raise FilterGroupNotFoundError(f"Group '{key}' not found")

    config.extra_groups = [group for group in config.extra_groups if group.get('key') != key]
    config.save(update_fields=['extra_groups', 'updated_at'])

    result = cascade_custom_group_removal(family=family_def, group_key=key)
    return config, result


def update_group_meta(*, family: str, key: str, **changes) -> FilterConfig:
    """
    Partially update display metadata (label, icon, icon_type) of a group.

    Only the fields present in ``changes`` are touched; an explicit None
    clears the field. Unknown fields and unrecognised icon types are ignored.

    Raises:
        FilterGroupNotFoundError: If the key matches no group
    """
    family_def = get_family(family)
    config = get_config(family=family)

    updates = {}
    if 'label' in changes:
        updates['label'] = clean_text(changes['label'])
    if 'icon' in changes:
        updates['icon'] = clean_text(changes['icon'])
    if 'icon_type' in changes:
        icon_type = changes['icon_type']
        if icon_type is None or icon_type in ICON_TYPES:
            updates['icon_type'] = icon_type

    if family_def.is_fixed(key):
        meta = dict(config.fixed_group_meta or {})
        entry = {field: None for field in META_FIELDS}
        entry.update(meta.get(key) or {})
        entry.update(updates)
        meta[key] = entry
        config.fixed_group_meta = meta
        config.save(update_fields=['fixed_group_meta', 'updated_at'])
        return config

    index, group = config.find_extra_group(key)
    if index is None:
        raise FilterGroupNotFoundError(f"Group '{key}' not found")

    group = dict(group)
    group.update(updates)
    if 'label' in updates and not updates['label']:
        # Extra groups always carry a label
        group['label'] = key
    extra = list(config.extra_groups)
    extra[index] = group
    config.extra_groups = extra
    config.save(update_fields=['extra_groups', 'updated_at'])
    return config


def _require_value(value, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise FilterValidationError(f"'{name}' is required")
    return value


def replace_value(
    *,
    family: str,
    group: str,
    old_value: str,
    new_value: str,
) -> tuple[FilterConfig, CascadeResult]:
    """
    Rename a value within a group and cascade the rename into entities.

    The value keeps its position in the group's list.

    Raises:
        FilterValidationError: If inputs are missing or new_value is blank
        FilterGroupNotFoundError: If the group doesn't exist
        FilterValueNotFoundError: If old_value is not in the group
    """
    family_def = get_family(family)
    if not isinstance(group, str) or not group:
        raise FilterValidationError("'group' is required")
    _require_value(old_value, 'old_value')
    new_value = _require_value(new_value, 'new_value').strip()

    config = get_config(family=family)

    if family_def.is_fixed(group):
        values = config.get_fixed_values(group)
        if old_value not in values:
            raise FilterValueNotFoundError(f"Value '{old_value}' not found in '{group}'")
        config.fixed_groups = {
            **(config.fixed_groups or {}),
            group: [new_value if value == old_value else value for value in values],
        }
        config.save(update_fields=['fixed_groups', 'updated_at'])
        result = cascade_fixed_value(
            family=family_def, group_key=group, old_value=old_value, new_value=new_value
        )
        return config, result

    index, extra_group = config.find_extra_group(group)
    if index is None:
        raise FilterGroupNotFoundError(f"Group '{group}' not found")

    values = list(extra_group.get('values') or [])
    if old_value not in values:
        raise FilterValueNotFoundError(f"Value '{old_value}' not found in '{group}'")

    extra = list(config.extra_groups)
    extra[index] = {
        **extra_group,
        'values': [new_value if value == old_value else value for value in values],
    }
    config.extra_groups = extra
    config.save(update_fields=['extra_groups', 'updated_at'])

    result = cascade_custom_value(
        family=family_def, group_key=group, old_value=old_value, new_value=new_value
    )
    return config, result


def remove_value(*, family: str, group: str, value: str) -> tuple[FilterConfig, CascadeResult]:
    """
    Delete a value from a group and from every entity that references it.

    A value missing from the group is not an error; the entity cascade runs
    regardless.

    Raises:
        FilterValidationError: If inputs are missing
        FilterGroupNotFoundError: If the group doesn't exist
    """
    family_def = get_family(family)
    if not isinstance(group, str) or not group:
        raise FilterValidationError("'group' is required")
    if not isinstance(value, str):
        raise FilterValidationError("'value' is required")

    config = get_config(family=family)

    if family_def.is_fixed(group):
        config.fixed_groups = {
            **(config.fixed_groups or {}),
            group: [item for item in config.get_fixed_values(group) if item != value],
        }
        config.save(update_fields=['fixed_groups', 'updated_at'])
        result = cascade_fixed_value(family=family_def, group_key=group, old_value=value)
        return config, result

    index, extra_group = config.find_extra_group(group)
    if index is None:
        raise FilterGroupNotFoundError(f"Group '{group}' not found")

    extra = list(config.extra_groups)
    extra[index] = {
        **extra_group,
        'values': [item for item in (extra_group.get('values') or []) if item != value],
    }
    config.extra_groups = extra
    config.save(update_fields=['extra_groups', 'updated_at'])

    result = cascade_custom_value(family=family_def, group_key=group, old_value=value)
    return config, result


def redrive_cascade(
    *,
    family: str,
    group: str,
    old_value: str,
    new_value: Optional[str] = None,
) -> CascadeResult:
    """
    Re-run a rename (or removal) cascade over entities without editing the config.

    Used to converge records left behind by an interrupted cascade.
    """
    family_def = get_family(family)
    if family_def.is_fixed(group):
        return cascade_fixed_value(
            family=family_def, group_key=group, old_value=old_value, new_value=new_value
        )
    return cascade_custom_value(
        family=family_def, group_key=group, old_value=old_value, new_value=new_value
    )
