"""Sanitizers for filter payloads coming from the admin panel."""

import re
from typing import Optional

from .exceptions import FilterValidationError
from .transliteration import slug_from_label

ICON_TYPES = ('upload', 'library')

_WHITESPACE = re.compile(r'\s+')


def clean_values(values) -> list[str]:
    """Keep only non-blank strings, trimmed, in their original order."""
    if not isinstance(values, (list, tuple)):
        return []
    return [value.strip() for value in values if isinstance(value, str) and value.strip()]


def normalize_key(raw) -> str:
    """Trim and replace internal whitespace with underscores."""
    return _WHITESPACE.sub('_', str(raw or '').strip())


def clean_text(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def infer_icon_type(icon: Optional[str], icon_type=None) -> Optional[str]:
    """Explicit icon type wins; otherwise URLs and paths are uploads."""
    if icon_type in ICON_TYPES:
        return icon_type
    if not icon:
        return None
    return 'upload' if icon.startswith(('http', '/')) else 'library'


def normalize_extra_group(raw: dict) -> Optional[dict]:
    """
    Normalize one extra group, or return None when it has neither key nor label.
    """
    if not isinstance(raw, dict):
        return None

    label = clean_text(raw.get('label'))
    key = normalize_key(raw.get('key'))
    if not key:
        if not label:
            return None
        key = slug_from_label(label)

    icon = clean_text(raw.get('icon'))
    return {
        'key': key,
        'label': label or key,
        'icon': icon,
        'icon_type': infer_icon_type(icon, raw.get('icon_type')),
        'values': clean_values(raw.get('values')),
    }


def normalize_extra_groups(raw_groups, fixed_keys) -> list[dict]:
    """
    Normalize a full list of extra groups.

    Raises:
        FilterValidationError: If a key collides with a fixed group key or
            appears twice
    """
    if not isinstance(raw_groups, (list, tuple)):
        return []

    groups = []
    seen = set()
    for raw in raw_groups:
        group = normalize_extra_group(raw)
        if group is None:
            continue
        if group['key'] in fixed_keys:
            raise FilterValidationError(
                f"Extra group key '{group['key']}' collides with a fixed group"
            )
        if group['key'] in seen:
            raise FilterValidationError(f"Duplicate extra group key '{group['key']}'")
        seen.add(group['key'])
        groups.append(group)
    return groups


def normalize_fixed_group_meta(raw_meta, fixed_keys) -> dict:
    """Keep display overrides for known fixed keys only."""
    if not isinstance(raw_meta, dict):
        return {}

    meta = {}
    for key in fixed_keys:
        entry = raw_meta.get(key)
        if not isinstance(entry, dict):
            continue
        icon = clean_text(entry.get('icon'))
        meta[key] = {
            'label': clean_text(entry.get('label')),
            'icon': icon,
            'icon_type': infer_icon_type(icon, entry.get('icon_type')),
        }
    return meta
