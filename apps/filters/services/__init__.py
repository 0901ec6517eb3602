"""
Filters services - Business logic layer.

This package contains all business operations for the filters app:
- Filter config lifecycle per entity family
- Value rename/removal cascades into entity records
- Label transliteration for group keys
"""

from .filter_config import (
    ABSENT,
    get_family,
    get_config,
    get_public_config,
    replace_config,
    add_extra_group,
    remove_group,
    update_group_meta,
    replace_value,
    remove_value,
    redrive_cascade,
)
from .value_cascade import CascadeResult
from .transliteration import slug_from_label

# Domain Exceptions
from .exceptions import (
    FiltersServiceError,
    FilterValidationError,
    GroupKeyConflictError,
    FilterFamilyNotFoundError,
    FilterGroupNotFoundError,
    FilterValueNotFoundError,
)

__all__ = [
    'ABSENT',
    'get_family',
    'get_config',
    'get_public_config',
    'replace_config',
    'add_extra_group',
    'remove_group',
    'update_group_meta',
    'replace_value',
    'remove_value',
    'redrive_cascade',
    'CascadeResult',
    'slug_from_label',
    # Exceptions
    'FiltersServiceError',
    'FilterValidationError',
    'GroupKeyConflictError',
    'FilterFamilyNotFoundError',
    'FilterGroupNotFoundError',
    'FilterValueNotFoundError',
]
