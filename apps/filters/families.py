"""
Registry of filter families.

A family binds a FilterConfig to the entity model it filters and describes,
for each fixed group, the default values and the entity field that stores
them. Fixed groups without a field only live in the config.
"""

from dataclasses import dataclass, field
from typing import Optional

from django.apps import apps


@dataclass(frozen=True)
class FixedGroup:
    key: str
    defaults: tuple[str, ...]
    field: Optional[str] = None
    # Scalar fields hold a single value instead of a list
    scalar: bool = False


@dataclass(frozen=True)
class FilterFamily:
    name: str
    entity_model: str
    groups: tuple[FixedGroup, ...] = field(default_factory=tuple)
    custom_filters_field: str = 'custom_filters'

    @property
    def fixed_keys(self) -> list[str]:
        return [group.key for group in self.groups]

    def get_group(self, key: str) -> Optional[FixedGroup]:
        for group in self.groups:
            if group.key == key:
                return group
        return None

    def is_fixed(self, key: str) -> bool:
        return self.get_group(key) is not None

    def default_fixed_groups(self) -> dict[str, list[str]]:
        return {group.key: list(group.defaults) for group in self.groups}

    def get_entity_model(self):
        return apps.get_model(self.entity_model)


PLACES = FilterFamily(
    name='places',
    entity_model='catalog.Place',
    groups=(
        FixedGroup('directions', ('Архыз', 'Домбай', 'Джылы-Суу', 'Медовые водопады'), 'directions'),
        FixedGroup('seasons', ('зима', 'весна', 'лето', 'осень'), 'seasons'),
        FixedGroup(
            'object_types',
            ('заповедник', 'горы', 'озера/реки', 'ледники', 'водопады', 'ущелья', 'пещеры'),
            'object_types',
        ),
        FixedGroup('accessibility', ('только пешком', 'на машине'), 'accessibility'),
    ),
)

ROUTES = FilterFamily(
    name='routes',
    entity_model='catalog.Route',
    groups=(
        FixedGroup('seasons', ('Зима', 'Весна', 'Лето', 'Осень'), 'season', scalar=True),
        FixedGroup('transport', ('Пешком', 'Верхом', 'Автомобиль', 'Квадроцикл'), 'transport', scalar=True),
        FixedGroup('duration_options', ('Полдня', '1 день', '2 дня', '3ч 30м', '5 дней')),
        FixedGroup('difficulty_levels', ('1', '2', '3', '4', '5')),
        FixedGroup('distance_options', ('до 10 км', '10–50 км', '50–100 км', '100+ км')),
        FixedGroup('elevation_options', ('до 500 м', '500–1000 м', '1000+ м')),
        FixedGroup('is_family_options', ('Да',)),
        FixedGroup('has_overnight_options', ('Да',)),
    ),
)

FAMILIES = {family.name: family for family in (PLACES, ROUTES)}
