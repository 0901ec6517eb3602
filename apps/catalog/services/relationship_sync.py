"""
Mirrored reference lists between records without foreign keys.

Two relationships are kept in step here:

- ``Place.nearby_place_ids`` is symmetric: if A lists B, B lists A.
- ``Route.guide_ids`` is mirrored by ``Service.route_ids`` on guide services.

The owning side's list is written by the triggering update. This module
only touches the other side, and only by the add/remove delta between the
old and new lists, never by overwriting the mirror list. Each mirror write
is independent: a failure is logged and collected, and the remaining ids
are still processed.

Storage is reached through a ``ReferenceStore`` so the algorithm can run
against the ORM or against an in-memory fake.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Protocol

from django.core.exceptions import ValidationError

from ..models import Place, Service, GUIDE_CATEGORIES

logger = logging.getLogger(__name__)


@dataclass
class MirrorRecord:
    """The other side of a relationship: its id, reference list and attributes."""

    id: str
    refs: list[str]
    attrs: dict[str, Any] = field(default_factory=dict)


class ReferenceStore(Protocol):
    def load(self, ref_id: str) -> Optional[MirrorRecord]:
        ...

    def save(self, record: MirrorRecord) -> None:
        ...


class ModelReferenceStore:
    """
    ReferenceStore over a Django model with a JSON list field.

    ``attrs`` names extra model fields loaded for predicates (e.g. category).
    Saves are a single-row UPDATE of the list field only.
    """

    def __init__(self, model, field_name: str, attrs: Iterable[str] = ()):
        self.model = model
        self.field_name = field_name
        self.attrs = tuple(attrs)

    def load(self, ref_id: str) -> Optional[MirrorRecord]:
        try:
            row = (
                self.model.objects
                .filter(pk=ref_id)
                .values('pk', self.field_name, *self.attrs)
                .first()
            )
        except (ValueError, TypeError, ValidationError):
            # Malformed id: treated like a missing record
            return None
        if row is None:
            return None
        return MirrorRecord(
            id=str(row['pk']),
            refs=[str(ref) for ref in (row[self.field_name] or [])],
            attrs={name: row[name] for name in self.attrs},
        )

    def save(self, record: MirrorRecord) -> None:
        self.model.objects.filter(pk=record.id).update(**{self.field_name: record.refs})


@dataclass
class SyncResult:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def as_dict(self):
        return {
            'added': self.added,
            'removed': self.removed,
            'skipped': self.skipped,
            'failed': self.failed,
        }


def normalize_ids(refs) -> list[str]:
    """String ids, blanks dropped, duplicates collapsed, first-seen order kept."""
    seen = []
    for ref in refs or []:
        if ref is None:
            continue
        ref = str(ref).strip()
        if ref and ref not in seen:
            seen.append(ref)
    return seen


def compute_reference_delta(owner_id, new_refs, old_refs) -> tuple[list[str], list[str]]:
    """
    Compute which references were added and removed.

    Self-references are ignored: a record is never its own mirror.

    Args:
        owner_id: Id of the record whose list changed
        new_refs: The list after the change
        old_refs: The list before the change

    Returns:
        Tuple (added, removed), each in first-appearance order
    """
    owner = str(owner_id)
    new = [ref for ref in normalize_ids(new_refs) if ref != owner]
    old = [ref for ref in normalize_ids(old_refs) if ref != owner]
    added = [ref for ref in new if ref not in old]
    removed = [ref for ref in old if ref not in new]
    return added, removed


def _apply(
    *,
    owner_id: str,
    added: list[str],
    removed: list[str],
    store: ReferenceStore,
    predicate: Optional[Callable[[MirrorRecord], bool]],
) -> SyncResult:
    result = SyncResult()

    for ref_id, attach in [(ref, True) for ref in added] + [(ref, False) for ref in removed]:
        try:
            record = store.load(ref_id)
            if record is None or (predicate is not None and not predicate(record)):
                # Dangling or non-participating ids are tolerated
                result.skipped.append(ref_id)
                continue

            if attach and owner_id not in record.refs:
                record.refs = record.refs + [owner_id]
                store.save(record)
            elif not attach and owner_id in record.refs:
                record.refs = [ref for ref in record.refs if ref != owner_id]
                store.save(record)

            (result.added if attach else result.removed).append(ref_id)
        except Exception:
            logger.exception(
                "Failed to %s %s on mirror %s",
                'attach' if attach else 'detach', owner_id, ref_id,
            )
            result.failed.append(ref_id)

    return result


def sync_symmetric(*, owner_id, new_refs, old_refs, store: ReferenceStore) -> SyncResult:
    """
    Mirror a symmetric reference list (nearby places).

    For every id added to the owner's list the owner is appended to that
    record's list; for every id removed the owner is dropped from it. On
    owner deletion call with ``new_refs=[]`` to detach all mirrors.
    """
    owner = str(owner_id)
    added, removed = compute_reference_delta(owner, new_refs, old_refs)
    result = _apply(owner_id=owner, added=added, removed=removed, store=store, predicate=None)
    if added or removed:
        logger.info("Synced mirrors of %s: %s", owner, result.as_dict())
    return result


def sync_asymmetric(
    *,
    owner_id,
    new_refs,
    old_refs,
    store: ReferenceStore,
    predicate: Callable[[MirrorRecord], bool],
) -> SyncResult:
    """
    Mirror a reference list into a different collection (route -> guide).

    Same delta algorithm as ``sync_symmetric``; records rejected by
    ``predicate`` are skipped without error.
    """
    owner = str(owner_id)
    added, removed = compute_reference_delta(owner, new_refs, old_refs)
    result = _apply(owner_id=owner, added=added, removed=removed, store=store, predicate=predicate)
    if added or removed:
        logger.info("Synced mirrors of %s: %s", owner, result.as_dict())
    return result


# Wiring for the catalog models

def nearby_places_store() -> ModelReferenceStore:
    return ModelReferenceStore(Place, 'nearby_place_ids')


def guide_routes_store() -> ModelReferenceStore:
    return ModelReferenceStore(Service, 'route_ids', attrs=('category',))


def is_guide_record(record: MirrorRecord) -> bool:
    return record.attrs.get('category') in GUIDE_CATEGORIES


def sync_nearby_places(*, place_id, new_refs, old_refs) -> SyncResult:
    return sync_symmetric(
        owner_id=place_id,
        new_refs=new_refs,
        old_refs=old_refs,
        store=nearby_places_store(),
    )


def sync_route_guides(*, route_id, new_refs, old_refs) -> SyncResult:
    return sync_asymmetric(
        owner_id=route_id,
        new_refs=new_refs,
        old_refs=old_refs,
        store=guide_routes_store(),
        predicate=is_guide_record,
    )
