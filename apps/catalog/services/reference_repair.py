"""
Re-apply mirrored reference lists after partial sync failures.

The owning side is taken as the source of truth: every reference it holds
gets its reciprocal entry added when missing. Nothing is ever removed;
references to records that no longer exist are only reported.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models import Place, Route
from .relationship_sync import (
    ReferenceStore,
    MirrorRecord,
    normalize_ids,
    nearby_places_store,
    guide_routes_store,
    is_guide_record,
)

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    # (mirror id, owner id) pairs that were (or would be) added
    fixed: list = field(default_factory=list)
    # (owner id, missing id) pairs
    dangling: list = field(default_factory=list)
    # (owner id, id rejected by the predicate) pairs
    skipped: list = field(default_factory=list)


def _repair(
    owners,
    *,
    store: ReferenceStore,
    predicate: Optional[Callable[[MirrorRecord], bool]],
    dry_run: bool,
) -> RepairReport:
    report = RepairReport()

    for owner_pk, refs in owners:
        owner = str(owner_pk)
        for ref in normalize_ids(refs):
            if ref == owner:
                continue
            record = store.load(ref)
            if record is None:
                report.dangling.append((owner, ref))
                continue
            if predicate is not None and not predicate(record):
                report.skipped.append((owner, ref))
                continue
            if owner in record.refs:
                continue

            report.fixed.append((ref, owner))
            if not dry_run:
                record.refs = record.refs + [owner]
                store.save(record)

    return report


def repair_nearby_places(*, dry_run: bool = False) -> RepairReport:
    """Make every place's nearby list reciprocal."""
    report = _repair(
        list(Place.objects.values_list('pk', 'nearby_place_ids')),
        store=nearby_places_store(),
        predicate=None,
        dry_run=dry_run,
    )
    logger.info(
        "Nearby places repair%s: %d fixed, %d dangling",
        ' (dry run)' if dry_run else '', len(report.fixed), len(report.dangling),
    )
    return report


def repair_route_guides(*, dry_run: bool = False) -> RepairReport:
    """Make every guide listed on a route carry that route in ``route_ids``."""
    report = _repair(
        list(Route.objects.values_list('pk', 'guide_ids')),
        store=guide_routes_store(),
        predicate=is_guide_record,
        dry_run=dry_run,
    )
    logger.info(
        "Route guides repair%s: %d fixed, %d dangling, %d not guides",
        ' (dry run)' if dry_run else '',
        len(report.fixed), len(report.dangling), len(report.skipped),
    )
    return report
