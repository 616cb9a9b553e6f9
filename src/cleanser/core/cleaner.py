"""Risk-gated deletion of scanned items."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from cleanser.models.clean_result import CleanResult
from cleanser.models.item import CleanableItem, RiskLevel
from cleanser.utils import remove_path

log = logging.getLogger(__name__)

# (item, freed_bytes, error_or_None)
ItemCallback = Callable[[CleanableItem, int, str | None], None]


def filter_by_risk(items: Iterable[CleanableItem], max_risk: RiskLevel) -> list[CleanableItem]:
    """Return items at or below *max_risk*, keeping their order."""
    return [item for item in items if item.risk_level <= max_risk]


def clean_items(
    items: Iterable[CleanableItem],
    *,
    dry_run: bool = False,
    on_item: ItemCallback | None = None,
) -> CleanResult:
    """Delete every item's path and return what was reclaimed.

    Directories are removed recursively, files unlinked. The freed size is
    measured right before removal; a path that is already gone counts as
    zero bytes, not as an error. A failing item is recorded and the rest
    are still processed. With *dry_run*, nothing is touched and the
    scanned sizes are reported instead.
    """
    result = CleanResult(dry_run=dry_run)

    for item in items:
        if dry_run:
            result.freed_bytes += item.size
            result.items_removed += 1
            if on_item:
                on_item(item, item.size, None)
            continue

        try:
            freed = remove_path(item.path)
        except OSError as e:
            error = f"{item.path}: {e}"
            log.warning("Failed to remove %s", error)
            result.errors.append(error)
            if on_item:
                on_item(item, 0, str(e))
            continue

        log.debug("Removed %s (%d bytes)", item.path, freed)
        result.freed_bytes += freed
        result.items_removed += 1
        if on_item:
            on_item(item, freed, None)

    return result
