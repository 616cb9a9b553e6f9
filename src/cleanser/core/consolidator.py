"""Removal of nested findings so no space is counted twice."""

from __future__ import annotations

from typing import Iterable

from cleanser.models.item import CleanableItem
from cleanser.utils import is_within


def consolidate(items: Iterable[CleanableItem]) -> list[CleanableItem]:
    """Drop every item whose path is inside (or equal to) an already-kept item.

    Items are stable-sorted by path length, so a directory is always seen
    before anything below it. Containment is tested on path components:
    ``/a/bb`` is not inside ``/a/b``. Running this again on its own output
    returns the same list.
    """
    kept: list[CleanableItem] = []
    for item in sorted(items, key=lambda i: len(str(i.path))):
        if not any(is_within(item.path, k.path) for k in kept):
            kept.append(item)
    return kept
