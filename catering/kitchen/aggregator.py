"""Merge prep items across orders into ranked priority/other lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .classifier import EXCLUDE_KEYWORDS, classify_item, display_rank
from .models import AggregatedItem, Order, PrepList, PriorityTag
from .normalizer import normalize_items

logger = logging.getLogger(__name__)


def _pick_tag(
    current: PriorityTag | None, candidate: PriorityTag | None
) -> PriorityTag | None:
    if candidate is None:
        return current
    if current is None or display_rank(candidate) < display_rank(current):
        return candidate
    return current


def sort_priority(items: Iterable[AggregatedItem]) -> list[AggregatedItem]:
    """Sort by display rank, then quantity descending, then name."""
    return sorted(
        items,
        key=lambda i: (display_rank(i.priority_tag), -i.quantity, i.name),
    )


def sort_others(items: Iterable[AggregatedItem]) -> list[AggregatedItem]:
    """Sort by quantity descending, then name."""
    return sorted(items, key=lambda i: (-i.quantity, i.name))


def sum_quantity(items: Iterable[AggregatedItem]) -> int | float:
    return sum(i.quantity for i in items)


def aggregate(
    orders: Iterable[Order | Mapping[str, Any]],
    exclude_keywords: Iterable[str] = EXCLUDE_KEYWORDS,
) -> PrepList:
    """Aggregate item quantities across *orders* into a ranked prep list.

    Items are merged by merge key: quantities are summed, the first-seen
    spelling is kept for display and the best-ranked tag seen wins.
    Sauces, condiments and disposables are left out.

    Args:
        orders: Orders or raw order mappings.
        exclude_keywords: Keywords that drop an item from the list.

    Returns:
        A PrepList with sorted ``priority`` and ``others`` items.
    """
    exclude_keywords = tuple(exclude_keywords)
    merged: dict[str, dict] = {}
    excluded = 0

    for order in orders:
        for item in normalize_items(order):
            classified = classify_item(item, exclude_keywords)
            if classified.excluded:
                excluded += 1
                continue

            entry = merged.get(classified.merge_key)
            if entry is None:
                merged[classified.merge_key] = {
                    "name": classified.name,
                    "quantity": classified.quantity,
                    "tag": classified.priority_tag,
                }
            else:
                entry["quantity"] += classified.quantity
                entry["tag"] = _pick_tag(entry["tag"], classified.priority_tag)

    if excluded:
        logger.debug("Left %d excluded item lines out of the prep list", excluded)

    priority: list[AggregatedItem] = []
    others: list[AggregatedItem] = []
    for key, entry in merged.items():
        item = AggregatedItem(
            name=entry["name"],
            merge_key=key,
            quantity=entry["quantity"],
            priority_tag=entry["tag"],
        )
        if item.priority_tag is not None:
            priority.append(item)
        else:
            others.append(item)

    return PrepList(priority=sort_priority(priority), others=sort_others(others))
