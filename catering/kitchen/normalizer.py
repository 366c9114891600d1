"""Boundary coercion and item normalization for raw orders."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from .models import LineItem, NormalizedItem, Order

logger = logging.getLogger(__name__)

UNNAMED_ITEM = "Unnamed Item"

_WHITESPACE = re.compile(r"\s+")


def as_order(obj: Order | Mapping[str, Any]) -> Order:
    """Return *obj* as an Order, coercing raw API mappings."""
    if isinstance(obj, Order):
        return obj
    if isinstance(obj, Mapping):
        return Order.from_dict(obj)
    logger.debug("Ignoring non-mapping order record: %r", type(obj).__name__)
    return Order()


def merge_key(name: Any) -> str:
    """Lowercase *name* and collapse whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", str(name or "").lower()).strip()


def _coerce_quantity(value: Any) -> int | float:
    """Coerce a raw quantity to a number, defaulting to 1.

    Zero and negative values pass through unchanged.
    """
    if value is None:
        return 1
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    return int(number) if number.is_integer() else number


def normalize_item(item: LineItem) -> NormalizedItem | None:
    """Normalize one line item; blank names yield None."""
    name = str(item.name or UNNAMED_ITEM).strip()
    if not name:
        return None
    return NormalizedItem(
        name=name,
        merge_key=merge_key(name),
        quantity=_coerce_quantity(item.quantity),
    )


def normalize_items(order: Order | Mapping[str, Any]) -> list[NormalizedItem]:
    """Flatten an order's line items into canonical (name, quantity) items."""
    order = as_order(order)
    result: list[NormalizedItem] = []
    for item in order.items:
        normalized = normalize_item(item)
        if normalized is None:
            logger.debug("Dropping blank item name in order %r", order.id)
            continue
        result.append(normalized)
    return result


def item_count(order: Order | Mapping[str, Any]) -> int | float:
    """Total quantity of every item on an order, sauces included."""
    return sum(i.quantity for i in normalize_items(order))
