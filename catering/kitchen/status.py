"""Order status families and board filters."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from .models import Order
from .normalizer import as_order
from .schedule import parse_timestamp

PENDING_LIKE = frozenset({"PENDING_REVIEW", "RECEIVED", "ACCEPTED", "PENDING"})
IN_PROGRESS_LIKE = frozenset({"IN_PROGRESS", "READY"})
COMPLETED_LIKE = frozenset({"COMPLETED", "CANCELED"})

FILTERS = ("ACTIVE", "PENDING", "IN_PROGRESS", "COMPLETED", "ALL")

# Pending orders this close to pickup should be started
AUTO_PROGRESS_WINDOW = timedelta(minutes=15)


def normalize_status(status: Any) -> str:
    return str(status or "").upper()


def is_pending_like(status: Any) -> bool:
    return normalize_status(status) in PENDING_LIKE


def is_in_progress_like(status: Any) -> bool:
    return normalize_status(status) in IN_PROGRESS_LIKE


def is_completed_like(status: Any) -> bool:
    return normalize_status(status) in COMPLETED_LIKE


def matches_filter(order: Order | Mapping[str, Any], view: str) -> bool:
    """Check whether an order belongs on a board filtered by *view*.

    Unknown filters show everything.
    """
    status = as_order(order).status
    match view:
        case "ALL":
            return True
        case "ACTIVE":
            return is_pending_like(status) or is_in_progress_like(status)
        case "PENDING":
            return is_pending_like(status)
        case "IN_PROGRESS":
            return is_in_progress_like(status)
        case "COMPLETED":
            return is_completed_like(status)
        case _:
            return True


def filter_label(view: str) -> str:
    if view == "ACTIVE":
        return "Active"
    if view == "ALL":
        return "All"
    return view.replace("_", " ", 1)


def human_status(status: Any) -> str:
    """Turn ``IN_PROGRESS`` into ``In progress``."""
    s = normalize_status(status)
    if not s:
        return "Unknown"
    return s.replace("_", " ").lower().capitalize()


def should_auto_progress(order: Order | Mapping[str, Any], now: datetime) -> bool:
    """Check if a pending order is due for pickup within 15 minutes of *now*.

    Overdue pending orders qualify too. *now* must be timezone-aware or
    in the same local time as the order's timestamps.
    """
    order = as_order(order)
    raw = order.pickup_time or order.pickup_at or order.scheduled_for
    if not raw:
        return False
    pickup = parse_timestamp(raw, now.tzinfo)
    if pickup is None:
        return False
    if not is_pending_like(order.status):
        return False
    if now.tzinfo is None:
        now = now.astimezone()
    return pickup - now <= AUTO_PROGRESS_WINDOW
