"""Business-day and service-window partitioning of orders.

Orders carry up to six date-bearing fields from different API versions.
Each helper here reads them in its own priority order and resolves them in
local time (or the given ``tz``) so that evening pickups are not attributed
to the next UTC day.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any

from .models import Order, RawTimestamp, ServiceBucket
from .normalizer import as_order

logger = logging.getLogger(__name__)

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")

# Field priority orders
_DAY_KEY_FIELDS = (
    "event_date", "pickup_time", "pickup_at", "scheduled_for", "ready_at",
    "created_at",
)
_SORT_TIME_FIELDS = (
    "pickup_time", "pickup_at", "scheduled_for", "ready_at", "created_at",
    "event_date",
)
_SCHEDULED_FIELDS = (
    "pickup_time", "pickup_at", "scheduled_for", "ready_at", "event_date",
)

# Date-only values are read at local noon so DST shifts keep the same day
_DATE_ONLY_HOUR = time(12, 0, 0)


@dataclass(frozen=True)
class BucketMeta:
    bucket: ServiceBucket
    title: str
    hint: str


BUCKETS: tuple[BucketMeta, ...] = (
    BucketMeta(ServiceBucket.MORNING, "Morning", "5am–11am"),
    BucketMeta(ServiceBucket.LUNCH, "Lunch", "11am–2pm"),
    BucketMeta(ServiceBucket.AFTERNOON, "Afternoon", "2pm–5pm"),
    BucketMeta(ServiceBucket.DINNER, "Dinner", "5pm+"),
    BucketMeta(ServiceBucket.UNSCHEDULED, "Unscheduled", "No time"),
)


def _localize(dt: datetime, tz: tzinfo | None) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz) if tz is not None else dt.astimezone()
    return dt.astimezone(tz)


def parse_timestamp(
    raw: RawTimestamp | date, tz: tzinfo | None = None
) -> datetime | None:
    """Parse a raw scheduling value into an aware local datetime.

    Accepts ISO 8601 strings (a trailing ``Z`` included), epoch
    milliseconds and date/datetime objects. Naive values are taken as
    local time. Returns None if the value can't be parsed.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime.combine(raw, _DATE_ONLY_HOUR)
    elif isinstance(raw, (int, float)):
        try:
            parsed = datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        s = str(raw).strip()
        if not s:
            return None
        try:
            if _DATE_ONLY.match(s):
                parsed = datetime.combine(date.fromisoformat(s), _DATE_ONLY_HOUR)
            else:
                if s[-1] in "Zz":
                    s = s[:-1] + "+00:00"
                parsed = datetime.fromisoformat(s)
        except ValueError:
            logger.debug("Unparseable timestamp: %r", raw)
            return None

    # Offsets near year 1 or 9999 can push the local time out of range
    try:
        return _localize(parsed, tz)
    except (OverflowError, OSError, ValueError):
        logger.debug("Timestamp out of range: %r", raw)
        return None


def _first_present(order: Order, fields: tuple[str, ...]) -> RawTimestamp:
    for name in fields:
        value = getattr(order, name)
        if value:
            return value
    return None


def day_key_of(
    order: Order | Mapping[str, Any], tz: tzinfo | None = None
) -> str | None:
    """Return the business day (``YYYY-MM-DD``) an order belongs to.

    Values that already start with a ``YYYY-MM-DD`` date use that prefix
    verbatim; anything else is parsed and converted to a local date.
    """
    raw = _first_present(as_order(order), _DAY_KEY_FIELDS)
    if raw is None:
        return None

    if isinstance(raw, str):
        m = _DATE_PREFIX.match(raw.strip())
        if m:
            return m.group(1)

    dt = parse_timestamp(raw, tz)
    return dt.date().isoformat() if dt is not None else None


def sort_time_of(
    order: Order | Mapping[str, Any], tz: tzinfo | None = None
) -> float:
    """Return the order's sort timestamp in epoch seconds.

    Orders without a usable time return 0 and sort first.
    """
    raw = _first_present(as_order(order), _SORT_TIME_FIELDS)
    dt = parse_timestamp(raw, tz)
    return dt.timestamp() if dt is not None else 0


def scheduled_at(
    order: Order | Mapping[str, Any], tz: tzinfo | None = None
) -> datetime | None:
    """Return the pickup/delivery time an order is scheduled for, if any."""
    raw = _first_present(as_order(order), _SCHEDULED_FIELDS)
    return parse_timestamp(raw, tz)


def bucket_for_hour(hour: int) -> ServiceBucket:
    if 5 <= hour < 11:
        return ServiceBucket.MORNING
    if 11 <= hour < 14:
        return ServiceBucket.LUNCH
    if 14 <= hour < 17:
        return ServiceBucket.AFTERNOON
    # 5pm through 5am, late night included
    return ServiceBucket.DINNER


def bucket_of(
    order: Order | Mapping[str, Any], tz: tzinfo | None = None
) -> ServiceBucket:
    """Assign an order to a service window by its scheduled local hour."""
    dt = scheduled_at(order, tz)
    if dt is None:
        return ServiceBucket.UNSCHEDULED
    return bucket_for_hour(dt.hour)


def orders_for_day(
    orders: Iterable[Order | Mapping[str, Any]],
    day: str | date,
    tz: tzinfo | None = None,
) -> list[Order]:
    """Select the orders whose business day is *day*."""
    key = day.isoformat() if isinstance(day, date) else day
    result: list[Order] = []
    for raw in orders:
        order = as_order(raw)
        if day_key_of(order, tz) == key:
            result.append(order)
    return result


def group_by_bucket(
    orders: Iterable[Order | Mapping[str, Any]], tz: tzinfo | None = None
) -> dict[ServiceBucket, list[Order]]:
    """Group orders by service bucket, each sorted by sort time.

    Every bucket is present in the result, in service order.
    """
    groups: dict[ServiceBucket, list[Order]] = {m.bucket: [] for m in BUCKETS}
    for raw in orders:
        order = as_order(raw)
        groups[bucket_of(order, tz)].append(order)
    for bucket, members in groups.items():
        groups[bucket] = sorted(members, key=lambda o: sort_time_of(o, tz))
    return groups


def group_by_day(
    orders: Iterable[Order | Mapping[str, Any]], tz: tzinfo | None = None
) -> dict[str, list[Order]]:
    """Group orders by business day, each day sorted by sort time.

    Orders with no resolvable day are left out.
    """
    groups: dict[str, list[Order]] = {}
    for raw in orders:
        order = as_order(raw)
        key = day_key_of(order, tz)
        if key is None:
            logger.debug("Order %r has no usable date; skipping", order.id)
            continue
        groups.setdefault(key, []).append(order)
    return {
        key: sorted(members, key=lambda o: sort_time_of(o, tz))
        for key, members in sorted(groups.items())
    }


def week_days(anchor: date) -> list[date]:
    """Return the Monday-to-Sunday week containing *anchor*."""
    start = anchor - timedelta(days=anchor.weekday())
    return [start + timedelta(days=i) for i in range(7)]


def service_type(order: Order | Mapping[str, Any]) -> str:
    """Return "Delivery" or "Pickup" for an order."""
    order = as_order(order)
    kind = order.service_type.lower()
    if "deliver" in kind:
        return "Delivery"
    if "pickup" in kind:
        return "Pickup"
    if "deliver" in order.subject.lower():
        return "Delivery"
    return "Pickup"


def format_clock(dt: datetime) -> str:
    """Format a time as ``4:30 PM``."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def scheduled_label(
    order: Order | Mapping[str, Any], tz: tzinfo | None = None
) -> str:
    dt = scheduled_at(order, tz)
    if dt is None:
        return "Unscheduled"
    return f"{service_type(order)} · {format_clock(dt)}"
