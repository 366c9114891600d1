"""Daily prep board and weekly overview built from fetched orders."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any

from .aggregator import aggregate
from .classifier import EXCLUDE_KEYWORDS, priority_label
from .models import Order, PrepList, ServiceBucket
from .normalizer import as_order, item_count
from .schedule import (
    BUCKETS,
    group_by_bucket,
    group_by_day,
    orders_for_day,
    scheduled_label,
    week_days,
)

Clock = Callable[[], datetime]


def _today(clock: Clock | None, tz: tzinfo | None) -> date:
    now = clock() if clock is not None else datetime.now(tz)
    # Aware clocks are read in the kitchen's zone, naive ones as local
    if now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date()


def format_qty(qty: int | float) -> str:
    """Render a quantity without a trailing ``.0``."""
    return f"{qty:g}" if isinstance(qty, float) else str(qty)


def _plural(n: int | float, word: str) -> str:
    return f"{format_qty(n)} {word}{'' if n == 1 else 's'}"


@dataclass
class TimelineBucket:
    """Orders and aggregated prep for one service window of the day."""

    bucket: ServiceBucket
    title: str
    hint: str
    orders: list[Order] = field(default_factory=list)
    prep: PrepList = field(default_factory=PrepList)
    tz: tzinfo | None = None

    @property
    def total_items(self) -> int | float:
        return self.prep.total_quantity

    @property
    def priority_items(self) -> int | float:
        return self.prep.priority_quantity

    def time_labels(self) -> list[str]:
        """Pickup/delivery labels of the bucket's scheduled orders."""
        labels = [scheduled_label(o, self.tz) for o in self.orders]
        return [label for label in labels if label != "Unscheduled"]


@dataclass
class PrepBoard:
    """Everything the kitchen needs to prep for one business day."""

    day: str
    orders: list[Order]
    prep: PrepList
    buckets: list[TimelineBucket]

    @classmethod
    def build(
        cls,
        orders: Iterable[Order | Mapping[str, Any]],
        day: str | date | None = None,
        clock: Clock | None = None,
        tz: tzinfo | None = None,
        exclude_keywords: Iterable[str] = EXCLUDE_KEYWORDS,
    ) -> PrepBoard:
        """Build the prep board for *day* (default: today per *clock*)."""
        if day is None:
            day = _today(clock, tz)
        day_key = day.isoformat() if isinstance(day, date) else day
        exclude_keywords = tuple(exclude_keywords)

        todays = orders_for_day(orders, day_key, tz)
        grouped = group_by_bucket(todays, tz)

        buckets = [
            TimelineBucket(
                bucket=meta.bucket,
                title=meta.title,
                hint=meta.hint,
                orders=grouped[meta.bucket],
                prep=aggregate(grouped[meta.bucket], exclude_keywords),
                tz=tz,
            )
            for meta in BUCKETS
        ]

        return cls(
            day=day_key,
            orders=todays,
            prep=aggregate(todays, exclude_keywords),
            buckets=buckets,
        )

    @property
    def total_items(self) -> int | float:
        return self.prep.total_quantity

    @property
    def priority_items(self) -> int | float:
        return self.prep.priority_quantity

    def subtitle(self) -> str:
        parts = [
            self.day,
            _plural(len(self.orders), "order"),
            _plural(self.total_items, "prep item"),
        ]
        if self.priority_items:
            parts.append(f"{format_qty(self.priority_items)} priority")
        return " • ".join(parts)

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "order_count": len(self.orders),
            "total_items": self.total_items,
            "priority_items": self.priority_items,
            "prep": self.prep.to_dict(),
            "buckets": [
                {
                    "bucket": b.bucket.value,
                    "title": b.title,
                    "order_ids": [o.id for o in b.orders],
                    "times": b.time_labels(),
                    "total_items": b.total_items,
                    "priority_items": b.priority_items,
                    "prep": b.prep.to_dict(),
                }
                for b in self.buckets
            ],
        }

    def display(self, mode: str = "timeline") -> str:
        """Format the board for terminal display.

        ``mode`` is ``"timeline"`` (per service window) or ``"all"``.
        """
        lines: list[str] = []
        lines.append(f"Prep: {self.subtitle()}")
        lines.append("")

        if mode == "all":
            lines.extend(_prep_lines(self.prep))
            return "\n".join(lines)

        for b in self.buckets:
            lines.append(f"{'─' * 50}")
            lines.append(
                f"{b.title} ({b.hint}) • {_plural(len(b.orders), 'order')}"
                f" • {_plural(b.total_items, 'item')}"
            )
            times = b.time_labels()
            if times:
                shown = ", ".join(times[:10])
                more = f" +{len(times) - 10} more" if len(times) > 10 else ""
                lines.append(f"  {shown}{more}")
            if b.orders:
                lines.append("")
                lines.extend(_prep_lines(b.prep))
            lines.append("")

        return "\n".join(lines)


def _prep_lines(prep: PrepList) -> list[str]:
    lines: list[str] = []
    if prep.priority:
        lines.append("  PRIORITY FIRST")
        for item in prep.priority:
            lines.append(
                f"    {format_qty(item.quantity):>4}  {item.name:<32} "
                f"[{priority_label(item.priority_tag)}]"
            )
    lines.append("  OTHER ITEMS")
    if not prep.others:
        lines.append("    (none)")
    for item in prep.others:
        lines.append(f"    {format_qty(item.quantity):>4}  {item.name}")
    return lines


@dataclass
class WeekDay:
    day: date
    orders: list[Order] = field(default_factory=list)

    @property
    def order_count(self) -> int:
        return len(self.orders)

    @property
    def item_count(self) -> int | float:
        return sum(item_count(o) for o in self.orders)


@dataclass
class WeekView:
    """Monday-to-Sunday overview of order volume."""

    days: list[WeekDay]

    @classmethod
    def build(
        cls,
        orders: Iterable[Order | Mapping[str, Any]],
        anchor: date | None = None,
        clock: Clock | None = None,
        tz: tzinfo | None = None,
    ) -> WeekView:
        if anchor is None:
            anchor = _today(clock, tz)
        grouped = group_by_day([as_order(o) for o in orders], tz)
        return cls(
            days=[
                WeekDay(day=d, orders=grouped.get(d.isoformat(), []))
                for d in week_days(anchor)
            ]
        )

    @property
    def start(self) -> date:
        return self.days[0].day

    @property
    def end(self) -> date:
        return self.days[-1].day

    def to_dict(self) -> dict:
        return {
            "from": self.start.isoformat(),
            "to": self.end.isoformat(),
            "days": [
                {
                    "day": d.day.isoformat(),
                    "order_count": d.order_count,
                    "item_count": d.item_count,
                    "order_ids": [o.id for o in d.orders],
                }
                for d in self.days
            ],
        }

    def display(self) -> str:
        lines = [f"Week {self.start:%b} {self.start.day} – {self.end:%b} {self.end.day}", ""]
        for d in self.days:
            lines.append(
                f"  {d.day:%a %b} {d.day.day:<3} {_plural(d.order_count, 'order'):<12} "
                f"{_plural(d.item_count, 'item')}"
            )
        return "\n".join(lines)
