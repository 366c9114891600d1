"""Data models for catering orders and kitchen prep items."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Raw scheduling values arrive as ISO strings or epoch milliseconds
RawTimestamp = str | int | float | None

_NAME_FIELDS = ("name", "title", "itemName", "productName")
_QUANTITY_FIELDS = ("qty", "quantity", "count")
_CUSTOMER_FIELDS = (
    "customerName", "customer", "name", "contactName", "companyName",
)


class PriorityTag(str, enum.Enum):
    """Kitchen-first item categories, declared in display-rank order."""

    SANDWICH = "SANDWICH"
    HOT_NUGGET_TRAY = "HOT_NUGGET_TRAY"
    HOT_STRIP_TRAY = "HOT_STRIP_TRAY"
    COLD_NUGGET_TRAY = "COLD_NUGGET_TRAY"
    MAC_TRAY = "MAC_TRAY"
    SALAD_TRAY = "SALAD_TRAY"
    WRAP_TRAY = "WRAP_TRAY"
    TRAY = "TRAY"
    GRILLED_BUNDLE = "GRILLED_BUNDLE"


class ServiceBucket(str, enum.Enum):
    MORNING = "MORNING"
    LUNCH = "LUNCH"
    AFTERNOON = "AFTERNOON"
    DINNER = "DINNER"
    UNSCHEDULED = "UNSCHEDULED"


def _first_truthy(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _first_defined(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


@dataclass
class LineItem:
    """A single line of an order as sent by the orders API."""

    name: Any = None
    quantity: Any = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> LineItem:
        return cls(
            name=_first_truthy(raw, _NAME_FIELDS),
            quantity=_first_defined(raw, _QUANTITY_FIELDS),
        )


@dataclass
class Order:
    """A catering order coerced from the API's loose JSON shape.

    Date-bearing fields are kept raw; the scheduling helpers decide how
    to read them.
    """

    id: str = ""
    status: str = ""
    event_date: RawTimestamp = None
    pickup_time: RawTimestamp = None
    pickup_at: RawTimestamp = None
    scheduled_for: RawTimestamp = None
    ready_at: RawTimestamp = None
    created_at: RawTimestamp = None
    items: list[LineItem] = field(default_factory=list)
    customer_name: str = "Unnamed"
    service_type: str = ""
    subject: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Order:
        raw_items = raw.get("items")
        if not isinstance(raw_items, list):
            raw_items = raw.get("lineItems")
        if not isinstance(raw_items, list):
            raw_items = []

        return cls(
            id=str(raw.get("id") or ""),
            status=str(raw.get("status") or ""),
            event_date=raw.get("eventDate"),
            pickup_time=raw.get("pickupTime"),
            pickup_at=raw.get("pickupAt"),
            scheduled_for=raw.get("scheduledFor"),
            ready_at=raw.get("readyAt"),
            created_at=raw.get("createdAt"),
            items=[
                LineItem.from_dict(it)
                for it in raw_items
                if isinstance(it, Mapping)
            ],
            customer_name=str(_first_truthy(raw, _CUSTOMER_FIELDS) or "Unnamed"),
            service_type=str(
                raw.get("serviceType") or raw.get("fulfillmentType") or ""
            ),
            subject=str(raw.get("subject") or ""),
        )


@dataclass
class NormalizedItem:
    name: str  # first-seen casing, trimmed
    merge_key: str  # lowercased, whitespace-collapsed
    quantity: int | float = 1


@dataclass
class ClassifiedItem(NormalizedItem):
    excluded: bool = False
    priority_tag: PriorityTag | None = None


@dataclass(frozen=True)
class AggregatedItem:
    """Total quantity of one prep item across a set of orders."""

    name: str
    merge_key: str
    quantity: int | float
    priority_tag: PriorityTag | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "tag": self.priority_tag.value if self.priority_tag else None,
        }


@dataclass
class PrepList:
    """Aggregated prep items split into priority and other items."""

    priority: list[AggregatedItem] = field(default_factory=list)
    others: list[AggregatedItem] = field(default_factory=list)

    @property
    def total_quantity(self) -> int | float:
        return sum(i.quantity for i in self.priority) + sum(
            i.quantity for i in self.others
        )

    @property
    def priority_quantity(self) -> int | float:
        return sum(i.quantity for i in self.priority)

    def to_dict(self) -> dict:
        return {
            "priority": [i.to_dict() for i in self.priority],
            "others": [i.to_dict() for i in self.others],
        }
