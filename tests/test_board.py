"""Tests for the daily prep board and week view."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from catering.kitchen.board import PrepBoard, WeekView, format_qty
from catering.kitchen.models import PriorityTag, ServiceBucket


@pytest.fixture
def orders():
    return [
        {
            "id": "1",
            "status": "RECEIVED",
            "pickupTime": "2026-01-13T11:30:00",
            "serviceType": "pickup",
            "items": [
                {"name": "Chick-fil-A Sandwich", "qty": 10},
                {"name": "Polynesian Sauce", "qty": 10},
                {"name": "Chocolate Chunk Cookie", "qty": 12},
            ],
        },
        {
            "id": "2",
            "status": "ACCEPTED",
            "pickupTime": "2026-01-13T11:00:00",
            "serviceType": "delivery",
            "items": [
                {"name": "Hot Nugget Tray", "qty": 1},
                {"name": "chick-fil-a sandwich", "qty": 5},
            ],
        },
        {
            "id": "3",
            "eventDate": "2026-01-13",
            "scheduledFor": "2026-01-13T18:15:00",
            "lineItems": [{"title": "Fruit Tray", "quantity": 2}],
        },
        {
            "id": "4",
            "createdAt": "2026-01-13T07:00:00",
            "items": [{"name": "Gallon Lemonade", "qty": 2}],
        },
        {
            "id": "5",
            "pickupTime": "2026-01-14T12:00:00",
            "items": [{"name": "Cool Wrap Tray", "qty": 3}],
        },
        {"id": "6", "items": [{"name": "Mystery", "qty": 1}]},
    ]


def _clock():
    return datetime(2026, 1, 13, 9, 0)


class TestPrepBoard:
    def test_selects_todays_orders(self, orders):
        board = PrepBoard.build(orders, clock=_clock)
        assert board.day == "2026-01-13"
        assert [o.id for o in board.orders] == ["1", "2", "3", "4"]

    def test_aware_clock_read_in_kitchen_zone(self, orders):
        # 02:00 UTC on the 14th is still the evening of the 13th in Chicago
        def utc_clock():
            return datetime(2026, 1, 14, 2, 0, tzinfo=timezone.utc)

        board = PrepBoard.build(
            orders, clock=utc_clock, tz=ZoneInfo("America/Chicago")
        )
        assert board.day == "2026-01-13"
        assert [o.id for o in board.orders] == ["1", "2", "3", "4"]

        utc_board = PrepBoard.build(orders, clock=utc_clock, tz=timezone.utc)
        assert utc_board.day == "2026-01-14"

    def test_explicit_day(self, orders):
        board = PrepBoard.build(orders, day=date(2026, 1, 14))
        assert [o.id for o in board.orders] == ["5"]
        assert board.prep.priority[0].priority_tag is PriorityTag.WRAP_TRAY

    def test_daily_prep(self, orders):
        board = PrepBoard.build(orders, clock=_clock)
        assert [(i.name, i.quantity) for i in board.prep.priority] == [
            ("Chick-fil-A Sandwich", 15),
            ("Hot Nugget Tray", 1),
            ("Fruit Tray", 2),
        ]
        assert [(i.name, i.quantity) for i in board.prep.others] == [
            ("Chocolate Chunk Cookie", 12),
            ("Gallon Lemonade", 2),
        ]
        assert board.total_items == 32
        assert board.priority_items == 18

    def test_buckets(self, orders):
        board = PrepBoard.build(orders, clock=_clock)
        assert [b.bucket for b in board.buckets] == list(ServiceBucket)

        by_bucket = {b.bucket: b for b in board.buckets}
        lunch = by_bucket[ServiceBucket.LUNCH]
        assert [o.id for o in lunch.orders] == ["2", "1"]
        assert lunch.total_items == 28
        assert lunch.priority_items == 16
        assert lunch.time_labels() == ["Delivery · 11:00 AM", "Pickup · 11:30 AM"]

        assert [o.id for o in by_bucket[ServiceBucket.DINNER].orders] == ["3"]
        assert [o.id for o in by_bucket[ServiceBucket.UNSCHEDULED].orders] == ["4"]
        assert by_bucket[ServiceBucket.MORNING].orders == []
        assert by_bucket[ServiceBucket.UNSCHEDULED].time_labels() == []

    def test_extra_exclusions(self, orders):
        board = PrepBoard.build(
            orders, clock=_clock, exclude_keywords=("sauce", "lemonade")
        )
        assert [i.name for i in board.prep.others] == ["Chocolate Chunk Cookie"]

    def test_subtitle(self, orders):
        board = PrepBoard.build(orders, clock=_clock)
        assert board.subtitle() == "2026-01-13 • 4 orders • 32 prep items • 18 priority"

    def test_empty_day(self, orders):
        board = PrepBoard.build(orders, day="2026-02-01")
        assert board.orders == []
        assert board.subtitle() == "2026-02-01 • 0 orders • 0 prep items"
        assert all(b.orders == [] for b in board.buckets)

    def test_display_timeline(self, orders):
        text = PrepBoard.build(orders, clock=_clock).display()
        assert "Lunch (11am–2pm)" in text
        # Order 2 is picked up first, so its spelling names the lunch item
        assert "  15  chick-fil-a sandwich" in text
        assert "Chick-fil-A Sandwich" not in text
        assert "Polynesian Sauce" not in text
        assert "PRIORITY FIRST" in text

    def test_display_all(self, orders):
        text = PrepBoard.build(orders, clock=_clock).display("all")
        assert "Lunch" not in text
        assert "[Hot Nugget Tray]" in text
        assert "Gallon Lemonade" in text

    def test_to_dict(self, orders):
        data = PrepBoard.build(orders, clock=_clock).to_dict()
        assert data["order_count"] == 4
        assert data["prep"]["priority"][0] == {
            "name": "Chick-fil-A Sandwich",
            "quantity": 15,
            "tag": "SANDWICH",
        }
        assert [b["bucket"] for b in data["buckets"]][0] == "MORNING"


class TestWeekView:
    def test_week(self, orders):
        view = WeekView.build(orders, anchor=date(2026, 1, 15))
        assert view.start == date(2026, 1, 12)
        assert view.end == date(2026, 1, 18)

        counts = {d.day.isoformat(): d.order_count for d in view.days}
        assert counts["2026-01-13"] == 4
        assert counts["2026-01-14"] == 1
        assert counts["2026-01-12"] == 0

    def test_aware_clock_anchor(self):
        def utc_clock():
            return datetime(2026, 1, 19, 3, 0, tzinfo=timezone.utc)

        view = WeekView.build([], clock=utc_clock, tz=ZoneInfo("America/Chicago"))
        # Sunday evening in Chicago, so the week starting Monday the 12th
        assert view.start == date(2026, 1, 12)

    def test_item_counts_include_everything(self, orders):
        view = WeekView.build(orders, clock=_clock)
        tuesday = next(d for d in view.days if d.day == date(2026, 1, 13))
        assert tuesday.item_count == 42

    def test_orders_sorted_within_day(self, orders):
        view = WeekView.build(orders, anchor=date(2026, 1, 13))
        tuesday = view.days[1]
        assert [o.id for o in tuesday.orders] == ["4", "2", "1", "3"]

    def test_to_dict(self, orders):
        data = WeekView.build(orders, anchor=date(2026, 1, 13)).to_dict()
        assert data["from"] == "2026-01-12"
        assert data["to"] == "2026-01-18"
        assert len(data["days"]) == 7


def test_format_qty():
    assert format_qty(3) == "3"
    assert format_qty(2.5) == "2.5"
    assert format_qty(4.0) == "4"
