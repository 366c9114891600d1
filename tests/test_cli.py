"""Tests for the catering-prep command line."""

import json
from unittest.mock import patch

import pytest

from catering.kitchen.cli import load_orders, main

ORDERS = [
    {
        "id": "1",
        "pickupTime": "2026-01-13T11:30:00",
        "items": [
            {"name": "Chick-fil-A Sandwich", "qty": 4},
            {"name": "BBQ Sauce", "qty": 10},
        ],
    },
    {
        "id": "2",
        "pickupTime": "2026-01-13T12:00:00",
        "items": [
            {"name": "chick-fil-a sandwich", "qty": 1},
            {"name": "Fruit Tray", "qty": 2},
        ],
    },
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PREP_TIMEZONE", raising=False)
    monkeypatch.delenv("PREP_ORDERS_PATH", raising=False)


@pytest.fixture
def orders_file(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps({"data": ORDERS}))
    return path


class TestLoadOrders:
    def test_list(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps(ORDERS + ["junk"]))
        assert [o["id"] for o in load_orders(path)] == ["1", "2"]

    def test_data_wrapper(self, orders_file):
        assert len(load_orders(orders_file)) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_orders(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="not valid JSON"):
            load_orders(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps({"total": 3}))
        with pytest.raises(ValueError, match="Expected a list"):
            load_orders(path)


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "catering-prep" in capsys.readouterr().out


def test_prep_json(orders_file, capsys):
    main(["prep", "--orders", str(orders_file), "--day", "2026-01-13", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["prep"]["priority"] == [
        {"name": "Chick-fil-A Sandwich", "quantity": 5, "tag": "SANDWICH"},
        {"name": "Fruit Tray", "quantity": 2, "tag": "TRAY"},
    ]
    assert data["prep"]["others"] == []


def test_prep_text_all(orders_file, capsys):
    main(["prep", "--orders", str(orders_file), "--day", "2026-01-13", "--mode", "all"])
    out = capsys.readouterr().out
    assert "Chick-fil-A Sandwich" in out
    assert "BBQ Sauce" not in out


def test_prep_missing_orders_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["prep", "--orders", str(tmp_path / "missing.json")])
    assert exc.value.code == 1
    assert "Orders file not found" in capsys.readouterr().err


def test_prep_without_orders_path(capsys):
    with pytest.raises(SystemExit):
        main(["prep"])
    assert "No orders file" in capsys.readouterr().err


def test_prep_print_uses_temp_pdf(orders_file, capsys):
    with patch("catering.kitchen.pdf.generate_prep_sheet") as gen, patch(
        "catering.kitchen.printer.Printer.print_file"
    ) as print_file:
        main([
            "prep", "--orders", str(orders_file), "--day", "2026-01-13",
            "--printer", "Kitchen_Zebra",
        ])

    gen.assert_called_once()
    pdf_path = print_file.call_args[0][0]
    assert print_file.call_args[1]["printer_name"] == "Kitchen_Zebra"
    assert not pdf_path.exists()
    assert print_file.call_args[1]["copies"] == 1


def test_prep_print_copies(orders_file, capsys):
    with patch("catering.kitchen.pdf.generate_prep_sheet"), patch(
        "catering.kitchen.printer.Printer.print_file"
    ) as print_file:
        main([
            "prep", "--orders", str(orders_file), "--day", "2026-01-13",
            "--print", "--copies", "3",
        ])

    assert print_file.call_args[1]["copies"] == 3
    assert print_file.call_args[1]["printer_name"] is None


@pytest.mark.parametrize("copies", ["0", "-2", "two"])
def test_prep_rejects_bad_copies(orders_file, copies):
    with pytest.raises(SystemExit) as exc:
        main(["prep", "--orders", str(orders_file), "--copies", copies])
    assert exc.value.code == 2


def test_week_json(orders_file, capsys):
    main(["week", "--orders", str(orders_file), "--anchor", "2026-01-15", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["from"] == "2026-01-12"
    tuesday = data["days"][1]
    assert tuesday["order_count"] == 2
    assert tuesday["item_count"] == 17


def test_classify(capsys):
    main(["classify", "Hot Nugget Tray", "8oz Chick-fil-A Sauce", "Cookie"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Hot Nugget Tray: HOT_NUGGET_TRAY (rank 2, Hot Nugget Tray)"
    assert lines[1] == "8oz Chick-fil-A Sauce: excluded"
    assert lines[2] == "Cookie: other"


def test_bad_day_argument(orders_file):
    with pytest.raises(SystemExit) as exc:
        main(["prep", "--orders", str(orders_file), "--day", "13/01/2026"])
    assert exc.value.code == 2
