"""CLI entry point for the kitchen prep tools."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import tempfile
from datetime import date
from pathlib import Path

from .board import PrepBoard, WeekView
from .classifier import classify, display_rank, priority_label
from .config import load_config

logger = logging.getLogger(__name__)


def load_orders(path: str | Path) -> list[dict]:
    """Read orders from a JSON file saved from the orders endpoint.

    Accepts a bare list or an object with a ``data`` (or ``orders``) list.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file isn't JSON in one of those shapes.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Orders file not found: {p}")

    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Orders file is not valid JSON: {p} ({e})") from e

    if isinstance(payload, dict):
        payload = payload.get("data", payload.get("orders"))
    if not isinstance(payload, list):
        raise ValueError(
            f"Expected a list of orders or {{\"data\": [...]}} in {p}"
        )

    orders = [o for o in payload if isinstance(o, dict)]
    logger.info("Loaded %d orders from %s", len(orders), p)
    return orders


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r} (expected YYYY-MM-DD)"
        ) from None


def _parse_copies(value: str) -> int:
    try:
        copies = int(value)
    except ValueError:
        copies = 0
    if copies < 1:
        raise argparse.ArgumentTypeError(
            f"invalid copy count {value!r} (expected a positive integer)"
        )
    return copies


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="catering-prep",
        description="Kitchen prep lists from catering orders",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # prep
    prep_parser = sub.add_parser("prep", help="Show the prep list for a day")
    prep_parser.add_argument("--orders", type=str, help="Orders JSON file")
    prep_parser.add_argument(
        "--day", type=_parse_day, default=None, help="Business day (YYYY-MM-DD)"
    )
    prep_parser.add_argument(
        "--mode", choices=("timeline", "all"), default=None,
        help="Group by service window or show day totals",
    )
    prep_parser.add_argument("--json", action="store_true", help="Output JSON")
    prep_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE",
        help="Write a PDF prep sheet",
    )
    prep_parser.add_argument(
        "--print", action="store_true", dest="do_print",
        help="Print the prep sheet on the default printer",
    )
    prep_parser.add_argument(
        "--printer", type=str, default=None,
        help="Print the prep sheet on this printer",
    )
    prep_parser.add_argument(
        "--copies", type=_parse_copies, default=1,
        help="Number of copies to print",
    )

    # week
    week_parser = sub.add_parser("week", help="Show order volume for a week")
    week_parser.add_argument("--orders", type=str, help="Orders JSON file")
    week_parser.add_argument(
        "--anchor", type=_parse_day, default=None,
        help="Any day in the week to show (YYYY-MM-DD)",
    )
    week_parser.add_argument("--json", action="store_true", help="Output JSON")

    # classify
    classify_parser = sub.add_parser(
        "classify", help="Show how item names are classified"
    )
    classify_parser.add_argument("names", nargs="+", help="Item names")

    # printers
    sub.add_parser("printers", help="List available printers")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        match args.command:
            case "prep":
                _cmd_prep(config, args)
            case "week":
                _cmd_week(config, args)
            case "classify":
                _cmd_classify(config, args)
            case "printers":
                _cmd_printers()
    except (FileNotFoundError, ValueError, ImportError, RuntimeError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


def _orders_path(config, args) -> str:
    path = args.orders or config.prep.orders_path
    if not path:
        raise ValueError(
            "No orders file given: pass --orders or set prep.orders_path"
        )
    return path


def _cmd_prep(config, args) -> None:
    orders = load_orders(_orders_path(config, args))
    mode = args.mode or config.prep.default_mode

    board = PrepBoard.build(
        orders,
        day=args.day,
        tz=config.kitchen.zone(),
        exclude_keywords=config.kitchen.exclude_keywords(),
    )

    if args.json:
        print(json.dumps(board.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(board.display(mode))

    printer_name = args.printer or (
        config.printer.printer_name if config.printer.enabled else None
    )
    do_print = args.do_print or bool(args.printer)
    if not (args.pdf or do_print):
        return

    if args.pdf:
        pdf_path = Path(args.pdf)
    else:
        fd, tmp = tempfile.mkstemp(suffix=".pdf", prefix="prep_")
        os.close(fd)
        pdf_path = Path(tmp)

    from .pdf import generate_prep_sheet

    try:
        generate_prep_sheet(board, pdf_path, mode=mode)
        if args.pdf:
            print(f"PDF saved: {pdf_path}", file=sys.stderr)

        if do_print:
            from .printer import Printer

            Printer.print_file(
                pdf_path, printer_name=printer_name, copies=args.copies
            )
            print(
                f"Print job sent: {printer_name or 'default printer'}",
                file=sys.stderr,
            )
    finally:
        if not args.pdf and pdf_path.exists():
            pdf_path.unlink()


def _cmd_week(config, args) -> None:
    orders = load_orders(_orders_path(config, args))
    view = WeekView.build(orders, anchor=args.anchor, tz=config.kitchen.zone())

    if args.json:
        print(json.dumps(view.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(view.display())


def _cmd_classify(config, args) -> None:
    keywords = config.kitchen.exclude_keywords()
    for name in args.names:
        excluded, tag = classify(name, keywords)
        if excluded:
            verdict = "excluded"
        elif tag is None:
            verdict = "other"
        else:
            verdict = f"{tag.value} (rank {display_rank(tag)}, {priority_label(tag)})"
        print(f"{name}: {verdict}")


def _cmd_printers() -> None:
    from .printer import Printer

    printers = Printer.list_printers()
    if not printers:
        print("No printers found.")
        return
    print(f"Available printers: {len(printers)}")
    for p in printers:
        default_mark = " (default)" if p.is_default else ""
        print(f"  {p.name}{default_mark}")
