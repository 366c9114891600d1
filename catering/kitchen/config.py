"""TOML configuration loader for the kitchen prep tools."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .classifier import EXCLUDE_KEYWORDS

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class KitchenConfig:
    timezone: str = ""
    extra_exclude_keywords: list[str] = field(default_factory=list)

    def zone(self) -> tzinfo | None:
        """Return the configured zone, or None for system local time.

        Raises:
            ValueError: If the zone name is unknown.
        """
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {self.timezone!r}") from e

    def exclude_keywords(self) -> tuple[str, ...]:
        """Built-in exclusion keywords plus any configured extras."""
        extras = tuple(
            k.strip().lower() for k in self.extra_exclude_keywords if k.strip()
        )
        return EXCLUDE_KEYWORDS + extras


@dataclass
class PrepConfig:
    default_mode: str = "timeline"
    orders_path: str = ""


@dataclass
class PrinterConfig:
    enabled: bool = False
    printer_name: str = ""


@dataclass
class CateringConfig:
    kitchen: KitchenConfig = field(default_factory=KitchenConfig)
    prep: PrepConfig = field(default_factory=PrepConfig)
    printer: PrinterConfig = field(default_factory=PrinterConfig)


def load_config(path: str | Path | None = None) -> CateringConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    Empty timezone and orders path can be set via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    kit = raw.get("kitchen", {})
    prp = raw.get("prep", {})
    prn = raw.get("printer", {})

    # Resolve: config file → environment variable
    timezone = kit.get("timezone", "") or os.environ.get("PREP_TIMEZONE", "")
    orders_path = prp.get("orders_path", "") or os.environ.get(
        "PREP_ORDERS_PATH", ""
    )

    default_mode = prp.get("default_mode", "timeline")
    if default_mode not in ("timeline", "all"):
        raise ValueError(
            f"Invalid prep.default_mode: {default_mode!r} (use timeline or all)"
        )

    return CateringConfig(
        kitchen=KitchenConfig(
            timezone=timezone,
            extra_exclude_keywords=list(kit.get("extra_exclude_keywords", [])),
        ),
        prep=PrepConfig(
            default_mode=default_mode,
            orders_path=orders_path,
        ),
        printer=PrinterConfig(
            enabled=prn.get("enabled", False),
            printer_name=prn.get("printer_name", ""),
        ),
    )
