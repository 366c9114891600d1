"""Send prep sheets to a CUPS printer."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

_CUPS_HINT = (
    "Make sure CUPS is installed:\n"
    "  Ubuntu/Debian: sudo apt install cups-client\n"
    "  macOS:         CUPS ships with the system"
)


@dataclass
class PrinterInfo:
    name: str
    is_default: bool


def _require(command: str) -> None:
    if shutil.which(command) is None:
        raise RuntimeError(f"{command} command not found. {_CUPS_HINT}")


def _run(cmd: list[str], timeout: int) -> subprocess.CompletedProcess | None:
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (subprocess.TimeoutExpired, OSError):
        return None


class Printer:
    """Print prep sheets using the system lpr command."""

    @staticmethod
    def list_printers() -> list[PrinterInfo]:
        """List the printers known to CUPS.

        Raises:
            RuntimeError: If lpstat is not available.
        """
        _require("lpstat")

        # "system default destination: KitchenPrinter"
        default_name = ""
        result = _run(["lpstat", "-d"], timeout=10)
        if result is not None and result.returncode == 0 and ":" in result.stdout:
            default_name = result.stdout.strip().rsplit(":", 1)[-1].strip()

        # "printer KitchenPrinter is idle.  enabled since ..."
        printers: list[PrinterInfo] = []
        result = _run(["lpstat", "-p"], timeout=10)
        if result is not None and result.returncode == 0:
            for line in result.stdout.splitlines():
                parts = line.split()
                if len(parts) >= 2 and parts[0] == "printer":
                    printers.append(
                        PrinterInfo(name=parts[1], is_default=parts[1] == default_name)
                    )
        return printers

    @staticmethod
    def print_file(
        file_path: str | Path,
        printer_name: str | None = None,
        copies: int = 1,
    ) -> None:
        """Queue a file on a printer (the default one if no name is given).

        Raises:
            FileNotFoundError: If the file doesn't exist.
            RuntimeError: If lpr is not available or the job is rejected.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Prep sheet not found: {file_path}")

        _require("lpr")

        cmd = ["lpr"]
        if printer_name:
            cmd.extend(["-P", printer_name])
        if copies > 1:
            cmd.extend(["-#", str(copies)])
        cmd.append(str(file_path))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
        except subprocess.TimeoutExpired:
            raise RuntimeError("Print job timed out.") from None
        if result.returncode != 0:
            raise RuntimeError(f"Printing failed: {result.stderr.strip()}")
