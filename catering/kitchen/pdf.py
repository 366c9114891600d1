"""Printable prep sheet generation using ReportLab."""

from __future__ import annotations

from pathlib import Path

from .board import PrepBoard, format_qty
from .classifier import priority_label
from .models import PrepList

_PRIORITY_HEADER = "#E51636"
_OTHER_HEADER = "#0B1220"


def generate_prep_sheet(
    board: PrepBoard, output_path: str | Path, mode: str = "timeline"
) -> Path:
    """Generate a PDF prep sheet from a PrepBoard.

    Args:
        board: The prep board to render.
        output_path: Where to save the PDF file.
        mode: ``"timeline"`` for one section per service window,
            ``"all"`` for the whole day's totals only.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import LETTER
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError(
            "reportlab is required for prep sheets: pip install reportlab"
        ) from None

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=LETTER,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"Prep {board.day}",
    )

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    subtitle_style = ParagraphStyle(
        "PrepSubtitle",
        parent=styles["Normal"],
        fontSize=11,
        leading=15,
        textColor=colors.grey,
    )
    heading_style = ParagraphStyle(
        "PrepHeading",
        parent=styles["Heading2"],
        spaceAfter=2 * mm,
    )
    body_style = ParagraphStyle(
        "PrepBody",
        parent=styles["Normal"],
        fontSize=9,
        leading=13,
    )

    def table_style(header_color: str) -> TableStyle:
        return TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(header_color)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("ALIGN", (0, 0), (0, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#FFF6F2")]),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ])

    def prep_tables(prep: PrepList) -> list:
        out: list = []
        if prep.priority:
            data = [["Qty", "Priority item", "Category"]]
            for item in prep.priority:
                data.append([
                    format_qty(item.quantity),
                    item.name,
                    priority_label(item.priority_tag),
                ])
            t = Table(data, colWidths=[18 * mm, 100 * mm, 45 * mm])
            t.setStyle(table_style(_PRIORITY_HEADER))
            out.append(t)
            out.append(Spacer(1, 3 * mm))
        if prep.others:
            data = [["Qty", "Other item"]]
            for item in prep.others:
                data.append([format_qty(item.quantity), item.name])
            t = Table(data, colWidths=[18 * mm, 145 * mm])
            t.setStyle(table_style(_OTHER_HEADER))
            out.append(t)
        if not prep.priority and not prep.others:
            out.append(Paragraph("Nothing to prep.", body_style))
        return out

    elements: list = []
    elements.append(Paragraph(f"Prep sheet {board.day}", title_style))
    elements.append(Paragraph(board.subtitle(), subtitle_style))
    elements.append(Spacer(1, 6 * mm))

    if mode == "all":
        elements.append(Paragraph("All items (sauces removed)", heading_style))
        elements.extend(prep_tables(board.prep))
    else:
        for bucket in board.buckets:
            if not bucket.orders:
                continue
            elements.append(
                Paragraph(f"{bucket.title} ({bucket.hint})", heading_style)
            )
            times = bucket.time_labels()
            if times:
                elements.append(Paragraph(", ".join(times), body_style))
                elements.append(Spacer(1, 2 * mm))
            elements.extend(prep_tables(bucket.prep))
            elements.append(Spacer(1, 6 * mm))

    doc.build(elements)
    return output_path
