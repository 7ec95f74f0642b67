"""Printable picklist for a service job."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from gymfix.database.models import Part, ServiceJob, UsedPart

FONT_NAME = "Helvetica"
MARGIN = 18 * mm
ROW_HEIGHT = 7 * mm

# (header, x offset from the left margin)
COLUMNS = [
    ("SKU", 0),
    ("Part", 32 * mm),
    ("Location", 112 * mm),
    ("Qty", 142 * mm),
    ("Picked", 158 * mm),
]


def export_picklist_pdf(
    job: ServiceJob,
    lines: list[tuple[UsedPart, Optional[Part]]],
    output_path: str | Path | None = None,
) -> str:
    """Render the job's picklist and return the PDF path.

    *lines* is what ``JobLedger.picklist_lines`` returns. Rows are sorted
    by bin location so the warehouse walk follows the shelves.
    """
    if not output_path:
        output_path = os.path.join(
            tempfile.gettempdir(), f"gymfix_picklist_{job.id}.pdf"
        )
    output_path = str(output_path)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    height = A4[1]
    c = canvas.Canvas(output_path, pagesize=A4)
    c.setTitle(f"Picklist {job.id}")

    y = height - MARGIN
    c.setFont(FONT_NAME + "-Bold", 16)
    c.drawString(MARGIN, y, "Picklist")
    y -= 8 * mm
    c.setFont(FONT_NAME, 10)
    c.drawString(MARGIN, y, f"Job #{job.id} - {job.client_name}")
    y -= 5 * mm
    c.drawString(MARGIN, y, f"Machine: {job.machine_model}")
    y -= 5 * mm
    c.drawString(MARGIN, y, f"Fault: {job.description}")
    y -= 10 * mm

    y = _draw_header(c, y)
    ordered = sorted(lines, key=lambda l: l[1].location if l[1] else "")
    if not ordered:
        c.setFont(FONT_NAME, 10)
        c.drawString(MARGIN, y, "No parts on the picklist.")

    for entry, part in ordered:
        if y < MARGIN:
            c.showPage()
            y = _draw_header(c, height - MARGIN)
        c.setFont(FONT_NAME, 9)
        values = [
            part.sku if part else "?",
            part.name if part else f"Unknown part {entry.part_id}",
            part.location if part else "",
            str(entry.quantity),
            "[   ]",
        ]
        for (_, offset), value in zip(COLUMNS, values):
            c.drawString(MARGIN + offset, y, value)
        y -= ROW_HEIGHT

    c.save()
    return output_path


def _draw_header(c, y: float) -> float:
    c.setFont(FONT_NAME + "-Bold", 9)
    for title, offset in COLUMNS:
        c.drawString(MARGIN + offset, y, title)
    c.line(MARGIN, y - 2 * mm, A4[0] - MARGIN, y - 2 * mm)
    return y - ROW_HEIGHT
