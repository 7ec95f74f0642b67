"""Generate printable QR labels for warehouse bins.

Each label holds a QR code encoding ``GF:<sku>`` (read back by
``gymfix.io.scanner.sku_from_scan``) next to the part name, SKU and
bin location. Layout is a 3 x 10 sheet (Avery 5160 compatible).
"""

import io
import os
import tempfile

import qrcode
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from gymfix.config import Config
from gymfix.database.models import Part

PAGE_WIDTH, PAGE_HEIGHT = A4
COLS = 3
ROWS_PER_PAGE = 10
LABEL_WIDTH = 66.7 * mm
LABEL_HEIGHT = 25.4 * mm
LEFT_MARGIN = 4.8 * mm
TOP_MARGIN = 21.5 * mm
COL_GAP = 3.2 * mm

QR_SIZE = 21 * mm
TEXT_LEFT_OFFSET = 24 * mm
FONT_NAME = "Helvetica"
FONT_SIZE_NAME = 7
FONT_SIZE_DETAIL = 5.5


def generate_part_labels(parts: list[Part],
                         output_path: str | None = None) -> str:
    """Write a label sheet PDF for *parts* and return its path."""
    if not output_path:
        output_path = os.path.join(
            tempfile.gettempdir(), "gymfix_part_labels.pdf"
        )

    c = canvas.Canvas(output_path, pagesize=A4)
    c.setTitle("GymFix part labels")

    for idx, part in enumerate(parts):
        col = idx % COLS
        row_on_page = (idx // COLS) % ROWS_PER_PAGE
        if idx > 0 and col == 0 and row_on_page == 0:
            c.showPage()

        x = LEFT_MARGIN + col * (LABEL_WIDTH + COL_GAP)
        y = PAGE_HEIGHT - TOP_MARGIN - (row_on_page + 1) * LABEL_HEIGHT

        c.drawImage(
            ImageReader(_make_qr_image(label_payload(part))),
            x + 1.5 * mm, y + 2 * mm,
            width=QR_SIZE, height=QR_SIZE,
        )

        text_x = x + TEXT_LEFT_OFFSET
        text_y = y + LABEL_HEIGHT - 4 * mm
        c.setFont(FONT_NAME + "-Bold", FONT_SIZE_NAME)
        c.drawString(text_x, text_y, _truncate(part.name, 26))

        c.setFont(FONT_NAME, FONT_SIZE_DETAIL)
        text_y -= 3 * mm
        c.drawString(text_x, text_y, f"SKU: {_truncate(part.sku, 24)}")
        if part.location:
            text_y -= 2.5 * mm
            c.drawString(text_x, text_y,
                         f"Loc: {_truncate(part.location, 24)}")

    c.save()
    return output_path


def label_payload(part: Part) -> str:
    return f"{Config.LABEL_PREFIX}:{part.sku}"


def _make_qr_image(data: str) -> io.BytesIO:
    """Generate a QR code image and return it as a PNG buffer."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=1,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def _truncate(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[: max_len - 1] + "…"
    return text
