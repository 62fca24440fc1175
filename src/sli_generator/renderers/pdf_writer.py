"""
Writes composed pages to PDF bytes with reportlab, then stamps the document
metadata through PyPDF2.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Sequence

from PyPDF2 import PdfReader, PdfWriter
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .primitives import ImageBand, Line, Page, Rect, TextRun

logger = logging.getLogger(__name__)

PRODUCER = "sli-generator"


def _draw_page(canv: canvas.Canvas, page: Page) -> None:
    height = page.height
    canv.setPageSize((page.width, height))
    for item in page.items:
        if isinstance(item, Rect):
            canv.setLineWidth(item.line_width)
            if item.fill:
                canv.setFillColor(HexColor(item.fill))
            canv.rect(
                item.x,
                height - item.y - item.height,
                item.width,
                item.height,
                stroke=int(item.stroke),
                fill=int(bool(item.fill)),
            )
            canv.setFillColorRGB(0, 0, 0)
        elif isinstance(item, Line):
            canv.setLineWidth(item.line_width)
            canv.line(item.x1, height - item.y1, item.x2, height - item.y2)
        elif isinstance(item, TextRun):
            canv.setFont(item.font, item.size)
            canv.drawString(item.x, height - item.y, item.text)
        elif isinstance(item, ImageBand):
            canv.drawImage(
                ImageReader(item.image),
                item.x,
                height - item.y - item.height,
                width=item.width,
                height=item.height,
            )
    canv.showPage()


def write_pdf(pages: Sequence[Page], title: str = "", subject: str = "") -> bytes:
    """
    Render ``pages`` into a single PDF document.

    Args:
        pages: Pages in output order; each keeps its own size
        title: Document title stored in the PDF info dictionary
        subject: Optional subject (e.g. the USPPI reference number)

    Returns:
        The PDF file contents
    """
    buffer = BytesIO()
    canv = canvas.Canvas(buffer)
    for page in pages:
        _draw_page(canv, page)
    canv.save()
    buffer.seek(0)

    reader = PdfReader(buffer)
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    metadata = {"/Title": title, "/Producer": PRODUCER}
    if subject:
        metadata["/Subject"] = subject
    writer.add_metadata(metadata)

    output = BytesIO()
    writer.write(output)
    logger.debug("Wrote %d page(s) to PDF", len(pages))
    return output.getvalue()
