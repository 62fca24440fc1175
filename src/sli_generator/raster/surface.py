"""
Render surfaces for the rasterize-and-paginate pipeline.

A surface is anything that can toggle its preview-only chrome and hand back
a bitmap of its content. ``MarkupSurface`` rebuilds populated SLI markup on
one tall PyMuPDF page: form rows are stacked at their declared heights, every
box is placed at the geometry written into the markup, and box contents are
laid out with PyMuPDF's HTML engine. The result lines up with the vector
composer box for box.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

import fitz
from PIL import Image

from ..errors import CaptureError
from ..layout import LETTER, PageGeometry
from ..renderers.vector import CONTENT_SIZE, MIN_CONTENT_SIZE
from .boxes import BlockBox, CellBox, FlowBox, Item, MarkupBoxes, parse_markup

logger = logging.getLogger(__name__)

# Largest page PDF viewers are required to handle
MAX_CANVAS_HEIGHT = 14400.0
PADDING_X = 2.0
PADDING_Y = 1.0
LINE_WIDTH = 0.5
BLACK = (0, 0, 0)
SHADE = (0.9, 0.9, 0.9)
MIN_TEXT_SCALE = MIN_CONTENT_SIZE / CONTENT_SIZE

Placement = tuple[float, Item, float]


class RenderSurface(Protocol):
    def hide_no_print(self) -> None: ...

    def show_no_print(self) -> None: ...

    def capture(self, scale: float) -> Image.Image: ...


@contextmanager
def no_print_hidden(surface: RenderSurface) -> Iterator[RenderSurface]:
    """Hide preview-only elements for the duration of the block."""
    surface.hide_no_print()
    try:
        yield surface
    finally:
        surface.show_no_print()


def _edges(rect: fitz.Rect) -> dict[str, tuple[fitz.Point, fitz.Point]]:
    return {
        "t": (rect.tl, rect.tr),
        "r": (rect.tr, rect.br),
        "b": (rect.bl, rect.br),
        "l": (rect.tl, rect.bl),
    }


class MarkupSurface:
    """
    Populated SLI markup laid out at the live width of ``page``.

    The capture covers the live area only, from the top of the first element
    to the bottom of the last one.
    """

    def __init__(self, markup: str, page: PageGeometry = LETTER, canvas_height: float = MAX_CANVAS_HEIGHT):
        self.markup = markup
        self.page = page
        self.canvas_height = canvas_height
        self.no_print_visible = True

    def hide_no_print(self) -> None:
        self.no_print_visible = False

    def show_no_print(self) -> None:
        self.no_print_visible = True

    def _measure(self, flow: FlowBox, css: str) -> float:
        story = fitz.Story(html=flow.html, user_css=css)
        more, filled = story.place(fitz.Rect(0, 0, self.page.live_width, self.canvas_height))
        if more:
            raise CaptureError(f"Markup does not fit a {self.canvas_height:g}pt capture canvas")
        return fitz.Rect(filled).y1

    def layout(self, boxes: MarkupBoxes) -> tuple[list[Placement], float]:
        """
        Stack blocks and flow fragments top to bottom.

        Returns:
            ``(top, item, height)`` placements and the total height in points

        Raises:
            CaptureError: if the content is taller than the capture canvas
        """
        placements: list[Placement] = []
        top = 0.0
        for item in boxes.items:
            if isinstance(item, FlowBox):
                if item.no_print and not self.no_print_visible:
                    continue
                height = self._measure(item, boxes.stylesheet)
            else:
                height = item.height
            placements.append((top, item, height))
            top += height
        if top > self.canvas_height:
            raise CaptureError(f"Markup does not fit a {self.canvas_height:g}pt capture canvas")
        return placements, top

    def _draw_text(self, page: fitz.Page, cell: CellBox, rect: fitz.Rect, css: str) -> None:
        box = fitz.Rect(rect.x0 + PADDING_X, rect.y0 + PADDING_Y, rect.x1 - PADDING_X, rect.y1 - PADDING_Y)
        if not cell.text or box.is_empty:
            return
        html = f'<div class="a-{cell.align}">{cell.html}</div>'
        spare, _ = page.insert_htmlbox(box, html, css=css, scale_low=MIN_TEXT_SCALE)
        if spare < 0:
            logger.warning(
                "Content of a %.0fx%.0fpt box does not fit at %gpt and is printed smaller: %.60r",
                rect.width, rect.height, MIN_CONTENT_SIZE, cell.text,
            )
            page.insert_htmlbox(box, html, css=css, scale_low=0)

    def _draw(self, page: fitz.Page, placements: list[Placement], css: str) -> None:
        fills = page.new_shape()
        strokes = page.new_shape()
        texts: list[tuple[CellBox, fitz.Rect]] = []
        frame: fitz.Rect | None = None

        for top, item, height in placements:
            if not isinstance(item, BlockBox):
                continue
            band = fitz.Rect(0, top, self.page.live_width, top + height)
            frame = band if frame is None else frame | band
            for cell in item.cells:
                rect = fitz.Rect(cell.x, top + cell.y, cell.x + cell.width, top + cell.y + cell.height)
                if "shaded" in cell.classes:
                    fills.draw_rect(rect)
                for edge, (start, end) in _edges(rect).items():
                    if f"b-{edge}" in cell.classes:
                        strokes.draw_line(start, end)
                texts.append((cell, rect))

        # Fills go under the text, the grid goes on top
        fills.finish(color=None, fill=SHADE, width=0)
        fills.commit()
        for cell, rect in texts:
            self._draw_text(page, cell, rect, css)
        for top, item, height in placements:
            if isinstance(item, FlowBox) and height > 0:
                page.insert_htmlbox(
                    fitz.Rect(0, top, self.page.live_width, top + height), item.html, css=css, scale_low=0
                )
        if frame is not None:
            strokes.draw_rect(frame)
        strokes.finish(color=BLACK, width=LINE_WIDTH, closePath=False)
        strokes.commit()

    def capture(self, scale: float) -> Image.Image:
        """
        Rasterize the content at ``scale`` pixels per point.

        Raises:
            CaptureError: if the content is taller than the capture canvas
        """
        boxes = parse_markup(self.markup)
        placements, height = self.layout(boxes)
        with fitz.open() as document:
            page = document.new_page(width=self.page.live_width, height=max(height, 1.0))
            self._draw(page, placements, boxes.stylesheet)
            pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)

        logger.debug("Captured markup surface at %gx: %dx%d px", scale, *image.size)
        return image
