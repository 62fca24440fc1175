"""
Vector composer - draws the SLI grid directly as page primitives.

Geometry comes from the shared layout model, so the output lines up with the
markup pipeline box for box. The composer fills a single page; a product table
taller than the free space raises ``PageOverflowError`` and the caller is
expected to fall back to the raster pipeline.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from ..aggregation import aggregate_products
from ..checkboxes import CHECKBOX_CAPTIONS, Glyph, resolve
from ..errors import PageOverflowError
from ..layout import (
    LETTER,
    SLI_LAYOUT,
    Check,
    Field,
    FormLayout,
    FormRow,
    PageGeometry,
    PlacedCell,
    ProductTable,
    Text,
    bind_fields,
    field_value,
    place_row,
    product_row_values,
    product_total_values,
)
from ..layout.fields import FieldValues
from ..schemas.shipper import ShipperProfile
from ..schemas.sli import SliInput
from .primitives import Line, Page, Primitive, Rect, TextRun

logger = logging.getLogger(__name__)

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
LABEL_SIZE = 5.5
LABEL_LEADING = 6.0
LABEL_BASELINE = 6.5
CONTENT_SIZE = 7.0
MIN_CONTENT_SIZE = 4.5
# Content scales tried in turn until a box's lines fit its height
SHRINK_STEPS = (1.0, 0.9, 0.8, 0.7, MIN_CONTENT_SIZE / CONTENT_SIZE)
PADDING = 2.0
CHECK_SIZE = 6.0
CHECK_GAP = 3.0
SHADE = "#E6E6E6"
MAX_LABEL_LINES = 2


@dataclass
class _Layers:
    """Fills go under strokes, text goes on top."""
    fills: list[Primitive] = field(default_factory=list)
    strokes: list[Primitive] = field(default_factory=list)
    texts: list[Primitive] = field(default_factory=list)

    def flatten(self) -> list[Primitive]:
        return [*self.fills, *self.strokes, *self.texts]


@dataclass(frozen=True)
class _Entry:
    text: str
    font: str
    size: float
    check: Glyph | None = None

    @property
    def advance(self) -> float:
        if self.check is not None:
            return max(self.size, CHECK_SIZE) + 1
        return self.size + 1


def fit_text(text: str, font: str, size: float, width: float) -> str:
    """Trim ``text`` with a trailing ellipsis until it fits ``width``."""
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text.rstrip() + "..." if text else ""


def fit_size(text: str, font: str, size: float, width: float) -> float:
    """
    Largest font size up to ``size`` at which ``text`` fits ``width`` on one line.

    Sizes step down in tenths of a point and never go below
    ``MIN_CONTENT_SIZE`` (or ``size`` itself, when that is already smaller).
    """
    text_width = stringWidth(text, font, size)
    if text_width <= width:
        return size
    fitted = math.floor(size * width / text_width * 10) / 10
    return max(min(size, MIN_CONTENT_SIZE), fitted)


def _single_line(text: str, font: str, size: float, width: float) -> tuple[str, float, bool]:
    """``(text, size, trimmed)`` for a line shrunk to ``width``, trimmed only at the minimum size."""
    size = fit_size(text, font, size, width)
    if stringWidth(text, font, size) <= width:
        return text, size, False
    return fit_text(text, font, size, width), size, True


def _entries(
    cell_content,
    values: FieldValues,
    states: Mapping[str, bool],
    width: float,
    scale: float = 1.0,
) -> tuple[list[_Entry], bool]:
    """Lines of a cell at ``scale`` times their natural size, and whether any line was trimmed."""
    entries: list[_Entry] = []
    trimmed = False
    for content in cell_content:
        if isinstance(content, Check):
            caption = content.caption or CHECKBOX_CAPTIONS.get(content.key, "")
            caption, size, cut = _single_line(
                caption, REGULAR, CONTENT_SIZE * scale, width - CHECK_SIZE - CHECK_GAP
            )
            entries.append(_Entry(caption, REGULAR, size, resolve(states, content.key)))
            trimmed = trimmed or cut
            continue
        if isinstance(content, Text):
            text, wrap = content.value, content.wrap
            font = BOLD if content.bold else REGULAR
            size = (content.size or CONTENT_SIZE) * scale
        elif isinstance(content, Field):
            text, wrap = field_value(values, content), content.wrap
            font, size = REGULAR, CONTENT_SIZE * scale
        else:
            raise TypeError(f"Unsupported cell content: {content!r}")
        if wrap:
            entries.extend(_Entry(line, font, size) for line in simpleSplit(text, font, size, width))
            continue
        line, size, cut = _single_line(text, font, size, width)
        entries.append(_Entry(line, font, size))
        trimmed = trimmed or cut
    return entries, trimmed


def _draw_checkbox(layers: _Layers, x: float, baseline: float, glyph: Glyph) -> None:
    top = baseline - CHECK_SIZE + 0.5
    layers.strokes.append(Rect(x, top, CHECK_SIZE, CHECK_SIZE))
    if glyph.is_checked:
        layers.strokes.append(Line(x, top, x + CHECK_SIZE, top + CHECK_SIZE))
        layers.strokes.append(Line(x, top + CHECK_SIZE, x + CHECK_SIZE, top))


def _draw_cell(layers: _Layers, placed: PlacedCell, values: FieldValues, states: Mapping[str, bool]) -> None:
    cell = placed.cell
    if cell.shaded:
        layers.fills.append(
            Rect(placed.x, placed.y, placed.width, placed.height, fill=SHADE, stroke=False)
        )
    borders = cell.borders
    if borders.top:
        layers.strokes.append(Line(placed.x, placed.y, placed.right, placed.y))
    if borders.right:
        layers.strokes.append(Line(placed.right, placed.y, placed.right, placed.bottom))
    if borders.bottom:
        layers.strokes.append(Line(placed.x, placed.bottom, placed.right, placed.bottom))
    if borders.left:
        layers.strokes.append(Line(placed.x, placed.y, placed.x, placed.bottom))
    if cell.rows:
        return

    inner_width = placed.width - 2 * PADDING
    left = placed.x + PADDING
    cursor = placed.y
    if cell.caption:
        label_lines = simpleSplit(cell.caption, BOLD, LABEL_SIZE, inner_width)[:MAX_LABEL_LINES]
        cursor += LABEL_BASELINE - LABEL_LEADING
        for line in label_lines:
            cursor += LABEL_LEADING
            layers.texts.append(TextRun(left, cursor, line, BOLD, LABEL_SIZE))
        cursor += 1

    room = placed.bottom - 1 - (cursor if cell.caption else placed.y)
    for scale in SHRINK_STEPS:
        entries, trimmed = _entries(cell.content, values, states, inner_width, scale)
        block = sum(entry.advance for entry in entries)
        if block <= room:
            break
    if not cell.caption:
        # Unlabelled cells centre their content vertically
        cursor = placed.y + max(0.0, (placed.height - block) / 2 - 1)

    name = cell.caption or "Unlabelled box"
    if trimmed:
        logger.warning("%s: text trimmed to fit its width at %gpt", name, MIN_CONTENT_SIZE)
    for index, entry in enumerate(entries):
        cursor += entry.advance
        if cursor > placed.bottom - 1:
            logger.warning(
                "%s: %d line(s) do not fit its %.0fpt height at %gpt and were left out",
                name, len(entries) - index, placed.height, MIN_CONTENT_SIZE,
            )
            break
        if entry.check is not None:
            _draw_checkbox(layers, left, cursor, entry.check)
            layers.texts.append(
                TextRun(left + CHECK_SIZE + CHECK_GAP, cursor, entry.text, entry.font, entry.size)
            )
            continue
        if not entry.text:
            continue
        text_width = stringWidth(entry.text, entry.font, entry.size)
        if cell.align == "center":
            x = placed.x + (placed.width - text_width) / 2
        elif cell.align == "right":
            x = placed.right - PADDING - text_width
        else:
            x = left
        layers.texts.append(TextRun(x, cursor, entry.text, entry.font, entry.size))


def compose(
    data: SliInput,
    shipper: ShipperProfile,
    layout: FormLayout = SLI_LAYOUT,
    page: PageGeometry = LETTER,
) -> list[Page]:
    """
    Build the SLI as one page of drawing primitives.

    Raises:
        PageOverflowError: when the aggregated product rows do not fit in the
            space the static sections leave free
    """
    aggregation = aggregate_products(data.line_items)
    products = aggregation.rows
    capacity = layout.rows_capacity(page)
    if len(products) > capacity:
        raise PageOverflowError(
            f"{len(products)} product rows do not fit on a {page.name} page ({capacity} fit)",
            rows_fitting=capacity,
        )

    values = bind_fields(data, shipper)
    layers = _Layers()
    top = y = page.margin
    for section in layout.sections:
        rows: list[FormRow]
        if isinstance(section, ProductTable):
            rows = [
                section.header_row(),
                *(section.data_row(product_row_values(row, shipper)) for row in products),
                section.total_row(product_total_values(aggregation)),
            ]
        else:
            rows = list(section.rows)
        for row in rows:
            for placed in place_row(row, page.margin, y, page.live_width):
                _draw_cell(layers, placed, values, data.checkbox_states)
            y += row.height

    result = Page(page.width, page.height)
    for item in layers.flatten():
        result.add(item)
    result.add(Rect(page.margin, top, page.live_width, y - top))
    logger.info("Composed vector SLI with %d product row(s)", len(products))
    return [result]
