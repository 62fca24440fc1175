"""
Markup renderer - fills an HTML template with SLI data.

The template is plain HTML with ``[NAME]`` placeholders. A placeholder name
may repeat (the four forwarding-agent lines share ``[FORWARDING_AGENT_LINES]``);
occurrences are numbered in document order and the Nth occurrence receives
the Nth line, so moving blocks around in a template moves the data with them.
Checkboxes use ``[CHECKBOX_<KEY>]`` and the commodity rows are spliced
between the ``PRODUCT_ROWS`` anchors, replacing whatever sample rows the
template carries there.

The generated skeleton positions every box absolutely, in points, inside a
fixed-height block per form row. Block and cell geometry come from
``place_row``, so a browser, the raster surface and the vector composer all
put each box at the same coordinates.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from ..aggregation import aggregate_products
from ..checkboxes import CHECKBOX_CAPTIONS, resolve
from ..config import config
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
from ..layout.fields import LINE_FIELDS
from ..schemas.shipper import ShipperProfile
from ..schemas.sli import SliInput

logger = logging.getLogger(__name__)

ROWS_START = "<!-- PRODUCT_ROWS_START -->"
ROWS_END = "<!-- PRODUCT_ROWS_END -->"
CHECKBOX_PREFIX = "CHECKBOX_"
PLACEHOLDER = re.compile(r"\[([A-Z][A-Z0-9_]*)\]")

STYLE = """
@page { size: %(page_width)gpt %(page_height)gpt; margin: %(margin)gpt; }
body { font-family: Helvetica, Arial, sans-serif; font-size: 7pt; margin: 0; }
.sheet { width: %(live_width)gpt; border: 0.5pt solid #000; }
.block { position: relative; overflow: hidden; }
.cell { position: absolute; box-sizing: border-box; padding: 1pt 2pt; border: 0 solid #000; overflow: hidden; }
.nest { padding: 0; }
.b-t { border-top-width: 0.5pt; }
.b-r { border-right-width: 0.5pt; }
.b-b { border-bottom-width: 0.5pt; }
.b-l { border-left-width: 0.5pt; }
.shaded { background-color: #e6e6e6; }
.a-center { text-align: center; }
.a-right { text-align: right; }
.label { display: block; font-size: 5.5pt; font-weight: bold; }
.line { display: block; }
.glyph { font-size: 8pt; }
.preview-banner { padding: 4pt; margin-bottom: 6pt; background-color: #fff3cd; font-size: 8pt; }
@media print { .no-print { display: none; } }
"""


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Slot:
    """One placeholder occurrence; ``ordinal`` counts earlier slots of the same name."""
    name: str
    ordinal: int


@dataclass(frozen=True)
class RowsBlock:
    """The product-row region between the anchors (sample rows dropped)."""


Segment = Union[Literal, Slot, RowsBlock]


@dataclass(frozen=True)
class ParsedTemplate:
    segments: tuple[Segment, ...]

    @property
    def slots(self) -> tuple[Slot, ...]:
        return tuple(segment for segment in self.segments if isinstance(segment, Slot))

    @property
    def slot_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for slot in self.slots:
            counts[slot.name] = counts.get(slot.name, 0) + 1
        return counts

    @property
    def has_product_rows(self) -> bool:
        return any(isinstance(segment, RowsBlock) for segment in self.segments)


def _tokenize(text: str, counts: dict[str, int]) -> list[Segment]:
    segments: list[Segment] = []
    position = 0
    for match in PLACEHOLDER.finditer(text):
        if match.start() > position:
            segments.append(Literal(text[position:match.start()]))
        name = match.group(1)
        segments.append(Slot(name, counts.get(name, 0)))
        counts[name] = counts.get(name, 0) + 1
        position = match.end()
    if position < len(text):
        segments.append(Literal(text[position:]))
    return segments


def parse_template(text: str) -> ParsedTemplate:
    """Split template text into literals, numbered slots and the rows block."""
    counts: dict[str, int] = {}
    start = text.find(ROWS_START)
    end = text.find(ROWS_END, start + len(ROWS_START)) if start >= 0 else -1
    if start < 0 or end < 0:
        logger.warning("Template has no product row anchors; commodity rows will be omitted")
        return ParsedTemplate(tuple(_tokenize(text, counts)))

    segments = _tokenize(text[:start], counts)
    segments.append(RowsBlock())
    segments.extend(_tokenize(text[end + len(ROWS_END):], counts))
    return ParsedTemplate(tuple(segments))


def load_template(path: str | Path | None = None, page: PageGeometry = LETTER) -> ParsedTemplate:
    """
    Load and parse the HTML template.

    Args:
        path: Template file; defaults to ``SLI_TEMPLATE_PATH`` and, when that
            is unset, to the skeleton generated from the layout model
        page: Page geometry of the generated skeleton

    Returns:
        The parsed template
    """
    source = path or config.TEMPLATE_PATH
    if source:
        logger.debug("Loading SLI template from %s", source)
        return parse_template(Path(source).read_text(encoding="utf-8"))
    return parse_template(build_skeleton(page=page))


# --- HTML generation from the layout model ---

Emit = Callable[[Union[Text, Field, Check]], str]


def escape(value: str) -> str:
    return html.escape(value).replace("\n", "<br>")


def _cell_html(placed: PlacedCell, emit: Emit) -> str:
    cell = placed.cell
    classes = ["cell", f"a-{cell.align}"]
    for edge in ("top", "right", "bottom", "left"):
        if getattr(cell.borders, edge):
            classes.append(f"b-{edge[0]}")
    if cell.shaded:
        classes.append("shaded")

    if cell.rows:
        # Nested cells follow as siblings with their own absolute geometry
        classes.append("nest")
        inner = ""
    else:
        parts = [f'<span class="label">{escape(cell.caption)}</span>'] if cell.caption else []
        parts.extend(emit(content) for content in cell.content)
        inner = "".join(parts)
    style = (
        f"left:{placed.x:.2f}pt;top:{placed.y:.2f}pt;"
        f"width:{placed.width:.2f}pt;height:{placed.height:.2f}pt"
    )
    return f'<div class="{" ".join(classes)}" style="{style}">{inner}</div>'


def row_html(row: FormRow, emit: Emit, width: float, css_class: str = "block") -> str:
    """One fixed-height block holding every cell of ``row``, nested ones flattened."""
    cells = "".join(_cell_html(placed, emit) for placed in place_row(row, 0.0, 0.0, width))
    return f'<div class="{css_class}" style="height:{row.height:g}pt">{cells}</div>'


def _text_html(content: Text, body: str) -> str:
    style = []
    if content.bold:
        style.append("font-weight:bold")
    if content.size:
        style.append(f"font-size:{content.size:g}pt")
    attr = f' style="{";".join(style)}"' if style else ""
    return f'<span class="line"{attr}>{body}</span>'


def _placeholder(content: Union[Text, Field, Check]) -> str:
    if isinstance(content, Check):
        caption = content.caption or CHECKBOX_CAPTIONS.get(content.key, "")
        token = f"[{CHECKBOX_PREFIX}{content.key.upper()}]"
        return f'<span class="line"><span class="glyph">{token}</span> {escape(caption)}</span>'
    if isinstance(content, Field):
        return f'<span class="line">[{content.name.upper()}]</span>'
    return _text_html(content, escape(content.value))


def _literal(content: Union[Text, Field, Check]) -> str:
    if isinstance(content, Text):
        return _text_html(content, escape(content.value))
    raise TypeError(f"Product rows only carry literal text, got {content!r}")


def build_skeleton(layout: FormLayout = SLI_LAYOUT, page: PageGeometry = LETTER) -> str:
    """
    Generate the HTML template for ``layout``.

    Sample product rows sit between the anchors so the template previews
    sensibly on its own; ``populate`` replaces them.
    """
    style = STYLE % {
        "page_width": page.width,
        "page_height": page.height,
        "margin": page.margin,
        "live_width": page.live_width,
    }
    width = page.live_width
    body: list[str] = [
        '<div class="no-print preview-banner">'
        "Preview only. Use your browser's print dialog to save this form as PDF."
        "</div>",
        '<div class="sheet">',
    ]
    for section in layout.sections:
        body.append(f'<div class="section" data-section="{section.name}">')
        if isinstance(section, ProductTable):
            body.append(row_html(section.header_row(), _placeholder, width, "block product-header"))
            body.append(ROWS_START)
            body.append(row_html(section.data_row({}), _literal, width, "block product-row sample"))
            body.append(ROWS_END)
        else:
            body.extend(row_html(row, _placeholder, width) for row in section.rows)
        body.append("</div>")
    body.append("</div>")

    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8">'
        "<title>SLI [REFERENCE_NUMBER]</title>"
        f"<style>{style}</style></head>\n"
        "<body>\n" + "\n".join(body) + "\n</body></html>\n"
    )


def render_product_rows(data: SliInput, shipper: ShipperProfile, table: ProductTable, width: float) -> str:
    """Commodity rows followed by the TOTAL row, which is present even with no rows."""
    aggregation = aggregate_products(data.line_items)
    rows = [
        row_html(table.data_row(product_row_values(row, shipper)), _literal, width, "block product-row")
        for row in aggregation.rows
    ]
    rows.append(
        row_html(table.total_row(product_total_values(aggregation)), _literal, width, "block product-total")
    )
    return "\n".join(rows)


def _slot_value(slot: Slot, values, states) -> str:
    if slot.name.startswith(CHECKBOX_PREFIX):
        key = slot.name[len(CHECKBOX_PREFIX):].lower()
        return resolve(states, key).markup
    name = slot.name.lower()
    index = slot.ordinal if name in LINE_FIELDS else 0
    return escape(field_value(values, Field(name, index)))


def populate(
    template: ParsedTemplate,
    data: SliInput,
    shipper: ShipperProfile,
    layout: FormLayout = SLI_LAYOUT,
    page: PageGeometry = LETTER,
) -> str:
    """
    Substitute ``data`` into ``template``.

    Multi-line fields hand out one line per occurrence; single-valued fields
    repeat their value wherever they appear. Unknown placeholders print as
    empty strings. Product rows are laid out at the live width of ``page``,
    which must match the page the template was built for.
    """
    values = bind_fields(data, shipper)
    parts: list[str] = []
    for segment in template.segments:
        if isinstance(segment, Literal):
            parts.append(segment.text)
        elif isinstance(segment, Slot):
            parts.append(_slot_value(segment, values, data.checkbox_states))
        else:
            parts.append(ROWS_START)
            parts.append(render_product_rows(data, shipper, layout.product_table, page.live_width))
            parts.append(ROWS_END)
    return "".join(parts)
