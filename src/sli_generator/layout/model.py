"""
Declarative form grid shared by the markup and vector renderers.

Cell widths are percentages of the enclosing container. The surfaces the form
is drawn on have no merged-cell primitive, so merged cells are expressed with
nested sub-layouts:

* rowspan: a cell whose ``rows`` stack several inner rows beside a sibling
  that spans the full row height;
* colspan: a single wide cell whose ``rows`` hold a one-row layout occupying
  the combined width of the columns it replaces.

Each cell draws its own right and bottom edges and the renderer draws the
outer frame, so a nested column draws the seam on its inner edge while the
spanning sibling only draws its outer border.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Union

from ..errors import LayoutError

WIDTH_TOLERANCE = 0.01
HEIGHT_TOLERANCE = 0.01
ALIGNMENTS = ("left", "center", "right")


@dataclass(frozen=True)
class PageGeometry:
    """Physical page in points with a uniform live-area margin."""

    name: str
    width: float
    height: float
    margin: float

    @property
    def live_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def live_height(self) -> float:
        return self.height - 2 * self.margin


LETTER = PageGeometry("LETTER", 612.0, 792.0, 36.0)
A4 = PageGeometry("A4", 595.28, 841.89, 34.02)
PAGE_SIZES: dict[str, PageGeometry] = {"LETTER": LETTER, "A4": A4}


@dataclass(frozen=True)
class Borders:
    top: bool = False
    right: bool = True
    bottom: bool = True
    left: bool = False


EDGES = Borders()
NO_BORDERS = Borders(right=False, bottom=False)
RIGHT_ONLY = Borders(bottom=False)


@dataclass(frozen=True)
class Text:
    """Literal text printed in a cell."""

    value: str
    bold: bool = False
    size: float | None = None
    wrap: bool = False


@dataclass(frozen=True)
class Field:
    """
    Data-bound value. ``index`` selects the line of a multi-line field, so
    repeated occurrences of one field name stay distinguishable.
    """

    name: str
    index: int = 0
    wrap: bool = False


@dataclass(frozen=True)
class Check:
    """Checkbox reference; the caption defaults to the form's caption for ``key``."""

    key: str
    caption: str | None = None


Content = Union[Text, Field, Check]


@dataclass(frozen=True)
class FormCell:
    width: float
    box: int | None = None
    label: str = ""
    content: tuple[Content, ...] = ()
    borders: Borders = EDGES
    shaded: bool = False
    align: str = "left"
    rows: tuple["FormRow", ...] = ()

    def __post_init__(self) -> None:
        if not 0 < self.width <= 100:
            raise LayoutError(f"Cell width must be within (0, 100], got {self.width}")
        if self.align not in ALIGNMENTS:
            raise LayoutError(f"Unknown alignment {self.align!r}")
        if self.rows and (self.content or self.label or self.box):
            raise LayoutError("A nested container cell cannot carry its own content")

    @property
    def caption(self) -> str:
        if self.box is None:
            return self.label
        return f"{self.box}. {self.label}"


def check_widths(cells: tuple[FormCell, ...], where: str) -> None:
    """Sibling widths must fill their container exactly."""
    total = sum(cell.width for cell in cells)
    if abs(total - 100.0) > WIDTH_TOLERANCE:
        raise LayoutError(f"{where}: cell widths sum to {total:g}%, expected 100%")


@dataclass(frozen=True)
class FormRow:
    height: float
    cells: tuple[FormCell, ...]

    def __post_init__(self) -> None:
        if self.height <= 0:
            raise LayoutError(f"Row height must be positive, got {self.height}")
        if not self.cells:
            raise LayoutError("A row needs at least one cell")
        check_widths(self.cells, "row")
        for cell in self.cells:
            if not cell.rows:
                continue
            nested_height = sum(row.height for row in cell.rows)
            if abs(nested_height - self.height) > HEIGHT_TOLERANCE:
                raise LayoutError(
                    f"Nested rows are {nested_height:g}pt tall inside a {self.height:g}pt row"
                )


@dataclass(frozen=True)
class FormSection:
    name: str
    rows: tuple[FormRow, ...]

    @property
    def height(self) -> float:
        return sum(row.height for row in self.rows)


@dataclass(frozen=True)
class ProductColumn:
    key: str
    box: int
    label: str
    width: float
    align: str = "left"


@dataclass(frozen=True)
class ProductTable:
    """
    Commodity table: a shaded header row, one row per aggregated product and
    a TOTAL row whose label spans the first ``total_span`` columns.
    """

    name: str
    columns: tuple[ProductColumn, ...]
    header_height: float
    row_height: float
    total_span: int

    def __post_init__(self) -> None:
        if not 0 < self.total_span < len(self.columns):
            raise LayoutError("The TOTAL label must span some, but not all, columns")
        # Building the rows runs the width checks
        self.header_row()
        self.total_row({})

    def header_row(self) -> FormRow:
        return FormRow(
            self.header_height,
            tuple(
                FormCell(column.width, box=column.box, label=column.label, shaded=True)
                for column in self.columns
            ),
        )

    def data_row(self, values: Mapping[str, str]) -> FormRow:
        return FormRow(
            self.row_height,
            tuple(
                FormCell(
                    column.width,
                    content=(Text(values.get(column.key, "")),),
                    align=column.align,
                )
                for column in self.columns
            ),
        )

    def total_row(self, totals: Mapping[str, str]) -> FormRow:
        spanned = self.columns[: self.total_span]
        span_width = sum(column.width for column in spanned)
        label = FormCell(
            span_width,
            borders=NO_BORDERS,
            rows=(
                FormRow(
                    self.row_height,
                    (FormCell(100, content=(Text("TOTAL:", bold=True),), align="right"),),
                ),
            ),
        )
        rest = tuple(
            FormCell(
                column.width,
                content=(Text(totals.get(column.key, ""), bold=True),),
                align="right",
            )
            for column in self.columns[self.total_span:]
        )
        return FormRow(self.row_height, (label, *rest))

    @property
    def static_height(self) -> float:
        return self.header_height + self.row_height


Section = Union[FormSection, ProductTable]


@dataclass(frozen=True)
class FormLayout:
    title: str
    sections: tuple[Section, ...]

    @property
    def product_table(self) -> ProductTable:
        for section in self.sections:
            if isinstance(section, ProductTable):
                return section
        raise LayoutError("Layout has no product table")

    @property
    def static_height(self) -> float:
        """Height of everything except the product data rows."""
        return sum(
            section.static_height if isinstance(section, ProductTable) else section.height
            for section in self.sections
        )

    def rows_capacity(self, page: PageGeometry) -> int:
        """How many product rows fit on one page of ``page`` geometry."""
        free = page.live_height - self.static_height
        return max(0, int((free + HEIGHT_TOLERANCE) // self.product_table.row_height))

    def boxes(self) -> list[int]:
        """Box numbers in declaration order."""
        numbers: list[int] = []

        def walk(rows: tuple[FormRow, ...]) -> None:
            for row in rows:
                for cell in row.cells:
                    if cell.box is not None:
                        numbers.append(cell.box)
                    walk(cell.rows)

        for section in self.sections:
            if isinstance(section, ProductTable):
                numbers.extend(column.box for column in section.columns)
            else:
                walk(section.rows)
        return numbers


@dataclass(frozen=True)
class PlacedCell:
    """A cell resolved to absolute coordinates (points, top-left origin)."""

    cell: FormCell
    x: float
    y: float
    width: float
    height: float
    depth: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def place_row(row: FormRow, x: float, y: float, width: float, depth: int = 0) -> Iterator[PlacedCell]:
    """
    Yield every cell of ``row`` (nested ones included, container first) with
    absolute geometry. The last cell absorbs floating point drift so column
    seams of stacked rows land on the same coordinate.
    """
    cursor = x
    last = len(row.cells) - 1
    for index, cell in enumerate(row.cells):
        cell_width = x + width - cursor if index == last else width * cell.width / 100
        yield PlacedCell(cell, cursor, y, cell_width, row.height, depth)
        inner_y = y
        for inner in cell.rows:
            yield from place_row(inner, cursor, inner_y, cell_width, depth + 1)
            inner_y += inner.height
        cursor += cell_width
