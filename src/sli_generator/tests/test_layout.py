"""
Form layout model tests: grid invariants, merged-cell emulation and placement.
"""

import pytest

from sli_generator.errors import LayoutError
from sli_generator.layout import (
    A4,
    LETTER,
    SLI_LAYOUT,
    Field,
    FormCell,
    FormRow,
    FormSection,
    ProductColumn,
    ProductTable,
    place_row,
)


def _all_rows(layout):
    for section in layout.sections:
        if isinstance(section, ProductTable):
            yield section.header_row()
            yield section.data_row({})
            yield section.total_row({})
        else:
            yield from section.rows


class TestRowConstruction:
    """Construction-time geometry checks"""

    def test_widths_must_sum_to_100(self):
        with pytest.raises(LayoutError, match="sum to 90%"):
            FormRow(20, (FormCell(50), FormCell(40)))

    def test_tolerates_float_noise(self):
        FormRow(20, (FormCell(100 / 3), FormCell(100 / 3), FormCell(100 / 3)))

    def test_nested_widths_are_checked(self):
        with pytest.raises(LayoutError):
            FormRow(20, (FormCell(100, rows=(FormRow(20, (FormCell(60),)),)),))

    def test_nested_heights_must_fill_row(self):
        inner = (FormRow(10, (FormCell(100),)), FormRow(5, (FormCell(100),)))
        with pytest.raises(LayoutError, match="15pt tall inside a 20pt row"):
            FormRow(20, (FormCell(50, rows=inner), FormCell(50)))

    def test_container_cell_has_no_content(self):
        with pytest.raises(LayoutError):
            FormCell(100, box=1, rows=(FormRow(10, (FormCell(100),)),))

    @pytest.mark.parametrize("width", [0, -5, 101])
    def test_cell_width_range(self, width):
        with pytest.raises(LayoutError):
            FormCell(width)

    def test_unknown_alignment(self):
        with pytest.raises(LayoutError):
            FormCell(100, align="justify")

    def test_product_columns_must_fill_width(self):
        with pytest.raises(LayoutError):
            ProductTable(
                "broken",
                columns=(ProductColumn("a", 1, "A", 50), ProductColumn("b", 2, "B", 40)),
                header_height=10,
                row_height=10,
                total_span=1,
            )


class TestSliLayout:
    """The declared SLI grid"""

    def test_has_48_unique_boxes(self):
        boxes = SLI_LAYOUT.boxes()
        assert sorted(boxes) == list(range(1, 49))

    def test_every_row_is_valid(self):
        rows = list(_all_rows(SLI_LAYOUT))
        assert rows
        for row in rows:
            assert sum(cell.width for cell in row.cells) == pytest.approx(100)

    def test_static_sections_leave_room_for_products(self):
        assert SLI_LAYOUT.static_height == pytest.approx(600)
        assert SLI_LAYOUT.rows_capacity(LETTER) == 8
        assert SLI_LAYOUT.rows_capacity(A4) == 12

    def test_section_names_are_unique(self):
        names = [section.name for section in SLI_LAYOUT.sections]
        assert len(names) == len(set(names))

    def test_parties_rowspan(self):
        parties = next(s for s in SLI_LAYOUT.sections if s.name == "parties")
        (row,) = parties.rows
        nested, agent = row.cells
        assert [cell.box for inner in nested.rows for cell in inner.cells] == [1, 3, 2, 4]
        assert agent.box == 5
        assert sum(inner.height for inner in nested.rows) == row.height
        assert [field.index for field in agent.content] == [0, 1, 2, 3]

    def test_total_row_colspan(self):
        table = SLI_LAYOUT.product_table
        total = table.total_row({"value": "$1.00"})
        label = total.cells[0]
        assert label.width == pytest.approx(sum(c.width for c in table.columns[:8]))
        assert len(label.rows) == 1
        assert label.rows[0].cells[0].content[0].value == "TOTAL:"
        assert len(total.cells) == 1 + len(table.columns) - 8


class TestPlacement:
    """Absolute geometry shared by both renderers"""

    def test_cells_tile_the_row(self):
        row = FormRow(20, (FormCell(25), FormCell(25), FormCell(50)))
        placed = list(place_row(row, 36, 100, 540))
        assert [round(p.x, 3) for p in placed] == [36, 171, 306]
        assert placed[-1].right == pytest.approx(576)
        assert all(p.y == 100 and p.height == 20 for p in placed)

    def test_nested_cells_follow_their_container(self):
        inner = (
            FormRow(8, (FormCell(50), FormCell(50))),
            FormRow(12, (FormCell(100),)),
        )
        row = FormRow(20, (FormCell(60, rows=inner), FormCell(40)))
        placed = list(place_row(row, 0, 0, 100))
        container, first, second, bottom, sibling = placed
        assert container.depth == 0 and first.depth == 1
        assert (first.x, first.width) == (0, 30)
        assert second.x == pytest.approx(30)
        assert (bottom.y, bottom.height) == (8, 12)
        assert sibling.x == pytest.approx(60)

    def test_column_seams_align_across_product_rows(self):
        table = SLI_LAYOUT.product_table
        header = [p.right for p in place_row(table.header_row(), 36, 0, 540)]
        data = [p.right for p in place_row(table.data_row({}), 36, 0, 540)]
        assert header == pytest.approx(data)

    def test_total_seams_align_with_columns(self):
        table = SLI_LAYOUT.product_table
        header = [p.right for p in place_row(table.header_row(), 36, 0, 540)]
        total = [p.right for p in place_row(table.total_row({}), 36, 0, 540) if p.depth == 0]
        assert total == pytest.approx([header[7], *header[8:]])


class TestFieldHelpers:

    def test_field_defaults(self):
        field = Field("consignee_name")
        assert field.index == 0 and not field.wrap

    def test_section_height(self):
        section = FormSection("s", (FormRow(10, (FormCell(100),)), FormRow(5, (FormCell(100),))))
        assert section.height == 15
