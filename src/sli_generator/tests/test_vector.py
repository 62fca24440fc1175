"""
Vector composer and PDF writer tests.
"""

import logging
from io import BytesIO

import pytest
from PIL import Image
from PyPDF2 import PdfReader
from reportlab.pdfbase.pdfmetrics import stringWidth

from sli_generator.errors import PageOverflowError
from sli_generator.layout import A4, LETTER, SLI_LAYOUT
from sli_generator.renderers import ImageBand, Line, Page, Rect, TextRun, compose, write_pdf
from sli_generator.renderers.vector import (
    BOLD,
    CHECK_SIZE,
    CONTENT_SIZE,
    MIN_CONTENT_SIZE,
    PADDING,
    fit_size,
    fit_text,
)
from sli_generator.schemas import LineItem, SliInput


def _items(count: int) -> list[LineItem]:
    return [LineItem(hs_code=f"{index:04d}.00", quantity=1, value=1) for index in range(count)]


def _checkbox_squares(page: Page) -> list[Rect]:
    return [
        rect for rect in page.of_type(Rect)
        if rect.width == CHECK_SIZE and rect.height == CHECK_SIZE
    ]


def _diagonals(page: Page) -> list[Line]:
    return [line for line in page.of_type(Line) if line.x1 != line.x2 and line.y1 != line.y2]


class TestCompose:
    """Single-page drawing of the form"""

    def test_single_letter_page(self, sli_input, shipper):
        pages = compose(sli_input, shipper)
        assert len(pages) == 1
        assert (pages[0].width, pages[0].height) == (LETTER.width, LETTER.height)

    def test_prints_box_labels_and_data(self, sli_input, shipper):
        texts = compose(sli_input, shipper)[0].texts
        assert SLI_LAYOUT.title in texts
        assert "1. USPPI Name" in texts
        assert "Northwind Exports LLC" in texts
        assert "Blue Water Forwarding" in texts
        assert "Toronto, ON M5H 2N2" in texts
        assert "05/10/2024" in texts
        assert "Deliver before noon." in texts

    def test_prints_product_rows_and_total(self, sli_input, shipper):
        texts = compose(sli_input, shipper)[0].texts
        assert texts.count("N/A") == 2
        assert "3304.99" in texts
        assert "$150.00" in texts
        assert "TOTAL:" in texts
        assert "$182.00" in texts

    def test_every_checkbox_is_drawn(self, sli_input, shipper):
        page = compose(sli_input, shipper)[0]
        assert len(_checkbox_squares(page)) == 15

    def test_checked_boxes_get_a_cross(self, sli_input, shipper):
        page = compose(sli_input, shipper)[0]
        assert len(_diagonals(page)) == 2 * 2

        empty = compose(SliInput(), shipper)[0]
        assert _diagonals(empty) == []

    def test_header_cells_are_shaded_under_the_grid(self, sli_input, shipper):
        page = compose(sli_input, shipper)[0]
        fills = [item for item in page.items if isinstance(item, Rect) and item.fill]
        assert len(fills) == len(SLI_LAYOUT.product_table.columns)
        first_line = next(index for index, item in enumerate(page.items) if isinstance(item, Line))
        assert all(page.items.index(fill) < first_line for fill in fills)

    def test_outer_frame_wraps_the_content(self, sli_input, shipper):
        frame = compose(sli_input, shipper)[0].items[-1]
        assert isinstance(frame, Rect)
        assert (frame.x, frame.y, frame.width) == (36, 36, 540)
        assert frame.height == pytest.approx(SLI_LAYOUT.static_height + 4 * 14)

    def test_text_stays_inside_live_area(self, sli_input, shipper):
        for run in compose(sli_input, shipper)[0].of_type(TextRun):
            assert LETTER.margin <= run.x
            assert run.x + stringWidth(run.text, run.font, run.size) <= LETTER.width - LETTER.margin + 0.01
            assert LETTER.margin < run.y <= LETTER.height - LETTER.margin

    def test_total_value_is_right_aligned(self, sli_input, shipper):
        table = SLI_LAYOUT.product_table
        column_right = 36 + 540 * sum(column.width for column in table.columns[:9]) / 100
        run = next(r for r in compose(sli_input, shipper)[0].of_type(TextRun) if r.text == "$182.00")
        assert run.font == BOLD
        assert run.x + stringWidth(run.text, run.font, run.size) == pytest.approx(column_right - PADDING)

    def test_long_instructions_wrap(self, shipper):
        data = SliInput(instructions_to_forwarder="Handle with care. " * 20)
        texts = compose(data, shipper)[0].texts
        wrapped = [text for text in texts if text and text in data.instructions_to_forwarder]
        assert len(wrapped) >= 2
        assert all(not text.endswith("...") for text in wrapped)

    def test_long_instructions_shrink_to_fit(self, shipper, caplog):
        words = " ".join(f"word{index}" for index in range(120))
        with caplog.at_level(logging.WARNING):
            runs = compose(SliInput(instructions_to_forwarder=words), shipper)[0].of_type(TextRun)
        lines = [run for run in runs if run.text.startswith("word")]
        assert "word119" in " ".join(run.text for run in lines)
        assert all(MIN_CONTENT_SIZE <= run.size < CONTENT_SIZE for run in lines)
        assert "do not fit" not in caplog.text

    def test_instructions_beyond_the_minimum_size_are_reported(self, shipper, caplog):
        words = " ".join(f"word{index}" for index in range(600))
        with caplog.at_level(logging.WARNING):
            compose(SliInput(instructions_to_forwarder=words), shipper)
        assert "26. Instructions to Forwarder" in caplog.text
        assert "do not fit" in caplog.text

    def test_long_single_line_shrinks_instead_of_trimming(self, shipper):
        name = "Northwind Exports and International Trading Company LLC"
        profile = shipper.model_copy(update={"usppi_name": name})
        run = next(r for r in compose(SliInput(), profile)[0].of_type(TextRun) if r.text == name)
        assert MIN_CONTENT_SIZE <= run.size < CONTENT_SIZE

    def test_unprintable_single_line_is_trimmed_and_reported(self, shipper, caplog):
        profile = shipper.model_copy(update={"usppi_name": "Northwind " * 40})
        with caplog.at_level(logging.WARNING):
            texts = compose(SliInput(), profile)[0].texts
        assert any(text.startswith("Northwind") and text.endswith("...") for text in texts)
        assert "1. USPPI Name: text trimmed" in caplog.text

    def test_rows_up_to_capacity_fit(self, shipper):
        compose(SliInput(line_items=_items(8)), shipper)
        compose(SliInput(line_items=_items(12)), shipper, page=A4)

    def test_overflow_raises(self, shipper):
        with pytest.raises(PageOverflowError) as excinfo:
            compose(SliInput(line_items=_items(9)), shipper)
        assert excinfo.value.rows_fitting == 8

    def test_merged_rows_count_not_line_items(self, shipper):
        items = [LineItem(hs_code="3304.99", quantity=1) for _ in range(30)]
        pages = compose(SliInput(line_items=items), shipper)
        assert pages[0].texts.count("30") == 1


class TestFitText:

    def test_short_text_is_unchanged(self):
        assert fit_text("EAR99", "Helvetica", 7, 100) == "EAR99"

    def test_long_text_is_trimmed(self):
        text = fit_text("A very long consignee name that cannot fit", "Helvetica", 7, 60)
        assert text.endswith("...")
        assert stringWidth(text, "Helvetica", 7) <= 60

    def test_fit_size_keeps_fitting_text_at_full_size(self):
        assert fit_size("EAR99", "Helvetica", 7, 100) == 7

    def test_fit_size_shrinks_to_the_width(self):
        text = "A very long consignee name"
        size = fit_size(text, "Helvetica", 7, 80)
        assert MIN_CONTENT_SIZE <= size < 7
        assert stringWidth(text, "Helvetica", size) <= 80

    def test_fit_size_stops_at_the_minimum(self):
        assert fit_size("A very long consignee name that cannot fit", "Helvetica", 7, 20) == MIN_CONTENT_SIZE


class TestWritePdf:

    def test_metadata_and_page_count(self, sli_input, shipper):
        content = write_pdf(compose(sli_input, shipper), title=SLI_LAYOUT.title, subject="INV-1001")
        assert content.startswith(b"%PDF")
        reader = PdfReader(BytesIO(content))
        assert len(reader.pages) == 1
        assert reader.metadata.title == SLI_LAYOUT.title
        assert reader.metadata.subject == "INV-1001"
        assert float(reader.pages[0].mediabox.width) == pytest.approx(612)

    def test_image_pages(self):
        image = Image.new("RGB", (100, 130), "white")
        pages = [
            Page(612, 792, [ImageBand(0, 0, 612, 792, image, 0, 130)]),
            Page(612, 792, [ImageBand(0, 0, 612, 792, image, 130, 260)]),
        ]
        reader = PdfReader(BytesIO(write_pdf(pages, title="SLI")))
        assert len(reader.pages) == 2
