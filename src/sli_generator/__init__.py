"""
SLI Generator

Builds the 48-box Shipper's Letter of Instruction export form from order or
standalone SLI data, as printable HTML or as PDF.

Usage:
    from sli_generator import SliInput, LineItem, generate_pdf

    data = SliInput(
        reference_number="INV-1001",
        consignee_name="Acme Trading Ltd",
        consignee_country="Canada",
        line_items=[LineItem(hs_code="3304.99", quantity=12, case_qty=2, unit_weight=4.5, value=240)],
    )

    document = generate_pdf(data)                      # single page, vector drawing
    document = generate_pdf(data, pipeline="raster")   # rasterized markup, multi-page

    with open(document.filename, "wb") as handle:
        handle.write(document.content)

    # From the application store
    from sli_generator import JsonSliRepository, generate_for_order

    document = generate_for_order("42", JsonSliRepository.from_file("store.json"))
"""

from .assembly import JsonSliRepository, SliRepository, build_order_input, build_standalone_input
from .errors import CaptureError, LayoutError, PageOverflowError, RecordNotFoundError, SliError
from .schemas import GeneratedDocument, LineItem, ShipperProfile, SliInput
from .service import (
    generate_for_order,
    generate_for_standalone,
    generate_markup,
    generate_pdf,
)

__all__ = [
    # Generation
    "generate_markup",
    "generate_pdf",
    "generate_for_order",
    "generate_for_standalone",
    # Data assembly
    "JsonSliRepository",
    "SliRepository",
    "build_order_input",
    "build_standalone_input",
    # Types
    "GeneratedDocument",
    "LineItem",
    "ShipperProfile",
    "SliInput",
    # Errors
    "SliError",
    "RecordNotFoundError",
    "LayoutError",
    "PageOverflowError",
    "CaptureError",
]
