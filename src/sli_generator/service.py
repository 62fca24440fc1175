"""
Entry points used by the surrounding application to produce SLI documents.

Generation is synchronous and single-shot: every call renders from scratch.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .assembly import SliRepository, build_order_input, build_standalone_input
from .checkboxes import conflicting_pairs
from .config import config
from .layout import PAGE_SIZES, SLI_LAYOUT, PageGeometry
from .raster import MarkupSurface, paginate
from .renderers import compose, load_template, populate, write_pdf
from .schemas.document import HTML_CONTENT_TYPE, PDF_CONTENT_TYPE, GeneratedDocument
from .schemas.shipper import ShipperProfile
from .schemas.sli import SliInput

logger = logging.getLogger(__name__)

PIPELINES = ("vector", "raster")
OUTPUT_FORMATS = ("pdf", "html")
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def document_filename(data: SliInput, extension: str = "pdf") -> str:
    """``SLI-<reference>``, falling back to the SLI number and then ``draft``."""
    if data.reference_number:
        stem = data.reference_number
    elif data.sli_number is not None:
        stem = str(data.sli_number)
    else:
        stem = "draft"
    stem = UNSAFE_FILENAME_CHARS.sub("_", stem).strip("_") or "draft"
    return f"SLI-{stem}.{extension}"


def _configured_page() -> PageGeometry:
    config.validate()
    return PAGE_SIZES[config.PAGE_SIZE]


def _warn_conflicts(data: SliInput) -> None:
    for first, second in conflicting_pairs(data.checkbox_states):
        logger.warning("Checkboxes %s and %s are both checked", first, second)


def generate_markup(
    data: SliInput,
    shipper: ShipperProfile | None = None,
    template_path: str | Path | None = None,
    page: PageGeometry | None = None,
) -> str:
    """
    Render the SLI as HTML for on-screen preview and browser printing.

    Args:
        data: Normalized SLI input
        shipper: Exporter profile; defaults to the configured one
        template_path: HTML template overriding ``SLI_TEMPLATE_PATH``
        page: Page geometry; defaults to ``SLI_PAGE_SIZE``

    Returns:
        The populated markup
    """
    shipper = shipper or config.shipper_profile()
    page = page or _configured_page()
    _warn_conflicts(data)
    template = load_template(template_path, page=page)
    markup = populate(template, data, shipper, page=page)
    logger.info("Rendered SLI markup for %s", document_filename(data, "html"))
    return markup


def generate_pdf(
    data: SliInput,
    pipeline: str = "vector",
    shipper: ShipperProfile | None = None,
    template_path: str | Path | None = None,
    page: PageGeometry | None = None,
) -> GeneratedDocument:
    """
    Render the SLI as a PDF download.

    ``vector`` draws the form directly and is limited to one page; ``raster``
    renders the markup, rasterizes it and slices it into as many pages as
    needed.

    Raises:
        ValueError: for an unknown pipeline
        PageOverflowError: when the vector pipeline runs out of page
        CaptureError: when the rendered markup is taller than the raster
            capture canvas; other rendering errors propagate unchanged
    """
    if pipeline not in PIPELINES:
        raise ValueError(f"Unknown pipeline {pipeline!r}, expected one of {PIPELINES}")
    shipper = shipper or config.shipper_profile()
    page = page or _configured_page()

    if pipeline == "vector":
        _warn_conflicts(data)
        pages = compose(data, shipper, SLI_LAYOUT, page)
    else:
        markup = generate_markup(data, shipper, template_path, page)
        pages = paginate(MarkupSurface(markup, page), page, config.RASTER_SCALE)

    filename = document_filename(data)
    content = write_pdf(pages, title=SLI_LAYOUT.title, subject=data.reference_number)
    logger.info("Generated %s (%d page(s), %s pipeline)", filename, len(pages), pipeline)
    return GeneratedDocument(
        content=content,
        content_type=PDF_CONTENT_TYPE,
        filename=filename,
        page_count=len(pages),
    )


def _render(
    data: SliInput,
    output: str,
    pipeline: str,
    shipper: ShipperProfile | None,
    template_path: str | Path | None,
) -> GeneratedDocument:
    if output not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format {output!r}, expected one of {OUTPUT_FORMATS}")
    if output == "html":
        return GeneratedDocument(
            content=generate_markup(data, shipper, template_path).encode("utf-8"),
            content_type=HTML_CONTENT_TYPE,
            filename=document_filename(data, "html"),
        )
    return generate_pdf(data, pipeline, shipper, template_path)


def generate_for_order(
    order_id: str,
    repository: SliRepository,
    output: str = "pdf",
    pipeline: str = "vector",
    shipper: ShipperProfile | None = None,
    template_path: str | Path | None = None,
) -> GeneratedDocument:
    """
    Generate the SLI attached to an order.

    Raises:
        RecordNotFoundError: if the order or its SLI does not exist
    """
    return _render(build_order_input(order_id, repository), output, pipeline, shipper, template_path)


def generate_for_standalone(
    sli_id: str,
    repository: SliRepository,
    output: str = "pdf",
    pipeline: str = "vector",
    shipper: ShipperProfile | None = None,
    template_path: str | Path | None = None,
) -> GeneratedDocument:
    """
    Generate a standalone SLI (one not tied to an order).

    Raises:
        RecordNotFoundError: if the SLI does not exist
    """
    return _render(build_standalone_input(sli_id, repository), output, pipeline, shipper, template_path)
