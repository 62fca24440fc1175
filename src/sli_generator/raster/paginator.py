"""
Slices a captured surface into physical pages.
"""

from __future__ import annotations

import logging
import math

from PIL import Image

from ..config import config
from ..layout import LETTER, PageGeometry
from ..renderers.primitives import ImageBand, Page
from .surface import RenderSurface, no_print_hidden

logger = logging.getLogger(__name__)

BAND_EPSILON = 1e-9


def compute_bands(src_w: int, src_h: int, page_w: float, page_h: float) -> list[tuple[int, int]]:
    """
    Split ``src_h`` source pixel rows into page bands.

    The source is scaled so its width matches ``page_w``. If the scaled height
    fits ``page_h`` there is a single band; otherwise every band but the last
    holds exactly one page of content. Bands are half-open ``(top, bottom)``
    pixel ranges that cover ``[0, src_h)`` once, without gaps or overlap.
    """
    if src_w <= 0 or src_h <= 0:
        return []
    scale = page_w / src_w
    scaled_height = src_h * scale
    if scaled_height <= page_h:
        return [(0, src_h)]

    count = math.ceil(scaled_height / page_h - BAND_EPSILON)
    band = page_h / scale
    edges = [int(index * band) for index in range(count)] + [src_h]
    return list(zip(edges[:-1], edges[1:]))


def paginate(surface: RenderSurface, page: PageGeometry = LETTER, scale: float | None = None) -> list[Page]:
    """
    Capture ``surface`` with its preview chrome hidden and cut it into pages.

    Each band is pasted at the live-area origin of a fresh white canvas the
    size of the physical page. Errors raised by the surface propagate
    unchanged once its preview chrome is visible again.
    """
    scale = scale or config.RASTER_SCALE
    with no_print_hidden(surface):
        image = surface.capture(scale)

    src_w, src_h = image.size
    pixels_per_point = src_w / page.live_width
    canvas_size = (round(page.width * pixels_per_point), round(page.height * pixels_per_point))
    offset = round(page.margin * pixels_per_point)

    pages: list[Page] = []
    for top, bottom in compute_bands(src_w, src_h, page.live_width, page.live_height):
        canvas = Image.new("RGB", canvas_size, "white")
        canvas.paste(image.crop((0, top, src_w, bottom)), (offset, offset))
        pages.append(
            Page(
                page.width,
                page.height,
                [ImageBand(0, 0, page.width, page.height, canvas, top, bottom)],
            )
        )

    logger.info("Paginated %dx%d px capture into %d page(s)", src_w, src_h, len(pages))
    return pages
