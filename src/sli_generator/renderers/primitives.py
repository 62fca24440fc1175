"""
Drawing primitives produced by the vector composer and the paginator.

Coordinates are points with a top-left origin; the PDF writer flips them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from PIL import Image

LINE_WIDTH = 0.5


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None  # hex colour; None leaves the box hollow
    stroke: bool = True
    line_width: float = LINE_WIDTH


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    line_width: float = LINE_WIDTH


@dataclass(frozen=True)
class TextRun:
    """A single line of text; ``y`` is the baseline."""
    x: float
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 7.0


@dataclass(frozen=True, eq=False)
class ImageBand:
    """
    A slice of a rasterized surface placed on a page. ``source_top`` and
    ``source_bottom`` are the pixel rows of the source image it came from.
    """
    x: float
    y: float
    width: float
    height: float
    image: Image.Image
    source_top: int
    source_bottom: int


Primitive = Union[Rect, Line, TextRun, ImageBand]


@dataclass
class Page:
    width: float
    height: float
    items: list[Primitive] = field(default_factory=list)

    def add(self, item: Primitive) -> None:
        self.items.append(item)

    def of_type(self, kind: type) -> list:
        return [item for item in self.items if isinstance(item, kind)]

    @property
    def texts(self) -> list[str]:
        return [item.text for item in self.items if isinstance(item, TextRun)]
