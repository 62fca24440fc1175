from .markup import ParsedTemplate, build_skeleton, load_template, parse_template, populate
from .pdf_writer import write_pdf
from .primitives import ImageBand, Line, Page, Rect, TextRun
from .vector import compose

__all__ = [
    "ImageBand",
    "Line",
    "Page",
    "ParsedTemplate",
    "Rect",
    "TextRun",
    "build_skeleton",
    "compose",
    "load_template",
    "parse_template",
    "populate",
    "write_pdf",
]
