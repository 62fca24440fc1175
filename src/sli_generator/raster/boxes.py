"""
Reads populated SLI markup back into positioned boxes.

The skeleton writes each form row as ``<div class="block">`` with a fixed
height, and each box inside it as ``<div class="cell">`` carrying its
``left/top/width/height`` in points. Those blocks stack vertically. Anything
else at the top level (the preview banner, or a free-form template without
blocks) is kept as a flow fragment whose height is only known once it is laid
out.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Union

from lxml import html as lxml_html

GEOMETRY = re.compile(r"(left|top|width|height)\s*:\s*(-?[\d.]+)pt")
MEDIA_RULE = re.compile(r"@media[^{]*\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}")

SKIPPED_TAGS = {"style", "script", "title", "meta", "link", "base"}
CONTAINER_CLASSES = {"sheet", "section"}


def _geometry(style: str | None) -> dict[str, float]:
    return {name: float(value) for name, value in GEOMETRY.findall(style or "")}


def _classes(element) -> frozenset[str]:
    return frozenset((element.get("class") or "").split())


def _outer_html(element) -> str:
    return lxml_html.tostring(element, encoding="unicode", with_tail=False)


def _inner_html(element) -> str:
    parts = [html.escape(element.text or "", quote=False)]
    parts.extend(lxml_html.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


@dataclass
class CellBox:
    """A box positioned relative to its block."""

    x: float
    y: float
    width: float
    height: float
    classes: frozenset[str]
    html: str = ""
    text: str = ""

    @property
    def align(self) -> str:
        for align in ("center", "right"):
            if f"a-{align}" in self.classes:
                return align
        return "left"


@dataclass
class BlockBox:
    height: float
    cells: list[CellBox] = field(default_factory=list)


@dataclass
class FlowBox:
    html: str
    no_print: bool = False


Item = Union[BlockBox, FlowBox]


@dataclass
class MarkupBoxes:
    items: list[Item]
    stylesheet: str

    @property
    def blocks(self) -> list[BlockBox]:
        return [item for item in self.items if isinstance(item, BlockBox)]


def _block(element) -> BlockBox:
    cells = []
    for child in element:
        if not isinstance(child.tag, str) or "cell" not in _classes(child):
            continue
        geometry = _geometry(child.get("style"))
        cells.append(
            CellBox(
                geometry.get("left", 0.0),
                geometry.get("top", 0.0),
                geometry.get("width", 0.0),
                geometry.get("height", 0.0),
                _classes(child),
                _inner_html(child),
                child.text_content().strip(),
            )
        )
    height = _geometry(element.get("style")).get("height")
    if height is None:
        height = max((cell.y + cell.height for cell in cells), default=0.0)
    return BlockBox(height, cells)


def _collect(parent, items: list[Item]) -> None:
    if parent.text and parent.text.strip():
        items.append(FlowBox(html.escape(parent.text, quote=False)))
    for element in parent:
        # Comments (the product row anchors) have a non-string tag
        if isinstance(element.tag, str) and element.tag not in SKIPPED_TAGS:
            classes = _classes(element)
            if element.tag == "div" and "block" in classes:
                items.append(_block(element))
            elif element.tag == "div" and classes & CONTAINER_CLASSES:
                _collect(element, items)
            else:
                items.append(FlowBox(_outer_html(element), "no-print" in classes))
        if element.tail and element.tail.strip():
            items.append(FlowBox(html.escape(element.tail, quote=False)))


def parse_markup(markup: str) -> MarkupBoxes:
    """
    Split ``markup`` into stacked blocks and flow fragments.

    ``@media`` rules are dropped from the collected stylesheet: the surface
    renders for the screen and handles ``no-print`` elements itself.
    """
    if not markup.strip():
        return MarkupBoxes([], "")
    root = lxml_html.document_fromstring(markup)
    stylesheet = MEDIA_RULE.sub("", "\n".join(style.text or "" for style in root.iter("style")))
    items: list[Item] = []
    body = root.find("body")
    if body is not None:
        _collect(body, items)
    return MarkupBoxes(items, stylesheet)
