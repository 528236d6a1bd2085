from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

Color = Tuple[int, int, int]

# Coordinates are millimetres from the top-left corner of the page.


@dataclass
class TextItem:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: Color = (0, 0, 0)
    align: str = "left"


@dataclass
class RectItem:
    x: float
    y: float
    width: float
    height: float
    fill: Color


@dataclass
class LineItem:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 0.3


@dataclass
class ImageItem:
    x: float
    y: float
    width: float
    height: float
    src_path: str


PageItem = Union[TextItem, RectItem, LineItem, ImageItem]


@dataclass
class Page:
    index: int
    items: List[PageItem] = field(default_factory=list)
    footer: Optional[str] = None

    def texts(self) -> List[str]:
        return [it.text for it in self.items if isinstance(it, TextItem)]


@dataclass
class Document:
    title: str
    pages: List[Page] = field(default_factory=list)
    # blocks and tables in the order they were laid out
    blocks: list = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def iter_items(self) -> List[PageItem]:
        out: List[PageItem] = []
        for p in self.pages:
            out.extend(p.items)
        return out
