"""Page-flow layout: turns classified blocks into positioned page items.

The cursor ``y`` is the top of the next free line box, in millimetres from
the top edge. It only grows within a page and is reset to the top margin when
a page is added. After any block is laid out ``y <= geometry.bottom``.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image

from reportgen.config import ReportSettings
from reportgen.docs.model import Document, ImageItem, LineItem, Page, RectItem, TextItem
from reportgen.render.fonts import configure_fonts, truncate, wrap_text

from .blocks import (
    HEADING_SECTION,
    LIST_BULLET,
    Blank,
    Block,
    Heading,
    ListItem,
    Paragraph,
)
from .table import Item, Table

BODY_COLOR = (45, 45, 45)
HEADING_COLOR = (25, 25, 25)
MARKER_COLOR = (80, 80, 80)
RULE_COLOR = (200, 200, 200)

BLANK_HEIGHT = 3.0
BULLET_GLYPH = "•"
BULLET_INDENT = 6.0
HEADING_INSET = 2.0

TABLE_FONT_SIZE = 9.0
TABLE_ROW_HEIGHT = 7.0
TABLE_SPACING = 5.0
TABLE_CELL_PADDING = 3.0
TABLE_CELL_LIMIT = 45
TABLE_HEADER_FILL = (240, 240, 240)
TABLE_ZEBRA_FILL = (250, 250, 250)
TABLE_RULE_COLOR = (220, 220, 220)

LETTERHEAD_MAX_HEIGHT = 35.0


class LayoutOverflow(RuntimeError):
    """A unit of content cannot be placed even on an empty page."""


@dataclass(frozen=True)
class TextStyle:
    size: float
    line_height: float
    space_before: float = 0.0
    space_after: float = 0.0
    bold: bool = False
    color: Tuple[int, int, int] = BODY_COLOR

    def block_height(self, line_count: int) -> float:
        return self.space_before + line_count * self.line_height + self.space_after


PARAGRAPH_STYLE = TextStyle(size=10, line_height=5, space_after=2)
LIST_STYLE = TextStyle(size=10, line_height=5, space_after=1.5)
SECTION_HEADING_STYLE = TextStyle(
    size=11.5, line_height=6, space_before=5, space_after=2, bold=True, color=HEADING_COLOR
)
HEADING_STYLE = TextStyle(
    size=11, line_height=6, space_before=5, space_after=2, bold=True, color=HEADING_COLOR
)
TITLE_STYLE = TextStyle(
    size=14, line_height=7, space_before=5, space_after=4, bold=True, color=(30, 30, 30)
)


def baseline(top: float, line_height: float) -> float:
    return top + line_height * 0.75


class PageFlow:
    """Stateful layout of one document. Not shared between renders."""

    def __init__(self, settings: Optional[ReportSettings] = None, title: str = "") -> None:
        self.settings = settings or ReportSettings()
        self.geometry = self.settings.geometry
        self.font, self.bold_font = configure_fonts(self.settings)
        self.document = Document(title=title)
        self.page: Page
        self.y = self.geometry.top
        self.new_page()

    # -- page bookkeeping -------------------------------------------------

    def new_page(self) -> Page:
        if len(self.document.pages) >= self.settings.max_pages:
            raise LayoutOverflow(f"Document exceeds the limit of {self.settings.max_pages} pages")
        self.page = Page(index=len(self.document.pages))
        self.document.pages.append(self.page)
        self.y = self.geometry.top
        return self.page

    def fits(self, height: float) -> bool:
        return self.y + height <= self.geometry.bottom + 1e-6

    def ensure_room(self, height: float) -> None:
        """Start a new page unless `height` fits below the cursor."""
        if self.fits(height):
            return
        if height > self.geometry.usable_height + 1e-6:
            raise LayoutOverflow(
                f"Content of height {height:.1f} mm cannot fit a page with "
                f"{self.geometry.usable_height:.1f} mm of usable height"
            )
        self.new_page()

    def _keep_together(self, height: float) -> bool:
        """Move a whole block to a fresh page when that is enough to fit it.

        Returns False for blocks taller than a page; those are guarded unit
        by unit instead.
        """
        if self.fits(height):
            return True
        if height <= self.geometry.usable_height + 1e-6:
            self.new_page()
            return True
        return False

    # -- drawing primitives ----------------------------------------------

    def _text(self, x: float, y: float, text: str, font: str, size: float, color, align: str = "left") -> None:
        self.page.items.append(TextItem(x=x, y=y, text=text, font=font, size=size, color=color, align=align))

    def _rule(self, x1: float, x2: float, y: float, color=RULE_COLOR, width: float = 0.3) -> None:
        self.page.items.append(LineItem(x1=x1, y1=y, x2=x2, y2=y, color=color, width=width))

    def _fill(self, x: float, y: float, width: float, height: float, color) -> None:
        self.page.items.append(RectItem(x=x, y=y, width=width, height=height, fill=color))

    # -- text blocks ------------------------------------------------------

    def _flow_lines(self, lines: List[str], style: TextStyle, x: float, marker: bool = False) -> None:
        font = self.bold_font if style.bold else self.font
        lh = style.line_height
        whole = self._keep_together(style.block_height(len(lines)))
        for i, line in enumerate(lines):
            if not whole:
                need = lh
                if i == 0:
                    need += style.space_before
                if i == len(lines) - 1:
                    need += style.space_after
                self.ensure_room(need)
            if i == 0:
                self.y += style.space_before
            base = baseline(self.y, lh)
            if marker and i == 0:
                self._fill(self.geometry.margin - 1, base - 4, 1.5, 5, MARKER_COLOR)
            self._text(x, base, line, font, style.size, style.color)
            self.y += lh
        self.y += style.space_after

    def render_heading(self, block: Heading) -> None:
        section = block.kind == HEADING_SECTION
        style = SECTION_HEADING_STYLE if section else HEADING_STYLE
        lines = wrap_text(block.text, self.bold_font, style.size, self.geometry.content_width - 5)
        self._flow_lines(lines, style, self.geometry.margin + HEADING_INSET, marker=section)

    def render_list_item(self, block: ListItem) -> None:
        if block.kind == LIST_BULLET:
            indent = BULLET_INDENT
            text = f"{BULLET_GLYPH} {block.text}"
        else:
            indent = 0.0
            text = block.text
        lines = wrap_text(text, self.font, LIST_STYLE.size, self.geometry.content_width - indent)
        self._flow_lines(lines, LIST_STYLE, self.geometry.margin + indent)

    def render_paragraph(self, block: Paragraph) -> None:
        lines = wrap_text(block.text, self.font, PARAGRAPH_STYLE.size, self.geometry.content_width)
        self._flow_lines(lines, PARAGRAPH_STYLE, self.geometry.margin)

    def render_blank(self) -> None:
        self.ensure_room(BLANK_HEIGHT)
        self.y += BLANK_HEIGHT

    def render_block(self, block: Block) -> None:
        if isinstance(block, Heading):
            self.render_heading(block)
        elif isinstance(block, ListItem):
            self.render_list_item(block)
        elif isinstance(block, Paragraph):
            self.render_paragraph(block)
        elif isinstance(block, Blank):
            self.render_blank()
        else:
            raise TypeError(f"Unsupported block: {block!r}")
        self.document.blocks.append(block)

    # -- tables -----------------------------------------------------------

    def render_table(self, table: Table) -> None:
        """Lay out a flushed table; rows are never split, cells never wrap."""
        g = self.geometry
        rows = table.rows
        cols = max(table.column_count, 1)
        col_w = g.content_width / cols
        whole = self._keep_together(len(rows) * TABLE_ROW_HEIGHT + TABLE_SPACING)

        for r, row in enumerate(rows):
            if not whole:
                last = r == len(rows) - 1
                self.ensure_room(TABLE_ROW_HEIGHT + (TABLE_SPACING if last else 0))
            if r == 0:
                self._fill(g.margin, self.y, g.content_width, TABLE_ROW_HEIGHT, TABLE_HEADER_FILL)
                font, color = self.bold_font, (40, 40, 40)
            else:
                if r % 2 == 0:
                    self._fill(g.margin, self.y, g.content_width, TABLE_ROW_HEIGHT, TABLE_ZEBRA_FILL)
                font, color = self.font, (60, 60, 60)

            self._rule(g.margin, g.width - g.margin, self.y + TABLE_ROW_HEIGHT, TABLE_RULE_COLOR, 0.15)
            base = self.y + 4.5
            for c, cell in enumerate(row.cells[:cols]):
                cell_x = g.margin + c * col_w + TABLE_CELL_PADDING
                self._text(cell_x, base, truncate(cell, TABLE_CELL_LIMIT), font, TABLE_FONT_SIZE, color)
            self.y += TABLE_ROW_HEIGHT

        self.y += TABLE_SPACING
        self.document.blocks.append(table)

    def render(self, item: Item) -> None:
        if isinstance(item, Table):
            self.render_table(item)
        else:
            self.render_block(item)

    # -- front matter -----------------------------------------------------

    def render_letterhead(self, path: str) -> None:
        """Draw the letterhead image across the top of the current page."""
        g = self.geometry
        try:
            with Image.open(path) as img:
                img_w, img_h = img.size
        except OSError as exc:
            print(f"Warning: could not load letterhead {path}: {exc}")
            return
        if not img_w or not img_h:
            return

        width = g.content_width
        height = img_h / img_w * width
        if height > LETTERHEAD_MAX_HEIGHT:
            height = LETTERHEAD_MAX_HEIGHT
            width = img_w / img_h * height
        self.ensure_room(height + 8)
        x = g.margin + (g.content_width - width) / 2
        self.page.items.append(ImageItem(x=x, y=self.y, width=width, height=height, src_path=path))
        self.y += height + 3
        self._rule(g.margin, g.width - g.margin, self.y)
        self.y += 5

    def render_title(self, title: str, issued_on: Optional[dt.date] = None) -> None:
        g = self.geometry
        lines = wrap_text(title.upper(), self.bold_font, TITLE_STYLE.size, g.content_width - 20)
        whole = self._keep_together(TITLE_STYLE.block_height(len(lines)) + 20)
        self.y += TITLE_STYLE.space_before
        for line in lines:
            if not whole:
                self.ensure_room(TITLE_STYLE.line_height)
            self._text(g.width / 2, baseline(self.y, TITLE_STYLE.line_height), line,
                       self.bold_font, TITLE_STYLE.size, TITLE_STYLE.color, align="center")
            self.y += TITLE_STYLE.line_height
        self.y += TITLE_STYLE.space_after

        self.ensure_room(20)
        self._rule(g.margin + 30, g.width - g.margin - 30, self.y, (180, 180, 180), 0.4)
        self.y += 8
        issued_on = issued_on or dt.date.today()
        label = f"{self.settings.date_label}: {issued_on.strftime(self.settings.date_format)}"
        self._text(g.width / 2, self.y, label, self.font, 9, (120, 120, 120), align="center")
        self.y += 12
