"""Block types and the single-pass line classifier.

Each physical line of report text maps to at most one block. Rules are tried
in a fixed order and the first match wins:

1. divider (``---``, ``***``, ``===``) and table separator rows: dropped
2. ``| a | b |`` with at least two non-empty cells: table row
3. empty line: blank
4. ``1. Title`` / ``2.3 Title`` under 100 chars: section heading
5. upper-case line of 4..79 chars not starting with a digit: all-caps heading
6. ``#``, ``##`` or ``###`` followed by a space: markdown heading
7. ``- item`` / ``• item``: bullet item
8. ``1) item``: numbered item
9. anything else: paragraph
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

_TAG_RE = re.compile(r"<[^>]+>")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

_DIVIDER_RE = re.compile(r"^[-*=]{3,}$")
_TABLE_SEPARATOR_RE = re.compile(r"^\|[\s\-:|]+\|$")
_SECTION_HEADING_RE = re.compile(r"^\d+(\.\d+)?\.?\s")
_MARKDOWN_HEADING_RE = re.compile(r"^#{1,3}\s")
_BULLET_RE = re.compile(r"^[-•]\s")
_NUMBERED_RE = re.compile(r"^\d+\)\s")

HEADING_SECTION = "section"
HEADING_ALL_CAPS = "allCaps"
HEADING_MARKDOWN = "markdown"

LIST_BULLET = "bullet"
LIST_NUMBERED = "numbered"


@dataclass
class Blank:
    pass


@dataclass
class TableRow:
    cells: List[str] = field(default_factory=list)


@dataclass
class Heading:
    text: str
    kind: str


@dataclass
class ListItem:
    text: str
    kind: str


@dataclass
class Paragraph:
    text: str


Block = Union[Blank, TableRow, Heading, ListItem, Paragraph]


def strip_markup(content: str) -> str:
    """Turn HTML-ish editor output into plain lines.

    Tags become line breaks, entities are decoded, runs of three or more
    newlines collapse to one empty line.
    """
    text = _TAG_RE.sub("\n", content or "")
    text = html.unescape(text).replace("\xa0", " ")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def is_divider(line: str) -> bool:
    return bool(_DIVIDER_RE.match(line))


def is_table_separator(line: str) -> bool:
    return bool(_TABLE_SEPARATOR_RE.match(line))


def _table_cells(line: str) -> Optional[List[str]]:
    if not (line.startswith("|") and line.endswith("|")):
        return None
    cells = [c.strip() for c in line.split("|") if c.strip() != ""]
    if len(cells) < 2:
        return None
    return cells


def _is_all_caps(line: str) -> bool:
    return line == line.upper() and 3 < len(line) < 80 and not line[0].isdigit()


def classify_line(line: str) -> Optional[Block]:
    """Classify one physical line; None means the line is dropped."""
    trimmed = line.strip()

    if is_divider(trimmed) or is_table_separator(trimmed):
        return None

    cells = _table_cells(trimmed)
    if cells is not None:
        return TableRow(cells=cells)

    if trimmed == "":
        return Blank()

    if _SECTION_HEADING_RE.match(trimmed) and len(trimmed) < 100:
        return Heading(text=_MARKDOWN_HEADING_RE.sub("", trimmed, count=1), kind=HEADING_SECTION)

    if _is_all_caps(trimmed):
        return Heading(text=_MARKDOWN_HEADING_RE.sub("", trimmed, count=1), kind=HEADING_ALL_CAPS)

    if _MARKDOWN_HEADING_RE.match(trimmed):
        return Heading(text=_MARKDOWN_HEADING_RE.sub("", trimmed, count=1), kind=HEADING_MARKDOWN)

    if _BULLET_RE.match(trimmed):
        return ListItem(text=trimmed[2:].strip(), kind=LIST_BULLET)

    if _NUMBERED_RE.match(trimmed):
        return ListItem(text=trimmed, kind=LIST_NUMBERED)

    return Paragraph(text=trimmed)
