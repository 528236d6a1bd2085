"""Report text layout: classification, table accumulation, page flow.

This package turns loosely formatted report text into a paginated
``Document`` model without touching the filesystem.
"""

from .blocks import (
    Blank,
    Block,
    Heading,
    ListItem,
    Paragraph,
    TableRow,
    classify_line,
    strip_markup,
)
from .table import Table, TableAccumulator, iter_blocks
from .engine import LayoutOverflow, PageFlow
from .finisher import append_signature, finish_document, stamp_footers

__all__ = [
    "Blank",
    "Block",
    "Heading",
    "ListItem",
    "Paragraph",
    "TableRow",
    "classify_line",
    "strip_markup",
    "Table",
    "TableAccumulator",
    "iter_blocks",
    "LayoutOverflow",
    "PageFlow",
    "append_signature",
    "finish_document",
    "stamp_footers",
]
