from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from .blocks import Blank, Block, TableRow, classify_line, is_table_separator, strip_markup


@dataclass
class Table:
    rows: List[TableRow] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0

    @property
    def header(self) -> Optional[TableRow]:
        return self.rows[0] if self.rows else None


class TableAccumulator:
    """Holds the one table that may be open while table rows are read."""

    def __init__(self) -> None:
        self.open: Optional[Table] = None

    @property
    def is_open(self) -> bool:
        return self.open is not None

    def add(self, row: TableRow) -> None:
        if self.open is None:
            self.open = Table()
        self.open.rows.append(row)

    def flush(self) -> Optional[Table]:
        table, self.open = self.open, None
        return table


Item = Union[Block, Table]


def iter_blocks(content: str) -> Iterator[Item]:
    """Yield blocks and closed tables in document order.

    Separator rows are swallowed without closing the open table. Blank lines
    met while a table is open are held: dropped if another row follows,
    emitted after the table otherwise. Any other line (dividers included)
    closes the table before that line is handled.
    """
    acc = TableAccumulator()
    held: List[Blank] = []
    for raw_line in strip_markup(content).split("\n"):
        trimmed = raw_line.strip()
        if is_table_separator(trimmed):
            continue

        block = classify_line(trimmed)
        if isinstance(block, TableRow):
            acc.add(block)
            held = []
            continue
        if isinstance(block, Blank) and acc.is_open:
            held.append(block)
            continue

        if acc.is_open:
            yield acc.flush()
            yield from held
            held = []
        if block is not None:
            yield block

    if acc.is_open:
        yield acc.flush()
