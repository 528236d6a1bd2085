from __future__ import annotations

from typing import Iterable, List

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from docx.table import Table as DocxTable
from docx.text.paragraph import Paragraph as DocxParagraph

from reportgen.config import ReportSettings
from reportgen.layout.blocks import (
    HEADING_MARKDOWN,
    LIST_BULLET,
    Blank,
    Heading,
    ListItem,
    Paragraph,
)
from reportgen.layout.table import Item, Table

from .buffer import OutputBuffer, OutputWriteError


def _table_to_lines(table: DocxTable) -> List[str]:
    lines: List[str] = []
    for ri, row in enumerate(table.rows):
        cells = [cell.text.strip().replace("|", "/") or "-" for cell in row.cells]
        lines.append("| " + " | ".join(cells) + " |")
        if ri == 0:
            lines.append("| " + " | ".join("---" for _ in cells) + " |")
    return lines


def read_docx(path: str) -> str:
    """Return the document body as report text; tables become pipe rows."""
    d = DocxDocument(path)
    lines: List[str] = []
    for block in d.iter_inner_content():
        if isinstance(block, DocxParagraph):
            lines.append(block.text)
        elif isinstance(block, DocxTable):
            lines.extend(_table_to_lines(block))
            lines.append("")
    return "\n".join(lines)


def _add_table(d, table: Table) -> None:
    cols = max(table.column_count, 1)
    t = d.add_table(rows=len(table.rows), cols=cols)
    t.style = "Table Grid"
    for r, row in enumerate(table.rows):
        for c in range(cols):
            text = row.cells[c] if c < len(row.cells) else ""
            cell = t.cell(r, c)
            cell.text = text
            if r == 0:
                for run in cell.paragraphs[0].runs:
                    run.bold = True


def _add_centered(d, text: str, bold: bool = False, size: float | None = None) -> None:
    p = d.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = p.add_run(text)
    run.bold = bold
    if size:
        run.font.size = Pt(size)


def write_docx(items: Iterable[Item], title: str, out_path: str, settings: ReportSettings) -> str:
    """Write the classified block stream as an editable DOCX report."""
    d = DocxDocument()
    d.add_heading(title.upper(), level=0)

    for item in items:
        if isinstance(item, Table):
            _add_table(d, item)
            d.add_paragraph()
        elif isinstance(item, Heading):
            d.add_heading(item.text, level=2 if item.kind == HEADING_MARKDOWN else 1)
        elif isinstance(item, ListItem):
            if item.kind == LIST_BULLET:
                d.add_paragraph(item.text, style="List Bullet")
            else:
                d.add_paragraph(item.text)
        elif isinstance(item, Paragraph):
            d.add_paragraph(item.text)
        elif isinstance(item, Blank):
            continue

    d.add_paragraph()
    _add_centered(d, "_" * 32)
    _add_centered(d, settings.signature_label, bold=True, size=9)
    _add_centered(d, settings.signature_caption, size=7.5)

    clinic_lines = settings.clinic.footer_lines()
    if clinic_lines:
        footer = d.sections[0].footer
        footer.paragraphs[0].text = "\n".join(clinic_lines)
        footer.paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.CENTER

    with OutputBuffer(out_path) as buf:
        try:
            d.save(buf.path)
        except OSError as exc:
            raise OutputWriteError(f"Cannot write DOCX {out_path}: {exc}") from exc
        return buf.commit()
