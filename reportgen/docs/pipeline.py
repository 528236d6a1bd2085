from __future__ import annotations

import datetime as dt
import os
import re
from typing import Optional

from reportgen.config import ReportSettings, load_settings
from reportgen.layout import PageFlow, finish_document, iter_blocks

from .docx_io import write_docx
from .model import Document
from .pdf_io import write_pdf
from .txt import read_content

OUT_FORMATS = ("pdf", "docx")


def safe_file_name(title: str, file_name: Optional[str] = None) -> str:
    """Base name for the artifact: whitespace and path separators become '_'."""
    base = (file_name or title or "report").strip()
    return re.sub(r"[\s/\\]+", "_", base)


def build_document(
    title: str,
    content: str,
    settings: Optional[ReportSettings] = None,
    issued_on: Optional[dt.date] = None,
) -> Document:
    """Lay out a report in memory: front matter, content blocks, signature, footers."""
    flow = PageFlow(settings, title=title)
    if flow.settings.letterhead_path:
        flow.render_letterhead(flow.settings.letterhead_path)
    flow.render_title(title, issued_on)
    for item in iter_blocks(content):
        flow.render(item)
    return finish_document(flow)


def render_report(
    title: str,
    content: str,
    file_name: Optional[str] = None,
    out_dir: str = ".",
    settings: Optional[ReportSettings] = None,
    out_format: str = "pdf",
    issued_on: Optional[dt.date] = None,
) -> str:
    """Render report text to `<out_dir>/<safe name>.<format>` and return the path.

    Layout runs entirely in memory; the file is written once at the end, and
    only if rendering succeeded.
    """
    out_format = out_format.lower()
    if out_format not in OUT_FORMATS:
        raise ValueError(f"Unsupported output format: {out_format}")
    settings = settings or load_settings()
    out_path = os.path.join(out_dir, f"{safe_file_name(title, file_name)}.{out_format}")

    if out_format == "docx":
        return write_docx(iter_blocks(content), title, out_path, settings)

    doc = build_document(title, content, settings, issued_on)
    return write_pdf(doc, out_path, settings)


def process_content_file(
    file_path: str,
    title: Optional[str] = None,
    out_format: str = "pdf",
    out_dir: Optional[str] = None,
    settings: Optional[ReportSettings] = None,
) -> str:
    """Render a report from a .txt/.html/.docx file, next to it by default."""
    content = read_content(file_path)
    base_name = os.path.splitext(os.path.basename(file_path))[0]
    return render_report(
        title=title or base_name.replace("_", " "),
        content=content,
        file_name=base_name if not title else None,
        out_dir=out_dir if out_dir is not None else os.path.dirname(os.path.abspath(file_path)),
        settings=settings,
        out_format=out_format,
    )
