"""Paginated report rendering from semi-structured text."""

from .config import ReportSettings, load_settings
from .docs.pipeline import build_document, process_content_file, render_report, safe_file_name

__all__ = [
    "ReportSettings",
    "load_settings",
    "build_document",
    "process_content_file",
    "render_report",
    "safe_file_name",
]
