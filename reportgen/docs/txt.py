from __future__ import annotations

import os

TEXT_EXTS = (".txt", ".md", ".html", ".htm")


def read_txt(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def read_content(path: str) -> str:
    """Read report content from a text, HTML or DOCX file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    ext = os.path.splitext(path)[1].lower()
    if ext in TEXT_EXTS:
        return read_txt(path)
    if ext == ".docx":
        from .docx_io import read_docx

        return read_docx(path)
    raise ValueError(f"Unsupported file type: {path}")
