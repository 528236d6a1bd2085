"""Document model and output layer (PDF, DOCX) plus content readers.

Exposes:
- Data model: Document, Page, TextItem, RectItem, LineItem, ImageItem
- Output buffer: OutputBuffer (temp file committed into place on success)
- Writers: pdf (reportlab canvas), docx (python-docx)
- Readers: txt/html, docx
"""

from .model import Document, Page, TextItem, RectItem, LineItem, ImageItem
from .buffer import OutputBuffer, OutputWriteError

__all__ = [
    "Document",
    "Page",
    "TextItem",
    "RectItem",
    "LineItem",
    "ImageItem",
    "OutputBuffer",
    "OutputWriteError",
]
