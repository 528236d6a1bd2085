from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from reportgen.config import ReportSettings

from .buffer import OutputBuffer, OutputWriteError
from .model import Document, ImageItem, LineItem, Page, RectItem, TextItem


def _rgb(color) -> tuple:
    return tuple(c / 255.0 for c in color)


def _draw_page(c: canvas.Canvas, page: Page, page_height: float) -> None:
    def flip(y: float) -> float:
        return (page_height - y) * mm

    for item in page.items:
        if isinstance(item, RectItem):
            c.setFillColorRGB(*_rgb(item.fill))
            c.rect(item.x * mm, flip(item.y + item.height), item.width * mm, item.height * mm, stroke=0, fill=1)
        elif isinstance(item, LineItem):
            c.setStrokeColorRGB(*_rgb(item.color))
            c.setLineWidth(item.width * mm)
            c.line(item.x1 * mm, flip(item.y1), item.x2 * mm, flip(item.y2))
        elif isinstance(item, TextItem):
            c.setFillColorRGB(*_rgb(item.color))
            c.setFont(item.font, item.size)
            if item.align == "center":
                c.drawCentredString(item.x * mm, flip(item.y), item.text)
            else:
                c.drawString(item.x * mm, flip(item.y), item.text)
        elif isinstance(item, ImageItem):
            c.drawImage(item.src_path, item.x * mm, flip(item.y + item.height),
                        width=item.width * mm, height=item.height * mm, mask="auto")


def write_pdf(doc: Document, out_path: str, settings: ReportSettings) -> str:
    """Write the laid-out document to `out_path`; nothing is left behind on failure."""
    g = settings.geometry
    with OutputBuffer(out_path) as buf:
        c = canvas.Canvas(buf.path, pagesize=(g.width * mm, g.height * mm),
                          invariant=1 if settings.deterministic else 0)
        c.setTitle(doc.title)
        for page in doc.pages:
            _draw_page(c, page, g.height)
            c.showPage()
        try:
            c.save()
        except OSError as exc:
            raise OutputWriteError(f"Cannot write PDF {out_path}: {exc}") from exc
        return buf.commit()
