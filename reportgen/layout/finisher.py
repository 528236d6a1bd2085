from __future__ import annotations

from reportgen.config import ReportSettings
from reportgen.docs.model import Document, LineItem, TextItem

from .engine import PageFlow

SIGNATURE_GAP = 10.0
SIGNATURE_RESERVE = 40.0
SIGNATURE_LINE_WIDTH = 65.0

FOOTER_LINE_HEIGHT = 3.0
PAGE_NUMBER_OFFSET = 8.0


def append_signature(flow: PageFlow) -> None:
    """Close the content with a rule, a signature line and its labels."""
    g = flow.geometry
    flow.ensure_room(SIGNATURE_GAP + SIGNATURE_RESERVE)
    flow.y += SIGNATURE_GAP

    flow.page.items.append(LineItem(g.margin, flow.y, g.width - g.margin, flow.y, (200, 200, 200), 0.3))
    flow.y += 15
    sig_x = g.width / 2 - SIGNATURE_LINE_WIDTH / 2
    flow.page.items.append(LineItem(sig_x, flow.y, sig_x + SIGNATURE_LINE_WIDTH, flow.y, (100, 100, 100), 0.3))
    flow.y += 5
    flow.page.items.append(TextItem(g.width / 2, flow.y, flow.settings.signature_label,
                                    flow.bold_font, 9, (60, 60, 60), align="center"))
    flow.y += 4
    flow.page.items.append(TextItem(g.width / 2, flow.y, flow.settings.signature_caption,
                                    flow.font, 7.5, (130, 130, 130), align="center"))


def stamp_footers(document: Document, settings: ReportSettings, font: str = "Helvetica") -> None:
    """Write the institutional footer and "Page i of N" on every page.

    Runs only after all content is laid out, when the page count is final.
    """
    g = settings.geometry
    total = document.page_count
    clinic_lines = settings.clinic.footer_lines()

    for i, page in enumerate(document.pages, start=1):
        if clinic_lines:
            block_height = len(clinic_lines) * FOOTER_LINE_HEIGHT + 6
            start_y = g.height - 10 - block_height
            page.items.append(LineItem(g.margin, start_y, g.width - g.margin, start_y, (200, 200, 200), 0.2))
            fy = start_y + 4
            for line in clinic_lines:
                page.items.append(TextItem(g.width / 2, fy, line, font, 6.5, (140, 140, 140), align="center"))
                fy += FOOTER_LINE_HEIGHT

        page.footer = settings.page_label.format(page=i, total=total)
        page.items.append(TextItem(g.width / 2, g.height - PAGE_NUMBER_OFFSET, page.footer,
                                   font, 7.5, (170, 170, 170), align="center"))


def finish_document(flow: PageFlow) -> Document:
    append_signature(flow)
    stamp_footers(flow.document, flow.settings, flow.font)
    return flow.document
