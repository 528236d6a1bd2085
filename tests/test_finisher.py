import datetime as dt

from reportgen.config import ClinicInfo, ReportSettings
from reportgen.docs.pipeline import build_document
from reportgen.layout import PageFlow, finish_document
from reportgen.layout.blocks import Paragraph

LONG_CONTENT = "\n".join(f"Session note {i}: " + "progress observed " * 20 for i in range(60))


def test_footer_reads_page_i_of_n_on_every_page():
    doc = build_document("Monthly report", LONG_CONTENT, ReportSettings(), issued_on=dt.date(2024, 1, 31))
    n = doc.page_count
    assert n >= 2
    for i, page in enumerate(doc.pages, start=1):
        assert page.footer == f"Page {i} of {n}"
        assert page.footer in page.texts()


def test_signature_block_closes_last_page():
    doc = build_document("Report", "Short body.", ReportSettings(), issued_on=dt.date(2024, 1, 31))
    assert doc.page_count == 1
    texts = doc.pages[-1].texts()
    label = texts.index("Responsible Party")
    assert texts[label + 1] == "(signature and seal)"
    assert texts.index("Short body.") < label


def test_signature_breaks_page_when_no_room_left():
    flow = PageFlow(ReportSettings())
    flow.render(Paragraph(text="last words"))
    flow.y = flow.geometry.bottom - 10
    doc = finish_document(flow)
    assert doc.page_count == 2
    assert "Responsible Party" in doc.pages[1].texts()
    assert [p.footer for p in doc.pages] == ["Page 1 of 2", "Page 2 of 2"]


def test_clinic_footer_on_every_page():
    clinic = ClinicInfo(name="Clinica Viva", tax_id="12.345", address="Rua A, 10", phone="555-0101",
                        email="contact@viva.test")
    settings = ReportSettings(clinic=clinic)
    doc = build_document("Report", LONG_CONTENT, settings, issued_on=dt.date(2024, 1, 31))
    for page in doc.pages:
        texts = page.texts()
        assert "Clinica Viva" in texts
        assert "Tax ID: 12.345" in texts
        assert "Rua A, 10 | Tel: 555-0101" in texts
        assert "contact@viva.test" in texts


def test_custom_page_label():
    settings = ReportSettings(page_label="Página {page} de {total}")
    doc = build_document("Relatório", "Texto.", settings, issued_on=dt.date(2024, 1, 31))
    assert doc.pages[0].footer == "Página 1 de 1"


def test_rendering_is_repeatable():
    content = "1. IDENTIFICATION\n| Field | Value |\n| --- | --- |\n| Name | Ana |\n" + LONG_CONTENT
    first = build_document("Report", content, ReportSettings(), issued_on=dt.date(2024, 1, 31))
    second = build_document("Report", content, ReportSettings(), issued_on=dt.date(2024, 1, 31))
    assert first.page_count == second.page_count
    assert first.blocks == second.blocks
    assert [p.items for p in first.pages] == [p.items for p in second.pages]
