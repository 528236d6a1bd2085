import json

from reportgen.config import ClinicInfo, PageGeometry, load_settings, settings_from_dict


def test_geometry_defaults_are_a4():
    g = PageGeometry()
    assert (g.width, g.height) == (210.0, 297.0)
    assert g.content_width == 166.0
    assert g.bottom == 255.0
    assert g.usable_height == 233.0


def test_missing_config_uses_defaults(tmp_path, capsys):
    settings = load_settings(str(tmp_path / "absent.json"))
    assert settings.page_label == "Page {page} of {total}"
    assert "Warning" in capsys.readouterr().out


def test_invalid_config_uses_defaults(tmp_path, capsys):
    path = tmp_path / "report.json"
    path.write_text("{not json", encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.max_pages == 500
    assert "Warning" in capsys.readouterr().out


def test_config_overrides_nested_sections(tmp_path):
    path = tmp_path / "report.json"
    path.write_text(json.dumps({
        "geometry": {"margin": 20},
        "clinic": {"name": "Clinica Viva", "unknown": 1},
        "signature_label": "Responsável Técnico",
        "nonsense": True,
    }), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.geometry.margin == 20
    assert settings.geometry.height == 297.0
    assert settings.clinic.name == "Clinica Viva"
    assert settings.signature_label == "Responsável Técnico"


def test_letterhead_path_resolved_from_project_root():
    settings = settings_from_dict({"letterhead_path": "config/letterhead.png"})
    assert settings.letterhead_path.endswith("config/letterhead.png")
    assert settings.letterhead_path != "config/letterhead.png"


def test_clinic_footer_lines():
    assert ClinicInfo().footer_lines() == []
    clinic = ClinicInfo(name="A", services_description="Speech therapy", phone="1")
    assert clinic.footer_lines() == ["A", "Speech therapy", "Tel: 1"]
