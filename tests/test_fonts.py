from reportgen.config import ReportSettings
from reportgen.render.fonts import configure_fonts, measure, truncate, wrap_text


def test_wrap_text_respects_width():
    text = "The patient showed consistent engagement during all sessions of the period " * 5
    lines = wrap_text(text, "Helvetica", 10, 80)
    assert len(lines) > 1
    assert all(measure(line, "Helvetica", 10) <= 80 for line in lines)
    assert " ".join(lines) == " ".join(text.split())


def test_wrap_text_splits_words_longer_than_the_line():
    lines = wrap_text("a " + "x" * 200, "Helvetica", 10, 40)
    assert lines[0] == "a"
    assert "".join(lines[1:]) == "x" * 200
    assert all(measure(line, "Helvetica", 10) <= 40 for line in lines)


def test_wrap_text_empty_gives_one_line():
    assert wrap_text("", "Helvetica", 10, 100) == [""]


def test_truncate_cells():
    assert truncate("short") == "short"
    assert truncate("y" * 45) == "y" * 45
    out = truncate("y" * 46)
    assert out == "y" * 42 + "..."
    assert len(out) == 45


def test_missing_font_falls_back_to_builtin(capsys):
    settings = ReportSettings(font_path="definitely-not-installed.ttf")
    assert configure_fonts(settings) == ("Helvetica", "Helvetica-Bold")
    assert "Warning" in capsys.readouterr().out


def test_regular_font_only_keeps_builtin_bold(monkeypatch, capsys):
    from reportgen.render import fonts

    monkeypatch.setattr(fonts, "_register_ttf", lambda path: "CustomSans")
    settings = ReportSettings(font_path="CustomSans.ttf")
    assert configure_fonts(settings) == ("CustomSans", "Helvetica-Bold")
    assert "bold_font_path" in capsys.readouterr().out


def test_regular_and_bold_fonts_both_registered(monkeypatch):
    from reportgen.render import fonts

    monkeypatch.setattr(fonts, "_register_ttf", lambda path: path.rsplit(".", 1)[0])
    settings = ReportSettings(font_path="Sans.ttf", bold_font_path="Sans-Bold.ttf")
    assert configure_fonts(settings) == ("Sans", "Sans-Bold")
