"""Font resolution and text measurement for page layout.

Widths come from reportlab font metrics and are returned in millimetres so
the layout engine can compare them directly against page geometry.
"""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from reportgen.config import CONFIG_DIR, ReportSettings

_CONFIG_FONTS_DIR = os.path.join(CONFIG_DIR, "fonts")
SAFE_FONT_EXTS = (".ttf", ".otf", ".ttc")


def find_font_path(name: str) -> Optional[str]:
    """Locate a font file by absolute path or by name in the usual font dirs."""
    if os.path.isabs(name) and os.path.exists(name):
        return name
    env_paths = os.environ.get("FONT_PATH", "")
    for base in [p for p in env_paths.split(os.pathsep) if p.strip()]:
        p = os.path.join(base, name)
        if os.path.exists(p):
            return p
    candidates_dirs = []
    windir = os.environ.get("WINDIR") or os.environ.get("SystemRoot")
    if windir:
        candidates_dirs.append(os.path.join(windir, "Fonts"))
    candidates_dirs.append(_CONFIG_FONTS_DIR)
    candidates_dirs.append("/usr/share/fonts/truetype/dejavu")
    candidates_dirs.append(os.getcwd())
    try_name_lower = name.lower()
    for d in candidates_dirs:
        if not os.path.isdir(d):
            continue
        for fname in os.listdir(d):
            if fname.lower() == try_name_lower:
                return os.path.join(d, fname)
    return None


def _register_ttf(path_or_name: str) -> Optional[str]:
    if not path_or_name.lower().endswith(SAFE_FONT_EXTS):
        print(f"Warning: not a scalable font file: {path_or_name}")
        return None
    path = find_font_path(path_or_name)
    if not path:
        print(f"Warning: font not found: {path_or_name}; using built-in font")
        return None
    font_name = os.path.splitext(os.path.basename(path))[0]
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name
    try:
        pdfmetrics.registerFont(TTFont(font_name, path))
    except (TTFError, OSError) as exc:
        print(f"Warning: could not load font {path}: {exc}")
        return None
    return font_name


def configure_fonts(settings: ReportSettings) -> Tuple[str, str]:
    """Register configured TTF fonts and return (regular, bold) font names."""
    regular, bold = settings.font_name, settings.bold_font_name
    if settings.font_path:
        name = _register_ttf(settings.font_path)
        if name:
            regular = name
            if not settings.bold_font_path:
                print(f"Warning: no bold_font_path configured; using {bold} for bold text")
    if settings.bold_font_path:
        name = _register_ttf(settings.bold_font_path)
        if name:
            bold = name
    return regular, bold


def measure(text: str, font: str, size: float) -> float:
    """Width of `text` in millimetres."""
    return pdfmetrics.stringWidth(text, font, size) / mm


def _split_long_word(word: str, font: str, size: float, max_width: float) -> List[str]:
    parts: List[str] = []
    cur = ""
    for ch in word:
        if cur and measure(cur + ch, font, size) > max_width:
            parts.append(cur)
            cur = ch
        else:
            cur += ch
    if cur:
        parts.append(cur)
    return parts


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Greedy word wrap against the measured width; never returns an empty list."""
    words = str(text).split()
    if not words:
        return [""]
    lines: List[str] = []
    cur = ""
    for w_ in words:
        t = (cur + " " + w_) if cur else w_
        if measure(t, font, size) <= max_width:
            cur = t
            continue
        if cur:
            lines.append(cur)
        if measure(w_, font, size) > max_width:
            *head, cur = _split_long_word(w_, font, size, max_width)
            lines.extend(head)
        else:
            cur = w_
    if cur:
        lines.append(cur)
    return lines


def truncate(text: str, limit: int = 45) -> str:
    """Cut cell text longer than `limit` characters, ending it with '...'."""
    text = (text or "").strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
