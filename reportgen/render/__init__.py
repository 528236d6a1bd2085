"""Font handling and text measurement."""

from .fonts import (
    configure_fonts,
    find_font_path,
    measure,
    truncate,
    wrap_text,
)

__all__ = [
    "configure_fonts",
    "find_font_path",
    "measure",
    "truncate",
    "wrap_text",
]
