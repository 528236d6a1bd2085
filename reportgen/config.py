import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
CONFIG_PATH = os.path.join(CONFIG_DIR, "report.json")


@dataclass
class PageGeometry:
    """A4 portrait page in millimetres."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 22.0
    footer_reserve: float = 20.0

    @property
    def top(self) -> float:
        return self.margin

    @property
    def bottom(self) -> float:
        return self.height - self.margin - self.footer_reserve

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        return self.bottom - self.top


@dataclass
class ClinicInfo:
    name: str = ""
    services_description: str = ""
    tax_id: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""

    def footer_lines(self) -> list:
        if not self.name:
            return []
        lines = [self.name]
        if self.services_description:
            lines.append(self.services_description)
        if self.tax_id:
            lines.append(f"Tax ID: {self.tax_id}")
        address_phone = []
        if self.address:
            address_phone.append(self.address)
        if self.phone:
            address_phone.append(f"Tel: {self.phone}")
        if address_phone:
            lines.append(" | ".join(address_phone))
        if self.email:
            lines.append(self.email)
        return lines


@dataclass
class ReportSettings:
    geometry: PageGeometry = field(default_factory=PageGeometry)
    clinic: ClinicInfo = field(default_factory=ClinicInfo)
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"
    font_path: Optional[str] = None
    bold_font_path: Optional[str] = None
    letterhead_path: Optional[str] = None
    page_label: str = "Page {page} of {total}"
    signature_label: str = "Responsible Party"
    signature_caption: str = "(signature and seal)"
    date_label: str = "Issued"
    date_format: str = "%d %B %Y"
    max_pages: int = 500
    deterministic: bool = True


def _apply(target: Any, values: Dict[str, Any]) -> None:
    known = {f.name for f in fields(target)}
    for key, value in values.items():
        if key in known and not isinstance(value, dict):
            setattr(target, key, value)


def settings_from_dict(data: Dict[str, Any]) -> ReportSettings:
    settings = ReportSettings()
    _apply(settings, data)
    _apply(settings.geometry, data.get("geometry") or {})
    _apply(settings.clinic, data.get("clinic") or {})
    if settings.letterhead_path and not os.path.isabs(settings.letterhead_path):
        settings.letterhead_path = os.path.join(PROJECT_ROOT, settings.letterhead_path)
    return settings


def load_settings(path: Optional[str] = None) -> ReportSettings:
    """Load report settings from config/report.json, falling back to defaults."""
    cfg_path = path or CONFIG_PATH
    if not os.path.exists(cfg_path):
        print(f"Warning: report config not found at {cfg_path}; using defaults")
        return ReportSettings()

    try:
        with open(cfg_path, "r", encoding="utf-8") as cfg_file:
            data = json.load(cfg_file) or {}
    except (OSError, ValueError) as exc:
        print(f"Warning: Could not load report config from {cfg_path}: {exc}")
        return ReportSettings()

    return settings_from_dict(data)
