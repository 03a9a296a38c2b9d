"""Branding resolution for the search report."""
from __future__ import annotations

from dataclasses import dataclass, field

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics

from carsearch.core.models import BrandingProfile
from carsearch.core.pdf_theme import safe_color

DEFAULT_PRIMARY_COLOR = "#4a6da7"
DEFAULT_SECONDARY_COLOR = "#333333"
DEFAULT_COMPANY_NAME = "CarSearch Pro"
DEFAULT_CONTACT_INFO = "Tel: 020-123456 | info@carsearchpro.nl | www.carsearchpro.nl"
DEFAULT_HEADER_FONT = "Helvetica-Bold"
DEFAULT_BODY_FONT = "Helvetica"

LIGHT_GRAY = "#f3f4f6"
MEDIUM_GRAY = "#e5e7eb"
DARK_GRAY = "#9ca3af"


@dataclass(frozen=True)
class ResolvedStyle:
    primary_color: colors.Color
    text_color: colors.Color
    company_name: str
    contact_info: str
    logo: str | None
    header_font: str
    body_font: str
    light_gray: colors.Color = field(default_factory=lambda: colors.HexColor(LIGHT_GRAY))
    medium_gray: colors.Color = field(default_factory=lambda: colors.HexColor(MEDIUM_GRAY))
    muted_color: colors.Color = field(default_factory=lambda: colors.HexColor(DARK_GRAY))
    on_primary: colors.Color = field(default_factory=lambda: colors.white)

    @property
    def tagline(self) -> str:
        return f"{self.company_name} - Your specialist in car searches"


def _text_or_default(value: str | None, default: str) -> str:
    if value is None:
        return default
    stripped = value.strip()
    return stripped or default


def _available_fonts() -> set[str]:
    return set(pdfmetrics.standardFonts) | set(pdfmetrics.getRegisteredFontNames())


def _font_or_default(value: str | None, default: str) -> str:
    name = _text_or_default(value, default)
    return name if name in _available_fonts() else default


def resolve_style(branding: BrandingProfile | None) -> ResolvedStyle:
    """Merge an organization's branding with the defaults."""

    branding = branding or BrandingProfile()
    logo = branding.logo.strip() if branding.logo and branding.logo.strip() else None
    return ResolvedStyle(
        primary_color=safe_color(branding.primary_color, DEFAULT_PRIMARY_COLOR),
        text_color=safe_color(branding.secondary_color, DEFAULT_SECONDARY_COLOR),
        company_name=_text_or_default(branding.company_name, DEFAULT_COMPANY_NAME),
        contact_info=_text_or_default(branding.contact_info, DEFAULT_CONTACT_INFO),
        logo=logo,
        header_font=_font_or_default(branding.header_font, DEFAULT_HEADER_FONT),
        body_font=_font_or_default(branding.body_font, DEFAULT_BODY_FONT),
    )
