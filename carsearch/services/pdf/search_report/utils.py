"""Utility helpers for search report generation."""
from __future__ import annotations

from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

CURRENCY_SYMBOL = "€"


def format_date(date_value: datetime) -> str:
    return date_value.strftime("%d %B %Y")


def format_price(amount: int) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,}"


def format_price_range(min_price: int, max_price: int) -> str:
    # Shown as stored, even when the bounds are out of order.
    return f"{format_price(min_price)} - {format_price(max_price)}"


def text_width(text: str, font_name: str, font_size: float) -> float:
    return pdfmetrics.stringWidth(text, font_name, font_size)


def _split_long_word(word: str, max_width: float, font_name: str, font_size: float) -> list[str]:
    chunks: list[str] = []
    chunk = ""
    for char in word:
        if text_width(chunk + char, font_name, font_size) <= max_width:
            chunk += char
        else:
            if chunk:
                chunks.append(chunk)
            chunk = char
    if chunk:
        chunks.append(chunk)
    return chunks


def wrap_text(value: str, max_width: float, font_name: str, font_size: float) -> list[str]:
    """Word-wrap ``value`` to ``max_width`` points, keeping explicit line breaks."""

    lines: list[str] = []
    for paragraph in value.splitlines():
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}".strip()
            if text_width(candidate, font_name, font_size) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if text_width(word, font_name, font_size) <= max_width:
                current = word
                continue
            *full, current = _split_long_word(word, max_width, font_name, font_size)
            lines.extend(full)
        if current:
            lines.append(current)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def fit_box(
    image_width: float,
    image_height: float,
    box: tuple[float, float, float, float],
) -> tuple[float, float, float, float]:
    """Scale an image into ``box`` preserving its ratio, centered."""

    x, y, width, height = box
    scale = min(width / image_width, height / image_height)
    drawn_width = image_width * scale
    drawn_height = image_height * scale
    return x + (width - drawn_width) / 2, y + (height - drawn_height) / 2, drawn_width, drawn_height


class PdfBuffer(BytesIO):
    """In-memory PDF buffer that builds a ReportLab canvas."""

    def build_canvas(self, *, compress: bool = True) -> Canvas:
        return Canvas(self, pagesize=A4, pageCompression=1 if compress else 0)
