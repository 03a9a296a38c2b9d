"""Color helpers shared by the PDF renderers."""
from __future__ import annotations

import re

from reportlab.lib import colors

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR_RE = re.compile(r"^rgb\(([^)]+)\)$")


def parse_color(value: str | None) -> colors.Color:
    """Parse a branding color into a ReportLab color.

    Supported formats:
    - #RGB and #RRGGBB (the leading ``#`` is optional)
    - rgb(r, g, b) with components in 0..255
    """
    if value is None:
        raise ValueError("Missing color.")
    candidate = value.strip()
    if not candidate:
        raise ValueError("Empty color.")

    match = _HEX_COLOR_RE.match(candidate)
    if match:
        hex_value = match.group(1)
        if len(hex_value) == 3:
            hex_value = "".join(char * 2 for char in hex_value)
        return colors.HexColor(f"#{hex_value.lower()}")

    match = _RGB_COLOR_RE.match(candidate.lower())
    if match:
        parts = [part.strip() for part in match.group(1).split(",")]
        if len(parts) != 3:
            raise ValueError(f"Invalid rgb() color: {value!r}")
        try:
            components = [int(part) for part in parts]
        except ValueError as exc:
            raise ValueError(f"Invalid rgb() components: {value!r}") from exc
        if any(component < 0 or component > 255 for component in components):
            raise ValueError(f"rgb() components out of range (0-255): {value!r}")
        red, green, blue = components
        return colors.Color(red / 255, green / 255, blue / 255)

    raise ValueError(f"Unsupported color format: {value!r}")


def safe_color(value: str | None, fallback: str) -> colors.Color:
    """Parse ``value`` and fall back to ``fallback`` when it is unset or invalid."""
    try:
        return parse_color(value)
    except ValueError:
        return parse_color(fallback)
