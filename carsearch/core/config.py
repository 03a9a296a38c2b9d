"""Static configuration for the CarSearch backend."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from carsearch.core.env_loader import load_env

PACKAGE_DIR = Path(__file__).resolve().parent.parent

_TRUE_VALUES = {"1", "true", "yes", "on", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "off", "n", "f"}
_UNLIMITED_VALUES = {"0", "all", "none", "unlimited"}

DEFAULT_MAX_IMAGES = 4


def _get_env_flag(name: str, default: bool = False) -> bool:
    """Return a boolean read from an environment variable."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return Path(value.strip()).expanduser()


def _get_env_image_limit(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _UNLIMITED_VALUES:
        return None
    try:
        limit = int(normalized)
    except ValueError:
        return default
    return limit if limit > 0 else default


@dataclass(frozen=True)
class Settings:
    """Global parameters read from the environment."""

    DEBUG: bool = False
    DATA_DIR: Path = PACKAGE_DIR / "data"
    UPLOADS_DIR: Path = PACKAGE_DIR / "uploads"
    PDF_MAX_IMAGES: int | None = DEFAULT_MAX_IMAGES


load_env()

settings = Settings(
    DEBUG=_get_env_flag("CARSEARCH_DEBUG", default=False),
    DATA_DIR=_get_env_path("CARSEARCH_DATA_DIR", PACKAGE_DIR / "data"),
    UPLOADS_DIR=_get_env_path("CARSEARCH_UPLOADS_DIR", PACKAGE_DIR / "uploads"),
    PDF_MAX_IMAGES=_get_env_image_limit("PDF_MAX_IMAGES", DEFAULT_MAX_IMAGES),
)
