"""Asset lookup and image decoding for the search report."""
from __future__ import annotations

from io import BytesIO
import logging
from typing import Protocol

from PIL import Image, ImageOps
from reportlab.lib.utils import ImageReader

from .models import PreparedImage

logger = logging.getLogger(__name__)


class AssetStoreError(Exception):
    """Raised by asset stores when a backend lookup fails."""


class AssetStore(Protocol):
    def fetch_bytes(self, reference: str) -> bytes | None:
        """Return the stored bytes, or None when nothing is stored under ``reference``.

        Lookup failures are reported as ``OSError`` or ``AssetStoreError``.
        """


class AssetError(Exception):
    def __init__(self, reference: str, message: str) -> None:
        super().__init__(message)
        self.reference = reference


class AssetMissing(AssetError):
    """The referenced asset does not exist in the store."""


class AssetUnreadable(AssetError):
    """The asset exists but cannot be decoded as an image."""


def _decode_image(data: bytes) -> Image.Image:
    with Image.open(BytesIO(data)) as img:
        oriented = ImageOps.exif_transpose(img)
        if oriented.mode in ("RGBA", "LA", "P"):
            working = oriented.convert("RGBA")
        else:
            working = oriented.convert("RGB")
        working.load()
    return working


class AssetResolver:
    """Looks up asset references in a store without raising for missing ones."""

    def __init__(self, store: AssetStore | None) -> None:
        self.store = store

    def resolve(self, reference: str | None) -> bytes | None:
        if not reference or self.store is None:
            return None
        try:
            return self.store.fetch_bytes(reference)
        except (OSError, AssetStoreError) as exc:
            logger.warning("[search_report_pdf] asset fetch failed ref=%s: %s", reference, exc)
            return None

    def load_image(self, reference: str | None) -> PreparedImage:
        data = self.resolve(reference)
        if not data:
            raise AssetMissing(reference or "", f"Asset not found: {reference!r}")
        try:
            image = _decode_image(data)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise AssetUnreadable(reference, f"Asset is not a readable image: {reference!r}") from exc
        return PreparedImage(reader=ImageReader(image), width=image.width, height=image.height)
