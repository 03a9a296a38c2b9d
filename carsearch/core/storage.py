"""Centralise the storage paths and the uploaded-asset store."""
from __future__ import annotations

import logging
from pathlib import Path

from carsearch.core.config import settings

UPLOADS_ROOT = settings.UPLOADS_DIR
_UPLOADS_PREFIX = "/uploads/"

logger = logging.getLogger(__name__)


def relative_to_uploads(path: Path, root: Path = UPLOADS_ROOT) -> str:
    """Return the relative POSIX path for an uploaded file."""

    return path.relative_to(root).as_posix()


class LocalAssetStore:
    """Asset store backed by the uploads directory.

    References are the relative file names saved by the upload handlers,
    optionally prefixed with ``/uploads/``. Anything resolving outside the
    root is treated as missing.
    """

    def __init__(self, root: Path = UPLOADS_ROOT) -> None:
        self.root = Path(root)

    def resolve_path(self, reference: str | None) -> Path | None:
        if not reference:
            return None
        path_str = reference.strip()
        if path_str.startswith(_UPLOADS_PREFIX):
            path_str = path_str[len(_UPLOADS_PREFIX) :]
        if not path_str:
            return None
        root = self.root.resolve()
        candidate = (root / path_str).resolve()
        if candidate != root and root not in candidate.parents:
            logger.warning("Rejected asset reference outside uploads root: %s", reference)
            return None
        return candidate if candidate.is_file() else None

    def fetch_bytes(self, reference: str) -> bytes | None:
        path = self.resolve_path(reference)
        if path is None:
            return None
        return path.read_bytes()


def get_asset_store() -> LocalAssetStore:
    UPLOADS_ROOT.mkdir(parents=True, exist_ok=True)
    return LocalAssetStore(UPLOADS_ROOT)
