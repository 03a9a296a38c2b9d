from __future__ import annotations

import io
import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="carsearch-tests-"))
os.environ.setdefault("CARSEARCH_DATA_DIR", str(_TMP_ROOT / "data"))
os.environ.setdefault("CARSEARCH_UPLOADS_DIR", str(_TMP_ROOT / "uploads"))

from carsearch.core.models import SearchRecord


class MemoryAssetStore:
    def __init__(self, assets: dict[str, bytes] | None = None) -> None:
        self.assets = dict(assets or {})
        self.requests: list[str] = []

    def fetch_bytes(self, reference: str) -> bytes | None:
        self.requests.append(reference)
        return self.assets.get(reference)


def png_bytes(size: tuple[int, int] = (800, 600), color=(200, 200, 220), mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


def rgb(hex_value: str):
    value = int(hex_value.lstrip("#"), 16)
    return pytest.approx(((value >> 16 & 255) / 255, (value >> 8 & 255) / 255, (value & 255) / 255))


@pytest.fixture()
def image_bytes() -> bytes:
    return png_bytes()


@pytest.fixture()
def asset_store() -> MemoryAssetStore:
    return MemoryAssetStore()


@pytest.fixture()
def make_search():
    def _make(**overrides) -> SearchRecord:
        payload = {
            "id": 1,
            "customer_first_name": "Jan",
            "customer_last_name": "de Vries",
            "customer_email": "jan@example.com",
            "customer_phone": "06-12345678",
            "car_make": "Audi",
            "car_model": "A4",
            "car_type": "Sedan",
            "car_year": "2020-2022",
            "car_color": "Black",
            "car_transmission": "Automatic",
            "car_fuel": "Petrol",
            "min_price": 15000,
            "max_price": 25000,
            "additional_requirements": None,
            "images": [],
            "status": "active",
            "created_at": datetime(2024, 3, 5, 10, 30),
        }
        payload.update(overrides)
        return SearchRecord(**payload)

    return _make
