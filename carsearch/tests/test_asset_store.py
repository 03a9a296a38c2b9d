from pathlib import Path

import pytest

from carsearch.core.storage import LocalAssetStore, relative_to_uploads
from carsearch.services.pdf.search_report import (
    AssetMissing,
    AssetResolver,
    AssetStoreError,
    AssetUnreadable,
)

from conftest import MemoryAssetStore, png_bytes


@pytest.fixture()
def uploads(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    (root / "car.png").write_bytes(png_bytes())
    (root / "logos").mkdir()
    (root / "logos" / "org-1.png").write_bytes(png_bytes(size=(200, 80)))
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    return root


def test_local_store_reads_uploaded_files(uploads):
    store = LocalAssetStore(uploads)

    assert store.fetch_bytes("car.png") == (uploads / "car.png").read_bytes()
    assert store.fetch_bytes("/uploads/logos/org-1.png") == (uploads / "logos" / "org-1.png").read_bytes()


def test_local_store_reports_missing_files(uploads):
    store = LocalAssetStore(uploads)

    assert store.fetch_bytes("nope.png") is None
    assert store.fetch_bytes("logos") is None
    assert store.fetch_bytes("") is None


def test_local_store_refuses_paths_outside_root(uploads):
    store = LocalAssetStore(uploads)

    assert store.fetch_bytes("../secret.txt") is None
    assert store.fetch_bytes(str(uploads.parent / "secret.txt")) is None


def test_relative_to_uploads(uploads):
    assert relative_to_uploads(uploads / "logos" / "org-1.png", uploads) == "logos/org-1.png"


def test_resolver_returns_none_for_missing_assets():
    resolver = AssetResolver(MemoryAssetStore({"a": b"data"}))

    assert resolver.resolve("a") == b"data"
    assert resolver.resolve("b") is None
    assert resolver.resolve(None) is None
    assert AssetResolver(None).resolve("a") is None


def test_resolver_swallows_store_io_errors():
    class FlakyStore:
        def fetch_bytes(self, reference):
            raise PermissionError(reference)

    assert AssetResolver(FlakyStore()).resolve("car.png") is None


def test_resolver_swallows_store_backend_errors():
    class RemoteStore:
        def fetch_bytes(self, reference):
            raise AssetStoreError(f"timeout fetching {reference}")

    resolver = AssetResolver(RemoteStore())

    assert resolver.resolve("car.png") is None
    with pytest.raises(AssetMissing):
        resolver.load_image("car.png")


def test_load_image_distinguishes_missing_from_unreadable():
    resolver = AssetResolver(MemoryAssetStore({"good": png_bytes(size=(40, 30)), "bad": b"garbage"}))

    image = resolver.load_image("good")
    assert (image.width, image.height) == (40, 30)

    with pytest.raises(AssetMissing) as missing:
        resolver.load_image("absent")
    assert missing.value.reference == "absent"

    with pytest.raises(AssetUnreadable) as unreadable:
        resolver.load_image("bad")
    assert unreadable.value.reference == "bad"


def test_truncated_image_is_unreadable():
    data = png_bytes(size=(400, 300))
    resolver = AssetResolver(MemoryAssetStore({"cut": data[: len(data) // 2]}))

    with pytest.raises(AssetUnreadable):
        resolver.load_image("cut")
