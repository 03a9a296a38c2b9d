from datetime import datetime

import pytest
from reportlab.lib import colors

from carsearch.core.models import BrandingProfile
from carsearch.services.pdf.search_report import (
    AssetResolver,
    AssetStoreError,
    PdfDocumentWriter,
    RenderFailure,
    WriterFailure,
    build_plan,
    create_document,
    render_search_report,
    render_search_report_pdf,
    resolve_style,
)
from carsearch.services.pdf.search_report import renderer
from carsearch.services.pdf.search_report.renderer import write_plan
from carsearch.services.pdf.search_report.models import DocumentMetadata, TextRun

from conftest import MemoryAssetStore, png_bytes


def test_pdf_exports_without_error(make_search):
    pdf_bytes = render_search_report_pdf(make_search(), None, assets=MemoryAssetStore())

    assert isinstance(pdf_bytes, bytes)
    assert pdf_bytes.startswith(b"%PDF")
    assert b"%%EOF" in pdf_bytes[-32:]
    assert len(pdf_bytes) > 500


def test_create_document_is_the_render_entry_point():
    assert create_document is render_search_report_pdf


def test_report_with_images_and_logo_renders(make_search):
    store = MemoryAssetStore(
        {
            "logo.png": png_bytes(size=(300, 120), mode="RGBA", color=(10, 20, 30, 128)),
            "front.jpg": png_bytes(),
            "side.jpg": png_bytes(size=(600, 900)),
        }
    )
    search = make_search(
        images=["front.jpg", "side.jpg", "gone.jpg"],
        additional_requirements="Trailer hitch\nWinter tyres included",
    )
    branding = BrandingProfile(company_name="Autohuis Jansen", primary_color="#123456", logo="logo.png")

    document = render_search_report(search, branding, assets=store)

    assert document.page_count == 2
    assert document.size == len(document.content)
    assert document.content.startswith(b"%PDF")


def test_written_pdf_carries_the_report_text(make_search):
    plan = build_plan(make_search(), style=resolve_style(None), assets=AssetResolver(None))

    content = write_plan(plan, compress=False).content

    assert b"(Audi A4)" in content
    assert b"(Jan de Vries)" in content
    assert b"15,000 - " in content
    assert b"25,000)" in content
    assert b"(Search report)" in content


def test_pdf_metadata_is_stamped_at_render_time(make_search):
    days = {datetime.now().strftime("D:%Y%m%d")}
    branding = BrandingProfile(company_name="Autohuis Jansen")
    content = render_search_report_pdf(make_search(), branding, assets=None)
    days.add(datetime.now().strftime("D:%Y%m%d"))

    assert b"/Title (Search 1)" in content
    assert b"/Author (Autohuis Jansen)" in content
    assert b"/Creator (CarSearch Pro)" in content
    assert any(f"/CreationDate ({day}".encode() in content for day in days)


def test_store_errors_fall_back_to_placeholders(make_search):
    class OfflineStore:
        def fetch_bytes(self, reference):
            raise AssetStoreError(f"bucket offline: {reference}")

    search = make_search(images=["front.jpg"])

    document = render_search_report(search, BrandingProfile(logo="logo.png"), assets=OfflineStore())

    assert document.page_count == 1
    assert document.content.startswith(b"%PDF")


def test_missing_logo_and_images_do_not_fail_the_render(make_search):
    search = make_search(images=["missing-1", "missing-2"])
    branding = BrandingProfile(logo="missing-ref")

    document = render_search_report(search, branding, assets=MemoryAssetStore())

    assert document.page_count == 1
    assert document.content.startswith(b"%PDF")


def test_page_count_is_stable_across_renders(make_search):
    refs = ["a.jpg", "b.jpg", "c.jpg", "d.jpg", "e.jpg"]
    store = MemoryAssetStore({ref: png_bytes() for ref in refs})
    search = make_search(images=refs, additional_requirements="Heated seats")

    first = render_search_report(search, None, assets=store)
    second = render_search_report(search, None, assets=store)

    assert first.page_count == second.page_count == 2


def test_writer_failure_surfaces_as_render_failure(make_search, monkeypatch):
    class BrokenWriter(PdfDocumentWriter):
        def finish(self) -> bytes:
            super().finish()
            raise WriterFailure("disk full")

    monkeypatch.setattr(renderer, "PdfDocumentWriter", BrokenWriter)

    with pytest.raises(RenderFailure) as excinfo:
        render_search_report_pdf(make_search(), None, assets=None)

    assert excinfo.value.search_id == 1
    assert isinstance(excinfo.value.__cause__, WriterFailure)


def test_writer_can_only_be_finished_once():
    writer = PdfDocumentWriter().open(DocumentMetadata(title="Search 9", author="CarSearch Pro"))
    writer.draw(TextRun(50, 50, "Hello", font="Helvetica", size=11, color=colors.black))
    content = writer.finish()

    assert content.startswith(b"%PDF")
    with pytest.raises(WriterFailure):
        writer.finish()
    with pytest.raises(WriterFailure):
        writer.draw(TextRun(50, 50, "Again", font="Helvetica", size=11, color=colors.black))
    with pytest.raises(WriterFailure):
        writer.open(DocumentMetadata(title="Search 9", author="CarSearch Pro"))


def test_writer_rejects_drawing_before_open():
    with pytest.raises(WriterFailure):
        PdfDocumentWriter().draw(TextRun(50, 50, "Hello", font="Helvetica", size=11, color=colors.black))


def test_writer_wraps_drawing_errors():
    writer = PdfDocumentWriter().open(DocumentMetadata(title="Search 9", author="CarSearch Pro"))
    with pytest.raises(WriterFailure):
        writer.draw(TextRun(50, 50, "Hello", font="No-Such-Font", size=11, color=colors.black))
    with pytest.raises(WriterFailure):
        writer.draw("not a primitive")


def test_writer_counts_pages():
    writer = PdfDocumentWriter().open(DocumentMetadata(title="Search 9", author="CarSearch Pro"))
    writer.new_page()
    writer.new_page()
    assert writer.page_count == 3
    writer.finish()
