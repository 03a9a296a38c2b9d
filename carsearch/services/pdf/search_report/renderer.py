"""Search report PDF renderer entry point."""
from __future__ import annotations

import logging
import time

from carsearch.core.models import BrandingProfile, SearchRecord
from .assets import AssetResolver, AssetStore
from .layout import build_plan
from .models import DocumentPlan, RenderedDocument, SearchReportOptions
from .style import resolve_style
from .writer import PdfDocumentWriter, WriterFailure

logger = logging.getLogger(__name__)


class RenderFailure(RuntimeError):
    def __init__(self, search_id: int, message: str) -> None:
        super().__init__(message)
        self.search_id = search_id


def write_plan(plan: DocumentPlan, *, compress: bool = True) -> RenderedDocument:
    writer = PdfDocumentWriter(compress=compress).open(plan.metadata)
    for index, page in enumerate(plan):
        if index:
            writer.new_page()
        for primitive in page:
            writer.draw(primitive)
    page_count = writer.page_count
    return RenderedDocument(content=writer.finish(), page_count=page_count)


def render_search_report(
    search: SearchRecord,
    branding: BrandingProfile | None = None,
    *,
    assets: AssetStore | None,
    options: SearchReportOptions | None = None,
) -> RenderedDocument:
    start = time.perf_counter()
    style = resolve_style(branding)
    plan = build_plan(
        search,
        style=style,
        assets=AssetResolver(assets),
        options=options,
    )
    try:
        document = write_plan(plan)
    except WriterFailure as exc:
        logger.error("[search_report_pdf] render failed search=%s: %s", search.id, exc)
        raise RenderFailure(search.id, f"Unable to render search {search.id}: {exc}") from exc

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[search_report_pdf] rendered search=%s pages=%s bytes=%s elapsed_ms=%.2f",
        search.id,
        document.page_count,
        document.size,
        elapsed_ms,
    )
    return document


def render_search_report_pdf(
    search: SearchRecord,
    branding: BrandingProfile | None = None,
    *,
    assets: AssetStore | None,
    options: SearchReportOptions | None = None,
) -> bytes:
    """Public entry point for search report PDF rendering."""

    return render_search_report(search, branding, assets=assets, options=options).content


create_document = render_search_report_pdf
