"""PDF rendering for car search reports."""

from .assets import AssetMissing, AssetResolver, AssetStore, AssetStoreError, AssetUnreadable
from .layout import build_plan
from .models import RenderedDocument, SearchReportOptions
from .renderer import RenderFailure, create_document, render_search_report, render_search_report_pdf
from .style import ResolvedStyle, resolve_style
from .writer import PdfDocumentWriter, WriterFailure

__all__ = [
    "AssetMissing",
    "AssetResolver",
    "AssetStore",
    "AssetStoreError",
    "AssetUnreadable",
    "PdfDocumentWriter",
    "RenderFailure",
    "RenderedDocument",
    "ResolvedStyle",
    "SearchReportOptions",
    "WriterFailure",
    "build_plan",
    "create_document",
    "render_search_report",
    "render_search_report_pdf",
    "resolve_style",
]
