"""PDF rendering services."""

from .search_report.renderer import RenderFailure, render_search_report_pdf
from .search_report.models import SearchReportOptions

__all__ = ["RenderFailure", "render_search_report_pdf", "SearchReportOptions"]
