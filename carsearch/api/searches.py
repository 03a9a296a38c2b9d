"""Routes for car searches and their PDF export."""
from __future__ import annotations

import io
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from carsearch.core import models, services
from carsearch.core.config import settings
from carsearch.core.storage import get_asset_store
from carsearch.services.pdf import RenderFailure, SearchReportOptions, render_search_report_pdf

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_search_or_404(search_id: int) -> models.SearchRecord:
    search = services.get_search(search_id)
    if search is None:
        raise HTTPException(status_code=404, detail="Search not found")
    return search


@router.get("/", response_model=list[models.SearchRecord])
def list_searches(organization_id: int | None = None) -> list[models.SearchRecord]:
    return services.list_searches(organization_id)


@router.get("/{search_id}", response_model=models.SearchRecord)
def get_search(search_id: int) -> models.SearchRecord:
    return _get_search_or_404(search_id)


@router.get("/{search_id}/pdf")
def export_search_pdf(search_id: int) -> StreamingResponse:
    search = _get_search_or_404(search_id)
    branding = services.branding_for_search(search)
    options = SearchReportOptions(max_images=settings.PDF_MAX_IMAGES)
    try:
        pdf_bytes = render_search_report_pdf(search, branding, assets=get_asset_store(), options=options)
    except RenderFailure as exc:
        logger.exception("[search_report_pdf] export failed search=%s", search_id)
        raise HTTPException(status_code=500, detail="Unable to generate the search report") from exc

    headers = {
        "Content-Disposition": f"attachment; filename=search_{search_id}.pdf",
        "Content-Length": str(len(pdf_bytes)),
    }
    return StreamingResponse(io.BytesIO(pdf_bytes), media_type="application/pdf", headers=headers)
