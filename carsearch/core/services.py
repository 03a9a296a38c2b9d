"""Record access for organizations and searches."""
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from typing import Iterable, Optional

from carsearch.core import db, models

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = (
    "organization_id",
    "customer_first_name",
    "customer_last_name",
    "customer_email",
    "customer_phone",
    "car_make",
    "car_model",
    "car_type",
    "car_year",
    "car_color",
    "car_transmission",
    "car_fuel",
    "min_price",
    "max_price",
    "additional_requirements",
    "images",
    "status",
)

_db_initialized = False


def ensure_database_ready() -> None:
    global _db_initialized
    if _db_initialized:
        return
    db.init_database()
    _db_initialized = True


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _row_to_search(row: sqlite3.Row) -> models.SearchRecord:
    payload = dict(row)
    payload["images"] = json.loads(payload.get("images") or "[]")
    return models.SearchRecord(**payload)


def _row_to_organization(row: sqlite3.Row) -> models.Organization:
    return models.Organization(**dict(row))


def create_organization(payload: models.OrganizationCreate) -> models.Organization:
    ensure_database_ready()
    timestamp = _now()
    with db.get_connection() as conn:
        cur = conn.execute(
            """
            INSERT INTO organizations (
                name, logo, pdf_primary_color, pdf_secondary_color,
                pdf_company_name, pdf_contact_info, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                payload.name,
                payload.logo,
                payload.pdf_primary_color,
                payload.pdf_secondary_color,
                payload.pdf_company_name,
                payload.pdf_contact_info,
                timestamp,
                timestamp,
            ),
        )
        organization_id = cur.lastrowid
    organization = get_organization(organization_id)
    if organization is None:
        raise RuntimeError(f"Organization {organization_id} vanished after insert")
    return organization


def get_organization(organization_id: int) -> Optional[models.Organization]:
    ensure_database_ready()
    with db.get_connection() as conn:
        row = conn.execute("SELECT * FROM organizations WHERE id = ?", (organization_id,)).fetchone()
    return _row_to_organization(row) if row else None


def update_organization_logo(organization_id: int, logo: str | None) -> Optional[models.Organization]:
    ensure_database_ready()
    with db.get_connection() as conn:
        conn.execute(
            "UPDATE organizations SET logo = ?, updated_at = ? WHERE id = ?",
            (logo, _now(), organization_id),
        )
    return get_organization(organization_id)


def create_search(payload: models.SearchCreate) -> models.SearchRecord:
    ensure_database_ready()
    timestamp = _now()
    values = payload.model_dump()
    values["images"] = json.dumps(list(payload.images))
    columns = (*_SEARCH_COLUMNS, "created_at", "updated_at")
    placeholders = ", ".join("?" for _ in columns)
    with db.get_connection() as conn:
        cur = conn.execute(
            f"INSERT INTO searches ({', '.join(columns)}) VALUES ({placeholders})",
            (*(values[column] for column in _SEARCH_COLUMNS), timestamp, timestamp),
        )
        search_id = cur.lastrowid
    search = get_search(search_id)
    if search is None:
        raise RuntimeError(f"Search {search_id} vanished after insert")
    return search


def get_search(search_id: int) -> Optional[models.SearchRecord]:
    ensure_database_ready()
    with db.get_connection() as conn:
        row = conn.execute("SELECT * FROM searches WHERE id = ?", (search_id,)).fetchone()
    return _row_to_search(row) if row else None


def list_searches(organization_id: int | None = None) -> list[models.SearchRecord]:
    ensure_database_ready()
    with db.get_connection() as conn:
        if organization_id is None:
            rows = conn.execute("SELECT * FROM searches ORDER BY created_at DESC, id DESC").fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM searches WHERE organization_id = ? ORDER BY created_at DESC, id DESC",
                (organization_id,),
            ).fetchall()
    return [_row_to_search(row) for row in rows]


def update_search_status(search_id: int, status: models.SearchStatus) -> Optional[models.SearchRecord]:
    if status not in models.SEARCH_STATUSES:
        raise ValueError(f"Unknown search status: {status}")
    ensure_database_ready()
    with db.get_connection() as conn:
        conn.execute(
            "UPDATE searches SET status = ?, updated_at = ? WHERE id = ?",
            (status, _now(), search_id),
        )
    return get_search(search_id)


def update_search_images(search_id: int, images: Iterable[str]) -> Optional[models.SearchRecord]:
    ensure_database_ready()
    with db.get_connection() as conn:
        conn.execute(
            "UPDATE searches SET images = ?, updated_at = ? WHERE id = ?",
            (json.dumps([ref for ref in images if ref]), _now(), search_id),
        )
    return get_search(search_id)


def branding_for_search(search: models.SearchRecord) -> Optional[models.BrandingProfile]:
    """Return the branding of the search's organization, if it has one."""

    if search.organization_id is None:
        return None
    organization = get_organization(search.organization_id)
    if organization is None:
        logger.warning(
            "Organization %s referenced by search %s no longer exists",
            search.organization_id,
            search.id,
        )
        return None
    return organization.branding()
