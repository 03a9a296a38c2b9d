"""Basic SQLite connection handling."""
from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import ContextManager

from carsearch.core.config import settings

DATA_DIR = settings.DATA_DIR
DB_PATH = DATA_DIR / "carsearch.db"

logger = logging.getLogger(__name__)

_db_lock = RLock()


def _connect(path: Path) -> sqlite3.Connection:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def _managed_connection(path: Path) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection that is always closed on exit."""

    conn = _connect(path)
    try:
        yield conn
        conn.commit()
    except Exception:
        if conn.in_transaction:
            conn.rollback()
        raise
    finally:
        conn.close()


def get_connection() -> ContextManager[sqlite3.Connection]:
    return _managed_connection(DB_PATH)


def init_database() -> None:
    with _db_lock:
        logger.info("[DB] pid=%s DB_PATH=%s", os.getpid(), DB_PATH.resolve())
        with get_connection() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS organizations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    logo TEXT,
                    pdf_primary_color TEXT DEFAULT '#4a6da7',
                    pdf_secondary_color TEXT DEFAULT '#333333',
                    pdf_company_name TEXT DEFAULT 'CarSearch Pro',
                    pdf_contact_info TEXT,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                );
                CREATE TABLE IF NOT EXISTS searches (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    organization_id INTEGER REFERENCES organizations(id) ON DELETE SET NULL,
                    customer_first_name TEXT NOT NULL,
                    customer_last_name TEXT NOT NULL,
                    customer_email TEXT NOT NULL,
                    customer_phone TEXT NOT NULL,
                    car_make TEXT NOT NULL,
                    car_model TEXT NOT NULL,
                    car_type TEXT NOT NULL,
                    car_year TEXT NOT NULL,
                    car_color TEXT NOT NULL,
                    car_transmission TEXT NOT NULL,
                    car_fuel TEXT NOT NULL,
                    min_price INTEGER NOT NULL,
                    max_price INTEGER NOT NULL,
                    additional_requirements TEXT,
                    images TEXT NOT NULL DEFAULT '[]',
                    status TEXT NOT NULL DEFAULT 'active',
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                );
                CREATE INDEX IF NOT EXISTS idx_searches_organization
                ON searches(organization_id);
                """
            )
