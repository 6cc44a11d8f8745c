"""
Startup-time backend selection.

``build_repository`` is called once when the app starts. It prefers the SQL
backend and falls back to the JSON file when no database is configured or the
database cannot be reached. The choice is never revisited while the process
runs.
"""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from salon.core.config import Settings, get_settings
from salon.db.create_tables import create_all
from salon.db.session import get_engine
from salon.repositories.base import CustomerRepository
from salon.repositories.json_storage import JsonCustomerRepository
from salon.repositories.sql_repository import SQLCustomerRepository

logger = logging.getLogger(__name__)


def _connect_sql(settings: Settings) -> SQLCustomerRepository:
    engine = get_engine()
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    if settings.db_auto_create:
        create_all()
    return SQLCustomerRepository()


def build_repository(settings: Settings | None = None) -> CustomerRepository:
    settings = settings or get_settings()
    if not settings.database_url:
        logger.warning("DATABASE_URL not set; using file-based customer storage at %s", settings.data_file)
        return JsonCustomerRepository(settings.data_file)
    try:
        repository = _connect_sql(settings)
    except (SQLAlchemyError, RuntimeError, ImportError) as exc:
        logger.warning("Database unavailable (%s); using file-based customer storage at %s", exc, settings.data_file)
        return JsonCustomerRepository(settings.data_file)
    logger.info("Using database-backed customer storage")
    return repository
