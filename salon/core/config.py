"""
Configuration helpers for the salon backend.

Routers, repositories and scripts read settings through ``get_settings`` so
that nothing else touches os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DATA_FILE = PROJECT_ROOT / "data" / "customers.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    data_file: Path
    db_auto_create: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    data_file = (os.getenv("DATA_FILE") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        db_auto_create=_bool(os.getenv("DB_AUTO_CREATE"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
