"""Shared fixtures: temporary SQLite database and JSON data file."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# make the salon package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon.core import config as core_config  # noqa: E402
from salon.db import models  # noqa: E402
from salon.db import session as db_session  # noqa: E402
from salon.repositories.json_storage import JsonCustomerRepository  # noqa: E402
from salon.repositories.sql_repository import SQLCustomerRepository  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and tear it down afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _clear_caches()


@pytest.fixture()
def no_db(tmp_path, monkeypatch):
    """Environment without DATABASE_URL and with the data file under tmp_path."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data" / "customers.json"))
    _clear_caches()
    yield tmp_path / "data" / "customers.json"
    _clear_caches()


@pytest.fixture()
def data_file(tmp_path) -> Path:
    return tmp_path / "data" / "customers.json"


@pytest.fixture()
def json_repo(data_file) -> JsonCustomerRepository:
    return JsonCustomerRepository(data_file)


@pytest.fixture()
def sql_repo(temp_db) -> SQLCustomerRepository:
    return SQLCustomerRepository()


@pytest.fixture(params=["json", "sql"])
def repo(request):
    """Each contract test runs once per storage backend."""
    return request.getfixturevalue(f"{request.param}_repo")
