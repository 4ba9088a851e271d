# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

import database
import main
import models


@pytest.fixture()
def db_engine(tmp_path: Path):
    """Engine on a throwaway SQLite file with tblTasks already provisioned."""
    engine = database.make_engine(f"sqlite:///{tmp_path / 'data.db'}")
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def _client_for(engine) -> Iterator[TestClient]:
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    main.app.dependency_overrides[main.get_db] = override_get_db
    try:
        # no context manager: the startup hook would touch the configured database
        yield TestClient(main.app)
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture()
def client(db_engine) -> Iterator[TestClient]:
    yield from _client_for(db_engine)


@pytest.fixture()
def bare_client(tmp_path: Path) -> Iterator[TestClient]:
    """Client whose store has no tblTasks table."""
    engine = database.make_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    yield from _client_for(engine)
    engine.dispose()


@pytest.fixture()
def external_client(tmp_path: Path) -> Iterator[TestClient]:
    """Client on a tblTasks provisioned by another tool, with its own column types."""
    engine = database.make_engine(f"sqlite:///{tmp_path / 'external.db'}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE tblTasks (ID INTEGER PRIMARY KEY, Name TEXT, Description TEXT, "
                "DueDate TEXT, Priority REAL, Location TEXT, Status TEXT, CreatedBy TEXT)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO tblTasks VALUES "
                "(1, 'legacy', NULL, '2024-03-03', 1.5, 'depot', 'open', 'importer')"
            )
        )
    yield from _client_for(engine)
    engine.dispose()


@pytest.fixture()
def sample_task() -> dict:
    return {
        "ID": 1,
        "Name": "A",
        "Description": "d",
        "DueDate": "2024-01-01",
        "Priority": "high",
        "Location": "office",
        "Status": "open",
    }
