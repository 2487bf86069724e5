"""Shared pytest fixtures: a fresh SQLite file per test, a fixed clock and an API client."""

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from restobill import catalog, clock
from restobill.db.engine import build_engine, get_engine
from restobill.db.seed import init_db
from restobill.main import app
from restobill.models.items import ItemIn


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'restobill-test.sqlite'}")
    init_db(engine, seed=False)
    yield engine
    engine.dispose()


@pytest.fixture
def set_clock(monkeypatch):
    """Pin clock.local_now() to a given local datetime."""

    def _set(value: datetime) -> None:
        monkeypatch.setattr(clock, "local_now", lambda: value)

    return _set


@pytest.fixture
def menu(engine) -> dict:
    """Two menu items: dosa at 40 and idly at 30."""
    dosa = catalog.add_item(
        engine, ItemIn(name_local="தோசை", name_common="Dosa", price=Decimal("40"), category="Breakfast")
    )
    idly = catalog.add_item(
        engine, ItemIn(name_local="இட்லி", name_common="Idly", price=Decimal("30"), category="Breakfast")
    )
    return {"dosa": dosa, "idly": idly}


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def count_rows(engine, table) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()
