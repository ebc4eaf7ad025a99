from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import pickops.persistence.pg as pg
from pickops.core.config import get_settings
from pickops.domain.orders.aggregates import Order, OrderItem
from pickops.persistence.models import Base


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite"


@pytest.fixture(scope="session", autouse=True)
def configure_test_engine(test_db_path: Path):
    settings = get_settings()
    settings.state_backend = "sql"
    settings.state_namespace = None
    settings.default_picking_limit = "all"

    engine = create_engine(
        f"sqlite+pysqlite:///{test_db_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    pg.engine = engine
    pg.SessionLocal = TestSessionLocal

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(configure_test_engine):
    from pickops.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(configure_test_engine):
    with pg.session_scope() as s:
        yield s


@pytest.fixture()
def make_order():
    def _make(order_id: str, status: str = "PENDING", fulfillment_status: str | None = None, items=None, **kwargs) -> Order:
        lines = None
        if items is not None:
            lines = [OrderItem(sku=sku, name=name, quantity=qty, location=loc) for sku, name, qty, loc in items]
        return Order(
            id=order_id,
            order_number=kwargs.pop("order_number", f"#{order_id}"),
            status=status,
            fulfillment_status=fulfillment_status,
            items=lines,
            **kwargs,
        )

    return _make
