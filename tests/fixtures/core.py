from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlmodel import Session, create_engine

from src.inventory.core.services import DbSessionService, ProductService
from src.inventory.entities.product import ProductCreate
from src.inventory.runtime.config.config_data import PaginationConfig


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine]:
    """SQLite engine on a per-test database file.

    A file (rather than ``:memory:``) gives every pooled connection the same
    database, which the concurrent listing reads rely on.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'inventory-test.db'}",
        connect_args={"check_same_thread": False, "timeout": 20},
    )

    # Installs the SQLite locking listeners before the first connection opens
    DbSessionService(engine=engine).create_all()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a fresh database session for testing."""
    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def db_service(engine: Engine) -> DbSessionService:
    return DbSessionService(engine=engine)


@pytest.fixture
def product_service(db_service: DbSessionService) -> ProductService:
    return ProductService(db_service, PaginationConfig())


@pytest.fixture
def make_product(product_service: ProductService):
    """Insert a product through the service, with overridable defaults."""

    def _make(name: str = "bolt", price: float = 0.5, quantity: int = 100):
        return product_service.create_product(
            ProductCreate(name=name, price=price, quantity=quantity)
        )

    return _make


@pytest.fixture
def client(
    db_service: DbSessionService, product_service: ProductService
) -> Generator[TestClient]:
    """TestClient wired to the per-test database.

    The lifespan is not entered, so the configured database is never opened;
    the dependencies are placed on ``app.state`` directly instead.
    """
    from src.inventory.api.http.app import app
    from src.inventory.api.http.app_data import ApplicationDependencies

    app.state.app_dependencies = ApplicationDependencies(
        database_service=db_service,
        product_service=product_service,
    )
    try:
        yield TestClient(app)
    finally:
        del app.state.app_dependencies
