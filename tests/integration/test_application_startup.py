"""Integration tests for application lifecycle and startup behavior."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from src.inventory.runtime.config.config_data import ConfigData, DatabaseConfig
from src.inventory.runtime.context import with_context


def _sqlite_config(tmp_path, create_tables: bool = True) -> ConfigData:
    return ConfigData(
        database=DatabaseConfig(
            url=f"sqlite:///{tmp_path / 'startup.db'}",
            create_tables=create_tables,
        )
    )


class TestBuildDependencies:
    def test_creates_tables(self, tmp_path):
        from src.inventory.api.http.app import build_dependencies

        dependencies = build_dependencies(_sqlite_config(tmp_path))
        try:
            tables = inspect(dependencies.database_service.engine).get_table_names()
            assert "products" in tables
            assert dependencies.product_service is not None
        finally:
            dependencies.database_service.dispose()

    def test_skips_tables_when_disabled(self, tmp_path):
        from src.inventory.api.http.app import build_dependencies

        dependencies = build_dependencies(_sqlite_config(tmp_path, create_tables=False))
        try:
            tables = inspect(dependencies.database_service.engine).get_table_names()
            assert tables == []
        finally:
            dependencies.database_service.dispose()

    @pytest.mark.asyncio
    async def test_pagination_config_is_passed_through(self, tmp_path):
        from src.inventory.api.http.app import build_dependencies

        config = _sqlite_config(tmp_path)
        config.pagination.max_limit = 12
        dependencies = build_dependencies(config)
        try:
            page = await dependencies.product_service.list_products(1, 50)
            assert page.page_size == 12
        finally:
            dependencies.database_service.dispose()


class TestApplicationStartup:
    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, tmp_path):
        import src.inventory.api.http.app as application

        with with_context(_sqlite_config(tmp_path)):
            await application.startup()
            try:
                dependencies = application.app.state.app_dependencies
                assert dependencies.database_service.health_check() is True
            finally:
                await application.shutdown()
                del application.app.state.app_dependencies

    def test_lifespan_serves_requests(self, tmp_path, monkeypatch):
        import src.inventory.api.http.app as application

        # The lifespan runs on the client's portal thread, outside this context.
        config = _sqlite_config(tmp_path)
        monkeypatch.setattr(application, "get_config", lambda: config)

        with TestClient(application.app) as client:
            created = client.post(
                "/products", json={"name": "nut", "price": 0.1, "quantity": 5}
            )
            listed = client.get("/products")

        del application.app.state.app_dependencies

        assert created.status_code == 201
        assert listed.json()["total"] == 1
