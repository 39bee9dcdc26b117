"""Unit tests for the command line interface."""

from unittest.mock import patch

from sqlalchemy import create_engine, inspect
from typer.testing import CliRunner

from src.inventory.cli import app
from src.inventory.runtime.config.config_data import ConfigData, DatabaseConfig
from src.inventory.runtime.context import with_context

runner = CliRunner()


def test_init_db_creates_tables(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"

    with with_context(ConfigData(database=DatabaseConfig(url=url))):
        result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "Database initialized" in result.output
    engine = create_engine(url)
    try:
        assert "products" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_serve_uses_configured_bind():
    with patch("uvicorn.run") as run:
        result = runner.invoke(app, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    run.assert_called_once()
    args, kwargs = run.call_args
    assert args[0] == "src.inventory.api.http.app:app"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False
