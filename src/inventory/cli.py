"""Command line entry point for running and preparing the service."""

import typer
from rich.console import Console

from src.inventory.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="Inventory API management commands",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command("init-db")
def init_db_command() -> None:
    """Create the products table in the configured database."""
    from src.inventory.runtime.init_db import init_db

    init_db()
    console.print("[green]Database initialized.[/green]")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to config)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to config)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port
    console.print(
        f"[cyan]Starting Inventory API on {bind_host}:{bind_port} "
        f"({config.app.environment})[/cyan]"
    )
    uvicorn.run(
        "src.inventory.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
