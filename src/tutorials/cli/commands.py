"""CLI commands for the tutorials API.

Commands:
- serve: Run the HTTP server
- check-db: Verify the database connection
- config: Show the effective configuration
"""

import asyncio

import typer
from rich.console import Console

from tutorials.config.app_config import ConfigError, load_app_config
from tutorials.config.log_setup import configure_logging
from tutorials.db.database import DatabaseConnectionError, open_gateway
from tutorials.db.tutorials_repository import TutorialsRepository

app = typer.Typer(
    name="tutorials",
    help="REST API for tutorials backed by MongoDB.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level"),
) -> None:
    """Run the HTTP server."""
    import uvicorn

    try:
        config = load_app_config()
    except ConfigError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    effective_host = host or config.server.host
    effective_port = port or config.server.port
    effective_level = (log_level or config.server.log_level).lower()

    configure_logging(effective_level)
    console.print(
        f"[green]App listening at http://{effective_host}:{effective_port}/[/green]"
    )

    uvicorn.run(
        "tutorials.web.api:app",
        host=effective_host,
        port=effective_port,
        reload=reload,
        log_level=effective_level,
    )


async def _count_tutorials() -> tuple[str, int]:
    config = load_app_config()
    gateway = await open_gateway(config.database)
    try:
        count = await TutorialsRepository(gateway.collection).count()
    finally:
        gateway.close()
    return gateway.database_name, count


@app.command(name="check-db")
def check_db() -> None:
    """Connect to the database and report the number of tutorials."""
    try:
        database, count = asyncio.run(_count_tutorials())
    except (ConfigError, DatabaseConnectionError) as e:
        console.print(f"[red]✗ Cannot connect to the database: {e}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ Connected to the database![/green]")
    console.print(f"  [dim]database:[/dim]  {database}")
    console.print(f"  [dim]tutorials:[/dim] {count}")


@app.command(name="config")
def show_config() -> None:
    """Show the effective configuration (password masked)."""
    try:
        config = load_app_config()
    except ConfigError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    settings = [
        ("database.uri", config.database.masked_uri()),
        ("database.collection", config.database.collection),
        ("database.timeout_ms", str(config.database.timeout_ms)),
        ("server.host", config.server.host),
        ("server.port", str(config.server.port)),
        ("server.cors_origins", ", ".join(config.server.cors_origins)),
        ("server.log_level", config.server.log_level),
    ]

    console.print("\n[bold]Configuration:[/bold]\n")
    for name, value in settings:
        console.print(f"  [dim]{name}:[/dim] {value}", soft_wrap=True)

    missing = config.database.missing()
    if missing and not config.database.uri:
        console.print(f"\n[yellow]⚠ Missing: {', '.join(missing)}[/yellow]")


if __name__ == "__main__":
    app()
