"""Admin commands for initialising the ledger and running the HTTP server."""

import sys
from pathlib import Path

import uvicorn

from ledgerline.commands import console, load_settings, open_store
from ledgerline.config import Settings, create_default_config, get_config_path
from ledgerline.errors import StorageError


def run_full_init(settings: Settings, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print(f"[cyan]Initializing database at {settings.db_path}...[/cyan]")
    open_store(settings).close()
    console.print("[green]✓[/green] Database initialized")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {settings.db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize ledgerline database and configuration.

    The schema step is idempotent, so an existing database keeps its data
    even with --force; only the config file is rewritten.
    """
    config_path = get_config_path()
    settings = load_settings()

    try:
        if config_path.exists() and not force:
            console.print("[yellow]Config already exists:[/yellow]", style="bold")
            console.print(f"  {config_path}")
            console.print("[dim]Ensuring database schema is up to date...[/dim]")
            open_store(settings).close()
            console.print("[green]✓[/green] Database ready")
            console.print("\n[yellow]Use 'ledgerline init --force' to rewrite the config[/yellow]")
            return

        run_full_init(settings, config_path)

    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def serve_command(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Start the HTTP API using uvicorn."""
    settings = load_settings()
    effective_host = host or settings.host
    effective_port = port or settings.port

    console.print(f"[cyan]Serving ledger {settings.db_path}[/cyan]")
    console.print(f"[green]Listening on http://{effective_host}:{effective_port}[/green]")

    uvicorn.run(
        "ledgerline.api:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
