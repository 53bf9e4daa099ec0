"""Mini README: Entry point CLI for running the Finvault backend.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI application under uvicorn, and ``check-store`` verifies that the
configured user store is reachable. Settings come from ``FINVAULT_``
environment variables or a ``.env`` file; command options override them.
"""

from __future__ import annotations

import typer
import uvicorn

from finvault.configuration import get_settings
from finvault.errors import InternalError
from finvault.logging_utils import configure_root_logger, level_for_environment
from finvault.storage import create_user_store

cli = typer.Typer(help="Run and inspect the Finvault account and finance API.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # 0.0.0.0 is a bind address, not something a client can connect to.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Finvault on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "finvault.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("check-store")
def check_store() -> None:
    """Ping the configured user store and report whether it answers."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    store = create_user_store(settings)
    try:
        store.ping()
    except InternalError:
        typer.echo(f"Store '{settings.store_backend}' is unreachable.", err=True)
        raise typer.Exit(code=1)
    finally:
        store.close()
    typer.echo(f"Store '{settings.store_backend}' is reachable.")


if __name__ == "__main__":
    cli()
