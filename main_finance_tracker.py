"""Mini README: Entry point CLI for the finance tracker dashboard.

Commands:
    * run - start the FastAPI application under uvicorn.
    * show-settings - print the effective configuration without starting a server.

Options left out fall back to the ``FINTRACK_`` environment variables. Both
commands report the environment, its log level and whether the ledger and
budgets start with demo data, so operators can tell a development instance
from a real one before recording anything.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
import uvicorn

from fintrack.configuration import FinanceTrackerSettings, get_settings
from fintrack.logging_utils import configure_root_logger, level_for_environment

cli = typer.Typer(help="Launch and inspect the finance tracker web dashboard.")


def startup_summary(
    settings: FinanceTrackerSettings,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> List[str]:
    """Lines describing how the dashboard is about to run."""

    host = host or settings.interface_host
    port = port or settings.interface_port
    browser_host = "127.0.0.1" if host in {"0.0.0.0", "::"} else host
    level = logging.getLevelName(level_for_environment(settings.environment))
    data_mode = "seeded with demo data" if settings.seeds_demo_data else "starting empty"
    return [
        f"{settings.organisation_name} on {host}:{port} (open http://{browser_host}:{port})",
        f"Environment: {settings.environment} (log level {level})",
        f"Ledger and budgets: {data_mode}",
        f"Operator: {settings.operator_email} [{settings.operator_role}]",
        f"Receipts directory: {settings.receipts_directory}",
    ]


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
    configure_root_logger(level_for_environment(settings.environment))
    for line in startup_summary(settings, host, port):
        typer.echo(line)
    uvicorn.run(
        "fintrack.interface.web_app:create_application",
        host=host or settings.interface_host,
        port=port or settings.interface_port,
        factory=True,
        reload=not production,
    )


@cli.command("show-settings")
def show_settings() -> None:
    """Print the effective configuration and exit."""

    for line in startup_summary(get_settings()):
        typer.echo(line)


if __name__ == "__main__":
    cli()
