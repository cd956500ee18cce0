"""CLI command implementations for Keystone."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keystone.bootstrap import create_container
from keystone.errors import KeystoneError
from keystone.foundation import Application, Input
from keystone.logging import setup_logging
from keystone.services import ServiceContainer

logger = logging.getLogger(__name__)
console = Console()


def setup_cli_logging(log_level: str, verbose: bool = False) -> None:
    """Set up logging for CLI commands.

    Args:
        log_level: Logging level string
        verbose: Override with DEBUG level if True

    """
    effective_log_level = "DEBUG" if verbose else log_level
    setup_logging(level=effective_log_level)


def handle_cli_error(error: Exception, message: str) -> NoReturn:
    """Print an error panel and exit with status 1."""
    logger.error("%s: %s", message, error)

    error_panel = Panel(f"[red]{error}[/red]", title=message, border_style="red")
    console.print(error_panel)
    raise typer.Exit(1) from error


def format_services(container: ServiceContainer) -> Table:
    table = Table(title="Registered services", show_header=True, header_style="bold magenta")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Lifetime", style="green")
    for name in sorted(container.names()):
        table.add_row(name, container.descriptor(name).lifetime)
    return table


def list_services_command(log_level: str = "INFO") -> None:
    """CLI command implementation for listing registered services.

    Args:
        log_level: Logging level

    """
    setup_cli_logging(log_level)

    try:
        container = create_container()
    except KeystoneError as e:
        handle_cli_error(e, "Failed to create service container")

    console.print(format_services(container))


def execute_request_command(
    app_path: Path,
    uri: str,
    name: str,
    namespace: str,
    environment: str,
    method: str = "GET",
    verbose: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for executing a request against an application.

    The application directory is put on ``sys.path`` so route targets such as
    ``controllers:welcome`` resolve to modules inside it.

    Args:
        app_path: Application root directory
        uri: URI to request
        name: Application name
        namespace: Application namespace
        environment: Environment identifier
        method: HTTP method of the request
        verbose: Enable verbose output
        log_level: Logging level

    """
    setup_cli_logging(log_level, verbose)

    resolved_path = str(app_path.resolve())
    if resolved_path not in sys.path:
        sys.path.insert(0, resolved_path)

    try:
        container = create_container(
            global_input=Input.from_environ(
                {"REQUEST_METHOD": method.upper(), "PATH_INFO": uri}
            )
        )
        app: Application = container.resolve(
            "application", name, str(app_path), namespace, environment
        )
        request = app.get_request(uri).execute()
    except KeystoneError as e:
        handle_cli_error(e, "Request failed")

    response = request.get_response()
    if response is None:
        handle_cli_error(KeystoneError("Request produced no response"), "Request failed")

    headers = "\n".join(f"[bold]{key}:[/bold] {value}" for key, value in response.headers.items())
    console.print(
        Panel(
            f"[bold]{method.upper()}[/bold] {request.uri}\n"
            f"[bold]Status:[/bold] {response.status} {response.status_text}\n{headers}",
            title=f"{app.name} ({app.environment.name})",
            border_style="green" if response.status < 400 else "red",
        )
    )
    console.print(response.render(), markup=False, highlight=False)
