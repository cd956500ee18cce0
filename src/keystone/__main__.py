"""Main entry point for the Keystone command line.

Commands:
- Listing the services registered by the default providers
- Executing a request against an application directory
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from keystone.cli import execute_request_command, list_services_command

# Load environment variables from .env file if it exists
_ = load_dotenv()

app = typer.Typer(name="keystone")


@app.command(name="services")
def list_services(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """List the services registered by the default providers."""
    list_services_command(log_level)


@app.command(name="request")
def request(
    app_path: Annotated[
        Path,
        typer.Argument(
            help="Application root directory",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    uri: Annotated[str, typer.Argument(help="URI to request, e.g. /welcome")] = "/",
    name: Annotated[
        str | None,
        typer.Option("--name", help="Application name, defaults to the directory name"),
    ] = None,
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", help="Application namespace, defaults to the name"),
    ] = None,
    environment: Annotated[
        str, typer.Option("--env", "-e", help="Environment identifier")
    ] = "dev",
    method: Annotated[str, typer.Option("--method", "-X", help="HTTP method")] = "GET",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output (sets log level to DEBUG)"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "WARNING",
) -> None:
    """Execute a request against an application and print the response.

    Example:
        keystone request ./demo /welcome/world --env prod

    """
    app_name = name or app_path.resolve().name
    execute_request_command(
        app_path,
        uri,
        app_name,
        namespace or app_name.capitalize(),
        environment,
        method,
        verbose,
        log_level,
    )


if __name__ == "__main__":
    app()
