"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpTransport
from core.config import AppSettings
from core.domain.outcomes import ConnectionFailure, ProtocolFailure, Success

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.callback()
def doctor() -> None:
    """Environment diagnostics and configuration checks."""


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    async with HttpTransport(settings) as transport:
        outcome = await transport.send("GET", url)
    if isinstance(outcome, Success):
        return True, f"HTTP {outcome.status_code}"
    if isinstance(outcome, ProtocolFailure):
        return False, f"HTTP {outcome.status_code}"
    if isinstance(outcome, ConnectionFailure):
        return False, outcome.detail
    return False, repr(outcome)


@app.command()
def run() -> None:
    """Show the effective configuration and check connectivity to the API."""

    settings = AppSettings()
    collection_url = f"{settings.base_url}/{settings.objects_route}"

    table = Table(title="RESTFUL-OBJECTS Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Collection", "OK", collection_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Log level", "OK", settings.log_level)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings, collection_url))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Check RESTFUL_OBJECTS_BASE_URL or your network connection."
        )
        raise typer.Exit(code=1)
