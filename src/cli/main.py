"""CLI principal (Typer + Rich).

Por qué una CLI:
- Hace el papel de la UI: lista con scroll y paneles de alta/edición/borrado.
- Toda la lógica vive en `core.services.objects_manager`; aquí solo se
  leen argumentos, se imprimen mensajes de estado y se pinta la colección.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.http_client import HttpTransport
from adapters.rest_client import RestApiClient
from cli import doctor
from cli.ui_components import (
    build_device_panel,
    build_objects_table,
    print_banner,
    status_printer,
)
from core.config import AppSettings
from core.domain.errors import ApiError, OperationResult
from core.domain.models import DevicePayload, DevicePayloadResponse, DeviceSpec
from core.services.objects_manager import open_manager

app = typer.Typer(
    no_args_is_help=True,
    help="CRUD client for the restful-api.dev object collection.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _exit_on_failure(result: OperationResult) -> None:
    if not result.ok:
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic (DEBUG)."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(Text.assemble(("Invalid configuration: ", "red"), str(exc)))
        raise typer.Exit(code=2) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)


@app.command(name="list")
def list_objects() -> None:
    """Load the collection and render it as a table."""

    async def _run() -> OperationResult:
        async with open_manager(status_sink=status_printer(_console)) as manager:
            result = await manager.load_all()
            if result.ok:
                _console.print(build_objects_table(manager.objects))
            return result

    _exit_on_failure(asyncio.run(_run()))


@app.command()
def add(
    name: str = typer.Argument(..., help="Object name (required)."),
    data: str = typer.Option("", "--data", "-d", help="Fields as 'color:red, price:9'."),
) -> None:
    """Create a new object and refresh the list."""

    async def _run() -> OperationResult:
        async with open_manager(status_sink=status_printer(_console)) as manager:
            result = await manager.create(name, data)
            if result.ok:
                _console.print(build_objects_table(manager.objects))
            return result

    _exit_on_failure(asyncio.run(_run()))


@app.command()
def edit(
    object_id: str = typer.Argument(..., help="Id of the object to edit."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="New fields text."),
) -> None:
    """Open an edit session for an object (prompting for missing values) and save it."""

    async def _run() -> OperationResult | None:
        async with open_manager(status_sink=status_printer(_console)) as manager:
            loaded = await manager.load_all()
            if not loaded.ok:
                return loaded
            target = manager.find(object_id)
            if target is None:
                _console.print(Text.assemble(("Object not found: ", "red"), object_id))
                return None

            form = manager.begin_edit(target)
            new_name = name if name is not None else typer.prompt("Name", default=form.name)
            new_data = data if data is not None else typer.prompt("Data", default=form.data_text)
            result = await manager.save_edit(new_name, new_data)
            if result.ok:
                _console.print(build_objects_table(manager.objects))
            else:
                manager.cancel_edit()
            return result

    result = asyncio.run(_run())
    if result is None:
        raise typer.Exit(code=1)
    _exit_on_failure(result)


@app.command()
def delete(
    object_id: str = typer.Argument(..., help="Id of the object to delete."),
) -> None:
    """Delete an object and refresh the list."""

    async def _run() -> OperationResult:
        async with open_manager(status_sink=status_printer(_console)) as manager:
            result = await manager.delete(object_id)
            if result.ok:
                _console.print(build_objects_table(manager.objects))
            return result

    _exit_on_failure(asyncio.run(_run()))


@app.command()
def sample(
    name: str = typer.Option("I Fon Puro Makusu", "--name", help="Device name."),
) -> None:
    """POST a sample device record whose wire field names contain spaces."""

    settings = AppSettings()
    payload = DevicePayload(
        name=name,
        data=DeviceSpec(
            year=1990,
            price=999.0,
            cpu_model="em Faive",
            hard_disk_size="256GB",
        ),
    )

    async def _run() -> DevicePayloadResponse:
        async with HttpTransport(settings) as transport:
            client = RestApiClient(transport, settings.base_url)
            return await client.post(settings.objects_route, payload, DevicePayloadResponse)

    try:
        response = asyncio.run(_run())
    except ApiError as exc:
        _console.print(Text.assemble((f"Failed to post sample ({exc.kind.value}): ", "red"), exc.message))
        raise typer.Exit(code=1) from exc
    _console.print(build_device_panel(response))


def run() -> None:
    app()

