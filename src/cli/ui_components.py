"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- La tabla de objetos hace el papel de la lista con scroll: se reconstruye
  entera a partir de la colección recién cargada.
"""

from __future__ import annotations

from typing import Callable, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ApiObject, DevicePayloadResponse
from core.services.data_fields import format_data_display


def print_banner(console: Console) -> None:
    title = Text("RESTFUL-OBJECTS", style="bold cyan")
    subtitle = Text("List • Create • Update • Delete", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_objects_table(objects: Iterable[ApiObject]) -> Table:
    """Una fila por objeto: id, nombre y slots en formato legible."""

    table = Table(title="Objects", show_lines=True)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Data", style="magenta")
    for obj in objects:
        table.add_row(obj.id or "-", obj.name, format_data_display(obj.data))
    return table


def build_device_panel(response: DevicePayloadResponse) -> Panel:
    """Panel para la respuesta de `sample`."""

    body = Text()
    body.append(f"Id: {response.id or '-'}\n")
    body.append(f"Name: {response.name}\n")
    if response.data is not None:
        body.append(f"CPU model: {response.data.cpu_model}\n")
        body.append(f"Hard disk size: {response.data.hard_disk_size}\n")
        body.append(f"Year: {response.data.year}\n")
        body.append(f"Price: {response.data.price:g}\n")
    if response.created_at is not None:
        body.append(f"Created at: {response.created_at.isoformat()}", style="dim")
    return Panel(body, title=Text("Created", style="bold green"), border_style="green")


def status_printer(console: Console) -> Callable[[str], None]:
    """Devuelve un status sink que imprime cada mensaje en la consola."""

    def _print(message: str) -> None:
        console.print(Text.assemble(("Status: ", "dim"), message))

    return _print
