"""Parser/formatter del texto libre `key:value, key:value`.

La asignación es posicional: la clave se ignora y cada valor ocupa el primer
slot vacío (color, capacity, generation, price). `generation:3rd` escrito
primero termina en `color`. Este comportamiento se conserva tal cual.
"""

from __future__ import annotations

from core.domain.models import DATA_SLOTS, ObjectData

NO_DATA = "No data"


def parse_data_string(text: str | None) -> ObjectData:
    """Convierte `text` en `ObjectData` rellenando slots por posición.

    Segmentos sin `:` o con valor vacío se descartan en silencio; los pares
    que sobran tras llenar los cuatro slots también.
    """

    values: dict[str, str] = {}
    if not text:
        return ObjectData()

    for segment in text.split(","):
        _, sep, value = segment.partition(":")
        if not sep:
            continue
        value = value.strip()
        if not value:
            continue
        free = next((slot for slot in DATA_SLOTS if slot not in values), None)
        if free is None:
            break
        values[free] = value

    return ObjectData(**values)


def format_data_for_editing(data: ObjectData | None) -> str:
    """Formato inverso de `parse_data_string`: `color:red, price:9`."""

    if data is None:
        return NO_DATA
    pairs = [f"{name}:{value}" for name, value in data.slots() if value]
    return ", ".join(pairs) if pairs else NO_DATA


def format_data_display(data: ObjectData | None) -> str:
    """Texto multilínea para la fila de la lista (`Color: red`)."""

    if data is None:
        return NO_DATA
    lines = [f"{name.capitalize()}: {value}" for name, value in data.slots() if value]
    return "\n".join(lines) if lines else NO_DATA
