"""Codec JSON de los modelos del dominio.

Por qué pydantic:
- `model_dump_json(by_alias=True)` respeta los nombres de wire declarados con
  `alias` (p.ej. "CPU model").
- `TypeAdapter` decodifica directamente a `list[Model]` sin envolver el array.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.domain.errors import ApiDecodeError

T = TypeVar("T")


def encode(record: BaseModel) -> str:
    """Serializa `record` a JSON usando nombres de wire y omitiendo nulos."""

    return record.model_dump_json(by_alias=True, exclude_none=True)


@lru_cache(maxsize=64)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def decode(text: str | bytes, target_type: type[T] | Any) -> T:
    """Decodifica `text` al tipo pedido.

    Lanza `ApiDecodeError` (con un extracto del texto) si el JSON está mal
    formado o no encaja con el tipo.
    """

    raw = text.decode("utf-8", errors="replace") if isinstance(text, bytes) else text
    if not raw.strip():
        raise ApiDecodeError("Empty response body", raw)
    try:
        return _adapter(target_type).validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        reason = first.get("msg") or "Invalid JSON"
        location = ".".join(str(part) for part in first.get("loc", ()))
        if location:
            reason = f"{reason} at '{location}'"
        raise ApiDecodeError(reason, raw) from exc
