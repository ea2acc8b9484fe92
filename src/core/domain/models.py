"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias permiten que el nombre en el wire (p.ej. "CPU model") difiera del
  atributo en memoria (`cpu_model`).

Nota:
- Estos modelos describen *qué* es un recurso, no *cómo* se obtiene.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

DATA_SLOTS: tuple[str, ...] = ("color", "capacity", "generation", "price")


class ObjectData(BaseModel):
    """Los cuatro slots libres de un recurso, en orden fijo de declaración.

    El servidor puede devolver claves arbitrarias en `data`; solo estas cuatro
    se conservan. Números y booleanos se normalizan a str; objetos y listas
    anidados se guardan como su texto JSON.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    color: str | None = Field(default=None, description="Slot 1.")
    capacity: str | None = Field(default=None, description="Slot 2.")
    generation: str | None = Field(default=None, description="Slot 3.")
    price: str | None = Field(default=None, description="Slot 4.")

    @field_validator("color", "capacity", "generation", "price", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return value

    def slots(self) -> list[tuple[str, str | None]]:
        """Pares (nombre, valor) en orden de declaración."""

        return [(name, getattr(self, name)) for name in DATA_SLOTS]

    def is_empty(self) -> bool:
        return not any(value for _, value in self.slots())


class ApiObject(BaseModel):
    """Recurso de la colección remota.

    Reglas:
    - `id` lo asigna el servidor; vacío solo antes de crear.
    - Una vez asignado, `id` no cambia (se rechaza reasignarlo a otro valor).
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: str | None = Field(
        default=None,
        description="Identificador asignado por el servidor.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre visible del recurso.",
    )
    data: ObjectData | None = Field(
        default=None,
        description="Slots libres (color/capacity/generation/price).",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and self.id and value != self.id:
            raise ValueError(f"id is immutable once assigned (current: {self.id})")
        super().__setattr__(name, value)


class DeviceSpec(BaseModel):
    """Ficha técnica de ejemplo con nombres de wire que no son identificadores."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    year: int = Field(..., description="Año de fabricación.")
    price: float = Field(..., ge=0, description="Precio.")
    cpu_model: str = Field(..., alias="CPU model", description="Modelo de CPU.")
    hard_disk_size: str = Field(
        ...,
        alias="Hard disk size",
        description="Capacidad de disco.",
    )


class DevicePayload(BaseModel):
    """Cuerpo de POST para crear un dispositivo de ejemplo."""

    name: str = Field(..., min_length=1)
    data: DeviceSpec


class DevicePayloadResponse(BaseModel):
    """Respuesta del servidor al crear un `DevicePayload`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    name: str
    data: DeviceSpec | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
