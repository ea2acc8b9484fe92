"""Taxonomía de errores del cliente REST.

Por qué excepciones tipadas:
- Las capas internas (cliente, codec) lanzan; el orquestador las captura en
  el borde de cada operación y las convierte en un `OperationResult`.
- `kind` permite a la UI distinguir el tipo de fallo sin `isinstance`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

EXCERPT_LENGTH = 120

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION = "validation"
    CONNECTION = "connection"
    PROTOCOL = "protocol"
    DECODE = "decode"


def make_excerpt(text: str, limit: int = EXCERPT_LENGTH) -> str:
    """Recorta `text` a como mucho `limit` caracteres (incluido el "...")."""

    cleaned = " ".join(text.split())
    if len(cleaned) <= limit:
        return cleaned
    return cleaned[: max(limit - 3, 0)] + "..."


class ApiError(Exception):
    kind: FailureKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(ApiError):
    """Entrada inválida detectada antes de cualquier llamada de red."""

    kind = FailureKind.VALIDATION


class ApiConnectionError(ApiError):
    """Sin red, DNS/TLS fallido o timeout."""

    kind = FailureKind.CONNECTION


class ApiProtocolError(ApiError):
    """El servidor respondió con 4xx/5xx."""

    kind = FailureKind.PROTOCOL

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        message = f"HTTP {status_code}"
        if body:
            message = f"{message}: {make_excerpt(body)}"
        super().__init__(message)


class ApiDecodeError(ApiError):
    """El cuerpo de la respuesta no tiene la forma esperada."""

    kind = FailureKind.DECODE

    def __init__(self, reason: str, text: str) -> None:
        self.reason = reason
        self.excerpt = make_excerpt(text)
        super().__init__(f"{reason} (body: {self.excerpt!r})")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Resultado de una operación CRUD: valor o error, nunca ambos."""

    value: T | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "OperationResult[T]":
        return cls(error=error)
