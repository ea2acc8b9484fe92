"""Resultado de un intento de transporte HTTP.

Exactamente una variante por intento:
- `Success`: el servidor respondió < 400.
- `ConnectionFailure`: no hubo respuesta (DNS, ruta, TLS, timeout).
- `ProtocolFailure`: el servidor respondió >= 400; el cuerpo se conserva
  para diagnóstico.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    status_code: int
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ConnectionFailure:
    detail: str


@dataclass(frozen=True)
class ProtocolFailure:
    status_code: int
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


RequestOutcome = Union[Success, ConnectionFailure, ProtocolFailure]
