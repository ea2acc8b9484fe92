"""Contratos de transporte y notificación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el transporte httpx por un fake en tests, y la UI por
  cualquier callable que reciba mensajes de estado.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from core.domain.outcomes import RequestOutcome


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo para enviar una petición HTTP.

    Reglas de diseño:
    - `send` es asíncrono: un único punto de espera por petición.
    - Nunca lanza por fallos de red o HTTP; devuelve un `RequestOutcome`.
    - No reintenta.
    """

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
        timeout: float | None = None,
    ) -> RequestOutcome:
        ...


@runtime_checkable
class StatusSink(Protocol):
    """Receptor de mensajes de estado legibles (progreso y resultado)."""

    def __call__(self, message: str) -> None:
        ...
