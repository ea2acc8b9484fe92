"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging para todas las peticiones.
- Convierte excepciones de red y códigos >= 400 en un `RequestOutcome`
  explícito, así el Core nunca ve excepciones de httpx.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con
  `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from core.config import AppSettings
from core.domain.outcomes import (
    ConnectionFailure,
    ProtocolFailure,
    RequestOutcome,
    Success,
)

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpTransport:
    """Implementación httpx de `core.interfaces.Transport`.

    Una petición, un round trip, sin reintentos. Si el cliente se creó aquí,
    `aclose()` lo cierra; si se inyectó, el llamador es su dueño.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
        timeout: float | None = None,
    ) -> RequestOutcome:
        method = method.upper()
        content: bytes | None = None
        if body is not None and method in _BODY_METHODS:
            content = body.encode("utf-8") if isinstance(body, str) else body

        request_timeout = httpx.Timeout(
            timeout if timeout is not None else self._settings.http_timeout_seconds
        )

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(headers or {}),
                content=content,
                timeout=request_timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out: %s", method, url, exc)
            return ConnectionFailure(detail=f"Request timed out: {str(exc) or type(exc).__name__}")
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return ConnectionFailure(detail=str(exc) or type(exc).__name__)

        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        if response.status_code >= 400:
            logger.warning("%s %s -> HTTP %s", method, url, response.status_code)
            return ProtocolFailure(status_code=response.status_code, content=response.content)
        return Success(status_code=response.status_code, content=response.content)
