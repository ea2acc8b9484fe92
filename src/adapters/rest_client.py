"""Cliente REST tipado sobre un `Transport`.

Por qué una capa aparte del transporte:
- El transporte solo sabe de bytes y códigos HTTP; aquí se construyen URLs,
  se codifica/decodifica JSON y se traducen los `RequestOutcome` a la
  taxonomía de errores del dominio.
- Lanza `ApiError`; quien orquesta decide cómo reportarlo.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from adapters import json_codec
from core.domain.errors import ApiConnectionError, ApiProtocolError
from core.domain.outcomes import ConnectionFailure, ProtocolFailure, Success
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {"Content-Type": "application/json"}


class RestApiClient:
    """`get/post/put/delete` contra `base_url/route`, decodificando a un tipo."""

    def __init__(
        self,
        transport: Transport,
        base_url: str,
        *,
        timeout: float | None = None,
    ) -> None:
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, route: str) -> str:
        route = route.strip("/")
        return f"{self._base_url}/{route}" if route else self._base_url

    async def get(self, route: str, response_type: type[T] | Any) -> T:
        content = await self._send("GET", route)
        return json_codec.decode(content, response_type)

    async def post(self, route: str, payload: BaseModel, response_type: type[T] | Any) -> T:
        content = await self._send("POST", route, body=json_codec.encode(payload))
        return json_codec.decode(content, response_type)

    async def put(self, route: str, payload: BaseModel, response_type: type[T] | Any) -> T:
        content = await self._send("PUT", route, body=json_codec.encode(payload))
        return json_codec.decode(content, response_type)

    async def delete(self, route: str) -> bytes:
        return await self._send("DELETE", route)

    async def _send(self, method: str, route: str, *, body: str | None = None) -> bytes:
        url = self.url_for(route)
        outcome = await self._transport.send(
            method,
            url,
            headers=JSON_HEADERS if body is not None else None,
            body=body,
            timeout=self._timeout,
        )
        if isinstance(outcome, Success):
            return outcome.content
        if isinstance(outcome, ProtocolFailure):
            logger.error("%s failed: HTTP %s", method, outcome.status_code)
            raise ApiProtocolError(outcome.status_code, outcome.text)
        if isinstance(outcome, ConnectionFailure):
            logger.error("%s failed: %s", method, outcome.detail)
            raise ApiConnectionError(outcome.detail)
        raise TypeError(f"Unexpected transport outcome: {outcome!r}")
