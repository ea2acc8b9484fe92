"""CRUD orchestration for the remote object collection.

The manager owns the in-memory collection and the pending edit; UI layers
read them and only change them through the CRUD calls. Every call reports a
progress message and a terminal message to the status sink, catches every
`ApiError` at its boundary and returns an `OperationResult` instead of
raising. Successful mutations reload the full list, since the server is the
source of truth for ids.

Overlapping calls are not serialized: the collection is swapped as a whole
tuple, so readers never see a partial list, and the last List to decode wins.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator
from urllib.parse import quote

from adapters.http_client import HttpTransport
from adapters.rest_client import RestApiClient
from core.config import AppSettings
from core.domain.errors import (
    ApiDecodeError,
    ApiError,
    FailureKind,
    InputValidationError,
    OperationResult,
)
from core.domain.models import ApiObject
from core.interfaces.transport import StatusSink
from core.services.data_fields import format_data_for_editing, parse_data_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditForm:
    """Values used to prefill an edit panel."""

    object_id: str
    name: str
    data_text: str


class RestfulObjectsManager:
    def __init__(
        self,
        client: RestApiClient,
        *,
        route: str = "objects",
        status_sink: StatusSink | None = None,
    ) -> None:
        self._client = client
        self._route = route.strip("/")
        self._status_sink = status_sink
        self._objects: tuple[ApiObject, ...] = ()
        self._editing: ApiObject | None = None
        self._last_status = ""

    @property
    def objects(self) -> tuple[ApiObject, ...]:
        return self._objects

    @property
    def editing(self) -> ApiObject | None:
        return self._editing

    @property
    def last_status(self) -> str:
        return self._last_status

    def attach_status_sink(self, sink: StatusSink) -> None:
        self._status_sink = sink

    def detach_status_sink(self) -> None:
        """Drop notifications from operations still in flight."""

        self._status_sink = None

    def find(self, object_id: str) -> ApiObject | None:
        return next((obj for obj in self._objects if obj.id == object_id), None)

    def _item_route(self, object_id: str) -> str:
        # One path segment: '/', '?' and '#' in an id must not reach another resource.
        return f"{self._route}/{quote(object_id, safe='')}"

    # -- List -----------------------------------------------------------------

    async def load_all(self) -> OperationResult[tuple[ApiObject, ...]]:
        self._notify("Loading data...")
        try:
            loaded = await self._client.get(self._route, list[ApiObject])
        except ApiError as exc:
            return self._fail("Failed to load data", exc)

        self._objects = tuple(loaded)
        self._notify(f"Loaded {len(self._objects)} objects")
        return OperationResult.success(self._objects)

    # -- Create ---------------------------------------------------------------

    async def create(self, name: str, data_text: str = "") -> OperationResult[ApiObject]:
        name = (name or "").strip()
        if not name:
            return self._fail(None, InputValidationError("Name is required!"))

        self._notify("Creating new object...")
        payload = ApiObject(name=name, data=parse_data_string(data_text))
        created: ApiObject | None
        try:
            created = await self._client.post(self._route, payload, ApiObject)
        except ApiDecodeError as exc:
            # The POST itself succeeded; only the echo body is unusable.
            logger.warning("Create response not decoded: %s", exc.message)
            created = None
        except ApiError as exc:
            return self._fail("Failed to create object", exc)

        self._notify("Object created successfully!")
        await self.load_all()
        return OperationResult.success(created)

    # -- Update ---------------------------------------------------------------

    async def update(
        self,
        object_id: str,
        name: str,
        data_text: str = "",
    ) -> OperationResult[ApiObject]:
        object_id = (object_id or "").strip()
        name = (name or "").strip()
        if not object_id:
            return self._fail(None, InputValidationError("Object id is required!"))
        if not name:
            return self._fail(None, InputValidationError("Name is required!"))

        current = self.find(object_id)
        self._notify(f"Updating {current.name if current else name}...")
        payload = ApiObject(id=object_id, name=name, data=parse_data_string(data_text))
        updated: ApiObject | None
        try:
            updated = await self._client.put(self._item_route(object_id), payload, ApiObject)
        except ApiDecodeError as exc:
            logger.warning("Update response not decoded: %s", exc.message)
            updated = None
        except ApiError as exc:
            return self._fail("Failed to update object", exc)

        self._notify(f"Updated {payload.name}")
        await self.load_all()
        if updated is None:
            updated = self.find(object_id)
        return OperationResult.success(updated)

    # -- Delete ---------------------------------------------------------------

    async def delete(self, object_id: str) -> OperationResult[None]:
        object_id = (object_id or "").strip()
        if not object_id:
            return self._fail(None, InputValidationError("Object id is required!"))

        current = self.find(object_id)
        label = current.name if current else object_id
        self._notify(f"Deleting {label}...")
        try:
            await self._client.delete(self._item_route(object_id))
        except ApiError as exc:
            return self._fail(f"Failed to delete {label}", exc)

        self._notify(f"Deleted {label}")
        await self.load_all()
        return OperationResult.success(None)

    # -- Edit session ---------------------------------------------------------

    def begin_edit(self, obj: ApiObject) -> EditForm:
        if not obj.id:
            raise ValueError("Only created objects can be edited")
        self._editing = obj
        return EditForm(
            object_id=obj.id,
            name=obj.name,
            data_text="" if obj.data is None or obj.data.is_empty() else format_data_for_editing(obj.data),
        )

    def cancel_edit(self) -> None:
        self._editing = None

    async def save_edit(self, name: str, data_text: str = "") -> OperationResult[ApiObject]:
        editing = self._editing
        if editing is None or not editing.id:
            return self._fail(None, InputValidationError("No object is being edited"))

        result = await self.update(editing.id, name, data_text)
        if result.ok and self._editing is editing:
            self._editing = None
        return result

    # -- Notifications --------------------------------------------------------

    def _fail(self, prefix: str | None, exc: ApiError) -> OperationResult:
        message = f"{prefix}: {exc.message}" if prefix else exc.message
        if exc.kind is FailureKind.VALIDATION:
            logger.info(message)
        else:
            logger.error(message)
        self._notify(message)
        return OperationResult.failure(exc)

    def _notify(self, message: str) -> None:
        self._last_status = message
        logger.debug("Status: %s", message)
        sink = self._status_sink
        if sink is None:
            return
        try:
            sink(message)
        except Exception:
            logger.exception("Status sink raised while handling %r", message)


@asynccontextmanager
async def open_manager(
    settings: AppSettings | None = None,
    *,
    status_sink: StatusSink | None = None,
) -> AsyncIterator[RestfulObjectsManager]:
    """Build a manager wired to the configured API and close it on exit."""

    settings = settings or AppSettings()
    async with HttpTransport(settings) as transport:
        client = RestApiClient(transport, settings.base_url)
        manager = RestfulObjectsManager(
            client,
            route=settings.objects_route,
            status_sink=status_sink,
        )
        try:
            yield manager
        finally:
            manager.detach_status_sink()
