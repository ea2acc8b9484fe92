"""
Shared fixtures: an in-memory fake of the /objects API served through
httpx.MockTransport, so no test touches the network.
"""

import json

import httpx
import pytest

from adapters.http_client import HttpTransport, build_async_client
from adapters.rest_client import RestApiClient
from core.config import AppSettings
from core.services.objects_manager import RestfulObjectsManager

BASE_URL = "https://api.test"


class FakeObjectsServer:
    """Minimal stand-in for https://api.restful-api.dev/objects."""

    def __init__(self):
        self.objects = {}
        self.requests = []
        self.next_id = 1
        self._overrides = {}
        self._connect_errors = set()
        self._timeouts = set()

    def seed(self, *records):
        for record in records:
            self.objects[record["id"]] = dict(record)

    def override(self, method, status_code, text=""):
        """Answer every `method` request with a fixed status/body."""
        self._overrides[method] = (status_code, text)

    def refuse(self, method):
        """Raise a connection error for every `method` request."""
        self._connect_errors.add(method)

    def time_out(self, method):
        self._timeouts.add(method)

    @property
    def calls(self):
        return len(self.requests)

    def bodies(self, method):
        return [json.loads(r.content) for r in self.requests if r.method == method]

    def handler(self, request):
        self.requests.append(request)
        method = request.method
        if method in self._connect_errors:
            raise httpx.ConnectError("Name or service not known", request=request)
        if method in self._timeouts:
            raise httpx.ReadTimeout("Read timed out", request=request)
        if method in self._overrides:
            status_code, text = self._overrides[method]
            return httpx.Response(status_code, text=text)

        parts = request.url.path.strip("/").split("/")
        if not parts or parts[0] != "objects" or len(parts) > 2:
            return httpx.Response(404, json={"error": "Not found"})

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=list(self.objects.values()))
            if method == "POST":
                body = json.loads(request.content)
                object_id = str(self.next_id)
                self.next_id += 1
                record = {"id": object_id, **body, "createdAt": "2026-10-19T10:00:00.000+00:00"}
                self.objects[object_id] = record
                return httpx.Response(200, json=record)
            return httpx.Response(405, json={"error": "Method not allowed"})

        object_id = parts[1]
        if object_id not in self.objects:
            return httpx.Response(
                404,
                json={"error": f"Object with id={object_id} was not found."},
            )
        if method == "GET":
            return httpx.Response(200, json=self.objects[object_id])
        if method == "PUT":
            body = json.loads(request.content)
            record = {**body, "id": object_id, "updatedAt": "2026-10-19T11:00:00.000+00:00"}
            self.objects[object_id] = record
            return httpx.Response(200, json=record)
        if method == "DELETE":
            del self.objects[object_id]
            return httpx.Response(
                200,
                json={"message": f"Object with id = {object_id} has been deleted."},
            )
        return httpx.Response(405, json={"error": "Method not allowed"})


@pytest.fixture
def server():
    return FakeObjectsServer()


@pytest.fixture
def settings():
    return AppSettings(base_url=BASE_URL, http_timeout_seconds=5, _env_file=None)


@pytest.fixture
def transport(server, settings):
    client = build_async_client(settings, transport=httpx.MockTransport(server.handler))
    return HttpTransport(settings, client=client)


@pytest.fixture
def client(transport, settings):
    return RestApiClient(transport, settings.base_url)


@pytest.fixture
def messages():
    return []


@pytest.fixture
def manager(client, messages):
    return RestfulObjectsManager(client, status_sink=messages.append)
