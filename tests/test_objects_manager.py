"""
Tests for the CRUD orchestrator against the in-memory fake API.
Run: pytest tests/test_objects_manager.py -v
"""

import asyncio

import pytest

from core.domain.errors import (
    ApiConnectionError,
    ApiDecodeError,
    ApiProtocolError,
    FailureKind,
    InputValidationError,
)
from core.domain.models import ApiObject, ObjectData

PHONE = {"id": "1", "name": "Phone", "data": {"color": "black", "capacity": "128 GB"}}
TABLET = {"id": "2", "name": "Tablet", "data": None}


class TestList:
    def test_loads_collection_and_reports(self, manager, server, messages):
        server.seed(PHONE, TABLET)
        result = asyncio.run(manager.load_all())
        assert result.ok
        assert [o.name for o in manager.objects] == ["Phone", "Tablet"]
        assert result.value == manager.objects
        assert messages == ["Loading data...", "Loaded 2 objects"]

    def test_fresh_manager_starts_empty(self, manager):
        assert manager.objects == ()
        assert manager.editing is None

    def test_reload_replaces_instead_of_appending(self, manager, server):
        server.seed(PHONE, TABLET)
        asyncio.run(manager.load_all())
        first = manager.objects
        del server.objects["1"]
        asyncio.run(manager.load_all())
        assert [o.id for o in manager.objects] == ["2"]
        assert first is not manager.objects
        assert len(first) == 2

    def test_connection_failure_keeps_collection(self, manager, server, messages):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        server.refuse("GET")
        result = asyncio.run(manager.load_all())
        assert not result.ok
        assert isinstance(result.error, ApiConnectionError)
        assert [o.id for o in manager.objects] == ["1"]
        assert messages[-1].startswith("Failed to load data:")

    def test_decode_failure_is_reported_not_raised(self, manager, server, messages):
        server.override("GET", 200, "<html>oops</html>")
        result = asyncio.run(manager.load_all())
        assert isinstance(result.error, ApiDecodeError)
        assert result.error.kind is FailureKind.DECODE
        assert "oops" in messages[-1]
        assert manager.objects == ()

    def test_overlapping_loads_do_not_crash(self, manager, server):
        server.seed(PHONE, TABLET)

        async def scenario():
            return await asyncio.gather(manager.load_all(), manager.load_all())

        results = asyncio.run(scenario())
        assert all(r.ok for r in results)
        assert len(manager.objects) == 2


class TestCreate:
    def test_empty_name_is_rejected_without_network(self, manager, server, messages):
        result = asyncio.run(manager.create("", "color:red"))
        assert isinstance(result.error, InputValidationError)
        assert result.error.kind is FailureKind.VALIDATION
        assert server.calls == 0
        assert messages == ["Name is required!"]

    def test_blank_name_is_rejected(self, manager, server):
        result = asyncio.run(manager.create("   "))
        assert not result.ok
        assert server.calls == 0

    def test_end_to_end_widget(self, manager, server, messages):
        server.next_id = 42
        result = asyncio.run(manager.create("Widget", "color:blue, price:9"))
        assert result.ok
        assert result.value.id == "42"

        widget = manager.find("42")
        assert widget is not None
        assert widget.name == "Widget"
        assert widget.data.color == "blue"
        assert widget.data.capacity == "9"

        assert server.bodies("POST") == [{"name": "Widget", "data": {"color": "blue", "capacity": "9"}}]
        assert messages == [
            "Creating new object...",
            "Object created successfully!",
            "Loading data...",
            "Loaded 1 objects",
        ]

    def test_server_error_is_reported(self, manager, server, messages):
        server.override("POST", 500, "boom")
        result = asyncio.run(manager.create("Widget"))
        assert isinstance(result.error, ApiProtocolError)
        assert result.error.status_code == 500
        assert messages[-1] == "Failed to create object: HTTP 500: boom"
        assert [r.method for r in server.requests] == ["POST"]

    def test_created_without_readable_body_still_reloads(self, manager, server, messages):
        server.override("POST", 201, "")
        result = asyncio.run(manager.create("Widget", "color:blue"))
        assert result.ok
        assert result.value is None
        assert [r.method for r in server.requests] == ["POST", "GET"]
        assert "Object created successfully!" in messages
        assert not any(m.startswith("Failed") for m in messages)


class TestUpdate:
    def test_put_sends_id_and_reloads(self, manager, server, messages):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        messages.clear()

        result = asyncio.run(manager.update("1", "Phone 2", "color:white"))
        assert result.ok
        assert result.value.name == "Phone 2"
        assert server.bodies("PUT") == [{"id": "1", "name": "Phone 2", "data": {"color": "white"}}]
        assert manager.find("1").data == ObjectData(color="white")
        assert messages[:2] == ["Updating Phone...", "Updated Phone 2"]

    def test_missing_id_or_name_is_validation_failure(self, manager, server):
        assert isinstance(asyncio.run(manager.update("", "x")).error, InputValidationError)
        assert isinstance(asyncio.run(manager.update("1", " ")).error, InputValidationError)
        assert server.calls == 0

    def test_id_stays_a_single_path_segment(self, manager, server):
        server.seed(PHONE, TABLET)
        result = asyncio.run(manager.update("1/2", "Hijack"))
        assert result.error.status_code == 404
        assert b"/objects/1%2F2" == server.requests[-1].url.raw_path
        assert server.objects["1"]["name"] == "Phone"
        assert server.objects["2"]["name"] == "Tablet"

    def test_unreadable_body_returns_reloaded_item(self, manager, server):
        server.seed(PHONE)
        server.override("PUT", 200, "")
        result = asyncio.run(manager.update("1", "Phone 2"))
        assert result.ok
        assert result.value.id == "1"
        assert [r.method for r in server.requests] == ["PUT", "GET"]

    def test_unknown_id_is_protocol_failure(self, manager, server):
        result = asyncio.run(manager.update("404", "Ghost"))
        assert result.error.status_code == 404
        assert server.bodies("PUT")[0]["id"] == "404"


class TestDelete:
    def test_delete_reloads_and_uses_name_in_messages(self, manager, server, messages):
        server.seed(PHONE, TABLET)
        asyncio.run(manager.load_all())
        messages.clear()

        result = asyncio.run(manager.delete("1"))
        assert result.ok
        assert [o.id for o in manager.objects] == ["2"]
        assert messages[:2] == ["Deleting Phone...", "Deleted Phone"]

    def test_not_found_leaves_collection_unchanged(self, manager, server, messages):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        before = manager.objects

        result = asyncio.run(manager.delete("missing"))
        assert isinstance(result.error, ApiProtocolError)
        assert result.error.status_code == 404
        assert manager.objects is before
        assert messages[-1].startswith("Failed to delete missing: HTTP 404")

    def test_query_characters_in_id_are_escaped(self, manager, server, messages):
        server.seed(PHONE)
        result = asyncio.run(manager.delete("1?force=1"))
        assert result.error.status_code == 404
        raw_path = server.requests[-1].url.raw_path
        assert raw_path.startswith(b"/objects/1%3Fforce")
        assert b"?" not in raw_path
        assert "1" in server.objects
        assert not any(m.startswith("Deleted") for m in messages)

    def test_empty_id_is_validation_failure(self, manager, server):
        assert isinstance(asyncio.run(manager.delete(" ")).error, InputValidationError)
        assert server.calls == 0


class TestEditSession:
    def test_begin_edit_prefills_form(self, manager, server):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        form = manager.begin_edit(manager.find("1"))
        assert manager.editing is manager.find("1")
        assert form.object_id == "1"
        assert form.name == "Phone"
        assert form.data_text == "color:black, capacity:128 GB"

    def test_form_for_object_without_data_is_blank(self, manager, server):
        server.seed(TABLET)
        asyncio.run(manager.load_all())
        assert manager.begin_edit(manager.find("2")).data_text == ""

    def test_unsaved_object_cannot_be_edited(self, manager):
        with pytest.raises(ValueError):
            manager.begin_edit(ApiObject(name="draft"))

    def test_save_clears_session(self, manager, server):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        manager.begin_edit(manager.find("1"))
        result = asyncio.run(manager.save_edit("Renamed", "color:red"))
        assert result.ok
        assert manager.editing is None
        assert manager.find("1").name == "Renamed"

    def test_failed_save_keeps_session_open(self, manager, server):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        manager.begin_edit(manager.find("1"))
        result = asyncio.run(manager.save_edit(""))
        assert not result.ok
        assert manager.editing is not None

    def test_cancel_clears_session(self, manager, server):
        server.seed(PHONE)
        asyncio.run(manager.load_all())
        manager.begin_edit(manager.find("1"))
        manager.cancel_edit()
        assert manager.editing is None

    def test_save_without_session_is_rejected(self, manager, server):
        result = asyncio.run(manager.save_edit("x"))
        assert isinstance(result.error, InputValidationError)
        assert server.calls == 0


class TestStatusSink:
    def test_detached_sink_receives_nothing(self, manager, server, messages):
        manager.detach_status_sink()
        asyncio.run(manager.load_all())
        assert messages == []
        assert manager.last_status == "Loaded 0 objects"

    def test_failing_sink_does_not_break_operation(self, manager, server):
        def broken(message):
            raise RuntimeError("widget destroyed")

        manager.attach_status_sink(broken)
        server.seed(PHONE)
        result = asyncio.run(manager.load_all())
        assert result.ok
        assert len(manager.objects) == 1
