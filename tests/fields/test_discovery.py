# Tests for Dynamic Field Discovery
"""
Test suite for building dynamic definitions from field metadata and
live payloads, and for the dynamic field store.
"""

import logging
import threading

from fieldscope.fields.discovery import (
    DynamicFieldStore,
    convert_field_metadata,
    discover_custom_fields,
    map_field_type,
    observe_payload,
)
from fieldscope.fields.models import Confidence, FieldSource


class TestConvertFieldMetadata:
    """Test single metadata record conversion."""

    def test_number_field(self):
        """A custom number field gets one path equal to its id."""
        definition = convert_field_metadata({
            "id": "customfield_10001",
            "name": "Story Points",
            "custom": True,
            "schema": {"type": "number"},
        })

        assert definition.id == "customfield_10001"
        assert definition.name == "Story Points"
        assert definition.paths == ["customfield_10001"]
        assert definition.access_paths[0].type == "number"
        assert definition.source == FieldSource.DYNAMIC
        assert definition.confidence == Confidence.HIGH

    def test_type_mapping(self):
        assert map_field_type("array") == "array"
        assert map_field_type("user") == "object"
        assert map_field_type("option") == "object"
        assert map_field_type("date") == "string"
        assert map_field_type(None) == "string"

    def test_invalid_id(self, caplog):
        """Records without a usable id are skipped with a warning."""
        with caplog.at_level(logging.WARNING):
            assert convert_field_metadata({"id": "  ", "name": "Blank"}) is None
        assert "reason=Invalid field ID" in caplog.text

    def test_invalid_name(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert convert_field_metadata({"id": "customfield_1"}) is None
        assert "reason=Invalid field name" in caplog.text


class TestDiscoverCustomFields:
    """Test listing conversion."""

    def test_keeps_custom_only(self):
        raw = [
            {"id": "summary", "name": "Summary", "custom": False, "schema": {"type": "string"}},
            {"id": "customfield_1", "name": "Team", "custom": True, "schema": {"type": "option"}},
            {"id": "customfield_2", "name": "Sprint", "custom": True, "schema": {"type": "array"}},
            {"id": "", "name": "Broken", "custom": True},
        ]

        definitions = discover_custom_fields(raw)

        assert [d.id for d in definitions] == ["customfield_1", "customfield_2"]
        assert definitions[0].type == "object"
        assert definitions[1].type == "array"

    def test_non_list(self):
        assert discover_custom_fields({"id": "customfield_1"}) == []


class TestObservePayload:
    """Test inference from live payloads."""

    def test_infers_from_values(self):
        payload = {
            "key": "PROJ-1",
            "fields": {
                "summary": "Not custom",
                "customfield_10001": 8,
                "customfield_10002": {"value": "Platform", "id": "10400"},
                "customfield_10003": [{"name": "Sprint 4", "id": 12}],
                "customfield_10004": None,
            },
        }

        definitions = observe_payload(payload, names={"customfield_10002": "Team"})
        by_id = {d.id: d for d in definitions}

        assert set(by_id) == {"customfield_10001", "customfield_10002", "customfield_10003"}
        assert by_id["customfield_10001"].type == "string"
        assert by_id["customfield_10001"].access_paths[0].type == "number"
        assert by_id["customfield_10002"].name == "Team"
        assert by_id["customfield_10002"].type == "object"
        assert "customfield_10002.value" in by_id["customfield_10002"].paths
        assert by_id["customfield_10003"].type == "array"
        assert "customfield_10003[*]" in by_id["customfield_10003"].paths
        assert "customfield_10003[].name" in by_id["customfield_10003"].paths
        assert all(d.confidence == Confidence.MEDIUM for d in definitions)

    def test_bare_id_always_first(self):
        definitions = observe_payload({"customfield_7": {"name": "x"}})
        assert definitions[0].paths[0] == "customfield_7"

    def test_non_mapping(self):
        assert observe_payload(["customfield_1"]) == []


class TestDynamicFieldStore:
    """Test the in-memory dynamic field registry."""

    def test_register_and_get(self):
        store = DynamicFieldStore()
        assert store.register("issue", [{"id": "customfield_1"}]) == 1

        assert "issue" in store
        assert store("issue") == [{"id": "customfield_1"}]
        assert store.get("project") == []

    def test_register_replaces(self):
        store = DynamicFieldStore()
        store.register("issue", [1, 2])
        store.register("issue", [3])
        assert store.get("issue") == [3]

    def test_get_returns_copy(self):
        store = DynamicFieldStore()
        store.register("issue", [1])
        store.get("issue").append(2)
        assert store.get("issue") == [1]

    def test_remove_and_clear(self):
        store = DynamicFieldStore()
        store.register("issue", [1])
        store.register("user", [2])

        assert store.remove("issue")
        assert not store.remove("issue")
        store.clear()
        assert "user" not in store

    def test_concurrent_registration(self):
        """Parallel registrations for different entity types all land."""
        store = DynamicFieldStore()

        def worker(i):
            store.register(f"entity{i}", [i])

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(store.get(f"entity{i}") == [i] for i in range(20))
