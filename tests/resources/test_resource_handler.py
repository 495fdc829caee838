# Tests for the Field Resource Handler
"""
Test suite for FieldResourceHandler.

These tests verify that:
- Resources are listed and read through the cache
- Registered dynamic fields are fused in and invalidate the cache
- A failing dynamic source falls back to the static definition
- URI errors surface as typed exceptions
- Suggestions and path validation go through the served definition
"""

import json
import logging

import pytest

from fieldscope.fields import (
    FieldSource,
    InvalidResourceUriError,
    UnknownEntityTypeError,
    UnknownResourceError,
)
from fieldscope.resources import FieldResourceHandler, ResourceCache, create_field_resource_handler
from fieldscope.settings import FieldScopeSettings


@pytest.fixture
def handler(fake_clock):
    handler = FieldResourceHandler(cache=ResourceCache(clock=fake_clock, start_sweeper=False))
    yield handler
    handler.shutdown()


class TestListAndRead:
    """Test resource listing and reads."""

    def test_list_resources(self, handler):
        resources = handler.list_resources()
        uris = [r["uri"] for r in resources]

        assert "jira://issue/fields" in uris
        assert "jira://project/fields" in uris
        issue = next(r for r in resources if r["uri"] == "jira://issue/fields")
        assert issue["name"] == "Issue Fields"
        assert issue["mimeType"] == "application/json"

    def test_read_resource(self, handler):
        definition = handler.read_resource("jira://issue/fields")

        assert definition.entity_type == "issue"
        assert "status" in definition.fields
        assert definition.path_index["status.name"] == "status"
        assert definition.dynamic_fields == 0

    def test_second_read_hits_cache(self, handler):
        handler.read_resource("jira://issue/fields")
        handler.read_resource("jira://issue/fields")

        stats = handler.cache_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_cached_copy_is_isolated(self, handler):
        """Mutating a returned definition does not leak into later reads."""
        first = handler.read_resource("jira://issue/fields")
        first.fields.clear()

        assert "status" in handler.read_resource("jira://issue/fields").fields

    def test_read_resource_json(self, handler):
        data = json.loads(handler.read_resource_json("jira://user/fields"))

        assert data["entityType"] == "user"
        assert data["totalFields"] == len(data["fields"])
        assert "pathIndex" in data

    def test_invalid_uri(self, handler):
        with pytest.raises(InvalidResourceUriError):
            handler.read_resource("not-a-uri")

    def test_empty_uri(self, handler):
        with pytest.raises(InvalidResourceUriError):
            handler.read_resource("")

    def test_unknown_resource(self, handler):
        with pytest.raises(UnknownResourceError):
            handler.read_resource("jira://nonexistent/fields")

    def test_wrong_scheme(self, handler):
        with pytest.raises(InvalidResourceUriError):
            handler.read_resource("http://issue/fields")


class TestDynamicFields:
    """Test dynamic field registration and fusion."""

    def test_register_fuses_and_invalidates(self, handler, dynamic_fields):
        before = handler.read_resource("jira://issue/fields")
        assert handler.register_dynamic_fields("issue", dynamic_fields) == 2

        after = handler.read_resource("jira://issue/fields")
        assert after.dynamic_fields == 2
        assert after.total_fields == before.total_fields + 2
        assert after.fields["customfield_10002"].source == FieldSource.DYNAMIC
        assert after.path_index["customfield_10002.key"] == "customfield_10002"
        assert after.last_dynamic_update is not None

    def test_register_wire_form(self, handler):
        handler.register_dynamic_fields("issue", [{
            "id": "customfield_20000",
            "name": "Severity",
            "accessPaths": [{"path": "customfield_20000.value", "type": "string"}],
        }])

        definition = handler.read_resource("jira://issue/fields")
        assert "customfield_20000" in definition.fields

    def test_register_unknown_entity(self, handler):
        with pytest.raises(UnknownEntityTypeError):
            handler.register_dynamic_fields("nonexistent", [])

    def test_register_needs_store(self, fake_clock):
        handler = FieldResourceHandler(
            cache=ResourceCache(clock=fake_clock, start_sweeper=False),
            dynamic_source=lambda entity_type: [],
        )
        with pytest.raises(TypeError):
            handler.register_dynamic_fields("issue", [])

    def test_failing_source_serves_static(self, fake_clock, caplog):
        def broken(entity_type):
            raise ConnectionError("remote unavailable")

        handler = FieldResourceHandler(
            cache=ResourceCache(clock=fake_clock, start_sweeper=False),
            dynamic_source=broken,
        )
        with caplog.at_level(logging.ERROR):
            definition = handler.read_resource("jira://issue/fields")

        assert definition.dynamic_fields == 0
        assert "status" in definition.fields
        assert "remote unavailable" in caplog.text

    @pytest.mark.parametrize("output", [42, "customfield_10001", {"id": "customfield_10001"}])
    def test_non_list_source_output_ignored(self, fake_clock, caplog, output):
        """A source returning something other than a list serves the static definition."""
        handler = FieldResourceHandler(
            cache=ResourceCache(clock=fake_clock, start_sweeper=False),
            dynamic_source=lambda entity_type: output,
        )
        with caplog.at_level(logging.WARNING):
            definition = handler.read_resource("jira://issue/fields")

        assert definition.dynamic_fields == 0
        assert "returned a non-list" in caplog.text

    def test_malformed_access_path_registered(self, handler):
        """A registered field with a non-string path is served without that path."""
        handler.register_dynamic_fields("issue", [
            {"id": "customfield_1", "accessPaths": [{"path": 123}]},
            {"id": "customfield_2", "accessPaths": [{"path": "customfield_2.value"}]},
        ])

        definition = handler.read_resource("jira://issue/fields")
        assert definition.dynamic_fields == 2
        assert definition.path_index["customfield_2.value"] == "customfield_2"

    def test_dynamic_disabled(self, fake_clock, dynamic_fields):
        handler = FieldResourceHandler(
            cache=ResourceCache(clock=fake_clock, start_sweeper=False),
            enable_dynamic=False,
        )
        handler.register_dynamic_fields("issue", dynamic_fields)

        assert handler.read_resource("jira://issue/fields").dynamic_fields == 0


class TestSuggestionsAndValidation:
    """Test suggestion and validation pass-throughs."""

    def test_suggest_fields(self, handler):
        suggestions = handler.suggest_fields("issue", "assigne", 3)
        assert suggestions[0] == "assignee"
        assert len(suggestions) <= 3

    def test_suggest_fields_with_metadata(self, handler):
        suggestions = handler.suggest_fields("issue", "stat", 2, with_metadata=True)

        assert len(suggestions) <= 2
        assert suggestions[0]["field"] == "status"
        assert suggestions[0]["metadata"]["isTypoCorrection"] is True

    def test_suggest_unknown_entity(self, handler):
        assert handler.suggest_fields("nonexistent", "stat") == []

    def test_validate_paths(self, handler):
        result = handler.validate_field_paths("issue", ["status.name", "status.nme"])

        assert not result.is_valid
        assert result.valid_paths == ["status.name"]
        assert result.invalid_paths == ["status.nme"]
        assert "status.name" in result.suggestions["status.nme"]

    def test_validate_unknown_entity(self, handler):
        result = handler.validate_field_paths("nonexistent", ["a.b"])

        assert not result.is_valid
        assert result.invalid_paths == ["a.b"]
        assert result.errors == ["Unknown entity type: nonexistent"]


class TestCacheManagement:
    """Test cache clearing and handler construction."""

    def test_clear_all(self, handler):
        handler.read_resource("jira://issue/fields")
        handler.read_resource("jira://user/fields")

        assert handler.clear_cache() == 2
        assert handler.cache_stats()["total_entries"] == 0

    def test_clear_one(self, handler):
        handler.read_resource("jira://issue/fields")

        assert handler.clear_cache("jira://issue/fields") == 1
        assert handler.clear_cache("jira://issue/fields") == 0

    def test_clear_invalid_uri(self, handler):
        with pytest.raises(InvalidResourceUriError):
            handler.clear_cache("bogus")

    def test_factory_applies_settings(self):
        settings = FieldScopeSettings(
            uri_scheme="tracker",
            cache_max_size=5,
            cache_ttl_seconds=10,
            suggestion_max_results=2,
        )
        handler = create_field_resource_handler(settings, start_sweeper=False)

        assert handler.cache.max_size == 5
        assert handler.cache.default_ttl == 10
        assert handler.engine.options.max_suggestions == 2
        assert handler.read_resource("tracker://issue/fields").uri == "tracker://issue/fields"
        assert len(handler.suggest_fields("issue", "s")) <= 2
        handler.shutdown()
