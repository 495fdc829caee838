# Tests for Definition Fusion
"""
Test suite for merging dynamic fields into static definitions.

These tests verify that:
- Dynamic fields are added and counted
- Static fields are never replaced
- Invalid dynamic entries are skipped with warnings
- Invalid static definitions are rejected
- Timestamps move forward
"""

import logging
import pytest

from fieldscope.fields.errors import InvalidStaticDefinitionError
from fieldscope.fields.fusion import DefinitionFusion, fuse_definitions
from fieldscope.fields.models import AccessPath, FieldDefinition, FieldSource, parse_timestamp


class TestFusionBasics:
    """Test basic fusion results."""

    def test_adds_dynamic_fields(self, static_definition, dynamic_fields):
        """Two dynamic fields on top of two static ones."""
        fused = fuse_definitions(static_definition, dynamic_fields)

        assert fused.total_fields == 4
        assert fused.dynamic_fields == 2
        assert set(fused.fields) == {"status", "assignee", "customfield_10001", "customfield_10002"}
        assert fused.path_index["customfield_10002.key"] == "customfield_10002"

    def test_static_paths_kept(self, static_definition, dynamic_fields):
        """Static path index entries survive fusion."""
        fused = fuse_definitions(static_definition, dynamic_fields)

        assert fused.path_index["status.name"] == "status"
        assert fused.path_index["assignee.displayName"] == "assignee"

    def test_carries_identity(self, static_definition, dynamic_fields):
        """uri, entity type and version are carried through."""
        fused = fuse_definitions(static_definition, dynamic_fields)

        assert fused.uri == static_definition.uri
        assert fused.entity_type == "issue"
        assert fused.version == "1.0.0"

    def test_static_input_not_mutated(self, static_definition, dynamic_fields):
        """Fusion works on copies."""
        fuse_definitions(static_definition, dynamic_fields)

        assert set(static_definition.fields) == {"status", "assignee"}
        assert "customfield_10002.key" not in static_definition.path_index
        assert static_definition.dynamic_fields == 0

    def test_empty_dynamic_list(self, static_definition):
        """No dynamic fields keeps the static content."""
        fused = fuse_definitions(static_definition, [])

        assert fused.total_fields == 2
        assert fused.dynamic_fields == 0
        assert fused.path_index == static_definition.path_index

    def test_accepts_wire_form(self, static_definition, dynamic_fields):
        """Static definition and dynamic fields may be mappings."""
        fused = fuse_definitions(
            static_definition.to_dict(),
            [field.to_dict() for field in dynamic_fields],
        )

        assert fused.total_fields == 4
        assert fused.fields["customfield_10002"].source == FieldSource.DYNAMIC

    def test_deterministic(self, static_definition, dynamic_fields, fixed_datetime):
        """Same inputs give the same document."""
        fusion = DefinitionFusion(clock=fixed_datetime)

        first = fusion.fuse(static_definition, dynamic_fields)
        second = fusion.fuse(static_definition, dynamic_fields)

        assert first.to_dict() == second.to_dict()


class TestFusionConflicts:
    """Test id and path conflict handling."""

    def test_static_field_wins(self, static_definition, caplog):
        """A dynamic field reusing a static id is skipped with a warning."""
        impostor = FieldDefinition(
            id="status",
            name="Fake Status",
            access_paths=[AccessPath("status.fake")],
            source=FieldSource.DYNAMIC,
        )

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, [impostor])

        assert fused.fields["status"] == static_definition.fields["status"]
        assert fused.total_fields == 2
        assert fused.dynamic_fields == 0
        assert "status.fake" not in fused.path_index
        assert "Dynamic field conflicts with existing field" in caplog.text
        assert "fieldId=status" in caplog.text
        assert "staticField=True" in caplog.text

    def test_first_dynamic_duplicate_wins(self, static_definition, caplog):
        """Within the dynamic list the first id wins."""
        first = FieldDefinition(id="customfield_1", name="First", source=FieldSource.DYNAMIC)
        second = FieldDefinition(id="customfield_1", name="Second", source=FieldSource.DYNAMIC)

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, [first, second])

        assert fused.fields["customfield_1"].name == "First"
        assert fused.dynamic_fields == 1
        assert "staticField=False" in caplog.text

    def test_dynamic_path_collision_last_wins(self, static_definition, caplog):
        """Dynamic fields sharing a path: the later one owns it."""
        a = FieldDefinition(id="customfield_1", access_paths=[AccessPath("shared.path")])
        b = FieldDefinition(id="customfield_2", access_paths=[AccessPath("shared.path")])

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, [a, b])

        assert fused.path_index["shared.path"] == "customfield_2"
        assert "Path conflict detected during fusion" in caplog.text

    def test_static_path_repointed(self, static_definition, caplog):
        """A dynamic field claiming a static path takes it over with a warning."""
        claimant = FieldDefinition(id="customfield_3", access_paths=[AccessPath("status.name")])

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, [claimant])

        assert fused.path_index["status.name"] == "customfield_3"
        assert fused.path_index["status.id"] == "status"
        assert fused.fields["status"].name == "Status"
        assert "Path conflict detected during fusion" in caplog.text
        assert "existingFieldId=status" in caplog.text


def _custom(field_id, *paths):
    return FieldDefinition(
        id=field_id,
        name=field_id,
        access_paths=[AccessPath(p) for p in paths],
        source=FieldSource.DYNAMIC,
    )


CHAIN_FIELDS = [
    _custom("customfield_1", "customfield_1", "shared.path"),
    _custom("customfield_2", "customfield_2.value", "shared.path"),
    _custom("customfield_3", "status.name"),
    _custom("customfield_4"),
]


class TestChainedFusion:
    """Fusing in batches matches fusing everything at once."""

    @pytest.mark.parametrize("split", [0, 1, 2, 3, 4])
    def test_sequential_matches_single(self, static_definition, split):
        """fuse(fuse(S, D1), D2) has the same fields and index as fuse(S, D1 + D2)."""
        first, second = CHAIN_FIELDS[:split], CHAIN_FIELDS[split:]

        single = fuse_definitions(static_definition, CHAIN_FIELDS)
        chained = fuse_definitions(fuse_definitions(static_definition, first), second)

        assert chained.total_fields == single.total_fields == 6
        assert chained.path_index == single.path_index
        assert set(chained.fields) == set(single.fields)
        assert single.path_index["shared.path"] == "customfield_2"


class TestFusionInvalidInput:
    """Test handling of malformed input."""

    @pytest.mark.parametrize("bad_static", [None, "not a definition", 42, {"fields": {}}])
    def test_invalid_static_definition(self, bad_static, dynamic_fields):
        """Missing or malformed static definitions are fatal."""
        with pytest.raises(InvalidStaticDefinitionError):
            fuse_definitions(bad_static, dynamic_fields)

    def test_invalid_static_message(self):
        """Default message names the problem."""
        with pytest.raises(InvalidStaticDefinitionError, match="Invalid static definition provided for fusion"):
            fuse_definitions(None, [])

    def test_non_list_dynamic_fields(self, static_definition, caplog):
        """Non-list dynamic input is treated as empty."""
        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, "oops")

        assert fused.total_fields == 2
        assert fused.dynamic_fields == 0
        assert "Invalid dynamic fields array" in caplog.text

    def test_invalid_entries_skipped(self, static_definition, caplog):
        """None, non-definitions and empty ids are skipped."""
        good = FieldDefinition(id="customfield_9", name="Good")
        candidates = [None, 17, FieldDefinition(id=""), {"name": "No id"}, good]

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, candidates)

        assert fused.dynamic_fields == 1
        assert fused.total_fields == 3
        assert "customfield_9" in fused.fields
        assert caplog.text.count("Skipping invalid field during fusion") == 4

    def test_static_tagged_dynamic_retagged(self, static_definition):
        """Accepted fields are always tagged dynamic."""
        candidate = FieldDefinition(id="customfield_5", source=FieldSource.STATIC)

        fused = fuse_definitions(static_definition, [candidate])

        assert fused.fields["customfield_5"].source == FieldSource.DYNAMIC

    def test_non_string_access_path_dropped(self, static_definition, caplog):
        """A bad access path is dropped; its field and later fields are still accepted."""
        candidates = [
            {"id": "customfield_1", "accessPaths": [{"path": 123}, {"path": "customfield_1.value"}]},
            {"id": "customfield_2", "accessPaths": [{"path": "customfield_2"}]},
        ]

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, candidates)

        assert fused.dynamic_fields == 2
        assert fused.fields["customfield_1"].paths == ["customfield_1.value"]
        assert fused.path_index["customfield_2"] == "customfield_2"
        assert 123 not in fused.path_index
        assert "Dropping malformed access path" in caplog.text

    def test_non_string_path_on_built_definition(self, static_definition):
        """Directly built definitions with a non-string path still fuse."""
        candidate = FieldDefinition(
            id="customfield_6",
            access_paths=[AccessPath(123), AccessPath("customfield_6")],
            source=FieldSource.DYNAMIC,
        )

        fused = fuse_definitions(static_definition, [candidate])

        assert fused.path_index["customfield_6"] == "customfield_6"
        assert fused.dynamic_fields == 1

    def test_unknown_source_skipped(self, static_definition, caplog):
        """An unrecognized source tag skips the entry instead of failing fusion."""
        odd = FieldDefinition(id="customfield_7", source="imported")
        good = FieldDefinition(id="customfield_8", source=FieldSource.DYNAMIC)

        with caplog.at_level(logging.WARNING):
            fused = fuse_definitions(static_definition, [odd, good])

        assert "customfield_7" not in fused.fields
        assert "customfield_8" in fused.fields
        assert "Unknown source" in caplog.text


class TestFusionTimestamps:
    """Test timestamp handling."""

    def test_timestamps_set(self, static_definition, dynamic_fields):
        """last_updated and last_dynamic_update are the fusion time."""
        fused = fuse_definitions(static_definition, dynamic_fields)

        assert fused.last_dynamic_update is not None
        assert fused.last_updated == fused.last_dynamic_update

    def test_strictly_after_static(self, static_definition, dynamic_fields, fixed_datetime):
        """A clock equal to the static timestamp is nudged forward."""
        fusion = DefinitionFusion(clock=fixed_datetime)

        fused = fusion.fuse(static_definition, dynamic_fields)

        assert parse_timestamp(fused.last_updated) > parse_timestamp(static_definition.last_updated)
        assert fused.last_updated == "2024-01-15T12:00:00.001Z"
