# Pytest configuration for FieldScope tests
"""
Shared fixtures: a controllable clock, small static definitions and
dynamic field samples.
"""

import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fieldscope.fields.models import (
    AccessPath,
    FieldDefinition,
    FieldSource,
    Frequency,
    ResourceDefinition,
    build_path_index,
)


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def fixed_datetime():
    """Datetime clock for fusion timestamps."""
    moment = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def static_definition():
    """Static issue definition with status and assignee."""
    fields = {
        "status": FieldDefinition(
            id="status",
            name="Status",
            description="Issue status",
            type="object",
            access_paths=[
                AccessPath("status.name", "Status name", "string", Frequency.HIGH),
                AccessPath("status.id", "Status ID", "string", Frequency.MEDIUM),
            ],
            examples=["status.name"],
            common_usage=[["status.name"]],
        ),
        "assignee": FieldDefinition(
            id="assignee",
            name="Assignee",
            description="Issue assignee",
            type="object",
            access_paths=[
                AccessPath("assignee.displayName", "Display name", "string", Frequency.HIGH),
                AccessPath("assignee.emailAddress", "Email", "string", Frequency.HIGH),
            ],
            examples=["assignee.displayName"],
            common_usage=[["assignee.displayName"]],
        ),
    }
    return ResourceDefinition(
        uri="jira://issue/fields",
        entity_type="issue",
        last_updated="2024-01-15T12:00:00.000Z",
        version="1.0.0",
        total_fields=len(fields),
        fields=fields,
        path_index=build_path_index(fields),
    )


@pytest.fixture
def dynamic_fields():
    """Two custom fields, one without access paths."""
    return [
        FieldDefinition(
            id="customfield_10001",
            name="Story Points",
            description="Estimate",
            type="string",
            source=FieldSource.DYNAMIC,
        ),
        FieldDefinition(
            id="customfield_10002",
            name="Team",
            description="Owning team",
            type="object",
            access_paths=[AccessPath("customfield_10002.key", "Team key", "string", Frequency.MEDIUM)],
            source=FieldSource.DYNAMIC,
        ),
    ]
