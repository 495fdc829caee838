# FieldScope - Dynamic Field Discovery
# ====================================
"""
Turns already-fetched field metadata and live entity payloads into dynamic
FieldDefinitions, and keeps them in an in-memory store the resource handler
reads from.

Nothing in here performs network I/O: callers fetch field metadata from the
remote instance themselves and hand the decoded JSON over.
"""

import logging
import re
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .models import AccessPath, Confidence, FieldDefinition, FieldSource, Frequency
from .paths import JsonValue, ValueKind

logger = logging.getLogger(__name__)

CUSTOM_FIELD_PATTERN = re.compile(r"^customfield_\d+$")

# Remote schema type -> field type classification
_OBJECT_SCHEMA_TYPES = {
    "object", "project", "user", "issuetype", "priority",
    "resolution", "status", "option", "version", "component",
}

# Remote schema type -> value type of the access path
_VALUE_TYPES = {
    "number": "number",
    "boolean": "boolean",
    "array": "any[]",
    "object": "object",
    "date": "string",       # ISO date string
    "datetime": "string",
}

# Keys worth exposing as nested access paths when a map value is observed
_NESTED_KEYS = ("value", "name", "displayName", "key", "id")


def map_field_type(schema_type: Any) -> str:
    """Classify a remote schema type as 'array', 'object' or 'string'."""
    if not schema_type or not isinstance(schema_type, str):
        return "string"
    schema_type = schema_type.lower()
    if schema_type == "array":
        return "array"
    if schema_type in _OBJECT_SCHEMA_TYPES:
        return "object"
    return "string"


def map_value_type(schema_type: Any) -> str:
    """Value type reported on an access path for a remote schema type."""
    if not schema_type or not isinstance(schema_type, str):
        return "string"
    return _VALUE_TYPES.get(schema_type.lower(), "string")


def is_valid_field_id(field_id: Any) -> bool:
    return isinstance(field_id, str) and bool(field_id.strip())


def convert_field_metadata(raw: Any) -> Optional[FieldDefinition]:
    """
    Convert one field-metadata record into a dynamic FieldDefinition.

    Expected shape: {"id": "customfield_10001", "name": "Story Points",
    "custom": true, "schema": {"type": "number"}}.

    Returns:
        FieldDefinition, or None (with a warning) if id or name is invalid
    """
    if not isinstance(raw, Mapping):
        logger.warning(f"Skipping invalid field definition (field={raw!r}, reason=Not an object)")
        return None

    if not is_valid_field_id(raw.get("id")):
        logger.warning(f"Skipping invalid field definition (field={raw!r}, reason=Invalid field ID)")
        return None

    name = raw.get("name")
    if not name or not isinstance(name, str):
        logger.warning(f"Skipping invalid field definition (field={raw!r}, reason=Invalid field name)")
        return None

    schema = raw.get("schema") if isinstance(raw.get("schema"), Mapping) else {}
    schema_type = schema.get("type", "string")
    field_id = raw["id"]

    return FieldDefinition(
        id=field_id,
        name=name,
        description=f"Dynamic custom field: {name}",
        type=map_field_type(schema_type),
        access_paths=[
            AccessPath(
                path=field_id,
                description=f"Access {name} value",
                type=map_value_type(schema_type),
                frequency=Frequency.MEDIUM,
            )
        ],
        examples=[field_id],
        common_usage=[[field_id]],
        source=FieldSource.DYNAMIC,
        confidence=Confidence.HIGH,
    )


def discover_custom_fields(raw_fields: Any) -> List[FieldDefinition]:
    """
    Convert the custom entries of a field-metadata listing.

    Non-custom (system) fields are skipped; invalid entries are logged and
    dropped.
    """
    if not isinstance(raw_fields, (list, tuple)):
        logger.warning(f"Field metadata listing is not a list, ignoring (fields={raw_fields!r})")
        return []

    definitions = []
    for raw in raw_fields:
        if isinstance(raw, Mapping) and not raw.get("custom"):
            continue
        definition = convert_field_metadata(raw)
        if definition is not None:
            definitions.append(definition)

    logger.info(f"Discovered {len(definitions)} custom fields from {len(raw_fields)} records")
    return definitions


def observe_payload(payload: Any, names: Optional[Mapping[str, str]] = None) -> List[FieldDefinition]:
    """
    Infer dynamic definitions from one live entity payload.

    Every customfield_NNNNN key with a non-null value becomes a definition
    whose type and access paths follow the observed value kind. Payloads
    wrapping their values in a "fields" object (as issues do) are unwrapped.

    Args:
        payload: Decoded entity JSON
        names: Optional {field_id: display name} mapping

    Returns:
        Definitions sorted by field id
    """
    if not isinstance(payload, Mapping):
        return []

    values = payload.get("fields") if isinstance(payload.get("fields"), Mapping) else payload
    names = names or {}
    definitions = []

    for field_id in sorted(values):
        if not CUSTOM_FIELD_PATTERN.match(str(field_id)):
            continue
        value = values[field_id]
        kind = ValueKind.of(value)
        if kind == ValueKind.NULL:
            continue
        definitions.append(_definition_from_value(field_id, names.get(field_id, field_id), value, kind))

    return definitions


def _definition_from_value(field_id: str, name: str, value: JsonValue, kind: ValueKind) -> FieldDefinition:
    """Build a definition from an observed value."""
    access_paths = []

    if kind == ValueKind.MAP:
        field_type = "object"
        for key in _NESTED_KEYS:
            if key in value:
                access_paths.append(AccessPath(
                    path=f"{field_id}.{key}",
                    description=f"{name} {key}",
                    type=ValueKind.of(value[key]).value,
                    frequency=Frequency.MEDIUM,
                ))
    elif kind == ValueKind.LIST:
        field_type = "array"
        access_paths.append(AccessPath(
            path=f"{field_id}[*]",
            description=f"Each {name} value",
            type=ValueKind.of(value[0]).value if value else "string",
            frequency=Frequency.MEDIUM,
        ))
        first = value[0] if value else None
        if isinstance(first, Mapping):
            for key in _NESTED_KEYS:
                if key in first:
                    access_paths.append(AccessPath(
                        path=f"{field_id}[].{key}",
                        description=f"{name} element {key}",
                        type=ValueKind.of(first[key]).value,
                        frequency=Frequency.LOW,
                    ))
    else:
        field_type = "string"

    # The bare id always resolves to the whole value
    access_paths.insert(0, AccessPath(
        path=field_id,
        description=f"Access {name} value",
        type=kind.value,
        frequency=Frequency.MEDIUM,
    ))

    return FieldDefinition(
        id=field_id,
        name=name,
        description=f"Observed custom field: {name}",
        type=field_type,
        access_paths=access_paths,
        examples=[access_paths[-1].path],
        common_usage=[[field_id]],
        source=FieldSource.DYNAMIC,
        confidence=Confidence.MEDIUM,
    )


class DynamicFieldStore:
    """
    Thread-safe registry of already-fetched dynamic fields per entity type.

    Instances are callable, so a store can be handed to FieldResourceHandler
    as its dynamic field source.
    """

    def __init__(self):
        self._fields: Dict[str, List[FieldDefinition]] = {}
        self._lock = Lock()

    def register(self, entity_type: str, fields: Iterable[Any]) -> int:
        """
        Replace the dynamic fields for an entity type.

        Entries may be FieldDefinitions or wire-form mappings; fusion does the
        validation, so they are stored as given.

        Returns:
            Number of entries stored
        """
        entries = list(fields)
        with self._lock:
            self._fields[entity_type] = entries
        logger.info(f"Registered {len(entries)} dynamic fields for {entity_type}")
        return len(entries)

    def get(self, entity_type: str) -> List[Any]:
        with self._lock:
            return list(self._fields.get(entity_type, []))

    def remove(self, entity_type: str) -> bool:
        with self._lock:
            return self._fields.pop(entity_type, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._fields.clear()

    def __call__(self, entity_type: str) -> List[Any]:
        return self.get(entity_type)

    def __contains__(self, entity_type: str) -> bool:
        with self._lock:
            return entity_type in self._fields
