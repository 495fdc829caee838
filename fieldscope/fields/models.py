# FieldScope - Field Models
# =========================
"""
Dataclasses for field definitions and the resource documents built from them.

The JSON wire form uses camelCase keys (accessPaths, pathIndex, ...) so the
documents can be handed to resource clients unchanged. Python attributes stay
snake_case; to_dict()/from_dict() translate between the two.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class Frequency(str, Enum):
    """How often a field or access path is used in practice."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> float:
        """Numeric ranking weight (high > medium > low)."""
        return _FREQUENCY_WEIGHTS[self]

    @classmethod
    def parse(cls, value: Any, default: Optional["Frequency"] = None) -> "Frequency":
        """Parse a frequency tag, falling back to default (MEDIUM)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return default or cls.MEDIUM


_FREQUENCY_WEIGHTS = {
    Frequency.HIGH: 0.8,
    Frequency.MEDIUM: 0.6,
    Frequency.LOW: 0.4,
}


class FieldSource(str, Enum):
    """Where a field definition came from."""
    STATIC = "static"    # Curated and shipped with the package
    DYNAMIC = "dynamic"  # Discovered on a live instance


class Confidence(str, Enum):
    """Accuracy level of a field definition."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return format_timestamp(datetime.now(timezone.utc))


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with a trailing Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; returns None for missing or bad input."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class AccessPath:
    """One concrete way to reach a value inside a serialized entity."""
    path: str                   # e.g. "assignee.displayName", "components[].name"
    description: str = ""
    type: str = "string"
    frequency: Frequency = Frequency.MEDIUM

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "description": self.description,
            "type": self.type,
            "frequency": self.frequency.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccessPath":
        """Build from the wire form."""
        return cls(
            path=data.get("path", ""),
            description=data.get("description", ""),
            type=data.get("type", "string"),
            frequency=Frequency.parse(data.get("frequency")),
        )


@dataclass
class FieldDefinition:
    """Complete definition of one field with all of its access paths."""
    id: str
    name: str = ""
    description: str = ""
    type: str = "string"        # "object", "string", "array"
    access_paths: List[AccessPath] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)
    common_usage: List[List[str]] = field(default_factory=list)
    source: FieldSource = FieldSource.STATIC
    confidence: Confidence = Confidence.HIGH

    @property
    def paths(self) -> List[str]:
        """All non-empty access path strings of this field."""
        return [
            ap.path for ap in self.access_paths
            if isinstance(ap.path, str) and ap.path.strip()
        ]

    def get_access_path(self, path: str) -> Optional[AccessPath]:
        """Find the access path entry for a path string."""
        for access_path in self.access_paths:
            if access_path.path == path:
                return access_path
        return None

    def owns_path(self, path: str) -> bool:
        """True if path is one of this field's access paths or its own id."""
        return path == self.id or self.get_access_path(path) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "accessPaths": [ap.to_dict() for ap in self.access_paths],
            "examples": list(self.examples),
            "commonUsage": [list(combo) for combo in self.common_usage],
            "source": self.source.value,
            "confidence": self.confidence.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDefinition":
        """
        Build from the wire form.

        Missing optional keys fall back to defaults; malformed access path
        entries (non-mappings, non-string paths) are dropped with a warning.

        Raises:
            TypeError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Field definition must be a mapping, got {type(data).__name__}")

        raw_paths = data.get("accessPaths", data.get("access_paths")) or []
        if not isinstance(raw_paths, (list, tuple)):
            logger.warning(f"Ignoring non-list access paths (fieldId={data.get('id')}, accessPaths={raw_paths!r})")
            raw_paths = []
        access_paths = []
        for ap in raw_paths:
            if not isinstance(ap, Mapping) or not isinstance(ap.get("path", ""), str):
                logger.warning(
                    f"Dropping malformed access path (fieldId={data.get('id')}, accessPath={ap!r})"
                )
                continue
            access_paths.append(AccessPath.from_dict(ap))

        source_value = data.get("source", FieldSource.STATIC.value)
        try:
            source = FieldSource(source_value)
        except ValueError:
            source = FieldSource.STATIC

        confidence_value = data.get("confidence", Confidence.HIGH.value)
        try:
            confidence = Confidence(confidence_value)
        except ValueError:
            confidence = Confidence.MEDIUM

        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            type=data.get("type") or "string",
            access_paths=access_paths,
            examples=list(data.get("examples") or []),
            common_usage=[list(combo) for combo in data.get("commonUsage", data.get("common_usage")) or []],
            source=source,
            confidence=confidence,
        )


@dataclass
class ResourceDefinition:
    """All field definitions of one entity type plus a path lookup index."""
    uri: str
    entity_type: str
    last_updated: str
    version: str = "1.0.0"
    total_fields: int = 0
    fields: Dict[str, FieldDefinition] = field(default_factory=dict)
    path_index: Dict[str, str] = field(default_factory=dict)
    dynamic_fields: int = 0
    last_dynamic_update: Optional[str] = None

    def lookup(self, path: str) -> Optional[FieldDefinition]:
        """Resolve a path (or a bare field id) to its field definition."""
        field_id = self.path_index.get(path, path)
        return self.fields.get(field_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "uri": self.uri,
            "entityType": self.entity_type,
            "lastUpdated": self.last_updated,
            "version": self.version,
            "totalFields": self.total_fields,
            "dynamicFields": self.dynamic_fields,
        }
        if self.last_dynamic_update:
            data["lastDynamicUpdate"] = self.last_dynamic_update
        data["fields"] = {k: v.to_dict() for k, v in self.fields.items()}
        data["pathIndex"] = dict(self.path_index)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResourceDefinition":
        """
        Build from the wire form.

        Raises:
            TypeError: If data or its fields/pathIndex are not mappings
            KeyError: If fields or pathIndex are absent
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Resource definition must be a mapping, got {type(data).__name__}")

        raw_fields = data["fields"]
        raw_index = data["pathIndex"] if "pathIndex" in data else data["path_index"]
        if not isinstance(raw_fields, Mapping) or not isinstance(raw_index, Mapping):
            raise TypeError("fields and pathIndex must be mappings")

        fields = {
            key: value if isinstance(value, FieldDefinition) else FieldDefinition.from_dict(value)
            for key, value in raw_fields.items()
        }

        return cls(
            uri=data.get("uri", ""),
            entity_type=data.get("entityType", data.get("entity_type", "")),
            last_updated=data.get("lastUpdated", data.get("last_updated")) or utc_now_iso(),
            version=data.get("version", "1.0.0"),
            total_fields=int(data.get("totalFields", data.get("total_fields", len(fields)))),
            fields=fields,
            path_index={str(k): str(v) for k, v in raw_index.items()},
            dynamic_fields=int(data.get("dynamicFields", data.get("dynamic_fields", 0)) or 0),
            last_dynamic_update=data.get("lastDynamicUpdate", data.get("last_dynamic_update")),
        )


def build_path_index(fields: Mapping[str, FieldDefinition]) -> Dict[str, str]:
    """Map every non-empty access path of every field to the field id."""
    index: Dict[str, str] = {}
    for field_id, definition in fields.items():
        for path in definition.paths:
            index[path] = field_id
    return index
