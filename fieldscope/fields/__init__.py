# FieldScope Fields Module
# ========================
"""
Field definitions for remote tracker entities.

Components:
- models: FieldDefinition, AccessPath and ResourceDefinition data model
- provider: Curated static definitions per entity type, resource URIs
- fusion: Merges dynamically discovered fields into static definitions
- discovery: Builds dynamic definitions from field metadata and live payloads
- paths: Access path parsing and resolution against payloads
- validation: Path validation and structural definition checks
"""

from .models import (
    Frequency,
    FieldSource,
    Confidence,
    AccessPath,
    FieldDefinition,
    ResourceDefinition,
    build_path_index,
)

from .errors import (
    FieldScopeError,
    InvalidStaticDefinitionError,
    InvalidResourceUriError,
    UnknownResourceError,
    UnknownEntityTypeError,
)

from .provider import FieldDefinitionProvider

from .fusion import DefinitionFusion, fuse_definitions

from .paths import (
    ValueKind,
    PathError,
    PathErrorReason,
    PathResult,
    parse_path,
    resolve_path,
)

from .discovery import (
    DynamicFieldStore,
    convert_field_metadata,
    discover_custom_fields,
    observe_payload,
)

from .validation import (
    BatchValidationResult,
    DefinitionReport,
    validate_field_paths,
    check_definition,
)


__all__ = [
    # Models
    "Frequency",
    "FieldSource",
    "Confidence",
    "AccessPath",
    "FieldDefinition",
    "ResourceDefinition",
    "build_path_index",

    # Errors
    "FieldScopeError",
    "InvalidStaticDefinitionError",
    "InvalidResourceUriError",
    "UnknownResourceError",
    "UnknownEntityTypeError",

    # Provider and fusion
    "FieldDefinitionProvider",
    "DefinitionFusion",
    "fuse_definitions",

    # Paths
    "ValueKind",
    "PathError",
    "PathErrorReason",
    "PathResult",
    "parse_path",
    "resolve_path",

    # Discovery
    "DynamicFieldStore",
    "convert_field_metadata",
    "discover_custom_fields",
    "observe_payload",

    # Validation
    "BatchValidationResult",
    "DefinitionReport",
    "validate_field_paths",
    "check_definition",
]
