# FieldScope - Definition Validation
# ==================================
"""
Checks access paths against a ResourceDefinition and checks a definition
against its own structural rules.

Invalid paths come back with "did you mean" suggestions drawn from the
definition's path index.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..suggestions.similarity import similarity
from .discovery import CUSTOM_FIELD_PATTERN
from .models import ResourceDefinition

logger = logging.getLogger(__name__)

MAX_PATH_SUGGESTIONS = 3
PATH_SUGGESTION_THRESHOLD = 0.6
MAX_RECOMMENDED_FIELDS = 1000


@dataclass
class BatchValidationResult:
    """Outcome of validating a batch of access paths."""
    is_valid: bool = True
    valid_paths: List[str] = field(default_factory=list)
    invalid_paths: List[str] = field(default_factory=list)
    path_info: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    suggestions: Dict[str, List[str]] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "isValid": self.is_valid,
            "validPaths": list(self.valid_paths),
            "invalidPaths": list(self.invalid_paths),
            "pathInfo": dict(self.path_info),
            "suggestions": {k: list(v) for k, v in self.suggestions.items()},
            "errors": list(self.errors),
        }


@dataclass
class DefinitionReport:
    """Structural problems found in a ResourceDefinition."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def validate_field_paths(definition: ResourceDefinition, paths: Iterable[Any]) -> BatchValidationResult:
    """
    Validate access paths against a definition.

    A path is valid if it is indexed, equals a field id, or is a
    customfield_NNNNN id (custom fields may exist before they are
    discovered).

    Args:
        definition: The resource definition to validate against
        paths: Access paths to check

    Returns:
        BatchValidationResult with per-path info and suggestions for invalid paths
    """
    result = BatchValidationResult()

    for path in paths:
        if not isinstance(path, str) or not path.strip():
            result.invalid_paths.append(str(path))
            continue

        path = path.strip()
        if path in definition.path_index or path in definition.fields:
            result.valid_paths.append(path)
            result.path_info[path] = _path_info(definition, path)
        elif CUSTOM_FIELD_PATTERN.match(path):
            result.valid_paths.append(path)
            result.path_info[path] = {
                "fieldId": path,
                "fieldName": path,
                "type": "unknown",
                "source": "custom",
            }
        else:
            result.invalid_paths.append(path)
            candidates = suggest_paths(definition, path)
            if candidates:
                result.suggestions[path] = candidates

    result.is_valid = not result.invalid_paths
    if result.invalid_paths:
        logger.debug(f"Invalid paths for {definition.entity_type}: {result.invalid_paths}")
    return result


def suggest_paths(definition: ResourceDefinition, path: str, limit: int = MAX_PATH_SUGGESTIONS) -> List[str]:
    """Indexed paths most similar to path (similarity above the suggestion threshold)."""
    query = path.lower()
    candidates = set(definition.path_index) | set(definition.fields)
    scored = []
    for candidate in candidates:
        score = similarity(query, candidate.lower())
        if score > PATH_SUGGESTION_THRESHOLD:
            scored.append((score, candidate))

    scored.sort(key=lambda x: (-x[0], x[1]))
    return [candidate for _, candidate in scored[:limit]]


def _path_info(definition: ResourceDefinition, path: str) -> Dict[str, Any]:
    field_def = definition.lookup(path)
    if field_def is None:
        return {"fieldId": definition.path_index.get(path, path)}

    info = {
        "fieldId": field_def.id,
        "fieldName": field_def.name,
        "type": field_def.type,
        "source": field_def.source.value,
    }
    access_path = field_def.get_access_path(path)
    if access_path is not None:
        info["valueType"] = access_path.type
        info["frequency"] = access_path.frequency.value
        info["description"] = access_path.description
    return info


def check_definition(definition: ResourceDefinition) -> DefinitionReport:
    """
    Check a definition's structural rules and content limits.

    Errors:
    - total_fields differs from the number of fields
    - a field is keyed under something other than its id, or has an empty id
    - a path index entry points at a missing field, or at a field that
      does not own the path
    - more dynamic fields than fields

    Warnings:
    - no fields at all
    - more than MAX_RECOMMENDED_FIELDS fields
    - access paths missing from the index
    """
    report = DefinitionReport()
    fields = definition.fields

    if definition.total_fields != len(fields):
        report.errors.append(
            f"Field count ({definition.total_fields}) doesn't match actual fields ({len(fields)})"
        )

    if definition.dynamic_fields > len(fields):
        report.errors.append(
            f"Dynamic field count ({definition.dynamic_fields}) exceeds total fields ({len(fields)})"
        )

    for key, field_def in fields.items():
        if not field_def.id or not field_def.id.strip():
            report.errors.append(f"Field '{key}' has an empty id")
        elif key != field_def.id:
            report.errors.append(f"Field keyed as '{key}' has id '{field_def.id}'")

        for path in field_def.paths:
            if path not in definition.path_index:
                report.warnings.append(f"Path '{path}' of field '{key}' is not indexed")

    for path, field_id in definition.path_index.items():
        owner = fields.get(field_id)
        if owner is None:
            report.errors.append(f"Path '{path}' points to missing field '{field_id}'")
        elif not owner.owns_path(path):
            report.errors.append(f"Path '{path}' points to field '{field_id}', which does not own it")

    if not fields:
        report.warnings.append("Definition contains no fields")
    elif len(fields) > MAX_RECOMMENDED_FIELDS:
        report.warnings.append(f"Large number of fields ({len(fields)}) may impact performance")

    return report
