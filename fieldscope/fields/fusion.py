# FieldScope - Definition Fusion
# ==============================
"""
Merges a static ResourceDefinition with dynamically discovered fields.

Rules:
- Static fields always win; dynamic data can add fields, never replace them
- Every path of an accepted dynamic field is indexed to it (conflicts warn)
- Within the dynamic list the first accepted id wins
- Bad dynamic entries are logged and skipped, never fatal
- A bad static definition is fatal (InvalidStaticDefinitionError)
"""

import dataclasses
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import InvalidStaticDefinitionError
from .models import (
    FieldDefinition,
    FieldSource,
    ResourceDefinition,
    format_timestamp,
    parse_timestamp,
)

logger = logging.getLogger(__name__)


class DefinitionFusion:
    """
    Fuses static and dynamic field definitions into one document.

    Example:
        fusion = DefinitionFusion()
        merged = fusion.fuse(provider.get_definition("issue"), custom_fields)
        print(merged.total_fields, merged.dynamic_fields)
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: Returns the current (UTC) datetime; defaults to datetime.now(timezone.utc)
        """
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def fuse(self, static_def: Any, dynamic_fields: Any) -> ResourceDefinition:
        """
        Merge dynamic fields into a copy of the static definition.

        Args:
            static_def: ResourceDefinition (or its wire-form mapping)
            dynamic_fields: List of FieldDefinition objects or wire-form mappings

        Returns:
            New ResourceDefinition with dynamic_fields/last_dynamic_update set

        Raises:
            InvalidStaticDefinitionError: static_def is missing or malformed
        """
        static_def = self._coerce_static(static_def)

        if not isinstance(dynamic_fields, (list, tuple)):
            logger.warning(
                f"Invalid dynamic fields array, using empty array (dynamicFields={dynamic_fields!r})"
            )
            dynamic_fields = []

        static_ids = set(static_def.fields)
        fields: Dict[str, FieldDefinition] = dict(static_def.fields)
        path_index: Dict[str, str] = dict(static_def.path_index)
        accepted = 0

        for candidate in dynamic_fields:
            definition = self._coerce_dynamic(candidate)
            if definition is None:
                continue

            field_id = definition.id
            if field_id in fields:
                logger.warning(
                    f"Dynamic field conflicts with existing field, skipping "
                    f"(fieldId={field_id}, staticField={field_id in static_ids})"
                )
                continue

            fields[field_id] = definition
            accepted += 1
            self._index_paths(definition, path_index)

        now = self._timestamp_after(static_def.last_updated)

        fused = dataclasses.replace(
            static_def,
            fields=fields,
            path_index=path_index,
            total_fields=len(static_ids) + accepted,
            dynamic_fields=accepted,
            last_updated=now,
            last_dynamic_update=now,
        )

        logger.info(
            f"Fused field definitions for {static_def.entity_type}: "
            f"{len(static_ids)} static + {accepted} dynamic = {fused.total_fields} fields, "
            f"{len(path_index)} paths"
        )
        return fused

    def _coerce_static(self, static_def: Any) -> ResourceDefinition:
        """Accept a ResourceDefinition or its wire form; anything else is fatal."""
        if isinstance(static_def, ResourceDefinition):
            if not isinstance(static_def.fields, Mapping) or not isinstance(static_def.path_index, Mapping):
                raise InvalidStaticDefinitionError()
            return static_def

        if isinstance(static_def, Mapping):
            try:
                return ResourceDefinition.from_dict(static_def)
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidStaticDefinitionError(
                    f"Invalid static definition provided for fusion: {e}"
                ) from e

        raise InvalidStaticDefinitionError()

    def _coerce_dynamic(self, candidate: Any) -> Optional[FieldDefinition]:
        """Turn a dynamic candidate into a FieldDefinition tagged dynamic, or None."""
        if candidate is None:
            logger.warning("Skipping invalid field during fusion (field=None)")
            return None

        if isinstance(candidate, Mapping):
            try:
                candidate = FieldDefinition.from_dict(candidate)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid field during fusion (field={candidate!r}, error={e})")
                return None

        if not isinstance(candidate, FieldDefinition):
            logger.warning(f"Skipping invalid field during fusion (field={candidate!r})")
            return None

        if not isinstance(candidate.id, str) or not candidate.id.strip():
            logger.warning(f"Skipping invalid field during fusion (field={candidate!r})")
            return None

        if candidate.source == FieldSource.DYNAMIC:
            return candidate
        if candidate.source == FieldSource.STATIC:
            logger.debug(f"Re-tagging field {candidate.id} as dynamic")
            return dataclasses.replace(candidate, source=FieldSource.DYNAMIC)
        logger.warning(
            f"Skipping invalid field during fusion (field={candidate!r}, reason=Unknown source {candidate.source!r})"
        )
        return None

    def _index_paths(self,
                     definition: FieldDefinition,
                     path_index: Dict[str, str]) -> None:
        """Add a dynamic field's access paths to the path index."""
        for path in definition.paths:
            existing = path_index.get(path)
            if existing is not None and existing != definition.id:
                logger.warning(
                    f"Path conflict detected during fusion "
                    f"(path={path}, existingFieldId={existing}, newFieldId={definition.id})"
                )
            path_index[path] = definition.id

    def _timestamp_after(self, previous: Optional[str]) -> str:
        """Current timestamp, nudged forward so it is strictly after previous."""
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        # Millisecond precision on the wire
        now = now.replace(microsecond=(now.microsecond // 1000) * 1000)

        earlier = parse_timestamp(previous)
        if earlier is not None and now <= earlier:
            now = earlier.replace(microsecond=(earlier.microsecond // 1000) * 1000) + timedelta(milliseconds=1)
        return format_timestamp(now)


def fuse_definitions(static_def: Any, dynamic_fields: Any) -> ResourceDefinition:
    """Fuse with a default DefinitionFusion instance."""
    return DefinitionFusion().fuse(static_def, dynamic_fields)
