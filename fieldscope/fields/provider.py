# FieldScope - Field Definition Provider
# ======================================
"""
Serves the curated static ResourceDefinition for each entity type and
maps entity types to and from resource URIs (scheme://entity/fields).
"""

import copy
import logging
import re
from typing import Dict, List, Optional

from .errors import InvalidResourceUriError, UnknownEntityTypeError, UnknownResourceError
from .models import FieldDefinition, ResourceDefinition, build_path_index, utc_now_iso
from .static_definitions import STATIC_FIELD_DEFINITIONS, STATIC_DEFINITION_VERSION

logger = logging.getLogger(__name__)


class FieldDefinitionProvider:
    """
    Source of static field definitions.

    Every call to get_definition() returns a fresh copy, so callers (and
    fusion) can never mutate the curated tables.

    Example:
        provider = FieldDefinitionProvider()
        definition = provider.get_definition("issue")
        print(definition.uri, definition.total_fields)
    """

    def __init__(self,
                 uri_scheme: str = "jira",
                 definitions: Optional[Dict[str, Dict[str, FieldDefinition]]] = None):
        """
        Initialize the provider.

        Args:
            uri_scheme: Scheme used in resource URIs
            definitions: Optional override of {entity_type: {field_id: FieldDefinition}}
        """
        self.uri_scheme = uri_scheme
        self._definitions = definitions if definitions is not None else STATIC_FIELD_DEFINITIONS
        self._uri_pattern = re.compile(rf"^{re.escape(uri_scheme)}://(\w+)/(\w+)$", re.IGNORECASE)

    def supported_entity_types(self) -> List[str]:
        """List entity types with static definitions."""
        return list(self._definitions.keys())

    def uri_for(self, entity_type: str) -> str:
        """Resource URI for an entity type."""
        return f"{self.uri_scheme}://{entity_type}/fields"

    def parse_uri(self, uri: str) -> str:
        """
        Extract the entity type from a resource URI.

        Raises:
            InvalidResourceUriError: URI is empty or not scheme://entity/fields shaped
            UnknownResourceError: URI is well formed but not served here
        """
        if not uri or not isinstance(uri, str):
            raise InvalidResourceUriError(str(uri))

        match = self._uri_pattern.match(uri.strip())
        if not match:
            raise InvalidResourceUriError(uri)

        entity_type, resource = match.group(1), match.group(2)
        if resource != "fields" or entity_type not in self._definitions:
            raise UnknownResourceError(uri)
        return entity_type

    def get_definition(self, entity_type: str) -> ResourceDefinition:
        """
        Build the static ResourceDefinition for an entity type.

        Raises:
            UnknownEntityTypeError: No static definitions for entity_type
        """
        curated = self._definitions.get(entity_type)
        if curated is None:
            raise UnknownEntityTypeError(entity_type, self.supported_entity_types())

        fields = copy.deepcopy(curated)
        definition = ResourceDefinition(
            uri=self.uri_for(entity_type),
            entity_type=entity_type,
            last_updated=utc_now_iso(),
            version=STATIC_DEFINITION_VERSION,
            total_fields=len(fields),
            fields=fields,
            path_index=build_path_index(fields),
        )
        logger.debug(f"Loaded static definition for {entity_type} ({definition.total_fields} fields)")
        return definition
