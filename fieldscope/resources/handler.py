# FieldScope - Field Resource Handler
# ===================================
"""
Serves field definition resources.

Data flow for read_resource():
1. Cache lookup by canonical URI
2. On a miss: static definition from the provider
3. If enabled: dynamic fields from the dynamic source, fused in
4. Structural check (problems logged), then cached
"""

import copy
import json
import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..fields.discovery import DynamicFieldStore
from ..fields.errors import UnknownEntityTypeError
from ..fields.fusion import DefinitionFusion
from ..fields.models import ResourceDefinition
from ..fields.provider import FieldDefinitionProvider
from ..fields.validation import BatchValidationResult, check_definition, validate_field_paths
from ..settings import FieldScopeSettings, get_settings_service
from ..suggestions.engine import SuggestionEngine, SuggestionOptions
from .cache import ResourceCache

logger = logging.getLogger(__name__)

MIME_TYPE = "application/json"

DynamicSource = Callable[[str], Any]


class FieldResourceHandler:
    """
    Entry point for listing, reading, searching and validating field resources.

    Example:
        handler = create_field_resource_handler()
        definition = handler.read_resource("jira://issue/fields")
        handler.suggest_fields("issue", "stat", 3)
    """

    def __init__(self,
                 provider: Optional[FieldDefinitionProvider] = None,
                 cache: Optional[ResourceCache] = None,
                 engine: Optional[SuggestionEngine] = None,
                 enable_dynamic: bool = True,
                 dynamic_source: Optional[DynamicSource] = None,
                 fusion: Optional[DefinitionFusion] = None):
        """
        Initialize the handler.

        Args:
            provider: Static definition provider
            cache: Resource cache (a new one with a running sweeper if omitted)
            engine: Suggestion engine
            enable_dynamic: Fuse dynamic fields into served definitions
            dynamic_source: Callable returning already-fetched dynamic fields for an
                entity type; defaults to an in-memory DynamicFieldStore
            fusion: Fusion instance (injectable clock)
        """
        self.provider = provider or FieldDefinitionProvider()
        self.cache = cache if cache is not None else ResourceCache()
        self.engine = engine or SuggestionEngine()
        self.fusion = fusion or DefinitionFusion()
        self.enable_dynamic = enable_dynamic
        self.dynamic_source: DynamicSource = dynamic_source if dynamic_source is not None else DynamicFieldStore()

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def list_resources(self) -> List[Dict[str, str]]:
        """Describe every resource this handler serves."""
        resources = []
        for entity_type in self.provider.supported_entity_types():
            resources.append({
                "uri": self.provider.uri_for(entity_type),
                "name": f"{entity_type.capitalize()} Fields",
                "description": f"Field definitions and access paths for {entity_type} entities",
                "mimeType": MIME_TYPE,
            })
        return resources

    def read_resource(self, uri: str) -> ResourceDefinition:
        """
        Read a field definition resource.

        Raises:
            InvalidResourceUriError: Malformed URI
            UnknownResourceError: URI not served here
            InvalidStaticDefinitionError: Static definition rejected by fusion
        """
        entity_type = self.provider.parse_uri(uri)
        canonical = self.provider.uri_for(entity_type)

        entry = self.cache.get(canonical)
        if entry is not None:
            return copy.deepcopy(entry.content)

        definition = self.provider.get_definition(entity_type)

        if self.enable_dynamic:
            dynamic_fields = self._load_dynamic_fields(entity_type)
            if dynamic_fields:
                definition = self.fusion.fuse(definition, dynamic_fields)

        report = check_definition(definition)
        for warning in report.warnings:
            logger.warning(f"Definition check for {canonical}: {warning}")
        for error in report.errors:
            logger.error(f"Definition check for {canonical}: {error}")

        self.cache.set(canonical, definition, metadata={
            "uri": canonical,
            "name": f"{entity_type.capitalize()} Fields",
            "mimeType": MIME_TYPE,
            "entityType": entity_type,
            "version": definition.version,
            "lastUpdated": definition.last_updated,
        })
        logger.info(
            f"Loaded resource {canonical} ({definition.total_fields} fields, "
            f"{definition.dynamic_fields} dynamic)"
        )
        return definition

    def read_resource_json(self, uri: str) -> str:
        """Read a resource serialized in its wire form."""
        return json.dumps(self.read_resource(uri).to_dict(), indent=2)

    def _load_dynamic_fields(self, entity_type: str) -> List[Any]:
        """Dynamic fields for an entity type; a failing source yields none."""
        try:
            fields = self.dynamic_source(entity_type)
        except Exception as e:
            logger.error(f"Dynamic field source failed for {entity_type}, serving static definition: {e}")
            return []
        if fields is None:
            return []
        if not isinstance(fields, (list, tuple)):
            logger.warning(f"Dynamic field source for {entity_type} returned a non-list, ignoring (fields={fields!r})")
            return []
        return list(fields)

    # -------------------------------------------------------------------------
    # Suggestions and validation
    # -------------------------------------------------------------------------

    def suggest_fields(self,
                       entity_type: str,
                       query: str,
                       max_results: Optional[int] = None,
                       with_metadata: bool = False) -> Union[List[str], List[Dict[str, Any]]]:
        """
        Suggest field names for a query.

        Returns:
            Field names, or suggestion dicts (field, score, metadata) with with_metadata
        """
        limit = self.engine.options.max_suggestions if max_results is None else max_results
        if not with_metadata:
            return self.engine.suggest(entity_type, query, limit)

        options = replace(self.engine.options, max_suggestions=limit)
        return [result.to_dict() for result in self.engine.suggest_with_metadata(entity_type, query, options)]

    def validate_field_paths(self, entity_type: str, paths: Iterable[Any]) -> BatchValidationResult:
        """Validate access paths against the served definition of an entity type."""
        paths = list(paths)
        if entity_type not in self.provider.supported_entity_types():
            return BatchValidationResult(
                is_valid=False,
                invalid_paths=[str(p) for p in paths],
                errors=[f"Unknown entity type: {entity_type}"],
            )

        definition = self.read_resource(self.provider.uri_for(entity_type))
        return validate_field_paths(definition, paths)

    # -------------------------------------------------------------------------
    # Dynamic fields and cache
    # -------------------------------------------------------------------------

    def register_dynamic_fields(self, entity_type: str, fields: Iterable[Any]) -> int:
        """
        Store already-fetched dynamic fields and drop the cached document.

        Raises:
            UnknownEntityTypeError: entity_type has no static definition
            TypeError: The dynamic source is not a DynamicFieldStore
        """
        if entity_type not in self.provider.supported_entity_types():
            raise UnknownEntityTypeError(entity_type, self.provider.supported_entity_types())
        if not isinstance(self.dynamic_source, DynamicFieldStore):
            raise TypeError("Dynamic source does not accept registrations")

        count = self.dynamic_source.register(entity_type, fields)
        self.cache.delete(self.provider.uri_for(entity_type))
        return count

    def clear_cache(self, uri: Optional[str] = None) -> int:
        """
        Drop one cached resource, or all of them.

        Returns:
            Number of entries removed
        """
        if uri is None:
            count = len(self.cache)
            self.cache.clear()
            return count

        canonical = self.provider.uri_for(self.provider.parse_uri(uri))
        return 1 if self.cache.delete(canonical) else 0

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()

    def shutdown(self) -> None:
        self.cache.shutdown()


def create_field_resource_handler(settings: Optional[FieldScopeSettings] = None,
                                  start_sweeper: bool = True,
                                  dynamic_source: Optional[DynamicSource] = None) -> FieldResourceHandler:
    """
    Build a handler from settings.

    Args:
        settings: Resolved settings (defaults to the global settings service)
        start_sweeper: Start the cache's background sweep thread
        dynamic_source: Optional dynamic field source (defaults to an in-memory store)
    """
    if settings is None:
        settings = get_settings_service().settings

    cache = ResourceCache(
        max_size=settings.cache_max_size,
        default_ttl=settings.cache_ttl_seconds,
        sweep_interval=settings.cache_sweep_interval_seconds,
        start_sweeper=start_sweeper,
    )
    engine = SuggestionEngine(options=SuggestionOptions(
        max_suggestions=settings.suggestion_max_results,
        min_similarity=settings.suggestion_min_similarity,
        max_query_length=settings.max_query_length,
    ))

    return FieldResourceHandler(
        provider=FieldDefinitionProvider(uri_scheme=settings.uri_scheme),
        cache=cache,
        engine=engine,
        enable_dynamic=settings.enable_dynamic_fields,
        dynamic_source=dynamic_source,
    )
