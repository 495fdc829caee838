# FieldScope API - Fields Router
# ==============================
"""
Field definition endpoints: resources, suggestions, path validation,
dynamic field registration and cache management.
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional, Dict, Any, Literal

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

# Add project root to path
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

from fieldscope.fields import (
    InvalidResourceUriError,
    UnknownEntityTypeError,
    UnknownResourceError,
    discover_custom_fields,
)
from fieldscope.resources import FieldResourceHandler, create_field_resource_handler

logger = logging.getLogger(__name__)

router = APIRouter()

# Singleton instance
_handler: Optional[FieldResourceHandler] = None


# ============================================================================
# Pydantic Models
# ============================================================================

class ValidatePathsRequest(BaseModel):
    """Access paths to validate."""
    paths: List[str] = Field(..., min_length=1, description="Access paths to check")


class DynamicFieldsRequest(BaseModel):
    """Already-fetched dynamic fields for one entity type."""
    fields: List[Dict[str, Any]] = Field(default_factory=list, description="Field records")
    format: Literal["definition", "metadata"] = Field(
        "definition",
        description="'definition' for FieldDefinition wire form, 'metadata' for raw field metadata records",
    )


class SuggestionsResponse(BaseModel):
    """Ranked field suggestions."""
    entity_type: str
    query: str
    suggestions: List[Any]


# ============================================================================
# Helper Functions
# ============================================================================

def get_handler() -> FieldResourceHandler:
    """Get or create the FieldResourceHandler instance."""
    global _handler
    if _handler is None:
        _handler = create_field_resource_handler()
        logger.info("Field resource handler initialized")
    return _handler


def set_handler(handler: Optional[FieldResourceHandler]) -> None:
    """Replace the handler instance (None drops it)."""
    global _handler
    _handler = handler


def _require_entity_type(handler: FieldResourceHandler, entity_type: str) -> None:
    if entity_type not in handler.provider.supported_entity_types():
        raise HTTPException(
            status_code=404,
            detail=f"Unknown entity type: {entity_type}"
        )


# ============================================================================
# Endpoints
# ============================================================================

@router.get("/resources")
async def list_resources() -> Dict[str, Any]:
    """List all field definition resources."""
    resources = get_handler().list_resources()
    return {"resources": resources, "count": len(resources)}


@router.get("/cache/stats")
async def cache_stats() -> Dict[str, Any]:
    """Resource cache statistics."""
    return get_handler().cache_stats()


@router.delete("/cache")
async def clear_cache(uri: Optional[str] = Query(None, description="Resource URI to drop; all if omitted")) -> Dict[str, Any]:
    """Drop cached resources."""
    try:
        removed = get_handler().clear_cache(uri)
    except InvalidResourceUriError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnknownResourceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "removed": removed}


@router.get("/{entity_type}")
async def get_field_definitions(entity_type: str) -> Dict[str, Any]:
    """
    Get the field definition document for an entity type.

    Static definitions fused with any registered dynamic fields.
    """
    handler = get_handler()
    try:
        definition = handler.read_resource(handler.provider.uri_for(entity_type))
    except InvalidResourceUriError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (UnknownResourceError, UnknownEntityTypeError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return definition.to_dict()


@router.get("/{entity_type}/suggestions")
async def suggest_fields(
    entity_type: str,
    q: str = Query("", max_length=1024, description="Partial or misspelled field name"),
    limit: int = Query(10, ge=1, le=100, description="Maximum suggestions"),
    metadata: bool = Query(False, description="Include score breakdowns"),
) -> SuggestionsResponse:
    """
    Suggest field names for a query.

    Used for typo correction ("assigne" -> "assignee") and completion.
    """
    suggestions = get_handler().suggest_fields(entity_type, q, limit, with_metadata=metadata)
    return SuggestionsResponse(entity_type=entity_type, query=q, suggestions=suggestions)


@router.post("/{entity_type}/validate")
async def validate_paths(entity_type: str, request: ValidatePathsRequest) -> Dict[str, Any]:
    """Validate access paths, with suggestions for invalid ones."""
    handler = get_handler()
    _require_entity_type(handler, entity_type)
    return handler.validate_field_paths(entity_type, request.paths).to_dict()


@router.put("/{entity_type}/dynamic")
async def register_dynamic_fields(entity_type: str, request: DynamicFieldsRequest) -> Dict[str, Any]:
    """
    Register already-fetched dynamic fields for an entity type.

    Replaces earlier registrations; the cached document is rebuilt on the next read.
    """
    handler = get_handler()
    _require_entity_type(handler, entity_type)

    fields: List[Any] = request.fields
    if request.format == "metadata":
        fields = discover_custom_fields(request.fields)

    try:
        registered = handler.register_dynamic_fields(entity_type, fields)
    except TypeError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"success": True, "entity_type": entity_type, "registered": registered}
