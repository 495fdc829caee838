# FieldScope
# ==========
"""
Field definition resources for issue-tracker entities: curated static
definitions fused with discovered custom fields, cached per resource URI,
with typo-aware field suggestions and access path validation.
"""

__version__ = "1.0.0"

from .fields import (
    FieldDefinition,
    ResourceDefinition,
    FieldDefinitionProvider,
    fuse_definitions,
)
from .suggestions import SuggestionEngine, similarity
from .resources import ResourceCache, FieldResourceHandler, create_field_resource_handler

__all__ = [
    "__version__",
    "FieldDefinition",
    "ResourceDefinition",
    "FieldDefinitionProvider",
    "fuse_definitions",
    "SuggestionEngine",
    "similarity",
    "ResourceCache",
    "FieldResourceHandler",
    "create_field_resource_handler",
]
