# FieldScope - Errors
# ===================
"""
Exception hierarchy for field definition handling.

Only InvalidStaticDefinitionError is fatal inside the core; the rest are
raised at the resource boundary (bad URIs, unknown resources) where the
caller decides how to respond.
"""

from typing import Optional


class FieldScopeError(Exception):
    """Base class for all FieldScope errors."""
    pass


class InvalidStaticDefinitionError(FieldScopeError, ValueError):
    """A static definition handed to fusion is missing or malformed."""

    def __init__(self, message: str = "Invalid static definition provided for fusion"):
        super().__init__(message)


class InvalidResourceUriError(FieldScopeError, ValueError):
    """Resource URI does not follow the scheme://entity/fields form."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Invalid resource URI format: {uri}")


class UnknownResourceError(FieldScopeError, LookupError):
    """Resource URI is well formed but not registered."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Unknown resource URI: {uri}")


class UnknownEntityTypeError(FieldScopeError, LookupError):
    """Entity type has no static field definitions."""

    def __init__(self, entity_type: str, supported: Optional[list] = None):
        self.entity_type = entity_type
        self.supported = supported or []
        message = f"Unknown entity type: {entity_type}"
        if self.supported:
            message += f". Supported types: {', '.join(self.supported)}"
        super().__init__(message)
