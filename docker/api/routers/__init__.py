# FieldScope API Routers
# ======================
"""API route handlers for FieldScope."""

from . import fields

__all__ = [
    'fields',
]
