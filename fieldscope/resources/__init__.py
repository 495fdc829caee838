# FieldScope Resources Module
# ===========================
"""
Resource serving: the TTL/LRU resource cache and the handler that wires
provider, fusion, cache and suggestions together.
"""

from .cache import ResourceCache, CacheEntry, NO_EXPIRY
from .handler import FieldResourceHandler, create_field_resource_handler

__all__ = [
    "ResourceCache",
    "CacheEntry",
    "NO_EXPIRY",
    "FieldResourceHandler",
    "create_field_resource_handler",
]
