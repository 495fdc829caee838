"""
Settings Schemas
================
Pydantic models for settings validation and serialization.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from enum import Enum


class SettingType(str, Enum):
    """Supported setting value types."""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


class SettingDefinition(BaseModel):
    """Definition of a setting including its constraints."""
    key: str
    env_var: str
    label: str
    description: str
    value_type: SettingType
    default_value: Any
    min_value: Optional[float] = None  # For number types
    max_value: Optional[float] = None  # For number types


class FieldScopeSettings(BaseModel):
    """Resolved runtime configuration."""
    uri_scheme: str = Field("jira", min_length=1, pattern=r"^[A-Za-z][A-Za-z0-9+.-]*$")
    enable_dynamic_fields: bool = True
    cache_max_size: int = Field(100, ge=1, le=100_000)
    cache_ttl_seconds: float = Field(3600, ge=0)
    cache_sweep_interval_seconds: float = Field(300, ge=0)
    suggestion_max_results: int = Field(10, ge=1, le=100)
    suggestion_min_similarity: float = Field(0.3, ge=0.0, le=1.0)
    max_query_length: int = Field(256, ge=1, le=10_000)
