"""
Settings Defaults
=================
Default values and definitions for all FieldScope settings.

Each setting can be overridden through its environment variable
(FIELDSCOPE_*), including from a .env file.
"""

from typing import Any, Dict, List, Optional
from .schemas import SettingDefinition, SettingType


# Category definitions with display order
SETTING_CATEGORIES = {
    "resources": {
        "name": "Resources",
        "description": "Resource URIs and dynamic field discovery",
        "order": 1,
    },
    "cache": {
        "name": "Cache",
        "description": "Resource document cache sizing and expiry",
        "order": 2,
    },
    "suggestions": {
        "name": "Suggestions",
        "description": "Field name suggestion tuning",
        "order": 3,
    },
}


# All setting definitions grouped by category
SETTING_DEFINITIONS: Dict[str, List[SettingDefinition]] = {
    "resources": [
        SettingDefinition(
            key="uri_scheme",
            env_var="FIELDSCOPE_URI_SCHEME",
            label="URI Scheme",
            description="Scheme of resource URIs (scheme://entity/fields)",
            value_type=SettingType.STRING,
            default_value="jira",
        ),
        SettingDefinition(
            key="enable_dynamic_fields",
            env_var="FIELDSCOPE_ENABLE_DYNAMIC_FIELDS",
            label="Dynamic Fields",
            description="Fuse registered dynamic fields into served definitions",
            value_type=SettingType.BOOLEAN,
            default_value=True,
        ),
    ],
    "cache": [
        SettingDefinition(
            key="cache_max_size",
            env_var="FIELDSCOPE_CACHE_MAX_SIZE",
            label="Max Entries",
            description="Maximum number of cached resource documents",
            value_type=SettingType.INTEGER,
            default_value=100,
            min_value=1,
            max_value=100_000,
        ),
        SettingDefinition(
            key="cache_ttl_seconds",
            env_var="FIELDSCOPE_CACHE_TTL_SECONDS",
            label="TTL (seconds)",
            description="Lifetime of a cached document; 0 keeps entries until evicted",
            value_type=SettingType.NUMBER,
            default_value=3600,
            min_value=0,
        ),
        SettingDefinition(
            key="cache_sweep_interval_seconds",
            env_var="FIELDSCOPE_CACHE_SWEEP_INTERVAL_SECONDS",
            label="Sweep Interval (seconds)",
            description="Seconds between background removals of expired entries; 0 disables the sweep",
            value_type=SettingType.NUMBER,
            default_value=300,
            min_value=0,
        ),
    ],
    "suggestions": [
        SettingDefinition(
            key="suggestion_max_results",
            env_var="FIELDSCOPE_SUGGESTION_MAX_RESULTS",
            label="Max Suggestions",
            description="Default number of suggestions returned",
            value_type=SettingType.INTEGER,
            default_value=10,
            min_value=1,
            max_value=100,
        ),
        SettingDefinition(
            key="suggestion_min_similarity",
            env_var="FIELDSCOPE_SUGGESTION_MIN_SIMILARITY",
            label="Min Similarity",
            description="Similarity below which non-prefix, non-typo candidates are dropped",
            value_type=SettingType.NUMBER,
            default_value=0.3,
            min_value=0.0,
            max_value=1.0,
        ),
        SettingDefinition(
            key="max_query_length",
            env_var="FIELDSCOPE_MAX_QUERY_LENGTH",
            label="Max Query Length",
            description="Queries are truncated to this many characters before scoring",
            value_type=SettingType.INTEGER,
            default_value=256,
            min_value=1,
            max_value=10_000,
        ),
    ],
}


def find_definition(key: str) -> Optional[SettingDefinition]:
    """Find a setting definition by key across categories."""
    for definitions in SETTING_DEFINITIONS.values():
        for definition in definitions:
            if definition.key == key:
                return definition
    return None


def get_default_value(key: str) -> Any:
    """Get the default value for a setting."""
    definition = find_definition(key)
    return definition.default_value if definition else None


def get_all_defaults() -> Dict[str, Any]:
    """Get all default values keyed by setting key."""
    defaults = {}
    for definitions in SETTING_DEFINITIONS.values():
        for definition in definitions:
            defaults[definition.key] = definition.default_value
    return defaults
