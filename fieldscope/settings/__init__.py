# FieldScope Settings Module
"""
Centralized settings for FieldScope.
Reads FIELDSCOPE_* environment variables, validates them and exposes the
resolved values to the application layer.
"""

from .service import SettingsService, get_settings_service, reset_settings_service
from .schemas import (
    SettingType,
    SettingDefinition,
    FieldScopeSettings,
)
from .defaults import SETTING_CATEGORIES, SETTING_DEFINITIONS, get_all_defaults, get_default_value

__all__ = [
    "SettingsService",
    "get_settings_service",
    "reset_settings_service",
    "SettingType",
    "SettingDefinition",
    "FieldScopeSettings",
    "SETTING_CATEGORIES",
    "SETTING_DEFINITIONS",
    "get_all_defaults",
    "get_default_value",
]
