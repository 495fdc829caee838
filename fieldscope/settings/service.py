"""
Settings Service
================
Resolves FieldScope settings from the environment.

Lookup order per setting: explicit override (update_setting), environment
variable (a .env file is loaded first via python-dotenv), then the default.
Invalid environment values are logged and replaced by the default.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from .defaults import SETTING_DEFINITIONS, find_definition
from .schemas import FieldScopeSettings, SettingDefinition, SettingType

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# Singleton instance
_settings_service: Optional["SettingsService"] = None


def get_settings_service() -> "SettingsService":
    """Get or create the global settings service instance."""
    global _settings_service
    if _settings_service is None:
        _settings_service = SettingsService()
    return _settings_service


def reset_settings_service() -> None:
    """Drop the global instance so the next call re-reads the environment."""
    global _settings_service
    _settings_service = None


class SettingsService:
    """Service for reading and overriding FieldScope settings."""

    def __init__(self,
                 environ: Optional[Mapping[str, str]] = None,
                 env_file: Optional[str] = None):
        """Initialize the settings service.

        Args:
            environ: Variables to read instead of os.environ (no .env loading then)
            env_file: Path to a .env file; defaults to python-dotenv's search
        """
        if environ is None:
            load_dotenv(env_file)
            environ = os.environ
        self._environ = environ
        self._overrides: Dict[str, Any] = {}
        self._values = self._load()

    def _load(self) -> Dict[str, Any]:
        values = {}
        for definitions in SETTING_DEFINITIONS.values():
            for definition in definitions:
                values[definition.key] = self._resolve(definition)
        return values

    def _resolve(self, definition: SettingDefinition) -> Any:
        raw = self._environ.get(definition.env_var)
        if raw is None or raw.strip() == "":
            return definition.default_value

        try:
            value = self._coerce(raw.strip(), definition)
            self._validate_value(value, definition)
        except ValueError as e:
            logger.warning(
                f"Invalid value for {definition.env_var} ({raw!r}): {e}; "
                f"using default {definition.default_value!r}"
            )
            return definition.default_value

        logger.debug(f"Setting {definition.key}={value!r} from {definition.env_var}")
        return value

    @staticmethod
    def _coerce(raw: str, definition: SettingDefinition) -> Any:
        """Convert an environment string to the setting's type.

        Raises:
            ValueError: If the string cannot be converted
        """
        value_type = definition.value_type

        if value_type == SettingType.BOOLEAN:
            lowered = raw.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError("must be a boolean")

        elif value_type == SettingType.INTEGER:
            return int(raw)

        elif value_type == SettingType.NUMBER:
            return float(raw)

        return raw

    def _validate_value(self, value: Any, definition: SettingDefinition) -> None:
        """Validate a value against its definition.

        Raises:
            ValueError: If validation fails
        """
        value_type = definition.value_type

        if value_type == SettingType.STRING:
            if not isinstance(value, str) or not value:
                raise ValueError(f"{definition.key}: must be a non-empty string")

        elif value_type in (SettingType.INTEGER, SettingType.NUMBER):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{definition.key}: must be a number")
            if value_type == SettingType.INTEGER and not float(value).is_integer():
                raise ValueError(f"{definition.key}: must be an integer")
            if definition.min_value is not None and value < definition.min_value:
                raise ValueError(f"{definition.key}: must be at least {definition.min_value}")
            if definition.max_value is not None and value > definition.max_value:
                raise ValueError(f"{definition.key}: must be at most {definition.max_value}")

        elif value_type == SettingType.BOOLEAN:
            if not isinstance(value, bool):
                raise ValueError(f"{definition.key}: must be a boolean")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Returned for unknown keys

        Returns:
            Setting value or default
        """
        if key in self._overrides:
            return self._overrides[key]
        return self._values.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        values = dict(self._values)
        values.update(self._overrides)
        return values

    @property
    def settings(self) -> FieldScopeSettings:
        """Current values as a validated settings model."""
        return FieldScopeSettings(**self.get_all())

    def update_setting(self, key: str, value: Any) -> None:
        """Override a setting for this process.

        Raises:
            ValueError: If the key is unknown or validation fails
        """
        definition = find_definition(key)
        if definition is None:
            raise ValueError(f"Unknown setting: {key}")

        if definition.value_type == SettingType.INTEGER and isinstance(value, float) and value.is_integer():
            value = int(value)
        self._validate_value(value, definition)
        self._overrides[key] = value
        logger.info(f"Setting {key} overridden to {value!r}")

    def reset_all(self) -> None:
        """Drop overrides and re-read the environment."""
        self._overrides = {}
        self._values = self._load()
