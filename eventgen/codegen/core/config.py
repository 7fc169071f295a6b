"""
Configuration management for member synthesis.

Two layers live here: ``FieldConfig``, the typed view over the attribute
values of one annotated field, and ``GeneratorConfig``, the engine-wide
settings loaded from defaults, an optional JSON file and explicit overrides.
"""

import codecs
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


# Attribute key -> (FieldConfig attribute, expected value type)
ATTRIBUTE_KEYS: Dict[str, tuple] = {
    "PropertyName": ("property_name", str),
    "PropertySummary": ("property_summary", str),
    "SkipProperty": ("skip_property", bool),
    "IsVirtualProperty": ("is_virtual_property", bool),
    "EventName": ("event_name", str),
    "EventSummary": ("event_summary", str),
    "SkipEvent": ("skip_event", bool),
    "MethodName": ("method_name", str),
    "MethodSummary": ("method_summary", str),
    "SkipMethod": ("skip_method", bool),
    "EventArgsName": ("event_args_name", str),
    "EventArgsSummary": ("event_args_summary", str),
    "GenerateEventArgs": ("generate_event_args", bool),
}

# Attribute keys as they are grouped on the declared attribute class
ATTRIBUTE_GROUPS = (
    ("PropertySummary", "PropertyName", "SkipProperty", "IsVirtualProperty"),
    ("EventSummary", "EventName", "SkipEvent"),
    ("MethodSummary", "MethodName", "SkipMethod"),
    ("EventArgsSummary", "EventArgsName", "GenerateEventArgs"),
)


@dataclass(frozen=True)
class FieldConfig:
    """Resolved per-field settings read from the field's attribute."""

    property_name: Optional[str] = None
    property_summary: Optional[str] = None
    skip_property: bool = False
    is_virtual_property: bool = False

    event_name: Optional[str] = None
    event_summary: Optional[str] = None
    skip_event: bool = False

    method_name: Optional[str] = None
    method_summary: Optional[str] = None
    skip_method: bool = False

    event_args_name: Optional[str] = None
    event_args_summary: Optional[str] = None
    generate_event_args: bool = False

    @classmethod
    def from_attributes(cls, attributes: Optional[Mapping[str, Any]]) -> "FieldConfig":
        """
        Build a FieldConfig from a raw attribute map.

        Absent keys and ``None`` values keep their defaults.

        Args:
            attributes: Attribute key to constant value

        Returns:
            Resolved field configuration

        Raises:
            ConfigError: If a value does not have the type its key requires
        """
        values: Dict[str, Any] = {}

        for key, value in (attributes or {}).items():
            if key not in ATTRIBUTE_KEYS:
                logger.debug("Ignoring unknown attribute key: %s", key)
                continue
            if value is None:
                continue

            attr_name, expected = ATTRIBUTE_KEYS[key]
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Attribute {key} expects {expected.__name__}, "
                    f"got {type(value).__name__}: {value!r}"
                )
            values[attr_name] = value

        return cls(**values)

    @property
    def emit_property(self) -> bool:
        return not self.skip_property

    @property
    def emit_event(self) -> bool:
        return not self.skip_event

    @property
    def emit_method(self) -> bool:
        return not self.skip_method


DEFAULT_FILE_HEADER = """\
// *******************
// * Auto Generated! *
// *  !DO NOT EDIT!  *
// *******************

#if NETCOREAPP3_0_OR_GREATER || NETSTANDARD2_1
#nullable disable
#endif"""


@dataclass
class GeneratorConfig:
    """Engine-wide configuration for a synthesis pass."""

    # Artifacts whose body is not longer than this are dropped
    min_artifact_length: int = 10

    # Output settings
    line_ending: str = "\n"
    encoding: str = "utf-8"
    file_header: str = DEFAULT_FILE_HEADER

    # Marker attribute declaration
    emit_attribute_source: bool = True
    attribute_namespace: str = "EventGen"

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)
        base_config["custom"] = dict(base_config["custom"])

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file: %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not isinstance(config.min_artifact_length, int) or config.min_artifact_length < 0:
            warnings.append(f"Invalid min_artifact_length: {config.min_artifact_length}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Unsupported line_ending: {config.line_ending!r}")

        try:
            codecs.lookup(config.encoding)
        except LookupError:
            warnings.append(f"Unknown encoding: {config.encoding}")

        if config.emit_attribute_source and not config.attribute_namespace:
            warnings.append("attribute_namespace must not be empty")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)

