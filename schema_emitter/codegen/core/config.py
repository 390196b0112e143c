"""
Configuration management for code emission.

Handles loading and merging configuration from JSON files,
providing defaults and validation for emitter settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, replace
from enum import Enum

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class OutputType(Enum):
    """Whether declarations go to one file per model or one merged file."""

    ONE_FILE_PER_MODEL = "oneFilePerModel"
    SINGLE_FILE = "singleFile"


class Formatting(Enum):
    """Formatter the generated files are meant for."""

    NONE = "none"
    PRETTIER = "prettier"


def _coerce_enum(enum_cls, value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {option}: {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class EmitterConfig:
    """Base configuration for emitters. Validated once, never mutated."""

    # Output settings
    output: str = "models.ts"
    output_type: OutputType = OutputType.SINGLE_FILE
    overwrite_existing: bool = True

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"

    # Formatter hand-off
    formatting: Formatting = Formatting.NONE
    prettier_config: Dict[str, Any] = field(default_factory=dict)

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "output_type", _coerce_enum(OutputType, self.output_type, "output_type")
        )
        object.__setattr__(
            self, "formatting", _coerce_enum(Formatting, self.formatting, "formatting")
        )

        if not self.output or not isinstance(self.output, str):
            raise ConfigError("output must be a non-empty path")
        if not isinstance(self.indent_size, int) or self.indent_size < 0:
            raise ConfigError(f"Invalid indent_size: {self.indent_size!r}")
        if self.line_ending not in ("\n", "\r\n"):
            raise ConfigError(f"Invalid line_ending: {self.line_ending!r}")
        if not isinstance(self.prettier_config, dict):
            raise ConfigError("prettier_config must be an object")

        # Copy caller dicts
        object.__setattr__(self, "prettier_config", dict(self.prettier_config))
        object.__setattr__(self, "custom", dict(self.custom or {}))

    @property
    def one_file_per_model(self) -> bool:
        return self.output_type is OutputType.ONE_FILE_PER_MODEL

    @property
    def indent(self) -> str:
        """Indentation unit for one nesting level."""
        return "\t" if self.use_tabs else " " * self.indent_size

    def with_overrides(self, **overrides) -> "EmitterConfig":
        """Return a new, re-validated config with some values replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON configuration file shape."""
        data = {
            "output": self.output,
            "output_type": self.output_type.value,
            "overwrite_existing": self.overwrite_existing,
            "indent_size": self.indent_size,
            "use_tabs": self.use_tabs,
            "line_ending": self.line_ending,
            "formatting": self.formatting.value,
            "prettier_config": dict(self.prettier_config),
        }
        data.update(self.custom)
        return data


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["typescript"] = {
            "output": "models.ts",
            "output_type": OutputType.SINGLE_FILE.value,
            "indent_size": 4,
            "use_tabs": False,
            "formatting": Formatting.NONE.value,
        }

    def get_config(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
        config_cls: type = EmitterConfig,
    ) -> EmitterConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file
            config_cls: EmitterConfig subclass to build

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language.lower(), {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        logger.debug("Resolved %s config keys: %s", language, sorted(base_config))
        return self._dict_to_config(base_config, config_cls)

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

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(
        self, config_dict: Dict[str, Any], config_cls: type = EmitterConfig
    ) -> EmitterConfig:
        """Convert dictionary to a config instance; unknown keys go to custom."""
        known_fields = {f.name for f in fields(config_cls)}

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

        try:
            return config_cls(**config_args)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def save_config(self, config: EmitterConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configuration."""
        return list(self._configs.keys())

    def validate_config(self, config: EmitterConfig, language: str) -> list[str]:
        """
        Check a configuration for settings that are legal but suspicious.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.one_file_per_model and "{{" not in config.output:
            if Path(config.output).suffix:
                warnings.append(
                    f"output '{config.output}' looks like a file but one file per "
                    "model is selected; it will be used as a directory"
                )

        if not config.one_file_per_model and "{{" in config.output:
            warnings.append(
                f"output '{config.output}' contains placeholders but a single "
                "file is selected"
            )

        if config.use_tabs and config.indent_size != 4:
            warnings.append("indent_size is ignored when use_tabs is set")

        if config.formatting is Formatting.NONE and config.prettier_config:
            warnings.append("prettier_config is set but formatting is 'none'")

        if language == "typescript" and config.output_type is OutputType.SINGLE_FILE:
            if not config.output.endswith(".ts"):
                warnings.append(f"output '{config.output}' has no .ts extension")

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
    language: str = "typescript",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
    config_cls: type = EmitterConfig,
) -> EmitterConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file
        config_cls: EmitterConfig subclass to build

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file, config_cls)


EXAMPLE_TYPESCRIPT_CONFIG = {
    "output": "src/models/{{ Name }}.ts",
    "output_type": "oneFilePerModel",
    "indent_size": 2,
    "formatting": "prettier",
    "prettier_config": {"singleQuote": True},
}
