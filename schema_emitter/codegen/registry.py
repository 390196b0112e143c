"""
Emitter registry system for managing available code emitters.

Provides dynamic registration and instantiation of language emitters.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from ..logging_config import get_logger
from .core.emitter import FileEmitter
from .core.config import EmitterConfig, ConfigError, load_config

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class EmitterRegistry:
    """Registry for managing available code emitters."""

    def __init__(self):
        """Initialize empty registry."""
        self._emitters: Dict[str, Type[FileEmitter]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        emitter_class: Type[FileEmitter],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an emitter for a language.

        Args:
            language: Primary language name (e.g., 'typescript')
            emitter_class: Class implementing FileEmitter
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If emitter class is invalid or conflicts exist
        """
        if not isinstance(emitter_class, type) or not issubclass(
            emitter_class, FileEmitter
        ):
            raise RegistryError("Emitter class must inherit from FileEmitter")

        language_key = language.lower()

        if language_key in self._emitters and not replace:
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != language_key]

        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._emitters:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{self._aliases[alias_key]}'"
                    )

        self._emitters[language_key] = emitter_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

        logger.debug("Registered %s emitter %s", language_key, emitter_class.__name__)

    def unregister(self, language: str):
        """Unregister an emitter and its aliases."""
        language_key = self.resolve(language)
        self._emitters.pop(language_key, None)

        for alias in [a for a, target in self._aliases.items() if target == language_key]:
            del self._aliases[alias]

    def resolve(self, language: str) -> str:
        """Primary language key for a name or alias."""
        language_key = language.lower()
        return self._aliases.get(language_key, language_key)

    def get_emitter_class(self, language: str) -> Type[FileEmitter]:
        """
        Get emitter class for language.

        Raises:
            RegistryError: If language not found
        """
        language_key = self.resolve(language)
        if language_key in self._emitters:
            return self._emitters[language_key]

        available = self.list_languages()
        raise RegistryError(
            f"No emitter registered for language: {language}. "
            f"Available: {', '.join(available)}"
        )

    def create_emitter(
        self,
        language: str,
        config: Optional[Union[EmitterConfig, Dict[str, Any], str, Path]] = None,
    ) -> FileEmitter:
        """
        Create emitter instance for language.

        Args:
            language: Language name or alias
            config: Configuration as EmitterConfig, dict of overrides, or config file path

        Raises:
            RegistryError: If emitter creation fails
        """
        emitter_class = self.get_emitter_class(language)
        language_key = self.resolve(language)
        config_cls = emitter_class.config_class

        try:
            if isinstance(config, EmitterConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(
                    language_key, config_file=config, config_cls=config_cls
                )
            elif isinstance(config, dict):
                final_config = load_config(
                    language_key, custom_config=config, config_cls=config_cls
                )
            elif config is None:
                final_config = load_config(language_key, config_cls=config_cls)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")
        except ConfigError as e:
            raise RegistryError(f"Failed to configure {language} emitter: {e}") from e

        return emitter_class(final_config)

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._emitters.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a specific language."""
        language_key = self.resolve(language)
        return sorted(a for a, target in self._aliases.items() if target == language_key)

    def is_supported(self, language: str) -> bool:
        """Check if language (or alias) is supported."""
        return self.resolve(language) in self._emitters

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        emitter = self.create_emitter(language)
        language_key = self.resolve(language)

        return {
            "name": emitter.language_name,
            "class": type(emitter).__name__,
            "file_extension": emitter.file_extension,
            "aliases": self.get_aliases_for_language(language_key),
            "module": type(emitter).__module__,
        }


# Global registry instance - created once
_global_registry: Optional[EmitterRegistry] = None


def get_registry() -> EmitterRegistry:
    """Get the global emitter registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = EmitterRegistry()
        _auto_register_emitters(_global_registry)
    return _global_registry


def _auto_register_emitters(registry: EmitterRegistry):
    """Register the emitters that ship with this package."""
    from .languages.typescript import TypeScriptEmitter

    registry.register("typescript", TypeScriptEmitter, aliases=["ts"])


# Public API functions using the global registry


def register_emitter(
    language: str,
    emitter_class: Type[FileEmitter],
    aliases: Optional[List[str]] = None,
):
    """Register an emitter in the global registry."""
    get_registry().register(language, emitter_class, aliases)


def get_emitter(
    language: str = "typescript",
    config: Optional[Union[EmitterConfig, Dict[str, Any], str, Path]] = None,
) -> FileEmitter:
    """Get emitter instance from global registry."""
    return get_registry().create_emitter(language, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)
