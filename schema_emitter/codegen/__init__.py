"""
Schema Emitter Code Generation Module

Emits type declarations in various languages from model schemas.
"""

from .registry import (
    EmitterRegistry,
    RegistryError,
    get_emitter,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)
from .core.emitter import (
    FileEmitter,
    EmitterError,
    EmitResult,
    emit_code,
    write_files,
)
from .core.schema import Schema, Model, PropertyTypes, convert_schema_dict
from .core.config import EmitterConfig, OutputType, ConfigError, load_config


def emit_from_dict(schema_data, language="typescript", config=None):
    """
    Emit code from a parsed schema document.

    Args:
        schema_data: Parsed JSON schema document (dict with "Models")
        language: Target language name
        config: Emitter configuration, dict of overrides or config file path

    Returns:
        EmitResult with emitted files
    """
    schema = convert_schema_dict(schema_data)
    emitter = get_emitter(language, config)
    return emit_code(emitter, schema)


def quick_emit(schema_data, language="typescript", **options):
    """
    Emit code and return it as one string.

    Args:
        schema_data: Schema document as dict or JSON string
        language: Target language
        **options: Emitter options

    Returns:
        Emitted code string
    """
    if isinstance(schema_data, str):
        import json

        schema_data = json.loads(schema_data)

    result = emit_from_dict(schema_data, language, options)

    if result.success:
        return result.code
    raise EmitterError(result.error_message)


__all__ = [
    "EmitterRegistry",
    "RegistryError",
    "FileEmitter",
    "EmitterError",
    "EmitResult",
    "Schema",
    "Model",
    "PropertyTypes",
    "EmitterConfig",
    "OutputType",
    "ConfigError",
    "convert_schema_dict",
    "emit_code",
    "emit_from_dict",
    "quick_emit",
    "get_emitter",
    "get_language_info",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
    "write_files",
]
