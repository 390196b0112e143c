"""
Core code emission components.

Provides base classes and utilities used by all language emitters.
"""

from .emitter import (
    FileEmitter,
    EmitterError,
    MissingDocumentError,
    EmitResult,
    EmittedFile,
    ModelFileContents,
    emit_code,
    merge_contents,
    write_files,
)
from .schema import (
    Schema,
    Model,
    PropertyType,
    PropertyTypes,
    StringPropertyType,
    ArrayPropertyType,
    ModelPropertyType,
    SchemaError,
    convert_schema_dict,
)
from .config import (
    EmitterConfig,
    OutputType,
    Formatting,
    ConfigManager,
    ConfigError,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base emitter interface
    "FileEmitter",
    "EmitterError",
    "MissingDocumentError",
    "EmitResult",
    "EmittedFile",
    "ModelFileContents",
    "emit_code",
    "merge_contents",
    "write_files",
    # Schema system - core data structures
    "Schema",
    "Model",
    "PropertyType",
    "PropertyTypes",
    "StringPropertyType",
    "ArrayPropertyType",
    "ModelPropertyType",
    "SchemaError",
    "convert_schema_dict",
    # Configuration system
    "EmitterConfig",
    "OutputType",
    "Formatting",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
