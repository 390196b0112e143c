"""
TypeScript emitter module.

Emits exported ``I<ModelName>`` interfaces from schema models, either
into one merged file or one file per model with cross-file imports.
"""

from .emitter import (
    TypeScriptEmitter,
    create_typescript_emitter,
    predeclare_models,
    populate_declaration,
    build_property_signatures,
)
from .config import TypeScriptConfig
from .document import (
    TypeScriptProject,
    SourceDocument,
    InterfaceDeclaration,
    ImportDeclaration,
    PropertySignature,
    DocumentError,
    DeclarationError,
)
from .types import TypeScriptTypeMapper, declaration_name, DECLARATION_PREFIX

__all__ = [
    "TypeScriptEmitter",
    "TypeScriptConfig",
    "TypeScriptTypeMapper",
    "TypeScriptProject",
    "SourceDocument",
    "InterfaceDeclaration",
    "ImportDeclaration",
    "PropertySignature",
    "DocumentError",
    "DeclarationError",
    "DECLARATION_PREFIX",
    "declaration_name",
    "create_typescript_emitter",
    "predeclare_models",
    "populate_declaration",
    "build_property_signatures",
]
