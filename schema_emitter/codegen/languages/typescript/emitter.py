"""
TypeScript interface emitter.

Declares one exported interface ``I<ModelName>`` per model. Property
types come from TypeScriptTypeMapper.

One file per model runs in two phases: every model's document and empty
interface are declared up front (predeclare_models), then each model is
populated and its document gets imports for interfaces it references in
other documents. Single-file mode appends each model's interface to one
shared document and returns that interface's text, so the blank-line
merge yields each declaration exactly once.
"""

import posixpath
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import EmitterConfig
from ...core.emitter import FileEmitter, MissingDocumentError
from ...core.schema import Schema, Model
from .config import TypeScriptConfig
from .document import (
    TypeScriptProject,
    SourceDocument,
    InterfaceDeclaration,
    PropertySignature,
    IDENTIFIER_RE,
    render_interface,
)
from .types import TypeScriptTypeMapper, declaration_name

logger = get_logger(__name__)


def predeclare_models(
    schema: Schema,
    project: TypeScriptProject,
    path_for_model: Callable[[Model], str],
) -> Dict[str, InterfaceDeclaration]:
    """
    Create one document holding one empty exported interface per model.

    Returns:
        Index of model name to its (still empty) declaration
    """
    index = {}
    for model in schema.models:
        path = path_for_model(model)
        document = project.create_document(posixpath.basename(path), path)
        index[model.name] = document.add_interface(
            declaration_name(model.name), is_exported=True
        )
    logger.debug("Declared %d model document(s)", len(index))
    return index


def build_property_signatures(
    model: Model, type_mapper: TypeScriptTypeMapper
) -> List[PropertySignature]:
    """One signature per property, in declaration order."""
    signatures = []
    for prop_name, prop_type in model.properties.items():
        signatures.append(
            PropertySignature(
                name=prop_name,
                type=type_mapper.wrap_map_type(prop_type),
                nullable=prop_type.allow_null,
                references=tuple(type_mapper.collect_references(prop_type)),
            )
        )
    return signatures


def populate_declaration(
    declaration: InterfaceDeclaration,
    model: Model,
    type_mapper: TypeScriptTypeMapper,
) -> InterfaceDeclaration:
    """Fill a declared interface with the model's properties."""
    declaration.add_properties(build_property_signatures(model, type_mapper))
    return declaration


class TypeScriptEmitter(FileEmitter):
    """Emitter for TypeScript interface declarations."""

    config_class = TypeScriptConfig

    def __init__(self, config: Optional[EmitterConfig] = None):
        """Initialize TypeScript emitter with configuration."""
        super().__init__(TypeScriptConfig.from_config(config))

        self.type_mapper = TypeScriptTypeMapper()
        self.project = TypeScriptProject()
        self.declarations: Dict[str, InterfaceDeclaration] = {}
        self._shared_document: Optional[SourceDocument] = None

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def reset(self) -> None:
        self.project.clear()
        self.declarations.clear()
        self._shared_document = None

    def prepare(self, schema: Schema) -> None:
        """Declaration pass; only needed when models get their own files."""
        if self.config.one_file_per_model:
            self.declarations.update(
                predeclare_models(schema, self.project, self.get_file_path_for_model)
            )

    def get_contents_for_model(self, model: Model) -> str:
        """
        Populate the model's interface and render it.

        Returns:
            The whole document (imports included) with one file per model,
            otherwise only this model's interface

        Raises:
            MissingDocumentError: With one file per model, if the
                declaration pass has not run for this model
        """
        if self.config.one_file_per_model:
            document = self.get_document_for_model(model)
            interface = document.get_interface_or_throw(declaration_name(model.name))
            populate_declaration(interface, model, self.type_mapper)
            imported = document.fix_missing_imports(self.project)
            if imported:
                logger.debug("%s imports %s", document.file_name, ", ".join(imported))
            return document.render(self.template_engine, self.config.indent)

        document = self._get_shared_document()
        interface = document.add_interface(declaration_name(model.name), is_exported=True)
        populate_declaration(interface, model, self.type_mapper)
        self.declarations[model.name] = interface
        return render_interface(self.template_engine, interface, self.config.indent)

    def get_document_for_model(self, model: Model) -> SourceDocument:
        """Pre-declared document of a model (one file per model)."""
        return self.project.get_document_or_throw(self.get_file_path_for_model(model))

    def render_model(self, model: Model) -> str:
        """Render an already populated model again, without changing state."""
        if self.config.one_file_per_model:
            document = self.get_document_for_model(model)
            return document.render(self.template_engine, self.config.indent)

        interface = self.declarations.get(model.name)
        if interface is None:
            raise MissingDocumentError(f"Model {model.name} has not been emitted")
        return render_interface(self.template_engine, interface, self.config.indent)

    def render_shared_document(self) -> str:
        """Full text of the single-file document built so far."""
        return self._get_shared_document().render(
            self.template_engine, self.config.indent
        )

    def _get_shared_document(self) -> SourceDocument:
        if self._shared_document is None:
            path = self.config.output
            self._shared_document = self.project.create_document(
                posixpath.basename(path), path
            )
        return self._shared_document

    def validate_schema(self, schema: Schema) -> List[str]:
        """Validate schema for TypeScript output."""
        warnings = super().validate_schema(schema)

        for model in schema.models:
            if not IDENTIFIER_RE.match(model.name):
                warnings.append(
                    f"Model name '{model.name}' is not a valid TypeScript identifier"
                )
            for prop_name in model.properties:
                if not IDENTIFIER_RE.match(prop_name):
                    warnings.append(
                        f"Property {model.name}.{prop_name} is not an identifier "
                        "and will be quoted"
                    )

        return warnings


def create_typescript_emitter(config: Optional[dict] = None) -> TypeScriptEmitter:
    """Create a TypeScript emitter from a plain settings dict."""
    return TypeScriptEmitter(TypeScriptConfig(**(config or {})))
