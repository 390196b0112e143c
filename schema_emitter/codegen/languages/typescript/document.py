"""
In-memory TypeScript source documents.

A TypeScriptProject holds SourceDocuments by file path. Each document
owns interface declarations and the import declarations needed to reach
interfaces declared in other documents of the same project.
"""

import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.emitter import EmitterError, MissingDocumentError
from ...core.templates import TemplateEngine

logger = get_logger(__name__)

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

INTERFACE_TEMPLATE = "interface.ts.j2"
SOURCE_FILE_TEMPLATE = "source_file.ts.j2"


class DocumentError(EmitterError):
    """Exception raised for invalid document operations."""

    pass


class DeclarationError(DocumentError):
    """Exception raised for invalid declaration operations."""

    pass


def format_property_name(name: str) -> str:
    """Emit identifiers bare and everything else as a quoted key."""
    if IDENTIFIER_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class PropertySignature:
    """One ``name: type;`` member of an interface."""

    name: str
    type: str
    nullable: bool = False
    references: Tuple[str, ...] = ()


@dataclass
class InterfaceDeclaration:
    """A named interface with ordered property signatures."""

    name: str
    is_exported: bool = True
    properties: List[PropertySignature] = field(default_factory=list)
    populated: bool = False

    def add_properties(self, properties: List[PropertySignature]) -> None:
        """
        Fill the declaration. A declaration is populated exactly once.

        Raises:
            DeclarationError: If the declaration was already populated
        """
        if self.populated:
            raise DeclarationError(f"Interface {self.name} is already populated")
        self.properties.extend(properties)
        self.populated = True

    def get_property(self, name: str) -> Optional[PropertySignature]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    @property
    def references(self) -> List[str]:
        """Referenced names in property order, without duplicates."""
        seen = []
        for prop in self.properties:
            for ref in prop.references:
                if ref not in seen:
                    seen.append(ref)
        return seen


@dataclass
class ImportDeclaration:
    """``import { A, B } from "./module";``"""

    module_specifier: str
    named_imports: List[str] = field(default_factory=list)


class SourceDocument:
    """One TypeScript source file held in memory."""

    def __init__(self, file_name: str, file_path: Optional[str] = None):
        self.file_name = file_name
        self.file_path = file_path or file_name
        self.interfaces: List[InterfaceDeclaration] = []
        self.imports: List[ImportDeclaration] = []

    def __repr__(self) -> str:
        return f"SourceDocument({self.file_name!r})"

    def add_interface(self, name: str, is_exported: bool = True) -> InterfaceDeclaration:
        """
        Declare a new, empty interface in this document.

        Raises:
            DocumentError: If an interface with that name already exists here
        """
        if self.get_interface(name) is not None:
            raise DocumentError(f"Interface {name} already declared in {self.file_name}")
        interface = InterfaceDeclaration(name=name, is_exported=is_exported)
        self.interfaces.append(interface)
        return interface

    def get_interface(self, name: str) -> Optional[InterfaceDeclaration]:
        for interface in self.interfaces:
            if interface.name == name:
                return interface
        return None

    def get_interface_or_throw(self, name: str) -> InterfaceDeclaration:
        interface = self.get_interface(name)
        if interface is None:
            raise MissingDocumentError(
                f"Interface {name} was never declared in {self.file_name}"
            )
        return interface

    @property
    def imported_names(self) -> List[str]:
        return [name for imp in self.imports for name in imp.named_imports]

    def is_locally_defined(self, name: str) -> bool:
        return self.get_interface(name) is not None

    def add_import(self, name: str, module_specifier: str) -> None:
        """Import a name, reusing an existing declaration for the same module."""
        for imp in self.imports:
            if imp.module_specifier == module_specifier:
                if name not in imp.named_imports:
                    imp.named_imports.append(name)
                return
        self.imports.append(ImportDeclaration(module_specifier, [name]))

    def module_specifier_for(self, other: "SourceDocument") -> str:
        """Relative module path from this document to another, no extension."""
        source_dir = posixpath.dirname(self.file_path)
        target = posixpath.splitext(other.file_path)[0]
        relative = posixpath.relpath(target, source_dir or ".")
        if not relative.startswith("."):
            relative = f"./{relative}"
        return relative

    def fix_missing_imports(self, project: "TypeScriptProject") -> List[str]:
        """
        Import every referenced declaration defined in another document.

        Names that are defined locally, already imported, or not exported
        by any document of the project are left alone.

        Returns:
            Names newly imported
        """
        added = []
        for interface in self.interfaces:
            for name in interface.references:
                if self.is_locally_defined(name) or name in self.imported_names:
                    continue
                owner = project.find_declaration(name)
                if owner is None or owner is self:
                    logger.debug("No document declares %s; left unresolved", name)
                    continue
                self.add_import(name, self.module_specifier_for(owner))
                added.append(name)
        return added

    def render(self, engine: TemplateEngine, indent: str = "    ") -> str:
        """Render imports and interfaces as TypeScript source text."""
        declarations = [
            render_interface(engine, interface, indent) for interface in self.interfaces
        ]
        return engine.render_template(
            SOURCE_FILE_TEMPLATE,
            {"imports": self.imports, "body": "\n\n".join(declarations)},
        )


def render_interface(
    engine: TemplateEngine, interface: InterfaceDeclaration, indent: str = "    "
) -> str:
    """Render a single interface declaration."""
    context = {
        "name": interface.name,
        "exported": interface.is_exported,
        "indent": indent,
        "properties": [
            {"name": format_property_name(p.name), "type": p.type}
            for p in interface.properties
        ],
    }
    return engine.render_template(INTERFACE_TEMPLATE, context)


class TypeScriptProject:
    """Registry of in-memory documents, keyed by file path."""

    def __init__(self):
        self._documents: Dict[str, SourceDocument] = {}

    @property
    def documents(self) -> List[SourceDocument]:
        return list(self._documents.values())

    def create_document(self, file_name: str, file_path: Optional[str] = None) -> SourceDocument:
        """
        Create an empty document.

        Documents in different directories may share a file name.

        Raises:
            DocumentError: If a document with this file path exists
        """
        document = SourceDocument(file_name, file_path)
        if document.file_path in self._documents:
            raise DocumentError(f"Document {document.file_path} already exists")
        self._documents[document.file_path] = document
        return document

    def get_document(self, file_path: str) -> Optional[SourceDocument]:
        return self._documents.get(file_path)

    def get_document_or_throw(self, file_path: str) -> SourceDocument:
        """
        Raises:
            MissingDocumentError: If the document was never created
        """
        document = self._documents.get(file_path)
        if document is None:
            raise MissingDocumentError(
                f"Document {file_path} was not declared before use; "
                "emit_schema must run its declaration pass first"
            )
        return document

    def find_declaration(self, name: str) -> Optional[SourceDocument]:
        """Document that declares an exported interface with this name."""
        for document in self._documents.values():
            interface = document.get_interface(name)
            if interface is not None and interface.is_exported:
                return document
        return None

    def clear(self) -> None:
        self._documents.clear()
