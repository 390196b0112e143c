# ============================================================================
# DOCUMENT MODEL TESTS
# ============================================================================
"""
In-memory document tests.

Covers interface declaration and population, import resolution between
documents, module specifiers and rendering.

Run with:
    pytest tests/test_document.py -v
"""

from pathlib import Path

import pytest

from schema_emitter.codegen.core.emitter import MissingDocumentError
from schema_emitter.codegen.core.templates import TemplateEngine
from schema_emitter.codegen.languages.typescript import emitter as ts_emitter
from schema_emitter.codegen.languages.typescript.document import (
    DeclarationError,
    DocumentError,
    PropertySignature,
    SourceDocument,
    TypeScriptProject,
    format_property_name,
)

TEMPLATE_DIR = Path(ts_emitter.__file__).parent / "templates"


@pytest.fixture
def engine():
    return TemplateEngine(TEMPLATE_DIR)


@pytest.fixture
def project():
    return TypeScriptProject()


def ref(name, type_name=None):
    type_name = type_name or name
    return PropertySignature(name=name.lower(), type=type_name, references=(type_name,))


# ============================================================================
# DECLARATIONS
# ============================================================================


class TestInterfaceDeclaration:
    def test_populated_once(self, project):
        interface = project.create_document("User.ts").add_interface("IUser")
        interface.add_properties([PropertySignature("id", "string")])

        with pytest.raises(DeclarationError):
            interface.add_properties([PropertySignature("name", "string")])
        assert [p.name for p in interface.properties] == ["id"]

    def test_empty_population_still_counts(self, project):
        interface = project.create_document("User.ts").add_interface("IUser")
        interface.add_properties([])
        assert interface.populated

    def test_duplicate_interface_rejected(self, project):
        document = project.create_document("User.ts")
        document.add_interface("IUser")
        with pytest.raises(DocumentError):
            document.add_interface("IUser")

    def test_references_deduplicated_in_order(self, project):
        interface = project.create_document("Order.ts").add_interface("IOrder")
        interface.add_properties([ref("IUser"), ref("IItem"), ref("IUser")])
        assert interface.references == ["IUser", "IItem"]

    def test_get_interface_or_throw(self, project):
        document = project.create_document("User.ts")
        with pytest.raises(MissingDocumentError):
            document.get_interface_or_throw("IUser")


# ============================================================================
# PROJECT REGISTRY
# ============================================================================


class TestProject:
    def test_duplicate_document_rejected(self, project):
        project.create_document("User.ts")
        with pytest.raises(DocumentError):
            project.create_document("User.ts")

    def test_missing_document_fails_loudly(self, project):
        with pytest.raises(MissingDocumentError):
            project.get_document_or_throw("User.ts")

    def test_find_declaration(self, project):
        document = project.create_document("User.ts")
        document.add_interface("IUser")
        assert project.find_declaration("IUser") is document
        assert project.find_declaration("IGhost") is None

    def test_unexported_declarations_are_not_found(self, project):
        project.create_document("User.ts").add_interface("IUser", is_exported=False)
        assert project.find_declaration("IUser") is None

    def test_clear(self, project):
        project.create_document("User.ts")
        project.clear()
        assert project.documents == []
        assert project.get_document("User.ts") is None

    def test_documents_keyed_by_path(self, project):
        first = project.create_document("index.ts", "models/User/index.ts")
        second = project.create_document("index.ts", "models/Order/index.ts")

        assert project.get_document("models/User/index.ts") is first
        assert project.get_document("models/Order/index.ts") is second
        assert second.module_specifier_for(first) == "../User/index"
        with pytest.raises(DocumentError):
            project.create_document("index.ts", "models/User/index.ts")


# ============================================================================
# IMPORT RESOLUTION
# ============================================================================


class TestFixMissingImports:
    def test_imports_other_document(self, project):
        project.create_document("User.ts", "models/User.ts").add_interface("IUser")
        order = project.create_document("Order.ts", "models/Order.ts")
        order.add_interface("IOrder").add_properties([ref("IUser")])

        assert order.fix_missing_imports(project) == ["IUser"]
        assert len(order.imports) == 1
        assert order.imports[0].module_specifier == "./User"
        assert order.imports[0].named_imports == ["IUser"]

    def test_idempotent(self, project):
        project.create_document("User.ts").add_interface("IUser")
        order = project.create_document("Order.ts")
        order.add_interface("IOrder").add_properties([ref("IUser")])

        order.fix_missing_imports(project)
        assert order.fix_missing_imports(project) == []
        assert order.imported_names == ["IUser"]

    def test_local_declarations_not_imported(self, project):
        node = project.create_document("Node.ts")
        node.add_interface("INode").add_properties([ref("INode")])
        assert node.fix_missing_imports(project) == []
        assert node.imports == []

    def test_unknown_names_left_unresolved(self, project):
        order = project.create_document("Order.ts")
        order.add_interface("IOrder").add_properties([ref("IGhost"), ref("string")])
        assert order.fix_missing_imports(project) == []

    def test_names_from_one_module_share_a_declaration(self, project):
        shared = project.create_document("shared.ts")
        shared.add_interface("IA")
        shared.add_interface("IB")
        user = project.create_document("User.ts")
        user.add_interface("IUser").add_properties([ref("IA"), ref("IB")])

        user.fix_missing_imports(project)
        assert len(user.imports) == 1
        assert user.imports[0].named_imports == ["IA", "IB"]


class TestModuleSpecifier:
    @pytest.mark.parametrize(
        "source, target, expected",
        [
            ("Order.ts", "User.ts", "./User"),
            ("src/Order.ts", "src/User.ts", "./User"),
            ("src/orders/Order.ts", "src/users/User.ts", "../users/User"),
            ("src/Order.ts", "src/users/User.ts", "./users/User"),
        ],
    )
    def test_relative_paths(self, source, target, expected):
        a = SourceDocument(Path(source).name, source)
        b = SourceDocument(Path(target).name, target)
        assert a.module_specifier_for(b) == expected


# ============================================================================
# RENDERING
# ============================================================================


class TestRendering:
    def test_interface_layout(self, project, engine):
        document = project.create_document("User.ts")
        document.add_interface("IUser").add_properties(
            [
                PropertySignature("id", "string"),
                PropertySignature("active", "boolean"),
            ]
        )
        assert document.render(engine) == (
            "export interface IUser {\n"
            "    id: string;\n"
            "    active: boolean;\n"
            "}"
        )

    def test_empty_interface(self, project, engine):
        document = project.create_document("User.ts")
        document.add_interface("IUser")
        assert document.render(engine) == "export interface IUser {\n}"

    def test_unexported_interface(self, project, engine):
        document = project.create_document("User.ts")
        document.add_interface("IUser", is_exported=False)
        assert document.render(engine) == "interface IUser {\n}"

    def test_imports_precede_declarations(self, project, engine):
        project.create_document("User.ts").add_interface("IUser")
        order = project.create_document("Order.ts")
        order.add_interface("IOrder").add_properties(
            [PropertySignature("owner", "IUser", references=("IUser",))]
        )
        order.fix_missing_imports(project)

        assert order.render(engine, indent="  ") == (
            'import { IUser } from "./User";\n'
            "\n"
            "export interface IOrder {\n"
            "  owner: IUser;\n"
            "}"
        )

    def test_several_interfaces_separated_by_blank_line(self, project, engine):
        document = project.create_document("models.ts")
        document.add_interface("IA")
        document.add_interface("IB")
        assert document.render(engine) == (
            "export interface IA {\n}\n\nexport interface IB {\n}"
        )

    def test_tab_indent(self, project, engine):
        document = project.create_document("User.ts")
        document.add_interface("IUser").add_properties([PropertySignature("id", "string")])
        assert "\tid: string;" in document.render(engine, indent="\t")

    def test_render_is_idempotent(self, project, engine):
        project.create_document("User.ts").add_interface("IUser")
        order = project.create_document("Order.ts")
        order.add_interface("IOrder").add_properties([ref("IUser")])
        order.fix_missing_imports(project)
        assert order.render(engine) == order.render(engine)


class TestPropertyNames:
    @pytest.mark.parametrize("name", ["id", "_private", "$ref", "camelCase2"])
    def test_identifiers_stay_bare(self, name):
        assert format_property_name(name) == name

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("first-name", '"first-name"'),
            ("2fa", '"2fa"'),
            ("with space", '"with space"'),
            ('say "hi"', '"say \\"hi\\""'),
        ],
    )
    def test_other_names_are_quoted(self, name, expected):
        assert format_property_name(name) == expected
