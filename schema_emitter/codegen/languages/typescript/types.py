"""
TypeScript type mapping.

Turns property type descriptors into TypeScript type expressions. The
mapper is pure: the same descriptor always yields the same text and no
descriptor makes it fail.
"""

from typing import Dict, List

from ...core.schema import (
    PropertyType,
    PropertyTypes,
    StringPropertyType,
    ArrayPropertyType,
    ModelPropertyType,
)

DECLARATION_PREFIX = "I"

STRING_TYPE = "string"
OBJECT_TYPE = "object"
UNKNOWN_TYPE = "any"
NULL_TYPE = "null"
UNION_SEPARATOR = " | "
ARRAY_SUFFIX = "[]"

# Decimal and Integer both map to number
PRIMITIVE_TYPES: Dict[PropertyTypes, str] = {
    PropertyTypes.BOOLEAN: "boolean",
    PropertyTypes.BINARY: "ArrayBuffer",
    PropertyTypes.DATETIME: "Date",
    PropertyTypes.DECIMAL: "number",
    PropertyTypes.INTEGER: "number",
}


def declaration_name(model_name: str) -> str:
    """Name of the interface declared for a model."""
    return f"{DECLARATION_PREFIX}{model_name}"


def string_literal(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TypeScriptTypeMapper:
    """Maps property type descriptors to TypeScript type expressions."""

    def map_type(self, property_type: PropertyType) -> str:
        """
        Map a descriptor to its TypeScript type, ignoring nullability.

        Unknown tags map to ``any``.
        """
        type_name = property_type.type_name

        if type_name in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[type_name]

        if type_name in (PropertyTypes.STRING, PropertyTypes.UNIQUE_IDENTIFIER):
            return self._map_string_type(property_type)

        if type_name == PropertyTypes.ARRAY:
            return self._map_array_type(property_type)

        if type_name in (PropertyTypes.IMPORT_MODEL, PropertyTypes.REFERENCE_MODEL):
            return declaration_name(property_type.model_name)

        if type_name == PropertyTypes.OBJECT:
            return OBJECT_TYPE

        return UNKNOWN_TYPE

    def wrap_map_type(self, property_type: PropertyType) -> str:
        """Map a descriptor and widen it with ``| null`` when it allows null."""
        actual_type = self.map_type(property_type)
        if property_type.allow_null:
            return f"{actual_type}{UNION_SEPARATOR}{NULL_TYPE}"
        return actual_type

    def _map_string_type(self, property_type: PropertyType) -> str:
        allowed_values = ()
        if isinstance(property_type, StringPropertyType):
            allowed_values = property_type.allowed_values

        if allowed_values:
            return UNION_SEPARATOR.join(string_literal(v) for v in allowed_values)
        return STRING_TYPE

    def _map_array_type(self, property_type: PropertyType) -> str:
        if not isinstance(property_type, ArrayPropertyType):
            return f"{UNKNOWN_TYPE}{ARRAY_SUFFIX}"

        member_type = property_type.member_type
        if isinstance(member_type, str):
            return f"{member_type}{ARRAY_SUFFIX}"

        # Nullability applies to the array as a whole, never to its elements
        return f"{self.map_type(member_type)}{ARRAY_SUFFIX}"

    def collect_references(self, property_type: PropertyType) -> List[str]:
        """
        Names of other declarations a descriptor's type refers to.

        Model references give ``I<ModelName>``; arrays contribute their
        element's references, and a raw member type name is returned as-is
        so the caller can decide whether it names a known declaration.
        """
        if isinstance(property_type, ModelPropertyType):
            return [declaration_name(property_type.model_name)]

        if isinstance(property_type, ArrayPropertyType):
            member_type = property_type.member_type
            if isinstance(member_type, str):
                return [member_type]
            return self.collect_references(member_type)

        return []
