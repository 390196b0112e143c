"""
Core schema representation for code generation.

Converts a schema document (models with typed properties) into the
immutable internal format that emitters work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union, Any
from enum import Enum


class SchemaError(Exception):
    """Exception raised when a schema document is structurally invalid."""

    pass


class PropertyTypes(str, Enum):
    """Property type tags understood by emitters."""

    BOOLEAN = "Boolean"
    BINARY = "Binary"
    DATETIME = "DateTime"
    DECIMAL = "Decimal"
    INTEGER = "Integer"
    STRING = "String"
    UNIQUE_IDENTIFIER = "UniqueIdentifier"
    ARRAY = "Array"
    IMPORT_MODEL = "ImportModel"
    REFERENCE_MODEL = "ReferenceModel"
    OBJECT = "Object"


STRING_LIKE_TYPES = frozenset({PropertyTypes.STRING, PropertyTypes.UNIQUE_IDENTIFIER})
MODEL_TYPES = frozenset({PropertyTypes.IMPORT_MODEL, PropertyTypes.REFERENCE_MODEL})


def coerce_type_name(type_name: Union[PropertyTypes, str]) -> Union[PropertyTypes, str]:
    """Return the enum member for a known tag, or the raw tag otherwise."""
    if isinstance(type_name, PropertyTypes):
        return type_name
    try:
        return PropertyTypes(type_name)
    except ValueError:
        return type_name


@dataclass(frozen=True)
class PropertyType:
    """
    Descriptor of a property's data kind.

    Scalar kinds (and tags no emitter knows) use this class directly.
    String-like, array and model kinds use the subclasses below, which
    carry the extra data relevant to them.
    """

    type_name: Union[PropertyTypes, str]
    allow_null: bool = False

    def __post_init__(self):
        object.__setattr__(self, "type_name", coerce_type_name(self.type_name))

    @property
    def is_known(self) -> bool:
        """Whether the tag is one of the PropertyTypes members."""
        return isinstance(self.type_name, PropertyTypes)


@dataclass(frozen=True)
class StringPropertyType(PropertyType):
    """String or UniqueIdentifier, optionally limited to literal values."""

    type_name: Union[PropertyTypes, str] = PropertyTypes.STRING
    allowed_values: tuple = field(default_factory=tuple)

    def __post_init__(self):
        super().__post_init__()
        if self.type_name not in STRING_LIKE_TYPES:
            raise SchemaError(
                f"StringPropertyType cannot carry tag {self.type_name!r}"
            )
        object.__setattr__(self, "allowed_values", tuple(self.allowed_values or ()))


@dataclass(frozen=True)
class ArrayPropertyType(PropertyType):
    """Array whose member is a resolved type name or a nested descriptor."""

    type_name: Union[PropertyTypes, str] = PropertyTypes.ARRAY
    member_type: Union[str, PropertyType] = "any"

    def __post_init__(self):
        super().__post_init__()
        if self.type_name != PropertyTypes.ARRAY:
            raise SchemaError(f"ArrayPropertyType cannot carry tag {self.type_name!r}")


@dataclass(frozen=True)
class ModelPropertyType(PropertyType):
    """ImportModel or ReferenceModel pointing at another model by name."""

    type_name: Union[PropertyTypes, str] = PropertyTypes.REFERENCE_MODEL
    model_name: str = ""

    def __post_init__(self):
        super().__post_init__()
        if self.type_name not in MODEL_TYPES:
            raise SchemaError(f"ModelPropertyType cannot carry tag {self.type_name!r}")


@dataclass
class Model:
    """A named record type; property order is the emitted field order."""

    name: str
    properties: Dict[str, PropertyType] = field(default_factory=dict)

    def add_property(self, name: str, property_type: PropertyType) -> None:
        """Append a property to this model."""
        self.properties[name] = property_type


@dataclass
class Schema:
    """Ordered collection of models."""

    models: List[Model] = field(default_factory=list)

    @property
    def model_names(self) -> List[str]:
        return [model.name for model in self.models]

    def get_model(self, name: str) -> Optional[Model]:
        """Get model by name."""
        for model in self.models:
            if model.name == name:
                return model
        return None


def convert_property(data: Any, context: str) -> PropertyType:
    """
    Convert one property descriptor from its JSON shape.

    Args:
        data: Mapping with TypeName and optional AllowNull, AllowedValues,
            MemberType and ModelName keys
        context: Location used in error messages (e.g. "User.id")

    Returns:
        The matching PropertyType variant
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Property {context} must be an object, got {type(data).__name__}")
    if "TypeName" not in data:
        raise SchemaError(f"Property {context} has no TypeName")

    type_name = coerce_type_name(data["TypeName"])
    allow_null = data.get("AllowNull")
    if allow_null is None:
        allow_null = False
    if not isinstance(allow_null, bool):
        raise SchemaError(f"AllowNull of {context} must be true or false")

    if type_name in STRING_LIKE_TYPES:
        allowed_values = data.get("AllowedValues") or []
        if not isinstance(allowed_values, list):
            raise SchemaError(f"AllowedValues of {context} must be a list")
        return StringPropertyType(
            type_name=type_name,
            allow_null=allow_null,
            allowed_values=tuple(str(v) for v in allowed_values),
        )

    if type_name == PropertyTypes.ARRAY:
        member = data.get("MemberType", "any")
        if isinstance(member, dict):
            member = convert_property(member, f"{context}[]")
        elif not isinstance(member, str):
            raise SchemaError(
                f"MemberType of {context} must be a type name or an object"
            )
        return ArrayPropertyType(allow_null=allow_null, member_type=member)

    if type_name in MODEL_TYPES:
        model_name = data.get("ModelName")
        if not model_name:
            raise SchemaError(f"Property {context} has no ModelName")
        return ModelPropertyType(
            type_name=type_name, allow_null=allow_null, model_name=str(model_name)
        )

    return PropertyType(type_name=type_name, allow_null=allow_null)


def convert_model(name: str, properties: Any) -> Model:
    """Convert a model's property mapping, keeping declaration order."""
    if properties is None:
        properties = {}
    if not isinstance(properties, dict):
        raise SchemaError(f"Properties of model {name} must be an object")

    model = Model(name=name)
    for prop_name, prop_data in properties.items():
        model.add_property(prop_name, convert_property(prop_data, f"{name}.{prop_name}"))
    return model


def convert_schema_dict(data: Dict[str, Any]) -> Schema:
    """
    Convert a parsed schema document to the internal Schema representation.

    Accepts either a list of ``{"Name": ..., "Properties": {...}}`` entries
    or a mapping of model name to ``{"Properties": {...}}`` under ``Models``.

    Returns:
        Schema: models in document order
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema document must be a JSON object")

    raw_models = data.get("Models", [])
    entries = []

    if isinstance(raw_models, dict):
        for name, body in raw_models.items():
            body = body or {}
            if not isinstance(body, dict):
                raise SchemaError(f"Model {name} must be an object")
            entries.append((name, body.get("Properties", {})))
    elif isinstance(raw_models, list):
        for index, body in enumerate(raw_models):
            if not isinstance(body, dict) or not body.get("Name"):
                raise SchemaError(f"Model at index {index} has no Name")
            entries.append((body["Name"], body.get("Properties", {})))
    else:
        raise SchemaError("Models must be a list or an object")

    schema = Schema()
    seen = set()
    for name, properties in entries:
        if name in seen:
            raise SchemaError(f"Duplicate model name: {name}")
        seen.add(name)
        schema.models.append(convert_model(name, properties))

    return schema
