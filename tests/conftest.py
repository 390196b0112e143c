"""Shared fixtures for schema_emitter tests."""

import pytest

from schema_emitter.codegen.core.schema import (
    Schema,
    Model,
    PropertyType,
    PropertyTypes,
    StringPropertyType,
    ModelPropertyType,
)
from schema_emitter.codegen.languages.typescript import (
    TypeScriptConfig,
    TypeScriptEmitter,
    TypeScriptTypeMapper,
)


@pytest.fixture
def mapper():
    return TypeScriptTypeMapper()


@pytest.fixture
def user_model():
    """User: id (UniqueIdentifier), name (String), active (Boolean)."""
    return Model(
        name="User",
        properties={
            "id": StringPropertyType(type_name=PropertyTypes.UNIQUE_IDENTIFIER),
            "name": StringPropertyType(),
            "active": PropertyType(PropertyTypes.BOOLEAN),
        },
    )


@pytest.fixture
def order_model():
    """Order: id (Integer), owner (ReferenceModel -> User)."""
    return Model(
        name="Order",
        properties={
            "id": PropertyType(PropertyTypes.INTEGER),
            "owner": ModelPropertyType(
                type_name=PropertyTypes.REFERENCE_MODEL, model_name="User"
            ),
        },
    )


@pytest.fixture
def user_schema(user_model):
    return Schema(models=[user_model])


@pytest.fixture
def order_first_schema(user_model, order_model):
    """Order is listed before the User it references."""
    return Schema(models=[order_model, user_model])


@pytest.fixture
def schema_dict():
    """Schema document in its JSON shape."""
    return {
        "Models": [
            {
                "Name": "User",
                "Properties": {
                    "id": {"TypeName": "UniqueIdentifier"},
                    "role": {
                        "TypeName": "String",
                        "AllowedValues": ["admin", "member"],
                    },
                    "createdAt": {"TypeName": "DateTime", "AllowNull": True},
                },
            },
            {
                "Name": "Team",
                "Properties": {
                    "members": {
                        "TypeName": "Array",
                        "MemberType": {"TypeName": "ImportModel", "ModelName": "User"},
                    },
                    "tags": {"TypeName": "Array", "MemberType": "string"},
                },
            },
        ]
    }


@pytest.fixture
def single_file_emitter():
    return TypeScriptEmitter(TypeScriptConfig(output="models.ts"))


@pytest.fixture
def per_model_emitter():
    return TypeScriptEmitter(
        TypeScriptConfig(
            output="src/models/{{ Name }}.ts", output_type="oneFilePerModel"
        )
    )