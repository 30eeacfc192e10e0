from enum import IntEnum
from typing import Any, TypeAlias

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    SerializerFunctionWrapHandler,
    field_serializer,
    model_serializer,
)


class FieldKind(IntEnum):
    """Fixed type tags of the D2O schema (GameDataTypeEnum)."""

    INTEGER = -1
    BOOLEAN = -2
    STRING = -3
    NUMBER = -4
    I18N = -5
    UNSIGNED_INTEGER = -6
    VECTOR = -99


_KIND_NAMES = {
    FieldKind.INTEGER: "Integer",
    FieldKind.BOOLEAN: "Boolean",
    FieldKind.STRING: "String",
    FieldKind.NUMBER: "Number",
    FieldKind.I18N: "I18n",
    FieldKind.UNSIGNED_INTEGER: "UnsignedInteger",
    FieldKind.VECTOR: "Vector",
}


class ClassRef(BaseModel):
    """Reference to a class of the same file, resolved only when objects are read."""

    model_config = ConfigDict(frozen=True)

    class_id: PositiveInt


FieldType: TypeAlias = FieldKind | ClassRef


def field_type_name(field_type: FieldType) -> str:
    if isinstance(field_type, ClassRef):
        return str(field_type.class_id)
    return _KIND_NAMES[field_type]


class GameDataField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: FieldType
    subtype: "GameDataField | None" = None

    @field_serializer("type")
    def _serialize_type(self, value: FieldType) -> str:
        return field_type_name(value)

    @model_serializer(mode="wrap")
    def _omit_missing_subtype(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.subtype is None:
            data.pop("subtype", None)
        return data


GameDataField.model_rebuild()  # necessary for recursive types


class GameDataClass(BaseModel):
    model_config = ConfigDict(frozen=True)

    package_name: str = Field(serialization_alias="packageName")
    package_class: str = Field(serialization_alias="packageClass")
    fields: list[GameDataField]


CLASS_TYPE_KEY = "ClassType_"

# A decoded object maps CLASS_TYPE_KEY to the class simple name, then every
# field name to its value in wire order.
DecodedObject: TypeAlias = dict[str, Any]
Value: TypeAlias = "int | bool | str | float | None | DecodedObject | list[Value]"
Translations: TypeAlias = dict[int, str]


class D2oData(BaseModel):
    model_config = ConfigDict(frozen=True)

    classes: dict[int, GameDataClass]
    objects: list[DecodedObject]

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
