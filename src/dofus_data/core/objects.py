"""Replay a decoded class table against the byte stream to build generic objects."""

import logging
import math
from collections.abc import Mapping
from typing import assert_never

from dofus_data.core.cursor import Cursor
from dofus_data.core.errors import DecodeError, UnknownClassError
from dofus_data.models import (
    CLASS_TYPE_KEY,
    ClassRef,
    DecodedObject,
    FieldKind,
    GameDataClass,
    GameDataField,
    Value,
)

logger = logging.getLogger(__name__)

ClassTable = Mapping[int, GameDataClass]


def read_object(cursor: Cursor, class_table: ClassTable, cls: GameDataClass) -> DecodedObject:
    """Decode one instance of ``cls``, consuming its fields in declared order."""
    logger.debug(
        "reading object %s.%s (%d fields) at %s",
        cls.package_name,
        cls.package_class,
        len(cls.fields),
        cursor.describe_offset(),
    )
    obj: DecodedObject = {CLASS_TYPE_KEY: cls.package_class}
    for field in cls.fields:
        obj[field.name] = _read_value(cursor, class_table, field, in_vector=False)
    return obj


def read_vector(cursor: Cursor, class_table: ClassTable, field: GameDataField) -> list[Value]:
    if field.subtype is None:
        raise DecodeError(f"vector field {field.name!r} has no element type", cursor.offset)

    length_offset = cursor.offset
    length = cursor.read_int()
    if length < 0:
        raise DecodeError(f"negative length {length} for vector {field.name!r}", length_offset)
    logger.debug("reading vector %s of %d elements at %s", field.name, length, cursor.describe_offset())

    return [_read_value(cursor, class_table, field.subtype, in_vector=True) for _ in range(length)]


def _read_value(cursor: Cursor, class_table: ClassTable, field: GameDataField, *, in_vector: bool) -> Value:
    field_type = field.type
    match field_type:
        case FieldKind.INTEGER | FieldKind.I18N:
            return cursor.read_int()
        case FieldKind.UNSIGNED_INTEGER:
            return cursor.read_uint()
        case FieldKind.BOOLEAN:
            return cursor.read_boolean()
        case FieldKind.STRING:
            return cursor.read_utf()
        case FieldKind.NUMBER:
            number = cursor.read_double()
            # NaN marks an unset optional number.
            return None if math.isnan(number) else number
        case FieldKind.VECTOR:
            return read_vector(cursor, class_table, field)
        case ClassRef():
            if in_vector:
                return _read_polymorphic_element(cursor, class_table)
            return _read_polymorphic_field(cursor, class_table, field_type)
        case _:
            assert_never(field_type)


def _read_polymorphic_field(cursor: Cursor, class_table: ClassTable, declared: ClassRef) -> DecodedObject:
    """The stream holds the runtime class id; the declared id is only a fallback."""
    id_offset = cursor.offset
    class_id = cursor.read_int()
    if class_id not in class_table:
        class_id = declared.class_id

    cls = class_table.get(class_id)
    if cls is None:
        raise UnknownClassError(f"class {class_id} is not in the class table", id_offset)
    return read_object(cursor, class_table, cls)


def _read_polymorphic_element(cursor: Cursor, class_table: ClassTable) -> DecodedObject | None:
    id_offset = cursor.offset
    class_id = cursor.read_int()
    cls = class_table.get(class_id)
    if cls is None:
        logger.debug("unknown class %d for vector element at %#x, recorded as null", class_id, id_offset)
        return None
    return read_object(cursor, class_table, cls)
