import logging

from dofus_data.core.cursor import Cursor
from dofus_data.core.errors import DecodeError, InvalidFieldTypeError
from dofus_data.models import ClassRef, FieldKind, FieldType, GameDataClass, GameDataField

logger = logging.getLogger(__name__)


def field_type_from_tag(tag: int, offset: int | None = None) -> FieldType:
    """Map a raw type tag to a fixed kind or a deferred class reference.

    Positive tags are class ids and are not checked against the class table here.
    """
    if tag > 0:
        return ClassRef(class_id=tag)
    if tag == 0:
        raise InvalidFieldTypeError("field type tag 0 is not valid", offset)
    try:
        return FieldKind(tag)
    except ValueError:
        raise InvalidFieldTypeError(f"unknown field type tag {tag}", offset) from None


def read_field(cursor: Cursor) -> GameDataField:
    name = cursor.read_utf()
    tag_offset = cursor.offset
    field_type = field_type_from_tag(cursor.read_int(), tag_offset)

    subtype = None
    if field_type is FieldKind.VECTOR:
        subtype = read_field(cursor)

    return GameDataField(name=name, type=field_type, subtype=subtype)


def read_class_definition(cursor: Cursor) -> GameDataClass:
    class_name = cursor.read_utf()
    package_name = cursor.read_utf()
    logger.debug("reading class %s.%s at %s", package_name, class_name, cursor.describe_offset())

    field_count = cursor.read_int()
    if field_count < 0:
        raise DecodeError(f"negative field count {field_count} for class {class_name}", cursor.offset)
    fields = [read_field(cursor) for _ in range(field_count)]

    return GameDataClass(package_name=package_name, package_class=class_name, fields=fields)


def read_class_table(cursor: Cursor, count: int) -> dict[int, GameDataClass]:
    """Read ``count`` (class id, class definition) entries."""
    classes: dict[int, GameDataClass] = {}
    for _ in range(count):
        class_id = cursor.read_int()
        classes[class_id] = read_class_definition(cursor)
    return classes
