"""Emit pydantic model source for decoded game data classes."""

from __future__ import annotations

import keyword
import re
from collections.abc import Mapping
from typing import assert_never

from dofus_data.models import CLASS_TYPE_KEY, ClassRef, FieldKind, GameDataClass, GameDataField

_INDENT = "    "
_NOT_IDENTIFIER = re.compile(r"\W")

_HEADER = '''"""Generated from game data files. Do not edit."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
'''


def python_attribute_name(name: str) -> str:
    attribute = _NOT_IDENTIFIER.sub("_", name)
    if not attribute or attribute[0].isdigit():
        attribute = f"_{attribute}"
    if attribute.startswith("_"):
        # pydantic treats leading underscores as private attributes.
        attribute = f"field{attribute}"
    if keyword.iskeyword(attribute):
        attribute = f"{attribute}_"
    return attribute


def python_type(field: GameDataField, cls: GameDataClass, class_table: Mapping[int, GameDataClass]) -> str:
    field_type = field.type
    match field_type:
        case FieldKind.INTEGER | FieldKind.I18N | FieldKind.UNSIGNED_INTEGER:
            return "int"
        case FieldKind.BOOLEAN:
            return "bool"
        case FieldKind.STRING:
            return "str"
        case FieldKind.NUMBER:
            return "float | None"
        case FieldKind.VECTOR:
            if field.subtype is None:
                return "list[Any]"
            element = python_type(field.subtype, cls, class_table)
            if isinstance(field.subtype.type, ClassRef):
                # Elements of unknown classes decode to null.
                element = f"{element} | None"
            return f"list[{element}]"
        case ClassRef():
            referenced = class_table.get(field_type.class_id)
            if referenced is None or referenced.package_name != cls.package_name:
                return "dict[str, Any]"
            return referenced.package_class
        case _:
            assert_never(field_type)


def build_class_source(cls: GameDataClass, class_table: Mapping[int, GameDataClass]) -> str:
    """Render one model class.

    A class-typed field may hold any subclass the stream names, so ``ClassType_``
    is a plain string and fields beyond the declared ones are kept as extras.
    """
    lines = [
        f"class {cls.package_class}(BaseModel):",
        f'{_INDENT}"""{cls.package_name}.{cls.package_class}"""',
        "",
        f'{_INDENT}model_config = ConfigDict(populate_by_name=True, extra="allow")',
        "",
        f'{_INDENT}{CLASS_TYPE_KEY}: str = "{cls.package_class}"',
    ]
    for field in cls.fields:
        attribute = python_attribute_name(field.name)
        annotation = python_type(field, cls, class_table)
        if attribute == field.name:
            lines.append(f"{_INDENT}{attribute}: {annotation}")
        else:
            lines.append(f'{_INDENT}{attribute}: {annotation} = Field(alias="{field.name}")')
    return "\n".join(lines) + "\n"


def generate_models(class_sources: Mapping[str, str]) -> str:
    """Assemble a module from class sources keyed by class name, sorted by name."""
    ordered = sorted(class_sources.items())

    parts = [_HEADER]
    for _, source in ordered:
        parts.append(f"\n\n{source}")
    if ordered:
        parts.append("\n\n")
        parts.extend(f"{name}.model_rebuild()\n" for name, _ in ordered)
    return "".join(parts)
