"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).parent.parent

VECTOR = -99


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# BinaryWriter: assembles big-endian buffers the way the game client writes them
# ---------------------------------------------------------------------------


class BinaryWriter:
    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def raw(self, data: bytes) -> BinaryWriter:
        self._buf += data
        return self

    def int(self, value: int) -> BinaryWriter:
        return self.raw(struct.pack(">i", value))

    def uint(self, value: int) -> BinaryWriter:
        return self.raw(struct.pack(">I", value))

    def byte(self, value: int) -> BinaryWriter:
        return self.raw(bytes([value]))

    def bool(self, value: bool) -> BinaryWriter:
        return self.byte(1 if value else 0)

    def double(self, value: float) -> BinaryWriter:
        return self.raw(struct.pack(">d", value))

    def utf(self, value: str) -> BinaryWriter:
        encoded = value.encode("utf-8")
        return self.raw(struct.pack(">H", len(encoded)) + encoded)

    def pad_to(self, offset: int) -> BinaryWriter:
        assert offset >= len(self._buf)
        return self.raw(b"\x00" * (offset - len(self._buf)))

    def field(self, name: str, *tags: int) -> BinaryWriter:
        """Write a field descriptor; extra tags describe nested vector element types."""
        self.utf(name).int(tags[0])
        if tags[0] == VECTOR:
            self.field(name, *tags[1:])
        return self

    def class_definition(
        self, class_id: int, name: str, package: str, fields: Sequence[tuple[int | str, ...]]
    ) -> BinaryWriter:
        self.int(class_id).utf(name).utf(package).int(len(fields))
        for field_name, *tags in fields:
            assert isinstance(field_name, str)
            self.field(field_name, *(int(t) for t in tags))
        return self


ClassSpec = tuple[int, str, str, Sequence[tuple[int | str, ...]]]


def build_d2o(
    classes: Sequence[ClassSpec],
    objects: Sequence[tuple[int, bytes]],
    index_order: Sequence[int] | None = None,
) -> bytes:
    """Pack objects right after the header, then the index, then the class table.

    ``objects`` are ``(object id, payload)`` pairs; payloads start with the class id.
    ``index_order`` lists object ids in the order their index entries are written.
    """
    w = BinaryWriter().raw(b"D2O").int(0)
    offsets: dict[int, int] = {}
    for object_id, payload in objects:
        offsets[object_id] = len(w)
        w.raw(payload)

    index_pointer = len(w)
    ids = list(index_order) if index_order is not None else [object_id for object_id, _ in objects]
    w.int(len(ids) * 8)
    for object_id in ids:
        w.int(object_id).int(offsets[object_id])

    w.int(len(classes))
    for class_id, name, package, fields in classes:
        w.class_definition(class_id, name, package, fields)

    data = bytearray(w.getvalue())
    data[3:7] = struct.pack(">i", index_pointer)
    return bytes(data)


def build_d2i(entries: Sequence[tuple[int, str, bool]]) -> bytes:
    """Strings first, then the index: ``(id, text, has diacritic variant)`` per entry."""
    w = BinaryWriter().int(0)
    locations: list[int] = []
    for _, text, _ in entries:
        locations.append(len(w))
        w.utf(text)

    index_pointer = len(w)
    index = BinaryWriter()
    for (text_id, _, has_diacritic), location in zip(entries, locations, strict=True):
        index.int(text_id).bool(has_diacritic).int(location)
        if has_diacritic:
            index.int(location)
    w.int(len(index)).raw(index.getvalue())

    data = bytearray(w.getvalue())
    data[0:4] = struct.pack(">i", index_pointer)
    return bytes(data)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def writer() -> BinaryWriter:
    return BinaryWriter()


@pytest.fixture
def monster_d2o() -> bytes:
    """A small file with a polymorphic grade vector, the way Monsters.d2o is laid out."""
    classes: list[ClassSpec] = [
        (
            1,
            "Monster",
            "com.ankamagames.dofus.datacenter.monsters",
            [
                ("id", -1),
                ("nameId", -5),
                ("isBoss", -2),
                ("speed", -4),
                ("grades", VECTOR, 2),
                ("tags", VECTOR, -3),
            ],
        ),
        (
            2,
            "MonsterGrade",
            "com.ankamagames.dofus.datacenter.monsters",
            [("grade", -1), ("level", -6)],
        ),
    ]

    def monster(monster_id: int, name_id: int, grades: list[tuple[int, int]], speed: float) -> bytes:
        w = BinaryWriter().int(1).int(monster_id).int(name_id).bool(monster_id % 2 == 0).double(speed)
        w.int(len(grades))
        for grade, level in grades:
            w.int(2).int(grade).uint(level)
        w.int(1).utf(f"tag-{monster_id}")
        return w.getvalue()

    objects = [
        (31, monster(31, 1001, [(1, 10), (2, 20)], 1.5)),
        (7, monster(7, 1002, [], float("nan"))),
    ]
    return build_d2o(classes, objects, index_order=[7, 31])
