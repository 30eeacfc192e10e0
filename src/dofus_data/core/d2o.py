"""D2O game data container decoding (see GameDataFileAccessor in the game client)."""

import logging
from pathlib import Path

from dofus_data.core.cursor import Cursor
from dofus_data.core.errors import DecodeError, InvalidHeaderError, UnknownClassError
from dofus_data.core.objects import read_object
from dofus_data.core.schema import read_class_table
from dofus_data.models import D2oData, DecodedObject

logger = logging.getLogger(__name__)

D2O_MAGIC = b"D2O"
_INDEX_ENTRY_SIZE = 8


def read_index_table(cursor: Cursor) -> dict[int, int]:
    """Read the object id -> byte offset index at the cursor position."""
    length_offset = cursor.offset
    index_length = cursor.read_int()
    if index_length < 0:
        raise DecodeError(f"negative index length {index_length}", length_offset)

    entry_count = index_length // _INDEX_ENTRY_SIZE
    logger.debug("index holds %d entries", entry_count)
    index_table: dict[int, int] = {}
    for _ in range(entry_count):
        object_id = cursor.read_int()
        index_table[object_id] = cursor.read_int()
    return index_table


def decode_d2o(data: bytes) -> D2oData:
    header = bytes(data[: len(D2O_MAGIC)])
    if header != D2O_MAGIC:
        raise InvalidHeaderError(f"invalid header {header!r}, expected {D2O_MAGIC!r}", 0)

    cursor = Cursor(data)
    cursor.set_offset(len(D2O_MAGIC))

    index_pointer = cursor.read_int()
    logger.debug("index pointer %#x", index_pointer)
    cursor.set_offset(index_pointer)
    index_table = read_index_table(cursor)

    class_count = cursor.read_int()
    logger.debug("class count %d", class_count)
    class_table = read_class_table(cursor, class_count)

    # Objects are packed by ascending offset, whatever order the ids were indexed in.
    objects: list[DecodedObject] = []
    for offset in sorted(index_table.values()):
        cursor.set_offset(offset)
        class_id = cursor.read_int()
        cls = class_table.get(class_id)
        if cls is None:
            raise UnknownClassError(f"object refers to unknown class {class_id}", offset)
        objects.append(read_object(cursor, class_table, cls))

    return D2oData(classes=class_table, objects=objects)


def process_d2o_file(path: str | Path) -> D2oData:
    file_path = Path(path)
    logger.debug("processing D2O file %s", file_path)
    data = decode_d2o(file_path.read_bytes())
    logger.debug("parsed %s: %d classes, %d objects", file_path.name, len(data.classes), len(data.objects))
    return data
