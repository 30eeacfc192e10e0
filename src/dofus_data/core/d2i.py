"""D2I translation file decoding (see I18nFileAccessor in the game client)."""

import logging
from pathlib import Path

from dofus_data.core.cursor import Cursor
from dofus_data.models import Translations

logger = logging.getLogger(__name__)


def read_string_at(cursor: Cursor, location: int) -> str:
    """Read the string stored at ``location`` and restore the cursor position."""
    start = cursor.offset
    cursor.set_offset(location)
    try:
        return cursor.read_utf()
    finally:
        cursor.set_offset(start)


def decode_d2i(data: bytes) -> Translations:
    cursor = Cursor(data)
    index_pointer = cursor.read_int()
    cursor.set_offset(index_pointer)

    index_length = cursor.read_int()
    end = cursor.offset + index_length
    translations: Translations = {}
    while cursor.offset < end:
        text_id = cursor.read_int()
        has_diacritic = cursor.read_boolean()
        translations[text_id] = read_string_at(cursor, cursor.read_int())
        if has_diacritic:
            # Pointer to the diacritic-free variant, unused.
            cursor.read_int()
    return translations


def process_d2i_file(path: str | Path) -> Translations:
    file_path = Path(path)
    logger.debug("processing D2I file %s", file_path)
    translations = decode_d2i(file_path.read_bytes())
    logger.debug("parsed %s: %d texts", file_path.name, len(translations))
    return translations
