"""Big-endian reader over an in-memory buffer with a repositionable offset.

Mirrors the ``IDataInput`` reads the game client performs on its data files.
"""

from __future__ import annotations

import struct

from dofus_data.core.errors import DecodeError, TruncatedDataError, VarIntTooLongError

_INT = struct.Struct(">i")
_UINT = struct.Struct(">I")
_USHORT = struct.Struct(">H")
_DOUBLE = struct.Struct(">d")

_VAR_INT_MAX_BYTES = 5
_CHUNK_BITS = 0x7F
_CONTINUATION_BIT = 0x80


class Cursor:
    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def set_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self._data):
            raise DecodeError(f"cannot seek to {offset} in a buffer of {len(self._data)} bytes", self._offset)
        self._offset = offset

    def bytes_available(self) -> bool:
        return self._offset < len(self._data)

    def describe_offset(self) -> str:
        return f"{self._offset:#x} ({self._offset})"

    def read_bytes(self, n: int) -> bytes:
        end = self._offset + n
        if n < 0 or end > len(self._data):
            raise TruncatedDataError(
                f"need {n} bytes, {len(self._data) - self._offset} remaining",
                self._offset,
            )
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def read_int(self) -> int:
        return int(_INT.unpack(self.read_bytes(4))[0])

    def read_uint(self) -> int:
        return int(_UINT.unpack(self.read_bytes(4))[0])

    def read_unsigned_short(self) -> int:
        return int(_USHORT.unpack(self.read_bytes(2))[0])

    def read_unsigned_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_boolean(self) -> bool:
        # Only an exact 1 is true; 0x02 and friends read as false.
        return self.read_unsigned_byte() == 1

    def read_double(self) -> float:
        return float(_DOUBLE.unpack(self.read_bytes(8))[0])

    def read_utf(self) -> str:
        length = self.read_unsigned_short()
        return self.read_bytes(length).decode("utf-8", errors="replace")

    def read_var_int(self) -> int:
        """Read a little-endian base-128 integer of at most 5 bytes."""
        start = self._offset
        value = 0
        for i in range(_VAR_INT_MAX_BYTES):
            b = self.read_unsigned_byte()
            value |= (b & _CHUNK_BITS) << (7 * i)
            if not b & _CONTINUATION_BIT:
                return value
        raise VarIntTooLongError(f"variable-length integer longer than {_VAR_INT_MAX_BYTES} bytes", start)

    def read_var_uh_int(self) -> int:
        return self.read_var_int()
