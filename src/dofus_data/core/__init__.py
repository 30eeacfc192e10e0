from dofus_data.core.cursor import Cursor
from dofus_data.core.d2i import decode_d2i, process_d2i_file
from dofus_data.core.d2o import D2O_MAGIC, decode_d2o, process_d2o_file
from dofus_data.core.errors import (
    DecodeError,
    InvalidFieldTypeError,
    InvalidHeaderError,
    TruncatedDataError,
    UnknownClassError,
    VarIntTooLongError,
)

__all__ = [
    "D2O_MAGIC",
    "Cursor",
    "DecodeError",
    "InvalidFieldTypeError",
    "InvalidHeaderError",
    "TruncatedDataError",
    "UnknownClassError",
    "VarIntTooLongError",
    "decode_d2i",
    "decode_d2o",
    "process_d2i_file",
    "process_d2o_file",
]
