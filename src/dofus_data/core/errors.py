class DecodeError(ValueError):
    """Raised when a data file does not match the expected binary layout.

    ``offset`` is the byte position at which the problem was detected, when known.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset:#x})"
        super().__init__(message)
        self.offset = offset


class TruncatedDataError(DecodeError):
    """Raised when a read runs past the end of the buffer."""


class InvalidHeaderError(DecodeError):
    """Raised when a D2O file does not start with the expected magic."""


class InvalidFieldTypeError(DecodeError):
    """Raised for a field type tag that is zero or not a known kind."""


class VarIntTooLongError(DecodeError):
    """Raised when a variable-length integer is not terminated within 5 bytes."""


class UnknownClassError(DecodeError):
    """Raised when an object references a class id missing from the class table."""
