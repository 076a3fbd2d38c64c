"""
Decode error taxonomy.

Every failure while decoding a base block raises a subclass of DecodeError.
Errors are terminal for the call: no partial record is ever returned.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base exception for EDID decode errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class HeaderInvalidError(DecodeError):
    """Raised when the 8-byte magic header does not match."""

    pass


class UnexpectedEndOfDataError(DecodeError):
    """Raised when the byte source runs dry before the block is complete."""

    pass


class MissingPreferredTimingError(DecodeError):
    """Raised when the first slot does not hold a detailed timing."""

    pass


class MalformedTimingGeometryError(DecodeError):
    """Raised when derived timing values would underflow."""

    pass


class MalformedDescriptorError(DecodeError):
    """Raised on a terminator, padding or guard mismatch in a descriptor."""

    pass


class SourceFailureError(DecodeError):
    """Raised when the byte source reports a read failure."""

    pass
