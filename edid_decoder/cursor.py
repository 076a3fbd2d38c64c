import logging

from .byte_source import ByteSource
from .errors import SourceFailureError, UnexpectedEndOfDataError
from .protocol import BLOCK_SIZE

logger = logging.getLogger(__name__)


class ByteCursor:
    """
    Buffered sequential reader over a ByteSource.

    Pulls up to ``chunk_size`` bytes at a time and hands them out one by one.
    Multi-byte reads are little-endian. A source that yields no bytes when
    more are needed is an error, never a clean end of stream.
    """

    def __init__(self, source: ByteSource, chunk_size: int = BLOCK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self.source = source
        self.chunk_size = chunk_size
        self._buffer = bytearray(chunk_size)
        self._pos = 0
        self._end = 0
        self.offset = 0

    def _refill(self) -> None:
        count = self.source.fill(self._buffer)
        if count is None:
            raise SourceFailureError("Byte source reported a read failure", self.offset)
        if not 0 <= count <= self.chunk_size:
            raise SourceFailureError(
                f"Byte source returned invalid count {count} for {self.chunk_size}-byte buffer",
                self.offset,
            )
        if count == 0:
            raise UnexpectedEndOfDataError("Unexpectedly out of data", self.offset)

        logger.debug(f"Refilled cursor with {count} bytes at offset {self.offset}")
        self._pos = 0
        self._end = count

    def next_byte(self) -> int:
        if self._pos >= self._end:
            self._refill()
        value = self._buffer[self._pos]
        self._pos += 1
        self.offset += 1
        return value

    def next_u16_le(self) -> int:
        return self.next_byte() | (self.next_byte() << 8)

    def next_u32_le(self) -> int:
        return self.next_u16_le() | (self.next_u16_le() << 16)

    def next_bytes(self, count: int) -> bytes:
        """Read ``count`` raw bytes."""
        return bytes(self.next_byte() for _ in range(count))

    def expect_byte(self, expected: int, error, what: str) -> None:
        """Read one byte and raise ``error`` unless it equals ``expected``."""
        offset = self.offset
        value = self.next_byte()
        if value != expected:
            raise error(f"Expected 0x{expected:02X} {what}, got 0x{value:02X}", offset)

    def expect_u16_le(self, expected: int, error, what: str) -> None:
        """Read one LE word and raise ``error`` unless it equals ``expected``."""
        offset = self.offset
        value = self.next_u16_le()
        if value != expected:
            raise error(f"Expected 0x{expected:04X} {what}, got 0x{value:04X}", offset)
