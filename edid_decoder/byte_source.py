"""
Byte Source I/O Boundary

This module defines the ByteSource capability consumed by the decoder and the
concrete adapters for in-memory buffers, binary streams and serial ports.
Acquiring EDID from the display (DDC/I2C, OS APIs) stays with the caller; the
decoder only ever asks a source to fill a buffer.

I/O boundary classes - no seeking, no peeking.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from serial import SerialBase, SerialException

from .errors import SourceFailureError


logger = logging.getLogger(__name__)


class ByteSource(ABC):
    """
    Abstract base class for anything the decoder can read bytes from.

    Implementations copy as many bytes as they have (up to len(buffer)) into
    the front of the buffer and return the count. Returning 0 means the source
    is exhausted.
    """

    @abstractmethod
    def fill(self, buffer: bytearray) -> Optional[int]:
        """
        Fill the front of ``buffer`` with the next bytes from the source.

        Args:
            buffer: Caller-owned buffer to write into

        Returns:
            Number of bytes written, or None if the source failed

        Raises:
            SourceFailureError: If the underlying read fails
        """
        pass


class BytesSource(ByteSource):
    """In-memory source over a bytes-like object."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self._data = bytes(data)
        self._pos = 0

    def fill(self, buffer: bytearray) -> int:
        chunk = self._data[self._pos : self._pos + len(buffer)]
        buffer[: len(chunk)] = chunk
        self._pos += len(chunk)
        return len(chunk)


class StreamSource(ByteSource):
    """
    Adapter over any binary file-like object.

    Uses ``readinto`` when the stream has it, otherwise ``read``.
    """

    def __init__(self, stream):
        self.stream = stream

    def fill(self, buffer: bytearray) -> Optional[int]:
        try:
            if hasattr(self.stream, "readinto"):
                return self.stream.readinto(memoryview(buffer))
            data = self.stream.read(len(buffer))
        except (OSError, ValueError) as e:
            raise SourceFailureError(f"Stream read failed: {e}") from e

        if data is None:
            return None
        buffer[: len(data)] = data
        return len(data)


class SerialSource(ByteSource):
    """
    Adapter over an opened pyserial port.

    A read that times out returns fewer bytes (possibly none); the cursor
    decides whether that is an early end of data.
    """

    def __init__(self, port: SerialBase):
        self.port = port

    def fill(self, buffer: bytearray) -> int:
        if not self.port.is_open:
            raise SourceFailureError(f"Serial port {self.port.name} is not open")

        try:
            data = self.port.read(len(buffer))
        except (SerialException, OSError) as e:
            raise SourceFailureError(f"Serial read failed: {e}") from e

        buffer[: len(data)] = data
        logger.debug(f"Read {len(data)} bytes from serial port {self.port.name}")
        return len(data)


def create_byte_source(obj) -> ByteSource:
    """
    Factory function to wrap a raw object in the matching ByteSource.

    Args:
        obj: A ByteSource, bytes-like object, pyserial port or binary stream

    Returns:
        ByteSource: The adapter for ``obj``

    Raises:
        TypeError: If no adapter fits
    """
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BytesSource(obj)
    if isinstance(obj, SerialBase):
        logger.info(f"Creating serial byte source for {obj.name}")
        return SerialSource(obj)
    if hasattr(obj, "readinto") or hasattr(obj, "read"):
        return StreamSource(obj)
    raise TypeError(f"Cannot read EDID bytes from {type(obj).__name__}")
