"""
EDID base block decoder package.

This package provides:
- A single-pass decoder for the 128-byte display identification block
- Byte source adapters for in-memory data, binary streams and serial ports
- Immutable value types for product, display, color and timing information
- Configuration loading for decoder options
"""

__version__ = "0.1.0"

from .byte_source import ByteSource, BytesSource, SerialSource, StreamSource, create_byte_source
from .config import DecoderConfig, ManufacturerCharset, default_config, load_from_toml
from .decoder import decode, decode_bytes
from .errors import (
    DecodeError,
    HeaderInvalidError,
    MalformedDescriptorError,
    MalformedTimingGeometryError,
    MissingPreferredTimingError,
    SourceFailureError,
    UnexpectedEndOfDataError,
)
from .models import DisplayRecord

__all__ = [
    "ByteSource",
    "BytesSource",
    "SerialSource",
    "StreamSource",
    "create_byte_source",
    "DecoderConfig",
    "ManufacturerCharset",
    "default_config",
    "load_from_toml",
    "decode",
    "decode_bytes",
    "DecodeError",
    "HeaderInvalidError",
    "MalformedDescriptorError",
    "MalformedTimingGeometryError",
    "MissingPreferredTimingError",
    "SourceFailureError",
    "UnexpectedEndOfDataError",
    "DisplayRecord",
]
