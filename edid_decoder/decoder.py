"""
EDID base block assembler.

Reads the 128-byte block front to back in a single pass:

    header -> product -> version -> display -> color -> timing tables
    -> four 18-byte slots -> extension count

Slot 0 must be a detailed timing. Slots 1-3 are timings or descriptors,
told apart by a zero pixel clock. Detailed timings, standard timings and
white points from the slots are merged after the base values, and the
immutable DisplayRecord is built only once everything has decoded.
"""

import logging
from dataclasses import replace
from typing import Optional

from .byte_source import create_byte_source
from .config import DecoderConfig, default_config
from .cursor import ByteCursor
from .descriptors import SlotAccumulator, read_descriptor
from .errors import HeaderInvalidError, MissingPreferredTimingError
from .fields import (
    read_color_characteristics,
    read_display_parameters,
    read_product_info,
    read_version,
)
from .models import DisplayRecord, Timings
from .protocol import HEADER_WORDS, PIXEL_CLOCK_UNIT_HZ, SLOT_COUNT, STANDARD_TIMING_COUNT
from .timings import read_detailed_timing, read_established_timings, read_standard_timings

logger = logging.getLogger(__name__)


def check_header(cursor: ByteCursor) -> None:
    """Raise HeaderInvalidError unless the block starts with the magic bytes."""
    for expected in HEADER_WORDS:
        offset = cursor.offset
        word = cursor.next_u32_le()
        if word != expected:
            raise HeaderInvalidError(
                f"Invalid header: expected 0x{expected:08X}, got 0x{word:08X}", offset
            )


def read_slot(cursor: ByteCursor, index: int, accumulator: SlotAccumulator) -> None:
    """Decode one 18-byte slot as a detailed timing or a descriptor."""
    offset = cursor.offset
    pixel_clock = cursor.next_u16_le() * PIXEL_CLOCK_UNIT_HZ

    if pixel_clock == 0:
        if index == 0:
            logger.warning(f"First slot at byte {offset} holds no detailed timing")
            raise MissingPreferredTimingError("Expected detailed timing in first slot", offset)
        logger.debug(f"Slot {index} at byte {offset} is a descriptor")
        read_descriptor(cursor, accumulator)
        return

    logger.debug(f"Slot {index} at byte {offset} is a detailed timing")
    accumulator.detailed_timings.append(read_detailed_timing(cursor, pixel_clock))


def decode_from_cursor(cursor: ByteCursor, config: DecoderConfig) -> DisplayRecord:
    check_header(cursor)

    product = read_product_info(cursor, config.manufacturer_charset)
    version = read_version(cursor)
    display = read_display_parameters(cursor)
    color = read_color_characteristics(cursor)
    established_timings = read_established_timings(cursor)
    standard_timings = read_standard_timings(cursor, STANDARD_TIMING_COUNT)

    accumulator = SlotAccumulator()
    for index in range(SLOT_COUNT):
        read_slot(cursor, index, accumulator)

    extensions = cursor.next_byte()

    record = DisplayRecord(
        product=product,
        version=version,
        display=display,
        color=replace(color, white_points=tuple(accumulator.white_points)),
        timings=Timings(
            established_timings=established_timings,
            standard_timings=tuple(standard_timings + accumulator.standard_timings),
            detailed_timings=tuple(accumulator.detailed_timings),
        ),
        descriptors=tuple(accumulator.descriptors),
        extensions=extensions,
    )

    logger.info(
        f"Decoded EDID {record.version} from manufacturer codes "
        f"{record.product.manufacturer_id.codes}: "
        f"{len(record.timings.detailed_timings)} detailed, "
        f"{len(record.timings.standard_timings)} standard, "
        f"{len(record.timings.established_timings)} established timings, "
        f"{len(record.descriptors)} descriptors, {extensions} extensions"
    )
    return record


def decode(source, config: Optional[DecoderConfig] = None) -> DisplayRecord:
    """
    Decode an EDID base block.

    Args:
        source: A ByteSource, or anything create_byte_source() can wrap
            (bytes, a binary stream, an open pyserial port)
        config: Decoder configuration; defaults to default_config()

    Returns:
        DisplayRecord: The fully decoded block

    Raises:
        DecodeError: On the first structural problem; no partial result
        TypeError: If ``source`` cannot be used as a byte source
    """
    config = config or default_config()
    cursor = ByteCursor(create_byte_source(source), chunk_size=config.chunk_size)
    return decode_from_cursor(cursor, config)


def decode_bytes(data: bytes, config: Optional[DecoderConfig] = None) -> DisplayRecord:
    """Decode an EDID base block held in memory."""
    return decode(bytes(data), config)
