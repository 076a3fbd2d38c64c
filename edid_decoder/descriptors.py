"""
Tagged display descriptor decoding.

A slot whose pixel clock is zero holds a descriptor instead of a timing:

    [0x00 0x00] [reserved] [tag] [reserved] [13 payload bytes]

Tags dispatch as follows:
- 0x00-0x0F: manufacturer defined, kept verbatim
- 0x10:      padding, produces nothing
- 0x11-0xF9: undefined, kept verbatim
- 0xFA:      six more standard timings
- 0xFB:      up to two extra white points
- 0xFC/0xFE/0xFF: monitor name / other string / serial number text
- 0xFD:      range limits with optional secondary timing formula

Standard timings and white points found here are not descriptors; they are
collected on the SlotAccumulator and merged into the base aggregates once the
whole block has been read.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from . import protocol as p
from .cursor import ByteCursor
from .errors import MalformedDescriptorError
from .fields import chromaticity
from .models import (
    Descriptor,
    DetailedTiming,
    GTFSecondaryTiming,
    ManufacturerDefined,
    MonitorName,
    NoSecondaryTiming,
    OpaqueSecondaryTiming,
    OtherString,
    RangeLimits,
    SecondaryTiming,
    SerialNumber,
    StandardTiming,
    Undefined,
    WhitePoint,
)
from .timings import read_standard_timings

logger = logging.getLogger(__name__)


TEXT_DESCRIPTORS = {
    p.TAG_MONITOR_NAME: MonitorName,
    p.TAG_OTHER_STRING: OtherString,
    p.TAG_SERIAL_NUMBER: SerialNumber,
}


@dataclass
class SlotAccumulator:
    """Everything the four 18-byte slots contribute, in encounter order."""

    detailed_timings: List[DetailedTiming] = field(default_factory=list)
    standard_timings: List[StandardTiming] = field(default_factory=list)
    white_points: List[WhitePoint] = field(default_factory=list)
    descriptors: List[Descriptor] = field(default_factory=list)


def read_text(cursor: ByteCursor) -> str:
    """Read up to 13 characters ending at 0x0A, then check the 0x20 padding."""
    chars = []
    byte = cursor.next_byte()
    while byte != p.TEXT_TERMINATOR:
        chars.append(chr(byte))
        if len(chars) == p.DESCRIPTOR_PAYLOAD_SIZE:
            break
        byte = cursor.next_byte()

    for _ in range(p.DESCRIPTOR_PAYLOAD_SIZE - len(chars) - 1):
        cursor.expect_byte(p.TEXT_PADDING, MalformedDescriptorError, "text padding")
    return "".join(chars)


def read_white_points(cursor: ByteCursor) -> List[WhitePoint]:
    white_points = []
    for entry in range(p.WHITE_POINT_ENTRIES):
        index = cursor.next_byte()
        low = cursor.next_byte()
        x_high = cursor.next_byte()
        y_high = cursor.next_byte()
        gamma = cursor.next_byte()
        white_points.append(
            WhitePoint(
                index=index,
                x=chromaticity(x_high, low >> 2),
                y=chromaticity(y_high, low),
                gamma=(gamma + 100) / 100,
            )
        )
        if index == 0:
            # Skip the unused entries that follow
            remaining = p.WHITE_POINT_ENTRIES - entry - 1
            cursor.next_bytes(p.WHITE_POINT_ENTRY_SIZE * remaining)
            break

    cursor.expect_byte(p.TEXT_TERMINATOR, MalformedDescriptorError, "after white points")
    cursor.expect_u16_le(p.GUARD_WORD, MalformedDescriptorError, "white point guard")
    return white_points


def read_secondary_timing(cursor: ByteCursor) -> SecondaryTiming:
    selector = cursor.next_byte()

    if selector == p.SECONDARY_TIMING_NONE:
        cursor.expect_byte(p.TEXT_TERMINATOR, MalformedDescriptorError, "after range limits")
        for _ in range(3):
            cursor.expect_u16_le(p.GUARD_WORD, MalformedDescriptorError, "range limits padding")
        return NoSecondaryTiming()

    if selector == p.SECONDARY_TIMING_GTF:
        cursor.expect_byte(0x00, MalformedDescriptorError, "before GTF parameters")
        start_freq = cursor.next_byte() * p.GTF_START_FREQ_UNIT_HZ
        c = cursor.next_byte() / 2
        m = float(cursor.next_u16_le())
        k = float(cursor.next_byte())
        j = cursor.next_byte() / 2
        return GTFSecondaryTiming(start_horizontal_freq=start_freq, c=c, m=m, k=k, j=j)

    return OpaqueSecondaryTiming(
        tag=selector, data=cursor.next_bytes(p.SECONDARY_TIMING_DATA_SIZE)
    )


def read_range_limits(cursor: ByteCursor) -> RangeLimits:
    min_vrate = cursor.next_byte()
    max_vrate = cursor.next_byte()
    min_hrate = cursor.next_byte() * p.RANGE_HRATE_UNIT_HZ
    max_hrate = cursor.next_byte() * p.RANGE_HRATE_UNIT_HZ
    pixel_clock = cursor.next_byte() * p.RANGE_PIXEL_CLOCK_UNIT_HZ
    return RangeLimits(
        vertical_rate=(min_vrate, max_vrate),
        horizontal_rate=(min_hrate, max_hrate),
        pixel_clock=pixel_clock,
        secondary_timing=read_secondary_timing(cursor),
    )


def read_descriptor_payload(
    cursor: ByteCursor, tag: int, accumulator: SlotAccumulator
) -> Optional[Descriptor]:
    """
    Consume the 13 payload bytes for ``tag``.

    Returns the descriptor entry, or None when the tag contributes only to the
    accumulator (standard timings, white points) or nothing at all (padding).
    """
    if tag <= p.TAG_MANUFACTURER_MAX:
        return ManufacturerDefined(tag=tag, data=cursor.next_bytes(p.DESCRIPTOR_PAYLOAD_SIZE))

    if tag == p.TAG_PADDING:
        cursor.next_bytes(p.DESCRIPTOR_PAYLOAD_SIZE)
        return None

    if tag <= p.TAG_UNDEFINED_MAX:
        return Undefined(tag=tag, data=cursor.next_bytes(p.DESCRIPTOR_PAYLOAD_SIZE))

    if tag == p.TAG_STANDARD_TIMINGS:
        timings = read_standard_timings(cursor, p.DESCRIPTOR_STANDARD_TIMING_COUNT)
        cursor.expect_byte(p.TEXT_TERMINATOR, MalformedDescriptorError, "after standard timings")
        accumulator.standard_timings.extend(timings)
        return None

    if tag == p.TAG_WHITE_POINTS:
        accumulator.white_points.extend(read_white_points(cursor))
        return None

    if tag == p.TAG_RANGE_LIMITS:
        return read_range_limits(cursor)

    return TEXT_DESCRIPTORS[tag](read_text(cursor))


def read_descriptor(cursor: ByteCursor, accumulator: SlotAccumulator) -> None:
    """Decode a descriptor slot after its zero pixel clock has been read."""
    cursor.next_byte()  # reserved
    tag = cursor.next_byte()
    cursor.next_byte()  # reserved

    logger.debug(f"Descriptor tag 0x{tag:02X} at byte {cursor.offset - 2}")
    descriptor = read_descriptor_payload(cursor, tag, accumulator)
    if descriptor is not None:
        accumulator.descriptors.append(descriptor)
