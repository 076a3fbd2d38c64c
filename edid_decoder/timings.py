"""
Timing table decoders.

- Established timings: 17-bit VESA bitmask (bytes 35-37)
- Standard timings: 2-byte entries, 8 in the base block and 6 per 0xFA descriptor
- Detailed timings: the 18-byte slot geometry record
"""

import logging
from typing import List, Tuple

from .cursor import ByteCursor
from .errors import MalformedTimingGeometryError
from .models import (
    AnalogSyncLine,
    CompositeSync,
    DetailedTiming,
    DigitalSyncLine,
    ImageSize,
    SeparateSync,
    StandardTiming,
    StereoMode,
    SyncPolarity,
    SyncType,
)
from .protocol import (
    ASPECT_RATIOS,
    ESTABLISHED_TIMING_BITS,
    STANDARD_TIMING_UNUSED,
    EstablishedTiming,
)

logger = logging.getLogger(__name__)


# Keyed by (bit6 << 2 | bit5 << 1 | bit0) of the flags byte
STEREO_MODES = {
    0b000: StereoMode.NONE,
    0b001: StereoMode.NONE,
    0b010: StereoMode.SEQUENTIAL_RIGHT_SYNC,
    0b011: StereoMode.INTERLEAVED_LINES_RIGHT_EVEN,
    0b100: StereoMode.SEQUENTIAL_LEFT_SYNC,
    0b101: StereoMode.INTERLEAVED_LINES_LEFT_EVEN,
    0b110: StereoMode.INTERLEAVED_4_WAY,
    0b111: StereoMode.SIDE_BY_SIDE,
}


def _polarity(value: int, bit: int) -> SyncPolarity:
    return SyncPolarity.POSITIVE if value & (1 << bit) else SyncPolarity.NEGATIVE


# Established timings


def decode_established_timings(mask: int) -> Tuple[EstablishedTiming, ...]:
    """Return the timings whose bits are set, in catalogue order."""
    found = {timing for bit, timing in ESTABLISHED_TIMING_BITS.items() if mask & (1 << bit)}
    return tuple(timing for timing in EstablishedTiming if timing in found)


def read_established_timings(cursor: ByteCursor) -> Tuple[EstablishedTiming, ...]:
    mask = cursor.next_u16_le()
    mask |= cursor.next_byte() << 16
    return decode_established_timings(mask)


# Standard timings


def decode_standard_timing(low: int, high: int):
    """Decode one 2-byte entry, or None for the (0x01, 0x01) unused marker."""
    if (low, high) == STANDARD_TIMING_UNUSED:
        return None
    return StandardTiming(
        horizontal_resolution=(low + 31) * 8,
        aspect_ratio=ASPECT_RATIOS[high >> 6],
        refresh_rate=(high & 0x3F) + 60,
    )


def read_standard_timings(cursor: ByteCursor, count: int) -> List[StandardTiming]:
    timings = []
    for _ in range(count):
        low = cursor.next_byte()
        high = cursor.next_byte()
        timing = decode_standard_timing(low, high)
        if timing is not None:
            timings.append(timing)
    return timings


# Detailed timings


def decode_sync_type(flags: int) -> SyncType:
    """Decode bits 4-1 of the detailed timing flags byte."""
    kind = (flags >> 3) & 0b11
    serrated = bool(flags & (1 << 2))

    if kind == 0b11:
        return SeparateSync(horizontal=_polarity(flags, 1), vertical=_polarity(flags, 2))
    if kind == 0b10:
        return CompositeSync(serrated=serrated, line=DigitalSyncLine(_polarity(flags, 1)))
    line = AnalogSyncLine.RGB if flags & (1 << 1) else AnalogSyncLine.GREEN
    return CompositeSync(serrated=serrated, line=line)


def decode_stereo_mode(flags: int) -> StereoMode:
    selector = ((flags >> 4) & 0b110) | (flags & 0b1)
    return STEREO_MODES[selector]


def _split12(low: int, shared: int) -> Tuple[int, int]:
    # shared: high nibble -> bits 8-11 of first, low nibble -> bits 8-11 of second
    return low | ((shared >> 4) << 8), (shared & 0x0F) << 8


def _back_porch(axis: str, blanking: int, sync_width: int, front_porch: int, offset: int) -> int:
    back_porch = blanking - sync_width - front_porch
    if back_porch < 0:
        raise MalformedTimingGeometryError(
            f"{axis} blanking {blanking} is smaller than sync width {sync_width} "
            f"+ front porch {front_porch}",
            offset,
        )
    return back_porch


def read_detailed_timing(cursor: ByteCursor, pixel_clock: int) -> DetailedTiming:
    """
    Decode the remaining 16 bytes of a timing slot.

    The caller has already consumed the 2-byte pixel clock and checked that it
    is non-zero.
    """
    start = cursor.offset

    h_active_low = cursor.next_byte()
    h_blank_low = cursor.next_byte()
    h_high = cursor.next_byte()
    h_active, h_blank_high = _split12(h_active_low, h_high)
    h_blanking = h_blank_low | h_blank_high

    v_active_low = cursor.next_byte()
    v_blank_low = cursor.next_byte()
    v_high = cursor.next_byte()
    v_active, v_blank_high = _split12(v_active_low, v_high)
    v_blanking = v_blank_low | v_blank_high

    h_offset_low = cursor.next_byte()
    h_width_low = cursor.next_byte()
    v_sync_low = cursor.next_byte()
    sync_high = cursor.next_byte()

    h_front_porch = h_offset_low | (((sync_high >> 6) & 0b11) << 8)
    h_sync_width = h_width_low | (((sync_high >> 4) & 0b11) << 8)
    v_front_porch = (v_sync_low >> 4) | (((sync_high >> 2) & 0b11) << 4)
    v_sync_width = (v_sync_low & 0x0F) | ((sync_high & 0b11) << 4)

    h_back_porch = _back_porch("Horizontal", h_blanking, h_sync_width, h_front_porch, start)
    v_back_porch = _back_porch("Vertical", v_blanking, v_sync_width, v_front_porch, start)

    h_size_low = cursor.next_byte()
    v_size_low = cursor.next_byte()
    size_high = cursor.next_byte()
    h_size, v_size_high = _split12(h_size_low, size_high)
    v_size = v_size_low | v_size_high

    h_border = cursor.next_byte()
    v_border = cursor.next_byte()

    flags = cursor.next_byte()

    timing = DetailedTiming(
        pixel_clock=pixel_clock,
        active=(h_active, v_active),
        front_porch=(h_front_porch, v_front_porch),
        sync_length=(h_sync_width, v_sync_width),
        back_porch=(h_back_porch, v_back_porch),
        image_size=ImageSize(width=h_size / 10, height=v_size / 10),
        border=(h_border, v_border),
        interlaced=bool(flags & (1 << 7)),
        stereo=decode_stereo_mode(flags),
        sync_type=decode_sync_type(flags),
    )
    logger.debug(
        f"Detailed timing {h_active}x{v_active} @ {pixel_clock} Hz (slot data at byte {start})"
    )
    return timing
