"""
EDID base block wire constants.

Fixed layout of the 128-byte display identification block:
header(8) product(10) version(2) display(5) color(10) established(3)
standard(16) slots(4 x 18) extensions(1) checksum(1)
"""

from enum import Enum
from typing import NamedTuple


# Framing
BLOCK_SIZE = 128
HEADER_WORDS = (0xFFFFFF00, 0x00FFFFFF)  # 00 FF FF FF FF FF FF 00 read as two LE u32
SLOT_SIZE = 18
SLOT_COUNT = 4
DESCRIPTOR_PAYLOAD_SIZE = 13

# Field scaling
MANUFACTURE_YEAR_BASE = 1990
GAMMA_ABSENT = 0xFF
PIXEL_CLOCK_UNIT_HZ = 10_000
RANGE_HRATE_UNIT_HZ = 1_000
RANGE_PIXEL_CLOCK_UNIT_HZ = 10_000_000
GTF_START_FREQ_UNIT_HZ = 2_000
CHROMATICITY_SCALE = 1024.0

# Standard timing entries
STANDARD_TIMING_COUNT = 8
DESCRIPTOR_STANDARD_TIMING_COUNT = 6
STANDARD_TIMING_UNUSED = (0x01, 0x01)

# Descriptor tags
TAG_MANUFACTURER_MAX = 0x0F
TAG_PADDING = 0x10
TAG_UNDEFINED_MAX = 0xF9
TAG_STANDARD_TIMINGS = 0xFA
TAG_WHITE_POINTS = 0xFB
TAG_MONITOR_NAME = 0xFC
TAG_RANGE_LIMITS = 0xFD
TAG_OTHER_STRING = 0xFE
TAG_SERIAL_NUMBER = 0xFF

# Descriptor framing bytes
TEXT_TERMINATOR = 0x0A
TEXT_PADDING = 0x20
GUARD_WORD = 0x2020
WHITE_POINT_ENTRIES = 2
WHITE_POINT_ENTRY_SIZE = 5
SECONDARY_TIMING_NONE = 0x00
SECONDARY_TIMING_GTF = 0x02
SECONDARY_TIMING_DATA_SIZE = 7


class SignalLevel(NamedTuple):
    """Analog video white/black voltages, relative to blank."""

    high: float
    low: float


# Indexed by bits 6-5 of the video input byte
SIGNAL_LEVELS = (
    SignalLevel(high=0.700, low=0.300),
    SignalLevel(high=0.714, low=0.286),
    SignalLevel(high=1.000, low=0.400),
    SignalLevel(high=0.700, low=0.000),
)


class AspectRatio(Enum):
    """Standard timing aspect ratio, indexed by the top two bits of byte 1."""

    RATIO_16_10 = (16, 10)
    RATIO_4_3 = (4, 3)
    RATIO_5_4 = (5, 4)
    RATIO_16_9 = (16, 9)

    @property
    def ratio(self) -> float:
        num, den = self.value
        return num / den

    def __str__(self) -> str:
        return f"{self.value[0]}:{self.value[1]}"


ASPECT_RATIOS = (
    AspectRatio.RATIO_16_10,
    AspectRatio.RATIO_4_3,
    AspectRatio.RATIO_5_4,
    AspectRatio.RATIO_16_9,
)


class EstablishedTiming(Enum):
    """VESA established timings as (width, height, refresh Hz).

    Declaration order is the catalogue order used for decoded results.
    """

    H720V400F70 = (720, 400, 70)
    H720V400F88 = (720, 400, 88)
    H640V480F60 = (640, 480, 60)
    H640V480F67 = (640, 480, 67)
    H640V480F72 = (640, 480, 72)
    H640V480F75 = (640, 480, 75)
    H800V600F56 = (800, 600, 56)
    H800V600F60 = (800, 600, 60)
    H800V600F72 = (800, 600, 72)
    H800V600F75 = (800, 600, 75)
    H832V624F75 = (832, 624, 75)
    H1024V768F87 = (1024, 768, 87)
    H1024V768F60 = (1024, 768, 60)
    H1024V768F70 = (1024, 768, 70)
    H1024V768F75 = (1024, 768, 75)
    H1280V1024F75 = (1280, 1024, 75)
    H1152V870F75 = (1152, 870, 75)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @property
    def refresh_rate(self) -> int:
        return self.value[2]

    def __str__(self) -> str:
        return f"{self.width}x{self.height}@{self.refresh_rate}"


# Bit position within (LE u16 | third byte << 16) for each established timing
ESTABLISHED_TIMING_BITS = {
    0: EstablishedTiming.H800V600F60,
    1: EstablishedTiming.H800V600F56,
    2: EstablishedTiming.H640V480F75,
    3: EstablishedTiming.H640V480F72,
    4: EstablishedTiming.H640V480F67,
    5: EstablishedTiming.H640V480F60,
    6: EstablishedTiming.H720V400F88,
    7: EstablishedTiming.H720V400F70,
    8: EstablishedTiming.H1280V1024F75,
    9: EstablishedTiming.H1024V768F75,
    10: EstablishedTiming.H1024V768F70,
    11: EstablishedTiming.H1024V768F60,
    12: EstablishedTiming.H1024V768F87,
    13: EstablishedTiming.H832V624F75,
    14: EstablishedTiming.H800V600F75,
    15: EstablishedTiming.H800V600F72,
    23: EstablishedTiming.H1152V870F75,
}
