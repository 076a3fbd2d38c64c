"""
Decoded EDID value types.

All types are immutable. A DisplayRecord is only ever built from a fully
successful decode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from .protocol import AspectRatio, EstablishedTiming, SignalLevel


Pair = Tuple[int, int]
Coordinate = Tuple[float, float]


# Product


@dataclass(frozen=True)
class ManufacturerID:
    """Three 5-bit manufacturer codes and their mapped characters."""

    codes: Tuple[int, int, int]
    characters: str

    def __post_init__(self) -> None:
        if len(self.codes) != 3 or any(not 0 <= c <= 31 for c in self.codes):
            raise ValueError(f"Manufacturer codes must be three values 0-31, got {self.codes}")

    def __str__(self) -> str:
        return self.characters


@dataclass(frozen=True)
class ManufactureDate:
    week: int
    year: int


@dataclass(frozen=True)
class ProductInfo:
    manufacturer_id: ManufacturerID
    product_code: int
    serial_number: int
    manufacture_date: ManufactureDate


@dataclass(frozen=True)
class Version:
    version: int
    revision: int

    def __str__(self) -> str:
        return f"{self.version}.{self.revision}"


# Display parameters


@dataclass(frozen=True)
class SupportedSync:
    """Sync signals accepted by an analog input."""

    serrated_vsync: bool
    sync_on_green: bool
    composite_sync: bool
    separate_sync: bool


@dataclass(frozen=True)
class AnalogInput:
    signal_level: SignalLevel
    setup_expected: bool
    supported_sync: SupportedSync


@dataclass(frozen=True)
class DigitalInput:
    dfp_compatible: bool


VideoInput = Union[AnalogInput, DigitalInput]


@dataclass(frozen=True)
class ImageSize:
    """Image size in centimetres."""

    width: float
    height: float


class DisplayType(Enum):
    MONOCHROME = 0
    RGB_COLOR = 1
    OTHER_COLOR = 2
    UNDEFINED = 3


@dataclass(frozen=True)
class DPMSFeatures:
    standby_supported: bool
    suspend_supported: bool
    low_power_supported: bool
    display_type: DisplayType
    default_srgb: bool
    # Preferred timing mode is the first detailed timing
    preferred_timing_mode: bool
    default_gtf_supported: bool


@dataclass(frozen=True)
class DisplayParameters:
    input: VideoInput
    max_size: Optional[ImageSize]
    gamma: Optional[float]
    dpms: DPMSFeatures


# Color


@dataclass(frozen=True)
class WhitePoint:
    index: int
    x: float
    y: float
    gamma: float


@dataclass(frozen=True)
class ColorCharacteristics:
    """CIE 1931 chromaticity of the primaries and white point."""

    red: Coordinate
    green: Coordinate
    blue: Coordinate
    white: Coordinate
    white_points: Tuple[WhitePoint, ...] = ()


# Timings


@dataclass(frozen=True)
class StandardTiming:
    horizontal_resolution: int
    aspect_ratio: AspectRatio
    refresh_rate: int

    @property
    def vertical_resolution(self) -> int:
        num, den = self.aspect_ratio.value
        return self.horizontal_resolution * den // num


class StereoMode(Enum):
    NONE = "none"
    SEQUENTIAL_RIGHT_SYNC = "sequential_right_sync"
    SEQUENTIAL_LEFT_SYNC = "sequential_left_sync"
    INTERLEAVED_LINES_RIGHT_EVEN = "interleaved_lines_right_even"
    INTERLEAVED_LINES_LEFT_EVEN = "interleaved_lines_left_even"
    INTERLEAVED_4_WAY = "interleaved_4_way"
    SIDE_BY_SIDE = "side_by_side"


class SyncPolarity(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class AnalogSyncLine(Enum):
    RGB = "rgb"
    GREEN = "green"


@dataclass(frozen=True)
class DigitalSyncLine:
    polarity: SyncPolarity


SyncLine = Union[AnalogSyncLine, DigitalSyncLine]


@dataclass(frozen=True)
class CompositeSync:
    """Single sync signal."""

    serrated: bool
    line: SyncLine


@dataclass(frozen=True)
class SeparateSync:
    horizontal: SyncPolarity
    vertical: SyncPolarity


SyncType = Union[CompositeSync, SeparateSync]


@dataclass(frozen=True)
class DetailedTiming:
    """A fully specified timing. Pairs are (horizontal, vertical)."""

    pixel_clock: int  # Hz
    active: Pair
    front_porch: Pair
    sync_length: Pair
    back_porch: Pair
    image_size: ImageSize
    border: Pair
    interlaced: bool
    stereo: StereoMode
    sync_type: SyncType

    @property
    def blanking(self) -> Pair:
        return (
            self.front_porch[0] + self.sync_length[0] + self.back_porch[0],
            self.front_porch[1] + self.sync_length[1] + self.back_porch[1],
        )

    @property
    def total(self) -> Pair:
        h_blank, v_blank = self.blanking
        return (self.active[0] + h_blank, self.active[1] + v_blank)

    @property
    def refresh_rate(self) -> float:
        h_total, v_total = self.total
        if h_total == 0 or v_total == 0:
            return 0.0
        return self.pixel_clock / (h_total * v_total)


@dataclass(frozen=True)
class Timings:
    established_timings: Tuple[EstablishedTiming, ...] = ()
    standard_timings: Tuple[StandardTiming, ...] = ()
    # First entry, when present, is the preferred timing
    detailed_timings: Tuple[DetailedTiming, ...] = ()


# Descriptors


@dataclass(frozen=True)
class NoSecondaryTiming:
    pass


@dataclass(frozen=True)
class GTFSecondaryTiming:
    start_horizontal_freq: int  # Hz
    c: float
    m: float
    k: float
    j: float


@dataclass(frozen=True)
class OpaqueSecondaryTiming:
    tag: int
    data: bytes


SecondaryTiming = Union[NoSecondaryTiming, GTFSecondaryTiming, OpaqueSecondaryTiming]


@dataclass(frozen=True)
class SerialNumber:
    text: str


@dataclass(frozen=True)
class OtherString:
    text: str


@dataclass(frozen=True)
class MonitorName:
    text: str


@dataclass(frozen=True)
class RangeLimits:
    vertical_rate: Pair  # Hz
    horizontal_rate: Pair  # Hz
    pixel_clock: int  # Hz
    secondary_timing: SecondaryTiming = field(default_factory=NoSecondaryTiming)


@dataclass(frozen=True)
class ManufacturerDefined:
    tag: int
    data: bytes


@dataclass(frozen=True)
class Undefined:
    tag: int
    data: bytes


Descriptor = Union[
    SerialNumber, OtherString, MonitorName, RangeLimits, ManufacturerDefined, Undefined
]


# Root


@dataclass(frozen=True)
class DisplayRecord:
    """A decoded EDID base block."""

    product: ProductInfo
    version: Version
    display: DisplayParameters
    color: ColorCharacteristics
    timings: Timings
    descriptors: Tuple[Descriptor, ...]
    extensions: int

    @property
    def preferred_timing(self) -> Optional[DetailedTiming]:
        if not self.timings.detailed_timings:
            return None
        return self.timings.detailed_timings[0]

    @property
    def monitor_name(self) -> Optional[str]:
        for descriptor in self.descriptors:
            if isinstance(descriptor, MonitorName):
                return descriptor.text
        return None
