"""
Fixed-position field decoders for the EDID base block.

Covers bytes 8-34: product information, version, basic display parameters
and the chromaticity block. Each ``read_*`` function consumes exactly its
field's bytes from the cursor; the ``decode_*`` helpers are pure functions of
already-read values.
"""

from typing import Tuple

from .config import ManufacturerCharset
from .cursor import ByteCursor
from .models import (
    AnalogInput,
    ColorCharacteristics,
    Coordinate,
    DigitalInput,
    DisplayParameters,
    DisplayType,
    DPMSFeatures,
    ImageSize,
    ManufactureDate,
    ManufacturerID,
    ProductInfo,
    SupportedSync,
    Version,
    VideoInput,
)
from .protocol import CHROMATICITY_SCALE, GAMMA_ABSENT, MANUFACTURE_YEAR_BASE, SIGNAL_LEVELS


def _bit(value: int, n: int) -> bool:
    return bool(value & (1 << n))


# Product


def unpack_manufacturer_codes(word: int) -> Tuple[int, int, int]:
    """Split the manufacturer word into its three 5-bit codes, high to low."""
    return ((word >> 10) & 0x1F, (word >> 5) & 0x1F, word & 0x1F)


def manufacturer_characters(
    codes: Tuple[int, int, int], charset: ManufacturerCharset = ManufacturerCharset.RAW
) -> str:
    """Map 5-bit manufacturer codes to characters."""
    if charset is ManufacturerCharset.PNP:
        return "".join(chr(code + 64) for code in codes)
    return "".join(chr(code) for code in codes)


def read_manufacturer_id(
    cursor: ByteCursor, charset: ManufacturerCharset = ManufacturerCharset.RAW
) -> ManufacturerID:
    codes = unpack_manufacturer_codes(cursor.next_u16_le())
    return ManufacturerID(codes=codes, characters=manufacturer_characters(codes, charset))


def read_manufacture_date(cursor: ByteCursor) -> ManufactureDate:
    week = cursor.next_byte()
    year = cursor.next_byte() + MANUFACTURE_YEAR_BASE
    return ManufactureDate(week=week, year=year)


def read_product_info(
    cursor: ByteCursor, charset: ManufacturerCharset = ManufacturerCharset.RAW
) -> ProductInfo:
    manufacturer_id = read_manufacturer_id(cursor, charset)
    product_code = cursor.next_u16_le()
    serial_number = cursor.next_u32_le()
    manufacture_date = read_manufacture_date(cursor)
    return ProductInfo(
        manufacturer_id=manufacturer_id,
        product_code=product_code,
        serial_number=serial_number,
        manufacture_date=manufacture_date,
    )


def read_version(cursor: ByteCursor) -> Version:
    version = cursor.next_byte()
    revision = cursor.next_byte()
    return Version(version=version, revision=revision)


# Display parameters


def decode_video_input(value: int) -> VideoInput:
    """Bit 7 selects digital; otherwise bits 6-0 describe the analog input."""
    if _bit(value, 7):
        return DigitalInput(dfp_compatible=_bit(value, 0))

    return AnalogInput(
        signal_level=SIGNAL_LEVELS[(value >> 5) & 0b11],
        setup_expected=_bit(value, 4),
        supported_sync=SupportedSync(
            serrated_vsync=_bit(value, 3),
            sync_on_green=_bit(value, 2),
            composite_sync=_bit(value, 1),
            separate_sync=_bit(value, 0),
        ),
    )


def decode_max_size(width_cm: int, height_cm: int):
    if width_cm == 0 or height_cm == 0:
        return None
    return ImageSize(width=float(width_cm), height=float(height_cm))


def decode_gamma(value: int):
    if value == GAMMA_ABSENT:
        return None
    return (value + 100) / 100


def decode_dpms(value: int) -> DPMSFeatures:
    return DPMSFeatures(
        standby_supported=_bit(value, 7),
        suspend_supported=_bit(value, 6),
        low_power_supported=_bit(value, 5),
        display_type=DisplayType((value >> 3) & 0b11),
        default_srgb=_bit(value, 2),
        preferred_timing_mode=_bit(value, 1),
        default_gtf_supported=_bit(value, 0),
    )


def read_display_parameters(cursor: ByteCursor) -> DisplayParameters:
    video_input = decode_video_input(cursor.next_byte())
    max_width = cursor.next_byte()
    max_height = cursor.next_byte()
    gamma = decode_gamma(cursor.next_byte())
    dpms = decode_dpms(cursor.next_byte())
    return DisplayParameters(
        input=video_input,
        max_size=decode_max_size(max_width, max_height),
        gamma=gamma,
        dpms=dpms,
    )


# Color


def chromaticity(high: int, low_bits: int) -> float:
    """Assemble a 10-bit fixed-point coordinate from its high byte and low 2 bits."""
    return ((high << 2) | (low_bits & 0b11)) / CHROMATICITY_SCALE


def _coordinate(x_high: int, y_high: int, low: int, shift: int) -> Coordinate:
    # low holds x in bits (shift+3, shift+2) and y in bits (shift+1, shift)
    return (
        chromaticity(x_high, low >> (shift + 2)),
        chromaticity(y_high, low >> shift),
    )


def read_color_characteristics(cursor: ByteCursor) -> ColorCharacteristics:
    """Decode the four base chromaticity pairs; white points come later."""
    rg_low = cursor.next_byte()
    bw_low = cursor.next_byte()
    rx, ry, gx, gy, bx, by, wx, wy = cursor.next_bytes(8)

    return ColorCharacteristics(
        red=_coordinate(rx, ry, rg_low, 4),
        green=_coordinate(gx, gy, rg_low, 0),
        blue=_coordinate(bx, by, bw_low, 4),
        white=_coordinate(wx, wy, bw_low, 0),
    )
