"""Tests for tagged display descriptor decoding."""

import pytest

from edid_decoder.byte_source import BytesSource
from edid_decoder.cursor import ByteCursor
from edid_decoder.descriptors import SlotAccumulator, read_descriptor
from edid_decoder.errors import MalformedDescriptorError
from edid_decoder.models import (
    GTFSecondaryTiming,
    ManufacturerDefined,
    MonitorName,
    NoSecondaryTiming,
    OpaqueSecondaryTiming,
    OtherString,
    RangeLimits,
    SerialNumber,
    Undefined,
    WhitePoint,
)

from samples import descriptor_slot, text_payload


def decode_slot(slot: bytes) -> SlotAccumulator:
    """Run a descriptor slot through the decoder, checking all 18 bytes were used."""
    cursor = ByteCursor(BytesSource(slot))
    assert cursor.next_u16_le() == 0
    accumulator = SlotAccumulator()
    read_descriptor(cursor, accumulator)
    assert cursor.offset == 18
    return accumulator


@pytest.mark.parametrize("tag", [0x00, 0x07, 0x0F])
def test_manufacturer_defined(tag):
    acc = decode_slot(descriptor_slot(tag, bytes(range(13))))
    assert acc.descriptors == [ManufacturerDefined(tag=tag, data=bytes(range(13)))]


@pytest.mark.parametrize("tag", [0x11, 0x80, 0xF9])
def test_undefined(tag):
    acc = decode_slot(descriptor_slot(tag, b"\xAA" * 13))
    assert acc.descriptors == [Undefined(tag=tag, data=b"\xAA" * 13)]


def test_padding_produces_nothing():
    acc = decode_slot(descriptor_slot(0x10, b"\x55" * 13))
    assert acc == SlotAccumulator()


@pytest.mark.parametrize(
    "tag,kind",
    [(0xFC, MonitorName), (0xFE, OtherString), (0xFF, SerialNumber)],
)
def test_text_descriptors(tag, kind):
    acc = decode_slot(descriptor_slot(tag, text_payload("Color LCD")))
    assert acc.descriptors == [kind("Color LCD")]


def test_text_fills_all_thirteen_bytes():
    acc = decode_slot(descriptor_slot(0xFC, b"ABCDEFGHIJKLM"))
    assert acc.descriptors == [MonitorName("ABCDEFGHIJKLM")]


def test_text_twelve_characters_then_terminator():
    acc = decode_slot(descriptor_slot(0xFF, b"ABCDEFGHIJKL\n"))
    assert acc.descriptors == [SerialNumber("ABCDEFGHIJKL")]


def test_empty_text():
    acc = decode_slot(descriptor_slot(0xFE, b"\n" + b" " * 12))
    assert acc.descriptors == [OtherString("")]


def test_text_bytes_map_to_latin1():
    acc = decode_slot(descriptor_slot(0xFC, b"Caf\xe9\n" + b" " * 8))
    assert acc.descriptors == [MonitorName("Café")]


@pytest.mark.parametrize("position", range(10, 13))
def test_text_bad_padding(position):
    payload = bytearray(text_payload("Color LCD"))
    payload[position] = 0x00
    with pytest.raises(MalformedDescriptorError):
        decode_slot(descriptor_slot(0xFC, bytes(payload)))


def test_extra_standard_timings():
    payload = bytes([
        0xD1, 0xC0, 0x81, 0x80, 0x01, 0x01,
        0x01, 0x01, 0x61, 0x40, 0x01, 0x01,
        0x0A,
    ])
    acc = decode_slot(descriptor_slot(0xFA, payload))
    assert acc.descriptors == []
    assert [t.horizontal_resolution for t in acc.standard_timings] == [1920, 1280, 1024]


def test_extra_standard_timings_need_terminator():
    payload = bytes([0x01] * 12 + [0x00])
    with pytest.raises(MalformedDescriptorError):
        decode_slot(descriptor_slot(0xFA, payload))


def test_two_white_points():
    payload = bytes([
        1, 0b0000_1001, 80, 84, 120,
        2, 0b0000_0000, 81, 85, 0xFF,
        0x0A, 0x20, 0x20,
    ])
    acc = decode_slot(descriptor_slot(0xFB, payload))
    assert acc.descriptors == []
    first, second = acc.white_points
    assert first == WhitePoint(index=1, x=322 / 1024, y=337 / 1024, gamma=pytest.approx(2.2))
    assert second == WhitePoint(index=2, x=324 / 1024, y=340 / 1024, gamma=pytest.approx(3.55))


def test_white_points_stop_at_index_zero():
    payload = bytes([0, 0, 80, 84, 120] + [0x7F] * 5 + [0x0A, 0x20, 0x20])
    acc = decode_slot(descriptor_slot(0xFB, payload))
    assert len(acc.white_points) == 1
    assert acc.white_points[0].index == 0


def test_unused_second_white_point():
    payload = bytes([1, 0, 80, 84, 120, 0, 0, 0, 0, 0, 0x0A, 0x20, 0x20])
    acc = decode_slot(descriptor_slot(0xFB, payload))
    assert [w.index for w in acc.white_points] == [1, 0]


@pytest.mark.parametrize(
    "tail",
    [bytes([0x0B, 0x20, 0x20]), bytes([0x0A, 0x20, 0x00]), bytes([0x0A, 0x00, 0x20])],
)
def test_white_points_framing(tail):
    payload = bytes([1, 0, 80, 84, 120, 2, 0, 81, 85, 120]) + tail
    with pytest.raises(MalformedDescriptorError):
        decode_slot(descriptor_slot(0xFB, payload))


def test_range_limits_without_secondary_timing():
    payload = bytes([56, 76, 30, 83, 17, 0x00, 0x0A] + [0x20] * 6)
    acc = decode_slot(descriptor_slot(0xFD, payload))
    assert acc.descriptors == [
        RangeLimits(
            vertical_rate=(56, 76),
            horizontal_rate=(30_000, 83_000),
            pixel_clock=170_000_000,
            secondary_timing=NoSecondaryTiming(),
        )
    ]


def test_range_limits_with_gtf():
    payload = bytes([50, 75, 30, 80, 15, 0x02, 0x00, 40, 80, 0x58, 0x02, 128, 40])
    (limits,) = decode_slot(descriptor_slot(0xFD, payload)).descriptors
    assert limits.pixel_clock == 150_000_000
    assert limits.secondary_timing == GTFSecondaryTiming(
        start_horizontal_freq=80_000, c=40.0, m=600.0, k=128.0, j=20.0
    )


def test_range_limits_with_opaque_secondary_timing():
    payload = bytes([50, 75, 30, 80, 15, 0x04, 1, 2, 3, 4, 5, 6, 7])
    (limits,) = decode_slot(descriptor_slot(0xFD, payload)).descriptors
    assert limits.secondary_timing == OpaqueSecondaryTiming(tag=0x04, data=bytes([1, 2, 3, 4, 5, 6, 7]))


@pytest.mark.parametrize(
    "tail",
    [
        bytes([0x00, 0x0B] + [0x20] * 6),
        bytes([0x00, 0x0A, 0x20, 0x20, 0x20, 0x21, 0x20, 0x20]),
        bytes([0x00, 0x0A, 0x20, 0x20, 0x20, 0x20, 0x20, 0x00]),
        bytes([0x02, 0x01, 40, 80, 0x58, 0x02, 128, 40]),
    ],
)
def test_range_limits_framing(tail):
    payload = bytes([50, 75, 30, 80, 15]) + tail
    with pytest.raises(MalformedDescriptorError):
        decode_slot(descriptor_slot(0xFD, payload))


if __name__ == "__main__":
    pytest.main([__file__])
