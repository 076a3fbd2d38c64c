"""Sample EDID blocks and slot builders shared by the tests."""

HEADER = bytes([0x00, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x00])

# MacBook Pro 11,3 built-in panel
MACBOOK_PRO_EDID = bytes([
    0, 255, 255, 255, 255, 255, 255, 0,
    6, 16, 34, 160, 0, 0, 0, 0,
    4, 23, 1, 4, 165, 33, 21, 120,
    2, 111, 177, 167, 85, 76, 158, 37,
    12, 80, 84, 0, 0, 0, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 239, 131,
    64, 160, 176, 8, 52, 112, 48, 32,
    54, 0, 75, 207, 16, 0, 0, 26,
    0, 0, 0, 252, 0, 67, 111, 108,
    111, 114, 32, 76, 67, 68, 10, 32,
    32, 32, 0, 0, 0, 16, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 16,
    0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 222,
])

# Bytes 8-34: product, version, display parameters, chromaticity
MACBOOK_PRO_FIELDS = MACBOOK_PRO_EDID[8:35]
MACBOOK_PRO_SLOTS = [MACBOOK_PRO_EDID[54 + 18 * i : 72 + 18 * i] for i in range(4)]

UNUSED_STANDARD_TIMINGS = bytes([0x01]) * 16


def timing_slot(
    clock=33775,
    h_active=2880,
    h_blank=160,
    v_active=1800,
    v_blank=52,
    h_front=48,
    h_sync=32,
    v_front=3,
    v_sync=6,
    h_size=331,
    v_size=207,
    h_border=0,
    v_border=0,
    flags=0x1A,
) -> bytes:
    """Pack an 18-byte detailed timing slot; clock is in 10 kHz units."""
    return bytes([
        clock & 0xFF, clock >> 8,
        h_active & 0xFF, h_blank & 0xFF, ((h_active >> 8) << 4) | (h_blank >> 8),
        v_active & 0xFF, v_blank & 0xFF, ((v_active >> 8) << 4) | (v_blank >> 8),
        h_front & 0xFF, h_sync & 0xFF, ((v_front & 0x0F) << 4) | (v_sync & 0x0F),
        ((h_front >> 8) << 6) | ((h_sync >> 8) << 4) | ((v_front >> 4) << 2) | (v_sync >> 4),
        h_size & 0xFF, v_size & 0xFF, ((h_size >> 8) << 4) | (v_size >> 8),
        h_border, v_border, flags,
    ])


def descriptor_slot(tag: int, payload: bytes) -> bytes:
    assert len(payload) == 13
    return bytes([0x00, 0x00, 0x00, tag, 0x00]) + payload


def text_payload(text: str) -> bytes:
    raw = text.encode("latin-1")
    if len(raw) == 13:
        return raw
    raw += b"\n"
    return raw + b" " * (13 - len(raw))


PADDING_SLOT = descriptor_slot(0x10, bytes(13))
NAME_SLOT = descriptor_slot(0xFC, text_payload("Color LCD"))

# The MacBook block with slot 2 holding a manufacturer-defined descriptor
GOLDEN_EDID = (
    MACBOOK_PRO_EDID[:90]
    + descriptor_slot(0x00, bytes(11) + bytes([16, 0]))
    + MACBOOK_PRO_EDID[108:]
)


def build_block(
    slots=None,
    fields=MACBOOK_PRO_FIELDS,
    established=bytes(3),
    standard=UNUSED_STANDARD_TIMINGS,
    extensions=0,
) -> bytes:
    """Assemble a 128-byte base block from its parts."""
    if slots is None:
        slots = MACBOOK_PRO_SLOTS
    assert len(slots) == 4 and all(len(s) == 18 for s in slots)
    block = HEADER + fields + established + standard + b"".join(slots) + bytes([extensions])
    block += bytes([(256 - sum(block) % 256) % 256])
    assert len(block) == 128
    return block
