from __future__ import annotations

import pytest

from palib.reader import ByteCursor, CursorExhausted
from payloads import count


@pytest.mark.parametrize(
    "value,size",
    [(0, 1), (0x3F, 1), (0x40, 1), (127, 1), (128, 2), (16383, 2), (16384, 4), (2**30 - 1, 4)],
)
def test_read_count_forms(value, size):
    encoded = count(value)
    assert len(encoded) == size
    reader = ByteCursor(encoded)
    assert reader.read_count() == value
    assert reader.remaining == 0
    assert not reader.exhausted


def test_read_count_strips_tag_bits():
    assert ByteCursor(b"\x81\x02").read_count() == 0x102
    assert ByteCursor(b"\xc1\x02\x03\x04").read_count() == 0x01020304


def test_read_count_truncated():
    reader = ByteCursor(b"\xc0\x01")
    with pytest.raises(CursorExhausted):
        reader.read_count()
    assert reader.exhausted
    # the lead byte stays consumed
    assert reader.position == 1


def test_read_byte_empty_buffer():
    reader = ByteCursor(b"")
    with pytest.raises(CursorExhausted):
        reader.read_byte()
    assert reader.exhausted
    assert reader.position == 0


def test_read_block():
    reader = ByteCursor(b"\x03XYZ\x01")
    assert reader.read_block() == b"XYZ"
    assert reader.position == 4
    assert reader.remaining == 1


def test_read_block_longer_than_buffer_keeps_count_prefix():
    reader = ByteCursor(b"\x05AB")
    with pytest.raises(CursorExhausted):
        reader.read_block()
    # the count byte was consumed, the payload was not
    assert reader.position == 1


def test_read_block_expected_size():
    assert ByteCursor(b"\x02AB").read_block(expected_size=2) == b"AB"
    reader = ByteCursor(b"\x02AB")
    with pytest.raises(CursorExhausted):
        reader.read_block(expected_size=3)
    assert reader.exhausted


def test_exhausted_is_sticky():
    reader = ByteCursor(b"\x01")
    assert reader.can_advance(2) is False
    assert reader.exhausted
    # enough data for one byte, but the cursor already failed
    assert reader.can_advance(1) is False
    with pytest.raises(CursorExhausted):
        reader.read_byte()
    assert reader.position == 0


def test_can_advance_to_end():
    reader = ByteCursor(b"ab")
    assert reader.can_advance(2)
    assert reader.can_advance(0)
    assert not reader.exhausted


def test_fixed_width_reads():
    reader = ByteCursor(bytes(range(1, 15)) + b"\x02hi")
    assert reader.read_u16() == 0x0102
    assert reader.read_u32() == 0x03040506
    assert reader.read_u64() == 0x0708090A0B0C0D0E
    assert reader.read_string() == "hi"
    assert reader.remaining == 0


def test_skip_and_read_memory():
    reader = ByteCursor(b"abcdef")
    reader.skip(2)
    assert reader.read_memory(3) == b"cde"
    with pytest.raises(CursorExhausted):
        reader.skip(2)
