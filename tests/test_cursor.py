import struct

import pytest

from matstream.binary.codecs.cursor import Cursor
from matstream.errors import OutOfBounds
from matstream.models.common import ByteOrder

def test_little_endian_reads_advance():
    cur = Cursor(b"\x01\x02\x03\x04", ByteOrder.LITTLE)
    assert cur.u16() == 0x0201
    assert cur.tell() == 2
    assert cur.u16() == 0x0403
    assert cur.remaining() == 0

def test_big_endian_reads():
    data = struct.pack(">ifdQh", -2, 1.5, -0.25, 2**40, -3)
    cur = Cursor(data, ByteOrder.BIG)
    assert cur.s32() == -2
    assert cur.f32() == 1.5
    assert cur.f64() == -0.25
    assert cur.u64() == 2**40
    assert cur.s16() == -3

def test_read_past_end_raises_and_keeps_position():
    cur = Cursor(b"\x00\x00\x00", ByteOrder.LITTLE, base=128)
    with pytest.raises(OutOfBounds) as ei:
        cur.u32()
    assert (ei.value.offset, ei.value.requested, ei.value.available) == (128, 4, 3)
    assert cur.tell() == 128
    with pytest.raises(OutOfBounds):
        cur.skip(4)

def test_extend_releases_consumed_prefix():
    cur = Cursor(b"abcd", ByteOrder.LITTLE, base=128)
    assert cur.take(3) == b"abc"
    cur.extend(b"ef")
    assert cur.tell() == 131
    assert bytes(cur.buf) == b"def"
    assert cur.take(3) == b"def"
    assert cur.tell() == 134
