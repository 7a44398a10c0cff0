from __future__ import annotations
import struct

from matstream.errors import OutOfBounds
from matstream.models.common import ByteOrder

class Cursor:
    """Read position over a growable byte buffer with a fixed byte order.

    ``tell()`` reports absolute stream offsets: bytes consumed before the last
    ``extend()`` are dropped from the buffer and accounted for in ``base``.
    """
    __slots__ = ("buf", "pos", "base", "byte_order", "_prefix")

    def __init__(self, data: bytes | bytearray | memoryview, byte_order: ByteOrder, base: int = 0):
        self.buf = bytearray(data)
        self.pos = 0
        self.base = base
        self.byte_order = ByteOrder(byte_order)
        self._prefix = self.byte_order.struct_prefix

    def remaining(self) -> int: return len(self.buf) - self.pos
    def tell(self) -> int: return self.base + self.pos

    def _check(self, n: int) -> None:
        if n < 0 or self.pos + n > len(self.buf):
            raise OutOfBounds(self.tell(), n, self.remaining())

    def skip(self, n: int) -> None:
        self._check(n)
        self.pos += n

    def take(self, n: int) -> bytes:
        self._check(n)
        end = self.pos + n
        out = bytes(self.buf[self.pos:end])
        self.pos = end
        return out

    def peek(self, n: int) -> bytes:
        self._check(n)
        return bytes(self.buf[self.pos:self.pos + n])

    def extend(self, chunk: bytes | bytearray | memoryview) -> None:
        """Append freshly arrived bytes, releasing the consumed prefix."""
        if self.pos:
            del self.buf[:self.pos]
            self.base += self.pos
            self.pos = 0
        self.buf += chunk

    # fixed-width reads in the stream's byte order
    def _unpack(self, code: str, n: int):
        self._check(n)
        val = struct.unpack_from(self._prefix + code, self.buf, self.pos)[0]
        self.pos += n
        return val
    def u8(self) -> int:  return self._unpack("B", 1)
    def s8(self) -> int:  return self._unpack("b", 1)
    def u16(self) -> int: return self._unpack("H", 2)
    def s16(self) -> int: return self._unpack("h", 2)
    def u32(self) -> int: return self._unpack("I", 4)
    def s32(self) -> int: return self._unpack("i", 4)
    def u64(self) -> int: return self._unpack("Q", 8)
    def s64(self) -> int: return self._unpack("q", 8)
    def f32(self) -> float: return self._unpack("f", 4)
    def f64(self) -> float: return self._unpack("d", 8)
