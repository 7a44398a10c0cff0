"""Byte builders for synthetic MAT level-5 streams used across the tests."""
from __future__ import annotations
import math
import struct
import zlib

MI_INT8, MI_UINT8, MI_INT32, MI_UINT32, MI_DOUBLE = 1, 2, 5, 6, 9
MI_MATRIX, MI_COMPRESSED, MI_UTF8 = 14, 15, 16
MX_DOUBLE = 6


def _p(order: str) -> str:
    return "<" if order == "little" else ">"


def header(text: str = "MATLAB 5.0 MAT-file", *, order: str = "little",
           subsys: bytes = b"\x00" * 8, magic: bytes | None = None) -> bytes:
    raw = text.encode("ascii").ljust(116, b" ")
    raw += subsys
    raw += struct.pack(_p(order) + "H", 0x0100)
    if magic is None:
        magic = b"MI" if order == "little" else b"IM"
    raw += magic
    assert len(raw) == 128
    return raw


def tag(type_code: int, length: int, *, order: str = "little") -> bytes:
    return struct.pack(_p(order) + "II", type_code, length)


def sub(type_code: int, body: bytes, *, order: str = "little") -> bytes:
    """Sub-element padded to 8 bytes."""
    return tag(type_code, len(body), order=order) + body + b"\x00" * ((8 - len(body) % 8) % 8)


def matrix_body(name: str = "x", dims=(3, 1), *, values=None, flags: int = 0,
                array_class: int = MX_DOUBLE, imag=None, order: str = "little") -> bytes:
    p = _p(order)
    if values is None:
        values = [0.0] * math.prod(dims)
    out = sub(MI_UINT32, struct.pack(p + "II", flags | array_class, 0), order=order)
    out += sub(MI_INT32, struct.pack(p + "%di" % len(dims), *dims), order=order)
    out += sub(MI_INT8, name.encode("utf-8"), order=order)
    out += sub(MI_DOUBLE, struct.pack(p + "%dd" % len(values), *values), order=order)
    if imag is not None:
        out += sub(MI_DOUBLE, struct.pack(p + "%dd" % len(imag), *imag), order=order)
    return out


def matrix(name: str = "x", dims=(3, 1), *, order: str = "little", **kw) -> bytes:
    body = matrix_body(name, dims, order=order, **kw)
    return tag(MI_MATRIX, len(body), order=order) + body


def compressed(*elements: bytes, order: str = "little") -> bytes:
    body = zlib.compress(b"".join(elements))
    return tag(MI_COMPRESSED, len(body), order=order) + body


def chunked(data: bytes, size: int):
    return [data[i:i + size] for i in range(0, len(data), size)]
