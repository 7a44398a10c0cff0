from __future__ import annotations
import logging
from typing import Tuple

from matstream.errors import InvalidType, UnsupportedType
from matstream.models.common import ArrayClass, DataType
from matstream.models.element import MatrixElement
from .cursor import Cursor
from .tag import is_short_form

logger = logging.getLogger(__name__)

# Array flags word (first sub-element): class in the low byte, flags above it.
CLASS_MASK = 0x00FF
FLAG_COMPLEX = 0x0800
FLAG_GLOBAL = 0x0400
FLAG_LOGICAL = 0x0200

_NOT_WALKABLE = {ArrayClass.CELL, ArrayClass.STRUCT, ArrayClass.OBJECT, ArrayClass.SPARSE}

def _pad8(n: int) -> int:
    return (8 - n % 8) % 8

def _sub_tag(cur: Cursor) -> Tuple[int, int, int]:
    start = cur.tell()
    code = cur.u32()
    if is_short_form(code):
        raise UnsupportedType(code & 0xFFFF, start, "short-form sub-element")
    return code, cur.u32(), start

def _skip_padding(cur: Cursor, length: int) -> None:
    # the last sub-element of a body may end without its padding
    cur.skip(min(_pad8(length), cur.remaining()))

def _skip_numeric(cur: Cursor) -> Tuple[DataType, int]:
    code, length, start = _sub_tag(cur)
    if not DataType.is_valid(code):
        raise InvalidType(code, start)
    cur.skip(length)  # payload is not materialised
    _skip_padding(cur, length)
    return DataType(code), length

def decode_matrix(cur: Cursor, *, offset: int, depth: int = 0) -> MatrixElement:
    """
    Structural walk over a MATRIX body:
      array flags, dimensions, name, then the real (and imaginary) numeric parts.
    Numeric payload bytes are skipped.
    """
    # 1) array flags: tag, flags word, reserved word
    _sub_tag(cur)
    flags = cur.u32()
    cur.skip(4)
    try:
        array_class = ArrayClass(flags & CLASS_MASK)
    except ValueError:
        raise UnsupportedType(DataType.MATRIX, offset, f"array class {flags & CLASS_MASK}") from None
    if array_class in _NOT_WALKABLE:
        raise UnsupportedType(DataType.MATRIX, offset, f"{array_class.name.lower()} arrays")

    # 2) dimensions
    _, length, _ = _sub_tag(cur)
    dims = [cur.s32() for _ in range(length // 4)]
    cur.skip(length % 4)
    _skip_padding(cur, length)

    # 3) name
    _, length, _ = _sub_tag(cur)
    name = cur.take(length).decode("utf-8", errors="replace")
    _skip_padding(cur, length)

    # 4) real part, then imaginary part for complex arrays
    elem_type, real = _skip_numeric(cur)
    payload = real
    if flags & FLAG_COMPLEX:
        _, imag = _skip_numeric(cur)
        payload += imag

    itemsize = elem_type.itemsize
    mat = MatrixElement(
        offset=offset,
        depth=depth,
        is_complex=bool(flags & FLAG_COMPLEX),
        is_global=bool(flags & FLAG_GLOBAL),
        is_logical=bool(flags & FLAG_LOGICAL),
        array_class=array_class,
        dimensions=dims,
        name=name,
        element_type=elem_type,
        element_count=(real // itemsize) if itemsize else 0,
        payload_bytes=payload,
    )
    logger.info(
        "Matrix %r: %s %s, dims=%s, %d x %s",
        mat.name, "complex" if mat.is_complex else "real", array_class.name.lower(),
        mat.dimensions, mat.element_count, elem_type.name,
    )
    return mat
