from __future__ import annotations
from dataclasses import dataclass

from matstream.errors import InvalidType
from matstream.models.common import DataType
from .cursor import Cursor

TAG_SIZE = 8

@dataclass(frozen=True)
class ElementTag:
    data_type: DataType
    length: int
    offset: int  # stream offset of the tag itself

    @property
    def body_offset(self) -> int:
        return self.offset + TAG_SIZE

def is_short_form(type_word: int) -> bool:
    """Small data elements pack the byte count into the upper 16 bits of the type word."""
    return (type_word >> 16) != 0

def decode_tag(cur: Cursor) -> ElementTag:
    """
    8-byte tag: data type (4 bytes), body length (4 bytes).
    Returns the tag with its type validated.
    """
    start = cur.tell()
    code = cur.u32()
    if not DataType.is_valid(code):
        raise InvalidType(code, start)
    length = cur.u32()
    return ElementTag(DataType(code), length, start)
