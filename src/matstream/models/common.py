from __future__ import annotations
from enum import Enum, IntEnum

class ByteOrder(str, Enum):
    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        return "<" if self is ByteOrder.LITTLE else ">"

class DataType(IntEnum):
    INT8 = 1
    UINT8 = 2
    INT16 = 3
    UINT16 = 4
    INT32 = 5
    UINT32 = 6
    SINGLE = 7
    DOUBLE = 9
    INT64 = 12
    UINT64 = 13
    MATRIX = 14
    COMPRESSED = 15
    UTF8 = 16
    UTF16 = 17
    UTF32 = 18

    @classmethod
    def is_valid(cls, code: int) -> bool:
        return code in cls._value2member_map_

    @property
    def itemsize(self) -> int:
        """Width in bytes of one value; 0 for container types."""
        return _ITEMSIZE.get(self, 0)

_ITEMSIZE = {
    DataType.INT8: 1, DataType.UINT8: 1,
    DataType.INT16: 2, DataType.UINT16: 2,
    DataType.INT32: 4, DataType.UINT32: 4,
    DataType.SINGLE: 4, DataType.DOUBLE: 8,
    DataType.INT64: 8, DataType.UINT64: 8,
    DataType.UTF8: 1, DataType.UTF16: 2, DataType.UTF32: 4,
}

class ArrayClass(IntEnum):
    CELL = 1
    STRUCT = 2
    OBJECT = 3
    CHAR = 4
    SPARSE = 5
    DOUBLE = 6
    SINGLE = 7
    INT8 = 8
    UINT8 = 9
    INT16 = 10
    UINT16 = 11
    INT32 = 12
    UINT32 = 13
    INT64 = 14
    UINT64 = 15
