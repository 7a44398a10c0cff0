from __future__ import annotations
from typing import Optional


class DecodeError(ValueError):
    """Base class for every failure raised while decoding a MAT stream."""


class MalformedHeader(DecodeError):
    def __init__(self, magic: bytes):
        self.magic = bytes(magic)
        super().__init__(f"bad byte-order indicator: {self.magic.hex(' ')}")


class InvalidType(DecodeError):
    def __init__(self, type_code: int, offset: int):
        self.type_code = type_code
        self.offset = offset
        super().__init__(f"invalid element type {type_code} at offset {offset}")


class UnsupportedType(DecodeError):
    def __init__(self, type_code: int, offset: int, detail: Optional[str] = None):
        self.type_code = type_code
        self.offset = offset
        self.detail = detail
        msg = f"support for element type {type_code} at offset {offset} is not implemented"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class TruncatedStream(DecodeError):
    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(f"stream ended at offset {offset}: need {needed} bytes, have {available}")


class OutOfBounds(DecodeError):
    def __init__(self, offset: int, requested: int, available: int):
        self.offset = offset
        self.requested = requested
        self.available = available
        super().__init__(f"underrun: need {requested} at {offset}, {available} left")


class CorruptCompressedData(DecodeError):
    def __init__(self, offset: int, reason: str):
        self.offset = offset
        self.reason = reason
        super().__init__(f"compressed element at offset {offset} failed to inflate: {reason}")
