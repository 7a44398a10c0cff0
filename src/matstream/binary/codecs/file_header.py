from __future__ import annotations
import logging
import struct

from matstream.errors import MalformedHeader, TruncatedStream
from matstream.models.common import ByteOrder
from matstream.models.file_header import FileHeader

logger = logging.getLogger(__name__)

HEADER_SIZE = 128
TEXT_SIZE = 116

_MAGIC = {
    b"IM": ByteOrder.BIG,
    b"MI": ByteOrder.LITTLE,
}

def _read_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\x00").rstrip()

def _has_subsys_offset(raw: bytes) -> bool:
    # 0x00 and 0x20 (space) both mean "no subsystem data"
    return any(b not in (0x00, 0x20) for b in raw)

def decode_file_header(data: bytes | bytearray | memoryview) -> FileHeader:
    """
    Parse the 128-byte file header:
      0..115   descriptive text
      116..123 subsystem data offset
      124..125 version
      126..127 endian indicator, "IM" (big) or "MI" (little) as written
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedStream(0, HEADER_SIZE, len(data))
    raw = bytes(data[:HEADER_SIZE])

    magic = raw[126:128]
    byte_order = _MAGIC.get(magic)
    if byte_order is None:
        raise MalformedHeader(magic)

    prefix = byte_order.struct_prefix
    subsys = raw[TEXT_SIZE:124]
    present = _has_subsys_offset(subsys)

    hdr = FileHeader(
        text=_read_text(raw[:TEXT_SIZE]),
        has_subsys_offset=present,
        subsys_offset=struct.unpack(prefix + "Q", subsys)[0] if present else None,
        version=struct.unpack(prefix + "H", raw[124:126])[0],
        byte_order=byte_order,
    )
    logger.info(
        "Buffer has %ssubsys info. Uses %s-endian byte order. Text header: %s",
        "" if hdr.has_subsys_offset else "no ", hdr.byte_order.value, hdr.text,
    )
    return hdr
