#!/usr/bin/env python3
"""List the raw element tags of a MAT file (inflating compressed elements one level)."""
import sys
import zlib
from pathlib import Path
from matstream.binary.codecs.cursor import Cursor
from matstream.binary.codecs.file_header import HEADER_SIZE, decode_file_header
from matstream.binary.codecs.tag import decode_tag
from matstream.models.common import DataType

def hexs(b, n=32): return b[:n].hex()

p = Path(sys.argv[1] if len(sys.argv) > 1 else "tools/sample.mat")
data = p.read_bytes()
hdr = decode_file_header(data)
print(f"{hdr.byte_order.value}-endian, text={hdr.text!r}")

cur = Cursor(data[HEADER_SIZE:], hdr.byte_order, base=HEADER_SIZE)
while cur.remaining() >= 8:
    t = decode_tag(cur)
    body = cur.take(min(t.length, cur.remaining()))
    print(f"@{t.offset:>10} {t.data_type.name:<10} len={t.length}")
    if t.data_type == DataType.COMPRESSED:
        raw = zlib.decompress(body)
        inner = Cursor(raw, hdr.byte_order)
        it = decode_tag(inner)
        print(f"    inflated={len(raw)} first={it.data_type.name} len={it.length} head={hexs(raw[8:])}")
