from __future__ import annotations
import logging
import zlib

from matstream.errors import CorruptCompressedData, UnsupportedType
from matstream.models.common import DataType
from matstream.models.element import CompressedElement, Element
from .codecs.cursor import Cursor
from .codecs.matrix import decode_matrix
from .codecs.tag import ElementTag

logger = logging.getLogger(__name__)


def decode_element(tag: ElementTag, cur: Cursor, *, depth: int = 0) -> Element:
    """
    Decode the body that follows ``tag``. The body must be fully buffered.
    The cursor always advances by exactly ``tag.length`` bytes.
    """
    body = cur.take(tag.length)

    if tag.data_type == DataType.COMPRESSED:
        return _decode_compressed(tag, body, cur.byte_order, depth)
    if tag.data_type == DataType.MATRIX:
        return decode_matrix(Cursor(body, cur.byte_order, base=tag.body_offset),
                             offset=tag.offset, depth=depth)
    raise UnsupportedType(tag.data_type, tag.offset)


def _decode_compressed(tag: ElementTag, body: bytes, byte_order, depth: int) -> CompressedElement:
    from .decoder import TagDecoder

    try:
        raw = zlib.decompress(body)
    except zlib.error as e:
        raise CorruptCompressedData(tag.offset, str(e)) from e
    logger.debug("Inflated %d bytes at offset %d into %d bytes", tag.length, tag.offset, len(raw))

    # fresh context over the inflated bytes; runs to completion before the parent resumes
    child = TagDecoder(Cursor(raw, byte_order), depth=depth + 1, sealed=True)
    return CompressedElement(
        offset=tag.offset,
        depth=depth,
        compressed_length=tag.length,
        inflated_length=len(raw),
        elements=list(child.run()),
    )
