from __future__ import annotations
import logging
from typing import Iterator, List, Optional

from matstream.errors import DecodeError, TruncatedStream
from matstream.models.element import Element
from matstream.models.file_header import FileHeader
from matstream.models.options import DecoderOptions
from .codecs.cursor import Cursor
from .codecs.file_header import HEADER_SIZE, decode_file_header
from .decoder import DecodeState, TagDecoder

logger = logging.getLogger(__name__)


class StreamAssembler:
    """
    Chunk intake for one top-level MAT stream.

    Bytes are held until the 128-byte header is complete; after that every
    chunk extends the top-level context, which is stepped until it needs
    more input.

        asm = StreamAssembler()
        for chunk in source:
            for el in asm.feed(chunk):
                ...
        rest = asm.close()
    """

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options or DecoderOptions()
        self.header: Optional[FileHeader] = None
        self._head = bytearray()
        self._ctx: Optional[TagDecoder] = None
        self._closed = False
        self.error: Optional[DecodeError] = None

    @property
    def state(self) -> Optional[DecodeState]:
        return self._ctx.state if self._ctx is not None else None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, chunk: bytes | bytearray | memoryview) -> None:
        if self.error is not None:
            raise self.error
        if self._closed:
            raise RuntimeError("stream already closed")
        if not chunk:
            return
        if self._ctx is not None:
            self._ctx.extend(chunk)
            return

        self._head += chunk
        if len(self._head) < HEADER_SIZE:
            logger.debug("Buffering header: %d/%d bytes", len(self._head), HEADER_SIZE)
            return
        try:
            self.header = decode_file_header(self._head)
        except DecodeError as e:
            self.error = e
            raise
        rest = self._head[HEADER_SIZE:]
        self._head = bytearray()
        self._ctx = TagDecoder(Cursor(rest, self.header.byte_order, base=HEADER_SIZE))

    def elements(self) -> Iterator[Element]:
        """Decode everything the buffered bytes allow."""
        if self.error is not None:
            raise self.error
        if self._ctx is None:
            return
        while True:
            try:
                el = self._ctx.step()
            except DecodeError as e:
                self.error = e
                raise
            if el is None:
                return
            yield el

    def feed(self, chunk: bytes | bytearray | memoryview) -> List[Element]:
        self.push(chunk)
        return list(self.elements())

    def close(self) -> List[Element]:
        """End of stream: drain what is left and reject anything incomplete."""
        if self.error is not None:
            raise self.error
        if self._closed:
            return []
        self._closed = True
        if self._ctx is None:
            self.error = TruncatedStream(0, HEADER_SIZE, len(self._head))
            raise self.error
        self._ctx.seal()
        out = list(self.elements())
        logger.debug("Stream end at offset %d", self._ctx.cursor.tell())
        return out
