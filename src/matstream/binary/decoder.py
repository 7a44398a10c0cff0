from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from matstream.errors import DecodeError, TruncatedStream
from matstream.models.element import Element
from .codecs.cursor import Cursor
from .codecs.tag import TAG_SIZE, ElementTag, decode_tag
from .dispatcher import decode_element

logger = logging.getLogger(__name__)


class DecodeState(Enum):
    AWAITING_TAG = "awaiting_tag"
    AWAITING_BODY = "awaiting_body"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PendingBody:
    tag: ElementTag
    needed: int  # bytes still missing from the body


class TagDecoder:
    """
    Per-context tag/body state machine over one cursor.

    ``step()`` returns the next decoded element, or None when the context is
    suspended waiting for bytes (or is done). A sealed context will not
    receive more bytes, so a suspension there is a truncated stream.
    Any decode error moves the context to FAILED; later calls re-raise it.
    """

    def __init__(self, cursor: Cursor, *, depth: int = 0, sealed: bool = False):
        self.cursor = cursor
        self.depth = depth
        self.sealed = sealed
        self.state = DecodeState.AWAITING_TAG
        self.pending: Optional[PendingBody] = None
        self.error: Optional[DecodeError] = None
        self._settle()

    @property
    def done(self) -> bool:
        return self.state is DecodeState.DONE

    def extend(self, chunk: bytes | bytearray | memoryview) -> None:
        if self.error is not None:
            raise self.error
        if self.sealed:
            raise RuntimeError("context is sealed; no more bytes accepted")
        self.cursor.extend(chunk)
        if self.pending is not None:
            self.pending.needed = max(0, self.pending.tag.length - self.cursor.remaining())

    def seal(self) -> None:
        self.sealed = True
        self._settle()

    def step(self) -> Optional[Element]:
        if self.error is not None:
            raise self.error
        if self.state is DecodeState.DONE:
            return None
        try:
            return self._step()
        except DecodeError as e:
            # fatal for this context: every later call re-raises
            self.state = DecodeState.FAILED
            self.error = e
            self.pending = None
            raise

    def _step(self) -> Optional[Element]:
        cur = self.cursor

        if self.state is DecodeState.AWAITING_TAG:
            if cur.remaining() < TAG_SIZE:
                return self._suspend(cur.tell(), TAG_SIZE)
            tag = decode_tag(cur)
            logger.debug("Tag %s len=%d at offset %d (depth %d)",
                         tag.data_type.name, tag.length, tag.offset, self.depth)
            self.pending = PendingBody(tag, max(0, tag.length - cur.remaining()))
            self.state = DecodeState.AWAITING_BODY

        # AWAITING_BODY
        if self.pending.needed:
            return self._suspend(self.pending.tag.body_offset, self.pending.tag.length)

        tag = self.pending.tag
        element = decode_element(tag, cur, depth=self.depth)
        self.pending = None
        self.state = DecodeState.AWAITING_TAG
        self._settle()
        return element

    def run(self) -> Iterator[Element]:
        """Drive a sealed context to DONE."""
        if not self.sealed:
            raise RuntimeError("run() requires a sealed context")
        while not self.done:
            yield self.step()

    def _settle(self) -> None:
        if self.error is None and self.sealed and self.pending is None and self.cursor.remaining() == 0:
            self.state = DecodeState.DONE

    def _suspend(self, offset: int, needed: int) -> None:
        if self.sealed:
            available = self.cursor.tell() + self.cursor.remaining() - offset
            raise TruncatedStream(offset, needed, available)
        logger.debug("Suspended at offset %d in state %s", offset, self.state.name)
        return None
