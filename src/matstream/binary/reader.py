from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional, Tuple, Union

from .assembler import StreamAssembler

from matstream.models.element import CompressedElement, Element, MatrixElement
from matstream.models.file import MatFile
from matstream.models.options import DecoderOptions

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]
ChunkSource = Union[Iterable[bytes], AsyncIterable[bytes]]


# -----------------------------
# Byte sources
# -----------------------------

def iter_chunks(inp: BytesLike, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
    """Chunk a path (read incrementally) or an in-memory buffer."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")
    if isinstance(inp, (bytes, bytearray, memoryview)):
        view = memoryview(inp)
        for i in range(0, len(view), chunk_size):
            yield view[i:i + chunk_size].tobytes()
        return
    with open(Path(str(inp)), "rb") as fh:
        while True:
            chunk = fh.read(chunk_size)
            if not chunk:
                return
            yield chunk


# -----------------------------
# Streaming iterators
# -----------------------------

def iter_elements(
    source: Iterable[bytes],
    options: Optional[DecoderOptions] = None,
    *,
    assembler: Optional[StreamAssembler] = None,
) -> Iterator[Element]:
    """
    Decode top-level elements from any iterable of chunks, in file order.
    Pass ``assembler`` to inspect the header afterwards.
    """
    asm = assembler or StreamAssembler(options)
    for chunk in source:
        asm.push(chunk)
        yield from asm.elements()
    logger.debug("End of stream reached; draining")
    yield from asm.close()


async def aiter_elements(
    source: ChunkSource,
    options: Optional[DecoderOptions] = None,
    *,
    assembler: Optional[StreamAssembler] = None,
) -> AsyncIterator[Element]:
    """
    Async variant of iter_elements. Hands control back to the event loop
    after every ``options.elements_per_yield`` decoded elements.
    """
    asm = assembler or StreamAssembler(options)
    budget = asm.options.elements_per_yield
    decoded = 0

    async def _chunks():
        if hasattr(source, "__aiter__"):
            async for chunk in source:  # type: ignore[union-attr]
                yield chunk
        else:
            for chunk in source:  # type: ignore[union-attr]
                yield chunk

    async for chunk in _chunks():
        asm.push(chunk)
        for el in asm.elements():
            yield el
            decoded += 1
            if decoded % budget == 0:
                await asyncio.sleep(0)
    for el in asm.close():
        yield el
        decoded += 1
        if decoded % budget == 0:
            await asyncio.sleep(0)


# -----------------------------
# Full parse
# -----------------------------

def parse_file(data: BytesLike, options: Optional[DecoderOptions] = None) -> MatFile:
    """Decode a whole file (path or bytes) into a MatFile."""
    opts = options or DecoderOptions()
    asm = StreamAssembler(opts)
    elements = list(iter_elements(iter_chunks(data, opts.chunk_size), assembler=asm))
    logger.info("Decoded %d top-level elements", len(elements))
    return MatFile(header=asm.header, elements=elements)


def summarize_file(data: BytesLike, options: Optional[DecoderOptions] = None) -> Tuple[int, int]:
    """
    Streaming summary: returns (matrices, compressed), nested elements included.
    """
    opts = options or DecoderOptions()
    matrices = 0
    compressed = 0
    for top in iter_elements(iter_chunks(data, opts.chunk_size), opts):
        stack = [top]
        while stack:
            el = stack.pop()
            if isinstance(el, CompressedElement):
                compressed += 1
                stack.extend(el.elements)
            elif isinstance(el, MatrixElement):
                matrices += 1
    return matrices, compressed
