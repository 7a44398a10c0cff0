import asyncio

import pytest

from matbytes import chunked, compressed, header, matrix
from matstream.binary.assembler import StreamAssembler
from matstream.binary.reader import aiter_elements, iter_chunks, iter_elements, parse_file, summarize_file
from matstream.errors import TruncatedStream
from matstream.models.common import ByteOrder
from matstream.models.file import MatFile
from matstream.models.options import DecoderOptions

STREAM = (
    header("MATLAB 5.0 MAT-file, written by tests")
    + matrix("a")
    + compressed(matrix("b"), matrix("c"))
    + matrix("d", (1, 1))
)

def test_parse_file_from_bytes():
    f = parse_file(STREAM)
    assert f.header.byte_order is ByteOrder.LITTLE
    assert f.header.text == "MATLAB 5.0 MAT-file, written by tests"
    assert len(f.elements) == 3
    assert [m.name for m in f.iter_matrices()] == ["a", "b", "c", "d"]

def test_parse_file_from_path_with_small_chunks(tmp_path):
    p = tmp_path / "sample.mat"
    p.write_bytes(STREAM)
    small = MatFile.from_binary(str(p), DecoderOptions(chunk_size=3))
    assert small.model_dump() == parse_file(STREAM).model_dump()

def test_parse_empty_input_is_truncated():
    with pytest.raises(TruncatedStream):
        parse_file(b"")

def test_summarize_counts_nested_elements():
    assert summarize_file(STREAM) == (4, 1)

def test_iter_chunks(tmp_path):
    assert [len(c) for c in iter_chunks(STREAM[:10], 4)] == [4, 4, 2]
    p = tmp_path / "x.mat"
    p.write_bytes(STREAM)
    assert b"".join(iter_chunks(p, 7)) == STREAM
    with pytest.raises(ValueError):
        list(iter_chunks(STREAM, 0))

def test_iter_elements_exposes_header_through_assembler():
    asm = StreamAssembler()
    names = [el.kind for el in iter_elements(chunked(STREAM, 11), assembler=asm)]
    assert names == ["matrix", "compressed", "matrix"]
    assert asm.header.text.startswith("MATLAB")

def test_async_matches_sync():
    async def collect(source):
        return [el.model_dump() async for el in aiter_elements(source)]

    async def agen():
        for c in chunked(STREAM, 5):
            yield c

    expected = [el.model_dump() for el in iter_elements([STREAM])]
    assert asyncio.run(collect(chunked(STREAM, 13))) == expected
    assert asyncio.run(collect(agen())) == expected

def test_async_driver_yields_to_event_loop():
    async def main():
        ticks = []

        async def ticker():
            for i in range(50):
                ticks.append(i)
                await asyncio.sleep(0)

        task = asyncio.create_task(ticker())
        seen = []
        async for _ in aiter_elements([STREAM], DecoderOptions(elements_per_yield=1)):
            seen.append(len(ticks))
        task.cancel()
        return seen

    seen = asyncio.run(main())
    assert len(seen) == 3
    assert seen == sorted(seen)
    assert seen[-1] > seen[0]

def test_async_truncation_propagates():
    async def main():
        return [el async for el in aiter_elements([STREAM[:-3]])]

    with pytest.raises(TruncatedStream):
        asyncio.run(main())
