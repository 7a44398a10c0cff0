from __future__ import annotations
from pydantic import BaseModel, Field
from pathlib import Path
from typing import Iterator, List, Optional
from .file_header import FileHeader
from .element import CompressedElement, Element, MatrixElement
from .options import DecoderOptions

class MatFile(BaseModel):
    header: FileHeader
    elements: List[Element] = Field(default_factory=list)

    @classmethod
    def from_binary(cls, data: bytes | bytearray | memoryview | str | Path,
                    options: Optional[DecoderOptions] = None) -> "MatFile":
        from ..binary.reader import parse_file
        return parse_file(data, options)

    def iter_matrices(self) -> Iterator[MatrixElement]:
        """Depth-first walk over every matrix, including those inside compressed elements."""
        stack = list(reversed(self.elements))
        while stack:
            el = stack.pop()
            if isinstance(el, CompressedElement):
                stack.extend(reversed(el.elements))
            else:
                yield el
