from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Union
from .common import ArrayClass, DataType

class MatrixElement(BaseModel):
    """Structural view of a matrix; the numeric payload is skipped, not stored."""
    kind: Literal["matrix"] = "matrix"
    offset: int = Field(..., ge=0)
    depth: int = Field(0, ge=0)
    is_complex: bool = False
    is_global: bool = False
    is_logical: bool = False
    array_class: ArrayClass
    dimensions: List[int] = Field(default_factory=list)
    name: str = ""
    element_type: DataType
    element_count: int = Field(0, ge=0)
    payload_bytes: int = Field(0, ge=0)

class CompressedElement(BaseModel):
    kind: Literal["compressed"] = "compressed"
    offset: int = Field(..., ge=0)
    depth: int = Field(0, ge=0)
    compressed_length: int = Field(..., ge=0)
    inflated_length: int = Field(..., ge=0)
    elements: List["Element"] = Field(default_factory=list)

Element = Annotated[Union[MatrixElement, CompressedElement], Field(discriminator="kind")]

CompressedElement.model_rebuild()
