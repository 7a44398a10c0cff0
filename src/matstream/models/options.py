from __future__ import annotations
from pydantic import BaseModel, Field

class DecoderOptions(BaseModel):
    chunk_size: int = Field(64 * 1024, ge=1, description="bytes per chunk when reading a path or buffer")
    elements_per_yield: int = Field(1, ge=1, description="elements decoded per scheduler turn in the async driver")
