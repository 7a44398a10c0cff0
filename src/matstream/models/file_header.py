from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from .common import ByteOrder

class FileHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field("", max_length=116)
    has_subsys_offset: bool = False
    subsys_offset: Optional[int] = None
    version: int = 0x0100
    byte_order: ByteOrder
