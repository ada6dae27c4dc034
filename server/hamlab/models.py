"""Общие Pydantic-модели."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator


class EncodeRequest(BaseModel):
    data: str = Field(..., description="Исходные байты в Base64")


class EncodeResponse(BaseModel):
    encoded: str
    input_bytes: int
    output_bytes: int


class ChannelSettings(BaseModel):
    flip_probability: Optional[float] = None
    double_flip: Optional[float] = None
    seed: Optional[int] = None

    @validator("flip_probability", "double_flip")
    def probability_range(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 1.0:
            raise ValueError("вероятность должна лежать в [0, 1]")
        return v


class DecodeRequest(ChannelSettings):
    encoded: str = Field(..., description="Закодированный поток в Base64")


class TransmitRequest(ChannelSettings):
    data: str = Field(..., description="Исходные байты в Base64")


class EventModel(BaseModel):
    codeword_index: int
    byte_index: int
    kind: str
    position: Optional[int] = None


class DecodeResponse(BaseModel):
    decoded: str
    codewords: int
    corrected: int
    uncorrectable: int
    channel: Dict[str, int] = {}
    events: List[EventModel] = []


class TransmitResponse(DecodeResponse):
    encoded_path: str
    decoded_path: str


class ChannelNoiseRequest(BaseModel):
    flip_probability: float = 0.1
    double_flip: float = 0.0
