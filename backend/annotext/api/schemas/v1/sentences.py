from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class SpanModel(BaseModel):
    start: int = Field(..., ge=0)
    length: int = Field(..., ge=0)


class MetaModel(BaseModel):
    kind: str
    value: Any


class SentenceToken(BaseModel):
    value: str
    span: SpanModel
    text: str | None = None
    meta: dict[str, MetaModel] = Field(default_factory=dict)


class ProduceSentenceRequest(BaseModel):
    text: str = Field(...)


class ExtractedNumber(BaseModel):
    span: SpanModel
    value: int
    signed: bool


class ExtractedStopWord(BaseModel):
    span: SpanModel
    text: str


class SentenceResponse(BaseModel):
    raw: str
    tokens: list[SentenceToken]
    numbers: list[ExtractedNumber] = Field(default_factory=list)
    stop_words: list[ExtractedStopWord] = Field(default_factory=list)


class LearnSentenceRequest(BaseModel):
    raw: str
    tokens: list[SentenceToken]


class LearnSentenceResponse(BaseModel):
    status: Literal["learned"]
    dictionary_size: int | None
