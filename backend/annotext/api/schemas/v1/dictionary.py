from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class AddStopWordRequest(BaseModel):
    word: str = Field(..., min_length=1)


class AddStopWordResponse(BaseModel):
    status: Literal["inserted", "exists"]
    stored_word: str


class StopWordListResponse(BaseModel):
    words: list[str]


class SyncDictionaryResponse(BaseModel):
    status: Literal["synced"]
    size: int
