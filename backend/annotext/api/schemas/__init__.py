from annotext.api.schemas.v1 import (
    AddStopWordRequest,
    AddStopWordResponse,
    LearnSentenceRequest,
    LearnSentenceResponse,
    ProduceSentenceRequest,
    SentenceResponse,
    StopWordListResponse,
    SyncDictionaryResponse,
)

__all__ = [
    "AddStopWordRequest",
    "AddStopWordResponse",
    "LearnSentenceRequest",
    "LearnSentenceResponse",
    "ProduceSentenceRequest",
    "SentenceResponse",
    "StopWordListResponse",
    "SyncDictionaryResponse",
]
