from annotext.api.schemas.v1.dictionary import (
    AddStopWordRequest,
    AddStopWordResponse,
    StopWordListResponse,
    SyncDictionaryResponse,
)
from annotext.api.schemas.v1.sentences import (
    ExtractedNumber,
    ExtractedStopWord,
    LearnSentenceRequest,
    LearnSentenceResponse,
    MetaModel,
    ProduceSentenceRequest,
    SentenceResponse,
    SentenceToken,
    SpanModel,
)

__all__ = [
    "AddStopWordRequest",
    "AddStopWordResponse",
    "StopWordListResponse",
    "SyncDictionaryResponse",
    "ExtractedNumber",
    "ExtractedStopWord",
    "LearnSentenceRequest",
    "LearnSentenceResponse",
    "MetaModel",
    "ProduceSentenceRequest",
    "SentenceResponse",
    "SentenceToken",
    "SpanModel",
]
