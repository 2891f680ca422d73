from __future__ import annotations

from annotext.api.schemas.v1.sentences import (
    ExtractedNumber,
    ExtractedStopWord,
    LearnSentenceRequest,
    LearnSentenceResponse,
    MetaModel,
    SentenceResponse,
    SentenceToken,
    SpanModel,
)
from annotext.nlp.meta import Meta
from annotext.nlp.sentence import Sentence, Span, Token
from annotext.services.enrichers.number import NumberEnricher
from annotext.services.enrichers.stop_word import StopWordEnricher
from annotext.services.pipeline import EnrichmentPipeline


class SentenceUseCase:
    def __init__(
        self,
        pipeline: EnrichmentPipeline,
        stop_word_enricher: StopWordEnricher | None = None,
    ):
        self._pipeline = pipeline
        self._stop_word_enricher = stop_word_enricher

    def produce(self, text: str) -> SentenceResponse:
        return sentence_to_response(self._pipeline.produce(text))

    def learn(self, payload: LearnSentenceRequest) -> LearnSentenceResponse:
        sentence = sentence_from_request(payload)
        self._pipeline.learn(sentence)
        dictionary_size = (
            len(self._stop_word_enricher.words())
            if self._stop_word_enricher is not None
            else None
        )
        return LearnSentenceResponse(status="learned", dictionary_size=dictionary_size)


def sentence_to_response(sentence: Sentence) -> SentenceResponse:
    tokens = [
        SentenceToken(
            value=token.value,
            span=SpanModel(start=token.span.start, length=token.span.length),
            text=sentence.text_of(token),
            meta={key: MetaModel(**meta.to_json()) for key, meta in token.meta.items()},
        )
        for token in sentence.tokens
    ]
    numbers = [
        ExtractedNumber(
            span=SpanModel(start=span.start, length=span.length),
            value=number.value,
            signed=number.signed,
        )
        for span, number in NumberEnricher.extract(sentence)
    ]
    stop_words = [
        ExtractedStopWord(span=SpanModel(start=span.start, length=span.length), text=text)
        for span, text in StopWordEnricher.extract(sentence)
    ]
    return SentenceResponse(raw=sentence.raw, tokens=tokens, numbers=numbers, stop_words=stop_words)


def sentence_from_request(payload: LearnSentenceRequest) -> Sentence:
    """Rebuild a sentence sent back by a client, rejecting broken span layouts."""
    tokens: list[Token] = []
    previous_end = 0
    for position, item in enumerate(payload.tokens):
        span = Span(item.span.start, item.span.length)
        if span.start < previous_end:
            raise ValueError(f"Token {position} overlaps or precedes the previous token")
        if span.end > len(payload.raw):
            raise ValueError(f"Token {position} lies outside the raw text")
        previous_end = span.end

        token = Token(value=item.value, span=span)
        for key, meta in item.meta.items():
            token.add_meta(key, Meta.from_json(meta.model_dump()))
        tokens.append(token)
    return Sentence(raw=payload.raw, tokens=tokens)
