from __future__ import annotations

import logging
from collections.abc import Iterable

from annotext.core.errors import PipelineFrozenError
from annotext.nlp.adapter import Stemmer
from annotext.nlp.sentence import Sentence, Token
from annotext.nlp.tokenizer import Tokenizer
from annotext.services.dictionary import Dictionary
from annotext.services.enrichers.base import Enricher
from annotext.services.enrichers.number import NEGATIVE_MARKERS, NumberEnricher
from annotext.services.enrichers.stop_word import StopWordEnricher


logger = logging.getLogger(__name__)


def _stage_name(enricher: Enricher) -> str:
    return getattr(enricher, "name", None) or enricher.__class__.__name__


class EnrichmentPipeline:
    def __init__(self, tokenizer: Tokenizer, enrichers: Iterable[Enricher] = ()):
        self._tokenizer = tokenizer
        self._enrichers: tuple[Enricher, ...] = tuple(enrichers)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def enrichers(self) -> tuple[Enricher, ...]:
        return self._enrichers

    def tokenize(self, raw: str) -> list[Token]:
        return self._tokenizer.tokenize(raw)

    def produce(self, raw: str) -> Sentence:
        sentence = Sentence(raw=raw, tokens=self.tokenize(raw))
        for enricher in self._enrichers:
            try:
                enricher.enrich(sentence)
            except Exception as exc:
                # The partially enriched sentence is dropped with this frame.
                logger.warning(
                    "sentence_enrichment_failed",
                    extra={"stage": _stage_name(enricher), "error": str(exc)},
                )
                raise
        logger.debug(
            "sentence_produced",
            extra={"tokens": len(sentence.tokens), "stages": len(self._enrichers)},
        )
        return sentence

    def learn(self, sentence: Sentence) -> None:
        for enricher in self._enrichers:
            try:
                enricher.update(sentence)
            except Exception as exc:
                logger.warning(
                    "sentence_learning_failed",
                    extra={"stage": _stage_name(enricher), "error": str(exc)},
                )
                raise


class PipelineBuilder:
    def __init__(self, tokenizer: Tokenizer):
        self._tokenizer = tokenizer
        self._enrichers: list[Enricher] = []
        self._built = False

    def add_enricher(self, enricher: Enricher) -> PipelineBuilder:
        if self._built:
            raise PipelineFrozenError("Enrichers cannot be added after the pipeline is built")
        self._enrichers.append(enricher)
        return self

    def build(self) -> EnrichmentPipeline:
        self._built = True
        pipeline = EnrichmentPipeline(self._tokenizer, self._enrichers)
        logger.info(
            "pipeline_built",
            extra={"stages": [_stage_name(enricher) for enricher in pipeline.enrichers]},
        )
        return pipeline


def build_default_pipeline(
    stemmer: Stemmer,
    dictionary: Dictionary | None = None,
    *,
    numbers_enabled: bool = True,
    stop_words_enabled: bool = True,
    abort_on_stop_word: bool = False,
) -> tuple[EnrichmentPipeline, StopWordEnricher | None]:
    builder = PipelineBuilder(Tokenizer(stemmer))
    if numbers_enabled:
        # Token values are stemmed, so compare against stemmed markers too.
        markers = set(NEGATIVE_MARKERS) | {stemmer.stem(marker) for marker in NEGATIVE_MARKERS}
        builder.add_enricher(NumberEnricher(negative_markers=markers))

    stop_word_enricher: StopWordEnricher | None = None
    if stop_words_enabled and dictionary is not None:
        stop_word_enricher = StopWordEnricher(dictionary, abort_on_match=abort_on_stop_word)
        builder.add_enricher(stop_word_enricher)

    return builder.build(), stop_word_enricher
