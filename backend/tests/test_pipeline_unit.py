from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from annotext.core.errors import PipelineFrozenError
from annotext.nlp.adapter import IdentityStemmer
from annotext.nlp.meta import Meta
from annotext.nlp.sentence import Sentence, Span
from annotext.nlp.tokenizer import Tokenizer
from annotext.services.dictionary import CachedDictionary
from annotext.services.enrichers.base import Enricher
from annotext.services.enrichers.number import Number, NumberEnricher
from annotext.services.enrichers.stop_word import STOP_WORD, StopWordEnricher
from annotext.services.pipeline import PipelineBuilder, build_default_pipeline


class _RecordingEnricher(Enricher):
    def __init__(self, name: str, calls: list[str], fail_enrich: bool = False, fail_update: bool = False):
        self.name = name
        self.calls = calls
        self.fail_enrich = fail_enrich
        self.fail_update = fail_update

    def enrich(self, sentence: Sentence) -> None:
        self.calls.append(f"enrich:{self.name}")
        for token in sentence.tokens:
            token.add_meta(self.name, Meta.boolean(True))
        if self.fail_enrich:
            raise RuntimeError(f"{self.name} failed")

    def update(self, sentence: Sentence) -> None:
        self.calls.append(f"update:{self.name}")
        if self.fail_update:
            raise RuntimeError(f"{self.name} update failed")


class _EnrichOnly(Enricher):
    name = "enrich_only"

    def enrich(self, sentence: Sentence) -> None:
        return None


def test_enrichers_run_in_registration_order() -> None:
    calls: list[str] = []
    pipeline = (
        PipelineBuilder(Tokenizer())
        .add_enricher(_RecordingEnricher("first", calls))
        .add_enricher(_RecordingEnricher("second", calls))
        .build()
    )

    sentence = pipeline.produce("a b")

    assert calls == ["enrich:first", "enrich:second"]
    assert list(sentence.tokens[0].meta) == ["first", "second"]


def test_failing_stage_aborts_remaining_stages() -> None:
    calls: list[str] = []
    pipeline = (
        PipelineBuilder(Tokenizer())
        .add_enricher(_RecordingEnricher("first", calls))
        .add_enricher(_RecordingEnricher("broken", calls, fail_enrich=True))
        .add_enricher(_RecordingEnricher("never", calls))
        .build()
    )

    with pytest.raises(RuntimeError, match="broken failed"):
        pipeline.produce("a b")

    assert calls == ["enrich:first", "enrich:broken"]


def test_learn_stops_at_first_failure_without_rollback() -> None:
    calls: list[str] = []
    dictionary = CachedDictionary()
    stop_words = StopWordEnricher(dictionary)
    pipeline = (
        PipelineBuilder(Tokenizer())
        .add_enricher(stop_words)
        .add_enricher(_RecordingEnricher("broken", calls, fail_update=True))
        .add_enricher(_RecordingEnricher("never", calls))
        .build()
    )
    sentence = pipeline.produce("a b")
    sentence.tokens[0].add_meta(STOP_WORD, Meta.boolean(True))
    calls.clear()

    with pytest.raises(RuntimeError, match="update failed"):
        pipeline.learn(sentence)

    assert calls == ["update:broken"]
    assert dictionary.contains("a") is True


def test_default_update_is_a_no_op() -> None:
    pipeline = PipelineBuilder(Tokenizer()).add_enricher(_EnrichOnly()).build()

    pipeline.learn(pipeline.produce("a"))


def test_builder_rejects_registration_after_build() -> None:
    builder = PipelineBuilder(Tokenizer()).add_enricher(NumberEnricher())
    pipeline = builder.build()

    with pytest.raises(PipelineFrozenError):
        builder.add_enricher(_EnrichOnly())

    assert len(pipeline.enrichers) == 1
    assert isinstance(pipeline.enrichers, tuple)
    assert not hasattr(pipeline, "add_enricher")


def test_pipeline_without_enrichers_only_tokenizes() -> None:
    pipeline = PipelineBuilder(Tokenizer()).build()

    sentence = pipeline.produce("12wr")

    assert sentence.raw == "12wr"
    assert [token.value for token in sentence.tokens] == ["12", "wr"]
    assert all(not token.meta for token in sentence.tokens)


def test_default_pipeline_wires_numbers_then_stop_words() -> None:
    pipeline, stop_words = build_default_pipeline(IdentityStemmer(), CachedDictionary(["и"]))

    assert [enricher.name for enricher in pipeline.enrichers] == ["number", "stop_word"]
    sentence = pipeline.produce("минус 5 и 6")
    assert NumberEnricher.extract(sentence) == [
        (Span(0, 2), Number.signed_value(-5)),
        (Span(3, 1), Number.unsigned_value(6)),
    ]
    assert StopWordEnricher.extract(sentence) == [(Span(2, 1), "и")]
    assert stop_words is not None


def test_default_pipeline_honours_flags() -> None:
    pipeline, stop_words = build_default_pipeline(
        IdentityStemmer(),
        CachedDictionary(),
        numbers_enabled=False,
        stop_words_enabled=False,
    )

    assert pipeline.enrichers == ()
    assert stop_words is None


def test_shared_pipeline_produces_independent_sentences_concurrently() -> None:
    dictionary = CachedDictionary(["w"])
    pipeline, stop_words = build_default_pipeline(IdentityStemmer(), dictionary)
    texts = [f"w {index} и -{index}" for index in range(200)]

    def produce_and_learn(text: str):
        sentence = pipeline.produce(text)
        sentence.tokens[2].add_meta(STOP_WORD, Meta.boolean(True))
        pipeline.learn(sentence)
        return sentence

    with ThreadPoolExecutor(max_workers=8) as executor:
        sentences = list(executor.map(produce_and_learn, texts))

    for index, sentence in enumerate(sentences):
        assert sentence.raw == texts[index]
        numbers = NumberEnricher.extract(sentence)
        assert numbers == [
            (Span(1, 1), Number.unsigned_value(index)),
            (Span(3, 2), Number.signed_value(-index)),
        ]
    assert stop_words is not None
    assert stop_words.words() == {"w", "и"}
