from __future__ import annotations

import logging

from annotext.core.errors import AnnotextError
from annotext.core.locks import ReadWriteLock
from annotext.nlp.meta import Meta
from annotext.nlp.sentence import Sentence, Span, Token
from annotext.services.dictionary import Dictionary
from annotext.services.enrichers.base import Enricher


logger = logging.getLogger(__name__)

STOP_WORD = "stop_word"


class StopWordError(AnnotextError):
    def __init__(self, stop_word: str):
        self.stop_word = stop_word
        super().__init__(f"stop word:[{stop_word}]")


def is_stop_word(token: Token) -> bool:
    meta = token.get_meta(STOP_WORD)
    return meta is not None and meta.as_bool()


class StopWordEnricher(Enricher):
    """Flag tokens found in a dictionary and learn flags from accepted sentences.

    The dictionary is shared by every pipeline run, so reads happen under the
    shared side of a reader/writer lock and all mutation under the exclusive
    side.
    """

    name = "stop_word"

    def __init__(self, dictionary: Dictionary, abort_on_match: bool = False):
        self._dictionary = dictionary
        self._lock = ReadWriteLock()
        self.abort_on_match = abort_on_match

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def enrich(self, sentence: Sentence) -> None:
        with self._lock.read():
            for token in sentence.tokens:
                if not self._dictionary.contains(token.value):
                    continue
                if self.abort_on_match:
                    raise StopWordError(sentence.text_of(token))
                token.add_meta(STOP_WORD, Meta.boolean(True))

    def update(self, sentence: Sentence) -> None:
        learned = 0
        with self._lock.write():
            for token in sentence.tokens:
                if is_stop_word(token) and self._dictionary.add(token.value):
                    learned += 1
        if learned:
            logger.info("stop_words_learned", extra={"count": learned})

    def add_word(self, word: str) -> bool:
        with self._lock.write():
            return self._dictionary.add(word)

    def words(self) -> set[str]:
        with self._lock.read():
            return self._dictionary.get_all()

    def sync(self) -> None:
        with self._lock.write():
            self._dictionary.sync()

    @staticmethod
    def extract(sentence: Sentence) -> list[tuple[Span, str]]:
        return [
            (Span(index, 1), sentence.text_of(token))
            for index, token in enumerate(sentence.tokens)
            if is_stop_word(token)
        ]
