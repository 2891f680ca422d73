from __future__ import annotations

from typing import Protocol

from annotext.nlp.sentence import Sentence


class Enricher(Protocol):
    """A pipeline stage.

    `enrich` annotates a sentence in place and raises to veto the whole run.
    `update` receives an accepted sentence; subclasses inherit a no-op.
    """

    name: str

    def enrich(self, sentence: Sentence) -> None:
        ...

    def update(self, sentence: Sentence) -> None:
        return None
