from __future__ import annotations

from dataclasses import dataclass

from annotext.nlp.adapter import IdentityStemmer, Stemmer
from annotext.nlp.sentence import Span, Token
from annotext.nlp.token_filter import classify_character


@dataclass
class _OpenRun:
    start: int
    is_digit: bool


class Tokenizer:
    """Split raw text into stemmed tokens that keep their raw-text spans.

    Whitespace separates tokens and is dropped; every punctuation or symbol
    character is a token of its own; a run of content characters is cut
    wherever it switches between digits and non-digits, so "12wr" gives
    "12" and "wr".
    """

    def __init__(self, stemmer: Stemmer | None = None):
        self.stemmer = stemmer or IdentityStemmer()

    def tokenize(self, raw: str) -> list[Token]:
        tokens: list[Token] = []
        run: _OpenRun | None = None

        for index, character in enumerate(raw):
            char_class = classify_character(character)
            if char_class == "whitespace":
                if run is not None:
                    tokens.append(self._finish(raw, run, index))
                    run = None
            elif char_class == "punctuation":
                if run is not None:
                    tokens.append(self._finish(raw, run, index))
                    run = None
                tokens.append(self._finish(raw, _OpenRun(index, False), index + 1))
            else:
                is_digit = char_class == "digit"
                if run is not None and run.is_digit != is_digit:
                    tokens.append(self._finish(raw, run, index))
                    run = None
                if run is None:
                    run = _OpenRun(index, is_digit)

        if run is not None:
            tokens.append(self._finish(raw, run, len(raw)))

        return tokens

    def _finish(self, raw: str, run: _OpenRun, end: int) -> Token:
        # Lower-case the run itself so spans stay in raw-text character units.
        text = raw[run.start:end].lower()
        return Token(
            value=self.stemmer.stem(text),
            span=Span(run.start, end - run.start),
        )
