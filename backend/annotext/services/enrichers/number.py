from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from annotext.nlp.meta import INTEGER_RANGES, Meta
from annotext.nlp.sentence import Sentence, Span
from annotext.nlp.token_filter import is_integer_literal
from annotext.services.enrichers.base import Enricher


VALUE = "number.number"
SIGN_INDEX = "number.sign_index"
NUMBER_INDEX = "number.number_index"

NEGATIVE_MARKERS = ("-", "минус")

U64_MAX = INTEGER_RANGES["u64"][1]
I64_MIN = INTEGER_RANGES["i64"][0]


@dataclass(frozen=True)
class Number:
    value: int
    signed: bool

    @classmethod
    def signed_value(cls, value: int) -> Number:
        return cls(value=value, signed=True)

    @classmethod
    def unsigned_value(cls, value: int) -> Number:
        return cls(value=value, signed=False)


class NumberEnricher(Enricher):
    """Annotate integer literals, pairing a number with a minus sign to its left.

    A signed number stores its value and the index of its sign token; the sign
    token stores the index of the number token.
    """

    name = "number"

    def __init__(self, negative_markers: Iterable[str] = NEGATIVE_MARKERS):
        self.negative_markers = frozenset(negative_markers)

    def enrich(self, sentence: Sentence) -> None:
        tokens = sentence.tokens
        for index, token in enumerate(tokens):
            magnitude = _parse_magnitude(token.value)
            if magnitude is None:
                continue

            if index > 0 and self._is_negative_marker(tokens[index - 1].value) and -magnitude >= I64_MIN:
                token.add_meta(VALUE, Meta.i64(-magnitude))
                token.add_meta(SIGN_INDEX, Meta.usize(index - 1))
                tokens[index - 1].add_meta(NUMBER_INDEX, Meta.usize(index))
            else:
                token.add_meta(VALUE, Meta.u64(magnitude))

    def _is_negative_marker(self, value: str) -> bool:
        return value in self.negative_markers

    @staticmethod
    def extract(sentence: Sentence) -> list[tuple[Span, Number]]:
        """Numbers in token order with token-position spans.

        A signed number spans its sign token and itself; an unsigned number
        spans only itself.
        """
        numbers: list[tuple[Span, Number]] = []
        for index, token in enumerate(sentence.tokens):
            value = token.get_meta(VALUE)
            if value is None:
                continue
            sign = token.get_meta(SIGN_INDEX)
            if sign is not None:
                numbers.append((Span(sign.as_usize(), 2), Number.signed_value(value.as_i64())))
            else:
                numbers.append((Span(index, 1), Number.unsigned_value(value.as_u64())))
        return numbers


def _parse_magnitude(value: str) -> int | None:
    if not is_integer_literal(value):
        return None
    magnitude = int(value)
    if magnitude > U64_MAX:
        return None
    return magnitude
