from __future__ import annotations

from dataclasses import dataclass, field

from annotext.nlp.meta import Meta


@dataclass(frozen=True, order=True)
class Span:
    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.length < 0:
            raise ValueError(f"Span offsets must be non-negative, got ({self.start}, {self.length})")

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass
class Token:
    """A stemmed value, the raw-text span it came from and its annotations."""

    value: str
    span: Span
    _meta: dict[str, Meta] = field(default_factory=dict, repr=False)

    def __setattr__(self, name: str, value) -> None:
        # value and span are fixed at creation; only annotations change.
        if name in {"value", "span"} and name in self.__dict__:
            raise AttributeError(f"Token.{name} is read-only")
        super().__setattr__(name, value)

    def add_meta(self, key: str, meta: Meta) -> None:
        self._meta[key] = meta

    def get_meta(self, key: str) -> Meta | None:
        return self._meta.get(key)

    @property
    def meta(self) -> dict[str, Meta]:
        return {key: self._meta[key] for key in sorted(self._meta)}


@dataclass
class Sentence:
    raw: str
    tokens: list[Token] = field(default_factory=list)

    def by_span(self, span: Span) -> str:
        return self.raw[span.start:span.end]

    def text_of(self, token: Token) -> str:
        return self.by_span(token.span)
