from __future__ import annotations

from typing import Protocol


class Stemmer(Protocol):
    def stem(self, word: str) -> str:
        ...

    def metadata(self) -> dict[str, str]:
        ...


class IdentityStemmer:
    def stem(self, word: str) -> str:
        return word

    def metadata(self) -> dict[str, str]:
        return {"adapter": "identity"}
