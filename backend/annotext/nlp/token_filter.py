from __future__ import annotations

import string
import unicodedata
from typing import Literal


CharClass = Literal["whitespace", "punctuation", "digit", "letter"]

ASCII_PUNCTUATION = frozenset(string.punctuation)


def is_punctuation(character: str) -> bool:
    if character in ASCII_PUNCTUATION:
        return True
    # Unicode punctuation (P*) and symbols (S*) such as «», №, €.
    return unicodedata.category(character)[:1] in {"P", "S"}


def classify_character(character: str) -> CharClass:
    # Control (Cc) and format (Cf) characters such as U+200B separate tokens too.
    if character.isspace() or unicodedata.category(character) in {"Cc", "Cf"}:
        return "whitespace"
    if is_punctuation(character):
        return "punctuation"
    if character.isdecimal():
        return "digit"
    return "letter"


def is_integer_literal(value: str) -> bool:
    return bool(value) and value.isascii() and value.isdecimal()
