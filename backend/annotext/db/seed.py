from __future__ import annotations

from collections.abc import Iterable
from contextlib import closing
from pathlib import Path

from annotext.db.migrations import get_connection
from annotext.nlp.adapter import Stemmer


# Keep the starter list lean: common Russian function words.
STARTER_STOP_WORDS: tuple[str, ...] = (
    "и",
    "в",
    "во",
    "не",
    "что",
    "он",
    "на",
    "я",
    "с",
    "со",
    "как",
    "а",
    "то",
    "но",
    "да",
    "ты",
    "к",
    "у",
    "же",
    "вы",
    "за",
    "бы",
    "по",
    "от",
)


def read_word_list(path: Path) -> list[str]:
    return [
        line.strip().lower()
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def seed_stop_words(
    db_path: Path,
    words: Iterable[str],
    stemmer: Stemmer,
    *,
    dictionary: str = "stop_words",
) -> dict[str, int]:
    # Token values are stemmed, so the stored words must be stemmed the same way.
    stemmed = {stemmer.stem(word.strip().lower()) for word in words if word.strip()}

    inserted_words = 0
    with closing(get_connection(db_path)) as conn, conn:
        for word in sorted(stemmed):
            cursor = conn.execute(
                "INSERT OR IGNORE INTO dictionary_words (dictionary, word) VALUES (?, ?)",
                (dictionary, word),
            )
            inserted_words += 1 if cursor.rowcount == 1 else 0

    return {
        "seeded_words": len(stemmed),
        "inserted_words": inserted_words,
    }
