from __future__ import annotations

import logging
import threading
from functools import lru_cache
from importlib.metadata import version as package_version

from annotext.core.config import Settings
from annotext.nlp.adapter import Stemmer


logger = logging.getLogger(__name__)


class SnowballStemmerAdapter(Stemmer):
    def __init__(self, language: str):
        self.language = language.lower()
        # Import lazily so backend startup can degrade cleanly if the stemmer is absent.
        import snowballstemmer

        if self.language not in snowballstemmer.algorithms():
            raise ValueError(f"Unsupported stemmer language: {language}")
        self._stemmer = snowballstemmer.stemmer(self.language)
        # Snowball stemmer objects keep per-call state and are not thread safe.
        self._stem_cached = lru_cache(maxsize=16384)(self._stem_locked)
        self._lock = threading.Lock()

    def stem(self, word: str) -> str:
        if not word:
            return word
        return self._stem_cached(word)

    def metadata(self) -> dict[str, str]:
        return {
            "adapter": self.__class__.__name__,
            "snowballstemmer": package_version("snowballstemmer"),
            "language": self.language,
        }

    def _stem_locked(self, word: str) -> str:
        with self._lock:
            return self._stemmer.stemWord(word)


def load_snowball_stemmer(settings: Settings) -> Stemmer:
    stemmer = SnowballStemmerAdapter(settings.stemmer_language)
    logger.info("stemmer_loaded", extra={"language": stemmer.language})
    return stemmer
