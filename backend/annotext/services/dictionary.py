from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Protocol

from annotext.core.errors import ExclusiveAccessError


logger = logging.getLogger(__name__)


class Dictionary(Protocol):
    def contains(self, word: str) -> bool:
        ...

    def add(self, word: str) -> bool:
        ...

    def sync(self) -> None:
        ...

    def get_all(self) -> set[str]:
        ...


class EmptyDictionary:
    def contains(self, word: str) -> bool:
        return False

    def add(self, word: str) -> bool:
        return False

    def sync(self) -> None:
        return None

    def get_all(self) -> set[str]:
        return set()


class CachedDictionary:
    """In-memory word set with optional write-through to a backing dictionary.

    The in-memory set answers `contains`. A word reaches `inner` only the first
    time it is added here, and the cache is refreshed from `inner` only by an
    explicit `sync`.
    """

    def __init__(
        self,
        words: Iterable[str] = (),
        inner: Dictionary | None = None,
        *,
        lock_timeout: float | None = None,
    ):
        self._words: set[str] = set(words)
        self._inner = inner
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout

    @classmethod
    def with_inner(cls, inner: Dictionary, *, lock_timeout: float | None = None) -> CachedDictionary:
        return cls(inner=inner, lock_timeout=lock_timeout)

    @property
    def inner(self) -> Dictionary | None:
        return self._inner

    def contains(self, word: str) -> bool:
        return word in self._words

    def add(self, word: str) -> bool:
        with self._exclusive():
            if word in self._words:
                return False
            # Backing store first: a failed write leaves the cache untouched.
            if self._inner is not None:
                self._inner.add(word)
            self._words.add(word)
            return True

    def sync(self) -> None:
        if self._inner is None:
            return
        with self._exclusive():
            self._words = set(self._inner.get_all())
            size = len(self._words)
        logger.info("dictionary_synced", extra={"size": size})

    def get_all(self) -> set[str]:
        with self._exclusive():
            return set(self._words)

    def __len__(self) -> int:
        return len(self._words)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        timeout = -1 if self._lock_timeout is None else self._lock_timeout
        if not self._lock.acquire(timeout=timeout):
            raise ExclusiveAccessError(
                f"Could not acquire exclusive access to the dictionary within {self._lock_timeout}s"
            )
        try:
            yield
        finally:
            self._lock.release()
