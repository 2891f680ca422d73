from __future__ import annotations

import threading

import pytest

from annotext.core.errors import ExclusiveAccessError
from annotext.services.dictionary import CachedDictionary, EmptyDictionary


class _BackingDictionary:
    def __init__(self, words=()) -> None:
        self.words = set(words)
        self.added: list[str] = []

    def contains(self, word: str) -> bool:
        return word in self.words

    def add(self, word: str) -> bool:
        self.added.append(word)
        if word in self.words:
            return False
        self.words.add(word)
        return True

    def sync(self) -> None:
        return None

    def get_all(self) -> set[str]:
        return set(self.words)


class _FailingDictionary(_BackingDictionary):
    def add(self, word: str) -> bool:
        raise OSError("disk full")


def test_empty_dictionary_is_a_no_op() -> None:
    dictionary = EmptyDictionary()

    assert dictionary.contains("w") is False
    assert dictionary.add("w") is False
    assert dictionary.contains("w") is False
    assert dictionary.sync() is None
    assert dictionary.get_all() == set()


def test_add_is_idempotent() -> None:
    dictionary = CachedDictionary()

    assert dictionary.add("w") is True
    assert dictionary.add("w") is False
    assert dictionary.contains("w") is True


def test_new_words_are_written_through_once() -> None:
    inner = _BackingDictionary()
    dictionary = CachedDictionary.with_inner(inner)

    dictionary.add("w")
    dictionary.add("w")
    dictionary.add("s")

    assert inner.added == ["w", "s"]


def test_cache_is_authoritative_until_sync() -> None:
    inner = _BackingDictionary({"w"})
    dictionary = CachedDictionary.with_inner(inner)

    assert dictionary.contains("w") is False
    dictionary.sync()
    assert dictionary.contains("w") is True


def test_sync_replaces_rather_than_merges() -> None:
    inner = _BackingDictionary({"b"})
    dictionary = CachedDictionary(["a"], inner)

    dictionary.sync()

    assert dictionary.get_all() == {"b"}


def test_sync_without_inner_keeps_words() -> None:
    dictionary = CachedDictionary(["a"])

    dictionary.sync()

    assert dictionary.get_all() == {"a"}


def test_get_all_returns_a_snapshot() -> None:
    dictionary = CachedDictionary(["a"])

    snapshot = dictionary.get_all()
    snapshot.add("b")

    assert dictionary.contains("b") is False


def test_failed_backing_write_leaves_cache_unchanged() -> None:
    dictionary = CachedDictionary.with_inner(_FailingDictionary())

    with pytest.raises(OSError):
        dictionary.add("w")

    assert dictionary.contains("w") is False


def test_add_reports_exclusive_access_timeout() -> None:
    dictionary = CachedDictionary(lock_timeout=0.01)

    dictionary._lock.acquire()
    try:
        with pytest.raises(ExclusiveAccessError):
            dictionary.add("w")
    finally:
        dictionary._lock.release()

    assert dictionary.add("w") is True


class _SlowSnapshotDictionary(_BackingDictionary):
    def __init__(self, words=()) -> None:
        super().__init__(words)
        self.reading = threading.Event()
        self.release = threading.Event()

    def get_all(self) -> set[str]:
        snapshot = set(self.words)
        self.reading.set()
        self.release.wait(timeout=5)
        return snapshot


def test_add_during_sync_is_not_lost_from_the_cache() -> None:
    inner = _SlowSnapshotDictionary({"w"})
    dictionary = CachedDictionary.with_inner(inner)
    added: list[bool] = []

    sync_thread = threading.Thread(target=dictionary.sync)
    sync_thread.start()
    assert inner.reading.wait(timeout=5)

    add_thread = threading.Thread(target=lambda: added.append(dictionary.add("x")))
    add_thread.start()
    add_thread.join(timeout=0.1)
    assert add_thread.is_alive()

    inner.release.set()
    sync_thread.join(timeout=5)
    add_thread.join(timeout=5)

    assert added == [True]
    assert "x" in inner.words
    assert dictionary.contains("x") is True
    assert dictionary.get_all() == {"w", "x"}


def test_add_times_out_while_sync_holds_the_dictionary() -> None:
    inner = _SlowSnapshotDictionary()
    dictionary = CachedDictionary.with_inner(inner, lock_timeout=0.05)

    sync_thread = threading.Thread(target=dictionary.sync)
    sync_thread.start()
    assert inner.reading.wait(timeout=5)

    with pytest.raises(ExclusiveAccessError):
        dictionary.add("x")

    inner.release.set()
    sync_thread.join(timeout=5)
    assert dictionary.contains("x") is False
    assert "x" not in inner.words
