from __future__ import annotations

import pytest

from annotext.core.config import Settings


class StubStemmer:
    def stem(self, word: str) -> str:
        return word

    def metadata(self) -> dict[str, str]:
        return {"adapter": "StubStemmer"}


@pytest.fixture
def stub_stemmer_factory():
    return lambda _settings: StubStemmer()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        app_name="annotext-backend-test",
        host="127.0.0.1",
        port=8001,
        db_path=tmp_path / "annotext.sqlite3",
    )
