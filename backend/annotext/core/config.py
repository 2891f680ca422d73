from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os


BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"
DEFAULT_CORS_ORIGINS = ("http://127.0.0.1:4173", "http://localhost:4173")
FALSE_VALUES = {"0", "false", "no"}


@dataclass(frozen=True)
class Settings:
    environment: str
    app_name: str
    host: str
    port: int
    db_path: Path
    stemmer_language: str = "russian"
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    numbers_enabled: bool = True
    stop_words_enabled: bool = True
    stop_word_abort: bool = False
    stop_words_path: Path | None = None
    dictionary_lock_timeout: float | None = None


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).lower() not in FALSE_VALUES


def load_settings() -> Settings:
    db_path = Path(os.getenv("ANNOTEXT_DB_PATH", DATA_DIR / "annotext.sqlite3"))
    raw_cors_origins = os.getenv("ANNOTEXT_CORS_ORIGINS", "")
    parsed_cors_origins = tuple(
        origin.strip()
        for origin in raw_cors_origins.split(",")
        if origin.strip()
    )
    raw_lock_timeout = os.getenv("ANNOTEXT_DICTIONARY_LOCK_TIMEOUT", "").strip()
    return Settings(
        environment=os.getenv("ANNOTEXT_ENV", "development"),
        app_name=os.getenv("ANNOTEXT_APP_NAME", "annotext-backend"),
        host=os.getenv("ANNOTEXT_HOST", "127.0.0.1"),
        port=int(os.getenv("ANNOTEXT_PORT", "8000")),
        db_path=db_path,
        stemmer_language=os.getenv("ANNOTEXT_STEMMER_LANGUAGE", "russian"),
        log_level=os.getenv("ANNOTEXT_LOG_LEVEL", "INFO").upper(),
        cors_origins=parsed_cors_origins or DEFAULT_CORS_ORIGINS,
        numbers_enabled=_env_flag("ANNOTEXT_NUMBERS_ENABLED"),
        stop_words_enabled=_env_flag("ANNOTEXT_STOP_WORDS_ENABLED"),
        stop_word_abort=_env_flag("ANNOTEXT_STOP_WORD_ABORT", "0"),
        stop_words_path=Path(os.getenv("ANNOTEXT_STOP_WORDS_PATH"))
        if os.getenv("ANNOTEXT_STOP_WORDS_PATH")
        else None,
        dictionary_lock_timeout=float(raw_lock_timeout) if raw_lock_timeout else None,
    )
