from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from annotext.api.router import api_router
from annotext.core.config import Settings, load_settings
from annotext.core.logging import configure_logging
from annotext.db.dictionary import SqliteDictionary
from annotext.db.migrations import apply_migrations
from annotext.db.seed import read_word_list, seed_stop_words
from annotext.nlp.adapter import Stemmer
from annotext.services.dictionary import CachedDictionary
from annotext.services.pipeline import build_default_pipeline

logger = logging.getLogger(__name__)


def _default_stemmer_factory(settings: Settings) -> Stemmer:
    # Import lazily so a missing stemmer package degrades health instead of crashing import.
    from annotext.nlp.snowball import load_snowball_stemmer

    return load_snowball_stemmer(settings)


def create_app(
    settings: Settings | None = None,
    stemmer_factory: Callable[[Settings], Stemmer] = _default_stemmer_factory,
) -> FastAPI:
    app_settings = settings or load_settings()
    configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        applied: list[str] = []

        try:
            app_settings.db_path.parent.mkdir(parents=True, exist_ok=True)
            applied = apply_migrations(app_settings.db_path)
            app.state.db_ready = True
            app.state.db_error = None
        except Exception as exc:
            app.state.db_ready = False
            app.state.db_error = str(exc)
            logger.exception(
                "backend_db_startup_failed",
                extra={"db_path": str(app_settings.db_path)},
            )

        stemmer: Stemmer | None = None
        try:
            stemmer = stemmer_factory(app_settings)
            app.state.stemmer_ready = True
            app.state.stemmer_error = None
        except Exception as exc:
            app.state.stemmer_ready = False
            app.state.stemmer_error = str(exc)
            logger.exception(
                "backend_stemmer_startup_failed",
                extra={"stemmer_language": app_settings.stemmer_language},
            )
        app.state.stemmer = stemmer

        seeded: dict[str, int] | None = None
        if stemmer is not None and app.state.db_ready and app_settings.stop_words_path is not None:
            try:
                seeded = seed_stop_words(
                    app_settings.db_path,
                    read_word_list(app_settings.stop_words_path),
                    stemmer,
                )
            except Exception:
                logger.exception(
                    "backend_stop_word_seed_failed",
                    extra={"stop_words_path": str(app_settings.stop_words_path)},
                )

        if app.state.db_ready:
            dictionary = CachedDictionary.with_inner(
                SqliteDictionary(app_settings.db_path),
                lock_timeout=app_settings.dictionary_lock_timeout,
            )
            try:
                dictionary.sync()
            except Exception:
                logger.exception("backend_dictionary_sync_failed")
        else:
            # Without a database the stop-word stage still works, but learns in memory only.
            dictionary = CachedDictionary(lock_timeout=app_settings.dictionary_lock_timeout)

        if stemmer is not None:
            pipeline, stop_word_enricher = build_default_pipeline(
                stemmer,
                dictionary,
                numbers_enabled=app_settings.numbers_enabled,
                stop_words_enabled=app_settings.stop_words_enabled,
                abort_on_stop_word=app_settings.stop_word_abort,
            )
            app.state.pipeline = pipeline
            app.state.stop_word_enricher = stop_word_enricher

        startup_status = "ok" if app.state.db_ready and app.state.stemmer_ready else "degraded"
        logger.info(
            "backend_startup",
            extra={
                "status": startup_status,
                "environment": app_settings.environment,
                "db_path": str(app_settings.db_path),
                "host": app_settings.host,
                "port": app_settings.port,
                "applied_migrations": applied,
                "db_error": app.state.db_error,
                "stemmer_error": app.state.stemmer_error,
                "stemmer": stemmer.metadata() if stemmer else None,
                "seeded": seeded,
                "dictionary_size": len(dictionary),
                "stop_word_abort": app_settings.stop_word_abort,
            },
        )
        yield

    app = FastAPI(title="Annotext Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.db_ready = False
    app.state.db_error = None
    app.state.stemmer_ready = False
    app.state.stemmer_error = None
    app.state.stemmer = None
    app.state.pipeline = None
    app.state.stop_word_enricher = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
