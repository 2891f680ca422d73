from __future__ import annotations

import logging
import sqlite3
from typing import Literal

from fastapi import APIRouter, HTTPException, Request

from annotext.api.schemas.v1.dictionary import (
    AddStopWordRequest,
    AddStopWordResponse,
    StopWordListResponse,
    SyncDictionaryResponse,
)
from annotext.core.errors import ExclusiveAccessError
from annotext.services.enrichers.stop_word import StopWordEnricher

router = APIRouter()
logger = logging.getLogger(__name__)


def _stop_word_enricher(request: Request) -> StopWordEnricher:
    if not bool(getattr(request.app.state, "db_ready", False)):
        raise HTTPException(
            status_code=503,
            detail="Database unavailable. Check backend logs and DB path configuration.",
        )
    enricher = getattr(request.app.state, "stop_word_enricher", None)
    if enricher is None:
        raise HTTPException(status_code=503, detail="Stop-word stage unavailable.")
    return enricher


@router.get("/dictionary/stop-words", response_model=StopWordListResponse)
def list_stop_words(request: Request) -> StopWordListResponse:
    enricher = _stop_word_enricher(request)
    return StopWordListResponse(words=sorted(enricher.words()))


@router.post("/dictionary/stop-words", response_model=AddStopWordResponse)
def add_stop_word(payload: AddStopWordRequest, request: Request) -> AddStopWordResponse:
    enricher = _stop_word_enricher(request)
    stemmer = request.app.state.stemmer
    stored_word = stemmer.stem(payload.word.strip().lower())
    if not stored_word:
        raise HTTPException(status_code=400, detail="word is required")

    try:
        inserted = enricher.add_word(stored_word)
    except ExclusiveAccessError as exc:
        logger.warning("dictionary_busy", extra={"error": str(exc)})
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except sqlite3.OperationalError as exc:
        logger.exception("dictionary_db_operational_error")
        raise HTTPException(
            status_code=503,
            detail=f"Database unavailable: {exc}",
        ) from exc

    status: Literal["inserted", "exists"] = "inserted" if inserted else "exists"
    return AddStopWordResponse(status=status, stored_word=stored_word)


@router.post("/dictionary/sync", response_model=SyncDictionaryResponse)
def sync_dictionary(request: Request) -> SyncDictionaryResponse:
    enricher = _stop_word_enricher(request)
    try:
        enricher.sync()
    except sqlite3.OperationalError as exc:
        logger.exception("dictionary_db_operational_error")
        raise HTTPException(
            status_code=503,
            detail=f"Database unavailable: {exc}",
        ) from exc
    return SyncDictionaryResponse(status="synced", size=len(enricher.words()))
