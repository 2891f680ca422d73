from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Request

from annotext.api.schemas.v1.sentences import (
    LearnSentenceRequest,
    LearnSentenceResponse,
    ProduceSentenceRequest,
    SentenceResponse,
)
from annotext.core.errors import ExclusiveAccessError
from annotext.nlp.meta import MetaKindMismatchError
from annotext.services.enrichers.stop_word import StopWordError
from annotext.services.use_cases.sentences import SentenceUseCase

router = APIRouter()
logger = logging.getLogger(__name__)


def _use_case(request: Request) -> SentenceUseCase:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise HTTPException(
            status_code=503,
            detail="Pipeline unavailable. Check backend logs and stemmer installation.",
        )
    return SentenceUseCase(
        pipeline,
        stop_word_enricher=getattr(request.app.state, "stop_word_enricher", None),
    )


@router.post("/sentences", response_model=SentenceResponse)
def produce_sentence(payload: ProduceSentenceRequest, request: Request) -> SentenceResponse:
    use_case = _use_case(request)
    try:
        return use_case.produce(payload.text)
    except StopWordError as exc:
        raise HTTPException(
            status_code=422,
            detail={"error": "stop_word", "stop_word": exc.stop_word, "message": str(exc)},
        ) from exc


@router.post("/sentences/learn", response_model=LearnSentenceResponse)
def learn_sentence(payload: LearnSentenceRequest, request: Request) -> LearnSentenceResponse:
    use_case = _use_case(request)
    try:
        return use_case.learn(payload)
    except (ValueError, MetaKindMismatchError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ExclusiveAccessError as exc:
        logger.warning("learn_dictionary_busy", extra={"error": str(exc)})
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except sqlite3.OperationalError as exc:
        logger.exception("learn_db_operational_error")
        raise HTTPException(
            status_code=503,
            detail=f"Database unavailable: {exc}",
        ) from exc
