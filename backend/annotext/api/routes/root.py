from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
def api_root() -> dict[str, str]:
    return {"status": "ok", "message": "annotext backend"}


@router.get("/health")
def health(request: Request) -> dict[str, object]:
    db_ready = bool(getattr(request.app.state, "db_ready", False))
    stemmer_ready = bool(getattr(request.app.state, "stemmer_ready", False))
    status = "ok" if db_ready and stemmer_ready else "degraded"
    payload: dict[str, object] = {
        "status": status,
        "service": "backend",
        "components": {
            "database": "ok" if db_ready else "degraded",
            "stemmer": "ok" if stemmer_ready else "degraded",
        },
    }

    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is not None:
        payload["stages"] = [enricher.name for enricher in pipeline.enrichers]

    db_error = getattr(request.app.state, "db_error", None)
    stemmer_error = getattr(request.app.state, "stemmer_error", None)
    if db_error:
        payload["db_error"] = str(db_error)
    if stemmer_error:
        payload["stemmer_error"] = str(stemmer_error)

    return payload
