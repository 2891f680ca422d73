from fastapi.testclient import TestClient

from annotext.core.config import Settings
from annotext.main import create_app


def test_health_route_returns_expected_shape(test_settings, stub_stemmer_factory) -> None:
    app = create_app(settings=test_settings, stemmer_factory=stub_stemmer_factory)
    with TestClient(app) as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "backend"
    assert payload["components"] == {"database": "ok", "stemmer": "ok"}
    assert payload["stages"] == ["number", "stop_word"]


def test_cors_allows_configured_origin(tmp_path, stub_stemmer_factory) -> None:
    settings = Settings(
        environment="test",
        app_name="annotext-backend-test",
        host="127.0.0.1",
        port=8001,
        db_path=tmp_path / "annotext.sqlite3",
        cors_origins=("http://127.0.0.1:5173",),
    )
    app = create_app(settings=settings, stemmer_factory=stub_stemmer_factory)

    with TestClient(app) as client:
        response = client.options(
            "/api/health",
            headers={
                "Origin": "http://127.0.0.1:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://127.0.0.1:5173"


def test_stemmer_failure_marks_backend_degraded(test_settings) -> None:
    def failing_stemmer_factory(_settings: Settings):
        raise RuntimeError("stemmer init failed")

    app = create_app(settings=test_settings, stemmer_factory=failing_stemmer_factory)
    with TestClient(app) as client:
        health_response = client.get("/api/health")
        produce_response = client.post("/api/sentences", json={"text": "120"})

    health = health_response.json()
    assert health["status"] == "degraded"
    assert health["components"] == {"database": "ok", "stemmer": "degraded"}
    assert health["stemmer_error"] == "stemmer init failed"
    assert produce_response.status_code == 503
    assert "Pipeline unavailable" in produce_response.json()["detail"]


def test_invalid_db_path_keeps_pipeline_but_blocks_dictionary(tmp_path, stub_stemmer_factory) -> None:
    blocked_parent = tmp_path / "blocked-parent"
    blocked_parent.write_text("not-a-directory", encoding="utf-8")
    settings = Settings(
        environment="test",
        app_name="annotext-backend-test",
        host="127.0.0.1",
        port=8001,
        db_path=blocked_parent / "annotext.sqlite3",
    )

    app = create_app(settings=settings, stemmer_factory=stub_stemmer_factory)
    with TestClient(app) as client:
        health_response = client.get("/api/health")
        produce_response = client.post("/api/sentences", json={"text": "-5"})
        words_response = client.get("/api/dictionary/stop-words")

    assert health_response.json()["components"]["database"] == "degraded"
    assert produce_response.status_code == 200
    assert produce_response.json()["numbers"] == [
        {"span": {"start": 0, "length": 2}, "value": -5, "signed": True}
    ]
    assert words_response.status_code == 503
    assert "Database unavailable" in words_response.json()["detail"]
