from __future__ import annotations

import json
import logging

from annotext.core.logging import JsonFormatter


def test_json_formatter_moves_extra_fields_into_context() -> None:
    record = logging.LogRecord(
        name="annotext.services.pipeline",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="sentence_enrichment_failed",
        args=(),
        exc_info=None,
    )
    record.stage = "stop_word"
    record.error = "stop word:[w]"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "annotext.services.pipeline"
    assert payload["message"] == "sentence_enrichment_failed"
    assert payload["context"] == {"stage": "stop_word", "error": "stop word:[w]"}
    assert "exception" not in payload


def test_json_formatter_keeps_non_ascii_text() -> None:
    record = logging.LogRecord("annotext", logging.INFO, __file__, 1, "слово", (), None)

    formatted = JsonFormatter().format(record)

    assert "слово" in formatted
