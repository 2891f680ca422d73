from __future__ import annotations

import json
import statistics
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


ROOT_DIR = Path(__file__).resolve().parents[1]
REPORTS_DIR = ROOT_DIR / "test-data" / "benchmark-reports"


def summarize_latencies(latencies_ms: list[float]) -> dict[str, float]:
    if not latencies_ms:
        return {"count": 0, "mean_ms": 0.0, "p50_ms": 0.0, "p95_ms": 0.0, "max_ms": 0.0}
    ordered = sorted(latencies_ms)
    p95_index = min(len(ordered) - 1, int(round(0.95 * (len(ordered) - 1))))
    return {
        "count": len(ordered),
        "mean_ms": round(statistics.fmean(ordered), 4),
        "p50_ms": round(statistics.median(ordered), 4),
        "p95_ms": round(ordered[p95_index], 4),
        "max_ms": round(ordered[-1], 4),
    }


def append_benchmark_report(
    *,
    benchmark: str,
    run_data: dict[str, Any],
    reports_dir: Path = REPORTS_DIR,
) -> Path:
    """Append one benchmark run to the JSON history kept per benchmark."""
    reports_dir.mkdir(parents=True, exist_ok=True)
    report_path = reports_dir / f"{benchmark}-report.json"

    now = datetime.now(timezone.utc).isoformat()
    runs: list[dict[str, Any]] = []
    payload: dict[str, Any] = {"benchmark": benchmark, "created_at": now}
    if report_path.exists():
        payload = json.loads(report_path.read_text(encoding="utf-8"))
        existing = payload.get("runs", [])
        runs = existing if isinstance(existing, list) else []

    runs.append({"timestamp": now, **run_data})
    payload["updated_at"] = now
    payload["runs"] = runs

    report_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return report_path
