#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
BACKEND_DIR = ROOT_DIR / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from annotext.core.config import load_settings
from annotext.db.seed import STARTER_STOP_WORDS
from annotext.nlp.adapter import IdentityStemmer, Stemmer
from annotext.services.dictionary import CachedDictionary
from annotext.services.enrichers.number import Number, NumberEnricher
from annotext.services.pipeline import build_default_pipeline
from benchmark_reporting import append_benchmark_report, summarize_latencies


SENTENCES = (
    "У меня 120 печеник и 30 котов. И - 50 и -90. 140% 40 % 70",
    "Приветик, как твои дела? Я хочу купить слона. %",
    "Температура упала до минус 15 градусов, а вчера было 3",
    "В 2024 году 12wr машин проехали 300 км",
)

EXPECTED_NUMBERS = [
    Number.unsigned_value(120),
    Number.unsigned_value(30),
    Number.signed_value(-50),
    Number.signed_value(-90),
    Number.unsigned_value(140),
    Number.unsigned_value(40),
    Number.unsigned_value(70),
]


def _load_stemmer(allow_identity: bool) -> tuple[Stemmer, str | None]:
    try:
        from annotext.nlp.snowball import load_snowball_stemmer

        return load_snowball_stemmer(load_settings()), None
    except Exception as exc:  # pragma: no cover - environment fallback
        if not allow_identity:
            raise
        return IdentityStemmer(), f"snowball stemmer unavailable; using identity: {exc}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Measure concurrent sentence production.")
    parser.add_argument("--iterations", type=int, default=2000)
    parser.add_argument("--workers", type=int, default=4)
    parser.add_argument("--allow-identity-stemmer", action="store_true")
    args = parser.parse_args()

    stemmer, warning = _load_stemmer(args.allow_identity_stemmer)
    dictionary = CachedDictionary(stemmer.stem(word) for word in STARTER_STOP_WORDS)
    pipeline, _ = build_default_pipeline(stemmer, dictionary)

    numbers = [number for _, number in NumberEnricher.extract(pipeline.produce(SENTENCES[0]))]
    if numbers != EXPECTED_NUMBERS:
        print(f"Number extraction mismatch: {numbers}")
        return 1

    def produce(index: int) -> float:
        started = time.perf_counter()
        pipeline.produce(SENTENCES[index % len(SENTENCES)])
        return (time.perf_counter() - started) * 1000.0

    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=args.workers) as executor:
        latencies = list(executor.map(produce, range(args.iterations)))
    elapsed = time.perf_counter() - started

    summary = summarize_latencies(latencies)
    run_data = {
        "iterations": args.iterations,
        "workers": args.workers,
        "stemmer": stemmer.metadata(),
        "sentences_per_second": round(args.iterations / elapsed, 2) if elapsed else None,
        "latency": summary,
        "warning": warning,
    }
    report_path = append_benchmark_report(benchmark="pipeline", run_data=run_data)

    print("Annotext Pipeline Benchmark")
    if warning:
        print(f"Warning: {warning}")
    print(f"Sentences/s: {run_data['sentences_per_second']}")
    print(f"Latency p50/p95 (ms): {summary['p50_ms']} / {summary['p95_ms']}")
    print(f"Report: {report_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
