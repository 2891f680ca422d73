from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from annotext.core.config import load_settings
from annotext.db.migrations import apply_migrations
from annotext.db.seed import STARTER_STOP_WORDS, read_word_list, seed_stop_words
from annotext.nlp.snowball import load_snowball_stemmer


def main() -> int:
    parser = argparse.ArgumentParser(description="Apply migrations and seed the stop-word dictionary.")
    parser.add_argument("--words", type=Path, default=None, help="Word list file, one word per line.")
    args = parser.parse_args()

    settings = load_settings()
    applied = apply_migrations(settings.db_path)
    stemmer = load_snowball_stemmer(settings)
    words = read_word_list(args.words) if args.words else list(STARTER_STOP_WORDS)
    seeded = seed_stop_words(settings.db_path, words, stemmer)

    print(
        json.dumps(
            {
                "db_path": str(settings.db_path),
                "applied_migrations": applied,
                **seeded,
            },
            ensure_ascii=False,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
