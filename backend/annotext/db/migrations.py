from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


def get_connection(db_path: Path) -> sqlite3.Connection:
    # Connections are opened per call and closed by callers, so threads never share one.
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def apply_migrations(db_path: Path, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    db_path.parent.mkdir(parents=True, exist_ok=True)

    applied_now: list[str] = []
    with closing(get_connection(db_path)) as conn, conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
              version TEXT PRIMARY KEY,
              applied_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP)
            )
            """
        )

        applied_versions = {
            row["version"]
            for row in conn.execute("SELECT version FROM schema_migrations").fetchall()
        }

        for migration_file in sorted(migrations_dir.glob("*.sql")):
            version = migration_file.name
            if version in applied_versions:
                continue

            conn.executescript(migration_file.read_text(encoding="utf-8"))
            conn.execute(
                "INSERT INTO schema_migrations (version) VALUES (?)",
                (version,),
            )
            applied_now.append(version)

    return applied_now
