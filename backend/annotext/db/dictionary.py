from __future__ import annotations

from contextlib import closing
from pathlib import Path

from annotext.db.migrations import get_connection


class SqliteDictionary:
    """Word set persisted in the `dictionary_words` table.

    Several named dictionaries can share one database file.
    """

    def __init__(self, db_path: Path, name: str = "stop_words"):
        self.db_path = db_path
        self.name = name

    def contains(self, word: str) -> bool:
        with closing(get_connection(self.db_path)) as conn, conn:
            row = conn.execute(
                "SELECT 1 FROM dictionary_words WHERE dictionary = ? AND word = ? LIMIT 1",
                (self.name, word),
            ).fetchone()
        return row is not None

    def add(self, word: str) -> bool:
        with closing(get_connection(self.db_path)) as conn, conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO dictionary_words (dictionary, word) VALUES (?, ?)",
                (self.name, word),
            )
            inserted = cursor.rowcount == 1
            if inserted:
                conn.execute(
                    "INSERT INTO learning_events (dictionary, word) VALUES (?, ?)",
                    (self.name, word),
                )
        return inserted

    def sync(self) -> None:
        return None

    def get_all(self) -> set[str]:
        with closing(get_connection(self.db_path)) as conn, conn:
            rows = conn.execute(
                "SELECT word FROM dictionary_words WHERE dictionary = ?",
                (self.name,),
            ).fetchall()
        return {str(row["word"]) for row in rows}
