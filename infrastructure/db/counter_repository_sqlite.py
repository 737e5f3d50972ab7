from __future__ import annotations

import sqlite3

from domain.errors import IdAllocationError
from domain.repositories import IdCounter

COUNTER_NAME = "global"


class SqliteIdCounter(IdCounter):
    """
    SQLite-backed implementation of `IdCounter`.

    Keeps a single row in the `id_counter` table. The row is seeded with 0
    the first time the table is created and only ever moves forward.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS id_counter (
                    name TEXT PRIMARY KEY,
                    value INTEGER NOT NULL
                )
                """
            )
            cur.execute(
                "INSERT OR IGNORE INTO id_counter (name, value) VALUES (?, 0)",
                (COUNTER_NAME,),
            )
            conn.commit()

    def next_id(self) -> int:
        try:
            conn = self._get_connection()
            # Manage the transaction by hand so BEGIN IMMEDIATE takes the write
            # lock before the read; concurrent callers then queue up.
            conn.isolation_level = None
            try:
                with conn:
                    cur = conn.cursor()
                    cur.execute("BEGIN IMMEDIATE")
                    cur.execute(
                        "SELECT value FROM id_counter WHERE name = ?", (COUNTER_NAME,)
                    )
                    row = cur.fetchone()
                    if not row:
                        raise IdAllocationError("Id counter row is missing")
                    current = int(row[0])
                    cur.execute(
                        "UPDATE id_counter SET value = ? WHERE name = ?",
                        (current + 1, COUNTER_NAME),
                    )
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise IdAllocationError("Cannot increment ids") from exc
        return current
