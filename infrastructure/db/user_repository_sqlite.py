from __future__ import annotations

import sqlite3
from typing import List, Optional

from domain.models import User
from domain.repositories import UserRepository
from infrastructure.db.records import dump_record, load_record


class SqliteUserRepository(UserRepository):
    """
    SQLite-backed implementation of `UserRepository`.

    This repository owns the `users` table. Each row keeps the user id and
    the JSON form of the whole record, so that fields such as `post_ids`
    survive without a schema of their own. The table is created if needed.
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
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY,
                    data TEXT NOT NULL
                )
                """
            )
            conn.commit()

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> User:
        return User.from_dict(load_record(row[0]))

    def insert(self, user_id: int, user: User) -> Optional[User]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT data FROM users WHERE id = ?", (user_id,))
            row = cur.fetchone()
            cur.execute(
                """
                INSERT INTO users (id, data)
                VALUES (?, ?)
                ON CONFLICT (id) DO UPDATE SET data = excluded.data
                """,
                (user_id, dump_record(user.to_dict())),
            )
            conn.commit()
            if not row:
                return None
            return self._to_domain(row)

    def get(self, user_id: int) -> Optional[User]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT data FROM users WHERE id = ?", (user_id,))
            row = cur.fetchone()
            if not row:
                return None
            return self._to_domain(row)

    def list_all(self) -> List[User]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT data FROM users ORDER BY id")
            rows = cur.fetchall()
            return [self._to_domain(row) for row in rows]
