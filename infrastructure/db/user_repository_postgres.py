from __future__ import annotations

from typing import List, Optional

import psycopg2

from domain.models import User
from domain.repositories import UserRepository
from infrastructure.db.records import dump_record, load_record


class PostgresUserRepository(UserRepository):
    """
    Postgres-backed implementation of `UserRepository`.

    Mirrors `SqliteUserRepository`: one row per user holding the id and the
    JSON text of the record.
    """

    def __init__(self, db_params: dict) -> None:
        self._db_params = db_params
        self._ensure_table()

    def _get_connection(self):
        return psycopg2.connect(**self._db_params)

    def _ensure_table(self) -> None:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS users (
                        id BIGINT PRIMARY KEY,
                        data TEXT NOT NULL
                    )
                    """
                )
                conn.commit()

    @staticmethod
    def _to_domain(row) -> User:
        return User.from_dict(load_record(row[0]))

    def insert(self, user_id: int, user: User) -> Optional[User]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                # Lock the existing row, if any, so the prior value we return
                # is the one being replaced.
                cur.execute(
                    "SELECT data FROM users WHERE id = %s FOR UPDATE", (user_id,)
                )
                row = cur.fetchone()
                cur.execute(
                    """
                    INSERT INTO users (id, data)
                    VALUES (%s, %s)
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
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM users WHERE id = %s", (user_id,))
                row = cur.fetchone()
                if not row:
                    return None
                return self._to_domain(row)

    def list_all(self) -> List[User]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM users ORDER BY id")
                rows = cur.fetchall()
                return [self._to_domain(row) for row in rows]
