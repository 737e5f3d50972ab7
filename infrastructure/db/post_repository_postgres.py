from __future__ import annotations

from typing import List, Optional

import psycopg2

from domain.models import Post
from domain.repositories import PostRepository
from infrastructure.db.records import dump_record, load_record


class PostgresPostRepository(PostRepository):
    """Postgres-backed implementation of `PostRepository`."""

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
                    CREATE TABLE IF NOT EXISTS posts (
                        id BIGINT PRIMARY KEY,
                        data TEXT NOT NULL
                    )
                    """
                )
                conn.commit()

    @staticmethod
    def _to_domain(row) -> Post:
        return Post.from_dict(load_record(row[0]))

    def insert(self, post_id: int, post: Post) -> Optional[Post]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT data FROM posts WHERE id = %s FOR UPDATE", (post_id,)
                )
                row = cur.fetchone()
                cur.execute(
                    """
                    INSERT INTO posts (id, data)
                    VALUES (%s, %s)
                    ON CONFLICT (id) DO UPDATE SET data = excluded.data
                    """,
                    (post_id, dump_record(post.to_dict())),
                )
                conn.commit()
                if not row:
                    return None
                return self._to_domain(row)

    def get(self, post_id: int) -> Optional[Post]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM posts WHERE id = %s", (post_id,))
                row = cur.fetchone()
                if not row:
                    return None
                return self._to_domain(row)

    def list_all(self) -> List[Post]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM posts ORDER BY id")
                rows = cur.fetchall()
                return [self._to_domain(row) for row in rows]
