from __future__ import annotations

import sqlite3
from typing import List, Optional

from domain.models import Post
from domain.repositories import PostRepository
from infrastructure.db.records import dump_record, load_record


class SqlitePostRepository(PostRepository):
    """
    SQLite-backed implementation of `PostRepository`.

    Owns the `posts` table. Comments are stored inside the post's JSON
    record rather than in a table of their own.
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
                CREATE TABLE IF NOT EXISTS posts (
                    id INTEGER PRIMARY KEY,
                    data TEXT NOT NULL
                )
                """
            )
            conn.commit()

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Post:
        return Post.from_dict(load_record(row[0]))

    def insert(self, post_id: int, post: Post) -> Optional[Post]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT data FROM posts WHERE id = ?", (post_id,))
            row = cur.fetchone()
            cur.execute(
                """
                INSERT INTO posts (id, data)
                VALUES (?, ?)
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
            cur = conn.cursor()
            cur.execute("SELECT data FROM posts WHERE id = ?", (post_id,))
            row = cur.fetchone()
            if not row:
                return None
            return self._to_domain(row)

    def list_all(self) -> List[Post]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT data FROM posts ORDER BY id")
            rows = cur.fetchall()
            return [self._to_domain(row) for row in rows]
