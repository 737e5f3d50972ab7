from __future__ import annotations

import psycopg2

from domain.errors import IdAllocationError
from domain.repositories import IdCounter

COUNTER_NAME = "global"


class PostgresIdCounter(IdCounter):
    """
    Postgres-backed implementation of `IdCounter`.

    The counter row is advanced with a single `UPDATE ... RETURNING`, so the
    read and the increment happen in one statement.
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
                    CREATE TABLE IF NOT EXISTS id_counter (
                        name TEXT PRIMARY KEY,
                        value BIGINT NOT NULL
                    )
                    """
                )
                cur.execute(
                    """
                    INSERT INTO id_counter (name, value)
                    VALUES (%s, 0)
                    ON CONFLICT (name) DO NOTHING
                    """,
                    (COUNTER_NAME,),
                )
                conn.commit()

    def next_id(self) -> int:
        try:
            with self._get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE id_counter
                        SET value = value + 1
                        WHERE name = %s
                        RETURNING value - 1
                        """,
                        (COUNTER_NAME,),
                    )
                    row = cur.fetchone()
                    conn.commit()
        except psycopg2.Error as exc:
            raise IdAllocationError("Cannot increment ids") from exc
        if not row:
            raise IdAllocationError("Id counter row is missing")
        return int(row[0])
