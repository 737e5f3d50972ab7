import unittest
from unittest import mock

import psycopg2

from domain.errors import IdAllocationError
from domain.models import Post, User
from infrastructure.db.counter_repository_postgres import PostgresIdCounter
from infrastructure.db.post_repository_postgres import PostgresPostRepository
from infrastructure.db.records import dump_record
from infrastructure.db.user_repository_postgres import PostgresUserRepository

DB_PARAMS = {"host": "localhost", "dbname": "feeds"}


def _fake_connection():
    conn = mock.MagicMock()
    conn.__enter__.return_value = conn
    cursor = conn.cursor.return_value
    cursor.__enter__.return_value = cursor
    return conn, cursor


class PostgresRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn, self.cursor = _fake_connection()
        patcher = mock.patch("psycopg2.connect", return_value=self.conn)
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)

    def test_counter_returns_value_before_increment(self):
        counter = PostgresIdCounter(DB_PARAMS)
        self.cursor.fetchone.return_value = (4,)

        self.assertEqual(counter.next_id(), 4)
        self.connect.assert_called_with(**DB_PARAMS)
        sql = self.cursor.execute.call_args[0][0]
        self.assertIn("RETURNING value - 1", sql)

    def test_counter_failure_is_fatal(self):
        counter = PostgresIdCounter(DB_PARAMS)
        self.connect.side_effect = psycopg2.OperationalError("server down")
        with self.assertRaises(IdAllocationError):
            counter.next_id()

    def test_user_insert_returns_prior_record(self):
        repo = PostgresUserRepository(DB_PARAMS)
        alice = User(id=0, name="alice", phone="555-0100", password="pw1")

        self.cursor.fetchone.return_value = None
        self.assertIsNone(repo.insert(0, alice))
        params = self.cursor.execute.call_args[0][1]
        self.assertEqual(params, (0, dump_record(alice.to_dict())))

        self.cursor.fetchone.return_value = (dump_record(alice.to_dict()),)
        self.assertEqual(repo.insert(0, alice), alice)

    def test_post_reads_map_rows_to_domain(self):
        repo = PostgresPostRepository(DB_PARAMS)
        post = Post(id=1, title="Hello World", content="Hi there!!", user_id=0)

        self.cursor.fetchone.return_value = (dump_record(post.to_dict()),)
        self.assertEqual(repo.get(1), post)

        self.cursor.fetchall.return_value = [(dump_record(post.to_dict()),)]
        self.assertEqual(repo.list_all(), [post])

        self.cursor.fetchone.return_value = None
        self.assertIsNone(repo.get(2))


if __name__ == "__main__":
    unittest.main()
