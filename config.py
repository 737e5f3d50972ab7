from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from application.services import FeedState


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


@dataclass
class Settings:
    """
    Runtime settings read from the environment.

    Call `load_dotenv()` before instantiating so values from a `.env` file
    are visible here.
    """

    telegram_token: Optional[str] = field(
        default_factory=lambda: os.environ.get("TELEGRAM_TOKEN")
    )
    db_backend: str = field(default_factory=lambda: _env("DB_BACKEND", "sqlite"))
    db_path: str = field(default_factory=lambda: _env("DB_PATH", "feeds.db"))
    postgres_host: str = field(default_factory=lambda: _env("POSTGRES_HOST", "localhost"))
    postgres_port: int = field(default_factory=lambda: int(_env("POSTGRES_PORT", "5432")))
    postgres_db: str = field(default_factory=lambda: _env("POSTGRES_DB", "feeds"))
    postgres_user: str = field(default_factory=lambda: _env("POSTGRES_USER", "postgres"))
    postgres_password: str = field(default_factory=lambda: _env("POSTGRES_PASSWORD"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.environ.get("LOG_FILE"))

    @property
    def postgres_params(self) -> dict:
        return {
            "host": self.postgres_host,
            "port": self.postgres_port,
            "dbname": self.postgres_db,
            "user": self.postgres_user,
            "password": self.postgres_password,
        }


def build_state(settings: Settings) -> FeedState:
    """Wire the configured storage backend into a `FeedState`."""

    backend = settings.db_backend.lower()

    if backend == "sqlite":
        from infrastructure.db.counter_repository_sqlite import SqliteIdCounter
        from infrastructure.db.post_repository_sqlite import SqlitePostRepository
        from infrastructure.db.user_repository_sqlite import SqliteUserRepository

        return FeedState(
            counter=SqliteIdCounter(settings.db_path),
            users=SqliteUserRepository(settings.db_path),
            posts=SqlitePostRepository(settings.db_path),
        )

    if backend == "postgres":
        # Imported lazily so SQLite deployments do not need libpq at import time.
        from infrastructure.db.counter_repository_postgres import PostgresIdCounter
        from infrastructure.db.post_repository_postgres import PostgresPostRepository
        from infrastructure.db.user_repository_postgres import PostgresUserRepository

        params = settings.postgres_params
        return FeedState(
            counter=PostgresIdCounter(params),
            users=PostgresUserRepository(params),
            posts=PostgresPostRepository(params),
        )

    raise ValueError(f"Unknown DB_BACKEND: {settings.db_backend!r}")
