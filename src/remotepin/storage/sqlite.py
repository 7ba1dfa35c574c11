"""SQLite implementation of the ConfigRepo protocol."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from remotepin.interfaces.repo import RepoConfig

CONFIG_DB = "config.db"

SCHEMA = """
-- Repository config document (JSON)
CREATE TABLE IF NOT EXISTS config (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    body TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteConfigRepo:
    """Repository config stored as a single JSON document in SQLite.

    A handle is meant to live for one read-mutate-write cycle: open it,
    read, write, close. Nothing is cached between reads.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        assert self._db is not None, "Repo not initialized. Call initialize() first."
        return self._db

    async def read_config(self) -> RepoConfig:
        async with self.db.execute("SELECT body FROM config WHERE id=1") as cur:
            row = await cur.fetchone()
            if row is None:
                return RepoConfig()
            return RepoConfig.from_document(json.loads(row["body"]))

    async def write_config(self, cfg: RepoConfig) -> None:
        await self.db.execute(
            "INSERT INTO config (id, body, updated_at) VALUES (1, ?, ?)"
            " ON CONFLICT(id) DO UPDATE SET body=excluded.body,"
            " updated_at=excluded.updated_at",
            (json.dumps(cfg.to_document(), sort_keys=True), _now()),
        )
        await self.db.commit()


async def open_repo(root: str) -> SQLiteConfigRepo:
    """Open the config repo under ``root`` (``~`` is expanded)."""
    repo = SQLiteConfigRepo(str(Path(root).expanduser() / CONFIG_DB))
    await repo.initialize()
    return repo
