"""The SQLite database holding user progress, and seeding it with defaults."""

from __future__ import annotations

import os
import sqlite3

from .repositories import (
    GameProgress,
    GameProgressRepository,
    MapInfo,
    MapProgress,
    MapsProgressRepository,
    MapsRepository,
)
from .resultset import SqlError, execute_sql

SCHEMA = """
CREATE TABLE IF NOT EXISTS game_progress (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    coins INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS maps (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS map_progress (
    map_id INTEGER NOT NULL PRIMARY KEY,
    max_wave INTEGER DEFAULT 0,
    FOREIGN KEY(map_id) REFERENCES maps(id)
);
"""

DEFAULT_MAPS = (
    MapInfo(1, "Pondside path"),
    MapInfo(2, "Crescent cliff"),
    MapInfo(3, "Looping turn"),
)


class UserProgressDatabase:
    """An open-or-closed connection to the progress database."""

    def __init__(self) -> None:
        self._connection: sqlite3.Connection | None = None

    def open(self, path: str | os.PathLike[str]) -> None:
        """Open the database file, creating it if needed; SqlError on failure."""
        self.close()
        try:
            self._connection = sqlite3.connect(path)
        except sqlite3.Error as exc:
            raise SqlError(f"failed to open database {path}: {exc}") from exc

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def connection(self) -> sqlite3.Connection:
        """The open connection; SqlError if the database is closed."""
        if self._connection is None:
            raise SqlError("database is not open")
        return self._connection

    def table_exists(self, name: str) -> bool:
        if self._connection is None:
            return False
        try:
            cursor = self._connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (name,)
            )
        except sqlite3.Error:
            return False
        return cursor.fetchone() is not None

    def create_tables(self) -> None:
        """Create any missing tables; a failure closes the database and raises SqlError."""
        if self._connection is None:
            return
        try:
            execute_sql(self._connection, SCHEMA)
        except SqlError:
            self.close()
            raise

    def __enter__(self) -> UserProgressDatabase:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class ProgressSeeder:
    """Fills an empty progress database with the default maps and zeroed progress."""

    def __init__(self, game_repo: GameProgressRepository, maps_repo: MapsRepository,
                 maps_progress_repo: MapsProgressRepository) -> None:
        self.game_repo = game_repo
        self.maps_repo = maps_repo
        self.maps_progress_repo = maps_progress_repo

    def seed(self, db: sqlite3.Connection) -> None:
        if self.maps_repo.count(db) == 0:
            for map_info in DEFAULT_MAPS:
                self.maps_repo.upsert(db, map_info)

        if not self.game_repo.exists(db):
            self.game_repo.upsert(db, GameProgress(1, 0))

        for map_info in self.maps_repo.load(db):
            if not self.maps_progress_repo.exists(db, map_info.id):
                self.maps_progress_repo.upsert(db, MapProgress(map_info.id, 0))