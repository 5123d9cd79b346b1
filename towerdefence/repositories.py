"""Repositories reading and writing saved game, map and map-progress records."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from .resultset import execute_sql


@dataclass
class GameProgress:
    """The player's overall progress."""

    id: int
    coins: int = 0


@dataclass
class MapInfo:
    """A playable map."""

    id: int
    name: str


@dataclass
class MapProgress:
    """The best wave reached on one map."""

    map_id: int
    max_wave: int = 0


def _quote(text: str) -> str:
    """An SQL string literal."""
    return "'" + str(text).replace("'", "''") + "'"


class GameProgressRepository:
    """Access to the ``game_progress`` table."""

    def load(self, db: sqlite3.Connection) -> GameProgress | None:
        """The stored progress (the last row if several), or None if there is none."""
        rs = execute_sql(db, "SELECT id, coins FROM game_progress;")
        if not rs.row_count():
            return None
        last = rs.row_count() - 1
        return GameProgress(rs.integer(last, 0), rs.integer(last, 1))

    def delete_progress(self, db: sqlite3.Connection, progress_id: int) -> None:
        execute_sql(db, f"DELETE FROM game_progress WHERE id = {int(progress_id)};")

    def update_coins(self, db: sqlite3.Connection, progress_id: int, coins: int) -> None:
        execute_sql(
            db,
            f"UPDATE game_progress SET coins = {int(coins)} WHERE id = {int(progress_id)};",
        )

    def upsert(self, db: sqlite3.Connection, progress: GameProgress) -> None:
        execute_sql(
            db,
            "INSERT INTO game_progress(id, coins) "
            f"VALUES({int(progress.id)}, {int(progress.coins)}) "
            "ON CONFLICT(id) DO UPDATE SET coins = excluded.coins;",
        )

    def exists(self, db: sqlite3.Connection) -> bool:
        rs = execute_sql(db, "SELECT 1 FROM game_progress LIMIT 1;")
        return rs.row_count() != 0


class MapsRepository:
    """Access to the ``maps`` table."""

    def load(self, db: sqlite3.Connection) -> list[MapInfo]:
        rs = execute_sql(db, "SELECT id, name FROM maps;")
        return [MapInfo(rs.integer(row, 0), rs.text(row, 1)) for row in range(rs.row_count())]

    def get_map_by_id(self, db: sqlite3.Connection, map_id: int) -> MapInfo:
        """The map with the given id; LookupError if there is none."""
        rs = execute_sql(db, f"SELECT id, name FROM maps WHERE id = {int(map_id)};")
        if not rs.row_count():
            raise LookupError(f"no map with id {map_id}")
        return MapInfo(rs.integer(0, 0), rs.text(0, 1))

    def upsert(self, db: sqlite3.Connection, map_info: MapInfo) -> None:
        execute_sql(
            db,
            "INSERT INTO maps(id, name) "
            f"VALUES({int(map_info.id)}, {_quote(map_info.name)}) "
            "ON CONFLICT(id) DO UPDATE SET name = excluded.name;",
        )

    def count(self, db: sqlite3.Connection) -> int:
        rs = execute_sql(db, "SELECT COUNT(*) FROM maps;")
        return rs.integer(0, 0) if rs.row_count() else 0


class MapsProgressRepository:
    """Access to the ``map_progress`` table."""

    def load(self, db: sqlite3.Connection) -> list[MapProgress]:
        rs = execute_sql(db, "SELECT map_id, max_wave FROM map_progress;")
        return [
            MapProgress(rs.integer(row, 0), rs.integer(row, 1))
            for row in range(rs.row_count())
        ]

    def exists(self, db: sqlite3.Connection, map_id: int) -> bool:
        rs = execute_sql(db, f"SELECT 1 FROM map_progress WHERE map_id = {int(map_id)} LIMIT 1;")
        return rs.row_count() != 0

    def upsert(self, db: sqlite3.Connection, progress: MapProgress) -> None:
        execute_sql(
            db,
            "INSERT INTO map_progress(map_id, max_wave) "
            f"VALUES({int(progress.map_id)}, {int(progress.max_wave)}) "
            "ON CONFLICT(map_id) DO UPDATE SET max_wave = excluded.max_wave;",
        )

    def update_max_wave(self, db: sqlite3.Connection, map_id: int, max_wave: int) -> None:
        """Raise the stored best wave; a lower value leaves it unchanged."""
        execute_sql(
            db,
            f"UPDATE map_progress SET max_wave = {int(max_wave)} "
            f"WHERE map_id = {int(map_id)} AND max_wave < {int(max_wave)};",
        )

    def delete_progress(self, db: sqlite3.Connection) -> None:
        execute_sql(db, "DELETE FROM map_progress;")