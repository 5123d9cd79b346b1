"""Loading, updating and resetting the player's saved progress."""

from __future__ import annotations

import os

from .database import ProgressSeeder, UserProgressDatabase
from .repositories import (
    GameProgress,
    GameProgressRepository,
    MapInfo,
    MapProgress,
    MapsProgressRepository,
    MapsRepository,
)

TABLES = ("game_progress", "maps", "map_progress")


class ProgressManager:
    """Keeps the saved progress in memory and writes every change through to the database."""

    def __init__(self, game_repo: GameProgressRepository, maps_repo: MapsRepository,
                 maps_progress_repo: MapsProgressRepository,
                 database: UserProgressDatabase) -> None:
        self.game_repo = game_repo
        self.maps_repo = maps_repo
        self.maps_progress_repo = maps_progress_repo
        self.database = database
        self._game_progress: GameProgress | None = None
        self._maps: list[MapInfo] = []
        self._maps_progress: list[MapProgress] = []

    def load_all(self, db_path: str | os.PathLike[str]) -> None:
        """Open the database, create and seed missing data, then load everything."""
        self.database.open(db_path)
        if not all(self.database.table_exists(name) for name in TABLES):
            self.database.create_tables()
        db = self.database.connection()
        ProgressSeeder(self.game_repo, self.maps_repo, self.maps_progress_repo).seed(db)
        self._game_progress = self.game_repo.load(db)
        self._maps = self.maps_repo.load(db)
        self._maps_progress = self.maps_progress_repo.load(db)

    def delete_progress(self) -> None:
        """Reset coins and every map's best wave to zero."""
        db = self.database.connection()
        if self._game_progress is not None:
            self.game_repo.upsert(db, GameProgress(1, 0))
            self._game_progress = self.game_repo.load(db)
        if self._maps_progress:
            for map_info in self._maps:
                if self.maps_progress_repo.exists(db, map_info.id):
                    self.maps_progress_repo.upsert(db, MapProgress(map_info.id, 0))
            self._maps_progress = self.maps_progress_repo.load(db)

    def close(self) -> None:
        self.database.close()

    def game_progress(self) -> GameProgress | None:
        return self._game_progress

    def update_coins(self, progress_id: int, coins: int) -> None:
        if self._game_progress is not None:
            self._game_progress.coins = coins
        self.game_repo.update_coins(self.database.connection(), progress_id, coins)

    def maps(self) -> list[MapInfo]:
        return self._maps

    def upsert_map(self, map_info: MapInfo) -> None:
        self.maps_repo.upsert(self.database.connection(), map_info)

    def maps_progress(self) -> list[MapProgress]:
        return self._maps_progress

    def update_max_wave(self, map_id: int, max_wave: int) -> None:
        """Record a new best wave for a map; a lower or equal wave changes nothing."""
        entry = next((p for p in self._maps_progress if p.map_id == map_id), None)
        if entry is None:
            raise LookupError(f"no progress for map {map_id}")
        if entry.max_wave < max_wave:
            entry.max_wave = max_wave
            self.maps_progress_repo.update_max_wave(self.database.connection(), map_id, max_wave)