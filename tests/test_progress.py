import pytest

from towerdefence.database import UserProgressDatabase
from towerdefence.progress import ProgressManager
from towerdefence.repositories import (
    GameProgressRepository,
    MapInfo,
    MapsProgressRepository,
    MapsRepository,
)
from towerdefence.resultset import SqlError


def make_manager():
    return ProgressManager(GameProgressRepository(), MapsRepository(),
                           MapsProgressRepository(), UserProgressDatabase())


@pytest.fixture
def manager(tmp_path):
    m = make_manager()
    m.load_all(tmp_path / "progress.sqlite")
    yield m
    m.close()


def test_load_all_seeds_default_maps(manager):
    names = [m.name for m in manager.maps()]
    assert names == ["Pondside path", "Crescent cliff", "Looping turn"]


def test_load_all_seeds_zero_progress(manager):
    assert manager.game_progress().coins == 0
    assert [p.map_id for p in manager.maps_progress()] == [m.id for m in manager.maps()]
    assert all(p.max_wave == 0 for p in manager.maps_progress())


def test_update_coins_persists(tmp_path):
    path = tmp_path / "progress.sqlite"
    first = make_manager()
    first.load_all(path)
    first.update_coins(1, 42)
    assert first.game_progress().coins == 42
    first.close()

    second = make_manager()
    second.load_all(path)
    assert second.game_progress().coins == 42
    assert len(second.maps()) == 3
    second.close()


def test_update_max_wave_only_raises(manager):
    manager.update_max_wave(2, 7)
    manager.update_max_wave(2, 3)
    by_id = {p.map_id: p.max_wave for p in manager.maps_progress()}
    assert by_id[2] == 7
    assert by_id[1] == 0


def test_update_max_wave_unknown_map(manager):
    with pytest.raises(LookupError):
        manager.update_max_wave(99, 1)


def test_delete_progress_resets(manager):
    manager.update_coins(1, 15)
    manager.update_max_wave(1, 4)
    manager.delete_progress()
    assert manager.game_progress().coins == 0
    assert all(p.max_wave == 0 for p in manager.maps_progress())


def test_upsert_map_renames(tmp_path):
    path = tmp_path / "progress.sqlite"
    m = make_manager()
    m.load_all(path)
    m.upsert_map(MapInfo(3, "Renamed"))
    m.close()
    again = make_manager()
    again.load_all(path)
    assert {x.id: x.name for x in again.maps()}[3] == "Renamed"
    again.close()


def test_closed_database_raises(manager):
    manager.close()
    with pytest.raises(SqlError):
        manager.update_coins(1, 5)