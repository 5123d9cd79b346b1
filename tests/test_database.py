import pytest

from towerdefence.database import ProgressSeeder, UserProgressDatabase
from towerdefence.repositories import (
    GameProgress,
    GameProgressRepository,
    MapProgress,
    MapsProgressRepository,
    MapsRepository,
)
from towerdefence.resultset import SqlError

TABLES = ("game_progress", "maps", "map_progress")


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "progress.sqlite"


@pytest.fixture
def database(db_path):
    database = UserProgressDatabase()
    database.open(db_path)
    yield database
    database.close()


def _seeder():
    return ProgressSeeder(GameProgressRepository(), MapsRepository(), MapsProgressRepository())


def test_create_tables(database):
    assert not any(database.table_exists(name) for name in TABLES)
    database.create_tables()
    assert all(database.table_exists(name) for name in TABLES)


def test_seed_defaults(database):
    database.create_tables()
    conn = database.connection()
    _seeder().seed(conn)
    maps = MapsRepository().load(conn)
    assert [m.name for m in maps] == ["Pondside path", "Crescent cliff", "Looping turn"]
    assert GameProgressRepository().load(conn) == GameProgress(1, 0)
    assert MapsProgressRepository().load(conn) == [MapProgress(m.id, 0) for m in maps]


def test_seed_is_idempotent(database):
    database.create_tables()
    conn = database.connection()
    _seeder().seed(conn)
    first = (MapsRepository().load(conn), MapsProgressRepository().load(conn))
    _seeder().seed(conn)
    assert (MapsRepository().load(conn), MapsProgressRepository().load(conn)) == first


def test_seed_keeps_existing_progress(database):
    database.create_tables()
    conn = database.connection()
    _seeder().seed(conn)
    GameProgressRepository().update_coins(conn, 1, 40)
    MapsProgressRepository().upsert(conn, MapProgress(2, 7))
    _seeder().seed(conn)
    assert GameProgressRepository().load(conn) == GameProgress(1, 40)
    assert MapProgress(2, 7) in MapsProgressRepository().load(conn)


def test_closed_database(database):
    database.close()
    with pytest.raises(SqlError):
        database.connection()
    assert database.table_exists("maps") is False
    database.create_tables()
    assert database.table_exists("maps") is False


def test_context_manager_closes(db_path):
    with UserProgressDatabase() as database:
        database.open(db_path)
        database.create_tables()
        assert database.table_exists("maps") is True
    with pytest.raises(SqlError):
        database.connection()


def test_data_persists_across_reopen(db_path):
    with UserProgressDatabase() as database:
        database.open(db_path)
        database.create_tables()
        _seeder().seed(database.connection())
    with UserProgressDatabase() as database:
        database.open(db_path)
        assert all(database.table_exists(name) for name in TABLES)
        assert MapsRepository().count(database.connection()) == 3