from towerdefence.level import Level, Rect, Tileset


def test_spawn_point_defaults_to_first_path_point():
    level = Level(enemy_path=[(16.0, 32.0), (64.0, 32.0)])
    assert level.spawn_point() == (16.0, 32.0)


def test_explicit_spawn_wins():
    level = Level(enemy_path=[(16.0, 32.0)], spawn=(5.0, 6.0))
    assert level.spawn_point() == (5.0, 6.0)


def test_spawn_point_without_path_is_origin():
    assert Level().spawn_point() == (0.0, 0.0)


def test_rect_edges():
    rect = Rect(10, 20, 30, 40)
    assert rect.right == rect.x + rect.w
    assert rect.bottom == rect.y + rect.h


def test_level_collections_are_independent():
    first = Level()
    second = Level()
    first.path_areas.append(Rect(0, 0, 1, 1))
    first.tile_type_ids.setdefault("grass", set()).add(3)
    assert second.path_areas == []
    assert second.tile_type_ids == {}


def test_tileset_holds_fields():
    tileset = Tileset(first_grid_id=1, tile_width=32, tile_height=32, name="ground")
    level = Level(tilesets=[tileset])
    assert level.tilesets[0].name == "ground"
    assert level.tilesets[0].first_grid_id == 1