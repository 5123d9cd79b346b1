"""Map data: tilesets, tile types, enemy path and the areas it covers."""

from __future__ import annotations

from dataclasses import dataclass, field

Point = tuple[float, float]


@dataclass
class Tileset:
    """One tileset of a map."""

    first_grid_id: int = 0
    tile_width: int = 0
    tile_height: int = 0
    spacing: int = 0
    margin: int = 0
    width: int = 0
    height: int = 0
    num_columns: int = 0
    name: str = ""


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in map pixels."""

    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h


@dataclass
class Level:
    """A parsed map: its size, tiles, the path enemies walk and the area that path covers."""

    width: int = 0
    height: int = 0
    tile_size: int = 0
    tilesets: list[Tileset] = field(default_factory=list)
    tile_type_ids: dict[str, set[int]] = field(default_factory=dict)
    enemy_path: list[Point] = field(default_factory=list)
    path_areas: list[Rect] = field(default_factory=list)
    spawn: Point | None = None

    def spawn_point(self) -> Point:
        """Where enemies appear: the set spawn, else the first path point, else the origin."""
        if self.spawn is not None:
            return self.spawn
        if self.enemy_path:
            return self.enemy_path[0]
        return (0.0, 0.0)