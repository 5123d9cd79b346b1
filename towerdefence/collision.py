"""Axis-aligned box collisions used when placing towers."""

from __future__ import annotations

from typing import Iterable, Sequence

from .level import Level, Rect


def _sides(obj) -> tuple[int, int, int, int]:
    left = int(obj.position.x)
    top = int(obj.position.y)
    right = int(obj.position.x + obj.width)
    bottom = int(obj.position.y + obj.height)
    return left, top, right, bottom


def _overlap(a: tuple[int, int, int, int], b: tuple[int, int, int, int]) -> bool:
    left_a, top_a, right_a, bottom_a = a
    left_b, top_b, right_b, bottom_b = b
    return not (bottom_a <= top_b or top_a >= bottom_b
                or right_a <= left_b or left_a >= right_b)


def check_collision(first, second) -> bool:
    """Whether two objects' boxes overlap; touching edges do not count."""
    return _overlap(_sides(first), _sides(second))


def check_collision_with_rect(obj, rect: Rect) -> bool:
    """Whether an object's box overlaps a rectangle; touching edges do not count."""
    return _overlap(_sides(obj), (rect.x, rect.y, rect.right, rect.bottom))


class CollisionChecker:
    """Checks a tower placement against the path area, placed towers and map bounds."""

    def __init__(self, towers: Sequence | None = None) -> None:
        self.towers = towers if towers is not None else []

    def collide_tower_placement(self, obj, level: Level) -> bool:
        """Whether the object cannot be placed where it stands."""
        _, _, right, bottom = _sides(obj)
        return (self.collides_with_path_area(obj, level.path_areas)
                or self.collides_with_towers(obj)
                or right > level.width
                or bottom > level.height)

    def collides_with_path_area(self, obj, areas: Iterable[Rect]) -> bool:
        return any(check_collision_with_rect(obj, area) for area in areas)

    def collides_with_towers(self, obj) -> bool:
        return any(check_collision(obj, tower) for tower in self.towers)