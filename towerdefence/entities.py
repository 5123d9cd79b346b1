"""Moving game objects: the base object, enemies walking a path and projectiles."""

from __future__ import annotations

import enum
import math
import time
import weakref
from dataclasses import dataclass
from typing import Iterable

MAX_SLOW_PERCENTAGE = 0.8
HEALTH_BAR_HEIGHT = 5


@dataclass(frozen=True)
class Vec2:
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x + other.x, self.y + other.y)
        return Vec2(self.x + other, self.y + other)

    def __sub__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x - other.x, self.y - other.y)
        return Vec2(self.x - other, self.y - other)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """The unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        return self / length if length > 0 else self

    @staticmethod
    def distance(a: Vec2, b: Vec2) -> float:
        return (a - b).length()


class ResourceType(enum.IntEnum):
    """The kinds of resource; the value indexes a session's resource list."""

    GREEN = 0
    YELLOW = 1
    RED = 2
    BLUE = 3
    NOT_RESOURCE_TYPE = 4


def resource_type_from_string(name: str) -> ResourceType:
    """The resource type named by a colour string, or NOT_RESOURCE_TYPE."""
    try:
        return ResourceType[name.strip().upper()]
    except KeyError:
        return ResourceType.NOT_RESOURCE_TYPE


@dataclass
class Resource:
    """An amount of one resource type."""

    type: ResourceType = ResourceType.NOT_RESOURCE_TYPE
    value: int = 0


def _as_vec(point) -> Vec2:
    return point if isinstance(point, Vec2) else Vec2(*point)


class GameObject:
    """A sprite with a position, velocity and acceleration."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="", num_frames=0):
        self.position = Vec2(float(x), float(y))
        self.velocity = Vec2()
        self.acceleration = Vec2()
        self.width = width
        self.height = height
        self.texture_id = texture_id
        self.num_frames = num_frames or 0
        self.current_row = 1
        self.current_frame = 0

    @property
    def facing_backwards(self) -> bool:
        """Whether the sprite should be drawn flipped."""
        return self.velocity.x < 0

    def update(self) -> None:
        self.velocity = self.velocity + self.acceleration
        self.position = self.position + self.velocity


class Enemy(GameObject):
    """An enemy walking along a path of waypoints."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="", num_frames=0,
                 move_speed=0.0, max_health=0.0, defence=0.0, drop=None):
        super().__init__(x, y, width, height, texture_id, num_frames)
        self.move_speed = float(move_speed or 0)
        self.max_health = float(max_health or 0)
        self.health = self.max_health
        self.defence = float(defence or 0)
        self.drop = drop if drop is not None else Resource()
        self.path: list[Vec2] = []
        self.speed_multiplier = 1.0
        self.slow_additive = 0.0
        self.max_slow_percentage = MAX_SLOW_PERCENTAGE
        self.distance = 0.0
        self.health_bar_width = width // 2
        self.health_bar_height = HEALTH_BAR_HEIGHT
        self._path_index = 0
        self._dist_from_waypoint = 0.0
        self._distance_to_waypoint = 0.0
        self._crossed_end = False

    def set_path(self, path: Iterable) -> None:
        self.path = [_as_vec(point) for point in path]

    def slow(self, percentage: float) -> None:
        """Add a slow for this frame, capped at the maximum slow."""
        self.slow_additive = min(self.slow_additive + percentage, self.max_slow_percentage)

    def deal_damage(self, damage: float) -> float:
        """Apply damage reduced by defence; return the damage actually taken."""
        taken = damage * (1 - self.defence)
        self.health = max(self.health - taken, 0.0)
        return taken

    def is_alive(self) -> bool:
        return self.health > 0

    def crossed_end_of_path(self) -> bool:
        return self._crossed_end

    def actual_speed(self) -> float:
        return (self.speed_multiplier - self.slow_additive) * self.move_speed

    def update(self) -> None:
        if self.num_frames > 0:
            self.current_frame = int(time.monotonic() * 1000) // 100 % self.num_frames
        self._move()
        self.distance = self._distance_to_waypoint + self._dist_from_waypoint
        self.slow_additive = 0.0
        super().update()

    def _move(self) -> None:
        speed = self.actual_speed()
        if self._path_index >= len(self.path):
            self._crossed_end = True
            return
        waypoint = self.path[self._path_index]
        self.velocity = waypoint - self.position
        if self.velocity.length() < speed:
            self._path_index += 1
            if self._path_index < len(self.path):
                self._distance_to_waypoint += (self.path[self._path_index] - waypoint).length()
            self._dist_from_waypoint = 0.0
            return
        self.velocity = self.velocity.normalized() * speed
        self._dist_from_waypoint += speed


class Projectile(GameObject):
    """A shot flying towards an enemy's centre; it keeps the last known centre if the enemy goes."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="", damage=0.0, speed=0.0,
                 tower_type=ResourceType.NOT_RESOURCE_TYPE, target=None, origin=None):
        super().__init__(x, y, width, height, texture_id)
        self.damage = float(damage)
        self.speed = float(speed)
        self.tower_type = tower_type
        self.origin = origin
        self.hit_enemy = False
        self._target_center = Vec2()
        self._target: weakref.ref | None = None
        self.target = target

    @property
    def target(self) -> Enemy | None:
        return self._target() if self._target is not None else None

    @target.setter
    def target(self, enemy: Enemy | None) -> None:
        self._target = weakref.ref(enemy) if enemy is not None else None

    def update(self) -> None:
        self._move()
        super().update()

    def _move(self) -> None:
        enemy = self.target
        if enemy is not None:
            self._target_center = Vec2(
                enemy.position.x + enemy.width // 2,
                enemy.position.y + enemy.height // 2,
            )
        self.velocity = self._target_center - self.position
        if self.velocity.length() < self.speed:
            self.hit_enemy = True
            return
        self.velocity = self.velocity.normalized() * self.speed