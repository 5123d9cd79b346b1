"""Towers that pick the farthest enemy in range and fire at it, and freezing towers that slow."""

from __future__ import annotations

import enum
import math
import weakref
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .entities import Enemy, GameObject, Resource, Vec2
from .level import Rect
from .selection import InputState, SelectOnClick

STAT_NAME = "statName"
VALUES = "values"
COSTS = "costs"
MAX_LEVEL = "maxLevel"
NEXT_LEVEL = "nextLevel"

STAT_DAMAGE = "damage"
STAT_RADIUS = "radius"
STAT_ATTACK_SPEED = "attackSpeed"
STAT_FREEZE_PERCENTAGE = "freezePercentage"

HITBOX_PADDING = 3
MAP_PANEL_AREA = Rect(0, 0, 800, 448)


class PlacementState(enum.Enum):
    """Stages of placing a new tower by clicking."""

    IDLE = "idle"
    MOVING = "moving"
    PLACING = "placing"
    INTERRUPTED = "interrupted"


@dataclass
class UpgradeData:
    """One upgrade path of a tower: the stat it raises, and the value and cost per level."""

    stat_name: str = ""
    values: list[float] = field(default_factory=list)
    costs: list[int] = field(default_factory=list)
    max_level: int = 0
    next_level: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> UpgradeData:
        """Build from a JSON object; missing keys keep their defaults."""
        upgrade = cls()
        if STAT_NAME in data:
            upgrade.stat_name = data[STAT_NAME]
        if VALUES in data:
            upgrade.values = list(data[VALUES])
        if COSTS in data:
            upgrade.costs = list(data[COSTS])
        if MAX_LEVEL in data:
            upgrade.max_level = data[MAX_LEVEL]
        if NEXT_LEVEL in data:
            upgrade.next_level = data[NEXT_LEVEL]
        return upgrade

    def to_dict(self) -> dict:
        return {
            STAT_NAME: self.stat_name,
            VALUES: list(self.values),
            COSTS: list(self.costs),
            MAX_LEVEL: self.max_level,
            NEXT_LEVEL: self.next_level,
        }


def parse_upgrade_pair(data) -> list[UpgradeData]:
    """A tower's two upgrade paths; ValueError unless ``data`` is a list of exactly two."""
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("expected an array of exactly 2 upgrade items")
    return [UpgradeData.from_dict(item) for item in data]


def parse_upgrade_map(data: dict) -> dict[str, list[UpgradeData] | None]:
    """Upgrade paths keyed by tower name; a null entry stays None."""
    return {
        name: None if value is None else parse_upgrade_pair(value)
        for name, value in data.items()
    }


def dump_upgrade_map(upgrades: dict[str, list[UpgradeData] | None]) -> dict:
    """The JSON form of an upgrade map; None entries are left out."""
    return {
        name: [upgrade.to_dict() for upgrade in pair]
        for name, pair in upgrades.items()
        if pair is not None
    }


@dataclass
class _Timer:
    maximum: float
    current: float

    def count_down(self, dt: float) -> None:
        self.current = max(self.current - dt, 0.0)

    def is_zero(self) -> bool:
        return self.current <= 0

    def reset(self) -> None:
        self.current = self.maximum


class Tower(GameObject):
    """A tower that targets the enemy farthest along the path within its radius."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="", name="", color="",
                 damage=0.0, radius=0.0, attack_speed=0.0, base_cost=None, projectile_id=""):
        super().__init__(x, y, width, height, texture_id)
        self.name = name
        self.color = color
        self.damage = float(damage or 0)
        self.radius = float(radius or 0)
        self.base_cost = base_cost if base_cost is not None else Resource()
        self.projectile_id = projectile_id
        self.spent_resources = Resource(self.base_cost.type, 0)
        self.damage_dealt = 0.0
        self.upgrades: list[UpgradeData] = []
        self.mouse_over_radius_upgrade = False
        self.next_radius_upgrade_value = 0
        self._target: weakref.ref | None = None
        self._attack_speed = 0.0
        self._timer = _Timer(0.0, 0.0)
        if attack_speed:
            self.attack_speed = attack_speed
        self.selection = SelectOnClick(self.position.x, self.position.y, width, height)
        self.selection.reset()

    @property
    def attack_speed(self) -> float:
        """Attacks per second; setting it restarts the attack timer."""
        return self._attack_speed

    @attack_speed.setter
    def attack_speed(self, value: float) -> None:
        self._attack_speed = float(value)
        interval = 1 / self._attack_speed if self._attack_speed else math.inf
        self._timer = _Timer(interval, interval)

    @property
    def target(self) -> Enemy | None:
        return self._target() if self._target is not None else None

    @target.setter
    def target(self, enemy: Enemy | None) -> None:
        self._target = weakref.ref(enemy) if enemy is not None else None

    def in_radius(self, enemy: Enemy | None) -> bool:
        """Whether any corner of the enemy's padded hitbox lies within the radius."""
        if enemy is None:
            return False
        center = self.position + Vec2(self.width // 2, self.height // 2)
        x, y = enemy.position.x, enemy.position.y
        w, h = enemy.width, enemy.height
        pad = HITBOX_PADDING
        corners = (
            Vec2(x, y) + pad,
            Vec2(x + w - pad, y + pad),
            Vec2(x + pad, y + h - pad),
            Vec2(x + w, y + h) - pad,
        )
        return any(Vec2.distance(center, corner) <= self.radius for corner in corners)

    def target_enemy(self, enemies: Iterable[Enemy]) -> None:
        """Aim at the enemy farthest along the path among those in range."""
        enemies = list(enemies)
        if not enemies:
            return
        if not self.in_radius(self.target):
            self._target = None
        candidates = [enemy for enemy in enemies if self.in_radius(enemy)]
        if not candidates:
            return
        self.target = max(candidates, key=lambda enemy: enemy.distance)

    def update(self, input_state: InputState | None = None,
               fire: Callable[[Tower], object] | None = None, dt: float = 0.0) -> None:
        """Move, track the mouse for selection and fire at the target when the timer runs out."""
        super().update()
        self.selection.update(input_state if input_state is not None else InputState())
        self._aim(fire, dt)

    def _aim(self, fire: Callable[[Tower], object] | None, dt: float) -> None:
        if self.target is None:
            self._timer.reset()
            return
        self._timer.count_down(dt)
        if self._timer.is_zero():
            if fire is not None:
                fire(self)
            self._timer.reset()

    def handle_event(self, input_state: InputState,
                     placement_state: PlacementState = PlacementState.IDLE) -> None:
        """Toggle selection on click, unless a new tower is being dragged."""
        if placement_state != PlacementState.MOVING:
            self.selection.handle_event(input_state)
        else:
            self.selection.reset()

    def placed(self, purchase) -> None:
        """Start selection at the final position and pay the tower's cost."""
        self.selection = SelectOnClick(self.position.x, self.position.y, self.width,
                                       self.height, MAP_PANEL_AREA, False)
        purchase.purchase_tower(self.base_cost)

    def is_selected(self) -> bool:
        return self.selection.selected

    def record_damage(self, damage: float) -> None:
        self.damage_dealt += damage


class FreezeTower(Tower):
    """A tower that slows every enemy within its radius instead of shooting."""

    def __init__(self, *args, freeze_percentage: float = 0.0, **kwargs):
        super().__init__(*args, **kwargs)
        self.freeze_percentage = float(freeze_percentage or 0)

    def target_enemy(self, enemies: Iterable[Enemy]) -> None:
        for enemy in enemies:
            if self.in_radius(enemy):
                enemy.slow(self.freeze_percentage)