"""The resources of a play session, and buying and selling towers and upgrades."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, MutableSequence

from .entities import Resource, ResourceType, resource_type_from_string

STARTING_HEALTH = 5
STARTING_RESOURCES = {
    ResourceType.GREEN: 30,
    ResourceType.YELLOW: 5,
    ResourceType.RED: 5,
    ResourceType.BLUE: 0,
}
BASE_SELL_PERCENTAGE = 0.4


@dataclass
class GameSession:
    """Health, resources and current wave of one play session."""

    game_health: int = 0
    resources: dict[ResourceType, int] = field(default_factory=dict)
    current_wave_level: int = 0

    @classmethod
    def new(cls) -> GameSession:
        """A session with the starting health and resources."""
        return cls(STARTING_HEALTH, dict(STARTING_RESOURCES), 0)


class SellManager:
    """Tracks the selected tower's spent resources and refunds part of them on sale."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.base_sell_percentage = BASE_SELL_PERCENTAGE
        self.selected_tower = None

    def sell_selected_tower(self) -> None:
        """Refund the selected tower's share of spent resources, rounded down."""
        if self.selected_tower is None:
            return
        spent = self.selected_tower.spent_resources
        refund = int(math.floor(self.base_sell_percentage * spent.value))
        self.session.resources[spent.type] += refund

    def update_spent_resources(self, resource: Resource) -> None:
        """Add to the selected tower's spent total when the resource type matches."""
        if self.selected_tower is None:
            return
        spent = self.selected_tower.spent_resources
        if spent.type == resource.type:
            self.selected_tower.spent_resources = Resource(resource.type,
                                                           resource.value + spent.value)


class PurchaseManager:
    """Checks and pays for towers and tower upgrades out of the session's resources."""

    def __init__(self, session: GameSession, sell_manager: SellManager,
                 cost_lookup: Callable[[str], int]) -> None:
        self.session = session
        self.sell_manager = sell_manager
        self.cost_lookup = cost_lookup
        self._tower_costs: dict[str, int] = {}

    def tower_cost(self, tower_name: str) -> int:
        """The base cost of a tower, looked up once and then cached."""
        if tower_name not in self._tower_costs:
            self._tower_costs[tower_name] = int(self.cost_lookup(tower_name))
        return self._tower_costs[tower_name]

    def _balance(self, resource_type: ResourceType) -> int:
        return self.session.resources.get(resource_type, 0)

    def can_purchase_tower(self, tower_name: str, tower_color: str) -> bool:
        cost = self.tower_cost(tower_name)
        resource_type = resource_type_from_string(tower_color)
        if resource_type == ResourceType.NOT_RESOURCE_TYPE:
            return False
        return cost <= self._balance(resource_type)

    def purchase_tower(self, cost: Resource) -> None:
        self.session.resources[cost.type] = self._balance(cost.type) - cost.value
        self.sell_manager.update_spent_resources(cost)

    def can_purchase_upgrade(self, upgrade, tower_color: str) -> bool:
        """Whether the upgrade's next level exists and is affordable."""
        if upgrade.next_level >= upgrade.max_level:
            return False
        resource_type = resource_type_from_string(tower_color)
        if resource_type == ResourceType.NOT_RESOURCE_TYPE:
            return False
        return upgrade.costs[upgrade.next_level] <= self._balance(resource_type)

    def purchase_upgrade(self, cost: int, tower_color: str) -> None:
        resource_type = resource_type_from_string(tower_color)
        if resource_type == ResourceType.NOT_RESOURCE_TYPE:
            return
        self.session.resources[resource_type] = self._balance(resource_type) - cost
        self.sell_manager.update_spent_resources(Resource(resource_type, cost))


def collect_finished_enemies(session: GameSession, enemies: MutableSequence) -> list:
    """Remove dead enemies and those past the path's end, applying their effects.

    An enemy that reached the end costs one health; a defeated one adds its drop to the
    session. The removed enemies are returned in their original order.
    """
    finished = [e for e in enemies if not e.is_alive() or e.crossed_end_of_path()]
    for enemy in finished:
        if enemy.crossed_end_of_path():
            session.game_health -= 1
        elif enemy.drop.type in session.resources:
            session.resources[enemy.drop.type] += enemy.drop.value
    enemies[:] = [e for e in enemies if e not in finished]
    return finished