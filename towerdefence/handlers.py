"""Applying tower upgrades and selling towers."""

from __future__ import annotations

from typing import MutableSequence

from .towers import (
    STAT_ATTACK_SPEED,
    STAT_DAMAGE,
    STAT_FREEZE_PERCENTAGE,
    STAT_RADIUS,
    FreezeTower,
    Tower,
)


def upgrade_tower_attribute(tower: Tower, upgrade_id: int) -> bool:
    """Set the upgraded stat to its next level's value; False if the stat is not known."""
    data = tower.upgrades[upgrade_id]
    value = data.values[data.next_level]
    if data.stat_name == STAT_DAMAGE:
        tower.damage = value
        return True
    if data.stat_name == STAT_RADIUS:
        tower.radius = value
        return True
    if data.stat_name == STAT_ATTACK_SPEED:
        tower.attack_speed = value
        return True
    if isinstance(tower, FreezeTower) and data.stat_name == STAT_FREEZE_PERCENTAGE:
        tower.freeze_percentage = value
        return True
    return False


class TowerUpgradeHandler:
    """Buys the next level of a tower's upgrade."""

    def __init__(self, purchase) -> None:
        self.purchase = purchase

    def handle_upgrade(self, tower: Tower | None, upgrade_id: int) -> bool:
        """Apply and pay for the next level; False if nothing was upgraded."""
        if tower is None:
            return False
        data = tower.upgrades[upgrade_id]
        if data.next_level >= data.max_level:
            return False
        if not upgrade_tower_attribute(tower, upgrade_id):
            return False
        self.purchase.purchase_upgrade(data.costs[data.next_level], tower.color)
        data.next_level += 1
        return True


class SellTowerHandler:
    """Sells the selected tower and removes it from the play field."""

    def __init__(self, towers: MutableSequence[Tower], sell_manager) -> None:
        self.towers = towers
        self.sell_manager = sell_manager

    def handle_sell(self, tower: Tower | None) -> bool:
        """Refund the selected tower and remove ``tower``; True if it was removed."""
        if tower is None:
            return False
        self.sell_manager.sell_selected_tower()
        for index, placed in enumerate(self.towers):
            if placed is tower:
                del self.towers[index]
                return True
        return False