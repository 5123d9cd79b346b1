"""Placing a new tower: pick it from a button, drag its shadow and click to build."""

from __future__ import annotations

from typing import Callable, MutableSequence

from .entities import Vec2
from .level import Level
from .selection import InputState
from .towers import PlacementState, Tower


class TowerPlacement:
    """Drives the pick, drag and place sequence for a new tower."""

    def __init__(self, create_shadow_tower: Callable[[str, str], Tower], collision,
                 sell_manager, purchase, level: Level | None = None) -> None:
        self.create_shadow_tower = create_shadow_tower
        self.collision = collision
        self.sell_manager = sell_manager
        self.purchase = purchase
        self.level = level
        self.state = PlacementState.IDLE
        self.active_button = None
        self.shadow: Tower | None = None
        self.mouse_on_free_tile = False

    def handle_event(self, source) -> None:
        """React to a click on ``source``; None interrupts the placement."""
        if source is None:
            self.interrupt()
            return
        if self.state == PlacementState.IDLE:
            if hasattr(source, "tower_name") and hasattr(source, "tower_color"):
                self.active_button = source
                self.shadow = self.create_shadow_tower(source.tower_name, source.tower_color)
                self.state = PlacementState.MOVING
            else:
                self.interrupt()
        elif self.state == PlacementState.MOVING:
            if source is not self.active_button:
                self.interrupt()
            else:
                self.state = PlacementState.PLACING

    def update(self, towers: MutableSequence[Tower], input_state: InputState) -> None:
        self._update_state(towers, input_state)
        if self.shadow is not None:
            self.shadow.update(input_state)

    def interrupt(self) -> None:
        self.state = PlacementState.INTERRUPTED
        self.active_button = None
        self.shadow = None

    def _update_state(self, towers: MutableSequence[Tower], input_state: InputState) -> None:
        if self.state == PlacementState.IDLE:
            return
        if self.active_button is not None:
            if self.state == PlacementState.MOVING:
                self._update_moving(input_state)
            elif self.state == PlacementState.PLACING and self._add(towers):
                self.state = PlacementState.IDLE
        elif self.state == PlacementState.INTERRUPTED:
            self.state = PlacementState.IDLE

    def _update_moving(self, input_state: InputState) -> None:
        shadow = self.shadow
        if shadow is None:
            return
        shadow.position = Vec2(input_state.mouse_x - shadow.width // 2,
                               input_state.mouse_y - shadow.height // 2)
        if self.level is not None:
            self.mouse_on_free_tile = not self.collision.collide_tower_placement(shadow,
                                                                                 self.level)

    def _add(self, towers: MutableSequence[Tower]) -> bool:
        shadow = self.shadow
        if shadow is None:
            return False
        towers.append(shadow)
        self.sell_manager.selected_tower = shadow
        shadow.placed(self.purchase)
        self.shadow = None
        return True