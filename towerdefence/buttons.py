"""Clickable buttons: menu and map buttons, tower shop buttons, upgrade and sell buttons."""

from __future__ import annotations

import enum
import re
from typing import Callable

from .entities import GameObject, Vec2
from .level import Level
from .selection import InputState

DISABLED_SUFFIX = "Disabled"
MAX_WAVE_PREFIX = "best wave: "

_LEADING_DIGITS = re.compile(r"\d+")


class ButtonFrame(enum.IntEnum):
    """Sprite frames of a button."""

    MOUSE_OUT = 0
    MOUSE_OVER = 1
    CLICKED = 2


def map_id_from_texture(texture_id: str) -> int:
    """The map number in a texture id such as 'mapLevel2ID', or -1 if there is none.

    The number follows the last 'l' and ends at the 'ID' suffix.
    """
    start = texture_id.rfind("l") + 1
    end = texture_id.find("ID")
    id_text = texture_id[start:] if end < start else texture_id[start:end]
    match = _LEADING_DIGITS.match(id_text)
    return int(match.group()) if match else -1


def map_label_id(texture_id: str, suffix: str) -> str:
    """A label id made from the texture id with its 'ID' suffix replaced by ``suffix``."""
    index = texture_id.find("ID")
    stem = texture_id[:index] if index >= 0 else texture_id
    return stem + suffix


class Button(GameObject):
    """A button that fires its callback when pressed and released over it."""

    shows_hover_frames = True

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="",
                 callback: Callable | None = None):
        super().__init__(x, y, width, height, texture_id)
        self.callback = callback
        self.pressed = False
        self.pressed_outside = False
        self.mouse_on = False
        self.current_frame = ButtonFrame.MOUSE_OUT

    def update(self, input_state: InputState) -> None:
        self.mouse_on = input_state.is_mouse_on(self.position.x, self.position.y,
                                                self.width, self.height)

    def handle_event(self, input_state: InputState) -> None:
        self._handle_outside_click(input_state)
        self._handle_click(input_state)

    def _handle_outside_click(self, input_state: InputState) -> None:
        if not self.mouse_on:
            self.pressed_outside = input_state.left
        elif not input_state.left:
            self.pressed_outside = False

    def _set_frame(self, frame: ButtonFrame) -> None:
        if self.shows_hover_frames:
            self.current_frame = frame

    def _handle_click(self, input_state: InputState) -> None:
        if self.mouse_on and not self.pressed_outside:
            self._set_frame(ButtonFrame.MOUSE_OVER)
            if not input_state.left and self.pressed:
                self._set_frame(ButtonFrame.CLICKED)
                self._clicked()
                self.pressed = False
            elif input_state.left:
                self.pressed = True
        else:
            self.pressed = False
            self._set_frame(ButtonFrame.MOUSE_OUT)

    def _clicked(self) -> None:
        if self.callback is not None:
            self.callback()


class MenuButton(Button):
    """A menu button calling its callback with no arguments."""


class MapMenuButton(MenuButton):
    """A button choosing a map; its callback receives the level file and the map id."""

    shows_hover_frames = False

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="",
                 callback: Callable | None = None, map_level_file: str = ""):
        super().__init__(x, y, width, height, texture_id, callback)
        self.map_level_file = map_level_file

    def map_id(self) -> int:
        return map_id_from_texture(self.texture_id)

    def label_id(self, suffix: str) -> str:
        return map_label_id(self.texture_id, suffix)

    @staticmethod
    def max_wave_message(max_wave: int) -> str:
        return f"{MAX_WAVE_PREFIX}{max_wave}"

    def _clicked(self) -> None:
        if self.callback is not None:
            self.callback(self.map_level_file, self.map_id())


class SellTowerButton(Button):
    """A button selling the selected tower; its callback receives that tower."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="",
                 callback: Callable | None = None):
        super().__init__(x, y, width, height, texture_id, callback)
        self.selected_tower = None
        self.selected = False

    def _clicked(self) -> None:
        if self.callback is not None:
            self.callback(self.selected_tower)
        self.selected = True


class TowerUpgradedButton(Button):
    """A button buying one upgrade path of the selected tower, if it is affordable."""

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="",
                 callback: Callable | None = None, upgrade_id: int = -1, purchase=None):
        super().__init__(x, y, width, height, texture_id, callback)
        self.upgrade_id = upgrade_id
        self.purchase = purchase
        self.selected_tower = None
        self.selected = False

    def _clicked(self) -> None:
        tower = self.selected_tower
        if tower is None or self.purchase is None:
            return
        upgrade = tower.upgrades[self.upgrade_id]
        if self.purchase.can_purchase_upgrade(upgrade, tower.color):
            if self.callback is not None:
                self.callback(tower, self.upgrade_id)
            self.selected = True

    def reset(self) -> None:
        self.selected = False
        self.pressed = False
        self.pressed_outside = False


class TowerButton(Button):
    """A shop button: first click picks the tower, a click on a free map tile places it.

    The callback receives the button on both clicks, and None when picking is cancelled.
    """

    shows_hover_frames = False

    def __init__(self, x=0.0, y=0.0, width=0, height=0, texture_id="",
                 callback: Callable | None = None, tower_name: str = "", tower_color: str = "",
                 dummy: GameObject | None = None, purchase=None, collision=None,
                 level: Level | None = None):
        super().__init__(x, y, width, height, texture_id, callback)
        self.tower_name = tower_name
        self.tower_color = tower_color
        self.base_texture_id = texture_id
        self.dummy = dummy if dummy is not None else GameObject()
        self.purchase = purchase
        self.collision = collision
        self.level = level
        self.selected = False
        self.disabled = False
        self.mouse_on_free_tile = False
        self.mouse_outside_map = False

    def _affordable(self) -> bool:
        return self.purchase is not None and self.purchase.can_purchase_tower(
            self.tower_name, self.tower_color)

    def update(self, input_state: InputState) -> None:
        super().update(input_state)
        self.dummy.position = Vec2(input_state.mouse_x - self.dummy.width // 2,
                                   input_state.mouse_y - self.dummy.height // 2)
        self.disabled = not self._affordable()
        self.texture_id = (self.base_texture_id + DISABLED_SUFFIX if self.disabled
                           else self.base_texture_id)
        if self.selected and self.level is not None:
            if self.collision is not None:
                self.mouse_on_free_tile = not self.collision.collide_tower_placement(
                    self.dummy, self.level)
            self.mouse_outside_map = (input_state.mouse_x > self.level.width
                                      or input_state.mouse_y > self.level.height)

    def handle_event(self, input_state: InputState) -> None:
        self._handle_interrupt(input_state)
        self._handle_outside_click(input_state)
        self._handle_click(input_state)

    def reset(self) -> None:
        self.selected = False
        self.pressed = False
        self.pressed_outside = False

    def _cancel(self) -> None:
        if self.callback is not None:
            self.callback(None)
        self.reset()

    def _handle_interrupt(self, input_state: InputState) -> None:
        if not self.selected:
            return
        if input_state.escape or input_state.right:
            self._cancel()
        if not self.mouse_on and self.mouse_outside_map and input_state.left:
            self._cancel()

    def _handle_click(self, input_state: InputState) -> None:
        if self.mouse_on and not self.pressed_outside and not self.selected:
            if not input_state.left and self.pressed:
                if self._affordable():
                    if self.callback is not None:
                        self.callback(self)
                    self.selected = True
                self.pressed = False
            elif input_state.left:
                self.pressed = True
        elif self.selected and self.mouse_on_free_tile:
            if not input_state.left and self.pressed:
                if self.callback is not None:
                    self.callback(self)
                self.pressed = False
                self.selected = False
            elif input_state.left:
                self.pressed = True
        else:
            self.pressed = False