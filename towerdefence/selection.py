"""Mouse and keyboard state, and selecting an on-screen object by clicking it."""

from __future__ import annotations

from dataclasses import dataclass

from .level import Rect


@dataclass
class InputState:
    """A snapshot of the mouse position, its buttons and the escape key."""

    mouse_x: float = 0.0
    mouse_y: float = 0.0
    left: bool = False
    right: bool = False
    escape: bool = False

    def is_mouse_on(self, x: float, y: float, width: float, height: float) -> bool:
        """Whether the mouse lies inside the given rectangle."""
        return x <= self.mouse_x < x + width and y <= self.mouse_y < y + height


class SelectOnClick:
    """Toggles selection of an object: click it to select, click inside the close area to drop it."""

    def __init__(self, x, y, width, height, close_area: Rect | None = None,
                 key_interruptible: bool = False):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.close_area = close_area
        self.key_interruptible = key_interruptible
        self.selected = True
        self.pressed = False
        self.pressed_outside = False
        self.mouse_on = False

    def update(self, input_state: InputState) -> None:
        self.mouse_on = input_state.is_mouse_on(self.x, self.y, self.width, self.height)

    def handle_event(self, input_state: InputState) -> None:
        self._handle_interrupt(input_state)
        self._handle_outside_click(input_state)
        self._handle_click(input_state)

    def reset(self) -> None:
        self.selected = False
        self.pressed = False
        self.pressed_outside = False

    def _handle_interrupt(self, input_state: InputState) -> None:
        if self.key_interruptible and self.selected and input_state.escape:
            self.reset()

    def _handle_outside_click(self, input_state: InputState) -> None:
        if not self.mouse_on:
            self.pressed_outside = input_state.left
        elif not input_state.left:
            self.pressed_outside = False

    def _mouse_inside_area(self, input_state: InputState) -> bool:
        area = self.close_area
        if area is None or area.w == 0:
            return True
        return input_state.is_mouse_on(area.x, area.y, area.w, area.h)

    def _handle_click(self, input_state: InputState) -> None:
        if self.mouse_on and not self.pressed_outside and not self.selected:
            if not input_state.left and self.pressed:
                self.pressed = False
                self.selected = True
            elif input_state.left:
                self.pressed = True
        elif self.selected and self._mouse_inside_area(input_state):
            if not input_state.left and self.pressed:
                self.pressed = False
                self.selected = False
            elif input_state.left:
                self.pressed = True
        else:
            self.pressed = False