"""Keyboard and mouse state tracking across frames."""

from __future__ import annotations

import enum
from typing import AbstractSet, Collection, Hashable, Iterable, Sequence

import pygame
from pygame.math import Vector2


class MouseButton(enum.Enum):
    """Mouse buttons that can be queried."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2
    BACK = 3
    FORWARD = 4


# Order of buttons as reported by pygame.mouse.get_pressed(num_buttons=5).
_PYGAME_BUTTON_ORDER = (
    MouseButton.LEFT,
    MouseButton.MIDDLE,
    MouseButton.RIGHT,
    MouseButton.BACK,
    MouseButton.FORWARD,
)


class _PressedKeys:
    """Membership view over pygame's pressed-key table."""

    __slots__ = ("_state",)

    def __init__(self, state: Sequence[bool]) -> None:
        self._state = state

    def __contains__(self, key: object) -> bool:
        try:
            return bool(self._state[key])
        except (IndexError, TypeError):
            return False


class InputManager:
    """Holds the current and previous frame's input to detect edges."""

    def __init__(self) -> None:
        self._keys: Collection[Hashable] = frozenset()
        self._prev_keys: Collection[Hashable] = frozenset()
        self._buttons: AbstractSet[MouseButton] = frozenset()
        self._prev_buttons: AbstractSet[MouseButton] = frozenset()
        self._mouse_pos = Vector2(0, 0)

    # -- keyboard -------------------------------------------------------
    def key_down(self, key: Hashable) -> bool:
        """True while ``key`` is held."""
        return key in self._keys

    def key_pressed(self, key: Hashable) -> bool:
        """True on the frame ``key`` went down."""
        return key not in self._prev_keys and key in self._keys

    def key_released(self, key: Hashable) -> bool:
        """True on the frame ``key`` went up."""
        return key in self._prev_keys and key not in self._keys

    # -- mouse ----------------------------------------------------------
    def mouse_button_down(self, button: MouseButton) -> bool:
        """True while ``button`` is held."""
        return button in self._buttons

    def mouse_button_pressed(self, button: MouseButton) -> bool:
        """True on the frame ``button`` went down."""
        return button not in self._prev_buttons and button in self._buttons

    def mouse_button_released(self, button: MouseButton) -> bool:
        """True on the frame ``button`` went up."""
        return button in self._prev_buttons and button not in self._buttons

    def mouse_position(self) -> Vector2:
        """The last known mouse position."""
        return Vector2(self._mouse_pos)

    # -- frame bookkeeping ----------------------------------------------
    def update(
        self,
        keys: Iterable[Hashable] = (),
        buttons: Iterable[MouseButton] = (),
        mouse_pos: Sequence[float] = (0, 0),
    ) -> None:
        """Record the current input state."""
        self._keys = frozenset(keys)
        self._buttons = frozenset(buttons)
        self._mouse_pos = Vector2(mouse_pos[0], mouse_pos[1])

    def poll(self) -> None:
        """Record the current input state from pygame."""
        pressed = pygame.key.get_pressed()
        mouse = pygame.mouse.get_pressed(num_buttons=5)
        self._keys = _PressedKeys(pressed)
        self._buttons = frozenset(
            button for button, down in zip(_PYGAME_BUTTON_ORDER, mouse) if down
        )
        x, y = pygame.mouse.get_pos()
        self._mouse_pos = Vector2(x, y)

    def update_prev_input(self) -> None:
        """Remember this frame's state as the previous frame's."""
        self._prev_keys = self._keys
        self._prev_buttons = self._buttons