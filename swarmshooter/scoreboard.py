"""A row of digit sprites showing a number."""

from __future__ import annotations

from typing import List, Sequence

from .animation import Sprite
from .entity import GameEntity

FONT_FILE = "emulogic.ttf"
FONT_SIZE = 32
DIGIT_SPACING = 32.0


class Scoreboard(GameEntity):
    """Shows a score right-aligned on the entity's position; zero shows as "00"."""

    def __init__(self, assets, color: Sequence[int] = (230, 230, 230)) -> None:
        super().__init__()
        self._assets = assets
        self._color = tuple(color)
        self._digits: List[Sprite] = []
        self._score = 0
        self.score = 0

    @property
    def score(self) -> int:
        """The number shown; assigning rebuilds the digits."""
        return self._score

    @score.setter
    def score(self, value: int) -> None:
        self._clear()
        self._score = int(value)
        text = "00" if self._score == 0 else str(self._score)
        last = len(text) - 1
        for i, char in enumerate(text):
            digit = Sprite(self._assets.get_text(char, FONT_FILE, FONT_SIZE, self._color))
            digit.parent = self
            digit.position = (-DIGIT_SPACING * (last - i), 0.0)
            self._digits.append(digit)

    def render(self, graphics) -> None:
        """Draw every digit."""
        for digit in self._digits:
            digit.render(graphics)

    def _clear(self) -> None:
        for digit in self._digits:
            self._assets.destroy_texture(digit.texture)
        self._digits.clear()