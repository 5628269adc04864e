"""The side panel with scores, remaining ships and level flags."""

from __future__ import annotations

from typing import List

from .animation import Sprite
from .entity import GameEntity
from .scoreboard import Scoreboard

_FONT = "emulogic.ttf"
_FONT_SIZE = 32
_LABEL_COLOR = (150, 0, 0)

# (flag value, width on the sheet), largest first.
_FLAG_SIZES = ((50, 62), (30, 62), (20, 62), (10, 54), (5, 30), (1, 30))
_FLAG_SHEET_X = {50: 228, 30: 168, 20: 108, 10: 56, 5: 28, 1: 0}


class PlaySideBar(GameEntity):
    """Shows high score, player score, spare ships and the stage flags."""

    MAX_SHIP_TEXTURES = 5
    FLAG_FILE = "LevelFlags.png"
    FLAG_SOUND = "SFX/FlagSound.wav"

    def __init__(self, assets, audio) -> None:
        super().__init__()
        self._assets = assets
        self._audio = audio

        self._background = Sprite(assets.get_texture("Black.png"))
        self._background.parent = self
        self._background.scale = (3.0, 10.0)
        self._background.position = (45.0, 380.0)

        self._high_label = self._label("HIGH", (-25.0, 0.0))
        self._score_label = self._label("SCORE", (25.0, 32.0))

        self.high_score_board = Scoreboard(assets)
        self.high_score_board.parent = self
        self.high_score_board.position = (90.0, 64.0)

        self._one_up_label = self._label("1UP", (-45.0, 160.0))
        self._blink_timer = 0.0
        self._blink_interval = 0.5
        self.one_up_visible = True

        self.player_score_board = Scoreboard(assets)
        self.player_score_board.parent = self
        self.player_score_board.position = (90.0, 192.0)

        self._ships = GameEntity()
        self._ships.parent = self
        self._ships.position = (-40.0, 420.0)

        self._ship_sprites: List[Sprite] = []
        for i in range(self.MAX_SHIP_TEXTURES):
            ship = Sprite(assets.get_texture("PlayerShips.png"), (0, 0, 60, 64))
            ship.parent = self._ships
            ship.position = (62.0 * (i % 3), 70.0 * (i // 3))
            self._ship_sprites.append(ship)

        self.total_ships_label = Scoreboard(assets)
        self.total_ships_label.parent = self._ships
        self.total_ships_label.position = (140.0, 80.0)
        self.total_ships = 0

        self._flag_holder = GameEntity()
        self._flag_holder.parent = self
        self._flag_holder.position = (-50.0, 600.0)
        self.flags: List[Sprite] = []
        self.remaining_levels = 0
        self._flag_x_offset = 0.0
        self._flag_y_offset = 0.0
        self._flag_timer = 0.0
        self._flag_interval = 0.25

    def _label(self, text: str, pos) -> Sprite:
        sprite = Sprite(self._assets.get_text(text, _FONT, _FONT_SIZE, _LABEL_COLOR))
        sprite.parent = self
        sprite.position = pos
        return sprite

    # -- setters --------------------------------------------------------
    def set_ships(self, ships: int) -> None:
        """Show ``ships`` spare ships; beyond the icon limit a number is shown too."""
        self.total_ships = ships
        if ships > self.MAX_SHIP_TEXTURES:
            self.total_ships_label.score = ships

    def set_high_score(self, score: int) -> None:
        """Show ``score`` as the high score."""
        self.high_score_board.score = score

    def set_player_score(self, score: int) -> None:
        """Show ``score`` as the player's score."""
        self.player_score_board.score = score

    def set_level(self, level: int) -> None:
        """Remove the flags and start adding flags for stage ``level``."""
        self._clear_flags()
        self.remaining_levels = level
        self._flag_x_offset = 0.0
        self._flag_y_offset = 0.0

    # -- flags ----------------------------------------------------------
    def _clear_flags(self) -> None:
        for flag in self.flags:
            self._assets.destroy_texture(flag.texture)
        self.flags.clear()

    def _add_next_flag(self) -> None:
        for value, width in _FLAG_SIZES:
            if self.remaining_levels >= value or value == 1:
                self._add_flag(width, value)
                return

    def _add_flag(self, width: int, value: int) -> None:
        if self.flags:
            self._flag_x_offset += width * 0.5
        if self._flag_x_offset > 140:
            self._flag_y_offset += 66
            self._flag_x_offset = 0.0
        self.remaining_levels -= value
        flag = Sprite(
            self._assets.get_texture(self.FLAG_FILE),
            (_FLAG_SHEET_X[value], 0, width - 2, 64),
        )
        flag.parent = self._flag_holder
        flag.position = (self._flag_x_offset, self._flag_y_offset)
        self.flags.append(flag)
        self._flag_x_offset += width * 0.5
        self._audio.play_sfx(self.FLAG_SOUND, 0, -1)

    # -- frame ----------------------------------------------------------
    def update(self, dt: float) -> None:
        """Blink the 1UP label and add the next flag when due."""
        self._blink_timer += dt
        if self._blink_timer >= self._blink_interval:
            self.one_up_visible = not self.one_up_visible
            self._blink_timer = 0.0
        if self.remaining_levels > 0:
            self._flag_timer += dt
            if self._flag_timer >= self._flag_interval:
                self._add_next_flag()
                self._flag_timer = 0.0

    def render(self, graphics) -> None:
        """Draw the whole panel."""
        self._background.render(graphics)
        self._high_label.render(graphics)
        self._score_label.render(graphics)
        self.high_score_board.render(graphics)
        if self.one_up_visible:
            self._one_up_label.render(graphics)
        self.player_score_board.render(graphics)
        for ship in self._ship_sprites[: max(self.total_ships, 0)]:
            ship.render(graphics)
        if self.total_ships > self.MAX_SHIP_TEXTURES:
            self.total_ships_label.render(graphics)
        for flag in self.flags:
            flag.render(graphics)