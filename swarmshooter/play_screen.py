"""The in-game screen: the player's ship, the side bar and the running stage."""

from __future__ import annotations

import itertools
from typing import Optional

from .animation import Sprite
from .boss import Boss
from .butterfly import Butterfly
from .enemy import Enemy
from .entity import GameEntity
from .graphics import Graphics
from .level import Level, LevelState, load_spawn_patterns
from .player import Player
from .sidebar import PlaySideBar

HIGH_SCORE = 645987

_FONT = "emulogic.ttf"
_FONT_SIZE = 32
_LABEL_COLOR = (150, 0, 0)

# Discarded entities stay registered with the physics manager; parking them
# far away from the playfield keeps them out of every collision.
_PARKED = (-100000.0, -100000.0)


class PlayScreen(GameEntity):
    """Runs a game: starts stages one after another until the player is out of lives."""

    LEVEL_START_DELAY = 1.0

    def __init__(self, assets, audio, physics, input_manager, rng, stars, data_path) -> None:
        super().__init__()
        self._assets = assets
        self._audio = audio
        self._physics = physics
        self._input = input_manager
        self._rng = rng
        self._stars = stars
        self.data_path = data_path

        width, height = Graphics.SCREEN_WIDTH, Graphics.SCREEN_HEIGHT

        self.sidebar = PlaySideBar(assets, audio)
        self.sidebar.parent = self
        self.sidebar.position = (width * 0.87, height * 0.05)

        self.start_label = Sprite(assets.get_text("START", _FONT, _FONT_SIZE, _LABEL_COLOR))
        self.start_label.parent = self
        self.start_label.position = (width * 0.4, height * 0.5)

        self.level: Optional[Level] = None
        self.level_start_delay = self.LEVEL_START_DELAY
        self._level_start_timer = 0.0
        self.level_started = False
        self.game_started = False
        self.current_stage = 0

        self.player: Optional[Player] = None

        Enemy.create_paths()
        Butterfly.create_dive_paths()
        Boss.create_dive_paths()

    # -- game flow ------------------------------------------------------
    def start_new_game(self) -> None:
        """Put a fresh ship in play and wait for the intro to finish."""
        if self.player is not None:
            self._retire_player(self.player)
        if self.level is not None:
            self._retire_level(self.level)
            self.level = None

        width, height = Graphics.SCREEN_WIDTH, Graphics.SCREEN_HEIGHT
        self.player = Player(self._assets, self._audio, self._input, self._physics)
        self.player.parent = self
        self.player.position = (width * 0.4, height * 0.8)
        self.player.active = False

        self.sidebar.set_high_score(HIGH_SCORE)
        self.sidebar.set_ships(self.player.lives)
        self.sidebar.set_player_score(self.player.score)
        self.sidebar.set_level(0)

        self._stars.scroll(False)
        self.game_started = False
        self.level_started = False
        self._level_start_timer = 0.0
        self.current_stage = 0

    def start_next_level(self) -> None:
        """Begin the next stage, reading its spawn patterns from ``data_path``."""
        if self.player is None:
            raise RuntimeError("start_new_game() must be called before a level can start")
        self.current_stage += 1
        self._level_start_timer = 0.0
        self.level_started = True
        if self.level is not None:
            self._retire_level(self.level)
        patterns = load_spawn_patterns(self.data_path)
        self.level = Level(
            self.current_stage, self.sidebar, self.player, self._stars,
            self._assets, self._audio, self._physics, self._input, self._rng, patterns,
        )

    def game_over(self) -> bool:
        """True once the running stage has ended the game."""
        if not self.level_started or self.level is None:
            return False
        return self.level.state == LevelState.GAME_OVER

    # -- cleanup --------------------------------------------------------
    @staticmethod
    def _retire_player(player: Player) -> None:
        player.active = False
        player.visible = False
        for bullet in player.bullets:
            bullet.reload()

    @staticmethod
    def _retire_level(level: Level) -> None:
        for enemy in itertools.chain(
            level.formation_butterflies,
            level.formation_wasps,
            level.formation_bosses,
            level.challenge_enemies,
        ):
            if enemy is None:
                continue
            enemy.active = False
            enemy.parent = None
            enemy.position = _PARKED

    # -- frame ----------------------------------------------------------
    def update(self, dt: float) -> None:
        """Advance the game by ``dt`` seconds."""
        if self.player is None:
            return
        if not self.game_started:
            if not self._audio.is_music_playing():
                self.game_started = True
            return

        if not self.level_started:
            self._level_start_timer += dt
            if self._level_start_timer >= self.level_start_delay:
                self.start_next_level()
        else:
            self.level.update(dt)
            if self.level.state == LevelState.FINISHED:
                self.level_started = False

        if self.current_stage > 0:
            self.sidebar.update(dt)

        self.player.update(dt)
        self.sidebar.set_player_score(self.player.score)

    def render(self, graphics) -> None:
        """Draw the start label or the stage and ship, then the side bar."""
        if not self.game_started:
            self.start_label.render(graphics)
        else:
            if self.level_started and self.level is not None:
                self.level.render(graphics)
            if self.player is not None:
                self.player.render(graphics)
        self.sidebar.render(graphics)