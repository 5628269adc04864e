"""One stage: intro labels, enemy spawning, formation, dives and player death."""

from __future__ import annotations

import itertools
import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

import pygame

from .animation import Sprite
from .boss import Boss
from .butterfly import Butterfly
from .enemy import Enemy, EnemyState
from .entity import GameEntity
from .formation import Formation
from .graphics import Graphics
from .scoreboard import Scoreboard

_log = logging.getLogger(__name__)

_FONT = "emulogic.ttf"
_FONT_SIZE = 32


@dataclass(frozen=True)
class SpawnGroup:
    """Enemies that fly in along one path, one after another."""

    priority: int
    path: int
    enemies: Tuple[Tuple[str, int], ...]


@dataclass(frozen=True)
class LevelPattern:
    """Whether the stage is a challenge stage, and its spawn groups."""

    challenge: bool
    groups: Tuple[SpawnGroup, ...]


def _int_attr(element: ET.Element, name: str) -> int:
    value = element.get(name)
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _bool_attr(element: ET.Element, name: str) -> bool:
    value = element.get(name)
    if value is None:
        return False
    text = value.strip()
    if text.lower() == "true":
        return True
    if text.lower() == "false":
        return False
    try:
        return int(text) != 0
    except ValueError:
        return False


def load_spawn_patterns(path) -> LevelPattern:
    """Read a level description: a ``Level`` root whose first child carries the
    challenge flag in ``value`` and whose later children are spawn groups."""
    root = ET.parse(os.fspath(path)).getroot()
    if root.tag != "Level":
        raise ValueError(f"{path}: root element must be <Level>, not <{root.tag}>")
    children = list(root)
    if not children:
        raise ValueError(f"{path}: <Level> has no child elements")
    groups = []
    for element in children[1:]:
        enemies = []
        for child in element:
            kind = child.get("type")
            if kind is None:
                raise ValueError(f"{path}: spawn entry <{child.tag}> has no type")
            enemies.append((kind, _int_attr(child, "index")))
        groups.append(
            SpawnGroup(_int_attr(element, "priority"), _int_attr(element, "path"), tuple(enemies))
        )
    return LevelPattern(_bool_attr(children[0], "value"), tuple(groups))


class LevelState:
    """States a level can end up in."""

    RUNNING = "running"
    FINISHED = "finished"
    GAME_OVER = "game_over"


class Level(GameEntity):
    """Runs one stage until it is cleared or the player runs out of lives."""

    MAX_BUTTERFLIES = 16
    MAX_WASPS = 20
    MAX_BOSSES = 4

    # Builds a wasp from (assets, audio, physics, path, index, challenge);
    # with none set, wasp entries are skipped and not awaited.
    wasp_factory: Optional[Callable[..., Enemy]] = None

    def __init__(self, stage, sidebar, player, stars, assets, audio, physics,
                 input_manager, rng, patterns: LevelPattern) -> None:
        super().__init__()
        self._sidebar = sidebar
        self._sidebar.set_level(stage)
        self._stars = stars
        self._assets = assets
        self._audio = audio
        self._physics = physics
        self._input = input_manager
        self._rng = rng
        self._patterns = patterns

        self.stage = stage
        self.stage_started = False
        self._label_timer = 0.0

        width, height = Graphics.SCREEN_WIDTH, Graphics.SCREEN_HEIGHT
        self._stage_label = self._label("STAGE", (75, 75, 200), (width * 0.35, height * 0.5))
        self._stage_number = Scoreboard(assets, (75, 75, 200))
        self._stage_number.score = stage
        self._stage_number.parent = self
        self._stage_number.position = (width * 0.5, height * 0.5)
        self._stage_label_on = 0.0
        self._stage_label_off = 1.5

        self._ready_label = self._label("READY", (150, 0, 0), (width * 0.4, height * 0.5))
        self._ready_label_on = self._stage_label_off
        self._ready_label_off = self._ready_label_on + 3.0

        self._player = player
        self._player_hit = False
        self._respawn_delay = 3.0
        self._respawn_timer = 0.0
        self._respawn_label_on = 2.0

        self._game_over_label = self._label("GAME OVER!", (150, 0, 0), (width * 0.4, height * 0.5))
        self._game_over_delay = 6.0
        self._game_over_timer = 0.0
        self._game_over_label_on = 1.0

        self._state = LevelState.RUNNING

        self._butterfly_count = 0
        self._wasp_count = 0
        self._boss_count = 0
        self.formation_butterflies: List[Optional[Butterfly]] = [None] * self.MAX_BUTTERFLIES
        self.formation_wasps: List[Optional[Enemy]] = [None] * self.MAX_WASPS
        self.formation_bosses: List[Optional[Boss]] = [None] * self.MAX_BOSSES
        self.challenge_enemies: List[Enemy] = []

        self.challenge_stage = patterns.challenge
        self.formation: Optional[Formation] = None
        if not self.challenge_stage:
            self.formation = Formation()
            self.formation.position = (width * 0.4, 150.0)
            Enemy.set_formation(self.formation)

        self._fly_in_priority = 0
        self._fly_in_index = 0
        self._spawn_delay = 0.2
        self._spawn_timer = 0.0
        self.spawning_finished = False

        self._diving_butterfly: Optional[Butterfly] = None
        self._skip_first_butterfly = False
        self._butterfly_dive_delay = 1.0
        self._butterfly_dive_timer = 0.0

        self._diving_wasp: Optional[Enemy] = None
        self._diving_wasp2: Optional[Enemy] = None
        self._wasp_dive_delay = 1.0
        self._wasp_dive_timer = 0.0

        self._diving_boss: Optional[Boss] = None
        self._skip_first_boss = True
        self._capture_dive = True
        self._boss_dive_delay = 5.0
        self._boss_dive_timer = 0.0

        Enemy.set_player(player)

    def _label(self, text: str, color, pos) -> Sprite:
        sprite = Sprite(self._assets.get_text(text, _FONT, _FONT_SIZE, color))
        sprite.parent = self
        sprite.position = pos
        return sprite

    @property
    def state(self) -> str:
        """One of the ``LevelState`` values."""
        return self._state

    # -- start and death ------------------------------------------------
    def _handle_start_labels(self, dt: float) -> None:
        self._label_timer += dt
        if self._label_timer >= self._stage_label_off:
            self._stars.scroll(True)
            self._player.active = True
            self._player.visible = True
            if self.stage > 1 or self._label_timer >= self._ready_label_off:
                self.stage_started = True

    def _handle_collisions(self) -> None:
        if not self._player_hit and self._player.was_hit:
            self._sidebar.set_ships(self._player.lives)
            self._player_hit = True
            self._respawn_timer = 0.0
            self._player.active = False
            self._stars.scroll(False)

    def _handle_player_death(self, dt: float) -> None:
        if self._player.is_animating():
            return
        if self._player.lives > 0:
            if self._respawn_timer == 0.0:
                self._player.visible = False
            self._respawn_timer += dt
            if self._respawn_timer >= self._respawn_delay:
                self._player.active = True
                self._player.visible = True
                self._player_hit = False
                self._stars.scroll(True)
        else:
            if self._game_over_timer == 0.0:
                self._player.visible = False
            self._game_over_timer += dt
            if self._game_over_timer >= self._game_over_delay:
                self._state = LevelState.GAME_OVER

    # -- spawning -------------------------------------------------------
    def _spawn(self, kind: str, path: int, index: int) -> None:
        if kind == "Butterfly":
            enemy = Butterfly(self._assets, self._audio, self._physics, path, index, False)
            slots = self.formation_butterflies
        elif kind == "Wasp":
            if self.wasp_factory is None:
                _log.warning("No wasp factory set; wasp %d skipped", index)
                return
            enemy = self.wasp_factory(self._assets, self._audio, self._physics, path, index, False)
            slots = self.formation_wasps
        elif kind == "Boss":
            enemy = Boss(self._assets, self._audio, self._physics, self._rng, path, index, False)
            slots = self.formation_bosses
        else:
            _log.warning("Unknown enemy type %r in spawn pattern", kind)
            return
        if self.challenge_stage:
            self.challenge_enemies.append(enemy)
            return
        if not 0 <= index < len(slots):
            raise ValueError(f"{kind} index {index} is outside the formation")
        slots[index] = enemy
        if kind == "Butterfly":
            self._butterfly_count += 1
        elif kind == "Wasp":
            self._wasp_count += 1
        else:
            self._boss_count += 1

    def _handle_enemy_spawning(self, dt: float) -> None:
        self._spawn_timer += dt
        if self._spawn_timer < self._spawn_delay:
            return
        spawned = False
        priority_found = False
        for group in self._patterns.groups:
            if group.priority != self._fly_in_priority:
                continue
            priority_found = True
            if self._fly_in_index < len(group.enemies):
                kind, index = group.enemies[self._fly_in_index]
                self._spawn(kind, group.path, index)
                spawned = True
        if not priority_found:
            self.spawning_finished = True
        elif not spawned:
            if not self._enemy_flying_in():
                self._fly_in_priority += 1
                self._fly_in_index = 0
        else:
            self._fly_in_index += 1
        self._spawn_timer = 0.0

    def _formation_enemies(self) -> Iterator[Enemy]:
        for enemy in itertools.chain(
            self.formation_butterflies, self.formation_wasps, self.formation_bosses
        ):
            if enemy is not None:
                yield enemy

    def _enemy_flying_in(self) -> bool:
        return any(e.state is EnemyState.FLY_IN for e in self._formation_enemies())

    def _formation_full(self) -> bool:
        wasps_done = self.wasp_factory is None or self._wasp_count == self.MAX_WASPS
        return (
            self._butterfly_count == self.MAX_BUTTERFLIES
            and self._boss_count == self.MAX_BOSSES
            and wasps_done
        )

    # -- formation and diving -------------------------------------------
    def _handle_enemy_formation(self, dt: float) -> None:
        self.formation.update(dt)
        cleared = self.spawning_finished
        for enemy in self._formation_enemies():
            enemy.update(dt)
            if enemy.state is not EnemyState.DEAD or enemy.in_death_animation():
                cleared = False
        if not self.formation.locked():
            if self._formation_full() and not self._enemy_flying_in():
                self.formation.lock()
        else:
            self._handle_enemy_diving(dt)
        if cleared:
            _log.info("Stage Finished!")
            self._state = LevelState.FINISHED

    def _handle_enemy_diving(self, dt: float) -> None:
        in_formation = EnemyState.IN_FORMATION

        if self._diving_butterfly is None:
            self._butterfly_dive_timer += dt
            if self._butterfly_dive_timer >= self._butterfly_dive_delay:
                skipped = False
                for butterfly in reversed(self.formation_butterflies):
                    if (
                        butterfly is not None
                        and butterfly.state is in_formation
                        and (not self._skip_first_butterfly or skipped)
                    ):
                        self._diving_butterfly = butterfly
                        butterfly.dive()
                        self._skip_first_butterfly = not self._skip_first_butterfly
                        break
                    skipped = True
                self._butterfly_dive_timer = 0.0
        elif self._diving_butterfly.state is not EnemyState.DIVING:
            self._diving_butterfly = None

        self._wasp_dive_timer += dt
        if self._wasp_dive_timer >= self._wasp_dive_delay:
            for wasp in reversed(self.formation_wasps):
                if wasp is not None and wasp.state is in_formation:
                    if self._diving_wasp is None:
                        self._diving_wasp = wasp
                        wasp.dive()
                    elif self._diving_wasp2 is None:
                        self._diving_wasp2 = wasp
                        wasp.dive()
                    break
            self._wasp_dive_timer = 0.0
        if self._diving_wasp is not None and self._diving_wasp.state is not EnemyState.DIVING:
            self._diving_wasp = None
        if self._diving_wasp2 is not None and self._diving_wasp2.state is not EnemyState.DIVING:
            self._diving_wasp2 = None

        if self._diving_boss is None:
            self._boss_dive_timer += dt
            if self._boss_dive_timer >= self._boss_dive_delay:
                skipped = False
                for boss in reversed(self.formation_bosses):
                    if boss is None or boss.state is not in_formation:
                        continue
                    if not self._skip_first_boss or skipped:
                        self._diving_boss = boss
                        if self._capture_dive:
                            boss.dive(1)
                        else:
                            boss.dive()
                            self._send_escorts(boss.index)
                        self._skip_first_boss = not self._skip_first_boss
                        self._capture_dive = not self._capture_dive
                        break
                    skipped = True
                self._boss_dive_timer = 0.0
        elif self._diving_boss.state is not EnemyState.DIVING:
            self._diving_boss = None

    def _send_escorts(self, boss_index: int) -> None:
        first = boss_index * 2 if boss_index % 2 == 0 else boss_index * 2 - 1
        for escort_index in (first, first + 4):
            escort = self.formation_butterflies[escort_index]
            if escort is not None and escort.state is EnemyState.IN_FORMATION:
                escort.dive(1)

    # -- frame ----------------------------------------------------------
    def update(self, dt: float) -> None:
        """Advance the stage by ``dt`` seconds."""
        if not self.stage_started:
            self._handle_start_labels(dt)
            return
        if not self.spawning_finished:
            self._handle_enemy_spawning(dt)
        if not self.challenge_stage:
            self._handle_enemy_formation(dt)
        else:
            for enemy in self.challenge_enemies:
                enemy.update(dt)
        self._handle_collisions()
        if self._player_hit:
            self._handle_player_death(dt)
        elif self._input.key_pressed(pygame.K_n):
            self._state = LevelState.FINISHED

    def render(self, graphics) -> None:
        """Draw the intro labels, or the enemies and any death labels."""
        if not self.stage_started:
            if self._stage_label_on < self._label_timer < self._stage_label_off:
                self._stage_label.render(graphics)
                self._stage_number.render(graphics)
            elif self._ready_label_on < self._label_timer < self._ready_label_off:
                self._ready_label.render(graphics)
            return
        enemies = self.challenge_enemies if self.challenge_stage else self._formation_enemies()
        for enemy in enemies:
            enemy.render(graphics)
        if self._player_hit:
            if self._respawn_timer >= self._respawn_label_on:
                self._ready_label.render(graphics)
            if self._game_over_timer >= self._game_over_label_on:
                self._game_over_label.render(graphics)