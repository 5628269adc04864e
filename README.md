# swarmshooter

The parts of a fixed-screen arcade shooter, built on pygame. Butterflies and
bosses fly in along curved paths and settle into a swaying formation. Once the
formation is full it pulses, and enemies break away to dive at the player's
ship; a boss can stop mid-dive and lower a capture beam. The side bar shows
scores, spare ships and stage flags, and a three-layer starfield scrolls
behind it all.

## Installing

```
pip install .
```

This pulls in `pygame`, which provides the window, drawing, fonts and sound.

## What is in the package

Engine pieces, usable without a window:

- `swarmshooter.entity`: `GameEntity`, with a position, rotation and scale in
  a parent/child hierarchy (`position` and friends give world values,
  `local_position` and friends give values relative to the parent), plus
  `rotate_vector` and the `Space` enum for `translate`.
- `swarmshooter.bezier`: `BezierCurve.point_at(t)` and `BezierPath`, whose
  `sample()` returns every curve's waypoints from t=0 to t=1.
- `swarmshooter.rng`: `Random`, a seedable generator with `random_int`,
  `random_float` and `random_range` (inclusive for two integers).
- `swarmshooter.input`: `InputManager`, tracking keys and `MouseButton`s with
  down, pressed and released queries. Feed it with `update(keys, buttons,
  mouse_pos)` or read pygame's state with `poll()`; call
  `update_prev_input()` at the end of each frame.
- `swarmshooter.physics`: `BoxCollider`, `CircleCollider`,
  `colliders_overlap`, `PhysEntity` (broad-phase circle, then narrow-phase
  tests) and `PhysicsManager`, which checks `CollisionLayer`s against each
  other according to masks of `CollisionFlags` and calls `hit` on both sides.
- `swarmshooter.formation`: `Formation`, the side-to-side sway while filling
  and the pulsing spread once `lock()`ed and centred.
- `swarmshooter.animation`: `Sprite` and `AnimatedTexture` (with `WrapMode`
  and `AnimDirection`), driven by `update(dt)`.

Services that need pygame's display or mixer:

- `swarmshooter.graphics`: `Graphics`, a 1024×896 window that loads images,
  renders text and draws textures and lines; raises `GraphicsError`.
- `swarmshooter.assets`: `AssetManager`, caching textures, text, fonts,
  music and sound effects from `Assets/` and `Assets/Audio/` under a base
  path, with reference counts; raises `AssetError`.
- `swarmshooter.audio`: `AudioManager`, playing music and sound effects by
  file name or handle.

Game objects:

- `swarmshooter.scoreboard.Scoreboard`, `swarmshooter.sidebar.PlaySideBar`,
  `swarmshooter.stars.BackgroundStars`.
- `swarmshooter.player.Player` and `swarmshooter.bullet.Bullet`: arrow keys
  or A/D move the ship, Space fires.
- `swarmshooter.enemy.Enemy` with `swarmshooter.butterfly.Butterfly` and
  `swarmshooter.boss.Boss`; `swarmshooter.capture_beam.CaptureBeam`.
- `swarmshooter.level`: `Level` runs one stage (intro labels, spawning,
  diving, player death and respawn, game over); `load_spawn_patterns(path)`
  reads its XML description into a `LevelPattern` of `SpawnGroup`s. While a
  stage runs, pressing N ends it.
- `swarmshooter.play_screen.PlayScreen`: starts a new game and runs stages
  one after another until the player is out of lives.

### Spawn pattern files

A pattern file has a `<Level>` root. Its first child carries the challenge
flag in a `value` attribute; every later child is a spawn group with
`priority` and `path` attributes, holding one element per enemy with `type`
(`Butterfly`, `Wasp` or `Boss`) and `index` attributes:

```xml
<Level>
  <Challenge value="false"/>
  <Spawn priority="0" path="0">
    <Enemy type="Butterfly" index="0"/>
    <Enemy type="Boss" index="0"/>
  </Spawn>
</Level>
```

## Driving a game yourself

The package has no command and no main loop. To play, create the services,
set the collision masks and step a `PlayScreen` each frame:

```python
import pygame

from swarmshooter.assets import AssetManager
from swarmshooter.audio import AudioManager
from swarmshooter.graphics import Graphics
from swarmshooter.input import InputManager
from swarmshooter.physics import CollisionFlags, CollisionLayer, PhysicsManager
from swarmshooter.play_screen import PlayScreen
from swarmshooter.rng import Random
from swarmshooter.stars import BackgroundStars

graphics = Graphics()
assets = AssetManager(graphics, "path/to/game")
audio = AudioManager(assets)
physics = PhysicsManager()
physics.set_layer_collision_mask(
    CollisionLayer.FRIENDLY, CollisionFlags.HOSTILE | CollisionFlags.HOSTILE_PROJECTILE)
physics.set_layer_collision_mask(
    CollisionLayer.HOSTILE, CollisionFlags.FRIENDLY | CollisionFlags.FRIENDLY_PROJECTILE)
physics.set_layer_collision_mask(CollisionLayer.FRIENDLY_PROJECTILE, CollisionFlags.HOSTILE)
physics.set_layer_collision_mask(CollisionLayer.HOSTILE_PROJECTILE, CollisionFlags.FRIENDLY)
input_manager = InputManager()
rng = Random()
stars = BackgroundStars(assets, rng)

play = PlayScreen(assets, audio, physics, input_manager, rng, stars,
                  "path/to/game/Data/Level1.xml")
play.start_new_game()

clock = pygame.time.Clock()
running = True
while running and not play.game_over():
    dt = clock.tick(60) / 1000.0
    running = not any(e.type == pygame.QUIT for e in pygame.event.get())
    input_manager.poll()
    stars.update(dt)
    play.update(dt)
    physics.update()
    input_manager.update_prev_input()
    graphics.clear_back_buffer()
    stars.render(graphics)
    play.render(graphics)
    graphics.present()

audio.close()
graphics.close()
```

The images, fonts (`emulogic.ttf`) and sounds must be in `Assets/` under the
base path given to `AssetManager`.

## What the package does not do

- There is no command to launch the game and no ready-made game loop; the
  example above is the loop you write.
- There is no title screen or mode selection, and no screen switching
  between a title and play.
- There is no wasp enemy. `Level.wasp_factory` can be set to a callable that
  builds one from `(assets, audio, physics, path, index, challenge)`; without
  it, wasp entries in a pattern file are skipped and the formation locks
  without them.
- High scores are not stored; the side bar shows a fixed high score.

## Running the tests

```
pip install .[test]
pytest
```