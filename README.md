# spacebagarre

The game logic of a two-player arcade brawler. Two ships fly around a
1920×1080 arena and collect stars. A ship that hits the outer walls goes back
to its start position and loses points. For online play the package keeps
per-frame inputs and confirmed snapshots so that a match can be rolled back
and simulated again. It also defines the binary packets the two players
exchange.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `spacebagarre.world` holds the screen size constants (`WINDOW_WIDTH`,
  `WINDOW_HEIGHT`) and the fixed time step of 1/60 s. It has a small 2D
  physics world made of `Vec2`, `AABB`, `Circle`, `Body`, `BodyDef`,
  `ColliderDef` and `PhysicsWorld`. Bodies and colliders are referred to by
  `BodyHandle` and `ColliderHandle`, and `ObjectType` tags what a collider
  stands for. `PhysicsWorld.step_simulation()` moves the dynamic bodies
  under gravity and separates overlapping boxes. It then reports contacts as
  enter, stay and exit events, each with a `ColliderPair`, to the object set
  as `world.listener`. Triggers are reported but not separated.
  `copy_from()` takes over another world's state.
- `spacebagarre.input` defines `PlayerInput` (`move_x`, `move_y`, `jump`,
  `shockwave`). `input_from_keyboard(pressed, player_id)` builds an input
  from a collection of held `Key` values. Player 0 uses D/A, Space or W, and
  left Shift. Player 1 uses the arrow keys and right Shift.
  `input_from_gamepad(axis_x, axis_y, buttons)` builds one from stick axes,
  with a dead zone of 8000, and held `GamepadButton` values. `GamepadSlots`
  gives up to two gamepad ids to the players, first come first served.
- `spacebagarre.packet` holds the little-endian wire formats `PingPacket`,
  `InputPacket`, `ConfirmFramePacket` and `DesyncPacket`. Each has an
  `encode()` method and a `decode()` class method. The event codes are in
  `PacketType`. An `InputPacket` packs the player number and a 15-bit frame
  into one field and carries at most 30 inputs. Encoding or decoding more
  than that raises `ValueError`.
- `spacebagarre.timer` has `GameTimerManager(clock=None)`. It moves a match
  through the `GamePhase` values on each `tick()`: a 5 second countdown,
  110 seconds of play, then game over. The clock defaults to
  `time.monotonic` and any callable that returns seconds can replace it.
- `spacebagarre.coins` has `CoinManager`. It places a trigger circle at each
  of 20 fixed spots. Its `update()` moves the active star to the next spot
  every 9 seconds of frames.
- `spacebagarre.player` has `PlayerCharacter`, `PlayerCharacterState` and
  `PlayerCharacterManager`. They handle horizontal thrust with a speed cap,
  flapping on each new jump press, respawn timers, the shockwave cooldown,
  scores, and saving and loading states.
- `spacebagarre.level` provides `create_level()`, which builds the four
  border walls. `create_outer_wall()` and `create_static_aabb_from_corners()`
  add single static boxes.
- `spacebagarre.contact` has `GameContactListener`, which applies the game
  rules on contact:
  - A player who touches a wall respawns at its start after a 3 second
    freeze and loses up to 50 points, never going below zero.
  - A player who enters the active star gains 100 points, capped at 999, and
    the star switches off.
- `spacebagarre.rollback` has `RollbackManager`. It records every player's
  input per frame and saves a snapshot at each confirmed frame. When remote
  inputs differ from the ones it assumed, it restores the last confirmed
  snapshot and steps the world again up to the current frame.

## Example

```python
from spacebagarre.coins import CoinManager
from spacebagarre.contact import GameContactListener
from spacebagarre.input import PlayerInput
from spacebagarre.level import create_level
from spacebagarre.packet import InputPacket
from spacebagarre.player import PlayerCharacterManager
from spacebagarre.rollback import RollbackManager
from spacebagarre.world import PhysicsWorld

world = PhysicsWorld()
listener = GameContactListener()
world.listener = listener
create_level(world, listener)

coins = CoinManager(world, listener)
players = PlayerCharacterManager(world, listener)
players.init_players()
listener.player_manager = players
listener.coin_manager = coins

coins.deactivate_all()
coins.activate_coin_at(0)

for _ in range(60):
    players.set_player_input(0, PlayerInput(move_x=1, jump=True))
    world.step_simulation()
    players.update()
    coins.update()
print(players.get_score(0), players.get_score(1))

# Rollback bookkeeping for an online match
rollback = RollbackManager(players, world)
rollback.save_first_confirmed_frame()
rollback.set_local_input(0, PlayerInput(move_x=-1))
recent = rollback.recent_inputs(0, rollback.confirmed_frame, rollback.current_frame)

packet = InputPacket(inputs=recent)
packet.set_player_and_frame(0, rollback.current_frame)
data = packet.encode()
assert InputPacket.decode(data) == packet

rollback.confirm_frame()
rollback.increase_current_frame()
```

## What the package does not do

This is the simulation and data layer only. It has no window, no rendering
and no sprites. It has no game loop or command to start a match, and no menu
or lobby. It does not read keyboards or gamepads by itself: you pass in the
keys and buttons that are held. It opens no network connection. The packets
are encoded to and decoded from bytes, and sending them between the players
is left to you.