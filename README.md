# quadkit

Pure-Python simulation cores for small 2D games. Each module holds the state
and rules of one game system; you feed it time steps and input and read the
resulting state back. The logic is easy to test and can be plugged into any
renderer.

## Modules

- `quadkit.geometry`: immutable `Vec2`, `Vec3` (with `length`, `normalize`,
  `dot`, `cross`), `Rect` (`overlaps`, `contains`) and `polar_to_cartesian`.
- `quadkit.platformer`: a collision `World` with static tile layers
  (`StaticTiledLayer`, `Tile`), `Actor`s that move pixel by pixel
  (`move_h`, `move_v`), moving `Solid` platforms that carry riders and push or
  squish actors (`solid_move`, `squished`), and jump-through tiles.
- `quadkit.camera`: angle helpers (`short_angle_dist`, `angle_lerp`,
  `wrap_rotation`), `camera_basis` and a mouse-look `FirstPersonCamera`.
- `quadkit.particle_config`: `EmitterConfig` and its parts: size `Curve`s and
  `BatchedCurve`, `Color` and `ColorCurve`, emission shapes (`EmissionPoint`,
  `EmissionRect`, `EmissionSphere`), particle meshes (`RectangleMesh`,
  `CircleMesh`, `CustomMesh`), `BlendMode`, sprite-sheet `AtlasConfig` and
  `ParticleMaterial`.
- `quadkit.emitter`: `Emitter`, which spawns and advances `Particle`s, and
  `EmittersCache`, a pool of recycled emitters.
- `quadkit.life`: Conway's Game of Life (`CellState`, `next_generation`,
  `random_cells`).
- `quadkit.asteroids`: `AsteroidsGame` with a wrapping ship, bullets and
  splitting asteroids, driven by `Controls`.
- `quadkit.arkanoid`: `ArkanoidGame`, a paddle, ball and breakable blocks.
- `quadkit.bouncers`: `BouncerSwarm`, sprites that bounce off the screen edges.
- `quadkit.tree`: `branch_segments`, the swaying fractal tree as `Branch`
  segments.
- `quadkit.audio`: `SoundLibrary`, which keeps loaded sound data behind
  `Sound` handles and tracks whether each is playing, looped and its volume.
- `quadkit.inventory`: an `Inventory` of bought items and equipment `Slot`s,
  with drag-and-drop commands `Fit`, `Unfit` and `Refit`.
- `quadkit.profiler`: `ProfilerState` with frame-time history, `Zone` and
  `Frame` records, `zone_label` and `frame_color`.
- `quadkit.overlays`: `centered_position` for dialogs and `touch_style` for
  `TouchPhase` markers.

## What it does not do

Nothing here opens a window, draws, reads a keyboard, mouse or touch screen,
or compiles shaders: input is passed in as arguments and output is plain
state. `SoundLibrary` does not decode or play audio; it only stores the bytes
and the playback settings. There is no command-line program.

## Installation

```
pip install .
```

## Example

```python
from quadkit.geometry import Vec2
from quadkit.platformer import Tile, World

world = World()
world.add_static_tiled_layer([Tile.EMPTY] * 39 + [Tile.SOLID], 8.0, 8.0, 40, 1)
player = world.add_actor(Vec2(50.0, 80.0), 8, 8)
world.move_h(player, 1.5)
print(world.actor_pos(player))
```

## Running the tests

```
pip install .[test]
pytest
```