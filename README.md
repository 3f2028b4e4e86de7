# comfykit

Building blocks for small 2D games, in pure Python with no dependencies
outside the standard library.

## Modules

- `comfykit.math2d`: immutable `Vec2`, `Vec3`, `IRect` and `Color` types,
  the colour constants `WHITE`, `BLACK`, `RED` and `PINK`, and the helpers
  `splat`, `isplat`, `usplat` and `rotate_around_point` (rotation about the
  x axis through a pivot).
- `comfykit.timer`: `Stopwatch` and `Timer`. Both are advanced by explicit
  ticks given as `datetime.timedelta` (or seconds via `Timer.tick_secs`).
  A one-shot timer clamps at its duration and stays finished. A repeating
  timer wraps around and reports `times_finished` for each tick.
- `comfykit.tween`: `Tween` moves a value from a start to an end over a
  duration, after an optional delay, through an easing function (`linear` is
  provided). `FlashingColor` flashes between two colours for a while after
  `trigger()`.
- `comfykit.random`: a seedable PCG generator (`srand`, `rand`, `gen_range`).
  It comes with `FisherYates`/`shuffle`, `choose`, `choose_multiple`, coin
  tosses (`toss_coin`, `flip_coin`, `coin_toss`) and vector helpers such as
  `random_dir`, `random_vec`, `random_offset`, `random_box` and
  `random_around`. The generator is global; the same seed always gives the
  same sequence.
- `comfykit.task_timer`: `TaskTimer` adds up wall-clock time spent in named
  tasks. `start_task` returns a guard that records the time when its `with`
  block ends or when `stop()` is called. `get_duration` gives the total, or
  `None`. Module-level `start_task`/`get_duration` use a shared timer.
- `comfykit.spatial_hash`: `AabbShape` and `CircleShape` with overlap and
  segment-intersection tests, and `SpatialHash`. `add_shape` stores circles
  as their bounding boxes. `query(shape)` yields the `UserData` of
  overlapping entries, possibly more than once for an entry that spans
  several cells. `raycast(start, end)` returns the closest hit and its data.
- `comfykit.shaders`: `ShaderMap`, `create_shader`, `UniformDef`/`Uniform`
  and `build_shader_source`. `create_shader` assigns uniform bindings in
  name order and puts WGSL uniform declarations in front of the source. It
  raises `ShaderError` when the source has no `@vertex` function. The
  module also tracks the current render target (`use_render_target`,
  `use_default_render_target`, `get_current_render_target`).
- `comfykit.render_queues`: the mesh draw queue. `draw_mesh`/`draw_mesh_ex`
  queue a `Mesh` under a `MeshGroupKey` made of z-index, `BlendMode`,
  texture, shader instance and render target. `consume_render_queues()`
  returns and clears the queue, sorted by key. `use_shader`,
  `set_uniform`/`set_uniform_f32` and `use_default_shader` manage shader
  instances; setting a uniform with no shader active raises `ShaderError`.
- `comfykit.text`: `draw_text`, `draw_text_ex` and
  `draw_text_pro_experimental` queue `DrawText` requests, and
  `consume_text_queue()` takes them. `simple_styled_text` parses text in
  which a `*` makes the next character wiggle and turn pink.
- `comfykit.draw_lines`: `create_line_strip` returns `(vertices, indices)`
  and raises `ValueError` for fewer than two points. The module also has
  lines, rays, textured lines, wedges and arrows.
- `comfykit.draw_shapes`: filled and outlined rectangles, rotated outlines,
  corner brackets, `rotated_rectangle` for textured quads, the parameter
  types `DrawTextureParams`, `DrawTextureProParams` and `RawDrawParams`,
  `SpriteAlign`, and a sprite-culling switch (`set_sprite_culling`,
  `get_sprite_culling`).
- `comfykit.draw_curves`: circles, ellipses, polygons (`draw_poly_z`,
  `draw_poly2_z`, with rotation in degrees and 1 to 255 sides), filled arcs,
  arc outlines and arc wedges.

## Install

```
pip install .
```

## Example

```python
from datetime import timedelta

from comfykit.math2d import Vec2, WHITE
from comfykit.random import srand, gen_range
from comfykit.render_queues import consume_render_queues
from comfykit.draw_curves import draw_circle
from comfykit.spatial_hash import SpatialHash, CircleShape, UserData
from comfykit.timer import Timer

timer = Timer.from_seconds(1.0, True)
timer.tick_secs(2.5)
print(timer.times_finished)  # 2
print(timer.elapsed == timedelta(seconds=0.5))  # True

srand(42)
print(gen_range(0, 10))

spatial = SpatialHash()
spatial.add_shape(CircleShape(Vec2(5.0, 5.0), 2.0), UserData(entity_type=1))
hits = list(spatial.query(CircleShape(Vec2(6.0, 6.0), 1.0)))

draw_circle(Vec2(0.0, 0.0), 1.0, WHITE, 0)
for key, meshes in consume_render_queues().items():
    print(key.z_index, len(meshes))
```

## What it does not do

comfykit renders nothing. There is no window, GPU backend, texture or font
loading, and no game loop. The drawing functions only build triangle meshes
and text requests and put them on queues. A renderer of your own has to take
them with `consume_render_queues()` and `consume_text_queue()`. Sprite
culling is only a stored setting here, since there is no camera to cull
against.

## Tests

```
pip install .[test]
pytest
```