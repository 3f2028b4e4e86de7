"""Line, ray, wedge and arrow drawing built on mesh queues."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .math2d import Color, Vec2, Vec3
from .render_queues import (
    BlendMode,
    Mesh,
    SpriteVertex,
    TextureHandle,
    draw_mesh,
    draw_mesh_ex,
)

__all__ = [
    "Z_DIV",
    "create_line_strip",
    "draw_line",
    "draw_ray",
    "draw_line_tex",
    "draw_line_tex_y_uv",
    "draw_line_tex_y_uv_flex",
    "draw_wedge",
    "draw_arrow",
    "draw_arrow_pro",
]

Z_DIV = 1000.0
_F32_EPSILON = 1.1920929e-07
_LINE_INDICES = (0, 1, 2, 2, 1, 3)


def _div(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def create_line_strip(points: Sequence[Vec2], thickness: float) -> Tuple[List[Vec2], List[int]]:
    """Quads along consecutive points; returns vertices and indices starting at 0."""
    if len(points) < 2:
        raise ValueError("Not enough points to create a line strip!")

    half_thickness = thickness / 4.0
    vertices: List[Vec2] = []
    indices: List[int] = []

    for i, (p0, p1) in enumerate(zip(points, points[1:])):
        direction = (p1 - p0).normalize_or_right()
        normal = Vec2(-direction.y, direction.x) * half_thickness

        vertices.extend((p0 - normal, p0 + normal, p1 - normal, p1 + normal))

        base = i * 4
        indices.extend((base, base + 1, base + 2, base + 2, base + 1, base + 3))

    return vertices, indices


def draw_line(p1: Vec2, p2: Vec2, thickness: float, color: Color, z_index: int) -> None:
    draw_line_tex(p1, p2, thickness, z_index, color, None)


def draw_ray(pos: Vec2, direction: Vec2, thickness: float, color: Color, z_index: int) -> None:
    draw_line(pos, pos + direction, thickness, color, z_index)


def draw_line_tex(
    p1: Vec2,
    p2: Vec2,
    thickness: float,
    z_index: int,
    color: Color,
    texture: Optional[TextureHandle],
) -> None:
    x1, y1 = p1
    x2, y2 = p2
    nx, ny = -(y2 - y1), x2 - x1

    tlen = _div(math.hypot(nx, ny), thickness * 0.5)
    if tlen < _F32_EPSILON:
        return
    tx = _div(nx, tlen)
    ty = _div(ny, tlen)

    z = z_index / Z_DIV
    vertices = [
        SpriteVertex(Vec3(x1 + tx, y1 + ty, z), Vec2(0.0, 0.0), color),
        SpriteVertex(Vec3(x1 - tx, y1 - ty, z), Vec2(1.0, 0.0), color),
        SpriteVertex(Vec3(x2 + tx, y2 + ty, z), Vec2(0.0, 1.0), color),
        SpriteVertex(Vec3(x2 - tx, y2 - ty, z), Vec2(1.0, 1.0), color),
    ]

    draw_mesh(
        Mesh(
            origin=Vec3((x1 + x2) / 2.0, (y1 + y2) / 2.0, float(z_index)),
            vertices=vertices,
            indices=list(_LINE_INDICES),
            z_index=z_index,
            texture=texture,
        )
    )


def draw_line_tex_y_uv(
    p1: Vec2,
    p2: Vec2,
    thickness: float,
    color: Color,
    texture: Optional[TextureHandle],
    y_uv: Tuple[float, float],
    z_index: int,
    blend_mode: BlendMode,
) -> None:
    """Textured line whose v coordinates run over ``y_uv`` wrapped into [0, 1).

    The mesh is queued at z-index 0; ``z_index`` only sets the vertex depth.
    """
    x1, y1 = p1
    x2, y2 = p2
    nx, ny = -(y2 - y1), x2 - x1

    tlen = _div(math.hypot(nx, ny), thickness * 0.5)
    if tlen < _F32_EPSILON:
        return
    tx = _div(nx, tlen)
    ty = _div(ny, tlen)

    z = z_index / Z_DIV
    uv_start, uv_end = y_uv
    v_start = math.fmod(uv_start, 1.0)
    v_end = math.fmod(uv_end, 1.0)

    vertices = [
        SpriteVertex(Vec3(x1 + tx, y1 + ty, z), Vec2(0.0, v_start), color),
        SpriteVertex(Vec3(x1 - tx, y1 - ty, z), Vec2(1.0, v_start), color),
        SpriteVertex(Vec3(x2 + tx, y2 + ty, z), Vec2(0.0, v_end), color),
        SpriteVertex(Vec3(x2 - tx, y2 - ty, z), Vec2(1.0, v_end), color),
    ]

    draw_mesh_ex(
        Mesh(
            origin=Vec3((x1 + x2) / 2.0, (y1 + y2) / 2.0, float(z_index)),
            vertices=vertices,
            indices=list(_LINE_INDICES),
            z_index=0,
            texture=texture,
        ),
        blend_mode,
    )


def draw_line_tex_y_uv_flex(
    p1: Vec2,
    p2: Vec2,
    start_thickness: float,
    end_thickness: float,
    color: Color,
    texture: Optional[TextureHandle],
    uv_offset: float,
    uv_size: float,
    z_index: int,
    blend_mode: BlendMode,
) -> None:
    """Textured line whose thickness changes from one end to the other."""
    x1, y1 = p1
    x2, y2 = p2
    nx, ny = -(y2 - y1), x2 - x1

    tlen = math.hypot(nx, ny)
    if tlen < _F32_EPSILON:
        return

    nxn, nyn = nx / tlen, ny / tlen
    tx1, ty1 = nxn * start_thickness * 0.5, nyn * start_thickness * 0.5
    tx2, ty2 = nxn * end_thickness * 0.5, nyn * end_thickness * 0.5

    z = z_index / Z_DIV
    start = math.fmod(uv_offset, 1.0)
    end = start + uv_size

    vertices = [
        SpriteVertex(Vec3(x1 + tx1, y1 + ty1, z), Vec2(0.0, start), color),
        SpriteVertex(Vec3(x1 - tx1, y1 - ty1, z), Vec2(1.0, start), color),
        SpriteVertex(Vec3(x2 + tx2, y2 + ty2, z), Vec2(0.0, end), color),
        SpriteVertex(Vec3(x2 - tx2, y2 - ty2, z), Vec2(1.0, end), color),
    ]

    draw_mesh_ex(
        Mesh(
            origin=Vec3((x1 + x2) / 2.0, (y1 + y2) / 2.0, float(z_index)),
            vertices=vertices,
            indices=list(_LINE_INDICES),
            z_index=z_index,
            texture=texture,
        ),
        blend_mode,
    )


def draw_wedge(
    center: Vec2,
    radius: float,
    thickness: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    z_index: int,
) -> None:
    """Outline of the triangle from ``center`` to two points on a circle."""
    start_point = Vec2.from_angle(start_angle) * radius
    end_point = Vec2.from_angle(end_angle) * radius

    draw_line(center, center + start_point, thickness, color, z_index)
    draw_line(center, center + end_point, thickness, color, z_index)
    draw_line(center + start_point, center + end_point, thickness, color, z_index)


def draw_arrow(start: Vec2, end: Vec2, thickness: float, color: Color, z_index: int) -> None:
    draw_arrow_pro(start, end, thickness, color, z_index, 0.8, 0.15 * math.pi)


def draw_arrow_pro(
    start: Vec2,
    end: Vec2,
    thickness: float,
    color: Color,
    z_index: int,
    length: float,
    spread: float,
) -> None:
    """Arrow from ``start`` to ``end`` with a head of ``length`` opened by ``spread``."""
    direction = end - start
    angle = direction.angle()

    draw_ray(end, -Vec2.from_angle(angle + spread) * length, thickness, color, z_index)
    draw_ray(end, -Vec2.from_angle(angle - spread) * length, thickness, color, z_index)
    draw_ray(start, direction, thickness, color, z_index)