"""Circles, ellipses, polygons and arcs built on mesh queues."""

from __future__ import annotations

import math
from typing import List, Optional

from .draw_lines import Z_DIV, draw_line
from .math2d import Color, Vec2, Vec3
from .render_queues import (
    BlendMode,
    Mesh,
    SpriteVertex,
    draw_mesh,
    draw_mesh_ex,
)

__all__ = [
    "draw_circle",
    "draw_ellipse",
    "draw_circle_outline",
    "draw_circle_z",
    "draw_poly_z",
    "draw_poly2_z",
    "draw_arc",
    "draw_arc_outline",
    "draw_arc_wedge",
]

_CIRCLE_SIDES = 40
_ARC_SEGMENTS = 40
_OUTLINE_STEP = 0.1


def _round_half_away(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _ring_mesh(
    center: Vec2,
    radius: float,
    thickness: float,
    start_angle: float,
    steps: int,
    color: Color,
    z_index: int,
) -> Mesh:
    inner_radius = radius - thickness / 2.0
    outer_radius = radius + thickness / 2.0
    z = z_index / Z_DIV

    vertices: List[SpriteVertex] = []
    indices: List[int] = []
    previous: Optional[tuple] = None

    for i in range(steps + 1):
        angle = start_angle + i * _OUTLINE_STEP
        c, s = math.cos(angle), math.sin(angle)
        inner = Vec2(center.x + inner_radius * c, center.y + inner_radius * s)
        outer = Vec2(center.x + outer_radius * c, center.y + outer_radius * s)

        if previous is not None:
            prev_inner, prev_outer = previous
            vertices.extend(
                (
                    SpriteVertex(prev_inner.extend(z), Vec2(0.0, 0.0), color),
                    SpriteVertex(inner.extend(z), Vec2(1.0, 0.0), color),
                    SpriteVertex(prev_outer.extend(z), Vec2(0.0, 1.0), color),
                    SpriteVertex(outer.extend(z), Vec2(1.0, 1.0), color),
                )
            )
            base = len(vertices) - 4
            indices.extend((base, base + 1, base + 2, base + 1, base + 2, base + 3))

        previous = (inner, outer)

    return Mesh(
        origin=center.extend(float(z_index)),
        vertices=vertices,
        indices=indices,
        z_index=z_index,
        texture=None,
    )


def draw_circle(center: Vec2, r: float, color: Color, z_index: int) -> None:
    draw_poly_z(center, _CIRCLE_SIDES, r, 0.0, color, z_index, BlendMode.ALPHA)


def draw_ellipse(center: Vec2, radius: Vec2, color: Color, z_index: int) -> None:
    draw_poly2_z(center, _CIRCLE_SIDES, radius, 0.0, color, z_index, BlendMode.ALPHA)


def draw_circle_outline(
    center: Vec2, radius: float, thickness: float, color: Color, z_index: int
) -> None:
    """Ring of the given thickness centred on the circle of ``radius``."""
    steps = _round_half_away(2.0 * math.pi / _OUTLINE_STEP)
    draw_mesh(_ring_mesh(center, radius, thickness, 0.0, steps, color, z_index))


def draw_circle_z(
    center: Vec2, r: float, color: Color, z_index: int, blend_mode: BlendMode
) -> None:
    draw_poly_z(center, _CIRCLE_SIDES, r, 0.0, color, z_index, blend_mode)


def draw_poly_z(
    position: Vec2,
    sides: int,
    radius: float,
    rotation: float,
    color: Color,
    z_index: int,
    blend_mode: BlendMode,
) -> None:
    """Regular polygon with ``sides`` sides; ``rotation`` is in degrees."""
    draw_poly2_z(
        position, sides, Vec2(radius, radius), rotation, color, z_index, blend_mode
    )


def draw_poly2_z(
    position: Vec2,
    sides: int,
    radius: Vec2,
    rotation: float,
    color: Color,
    z_index: int,
    blend_mode: BlendMode,
) -> None:
    """Filled polygon stretched by ``radius`` per axis; ``rotation`` is in degrees."""
    if not 1 <= sides <= 255:
        raise ValueError(f"sides must be between 1 and 255, got {sides}")

    x, y = position
    z = z_index / Z_DIV
    rot = math.radians(rotation)

    vertices = [SpriteVertex(Vec3(x, y, z), Vec2(0.0, 0.0), color)]
    indices: List[int] = []

    for i in range(sides + 1):
        angle = i / sides * math.pi * 2.0 + rot
        rx, ry = math.cos(angle), math.sin(angle)
        vertices.append(
            SpriteVertex(Vec3(x + radius.x * rx, y + radius.y * ry, z), Vec2(rx, ry), color)
        )
        if i != sides:
            indices.extend((0, i + 1, i + 2))

    draw_mesh_ex(
        Mesh(
            origin=position.extend(float(z_index)),
            vertices=vertices,
            indices=indices,
            z_index=z_index,
        ),
        blend_mode,
    )


def draw_arc(
    position: Vec2,
    radius: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    z_index: int,
) -> None:
    """Filled circular sector from ``start_angle`` to ``end_angle`` (radians)."""
    x, y = position
    z = z_index / Z_DIV

    vertices = [SpriteVertex(Vec3(x, y, z), Vec2(0.0, 0.0), color)]
    indices: List[int] = []

    for i in range(_ARC_SEGMENTS + 1):
        angle = start_angle + i / _ARC_SEGMENTS * (end_angle - start_angle)
        rx, ry = math.cos(angle), math.sin(angle)
        vertices.append(
            SpriteVertex(Vec3(x + radius * rx, y + radius * ry, z), Vec2(rx, ry), color)
        )
        if i != _ARC_SEGMENTS:
            indices.extend((0, i + 1, i + 2))

    draw_mesh(Mesh(vertices=vertices, indices=indices, z_index=z_index))


def draw_arc_outline(
    center: Vec2,
    radius: float,
    thickness: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    z_index: int,
) -> None:
    """Thick arc; the end angle wraps forward past the start angle if needed."""
    two_pi = 2.0 * math.pi
    start_angle = math.fmod(start_angle, two_pi)
    end_angle = math.fmod(end_angle, two_pi)
    if end_angle < start_angle:
        end_angle += two_pi

    steps = _round_half_away((end_angle - start_angle) / _OUTLINE_STEP)
    draw_mesh(_ring_mesh(center, radius, thickness, start_angle, steps, color, z_index))


def draw_arc_wedge(
    center: Vec2,
    radius: float,
    thickness: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    z_index: int,
) -> None:
    """Arc outline closed by two radii back to ``center``."""
    draw_arc_outline(center, radius, thickness, start_angle, end_angle, color, z_index)

    start_point = Vec2.from_angle(start_angle) * radius
    end_point = Vec2.from_angle(end_angle) * radius

    draw_line(center, center + start_point, thickness, color, z_index)
    draw_line(center, center + end_point, thickness, color, z_index)