"""Rectangles, rectangle outlines and sprite quads built on mesh queues."""

from __future__ import annotations

import enum
import math
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .draw_lines import Z_DIV, create_line_strip
from .math2d import Color, IRect, Vec2, Vec3
from .render_queues import (
    DEFAULT_BLEND_MODE,
    BlendMode,
    Mesh,
    SpriteVertex,
    TextureHandle,
    draw_mesh,
    draw_mesh_ex,
)

__all__ = [
    "set_sprite_culling",
    "get_sprite_culling",
    "SpriteAlign",
    "DrawTextureParams",
    "DrawTextureProParams",
    "RawDrawParams",
    "rotated_rectangle",
    "draw_rectangle_z_tex",
    "draw_rect_outline",
    "draw_rect_corners",
    "draw_rect_outline_rot",
]

_culling_lock = threading.Lock()
_sprite_culling_enabled = True

_RECT_OUTLINE_ROT_INDICES = (
    0, 1, 4, 1, 4, 5, 1, 5, 6, 1, 2, 6, 3, 7, 2, 2, 7, 6, 0, 4, 3, 3, 4, 7,
)


def set_sprite_culling(enabled: bool) -> None:
    """Enable or disable skipping sprites that lie outside the camera view."""
    global _sprite_culling_enabled
    with _culling_lock:
        _sprite_culling_enabled = bool(enabled)


def get_sprite_culling() -> bool:
    """Whether sprite culling is currently enabled."""
    with _culling_lock:
        return _sprite_culling_enabled


class SpriteAlign(enum.Enum):
    """Which point of a sprite sits at its draw position."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    CENTER_LEFT = "center_left"
    CENTER = "center"
    CENTER_RIGHT = "center_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


@dataclass(frozen=True)
class DrawTextureParams:
    """Options for drawing a textured quad."""

    dest_size: Optional[Vec2] = None
    source_rect: Optional[IRect] = None
    scroll_offset: Vec2 = Vec2(0.0, 0.0)
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False
    pivot: Optional[Vec2] = None
    blend_mode: BlendMode = BlendMode.NONE
    y_sort_offset: float = 0.0

    @classmethod
    def blend(cls, blend_mode: BlendMode) -> DrawTextureParams:
        """Default parameters with the given blend mode."""
        return cls(blend_mode=blend_mode)


@dataclass(frozen=True)
class DrawTextureProParams:
    """Options for drawing an aligned, rotatable sprite."""

    source_rect: Optional[IRect] = None
    align: SpriteAlign = SpriteAlign.CENTER
    pivot: Optional[Vec2] = None
    size: Vec2 = Vec2(1.0, 1.0)
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False
    blend_mode: BlendMode = DEFAULT_BLEND_MODE
    rotation_x: float = 0.0
    y_sort_offset: float = 0.0


@dataclass(frozen=True)
class RawDrawParams:
    """Resolved quad parameters in world units."""

    dest_size: Optional[Vec2] = None
    source_rect: Optional[IRect] = None
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False
    pivot: Optional[Vec2] = None


def rotated_rectangle(
    position: Vec3,
    params: RawDrawParams,
    tex_width: float,
    tex_height: float,
    color: Color,
    scroll_offset: Vec2,
) -> List[SpriteVertex]:
    """The four vertices of a textured, possibly rotated and flipped quad."""
    x, y = position.x, position.y

    if params.source_rect is not None:
        rect = params.source_rect
        offset = Vec2(
            int(rect.offset.x),
            int(tex_height) - int(rect.offset.y) - int(rect.size.y),
        )
        dims = IRect(offset, Vec2(int(rect.size.x), int(rect.size.y)))
    else:
        dims = IRect(Vec2(0, 0), Vec2(int(tex_width), int(tex_height)))

    sx, sy = float(dims.offset.x), float(dims.offset.y)
    sw, sh = float(dims.size.x), float(dims.size.y)

    if params.dest_size is not None:
        w, h = params.dest_size.x, params.dest_size.y
    else:
        w, h = 1.0, 1.0

    if params.flip_x:
        w = -w
    if params.flip_y:
        h = -h

    pivot = params.pivot if params.pivot is not None else Vec2(x + w / 2.0, y + h / 2.0)
    shift = pivot - Vec2(w / 2.0, h / 2.0)

    c = math.cos(params.rotation)
    s = math.sin(params.rotation)

    corners = (
        Vec2(x, y) - pivot,
        Vec2(x + w, y) - pivot,
        Vec2(x + w, y + h) - pivot,
        Vec2(x, y + h) - pivot,
    )
    rotated = [Vec2(p.x * c - p.y * s, p.x * s + p.y * c) + shift for p in corners]

    u0, u1 = sx / tex_width, (sx + sw) / tex_width
    v0, v1 = sy / tex_height, (sy + sh) / tex_height
    tex_coords = (Vec2(u0, v0), Vec2(u1, v0), Vec2(u1, v1), Vec2(u0, v1))

    return [
        SpriteVertex(p.extend(position.z), uv + scroll_offset, color)
        for p, uv in zip(rotated, tex_coords)
    ]


def draw_rectangle_z_tex(
    position: Vec2,
    w: float,
    h: float,
    color: Color,
    z_index: int,
    texture: Optional[TextureHandle],
    blend_mode: BlendMode,
) -> None:
    """Filled rectangle of size ``w`` x ``h`` centred on ``position``."""
    x, y = position
    hw, hh = w / 2.0, h / 2.0
    z = z_index / Z_DIV

    vertices = [
        SpriteVertex(Vec3(x - hw, y - hh, z), Vec2(0.0, 0.0), color),
        SpriteVertex(Vec3(x + hw, y - hh, z), Vec2(1.0, 0.0), color),
        SpriteVertex(Vec3(x + hw, y + hh, z), Vec2(1.0, 1.0), color),
        SpriteVertex(Vec3(x - hw, y + hh, z), Vec2(0.0, 1.0), color),
    ]

    draw_mesh_ex(
        Mesh(
            origin=Vec3(x, y, float(z_index)),
            vertices=vertices,
            indices=[0, 1, 2, 0, 2, 3],
            z_index=z_index,
            texture=texture,
        ),
        blend_mode,
    )


def _strips_mesh(
    strips: Sequence[Sequence[Vec2]],
    thickness: float,
    center: Vec2,
    color: Color,
    z_index: int,
) -> Mesh:
    points: List[Vec2] = []
    indices: List[int] = []
    for strip in strips:
        strip_vertices, strip_indices = create_line_strip(strip, thickness)
        base = len(points)
        points.extend(strip_vertices)
        indices.extend(base + i for i in strip_indices)

    z = z_index / Z_DIV
    return Mesh(
        origin=center.extend(float(z_index)),
        vertices=[SpriteVertex(p.extend(z), Vec2(0.0, 0.0), color) for p in points],
        indices=indices,
        z_index=z_index,
        texture=None,
    )


def draw_rect_outline(
    center: Vec2, size: Vec2, thickness: float, color: Color, z_index: int
) -> None:
    """Outline of an axis-aligned rectangle."""
    w, h = size.x, size.y
    x = center.x - w / 2.0
    y = center.y - h / 2.0

    strip = [
        Vec2(x, y),
        Vec2(x, y + h),
        Vec2(x + w, y + h),
        Vec2(x + w, y),
        Vec2(x, y),
    ]
    draw_mesh(_strips_mesh([strip], thickness, center, color, z_index))


def draw_rect_corners(
    center: Vec2,
    size: Vec2,
    thickness: float,
    corner_size: float,
    color: Color,
    z_index: int,
) -> None:
    """Only the four corner brackets of a rectangle's outline."""
    w, h = size.x, size.y
    x = center.x - w / 2.0
    y = center.y - h / 2.0
    c = corner_size

    strips = [
        [Vec2(x, y + c), Vec2(x, y), Vec2(x + c, y)],
        [Vec2(x + w - c, y + h), Vec2(x + w, y + h), Vec2(x + w, y + h - c)],
        [Vec2(x + w - c, y), Vec2(x + w, y), Vec2(x + w, y + c)],
        [Vec2(x + c, y + h), Vec2(x, y + h), Vec2(x, y + h - c)],
    ]
    draw_mesh(_strips_mesh(strips, thickness, center, color, z_index))


def draw_rect_outline_rot(
    center: Vec2,
    size: Vec2,
    rotation: float,
    thickness: float,
    color: Color,
    z_index: int,
) -> None:
    """Outline of a rectangle rotated by ``rotation`` radians about its centre."""
    t = thickness / 2.0
    w, h = size.x, size.y
    x = center.x - w / 2.0
    y = center.y - h / 2.0
    pivot = Vec2(x + w / 2.0, y + h / 2.0)
    z = z_index / Z_DIV

    corners = [
        (Vec2(x, y), Vec2(0.0, 1.0)),
        (Vec2(x + w, y), Vec2(1.0, 0.0)),
        (Vec2(x + w, y + h), Vec2(1.0, 1.0)),
        (Vec2(x, y + h), Vec2(0.0, 0.0)),
        (Vec2(x + t, y + t), Vec2(0.0, 0.0)),
        (Vec2(x + w - t, y + t), Vec2(0.0, 0.0)),
        (Vec2(x + w - t, y + h - t), Vec2(0.0, 0.0)),
        (Vec2(x + t, y + h - t), Vec2(0.0, 0.0)),
    ]

    c = math.cos(rotation)
    s = math.sin(rotation)
    vertices = []
    for point, uv in corners:
        dx, dy = point.x - pivot.x, point.y - pivot.y
        rotated = Vec3(dx * c - dy * s + pivot.x, dx * s + dy * c + pivot.y, z)
        vertices.append(SpriteVertex(rotated, uv, color))

    draw_mesh(
        Mesh(
            origin=center.extend(float(z_index)),
            vertices=vertices,
            indices=list(_RECT_OUTLINE_ROT_INDICES),
            z_index=z_index,
            texture=None,
        )
    )