"""Per-frame mesh draw queues and the active shader-instance state."""

from __future__ import annotations

import enum
import hashlib
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .math2d import Color, Vec2, Vec3
from .shaders import (
    RenderTargetId,
    ShaderError,
    ShaderId,
    ShaderInstance,
    Uniform,
    get_current_render_target,
)

__all__ = [
    "BlendMode",
    "DEFAULT_BLEND_MODE",
    "TextureHandle",
    "SpriteVertex",
    "Mesh",
    "MeshGroupKey",
    "ShaderInstanceId",
    "clear_shader_uniform_table",
    "get_shader_instance",
    "set_uniform",
    "set_uniform_f32",
    "use_shader",
    "use_default_shader",
    "get_current_shader",
    "consume_render_queues",
    "queue_mesh_draw",
    "draw_mesh",
    "draw_mesh_ex",
]


class BlendMode(enum.IntEnum):
    """How a mesh is blended with what is already drawn."""

    NONE = 0
    ADDITIVE = 1
    ALPHA = 2


DEFAULT_BLEND_MODE = BlendMode.NONE


@dataclass(frozen=True, order=True, slots=True)
class TextureHandle:
    """Opaque handle to a texture, derived from its path."""

    key: int

    @classmethod
    def from_path(cls, path: str) -> TextureHandle:
        digest = hashlib.blake2b(path.encode("utf-8"), digest_size=8).digest()
        return cls(int.from_bytes(digest, "little"))


@dataclass(frozen=True, slots=True)
class SpriteVertex:
    position: Vec3
    tex_coords: Vec2
    color: Color


@dataclass
class Mesh:
    """Triangles to draw, with the z-index and texture they are drawn with."""

    origin: Vec3 = Vec3(0.0, 0.0, 0.0)
    vertices: List[SpriteVertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    z_index: int = 0
    texture: Optional[TextureHandle] = None
    y_sort_offset: float = 0.0


@dataclass(frozen=True, order=True, slots=True)
class ShaderInstanceId:
    """Index of a set of shader uniform values; 0 is the default shader."""

    value: int = 0


@dataclass(frozen=True, order=True, slots=True)
class MeshGroupKey:
    """Meshes sharing a key are drawn together; keys sort in draw order."""

    z_index: int
    blend_mode: BlendMode
    texture_id: TextureHandle
    shader: ShaderInstanceId
    render_target: RenderTargetId


class _RenderState:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.instances: List[ShaderInstance] = []
        self.current_instance = 0
        self.queues: Dict[MeshGroupKey, List[Mesh]] = {}


_state = _RenderState()


def clear_shader_uniform_table() -> None:
    with _state.lock:
        _state.instances.clear()


def get_shader_instance(instance_id: ShaderInstanceId) -> ShaderInstance:
    """The shader instance stored under ``instance_id``; IndexError if absent."""
    with _state.lock:
        return _state.instances[instance_id.value]


def set_uniform(name: str, value: Uniform) -> None:
    """Set a uniform on a new copy of the current shader instance."""
    with _state.lock:
        current = _state.current_instance
        if current <= 0:
            raise ShaderError("Trying to set a uniform with no shader active")
        if current >= len(_state.instances):
            raise ShaderError("Current shader instance id is invalid.")
        instance = _state.instances[current]
        uniforms = dict(instance.uniforms)
        uniforms[str(name)] = value
        _state.instances.append(ShaderInstance(instance.id, uniforms))
        _state.current_instance = len(_state.instances) - 1


def set_uniform_f32(name: str, value: float) -> None:
    """Set a float uniform by name."""
    set_uniform(name, Uniform.f32(value))


def use_shader(shader_id: ShaderId) -> None:
    """Switch to the shader ``shader_id`` with no uniforms set."""
    with _state.lock:
        _state.instances.append(ShaderInstance(shader_id, {}))
        _state.current_instance = len(_state.instances) - 1


def use_default_shader() -> None:
    with _state.lock:
        _state.current_instance = 0


def get_current_shader() -> ShaderInstanceId:
    with _state.lock:
        return ShaderInstanceId(_state.current_instance)


def consume_render_queues() -> Dict[MeshGroupKey, List[Mesh]]:
    """Take all queued meshes, grouped and ordered by key, leaving the queues empty."""
    with _state.lock:
        data = _state.queues
        _state.queues = {}
    return dict(sorted(data.items()))


def queue_mesh_draw(mesh: Mesh, blend_mode: BlendMode) -> None:
    shader = get_current_shader()
    render_target = get_current_render_target()
    texture = mesh.texture if mesh.texture is not None else TextureHandle.from_path("1px")
    key = MeshGroupKey(mesh.z_index, BlendMode(blend_mode), texture, shader, render_target)
    with _state.lock:
        _state.queues.setdefault(key, []).append(mesh)


def draw_mesh(mesh: Mesh) -> None:
    draw_mesh_ex(mesh, DEFAULT_BLEND_MODE)


def draw_mesh_ex(mesh: Mesh, blend_mode: BlendMode) -> None:
    queue_mesh_draw(mesh, blend_mode)