"""Shader registry, uniform definitions and the current render target."""

from __future__ import annotations

import enum
import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

__all__ = [
    "ShaderError",
    "ShaderId",
    "RenderTargetId",
    "UniformKind",
    "UniformDef",
    "Uniform",
    "Shader",
    "ShaderInstance",
    "ShaderMap",
    "ReloadableShaderSource",
    "gen_shader_id",
    "create_shader",
    "uniform_defs_to_bindings",
    "build_shader_source",
    "use_render_target",
    "use_default_render_target",
    "get_current_render_target",
]

_log = logging.getLogger(__name__)


class ShaderError(Exception):
    """Raised when a shader cannot be created or assembled."""


@dataclass(frozen=True, slots=True)
class ShaderId:
    """Opaque handle to a shader."""

    value: int

    def __str__(self) -> str:
        return f"ShaderId({self.value})"


@dataclass(frozen=True, order=True, slots=True)
class RenderTargetId:
    value: int = 0


class UniformKind(enum.Enum):
    F32 = "f32"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class UniformDef:
    """Declaration of a shader uniform and its optional default."""

    kind: UniformKind
    default: Optional[Union[float, bytes]] = None
    wgsl_decl: str = "f32"

    @classmethod
    def f32(cls, default: Optional[float] = None) -> UniformDef:
        return cls(UniformKind.F32, default, "f32")

    @classmethod
    def custom(cls, wgsl_decl: str, default_data: Optional[bytes] = None) -> UniformDef:
        return cls(UniformKind.CUSTOM, default_data, wgsl_decl)

    def to_wgsl(self) -> str:
        if self.kind is UniformKind.F32:
            return "f32"
        return self.wgsl_decl


@dataclass(frozen=True, slots=True)
class Uniform:
    """A uniform value: a float or raw bytes."""

    value: Union[float, bytes]

    @classmethod
    def f32(cls, value: float) -> Uniform:
        return cls(float(value))

    @classmethod
    def custom(cls, data: bytes) -> Uniform:
        return cls(bytes(data))


UniformDefs = Dict[str, UniformDef]


@dataclass
class Shader:
    id: ShaderId
    name: str
    source: str
    uniform_defs: UniformDefs
    bindings: Dict[str, int]


@dataclass
class ShaderInstance:
    """A shader together with the uniform values set for it."""

    id: ShaderId
    uniforms: Dict[str, Uniform] = field(default_factory=dict)


@dataclass
class ShaderMap:
    shaders: Dict[ShaderId, Shader] = field(default_factory=dict)
    watched_paths: Dict[str, ShaderId] = field(default_factory=dict)

    def get(self, shader_id: ShaderId) -> Optional[Shader]:
        return self.shaders.get(shader_id)

    def insert_shader(self, shader_id: ShaderId, shader: Shader) -> None:
        self.shaders[shader_id] = shader

    def exists(self, shader_id: ShaderId) -> bool:
        return shader_id in self.shaders


@dataclass(frozen=True, slots=True)
class ReloadableShaderSource:
    """Built-in shader source plus the file it is reloaded from in development."""

    static_source: str
    path: str


_shader_ids = itertools.count()
_shader_ids_lock = threading.Lock()


def gen_shader_id() -> ShaderId:
    """Allocate a fresh shader id."""
    with _shader_ids_lock:
        value = next(_shader_ids)
    _log.info("Generated ShaderId: %d", value)
    return ShaderId(value)


def uniform_defs_to_bindings(uniform_defs: Mapping[str, UniformDef]) -> Dict[str, int]:
    """Assign binding slots to uniforms in name order."""
    return {name: i for i, name in enumerate(sorted(uniform_defs))}


def build_shader_source(
    fragment_source: str,
    bindings: Mapping[str, int],
    uniform_defs: Mapping[str, UniformDef],
) -> str:
    """Prefix ``fragment_source`` with declarations for its uniforms."""
    parts = []
    for name, binding in sorted(bindings.items(), key=lambda item: item[1]):
        try:
            typ = uniform_defs[name]
        except KeyError:
            raise ShaderError(f"no uniform definition for binding '{name}'") from None
        parts.append(
            f"@group(2) @binding({binding})\n            var<uniform> {name}: {typ.to_wgsl()};"
        )
    return "".join(parts) + "\n" + fragment_source


def create_shader(
    shaders: ShaderMap,
    name: str,
    source: str,
    uniform_defs: UniformDefs,
) -> ShaderId:
    """Register a new shader built from ``source`` and return its id."""
    shader_id = gen_shader_id()

    if "@vertex" not in source:
        raise ShaderError(
            "Missing @vertex function in shader passed to `create_shader`. "
            "Did you forget to build it from a fragment first?"
        )

    if shaders.exists(shader_id):
        raise ShaderError(f"Shader with name '{name}' already exists")

    bindings = uniform_defs_to_bindings(uniform_defs)
    shaders.insert_shader(
        shader_id,
        Shader(
            id=shader_id,
            name=f"{name} Shader",
            source=build_shader_source(source, bindings, uniform_defs),
            uniform_defs=uniform_defs,
            bindings=bindings,
        ),
    )
    return shader_id


_render_target_lock = threading.Lock()
_current_render_target = RenderTargetId(0)


def use_render_target(target_id: RenderTargetId) -> None:
    global _current_render_target
    with _render_target_lock:
        _current_render_target = target_id


def use_default_render_target() -> None:
    use_render_target(RenderTargetId(0))


def get_current_render_target() -> RenderTargetId:
    with _render_target_lock:
        return _current_render_target