"""Small 2D/3D vector, rectangle and colour types used by the drawing helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

__all__ = [
    "Vec2",
    "Vec3",
    "IRect",
    "Color",
    "WHITE",
    "BLACK",
    "RED",
    "PINK",
    "splat",
    "isplat",
    "usplat",
    "rotate_around_point",
]

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable two-component vector."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x / other, self.y / other)
        return NotImplemented

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> Vec2:
        """Unit vector in the same direction; NaN components for a zero vector."""
        length = self.length()
        if length == 0.0:
            return Vec2(math.nan, math.nan)
        return Vec2(self.x / length, self.y / length)

    def normalize_or_right(self) -> Vec2:
        """Unit vector, or ``(1, 0)`` when the vector cannot be normalized."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return Vec2(1.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def distance(self, other: Vec2) -> float:
        return (self - other).length()

    def distance_squared(self, other: Vec2) -> float:
        return (self - other).length_squared()

    def angle(self) -> float:
        """Angle of the vector from the positive x axis, in radians."""
        return math.atan2(self.y, self.x)

    @classmethod
    def from_angle(cls, angle: float) -> Vec2:
        return cls(math.cos(angle), math.sin(angle))

    def extend(self, z: float) -> Vec3:
        return Vec3(self.x, self.y, z)

    def floor(self) -> Vec2:
        return Vec2(float(math.floor(self.x)), float(math.floor(self.y)))

    def ceil(self) -> Vec2:
        return Vec2(float(math.ceil(self.x)), float(math.ceil(self.y)))

    def min(self, other: Vec2) -> Vec2:
        return Vec2(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Vec2) -> Vec2:
        return Vec2(max(self.x, other.x), max(self.y, other.y))


Vec2.ZERO = Vec2(0.0, 0.0)  # type: ignore[attr-defined]
Vec2.ONE = Vec2(1.0, 1.0)  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True)
class Vec3:
    """Immutable three-component vector."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: object) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: object) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def truncate(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True, slots=True)
class IRect:
    """Integer rectangle given by its offset and size."""

    offset: Vec2
    size: Vec2


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA colour with float components."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a

    def lerp(self, other: Color, t: float) -> Color:
        """Linear interpolation towards ``other`` by ``t``."""
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
            self.a + (other.a - self.a) * t,
        )

    def boost(self, amount: float) -> Color:
        """Scale the colour channels, keeping alpha."""
        return Color(self.r * amount, self.g * amount, self.b * amount, self.a)


WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
RED = Color(1.0, 0.0, 0.0, 1.0)
PINK = Color(1.0, 0.412, 0.706, 1.0)


def splat(v: float) -> Vec2:
    """Vector with both components set to ``v``."""
    return Vec2(float(v), float(v))


def isplat(v: int) -> Vec2:
    """Integer vector with both components set to ``v``."""
    return Vec2(int(v), int(v))


def usplat(v: int) -> Vec2:
    """Unsigned integer vector with both components set to ``v``."""
    value = int(v)
    if value < 0:
        raise ValueError(f"unsigned value expected, got {v}")
    return Vec2(value, value)


def rotate_around_point(point: Vec3, pivot: Vec3, angle_rad: float) -> Vec3:
    """Rotate ``point`` around the x axis passing through ``pivot``."""
    dy = point.y - pivot.y
    dz = point.z - pivot.z
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    return Vec3(point.x, pivot.y + dy * c - dz * s, pivot.z + dy * s + dz * c)