"""Experimental spatial hash over circles and axis-aligned boxes."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .math2d import Vec2

__all__ = [
    "Intersection",
    "AabbShape",
    "CircleShape",
    "Shape",
    "UserData",
    "SpatialHash",
]

_TOLERANCE = 1e-5
_DEFAULT_GRID_SIZE = 100.0


def _div(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _in_unit(t: float) -> bool:
    return 0.0 <= t <= 1.0


@dataclass(frozen=True, slots=True)
class Intersection:
    """A hit point and the surface normal there."""

    point: Vec2
    normal: Vec2


@dataclass(frozen=True, slots=True)
class AabbShape:
    """Axis-aligned box given by its corners."""

    min: Vec2
    max: Vec2

    @classmethod
    def from_center(cls, center: Vec2, size: Vec2) -> AabbShape:
        return cls(center - size / 2.0, center + size / 2.0)

    def bounding_rect(self) -> AabbShape:
        return self

    def intersects_circle(self, circle: CircleShape) -> bool:
        closest = self.min.max(self.max.min(circle.center))
        return circle.center.distance(closest) <= circle.radius

    def intersects_aabb(self, aabb: AabbShape) -> bool:
        return (
            self.min.x <= aabb.max.x
            and self.max.x >= aabb.min.x
            and self.min.y <= aabb.max.y
            and self.max.y >= aabb.min.y
        )

    def intersects_shape(self, shape: Shape) -> bool:
        if isinstance(shape, CircleShape):
            return self.intersects_circle(shape)
        return self.intersects_aabb(shape)

    def intersects_line(self, start: Vec2, end: Vec2) -> Optional[Intersection]:
        return self.line_intersection(start, end)

    def center(self) -> Vec2:
        return (self.min + self.max) / 2.0

    def size(self) -> Vec2:
        return self.max - self.min

    def line_intersection(self, start: Vec2, end: Vec2) -> Optional[Intersection]:
        """First point where the segment from ``start`` to ``end`` meets the box."""
        direction = end - start

        tmin = _div(self.min.x - start.x, direction.x)
        tmax = _div(self.max.x - start.x, direction.x)
        if tmin > tmax:
            tmin, tmax = tmax, tmin

        tymin = _div(self.min.y - start.y, direction.y)
        tymax = _div(self.max.y - start.y, direction.y)
        if tymin > tymax:
            tymin, tymax = tymax, tymin

        tmin = _fmax(tmin, tymin)
        tmax = _fmin(tmax, tymax)

        if tmin > tmax:
            return None

        if _in_unit(tmin):
            t = tmin
        elif _in_unit(tmax):
            t = tmax
        else:
            return None

        point = start + direction * t

        if abs(point.x - self.min.x) < _TOLERANCE:
            normal = Vec2(-1.0, 0.0)
        elif abs(point.x - self.max.x) < _TOLERANCE:
            normal = Vec2(1.0, 0.0)
        elif abs(point.y - self.min.y) < _TOLERANCE:
            normal = Vec2(0.0, -1.0)
        elif abs(point.y - self.max.y) < _TOLERANCE:
            normal = Vec2(0.0, 1.0)
        else:
            normal = Vec2(0.0, 0.0)

        return Intersection(point, normal)


@dataclass(frozen=True, slots=True)
class CircleShape:
    center: Vec2
    radius: float

    def bounding_rect(self) -> AabbShape:
        r = Vec2(self.radius, self.radius)
        return AabbShape(self.center - r, self.center + r)

    def intersects_circle(self, circle: CircleShape) -> bool:
        return self.center.distance(circle.center) <= self.radius + circle.radius

    def intersects_aabb(self, aabb: AabbShape) -> bool:
        return aabb.intersects_circle(self)

    def intersects_shape(self, shape: Shape) -> bool:
        if isinstance(shape, CircleShape):
            return self.intersects_circle(shape)
        return self.intersects_aabb(shape)

    def intersects_line(self, start: Vec2, end: Vec2) -> Optional[Intersection]:
        """Nearest point where the segment meets the circle's edge."""
        to_target = self.center - start
        line_vec = end - start
        ray_len = line_vec.length()
        ray_dir = line_vec.normalize()

        dot = to_target.dot(ray_dir)
        if dot < 0.0 or dot > ray_len:
            return None

        closest = start + ray_dir * dot
        dist_squared = (self.center - closest).length_squared()
        radius_squared = self.radius**2
        if dist_squared > radius_squared:
            return None

        diff = radius_squared - dist_squared
        t = math.sqrt(diff) if diff >= 0.0 else math.nan

        first = closest + ray_dir * (0.0 - t)
        second = closest + ray_dir * t
        point = first if (first - start).length() < (second - start).length() else second

        normal = (point - self.center).normalize()
        return Intersection(point, normal)


Shape = Union[AabbShape, CircleShape]


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class UserData:
    """Caller data attached to a shape stored in the hash."""

    entity_type: int = 0
    entity: Optional[int] = None

    def _key(self) -> Tuple[int, bool, int]:
        return (self.entity_type, self.entity is not None, self.entity or 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UserData):
            return NotImplemented
        return self._key() < other._key()


@dataclass(frozen=True, slots=True)
class _Entry:
    shape: Shape
    userdata: UserData


@dataclass
class SpatialHash:
    """Buckets shapes into square grid cells for fast overlap queries."""

    grid_size: float = _DEFAULT_GRID_SIZE
    inner: Dict[Tuple[int, int], List[_Entry]] = field(default_factory=dict)

    def clear(self) -> None:
        self.inner.clear()

    def _cells(self, rect: AabbShape) -> Iterator[Tuple[int, int]]:
        low = (rect.min / self.grid_size).floor()
        high = (rect.max / self.grid_size).ceil()
        for x in range(int(low.x), int(high.x)):
            for y in range(int(low.y), int(high.y)):
                yield (x, y)

    def add_shape(self, shape: Shape, data: UserData) -> None:
        """Store ``shape``; circles are stored as their bounding boxes."""
        rect = shape.bounding_rect()
        entry = _Entry(rect, data)
        for key in self._cells(rect):
            self.inner.setdefault(key, []).append(entry)

    def query(self, shape: Shape) -> Iterator[UserData]:
        """Yield the data of stored shapes that overlap ``shape``.

        A stored shape spanning several cells may be yielded more than once.
        """
        for key in self._cells(shape.bounding_rect()):
            for entry in self.inner.get(key, ()):
                if entry.shape.intersects_shape(shape):
                    yield entry.userdata

    def raycast(self, start: Vec2, end: Vec2) -> Optional[Tuple[Intersection, UserData]]:
        """Closest hit along the segment from ``start`` to ``end``, if any."""
        delta = end - start
        length = delta.length()
        step = self.grid_size / length if length != 0.0 else math.inf

        closest: Optional[Tuple[Intersection, UserData]] = None
        t = 0.0
        while t <= 1.0:
            current = start + delta * t
            key = (
                math.floor(current.x / self.grid_size),
                math.floor(current.y / self.grid_size),
            )
            for entry in self.inner.get(key, ()):
                hit = entry.shape.intersects_line(start, end)
                if hit is None:
                    continue
                if closest is None or hit.point.distance_squared(start) < closest[
                    0
                ].point.distance_squared(start):
                    closest = (hit, entry.userdata)
            t += step

        return closest