"""Seedable PCG pseudo-random generator and helpers built on it."""

from __future__ import annotations

import math
import struct
import threading
from typing import Iterator, MutableSequence, Optional, Sequence, TypeVar, Union

from .math2d import Vec2

__all__ = [
    "srand",
    "rand",
    "gen_range",
    "FisherYates",
    "shuffle",
    "choose",
    "choose_multiple",
    "random_i32",
    "random_usize",
    "flip_coin",
    "coin_toss",
    "toss_coin",
    "random_angle",
    "random_range",
    "random_dir",
    "random_vec",
    "random_offset",
    "random_circle",
    "random_box",
    "random_around",
    "random",
]

T = TypeVar("T")
Number = Union[int, float]

_DEFAULT_INC = 1442695040888963407
_MULTIPLIER = 6364136223846793005
_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_U32_MAX_F32 = 4294967296.0


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class _Pcg:
    __slots__ = ("state", "lock")

    def __init__(self) -> None:
        self.state = 0
        self.lock = threading.Lock()

    def next_u32(self) -> int:
        with self.lock:
            old = self.state
            self.state = (old * _MULTIPLIER + _DEFAULT_INC) & _MASK64
        xorshifted = (((old >> 18) ^ old) >> 27) & _MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32


_GENERATOR = _Pcg()


def srand(seed: int) -> None:
    """Seed the generator used by :func:`rand`."""
    if seed < 0:
        raise ValueError("seed must be non-negative")
    with _GENERATOR.lock:
        _GENERATOR.state = 0
    rand()
    with _GENERATOR.lock:
        _GENERATOR.state = (_GENERATOR.state + seed) & _MASK64
    rand()


def rand() -> int:
    """A pseudo-random integer between 0 and 2**32 - 1."""
    return _GENERATOR.next_u32()


def _unit() -> float:
    return _f32(_f32(float(rand())) / _U32_MAX_F32)


def gen_range(low: Number, high: Number) -> Number:
    """A value between ``low`` and ``high``.

    Integer bounds give an integer (computed in single precision, so ``high``
    itself can occasionally come out); any float bound gives a float.
    """
    r = _unit()
    if isinstance(low, int) and isinstance(high, int):
        lo = _f32(float(low))
        span = _f32(_f32(float(high)) - lo)
        return int(_f32(lo + _f32(span * r)))
    return low + (high - low) * r


class FisherYates:
    """In-place shuffler drawing random bytes from :func:`gen_range`."""

    __slots__ = ("_buffer",)

    def __init__(self) -> None:
        self._buffer = bytearray(8)

    def shuffle(self, data: MutableSequence[T]) -> None:
        for i in range(1, len(data)):
            j = self._below(i)
            data[i], data[j] = data[j], data[i]

    def _below(self, top: int) -> int:
        bit_width = top.bit_length()
        byte_count = (bit_width - 1) // 8 + 1
        mask = (1 << bit_width) - 1
        while True:
            for i in range(byte_count):
                self._buffer[i] = gen_range(0, 255)
            result = int.from_bytes(self._buffer, "little") & mask
            if result < top:
                return result


def shuffle(data: MutableSequence[T]) -> None:
    """Shuffle ``data`` in place."""
    FisherYates().shuffle(data)


def choose(items: Sequence[T]) -> Optional[T]:
    """A random element of ``items``, or None if none was picked."""
    ix = gen_range(0, len(items))
    return items[ix] if 0 <= ix < len(items) else None


def choose_multiple(items: Sequence[T], amount: int) -> Iterator[T]:
    """Yield ``amount`` elements picked at random without repetition.

    When ``amount`` exceeds the number of items the remainder repeats the
    first element.
    """
    indices = list(range(len(items)))
    shuffle(indices)
    indices = indices[:amount] + [0] * max(0, amount - len(indices))
    return (items[ix] for ix in indices)


def random_i32(min_value: int, max_value: int) -> int:
    return gen_range(int(min_value), int(max_value))


def random_usize(min_value: int, max_value: int) -> int:
    if min_value < 0 or max_value < 0:
        raise ValueError("bounds must be non-negative")
    return max(0, gen_range(int(min_value), int(max_value)))


def toss_coin(p: float) -> bool:
    """True with probability ``p``."""
    return gen_range(0.0, 1.0) < p


def flip_coin(p: float) -> bool:
    return toss_coin(p)


def coin_toss(p: float) -> bool:
    return toss_coin(p)


def random_angle() -> float:
    return gen_range(0.0, 2.0 * math.pi)


def random_range(min_value: float, max_value: float) -> float:
    return gen_range(float(min_value), float(max_value))


def random_dir() -> Vec2:
    """A random unit vector."""
    return Vec2.from_angle(gen_range(0.0, math.pi * 2.0))


def random_vec(min_value: float, max_value: float) -> Vec2:
    direction = random_dir()
    return direction * gen_range(float(min_value), float(max_value))


def random_offset(radius: float) -> Vec2:
    direction = random_dir()
    return direction * gen_range(0.0, float(radius))


def random_circle(radius: float) -> Vec2:
    return random_offset(radius)


def random_box(center: Vec2, size: Vec2) -> Vec2:
    """A random point in the box of ``size`` centred on ``center``."""
    dx = gen_range(-float(size.x), float(size.x)) / 2.0
    dy = gen_range(-float(size.y), float(size.y)) / 2.0
    return center + Vec2(dx, dy)


def random_around(position: Vec2, min_value: float, max_value: float) -> Vec2:
    return position + random_vec(min_value, max_value)


def random() -> float:
    """A random float between 0 and 1."""
    return gen_range(0.0, 1.0)