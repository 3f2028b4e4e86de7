"""Value tweening and flashing colours driven by explicit time steps."""

from __future__ import annotations

from typing import Callable

from .math2d import Color

__all__ = ["linear", "Tween", "FlashingColor"]

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    """Identity easing function."""
    return t


def _progress(part: float, whole: float) -> float:
    """``min(part / whole, 1.0)``, where a zero ``whole`` counts as done."""
    if whole == 0.0:
        return 1.0 if part >= 0.0 else float("-inf")
    return min(part / whole, 1.0)


class Tween:
    """Moves a value from ``initial_val`` to ``final_val`` over ``duration``.

    Time is consumed by ``delay`` first; while any delay is left an update
    only shortens the delay.
    """

    __slots__ = ("_initial", "_final", "_duration", "_elapsed", "_delay", "_easing", "_value")

    def __init__(
        self,
        initial_val: float = 0.0,
        final_val: float = 0.0,
        duration: float = 0.0,
        delay: float = 0.0,
        easing_fn: EasingFn = linear,
    ) -> None:
        self._initial = initial_val
        self._final = final_val
        self._duration = duration
        self._elapsed = 0.0
        self._delay = delay
        self._easing = easing_fn
        self._value = initial_val

    def __repr__(self) -> str:
        return (
            f"Tween(value={self._value!r}, initial={self._initial!r}, "
            f"final={self._final!r}, elapsed={self._elapsed!r})"
        )

    @property
    def value(self) -> float:
        """The current tweened value."""
        return self._value

    def is_finished(self) -> bool:
        return self._elapsed >= self._duration + self._delay

    def update(self, delta_time: float) -> None:
        """Advance the tween by ``delta_time``."""
        if self._delay > 0.0:
            self._delay -= delta_time
            return

        self._elapsed += delta_time
        t = self._easing(_progress(self._elapsed, self._duration))
        self._value = self._initial + t * (self._final - self._initial)


class FlashingColor:
    """A colour that flashes towards another colour for a while once triggered."""

    __slots__ = (
        "_color",
        "_flash_color",
        "_duration",
        "_total_remaining",
        "_interval",
        "_interval_remaining",
        "_easing",
    )

    def __init__(
        self,
        color: Color,
        flash_color: Color,
        duration: float,
        interval: float,
        easing_fn: EasingFn = linear,
    ) -> None:
        self._color = color
        self._flash_color = flash_color
        self._duration = duration
        self._total_remaining = 0.0
        self._interval = interval
        self._interval_remaining = 0.0
        self._easing = easing_fn

    def trigger(self) -> None:
        """Start flashing for the configured duration."""
        self._total_remaining = self._duration

    def update(self, delta: float) -> None:
        if self._total_remaining > 0.0:
            self._total_remaining -= delta
            self._interval_remaining -= delta

            if self._interval_remaining <= 0.0:
                self._interval_remaining = self._interval

    def current_color(self) -> Color:
        if self._total_remaining <= 0.0:
            return self._color
        t = self._easing(_progress(self._interval_remaining, self._interval))
        return self._color.lerp(self._flash_color, t)