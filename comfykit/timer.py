"""Stopwatch and countdown timer driven by explicit ticks."""

from __future__ import annotations

from datetime import timedelta

__all__ = ["Stopwatch", "Timer"]

_NANOS_PER_SECOND = 1_000_000_000


def _to_nanos(value: timedelta) -> int:
    if not isinstance(value, timedelta):
        raise TypeError(f"expected a timedelta, got {type(value).__name__}")
    if value < timedelta(0):
        raise ValueError("durations cannot be negative")
    whole_seconds = value.days * 86_400 + value.seconds
    return whole_seconds * _NANOS_PER_SECOND + value.microseconds * 1_000


def _secs_to_nanos(seconds: float) -> int:
    if seconds < 0:
        raise ValueError("durations cannot be negative")
    return round(seconds * _NANOS_PER_SECOND)


def _from_nanos(nanos: int) -> timedelta:
    return timedelta(microseconds=nanos / 1_000)


class Stopwatch:
    """Tracks elapsed time while unpaused."""

    __slots__ = ("_elapsed_ns", "_paused")

    def __init__(self) -> None:
        self._elapsed_ns = 0
        self._paused = False

    def __repr__(self) -> str:
        return f"Stopwatch(elapsed={self.elapsed!r}, paused={self._paused})"

    @property
    def elapsed(self) -> timedelta:
        """Time elapsed since the last reset."""
        return _from_nanos(self._elapsed_ns)

    @elapsed.setter
    def elapsed(self, value: timedelta) -> None:
        self._elapsed_ns = _to_nanos(value)

    @property
    def paused(self) -> bool:
        return self._paused

    def elapsed_secs(self) -> float:
        """Time elapsed since the last reset, in seconds."""
        return self._elapsed_ns / _NANOS_PER_SECOND

    def tick(self, delta: timedelta) -> Stopwatch:
        """Advance by ``delta`` unless paused."""
        self._advance(_to_nanos(delta))
        return self

    def _advance(self, nanos: int) -> None:
        if not self._paused:
            self._elapsed_ns += nanos

    def pause(self) -> None:
        self._paused = True

    def unpause(self) -> None:
        self._paused = False

    def reset(self) -> None:
        """Zero the elapsed time; the paused state is kept."""
        self._elapsed_ns = 0


class Timer:
    """Counts up to a duration and reports when it has been reached.

    A non-repeating timer clamps at its duration and stays finished until
    reset. A repeating timer wraps around and is finished only on the ticks
    that reach or pass the duration.
    """

    __slots__ = ("_stopwatch", "_duration_ns", "_repeating", "_finished", "_times_finished")

    def __init__(self, duration: timedelta = timedelta(0), repeating: bool = False) -> None:
        self._stopwatch = Stopwatch()
        self._duration_ns = _to_nanos(duration)
        self._repeating = repeating
        self._finished = False
        self._times_finished = 0

    @classmethod
    def from_seconds(cls, duration: float, repeating: bool) -> Timer:
        """Create a timer whose duration is given in seconds."""
        timer = cls(timedelta(0), repeating)
        timer._duration_ns = _secs_to_nanos(duration)
        return timer

    def __repr__(self) -> str:
        return (
            f"Timer(duration={self.duration!r}, repeating={self._repeating}, "
            f"elapsed={self.elapsed!r}, finished={self._finished})"
        )

    @property
    def finished(self) -> bool:
        """True once the duration has been reached."""
        return self._finished

    @property
    def just_finished(self) -> bool:
        """True only on the tick that reached the duration."""
        return self._times_finished > 0

    @property
    def times_finished(self) -> int:
        """How many times the timer finished during the last tick."""
        return self._times_finished

    @property
    def elapsed(self) -> timedelta:
        return self._stopwatch.elapsed

    @elapsed.setter
    def elapsed(self, value: timedelta) -> None:
        """Set elapsed time without touching the finished state."""
        self._stopwatch.elapsed = value

    @property
    def duration(self) -> timedelta:
        return _from_nanos(self._duration_ns)

    @duration.setter
    def duration(self, value: timedelta) -> None:
        self._duration_ns = _to_nanos(value)

    @property
    def repeating(self) -> bool:
        return self._repeating

    @repeating.setter
    def repeating(self, value: bool) -> None:
        self.set_repeating(value)

    @property
    def paused(self) -> bool:
        return self._stopwatch.paused

    def elapsed_secs(self) -> float:
        return self._stopwatch.elapsed_secs()

    def set_repeating(self, repeating: bool) -> None:
        """Switch repeating mode; a finished one-shot timer restarts."""
        if not self._repeating and repeating and self._finished:
            self._stopwatch.reset()
            self._finished = self.just_finished
        self._repeating = repeating

    def tick(self, delta: timedelta) -> Timer:
        """Advance the timer by ``delta``."""
        return self._tick_nanos(_to_nanos(delta))

    def tick_secs(self, delta: float) -> Timer:
        """Advance the timer by ``delta`` seconds."""
        return self._tick_nanos(_secs_to_nanos(delta))

    def _tick_nanos(self, nanos: int) -> Timer:
        if self.paused:
            return self

        if not self._repeating and self._finished:
            self._times_finished = 0
            return self

        self._stopwatch._advance(nanos)
        elapsed = self._stopwatch._elapsed_ns
        self._finished = elapsed >= self._duration_ns

        if self._finished:
            if self._repeating:
                self._times_finished = elapsed // self._duration_ns
                self._stopwatch._elapsed_ns = elapsed - self._duration_ns * self._times_finished
            else:
                self._times_finished = 1
                self._stopwatch._elapsed_ns = self._duration_ns
        else:
            self._times_finished = 0

        return self

    def pause(self) -> None:
        self._stopwatch.pause()

    def unpause(self) -> None:
        self._stopwatch.unpause()

    def reset(self) -> None:
        """Reset elapsed time and finished state; paused state is kept."""
        self._stopwatch.reset()
        self._finished = False
        self._times_finished = 0

    def percent(self) -> float:
        """Fraction of the duration that has elapsed."""
        return self._stopwatch._elapsed_ns / self._duration_ns

    def percent_left(self) -> float:
        """Fraction of the duration that remains."""
        return 1.0 - self.percent()