"""Timers, tweens, seeded randomness, spatial hashing, shaders and queued mesh/text draw calls for 2D games."""

__version__ = "0.1.0"