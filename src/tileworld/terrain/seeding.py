"""Deterministic random streams and per-purpose seed derivation.

Every random decision in world generation draws from a RandomStream whose
seed is derived from the world seed and the coordinates it applies to.
Each purpose uses its own affine transform so streams for different
purposes at the same coordinate do not correlate.
"""

import math
from enum import Enum

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK32


class RandomStream:
    """Mulberry32 pseudo-random generator.

    Two streams built from the same seed produce the same infinite
    sequence. A stream cannot be rewound; build a new one to restart.
    """

    def __init__(self, seed: int):
        self.seed = seed & _MASK32
        self._state = self.seed

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def next_int(self, minimum: int, maximum: int) -> int:
        """Return an integer in [minimum, maximum)."""
        return math.floor(self.next() * (maximum - minimum)) + minimum

    def next_angle(self) -> float:
        """Return an angle in radians in [0, 2*pi)."""
        return self.next() * math.pi * 2


class SeedPurpose(Enum):
    """What a derived seed is used for, with its (x, y) multipliers."""

    GRID_CELL = (918273, 192837)
    TEMPLATE = (123456, 789012)
    TILE_VARIATION = (374829, 928374)


def derive_seed(world_seed: int, purpose: SeedPurpose, x: int, y: int) -> int:
    """Combine the world seed with coordinates for one purpose."""
    mul_x, mul_y = purpose.value
    return world_seed + x * mul_x + y * mul_y


def stream_for(world_seed: int, purpose: SeedPurpose, x: int, y: int) -> RandomStream:
    """Build the random stream for a purpose at given coordinates."""
    return RandomStream(derive_seed(world_seed, purpose, x, y))
