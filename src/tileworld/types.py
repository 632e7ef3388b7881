"""Core coordinate types shared by the generator and the chunk cache."""

from enum import IntEnum

_MASK32 = 0xFFFFFFFF


class Direction(IntEnum):
    """8 neighbor directions. The value is the bit index in an autotile mask."""

    NORTH = 0
    NORTHEAST = 1
    EAST = 2
    SOUTHEAST = 3
    SOUTH = 4
    SOUTHWEST = 5
    WEST = 6
    NORTHWEST = 7

    @property
    def bit(self) -> int:
        """Mask bit for this direction."""
        return 1 << self.value

    @property
    def short_name(self) -> str:
        """Compass abbreviation, e.g. ``"NE"``."""
        return _SHORT_NAMES[self]


# Coordinate system: +X is East, +Y is South
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.NORTHEAST: (1, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTHEAST: (1, 1),
    Direction.SOUTH: (0, 1),
    Direction.SOUTHWEST: (-1, 1),
    Direction.WEST: (-1, 0),
    Direction.NORTHWEST: (-1, -1),
}

_SHORT_NAMES: dict[Direction, str] = {
    Direction.NORTH: "N",
    Direction.NORTHEAST: "NE",
    Direction.EAST: "E",
    Direction.SOUTHEAST: "SE",
    Direction.SOUTH: "S",
    Direction.SOUTHWEST: "SW",
    Direction.WEST: "W",
    Direction.NORTHWEST: "NW",
}


def chunk_key(cx: int, cy: int) -> int:
    """Pack two signed 32-bit chunk coordinates into one 64-bit integer key."""
    return ((cx & _MASK32) << 32) | (cy & _MASK32)


def split_chunk_key(key: int) -> tuple[int, int]:
    """Inverse of chunk_key."""
    return (_to_signed32(key >> 32), _to_signed32(key))


def chebyshev_distance(ax: int, ay: int, bx: int, by: int) -> int:
    """Chessboard distance between two integer points."""
    return max(abs(ax - bx), abs(ay - by))


def _to_signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value
