"""Structure candidacy per grid cell.

Chunk space is split into square grid cells of ``spacing`` chunks. Each
cell has at most one structure, at a candidate chunk chosen by the cell's
own random stream. Everything here is a pure function of the world seed
and the cell, so any chunk can work out which structures surround it
without depending on which chunks were generated before it.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..biome_types import StructureKind
from ..types import chebyshev_distance
from .config import StructureConfig
from .seeding import SeedPurpose, stream_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureRecord:
    """A structure placed with its origin in one chunk."""

    kind: StructureKind
    origin_cx: int
    origin_cy: int
    grid_x: int
    grid_y: int

    @property
    def origin(self) -> tuple[int, int]:
        return (self.origin_cx, self.origin_cy)

    def distance_to(self, cx: int, cy: int) -> int:
        """Chebyshev distance in chunks from the origin chunk."""
        return chebyshev_distance(self.origin_cx, self.origin_cy, cx, cy)


def grid_cell(cx: int, cy: int, spacing: int) -> tuple[int, int]:
    """Grid cell containing a chunk."""
    return (cx // spacing, cy // spacing)


def cells_around(cx: int, cy: int, radius: int, spacing: int) -> Iterator[tuple[int, int]]:
    """Grid cells overlapping the square of chunks within ``radius`` of (cx, cy).

    Yields cells in row-major order.
    """
    min_gx, min_gy = grid_cell(cx - radius, cy - radius, spacing)
    max_gx, max_gy = grid_cell(cx + radius, cy + radius, spacing)
    for gy in range(min_gy, max_gy + 1):
        for gx in range(min_gx, max_gx + 1):
            yield gx, gy


def roll_cell(
    world_seed: int, gx: int, gy: int, config: StructureConfig
) -> StructureRecord | None:
    """Roll the candidate chunk and structure kind of one grid cell.

    The cell stream draws the candidate x offset, then y offset, then the
    roll. The roll is compared against cumulative thresholds: below
    ``village_chance`` is a village, below ``dungeon_chance`` a dungeon.
    """
    spacing = config.spacing
    stream = stream_for(world_seed, SeedPurpose.GRID_CELL, gx, gy)
    offset_x = stream.next_int(0, spacing)
    offset_y = stream.next_int(0, spacing)
    roll = stream.next()

    if roll < config.village_chance:
        kind = StructureKind.VILLAGE
    elif roll < config.dungeon_chance:
        kind = StructureKind.DUNGEON
    else:
        return None

    return StructureRecord(
        kind=kind,
        origin_cx=gx * spacing + offset_x,
        origin_cy=gy * spacing + offset_y,
        grid_x=gx,
        grid_y=gy,
    )


def plan_cell(
    world_seed: int, gx: int, gy: int, config: StructureConfig
) -> StructureRecord | None:
    """Final structure of a grid cell after spacing is enforced.

    Candidates of neighboring cells can land closer than ``spacing - 1``
    chunks. When that happens the candidate of the cell with the larger
    (gy, gx) key is dropped, so surviving structures are always at least
    ``spacing - 1`` chunks apart.
    """
    record = roll_cell(world_seed, gx, gy, config)
    if record is None:
        return None

    min_distance = config.spacing - 1
    for dgy in (-1, 0, 1):
        for dgx in (-1, 0, 1):
            ngx, ngy = gx + dgx, gy + dgy
            if (ngy, ngx) >= (gy, gx):
                continue
            other = roll_cell(world_seed, ngx, ngy, config)
            if other is None:
                continue
            if other.distance_to(record.origin_cx, record.origin_cy) < min_distance:
                logger.debug(
                    f"Dropping {record.kind.value} at {record.origin}: "
                    f"too close to {other.kind.value} at {other.origin}"
                )
                return None
    return record


def nearest_record(
    records: Iterable[StructureRecord], cx: int, cy: int, radius: int = 1
) -> StructureRecord | None:
    """Closest record within ``radius`` chunks, ties broken by origin (y, x)."""
    candidates = [r for r in records if r.distance_to(cx, cy) <= radius]
    if not candidates:
        return None
    return min(
        candidates, key=lambda r: (r.distance_to(cx, cy), r.origin_cy, r.origin_cx)
    )
