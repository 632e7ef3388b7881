"""Shared registry of placed structures.

One registry is shared by every chunk generated through the same cache.
Chunks plan the grid cells around them into the registry and read it back
to find structures whose footprint reaches into them.
"""

import threading

import structlog

from ..types import chunk_key
from .config import StructureConfig
from .placement import StructureRecord, cells_around, nearest_record, plan_cell

logger = structlog.get_logger()


class StructureRegistry:
    """Map from origin chunk to placed structure.

    Thread-safe: all reads and writes hold one lock. Planning is memoized
    per grid cell, and because candidacy is a pure function of the seed
    and cell, planning the same cell twice always yields the same record.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: dict[int, StructureRecord] = {}
        self._planned: set[tuple[int, int]] = set()
        self._world_seed: int | None = None
        self._spacing: int | None = None

    def ensure_planned(
        self,
        world_seed: int,
        cx: int,
        cy: int,
        radius: int,
        config: StructureConfig,
    ) -> None:
        """Plan every grid cell overlapping the chunks within ``radius`` of (cx, cy)."""
        with self._lock:
            if self._world_seed != world_seed:
                if self._world_seed is not None:
                    logger.warning(
                        "structure_registry_reseeded",
                        old_seed=self._world_seed,
                        new_seed=world_seed,
                        dropped=len(self._records),
                    )
                    self._records.clear()
                    self._planned.clear()
                self._world_seed = world_seed
            if self._spacing != config.spacing:
                if self._spacing is not None:
                    # Cell coordinates change meaning with the spacing
                    self._planned.clear()
                self._spacing = config.spacing

            for gx, gy in cells_around(cx, cy, radius, config.spacing):
                if (gx, gy) in self._planned:
                    continue
                self._planned.add((gx, gy))
                record = plan_cell(world_seed, gx, gy, config)
                if record is not None:
                    self._records[chunk_key(record.origin_cx, record.origin_cy)] = record
                    logger.debug(
                        "structure_planned",
                        kind=record.kind.value,
                        origin_cx=record.origin_cx,
                        origin_cy=record.origin_cy,
                    )

    def insert(self, record: StructureRecord) -> None:
        """Register a record directly, marking its grid cell as planned."""
        with self._lock:
            self._records[chunk_key(record.origin_cx, record.origin_cy)] = record
            self._planned.add((record.grid_x, record.grid_y))

    def get(self, cx: int, cy: int) -> StructureRecord | None:
        """Record whose origin is chunk (cx, cy), if any."""
        with self._lock:
            return self._records.get(chunk_key(cx, cy))

    def nearby(self, cx: int, cy: int, radius: int = 1) -> list[StructureRecord]:
        """Records whose origin lies within ``radius`` chunks (Chebyshev)."""
        with self._lock:
            return [r for r in self._records.values() if r.distance_to(cx, cy) <= radius]

    def resolve(self, cx: int, cy: int) -> StructureRecord | None:
        """Structure covering chunk (cx, cy): its own, else the nearest adjacent one."""
        own = self.get(cx, cy)
        if own is not None:
            return own
        return nearest_record(self.nearby(cx, cy, radius=1), cx, cy, radius=1)

    def remove_origin(self, cx: int, cy: int) -> StructureRecord | None:
        """Remove the record originating at (cx, cy).

        Its grid cell is forgotten too, so the structure is planned again
        if a chunk near it is regenerated.
        """
        with self._lock:
            record = self._records.pop(chunk_key(cx, cy), None)
            if record is not None:
                self._planned.discard((record.grid_x, record.grid_y))
            return record

    def prune(self, center_cx: int, center_cy: int, keep_distance: int) -> int:
        """Forget planning state far from a center chunk.

        Drops every planned grid cell lying entirely beyond
        ``keep_distance + 1`` chunks (Chebyshev) of the center, together with
        the records of those cells. The margin of one chunk covers the 3x3
        neighborhoods of chunks still loaded. Pruned cells are planned again,
        with identical results, if the area is revisited.

        Returns:
            Number of grid cells dropped.
        """
        limit = keep_distance + 1
        with self._lock:
            if self._spacing is None:
                # Only inserted records so far, each the sole one in its cell
                dropped_cells = {
                    (record.grid_x, record.grid_y)
                    for record in self._records.values()
                    if record.distance_to(center_cx, center_cy) > limit
                }
            else:
                spacing = self._spacing
                dropped_cells = {
                    (gx, gy)
                    for gx, gy in self._planned
                    if _cell_distance(gx, gy, spacing, center_cx, center_cy) > limit
                }
            self._planned -= dropped_cells

            stale = [
                key
                for key, record in self._records.items()
                if (record.grid_x, record.grid_y) in dropped_cells
                or (
                    (record.grid_x, record.grid_y) not in self._planned
                    and record.distance_to(center_cx, center_cy) > limit
                )
            ]
            for key in stale:
                del self._records[key]

            if dropped_cells or stale:
                logger.debug(
                    "structure_registry_pruned",
                    cells=len(dropped_cells),
                    records=len(stale),
                    center_cx=center_cx,
                    center_cy=center_cy,
                )
            return len(dropped_cells)

    @property
    def planned_cell_count(self) -> int:
        """Number of grid cells currently marked as planned."""
        with self._lock:
            return len(self._planned)

    def records(self) -> list[StructureRecord]:
        """Snapshot of all records."""
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        """Drop all records and planning state."""
        with self._lock:
            self._records.clear()
            self._planned.clear()
            self._world_seed = None
            self._spacing = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, coords: object) -> bool:
        if not isinstance(coords, tuple) or len(coords) != 2:
            return False
        cx, cy = coords
        return self.get(cx, cy) is not None


def _cell_distance(gx: int, gy: int, spacing: int, cx: int, cy: int) -> int:
    """Chebyshev distance from chunk (cx, cy) to the nearest chunk of a grid cell."""
    min_x, min_y = gx * spacing, gy * spacing
    max_x, max_y = min_x + spacing - 1, min_y + spacing - 1
    dx = max(min_x - cx, 0, cx - max_x)
    dy = max(min_y - cy, 0, cy - max_y)
    return max(dx, dy)
