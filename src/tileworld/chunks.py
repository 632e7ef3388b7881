"""Chunk cache: lazy generation, memoization and distance-based eviction."""

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

import structlog

from .terrain.config import WorldGenConfig
from .terrain.generator import ChunkGenerator
from .terrain.noise import NoiseField
from .terrain.registry import StructureRegistry
from .tile import Chunk
from .types import chebyshev_distance, chunk_key, split_chunk_key

logger = structlog.get_logger()

CHUNK_SIZE = 32


def chunk_coords(x: int, y: int, chunk_size: int = CHUNK_SIZE) -> tuple[int, int]:
    """Convert world tile coordinates to chunk coordinates."""
    return (x // chunk_size, y // chunk_size)


def world_coords(
    chunk_x: int, chunk_y: int, local_x: int, local_y: int, chunk_size: int = CHUNK_SIZE
) -> tuple[int, int]:
    """Convert chunk + local offset to world tile coordinates."""
    return (chunk_x * chunk_size + local_x, chunk_y * chunk_size + local_y)


def local_coords(x: int, y: int, chunk_size: int = CHUNK_SIZE) -> tuple[int, int]:
    """Convert world tile coordinates to coordinates within their chunk."""
    return (x % chunk_size, y % chunk_size)


@dataclass(frozen=True)
class ChunkRange:
    """Inclusive rectangle of chunk coordinates."""

    min_cx: int
    min_cy: int
    max_cx: int
    max_cy: int

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Chunk coordinates in row-major order."""
        for cy in range(self.min_cy, self.max_cy + 1):
            for cx in range(self.min_cx, self.max_cx + 1):
                yield cx, cy

    def __len__(self) -> int:
        return (self.max_cx - self.min_cx + 1) * (self.max_cy - self.min_cy + 1)

    @property
    def center(self) -> tuple[int, int]:
        return ((self.min_cx + self.max_cx) // 2, (self.min_cy + self.max_cy) // 2)


def visible_chunk_range(
    camera_x: float,
    camera_y: float,
    view_width: float,
    view_height: float,
    tile_size: int,
    chunk_size: int = CHUNK_SIZE,
    padding: int = 0,
) -> ChunkRange:
    """Chunks overlapping a viewport given in pixels.

    Args:
        camera_x, camera_y: Top-left corner of the viewport in pixels.
        view_width, view_height: Viewport size in pixels.
        tile_size: Tile edge in pixels.
        chunk_size: Chunk edge in tiles.
        padding: Extra chunks to include beyond viewport edges.
    """
    pixels_per_chunk = tile_size * chunk_size
    return ChunkRange(
        min_cx=math.floor(camera_x / pixels_per_chunk) - padding,
        min_cy=math.floor(camera_y / pixels_per_chunk) - padding,
        max_cx=math.floor((camera_x + view_width) / pixels_per_chunk) + padding,
        max_cy=math.floor((camera_y + view_height) / pixels_per_chunk) + padding,
    )


class ChunkCache:
    """Generates chunks on first request and keeps them until evicted.

    The cache owns the structure registry shared by all of its chunks.
    """

    def __init__(
        self,
        config: WorldGenConfig | None = None,
        registry: StructureRegistry | None = None,
    ):
        self.config = config or WorldGenConfig()
        self.registry = registry if registry is not None else StructureRegistry()
        self.generator = ChunkGenerator(self.config, self.registry)
        self._chunks: dict[int, Chunk] = {}

    def get_chunk(
        self, cx: int, cy: int, world_seed: int, noise: NoiseField
    ) -> Chunk:
        """Return the chunk at (cx, cy), generating it on first request."""
        key = chunk_key(cx, cy)
        chunk = self._chunks.get(key)
        if chunk is None:
            chunk = self.generator.generate(cx, cy, world_seed, noise)
            self._chunks[key] = chunk
            logger.debug(
                "chunk_generated",
                cx=cx,
                cy=cy,
                structure=chunk.structure.value if chunk.structure else None,
                cached=len(self._chunks),
            )
        return chunk

    def load_range(
        self, chunk_range: ChunkRange, world_seed: int, noise: NoiseField
    ) -> list[Chunk]:
        """Make sure every chunk of a range is loaded, visiting in row-major order."""
        return [self.get_chunk(cx, cy, world_seed, noise) for cx, cy in chunk_range]

    def unload_chunk(self, cx: int, cy: int) -> bool:
        """Drop one chunk and the structure originating in it.

        Returns:
            True if the chunk was loaded.
        """
        removed = self._chunks.pop(chunk_key(cx, cy), None)
        self.registry.remove_origin(cx, cy)
        return removed is not None

    def unload_distant_chunks(
        self, center_cx: int, center_cy: int, keep_distance: int
    ) -> int:
        """Evict chunks farther than ``keep_distance`` (Chebyshev) from a center.

        Structure records whose origin chunk is evicted go with it, and the
        registry forgets planning state beyond the kept area so memory stays
        bounded however far the center travels.

        Returns:
            Number of chunks evicted.
        """
        to_delete = [
            key
            for key in self._chunks
            if chebyshev_distance(*split_chunk_key(key), center_cx, center_cy)
            > keep_distance
        ]
        for key in to_delete:
            cx, cy = split_chunk_key(key)
            del self._chunks[key]
            self.registry.remove_origin(cx, cy)
        self.registry.prune(center_cx, center_cy, keep_distance)

        if to_delete:
            logger.debug(
                "chunks_unloaded",
                count=len(to_delete),
                center_cx=center_cx,
                center_cy=center_cy,
                remaining=len(self._chunks),
            )
        return len(to_delete)

    def clear(self) -> None:
        """Drop all chunks and the structure registry (used on reseed)."""
        count = len(self._chunks)
        self._chunks.clear()
        self.registry.clear()
        logger.info("chunk_cache_cleared", chunks=count)

    def get_active_chunks(self) -> Mapping[tuple[int, int], Chunk]:
        """Loaded chunks keyed by (cx, cy)."""
        return {split_chunk_key(key): chunk for key, chunk in self._chunks.items()}

    def __contains__(self, coords: object) -> bool:
        if not isinstance(coords, tuple) or len(coords) != 2:
            return False
        return chunk_key(*coords) in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)
