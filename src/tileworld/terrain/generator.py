"""Chunk generation orchestration."""

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..biome_types import Biome, StructureKind
from ..tile import Chunk, Tile
from .autotile import OutsideResolver, apply_autotiling
from .classification import biome_from_code, classify_biome, classify_biomes
from .config import WorldGenConfig, validate_config
from .noise import NoiseField, NoiseLayer, normalize, sample_grid
from .objects import scatter_object
from .placement import StructureRecord
from .registry import StructureRegistry
from .roads import build_road_graph, rasterize_roads
from .seeding import SeedPurpose, derive_seed, stream_for
from .structures import TemplatePlacement, can_place, randomized_template

logger = logging.getLogger(__name__)


@dataclass
class ChunkFields:
    """Normalized climate fields of one chunk, indexed [local_y, local_x]."""

    elevation: NDArray[np.float64]
    temperature: NDArray[np.float64]
    humidity: NDArray[np.float64]


class ChunkGenerator:
    """Generates chunks from a world seed, noise layers and a shared registry.

    For a fixed seed, chunk coordinate and registry contents, generate()
    always returns the same tiles.
    """

    def __init__(
        self,
        config: WorldGenConfig | None = None,
        registry: StructureRegistry | None = None,
    ):
        """Initialize ChunkGenerator.

        Args:
            config: Generation settings; validated immediately.
            registry: Structure registry to share. A new one if omitted.

        Raises:
            ConfigurationError: If the settings are invalid.
        """
        self.config = config or WorldGenConfig()
        validate_config(self.config)
        self.registry = registry if registry is not None else StructureRegistry()

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    def generate(
        self, cx: int, cy: int, world_seed: int, noise: NoiseField
    ) -> Chunk:
        """Generate one chunk.

        Args:
            cx: Chunk x coordinate.
            cy: Chunk y coordinate.
            world_seed: World seed.
            noise: Noise layers for this seed.

        Returns:
            The finished, autotiled chunk.
        """
        size = self.chunk_size

        # Stage A: structures covering this chunk
        self.registry.ensure_planned(world_seed, cx, cy, 1, self.config.structures)
        record = self.registry.resolve(cx, cy)
        placement = self._template_for(record, cx, cy, world_seed)

        # Stage B: climate fields and biomes
        fields = self.sample_fields(cx, cy, noise)
        codes = classify_biomes(
            fields.elevation, fields.temperature, fields.humidity, self.config.biomes
        )

        tiles: list[list[Tile]] = []
        for ly in range(size):
            row: list[Tile] = []
            for lx in range(size):
                tile = Tile(
                    world_x=cx * size + lx,
                    world_y=cy * size + ly,
                    elevation=float(fields.elevation[ly, lx]),
                    temperature=float(fields.temperature[ly, lx]),
                    humidity=float(fields.humidity[ly, lx]),
                    biome=biome_from_code(codes[ly, lx]),
                )
                # Stage C: structure overlay
                if record is not None and placement is not None:
                    self._apply_template(tile, lx, ly, record.kind, placement)
                row.append(tile)
            tiles.append(row)

        # Stage D: village roads
        road_tiles = 0
        if record is not None and record.kind == StructureKind.VILLAGE:
            road_tiles = self._build_roads(tiles, cx, cy, world_seed)

        # Stage E: scatter objects
        objects = 0
        for row in tiles:
            for tile in row:
                tile.object_kind = scatter_object(
                    tile, noise, self.config.noise.scatter, self.config.scatter
                )
                if tile.object_kind is not None:
                    objects += 1

        # Stage F: autotiling
        outside: OutsideResolver | None = None
        if self.config.autotile.seam_chunk_edges:
            outside = self._outside_resolver(cx, cy, noise)
        apply_autotiling(tiles, outside)

        logger.debug(
            f"Generated chunk ({cx}, {cy}): "
            f"structure={record.kind.value if record else None}, "
            f"roads={road_tiles}, objects={objects}"
        )

        return Chunk(
            chunk_x=cx,
            chunk_y=cy,
            size=size,
            tiles=tiles,
            structure=record.kind if record else None,
            structure_origin=record.origin if record else None,
        )

    def sample_fields(self, cx: int, cy: int, noise: NoiseField) -> ChunkFields:
        """Sample normalized elevation, temperature and humidity for a chunk."""
        size = self.chunk_size
        xs = np.arange(cx * size, cx * size + size, dtype=np.int64)
        ys = np.arange(cy * size, cy * size + size, dtype=np.int64)
        return ChunkFields(
            elevation=sample_grid(lambda x, y: self.elevation_at(noise, x, y), xs, ys),
            temperature=sample_grid(
                lambda x, y: self.temperature_at(noise, x, y), xs, ys
            ),
            humidity=sample_grid(lambda x, y: self.humidity_at(noise, x, y), xs, ys),
        )

    def elevation_at(self, noise: NoiseField, world_x: float, world_y: float) -> float:
        """Domain-warped elevation [0, 1] at a world position."""
        scales = self.config.noise
        return normalize(
            noise.domain_warp(
                NoiseLayer.ELEVATION,
                world_x,
                world_y,
                scale=scales.elevation,
                warp_scale=scales.warp_scale,
                strength=scales.warp_strength,
            )
        )

    def temperature_at(self, noise: NoiseField, world_x: float, world_y: float) -> float:
        return normalize(
            noise.sample_scaled(
                NoiseLayer.TEMPERATURE, world_x, world_y, self.config.noise.temperature
            )
        )

    def humidity_at(self, noise: NoiseField, world_x: float, world_y: float) -> float:
        return normalize(
            noise.sample_scaled(
                NoiseLayer.HUMIDITY, world_x, world_y, self.config.noise.humidity
            )
        )

    def base_biome(self, noise: NoiseField, world_x: int, world_y: int) -> Biome:
        """Biome from climate alone, ignoring structures."""
        return classify_biome(
            self.elevation_at(noise, world_x, world_y),
            self.temperature_at(noise, world_x, world_y),
            self.humidity_at(noise, world_x, world_y),
            self.config.biomes,
        )

    def _template_for(
        self, record: StructureRecord | None, cx: int, cy: int, world_seed: int
    ) -> TemplatePlacement | None:
        """Template drawn from this chunk's own coordinates."""
        if record is None:
            return None
        seed = derive_seed(world_seed, SeedPurpose.TEMPLATE, cx, cy)
        return randomized_template(record.kind, seed)

    def _apply_template(
        self,
        tile: Tile,
        lx: int,
        ly: int,
        kind: StructureKind,
        placement: TemplatePlacement,
    ) -> None:
        """Stamp one template cell onto a tile when the terrain allows it."""
        start = math.floor(self.chunk_size / 2 - placement.size / 2)
        tx = lx - start
        ty = ly - start
        if not (0 <= tx < placement.size and 0 <= ty < placement.size):
            return
        if placement.template[ty][tx] == ".":
            return
        if not can_place(kind, tile.biome, tile.biome == Biome.WATER):
            return

        tile.structure = kind
        tile.biome = kind.biome
        if kind == StructureKind.VILLAGE:
            # Flatten terrain under buildings
            tile.elevation = self.config.structures.flatten_elevation

    def _build_roads(
        self, tiles: list[list[Tile]], cx: int, cy: int, world_seed: int
    ) -> int:
        roads = self.config.roads
        center = self.chunk_size // 2
        stream = stream_for(world_seed, SeedPurpose.TILE_VARIATION, cx, cy)
        graph = build_road_graph(center, center, stream, roads)
        return rasterize_roads(tiles, graph, roads.width, roads.road_type)

    def _outside_resolver(
        self, cx: int, cy: int, noise: NoiseField
    ) -> OutsideResolver:
        size = self.chunk_size

        def resolve(lx: int, ly: int) -> Biome | None:
            return self.base_biome(noise, cx * size + lx, cy * size + ly)

        return resolve


def generate_chunk(
    cx: int,
    cy: int,
    world_seed: int,
    noise: NoiseField,
    registry: StructureRegistry | None = None,
    config: WorldGenConfig | None = None,
) -> Chunk:
    """Generate a single chunk with a throwaway or supplied registry."""
    return ChunkGenerator(config, registry).generate(cx, cy, world_seed, noise)
