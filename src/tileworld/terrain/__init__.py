"""Procedural terrain generation package.

This package implements noise-based chunk generation for unbounded tile
worlds, including biome classification, structures and village roads,
object scatter and autotiling.
"""

from .autotile import apply_autotiling, compute_masks, variant_for_mask
from .classification import classify_biome, classify_biomes
from .config import WorldGenConfig, validate_config
from .generator import ChunkGenerator, generate_chunk
from .noise import NoiseField, NoiseLayer
from .placement import StructureRecord
from .registry import StructureRegistry
from .roads import RoadGraph, build_road_graph, rasterize_roads
from .seeding import RandomStream, SeedPurpose, derive_seed

__all__ = [
    "ChunkGenerator",
    "NoiseField",
    "NoiseLayer",
    "RandomStream",
    "RoadGraph",
    "SeedPurpose",
    "StructureRecord",
    "StructureRegistry",
    "WorldGenConfig",
    "apply_autotiling",
    "build_road_graph",
    "classify_biome",
    "classify_biomes",
    "compute_masks",
    "derive_seed",
    "generate_chunk",
    "rasterize_roads",
    "validate_config",
    "variant_for_mask",
]
