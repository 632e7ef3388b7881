"""Procedural 2D tile world generation."""

from .biome_types import Biome, ObjectKind, StructureKind
from .chunks import (
    CHUNK_SIZE,
    ChunkCache,
    ChunkRange,
    chunk_coords,
    local_coords,
    visible_chunk_range,
    world_coords,
)
from .config import find_config, list_configs, load_config
from .exceptions import ConfigurationError, TileWorldError, UnknownStructureError
from .terrain.config import WorldGenConfig
from .terrain.generator import ChunkGenerator, generate_chunk
from .terrain.noise import NoiseField, NoiseLayer
from .terrain.registry import StructureRegistry
from .tile import Chunk, Tile, TileVariant
from .types import DIRECTION_DELTAS, Direction, chunk_key, split_chunk_key

__all__ = [
    # Types
    "Direction",
    "DIRECTION_DELTAS",
    "chunk_key",
    "split_chunk_key",
    "Biome",
    "StructureKind",
    "ObjectKind",
    # Tiles
    "Tile",
    "TileVariant",
    "Chunk",
    # Generation
    "NoiseField",
    "NoiseLayer",
    "ChunkGenerator",
    "generate_chunk",
    "StructureRegistry",
    # Cache
    "CHUNK_SIZE",
    "ChunkCache",
    "ChunkRange",
    "chunk_coords",
    "local_coords",
    "world_coords",
    "visible_chunk_range",
    # Config
    "WorldGenConfig",
    "load_config",
    "find_config",
    "list_configs",
    # Exceptions
    "TileWorldError",
    "ConfigurationError",
    "UnknownStructureError",
]
