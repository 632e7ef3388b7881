"""Shared test fixtures for tile world tests."""

from collections.abc import Callable

import pytest

from tileworld.terrain.config import StructureConfig, WorldGenConfig
from tileworld.terrain.noise import NoiseField


def constant_noise(
    elevation: float = 0.0,
    temperature: float = 0.0,
    humidity: float = 0.0,
    scatter: float = 0.0,
) -> NoiseField:
    """Noise field whose layers return fixed raw values in [-1, 1]."""
    return NoiseField.from_samplers({
        "elevation": lambda x, y: elevation,
        "temperature": lambda x, y: temperature,
        "humidity": lambda x, y: humidity,
        "scatter": lambda x, y: scatter,
    })


@pytest.fixture
def flat_noise() -> NoiseField:
    """Every tile normalizes to 0.5 on every layer: plain grass, no objects."""
    return constant_noise()


@pytest.fixture
def make_noise() -> Callable[..., NoiseField]:
    """Factory for constant noise fields."""
    return constant_noise


@pytest.fixture
def default_config() -> WorldGenConfig:
    return WorldGenConfig()


@pytest.fixture
def no_structures_config() -> WorldGenConfig:
    """Small chunks and no random structures; tests insert their own."""
    return WorldGenConfig(
        chunk_size=16,
        structures=StructureConfig(village_chance=0.0, dungeon_chance=0.0),
    )


@pytest.fixture
def every_cell_config() -> StructureConfig:
    """Every grid cell rolls a village."""
    return StructureConfig(spacing=4, village_chance=1.0, dungeon_chance=1.0)
