"""Biome classification: water, sand, mountain, snow, desert, forest, grass."""

import numpy as np
from numpy.typing import NDArray

from ..biome_types import Biome
from .config import BiomeThresholds

# Compact storage codes, one per biome
_BIOME_CODES: dict[Biome, int] = {biome: code for code, biome in enumerate(Biome)}
_CODE_BIOMES: dict[int, Biome] = {code: biome for biome, code in _BIOME_CODES.items()}


def classify_biome(
    elevation: float,
    temperature: float,
    humidity: float,
    thresholds: BiomeThresholds,
) -> Biome:
    """Classify one tile.

    The checks run in a fixed order and the first match wins: elevation
    bands decide water, sand, mountain and snow peaks before climate is
    consulted at all.

    Args:
        elevation: Normalized elevation [0, 1].
        temperature: Normalized temperature [0, 1].
        humidity: Normalized humidity [0, 1].
        thresholds: Classification thresholds.

    Returns:
        The tile's biome.
    """
    if elevation < thresholds.water:
        return Biome.WATER
    if elevation < thresholds.sand:
        return Biome.SAND
    if elevation > thresholds.mountain:
        if elevation > thresholds.snow:
            return Biome.SNOW
        return Biome.MOUNTAIN
    if (
        temperature > thresholds.desert_temperature
        and humidity < thresholds.desert_humidity
    ):
        return Biome.DESERT
    if temperature < thresholds.snow_temperature:
        return Biome.SNOW
    if humidity > thresholds.forest_humidity:
        return Biome.FOREST
    return Biome.GRASS


def classify_biomes(
    elevation: NDArray[np.float64],
    temperature: NDArray[np.float64],
    humidity: NDArray[np.float64],
    thresholds: BiomeThresholds,
) -> NDArray[np.uint8]:
    """Classify whole fields at once.

    Same cascade as classify_biome; np.select picks the first true
    condition per cell, which preserves the ordering.

    Returns:
        Array of biome codes (see biome_code) with the input shape.
    """
    conditions = [
        elevation < thresholds.water,
        elevation < thresholds.sand,
        (elevation > thresholds.mountain) & (elevation > thresholds.snow),
        elevation > thresholds.mountain,
        (temperature > thresholds.desert_temperature)
        & (humidity < thresholds.desert_humidity),
        temperature < thresholds.snow_temperature,
        humidity > thresholds.forest_humidity,
    ]
    choices = [
        biome_code(Biome.WATER),
        biome_code(Biome.SAND),
        biome_code(Biome.SNOW),
        biome_code(Biome.MOUNTAIN),
        biome_code(Biome.DESERT),
        biome_code(Biome.SNOW),
        biome_code(Biome.FOREST),
    ]
    return np.select(conditions, choices, default=biome_code(Biome.GRASS)).astype(
        np.uint8
    )


def biome_code(biome: Biome) -> int:
    """Convert Biome to its uint8 code."""
    return _BIOME_CODES[biome]


def biome_from_code(code: int) -> Biome:
    """Convert a uint8 code back to Biome. Unknown codes read as grass."""
    return _CODE_BIOMES.get(int(code), Biome.GRASS)
