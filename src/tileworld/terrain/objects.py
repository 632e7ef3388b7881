"""Object scatter: trees and rocks placed by biome-specific density bands."""

from ..biome_types import Biome, ObjectKind
from ..tile import Tile
from .config import ScatterConfig
from .noise import NoiseField, NoiseLayer, normalize


def scatter_density(noise: NoiseField, world_x: int, world_y: int, scale: float) -> float:
    """Normalized scatter density [0, 1] at a world position."""
    return normalize(noise.sample_scaled(NoiseLayer.SCATTER, world_x, world_y, scale))


def object_for_density(
    biome: Biome, density: float, config: ScatterConfig
) -> ObjectKind | None:
    """Decision table: which object, if any, a density yields in a biome.

    Bands never overlap within a biome, so a tile gets at most one object.
    """
    if biome == Biome.FOREST:
        if density > config.forest_tree:
            return ObjectKind.TREE
    elif biome == Biome.GRASS:
        if density > config.grass_tree:
            return ObjectKind.TREE
        if config.grass_rock_min < density < config.grass_rock_max:
            return ObjectKind.ROCK
    elif biome == Biome.MOUNTAIN:
        if density > config.mountain_rock:
            return ObjectKind.ROCK
    elif biome == Biome.DESERT:
        if density > config.desert_rock:
            return ObjectKind.ROCK
    return None


def can_scatter(tile: Tile) -> bool:
    """Only open land gets objects: no structure, no road, no water."""
    return tile.structure is None and tile.road is None and tile.biome != Biome.WATER


def scatter_object(
    tile: Tile, noise: NoiseField, scale: float, config: ScatterConfig
) -> ObjectKind | None:
    """Object for one tile, or None.

    Args:
        tile: Tile with its final biome, structure and road tag.
        noise: Noise field providing the scatter layer.
        scale: Scatter noise scale.
        config: Density thresholds.
    """
    if not can_scatter(tile):
        return None
    density = scatter_density(noise, tile.world_x, tile.world_y, scale)
    return object_for_density(tile.biome, density, config)
