"""World generation configuration models."""

from pydantic import BaseModel, Field

from ..exceptions import ConfigurationError


class NoiseScaleConfig(BaseModel):
    """Sampling frequencies for each noise layer."""

    elevation: float = Field(default=0.05, description="Elevation noise scale")
    temperature: float = Field(default=0.02, description="Temperature noise scale")
    humidity: float = Field(default=0.02, description="Humidity noise scale")
    scatter: float = Field(default=0.08, description="Scatter density noise scale")
    warp_scale: float = Field(
        default=0.01, description="Frequency of the low-frequency warp field"
    )
    warp_strength: float = Field(
        default=8.0, description="Offset applied per unit of normalized warp"
    )


class BiomeThresholds(BaseModel):
    """Thresholds of the biome classification cascade, all in [0, 1]."""

    water: float = Field(default=0.3, description="Elevation below this is water")
    sand: float = Field(default=0.35, description="Elevation below this is sand")
    mountain: float = Field(default=0.8, description="Elevation above this is mountain")
    snow: float = Field(default=0.9, description="Elevation above this is snow peak")
    desert_temperature: float = Field(
        default=0.7, description="Temperature above this may be desert"
    )
    desert_humidity: float = Field(
        default=0.4, description="Humidity below this may be desert"
    )
    snow_temperature: float = Field(
        default=0.3, description="Temperature below this is snow"
    )
    forest_humidity: float = Field(
        default=0.6, description="Humidity above this is forest"
    )


class StructureConfig(BaseModel):
    """Structure placement density."""

    spacing: int = Field(default=4, description="Grid cell edge in chunks")
    village_chance: float = Field(
        default=0.03, description="Cumulative roll threshold for villages"
    )
    dungeon_chance: float = Field(
        default=0.05, description="Cumulative roll threshold for dungeons"
    )
    flatten_elevation: float = Field(
        default=0.5, description="Elevation forced under village tiles"
    )


class RoadConfig(BaseModel):
    """Village road network parameters."""

    width: int = Field(default=1, description="Road half-width in tiles")
    road_type: str = Field(default="road", description="Tag written on road tiles")
    min_nodes: int = Field(default=5, description="Minimum intersections per graph")
    max_nodes: int = Field(default=10, description="Maximum intersections per graph")
    min_radius: float = Field(default=6.0, description="Minimum node distance from center")
    max_radius: float = Field(default=18.0, description="Maximum node distance from center")


class ScatterConfig(BaseModel):
    """Per-biome scatter density thresholds."""

    forest_tree: float = Field(default=0.55, description="Forest tree threshold")
    grass_tree: float = Field(default=0.75, description="Grassland tree threshold")
    grass_rock_min: float = Field(default=0.65, description="Grassland rock band start")
    grass_rock_max: float = Field(default=0.7, description="Grassland rock band end")
    mountain_rock: float = Field(default=0.6, description="Mountain rock threshold")
    desert_rock: float = Field(default=0.7, description="Desert rock threshold")


class AutotileConfig(BaseModel):
    """Autotiling options."""

    seam_chunk_edges: bool = Field(
        default=False,
        description="Resolve off-chunk neighbors from noise instead of skipping them",
    )


class WorldGenConfig(BaseModel):
    """Complete world generation configuration."""

    seed: int = Field(default=12345, description="World seed")
    tile_size: int = Field(default=64, description="Tile edge in pixels")
    chunk_size: int = Field(default=32, description="Chunk edge in tiles")
    render_distance: int = Field(
        default=3, description="Chunks kept around the view before eviction"
    )

    noise: NoiseScaleConfig = Field(default_factory=NoiseScaleConfig)
    biomes: BiomeThresholds = Field(default_factory=BiomeThresholds)
    structures: StructureConfig = Field(default_factory=StructureConfig)
    roads: RoadConfig = Field(default_factory=RoadConfig)
    scatter: ScatterConfig = Field(default_factory=ScatterConfig)
    autotile: AutotileConfig = Field(default_factory=AutotileConfig)


def validate_config(config: WorldGenConfig) -> None:
    """Check a configuration for out-of-range or misordered values.

    Args:
        config: Configuration to check.

    Raises:
        ConfigurationError: Listing every problem found.
    """
    problems: list[str] = []

    if config.tile_size <= 0:
        problems.append(f"tile_size must be positive, got {config.tile_size}")
    if config.chunk_size <= 0:
        problems.append(f"chunk_size must be positive, got {config.chunk_size}")
    if config.render_distance < 0:
        problems.append(
            f"render_distance must not be negative, got {config.render_distance}"
        )

    _check_noise(config.noise, problems)
    _check_biomes(config.biomes, problems)
    _check_structures(config.structures, problems)
    _check_roads(config.roads, problems)
    _check_scatter(config.scatter, problems)

    if problems:
        raise ConfigurationError("; ".join(problems))


def _check_unit_interval(name: str, value: float, problems: list[str]) -> None:
    if not 0.0 <= value <= 1.0:
        problems.append(f"{name} must be within [0, 1], got {value}")


def _check_noise(noise: NoiseScaleConfig, problems: list[str]) -> None:
    for name in ("elevation", "temperature", "humidity", "scatter", "warp_scale"):
        value = getattr(noise, name)
        if value <= 0:
            problems.append(f"noise.{name} must be positive, got {value}")
    if noise.warp_strength < 0:
        problems.append(
            f"noise.warp_strength must not be negative, got {noise.warp_strength}"
        )


def _check_biomes(thresholds: BiomeThresholds, problems: list[str]) -> None:
    for name, value in thresholds.model_dump().items():
        _check_unit_interval(f"biomes.{name}", value, problems)

    ordered = [
        ("water", thresholds.water),
        ("sand", thresholds.sand),
        ("mountain", thresholds.mountain),
        ("snow", thresholds.snow),
    ]
    for (low_name, low), (high_name, high) in zip(ordered, ordered[1:]):
        if low > high:
            problems.append(
                f"biomes.{low_name} ({low}) must not exceed biomes.{high_name} ({high})"
            )
    if thresholds.snow_temperature > thresholds.desert_temperature:
        problems.append(
            f"biomes.snow_temperature ({thresholds.snow_temperature}) must not exceed "
            f"biomes.desert_temperature ({thresholds.desert_temperature})"
        )


def _check_structures(structures: StructureConfig, problems: list[str]) -> None:
    if structures.spacing < 1:
        problems.append(f"structures.spacing must be >= 1, got {structures.spacing}")
    _check_unit_interval("structures.village_chance", structures.village_chance, problems)
    _check_unit_interval("structures.dungeon_chance", structures.dungeon_chance, problems)
    _check_unit_interval(
        "structures.flatten_elevation", structures.flatten_elevation, problems
    )
    if structures.village_chance > structures.dungeon_chance:
        problems.append(
            "structures.village_chance must not exceed the cumulative "
            "structures.dungeon_chance"
        )


def _check_roads(roads: RoadConfig, problems: list[str]) -> None:
    if roads.width < 0:
        problems.append(f"roads.width must not be negative, got {roads.width}")
    if roads.min_nodes < 1 or roads.min_nodes > roads.max_nodes:
        problems.append(
            f"roads node range [{roads.min_nodes}, {roads.max_nodes}] is invalid"
        )
    if roads.min_radius < 0 or roads.min_radius > roads.max_radius:
        problems.append(
            f"roads radius range [{roads.min_radius}, {roads.max_radius}] is invalid"
        )


def _check_scatter(scatter: ScatterConfig, problems: list[str]) -> None:
    for name, value in scatter.model_dump().items():
        _check_unit_interval(f"scatter.{name}", value, problems)
    if scatter.grass_rock_min > scatter.grass_rock_max:
        problems.append("scatter.grass_rock_min must not exceed scatter.grass_rock_max")
