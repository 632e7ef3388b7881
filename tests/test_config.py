"""Tests for configuration models, validation and loading."""

from pathlib import Path

import pytest

from tileworld.config import find_config, list_configs, load_config
from tileworld.exceptions import ConfigurationError
from tileworld.terrain.config import (
    BiomeThresholds,
    NoiseScaleConfig,
    RoadConfig,
    ScatterConfig,
    StructureConfig,
    WorldGenConfig,
    validate_config,
)


class TestValidateConfig:
    """Tests for semantic validation."""

    def test_defaults_valid(self) -> None:
        validate_config(WorldGenConfig())

    def test_threshold_out_of_range(self) -> None:
        config = WorldGenConfig(biomes=BiomeThresholds(forest_humidity=1.5))
        with pytest.raises(ConfigurationError, match="forest_humidity"):
            validate_config(config)

    def test_misordered_thresholds(self) -> None:
        config = WorldGenConfig(biomes=BiomeThresholds(water=0.5, sand=0.4))
        with pytest.raises(ConfigurationError, match="biomes.water"):
            validate_config(config)

    def test_snow_below_mountain(self) -> None:
        config = WorldGenConfig(biomes=BiomeThresholds(mountain=0.9, snow=0.85))
        with pytest.raises(ConfigurationError, match="biomes.mountain"):
            validate_config(config)

    def test_snow_warmer_than_desert(self) -> None:
        config = WorldGenConfig(
            biomes=BiomeThresholds(snow_temperature=0.8, desert_temperature=0.7)
        )
        with pytest.raises(ConfigurationError, match="snow_temperature"):
            validate_config(config)

    @pytest.mark.parametrize(
        "field", ["elevation", "temperature", "humidity", "scatter", "warp_scale"]
    )
    def test_noise_scale_must_be_positive(self, field: str) -> None:
        """A zero scale would sample one point of noise for the whole world."""
        config = WorldGenConfig(noise=NoiseScaleConfig(**{field: 0.0}))
        with pytest.raises(ConfigurationError, match=f"noise.{field}"):
            validate_config(config)

    def test_negative_warp_strength(self) -> None:
        config = WorldGenConfig(noise=NoiseScaleConfig(warp_strength=-1.0))
        with pytest.raises(ConfigurationError, match="warp_strength"):
            validate_config(config)

    def test_zero_warp_strength_allowed(self) -> None:
        validate_config(WorldGenConfig(noise=NoiseScaleConfig(warp_strength=0.0)))

    def test_spacing_must_be_positive(self) -> None:
        config = WorldGenConfig(structures=StructureConfig(spacing=0))
        with pytest.raises(ConfigurationError, match="spacing"):
            validate_config(config)

    def test_chances_cumulative(self) -> None:
        config = WorldGenConfig(
            structures=StructureConfig(village_chance=0.2, dungeon_chance=0.1)
        )
        with pytest.raises(ConfigurationError, match="village_chance"):
            validate_config(config)

    def test_chance_out_of_range(self) -> None:
        config = WorldGenConfig(
            structures=StructureConfig(village_chance=0.1, dungeon_chance=1.2)
        )
        with pytest.raises(ConfigurationError, match="dungeon_chance"):
            validate_config(config)

    def test_road_ranges(self) -> None:
        config = WorldGenConfig(roads=RoadConfig(min_nodes=8, max_nodes=4))
        with pytest.raises(ConfigurationError, match="node range"):
            validate_config(config)

    def test_rock_band_order(self) -> None:
        config = WorldGenConfig(
            scatter=ScatterConfig(grass_rock_min=0.7, grass_rock_max=0.6)
        )
        with pytest.raises(ConfigurationError, match="grass_rock_min"):
            validate_config(config)

    def test_non_positive_chunk_size(self) -> None:
        with pytest.raises(ConfigurationError, match="chunk_size"):
            validate_config(WorldGenConfig(chunk_size=0))

    def test_reports_every_problem(self) -> None:
        config = WorldGenConfig(
            tile_size=0,
            structures=StructureConfig(spacing=0),
        )
        with pytest.raises(ConfigurationError) as excinfo:
            validate_config(config)
        message = str(excinfo.value)
        assert "tile_size" in message
        assert "spacing" in message


class TestLoadConfig:
    """Tests for TOML loading."""

    def test_load_partial_file(self, tmp_path: Path) -> None:
        """Missing sections fall back to defaults."""
        path = tmp_path / "world.toml"
        path.write_text('seed = 77\n\n[structures]\nspacing = 6\n')

        config = load_config(path)

        assert config.seed == 77
        assert config.structures.spacing == 6
        assert config.chunk_size == 32
        assert config.biomes == BiomeThresholds()

    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("seed = = 1\n")
        with pytest.raises(ConfigurationError, match="Malformed"):
            load_config(path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        path = tmp_path / "typed.toml"
        path.write_text('chunk_size = "large"\n')
        with pytest.raises(ConfigurationError, match="Invalid"):
            load_config(path)

    def test_semantic_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[biomes]\nwater = 0.9\nsand = 0.2\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestPresets:
    """Tests for the bundled config presets."""

    def test_list_configs(self) -> None:
        names = list_configs()
        assert "default" in names
        assert "dense_structures" in names

    def test_default_matches_builtin(self) -> None:
        assert load_config(find_config("default")) == WorldGenConfig()

    def test_dense_structures(self) -> None:
        config = load_config(find_config("dense_structures"))
        assert config.seed == 2024
        assert config.structures.village_chance == 0.5
        assert config.structures.dungeon_chance == 0.8

    def test_find_by_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text("seed = 1\n")
        assert find_config(str(path)) == path

    def test_unknown_name(self) -> None:
        with pytest.raises(FileNotFoundError, match="Available configs"):
            find_config("does_not_exist")
