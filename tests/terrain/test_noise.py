"""Tests for noise layers."""

import numpy as np
import pytest

from tileworld.exceptions import ConfigurationError
from tileworld.terrain.noise import (
    NoiseField,
    NoiseLayer,
    layer_seed,
    normalize,
    sample_grid,
)


class RecordingSampler:
    """Sampler returning a fixed value and remembering its calls."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls: list[tuple[float, float]] = []

    def __call__(self, x: float, y: float) -> float:
        self.calls.append((x, y))
        return self.value


def _field(**overrides: RecordingSampler) -> NoiseField:
    samplers = {layer.value: RecordingSampler() for layer in NoiseLayer}
    samplers.update(overrides)
    return NoiseField.from_samplers(samplers)


class TestNormalize:
    """Tests for the [-1, 1] -> [0, 1] mapping."""

    def test_endpoints(self) -> None:
        assert normalize(-1.0) == 0.0
        assert normalize(0.0) == 0.5
        assert normalize(1.0) == 1.0


class TestNoiseField:
    """Tests for NoiseField construction and sampling."""

    def test_missing_layer_rejected(self) -> None:
        """A field must provide all four layers."""
        with pytest.raises(ConfigurationError, match="scatter"):
            NoiseField.from_samplers({
                "elevation": lambda x, y: 0.0,
                "temperature": lambda x, y: 0.0,
                "humidity": lambda x, y: 0.0,
            })

    def test_unknown_layer_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            NoiseField.from_samplers({"lava": lambda x, y: 0.0})

    def test_sample_scaled(self) -> None:
        """sample_scaled multiplies both coordinates by the scale."""
        sampler = RecordingSampler(0.25)
        field = _field(temperature=sampler)
        assert field.sample_scaled(NoiseLayer.TEMPERATURE, 10, 20, 0.5) == 0.25
        assert sampler.calls == [(5.0, 10.0)]

    def test_domain_warp_offsets(self) -> None:
        """Warp is read at warp_scale, then shifts the main sample."""
        sampler = RecordingSampler(0.0)
        field = _field(elevation=sampler)

        field.domain_warp(NoiseLayer.ELEVATION, 100, 200, scale=0.05)

        warp_call, main_call = sampler.calls
        assert warp_call == pytest.approx((1.0, 2.0))
        # normalize(0.0) * 8.0 = 4.0
        assert main_call == pytest.approx((9.0, 14.0))

    def test_domain_warp_separate_warp_layer(self) -> None:
        warp = RecordingSampler(1.0)
        main = RecordingSampler(0.0)
        field = _field(elevation=main, humidity=warp)

        field.domain_warp(
            NoiseLayer.ELEVATION,
            0,
            0,
            scale=1.0,
            strength=2.0,
            warp_layer=NoiseLayer.HUMIDITY,
        )

        assert len(warp.calls) == 1
        assert main.calls == [pytest.approx((2.0, 2.0))]

    def test_seeded_deterministic(self) -> None:
        """Two fields from one seed sample identically."""
        a = NoiseField.seeded(12345)
        b = NoiseField.seeded(12345)
        for layer in NoiseLayer:
            assert a.sample(layer, 3.7, -1.2) == b.sample(layer, 3.7, -1.2)

    def test_seeded_values_in_range(self) -> None:
        field = NoiseField.seeded(7)
        for i in range(50):
            value = field.sample(NoiseLayer.ELEVATION, i * 0.37, i * 0.11)
            assert -1.0 <= value <= 1.0

    def test_layers_seeded_independently(self) -> None:
        seeds = {layer_seed(12345, layer) for layer in NoiseLayer}
        assert len(seeds) == len(NoiseLayer)
        assert all(0 <= seed < 2**31 - 1 for seed in seeds)


class TestSampleGrid:
    """Tests for grid evaluation."""

    def test_shape_and_indexing(self) -> None:
        """Rows follow ys and columns follow xs."""
        xs = np.arange(10, 14)
        ys = np.arange(-3, -1)
        grid = sample_grid(lambda x, y: x * 100 + y, xs, ys)

        assert grid.shape == (2, 4)
        assert grid[0, 0] == 10 * 100 - 3
        assert grid[1, 3] == 13 * 100 - 2
