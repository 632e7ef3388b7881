"""Seeded noise layers for world generation.

Each logical layer (elevation, temperature, humidity, scatter density) is
an independently seeded OpenSimplex generator sampled point by point, so a
chunk can be generated anywhere in the unbounded world without reference
to its neighbors.
"""

from collections.abc import Callable, Mapping
from enum import Enum

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from ..exceptions import ConfigurationError
from .seeding import RandomStream

Sampler = Callable[[float, float], float]


class NoiseLayer(str, Enum):
    """Logical noise layers and their seed offsets from the world seed."""

    ELEVATION = "elevation"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    SCATTER = "scatter"

    @property
    def seed_offset(self) -> int:
        return _SEED_OFFSETS[self]


_SEED_OFFSETS: dict[NoiseLayer, int] = {
    NoiseLayer.ELEVATION: 1,
    NoiseLayer.TEMPERATURE: 2,
    NoiseLayer.HUMIDITY: 3,
    NoiseLayer.SCATTER: 999,
}


def normalize(value: float) -> float:
    """Map a noise value from [-1, 1] to [0, 1]."""
    return (value + 1) / 2


def layer_seed(world_seed: int, layer: NoiseLayer) -> int:
    """Seed for one layer's simplex generator."""
    return RandomStream(world_seed + layer.seed_offset).next_int(0, 2**31 - 1)


class NoiseField:
    """A set of four named 2D noise samplers."""

    def __init__(self, samplers: Mapping[NoiseLayer, Sampler]):
        missing = [layer.value for layer in NoiseLayer if layer not in samplers]
        if missing:
            raise ConfigurationError(f"Missing noise layers: {', '.join(missing)}")
        self._samplers = dict(samplers)

    @classmethod
    def seeded(cls, world_seed: int) -> "NoiseField":
        """Build simplex samplers for every layer from a world seed."""
        samplers: dict[NoiseLayer, Sampler] = {}
        for layer in NoiseLayer:
            generator = OpenSimplex(seed=layer_seed(world_seed, layer))
            samplers[layer] = generator.noise2
        return cls(samplers)

    @classmethod
    def from_samplers(cls, samplers: Mapping[str, Sampler]) -> "NoiseField":
        """Build a field from callables keyed by layer name."""
        return cls({NoiseLayer(name): fn for name, fn in samplers.items()})

    def sample(self, layer: NoiseLayer, x: float, y: float) -> float:
        """Raw noise value in [-1, 1]."""
        return self._samplers[layer](x, y)

    def sample_scaled(
        self, layer: NoiseLayer, x: float, y: float, scale: float
    ) -> float:
        """Sample at (x * scale, y * scale)."""
        return self._samplers[layer](x * scale, y * scale)

    def domain_warp(
        self,
        layer: NoiseLayer,
        x: float,
        y: float,
        scale: float,
        warp_scale: float = 0.01,
        strength: float = 8.0,
        warp_layer: NoiseLayer | None = None,
    ) -> float:
        """Sample a layer with coordinates displaced by a low-frequency warp.

        The warp is read from ``warp_layer`` (the primary layer itself by
        default) at ``warp_scale``, normalized to [0, 1], and shifts both
        sample axes by ``warp * strength``. This bends features such as
        rivers away from the noise lattice axes.

        Returns:
            Raw noise value in [-1, 1].
        """
        warp_source = self._samplers[warp_layer or layer]
        warp = normalize(warp_source(x * warp_scale, y * warp_scale))
        offset = warp * strength
        return self._samplers[layer](x * scale + offset, y * scale + offset)


def sample_grid(
    sampler: Callable[[float, float], float],
    xs: NDArray[np.int64],
    ys: NDArray[np.int64],
) -> NDArray[np.float64]:
    """Evaluate a point sampler over a grid.

    Args:
        sampler: Function of world (x, y).
        xs: World x coordinates of the grid columns.
        ys: World y coordinates of the grid rows.

    Returns:
        Array of shape (len(ys), len(xs)).
    """
    result = np.empty((len(ys), len(xs)), dtype=np.float64)
    for row, y in enumerate(ys):
        for col, x in enumerate(xs):
            result[row, col] = sampler(float(x), float(y))
    return result
