"""Bitmask autotiling.

Every tile looks at its 8 neighbors. Bit ``d`` of its mask is set when the
neighbor in direction ``d`` (see Direction) exists and its biome may blend
with the center's biome. The mask then picks a rendering variant.

    NW  N  NE        7  0  1
     W  .  E    ->   6  .  2
    SW  S  SE        5  4  3
"""

from collections.abc import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from ..biome_types import Biome
from ..tile import Tile, TileVariant
from ..types import DIRECTION_DELTAS, Direction
from .classification import biome_code, biome_from_code

# Resolves a biome for a local coordinate outside the chunk, or None to skip it
OutsideResolver = Callable[[int, int], Biome | None]

_OFF_CHUNK = -1

BIOME_GROUPS: dict[Biome, int] = {
    Biome.WATER: 0,
    Biome.SAND: 1,
    Biome.GRASS: 2,
    Biome.FOREST: 3,
    Biome.MOUNTAIN: 4,
    Biome.SNOW: 5,
    Biome.DESERT: 6,
    Biome.VILLAGE: 7,
    Biome.DUNGEON: 8,
}

# Group -> groups it blends with (always includes itself)
BIOME_TRANSITIONS: dict[int, frozenset[int]] = {
    0: frozenset({0, 1}),
    1: frozenset({1, 0, 2}),
    2: frozenset({2, 3, 1}),
    3: frozenset({3, 2}),
    4: frozenset({4, 5}),
    5: frozenset({5, 4}),
    6: frozenset({6, 1}),
    7: frozenset({7, 2}),
    8: frozenset({8}),
}

FULL_MASK = 0xFF
FULL_VARIANT = TileVariant("full", rotation=0, priority=1)
ISOLATED_VARIANT = TileVariant("isolated", rotation=0, priority=8)


def _without(*directions: Direction) -> int:
    mask = FULL_MASK
    for direction in directions:
        mask &= ~direction.bit
    return mask


_N, _NE, _E, _SE = Direction.NORTH, Direction.NORTHEAST, Direction.EAST, Direction.SOUTHEAST
_S, _SW, _W, _NW = Direction.SOUTH, Direction.SOUTHWEST, Direction.WEST, Direction.NORTHWEST

# Exact-match table; rotation is quarter turns clockwise from the north-facing piece
TILE_VARIANTS: dict[int, TileVariant] = {
    FULL_MASK: FULL_VARIANT,
    0x00: ISOLATED_VARIANT,
    # One side open
    _without(_NW, _N, _NE): TileVariant("edge", rotation=0, priority=3),
    _without(_NE, _E, _SE): TileVariant("edge", rotation=1, priority=3),
    _without(_SE, _S, _SW): TileVariant("edge", rotation=2, priority=3),
    _without(_SW, _W, _NW): TileVariant("edge", rotation=3, priority=3),
    # Two adjacent sides open
    _without(_NW, _N, _NE, _E, _SE): TileVariant("outer_corner", rotation=0, priority=4),
    _without(_NE, _E, _SE, _S, _SW): TileVariant("outer_corner", rotation=1, priority=4),
    _without(_SE, _S, _SW, _W, _NW): TileVariant("outer_corner", rotation=2, priority=4),
    _without(_SW, _W, _NW, _N, _NE): TileVariant("outer_corner", rotation=3, priority=4),
    # Only one diagonal open
    _without(_NE): TileVariant("inner_corner", rotation=0, priority=5),
    _without(_SE): TileVariant("inner_corner", rotation=1, priority=5),
    _without(_SW): TileVariant("inner_corner", rotation=2, priority=5),
    _without(_NW): TileVariant("inner_corner", rotation=3, priority=5),
    # Corridors: two opposite sides open
    _without(_NW, _N, _NE, _SE, _S, _SW): TileVariant("corridor", rotation=0, priority=6),
    _without(_NE, _E, _SE, _SW, _W, _NW): TileVariant("corridor", rotation=1, priority=6),
    # Peninsulas: only one cardinal neighbor compatible
    _S.bit: TileVariant("end", rotation=0, priority=7),
    _W.bit: TileVariant("end", rotation=1, priority=7),
    _N.bit: TileVariant("end", rotation=2, priority=7),
    _E.bit: TileVariant("end", rotation=3, priority=7),
}


def _build_lookups() -> tuple[NDArray[np.int16], NDArray[np.bool_]]:
    group_of_code = np.zeros(len(Biome), dtype=np.int16)
    for biome, group in BIOME_GROUPS.items():
        group_of_code[biome_code(biome)] = group

    groups = len(BIOME_TRANSITIONS)
    compatible = np.zeros((groups, groups), dtype=bool)
    for group, allowed in BIOME_TRANSITIONS.items():
        for other in allowed:
            compatible[group, other] = True
    return group_of_code, compatible


_GROUP_OF_CODE, _COMPATIBLE = _build_lookups()


def can_transition(from_biome: Biome, to_biome: Biome) -> bool:
    """Whether two biomes blend without a hard edge."""
    if from_biome == to_biome:
        return True
    return BIOME_GROUPS[to_biome] in BIOME_TRANSITIONS[BIOME_GROUPS[from_biome]]


def variant_for_mask(mask: int) -> TileVariant:
    """Variant for an exact mask match, otherwise the full variant."""
    return TILE_VARIANTS.get(mask, FULL_VARIANT)


def compute_masks(
    codes: NDArray[np.uint8],
    outside: OutsideResolver | None = None,
) -> tuple[NDArray[np.uint8], NDArray[np.int16]]:
    """Neighbor masks for a grid of biome codes.

    Args:
        codes: Biome codes, shape (height, width), indexed [y, x].
        outside: Optional resolver for coordinates beyond the grid edge.
            Without it, off-grid neighbors never set their bit.

    Returns:
        Tuple of (masks, padded_codes). ``padded_codes`` has a one-tile
        border holding resolved neighbor codes or -1 for skipped cells.
    """
    height, width = codes.shape
    padded = np.full((height + 2, width + 2), _OFF_CHUNK, dtype=np.int16)
    padded[1:-1, 1:-1] = codes

    if outside is not None:
        for py in range(height + 2):
            for px in range(width + 2):
                if 1 <= py <= height and 1 <= px <= width:
                    continue
                biome = outside(px - 1, py - 1)
                if biome is not None:
                    padded[py, px] = biome_code(biome)

    center_groups = _GROUP_OF_CODE[codes]
    masks = np.zeros((height, width), dtype=np.uint8)

    for direction, (dx, dy) in DIRECTION_DELTAS.items():
        neighbor = padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
        present = neighbor != _OFF_CHUNK
        neighbor_groups = _GROUP_OF_CODE[np.where(present, neighbor, 0)]
        compatible = present & (
            _COMPATIBLE[center_groups, neighbor_groups] | (neighbor == codes)
        )
        masks |= compatible.astype(np.uint8) << direction.value

    return masks, padded


def apply_autotiling(
    tiles: Sequence[Sequence[Tile]],
    outside: OutsideResolver | None = None,
) -> None:
    """Compute mask, variant and neighbor biomes for every tile of a chunk.

    Tiles carrying a structure are left without mask or variant; they still
    count as neighbors for the tiles around them.

    Args:
        tiles: Chunk grid indexed ``tiles[y][x]``.
        outside: Optional resolver for neighbors beyond the chunk edge.
    """
    codes = np.array(
        [[biome_code(tile.biome) for tile in row] for row in tiles], dtype=np.uint8
    )
    masks, padded = compute_masks(codes, outside)

    for y, row in enumerate(tiles):
        for x, tile in enumerate(row):
            if tile.structure is not None:
                tile.mask = None
                tile.variant = None
                continue

            mask = int(masks[y, x])
            tile.mask = mask
            tile.variant = variant_for_mask(mask)

            neighbors: dict[str, Biome] = {}
            for direction, (dx, dy) in DIRECTION_DELTAS.items():
                code = padded[1 + y + dy, 1 + x + dx]
                if code != _OFF_CHUNK:
                    neighbors[direction.short_name] = biome_from_code(code)
            tile.neighbor_biomes = neighbors


# Edge blending helpers for renderers. Permeability 1.0 means seamless.
BIOME_PERMEABILITY: dict[Biome, dict[Biome, float]] = {
    Biome.WATER: {
        Biome.SAND: 0.3, Biome.GRASS: 0.5, Biome.FOREST: 0.6, Biome.MOUNTAIN: 0.8,
        Biome.DESERT: 0.7, Biome.SNOW: 0.9, Biome.VILLAGE: 1.0, Biome.DUNGEON: 1.0,
    },
    Biome.SAND: {
        Biome.WATER: 0.3, Biome.GRASS: 0.2, Biome.FOREST: 0.5, Biome.MOUNTAIN: 0.7,
        Biome.DESERT: 0.1, Biome.SNOW: 0.8, Biome.VILLAGE: 0.8, Biome.DUNGEON: 1.0,
    },
    Biome.GRASS: {
        Biome.WATER: 0.5, Biome.SAND: 0.2, Biome.FOREST: 0.15, Biome.MOUNTAIN: 0.6,
        Biome.DESERT: 0.7, Biome.SNOW: 0.8, Biome.VILLAGE: 0.2, Biome.DUNGEON: 1.0,
    },
    Biome.FOREST: {
        Biome.WATER: 0.6, Biome.SAND: 0.5, Biome.GRASS: 0.15, Biome.MOUNTAIN: 0.7,
        Biome.DESERT: 0.8, Biome.SNOW: 0.9, Biome.VILLAGE: 0.3, Biome.DUNGEON: 1.0,
    },
    Biome.MOUNTAIN: {
        Biome.WATER: 0.8, Biome.SAND: 0.7, Biome.GRASS: 0.6, Biome.FOREST: 0.7,
        Biome.DESERT: 0.7, Biome.SNOW: 0.2, Biome.VILLAGE: 1.0, Biome.DUNGEON: 0.5,
    },
    Biome.DESERT: {
        Biome.WATER: 0.7, Biome.SAND: 0.1, Biome.GRASS: 0.7, Biome.FOREST: 0.8,
        Biome.MOUNTAIN: 0.7, Biome.SNOW: 1.0, Biome.VILLAGE: 0.9, Biome.DUNGEON: 1.0,
    },
    Biome.SNOW: {
        Biome.WATER: 0.9, Biome.SAND: 0.8, Biome.GRASS: 0.8, Biome.FOREST: 0.9,
        Biome.MOUNTAIN: 0.2, Biome.DESERT: 1.0, Biome.VILLAGE: 1.0, Biome.DUNGEON: 1.0,
    },
    Biome.VILLAGE: {
        Biome.WATER: 1.0, Biome.SAND: 0.8, Biome.GRASS: 0.2, Biome.FOREST: 0.4,
        Biome.MOUNTAIN: 1.0, Biome.DESERT: 0.9, Biome.SNOW: 1.0, Biome.DUNGEON: 1.0,
    },
    Biome.DUNGEON: {
        Biome.WATER: 1.0, Biome.SAND: 1.0, Biome.GRASS: 1.0, Biome.FOREST: 1.0,
        Biome.MOUNTAIN: 0.5, Biome.DESERT: 1.0, Biome.SNOW: 1.0, Biome.VILLAGE: 1.0,
    },
}


def biome_permeability(from_biome: Biome, to_biome: Biome) -> float:
    """How softly ``from_biome`` fades into ``to_biome`` (0..1)."""
    if from_biome == to_biome:
        return 1.0
    value = BIOME_PERMEABILITY.get(from_biome, {}).get(to_biome)
    if value is not None:
        return value
    return BIOME_PERMEABILITY.get(to_biome, {}).get(from_biome, 0.5)


def edge_opacity(center: Biome, neighbor: Biome) -> float:
    """Opacity of the edge drawn between two biomes; 0 for identical ones."""
    if center == neighbor:
        return 0.0
    average = (biome_permeability(center, neighbor) + biome_permeability(neighbor, center)) / 2
    return 1.0 - average


def gradient_falloff(edge_width: float, distance: float) -> float:
    """Smoothstep fade from 1 at the edge to 0 at ``edge_width``."""
    if distance <= 0:
        return 1.0
    if distance >= edge_width:
        return 0.0
    t = distance / edge_width
    return 1.0 - t * t * (3.0 - 2.0 * t)
