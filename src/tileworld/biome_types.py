"""Biome, structure and scatter object kinds with their static properties."""

from enum import Enum


class Biome(str, Enum):
    """Closed set of biomes a tile can carry."""

    WATER = "water"
    SAND = "sand"
    GRASS = "grass"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    SNOW = "snow"
    DESERT = "desert"
    VILLAGE = "village"
    DUNGEON = "dungeon"

    @property
    def color(self) -> str:
        """Hex display color used by renderers."""
        return _BIOME_COLORS[self]

    @property
    def description(self) -> str:
        """Human readable name."""
        return _BIOME_DESCRIPTIONS[self]


class StructureKind(str, Enum):
    """Structures that can be stamped onto a chunk."""

    VILLAGE = "village"
    DUNGEON = "dungeon"

    @property
    def biome(self) -> Biome:
        """Biome a tile takes once this structure is placed on it."""
        return Biome(self.value)


class ObjectKind(str, Enum):
    """Decorative objects scattered over open terrain."""

    TREE = "tree"
    ROCK = "rock"
    FLOWER = "flower"

    @property
    def color(self) -> str:
        return _OBJECT_PROPERTIES[self][0]

    @property
    def size_ratio(self) -> float:
        """Object size as a fraction of the tile size."""
        return _OBJECT_PROPERTIES[self][1]

    @property
    def biomes(self) -> frozenset[Biome]:
        """Biomes this object may appear in."""
        return _OBJECT_PROPERTIES[self][2]


_BIOME_COLORS: dict[Biome, str] = {
    Biome.WATER: "#3498db",
    Biome.SAND: "#f1c40f",
    Biome.GRASS: "#27ae60",
    Biome.FOREST: "#2ecc71",
    Biome.MOUNTAIN: "#95a5a6",
    Biome.SNOW: "#ecf0f1",
    Biome.DESERT: "#d4a574",
    Biome.VILLAGE: "#c97c3a",
    Biome.DUNGEON: "#555555",
}

_BIOME_DESCRIPTIONS: dict[Biome, str] = {
    Biome.WATER: "Water",
    Biome.SAND: "Beach/Sand",
    Biome.GRASS: "Grassland",
    Biome.FOREST: "Forest",
    Biome.MOUNTAIN: "Mountain",
    Biome.SNOW: "Snow Peak",
    Biome.DESERT: "Desert",
    Biome.VILLAGE: "Village",
    Biome.DUNGEON: "Dungeon",
}

# color, size ratio, allowed biomes
_OBJECT_PROPERTIES: dict[ObjectKind, tuple[str, float, frozenset[Biome]]] = {
    ObjectKind.TREE: ("#145a32", 0.5, frozenset({Biome.FOREST, Biome.GRASS})),
    ObjectKind.ROCK: (
        "#7f8c8d",
        0.33,
        frozenset({Biome.MOUNTAIN, Biome.GRASS, Biome.DESERT}),
    ),
    ObjectKind.FLOWER: ("#e74c3c", 0.25, frozenset({Biome.GRASS, Biome.FOREST})),
}
