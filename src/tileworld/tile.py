"""Tiles and chunks produced by world generation."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from .biome_types import Biome, ObjectKind, StructureKind


@dataclass(frozen=True)
class TileVariant:
    """Rendering variant chosen from a tile's neighbor mask."""

    id: str
    rotation: int = 0  # quarter turns clockwise
    priority: int = 1


@dataclass
class Tile:
    """One world tile.

    Only mutated while its chunk is being generated.
    """

    world_x: int
    world_y: int
    elevation: float = 0.5
    temperature: float = 0.5
    humidity: float = 0.5
    biome: Biome = Biome.GRASS
    structure: StructureKind | None = None
    object_kind: ObjectKind | None = None
    road: str | None = None
    mask: int | None = None
    variant: TileVariant | None = None
    # Direction short name -> neighbor biome, for edge blending in renderers
    neighbor_biomes: dict[str, Biome] = field(default_factory=dict)

    @property
    def walkable(self) -> bool:
        """Whether entities can stand on this tile."""
        return self.biome != Biome.WATER and self.structure is None

    @property
    def solid(self) -> bool:
        """Whether this tile is blocked by a structure or object."""
        return self.structure is not None or self.object_kind is not None


@dataclass
class Chunk:
    """A size x size block of tiles, indexed ``tiles[local_y][local_x]``."""

    chunk_x: int
    chunk_y: int
    size: int
    tiles: list[list[Tile]]
    structure: StructureKind | None = None
    structure_origin: tuple[int, int] | None = None

    def tile_at(self, local_x: int, local_y: int) -> Tile:
        return self.tiles[local_y][local_x]

    def iter_tiles(self) -> Iterator[Tile]:
        """All tiles in row-major order."""
        for row in self.tiles:
            yield from row
