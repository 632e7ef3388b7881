"""Structure templates: village and dungeon footprints, transforms, placement rules."""

from collections.abc import Iterator
from dataclasses import dataclass

from ..biome_types import Biome, StructureKind
from ..exceptions import UnknownStructureError
from .seeding import RandomStream

EMPTY_CELL = "."

# Square character grids; any character other than EMPTY_CELL is built on
STRUCTURE_TEMPLATES: dict[StructureKind, tuple[str, ...]] = {
    StructureKind.VILLAGE: (
        ".....",
        ".VVV.",
        ".VVV.",
        ".VVV.",
        ".....",
    ),
    StructureKind.DUNGEON: (
        "..D..",
        ".DDD.",
        "DDDDD",
        ".DDD.",
        "..D..",
    ),
}

_VILLAGE_BIOMES = frozenset({Biome.GRASS, Biome.FOREST})


@dataclass(frozen=True)
class TemplatePlacement:
    """A template after random rotation and scaling."""

    template: tuple[str, ...]
    rotation: int
    scale: int

    @property
    def size(self) -> int:
        return len(self.template)


def rotate_template(template: tuple[str, ...], rotations: int = 0) -> tuple[str, ...]:
    """Rotate a square template 90 degrees clockwise ``rotations`` times."""
    result = tuple(template)
    for _ in range(rotations % 4):
        size = len(result)
        result = tuple(
            "".join(result[size - x - 1][y] for x in range(size)) for y in range(size)
        )
    return result


def scale_template(template: tuple[str, ...], scale: int) -> tuple[str, ...]:
    """Expand every cell into a scale x scale block."""
    if scale == 1:
        return tuple(template)
    rows: list[str] = []
    for row in template:
        wide = "".join(cell * scale for cell in row)
        rows.extend([wide] * scale)
    return tuple(rows)


def randomized_template(kind: StructureKind, seed: int) -> TemplatePlacement:
    """Pick a rotation in 0..3 and scale in 1..2 for a structure.

    Args:
        kind: Structure kind.
        seed: Seed of the chunk's template stream.

    Raises:
        UnknownStructureError: If no template exists for ``kind``.
    """
    base = STRUCTURE_TEMPLATES.get(kind)
    if base is None:
        raise UnknownStructureError(f"No template for structure {kind!r}")

    stream = RandomStream(seed)
    rotation = stream.next_int(0, 4)
    scale = stream.next_int(1, 3)

    template = scale_template(rotate_template(base, rotation), scale)
    return TemplatePlacement(template=template, rotation=rotation, scale=scale)


def template_cells(template: tuple[str, ...]) -> Iterator[tuple[int, int]]:
    """Yield (tx, ty) of every non-empty template cell."""
    for ty, row in enumerate(template):
        for tx, cell in enumerate(row):
            if cell != EMPTY_CELL:
                yield tx, ty


def can_place(kind: StructureKind, biome: Biome, is_water: bool) -> bool:
    """Whether a structure cell may be built on a tile of this biome."""
    if is_water:
        return False
    if kind == StructureKind.VILLAGE:
        return biome in _VILLAGE_BIOMES
    if kind == StructureKind.DUNGEON:
        return biome != Biome.WATER
    return False
