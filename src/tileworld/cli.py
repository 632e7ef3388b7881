"""Command-line preview of generated worlds."""

import argparse
import logging
import sys
from collections import Counter

import structlog

from .biome_types import Biome, ObjectKind
from .tile import Chunk

# One character per biome in the ASCII map
BIOME_GLYPHS: dict[Biome, str] = {
    Biome.WATER: "~",
    Biome.SAND: ":",
    Biome.GRASS: ".",
    Biome.FOREST: "T",
    Biome.MOUNTAIN: "^",
    Biome.SNOW: "*",
    Biome.DESERT: "d",
    Biome.VILLAGE: "V",
    Biome.DUNGEON: "D",
}

ROAD_GLYPH = "#"


def render_ascii(
    chunks: dict[tuple[int, int], Chunk],
    min_cx: int,
    min_cy: int,
    max_cx: int,
    max_cy: int,
    step: int = 1,
) -> list[str]:
    """Render chunks as text rows, sampling every ``step`` tiles.

    Roads are drawn over the biome glyph.
    """
    lines: list[str] = []
    for cy in range(min_cy, max_cy + 1):
        size = chunks[(min_cx, cy)].size
        for ly in range(0, size, step):
            line: list[str] = []
            for cx in range(min_cx, max_cx + 1):
                chunk = chunks[(cx, cy)]
                for lx in range(0, size, step):
                    tile = chunk.tile_at(lx, ly)
                    if tile.road is not None:
                        line.append(ROAD_GLYPH)
                    else:
                        line.append(BIOME_GLYPHS[tile.biome])
            lines.append("".join(line))
    return lines


def count_biomes(chunks: dict[tuple[int, int], Chunk]) -> Counter[Biome]:
    """Tiles per biome over all chunks."""
    counts: Counter[Biome] = Counter()
    for chunk in chunks.values():
        counts.update(tile.biome for tile in chunk.iter_tiles())
    return counts


def count_objects(chunks: dict[tuple[int, int], Chunk]) -> Counter[ObjectKind]:
    counts: Counter[ObjectKind] = Counter()
    for chunk in chunks.values():
        counts.update(
            tile.object_kind
            for tile in chunk.iter_tiles()
            if tile.object_kind is not None
        )
    return counts


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the world preview."""
    parser = argparse.ArgumentParser(
        description="Generate chunks around a center and print an ASCII biome map"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Config name or path (e.g. 'dense_structures' or 'configs/my.toml')",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="World seed (overrides config)"
    )
    parser.add_argument("--cx", type=int, default=0, help="Center chunk x (default: 0)")
    parser.add_argument("--cy", type=int, default=0, help="Center chunk y (default: 0)")
    parser.add_argument(
        "--radius",
        "-r",
        type=int,
        default=1,
        help="Chunks to include around the center (default: 1)",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=2,
        help="Print every Nth tile of each chunk (default: 2)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from .chunks import ChunkCache, ChunkRange
    from .config import find_config, load_config
    from .exceptions import TileWorldError
    from .terrain.config import WorldGenConfig
    from .terrain.noise import NoiseField

    try:
        if args.config:
            config = load_config(find_config(args.config))
        else:
            config = WorldGenConfig()
    except (FileNotFoundError, TileWorldError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.radius < 0 or args.step < 1:
        print("error: --radius must be >= 0 and --step >= 1", file=sys.stderr)
        return 1

    seed = args.seed if args.seed is not None else config.seed
    noise = NoiseField.seeded(seed)
    cache = ChunkCache(config)

    chunk_range = ChunkRange(
        min_cx=args.cx - args.radius,
        min_cy=args.cy - args.radius,
        max_cx=args.cx + args.radius,
        max_cy=args.cy + args.radius,
    )
    cache.load_range(chunk_range, seed, noise)
    chunks = dict(cache.get_active_chunks())

    print(
        f"Seed {seed}, chunks ({chunk_range.min_cx}, {chunk_range.min_cy}) "
        f"to ({chunk_range.max_cx}, {chunk_range.max_cy})"
    )
    print()
    for line in render_ascii(
        chunks,
        chunk_range.min_cx,
        chunk_range.min_cy,
        chunk_range.max_cx,
        chunk_range.max_cy,
        args.step,
    ):
        print(line)
    print()

    total = sum(len(chunk.tiles) * chunk.size for chunk in chunks.values())
    for biome, count in count_biomes(chunks).most_common():
        glyph = BIOME_GLYPHS[biome]
        print(f"  {glyph} {biome.description:<12} {count:>7} ({count / total:6.1%})")

    objects = count_objects(chunks)
    if objects:
        print()
        for kind, count in objects.most_common():
            print(f"  {kind.value:<12} {count:>7}")

    structures = cache.registry.records()
    if structures:
        print()
        for record in sorted(structures, key=lambda r: (r.origin_cy, r.origin_cx)):
            print(f"  {record.kind.value} at chunk {record.origin}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
