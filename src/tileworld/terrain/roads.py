"""Village road networks: a random tree of intersections rasterized onto tiles."""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from ..tile import Tile
from .config import RoadConfig
from .seeding import RandomStream


@dataclass(frozen=True)
class RoadNode:
    """An intersection at integer tile coordinates."""

    x: int
    y: int

    def distance_to(self, other: "RoadNode") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class RoadEdge:
    """A straight road between two nodes, referenced by index in the graph."""

    start: int
    end: int


@dataclass
class RoadGraph:
    """Nodes and the edges connecting them. The first node is the center."""

    center_x: int
    center_y: int
    nodes: list[RoadNode] = field(default_factory=list)
    edges: list[RoadEdge] = field(default_factory=list)

    def endpoints(self, edge: RoadEdge) -> tuple[RoadNode, RoadNode]:
        return self.nodes[edge.start], self.nodes[edge.end]

    def edge_length(self, edge: RoadEdge) -> float:
        start, end = self.endpoints(edge)
        return start.distance_to(end)

    def bounds(self) -> tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y) over the center and all nodes."""
        xs = [self.center_x] + [node.x for node in self.nodes]
        ys = [self.center_y] + [node.y for node in self.nodes]
        return min(xs), min(ys), max(xs), max(ys)


def build_road_graph(
    center_x: int,
    center_y: int,
    stream: RandomStream,
    config: RoadConfig | None = None,
) -> RoadGraph:
    """Grow a random road tree around a center point.

    Each new node lies at a random angle and radius from the center and is
    linked to one node chosen uniformly among those that already exist, so
    the graph is always a tree: N nodes and N - 1 edges, all connected.

    Args:
        center_x: Center tile x.
        center_y: Center tile y.
        stream: Random stream that drives every draw.
        config: Node count and radius ranges.

    Returns:
        The generated graph.
    """
    config = config or RoadConfig()
    graph = RoadGraph(center_x=center_x, center_y=center_y)
    graph.nodes.append(RoadNode(math.floor(center_x), math.floor(center_y)))

    node_span = config.max_nodes - config.min_nodes + 1
    node_count = config.min_nodes + math.floor(stream.next() * node_span)
    radius_span = config.max_radius - config.min_radius

    for _ in range(1, node_count):
        angle = stream.next_angle()
        radius = config.min_radius + stream.next() * radius_span

        node = RoadNode(
            math.floor(center_x + math.cos(angle) * radius),
            math.floor(center_y + math.sin(angle) * radius),
        )
        # Parent is one of the nodes placed before this one
        parent = math.floor(stream.next() * len(graph.nodes))
        graph.nodes.append(node)
        graph.edges.append(RoadEdge(start=parent, end=len(graph.nodes) - 1))

    return graph


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield the integer points of a line, both endpoints included."""
    x0, y0, x1, y1 = math.floor(x0), math.floor(y0), math.floor(x1), math.floor(y1)
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = err * 2
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def rasterize_roads(
    tiles: Sequence[Sequence[Tile]],
    graph: RoadGraph,
    road_width: int = 1,
    road_type: str = "road",
) -> int:
    """Tag tiles along every edge as road.

    Edges are walked in list order. Every tile within ``road_width`` of a
    line point gets ``road_type`` unless it already carries a road tag;
    points outside the grid are skipped.

    Args:
        tiles: Grid indexed ``tiles[y][x]`` in the graph's coordinate space.
        graph: Road graph to draw.
        road_width: Half-width of the road in tiles.
        road_type: Tag written to road tiles.

    Returns:
        Number of tiles newly tagged.
    """
    height = len(tiles)
    width = len(tiles[0]) if height else 0
    tagged = 0

    for edge in graph.edges:
        start, end = graph.endpoints(edge)
        for px, py in bresenham_line(start.x, start.y, end.x, end.y):
            for dy in range(-road_width, road_width + 1):
                ty = py + dy
                if not 0 <= ty < height:
                    continue
                for dx in range(-road_width, road_width + 1):
                    tx = px + dx
                    if not 0 <= tx < width:
                        continue
                    tile = tiles[ty][tx]
                    if tile.road is None:
                        tile.road = road_type
                        tagged += 1
    return tagged
