"""Tests for village road networks."""

import math

import pytest

from tileworld.terrain.config import RoadConfig
from tileworld.terrain.roads import (
    RoadEdge,
    RoadGraph,
    RoadNode,
    bresenham_line,
    build_road_graph,
    rasterize_roads,
)
from tileworld.terrain.seeding import RandomStream
from tileworld.tile import Tile


def _grid(size: int) -> list[list[Tile]]:
    return [[Tile(world_x=x, world_y=y) for x in range(size)] for y in range(size)]


def _connected(graph: RoadGraph) -> bool:
    adjacency: dict[int, set[int]] = {i: set() for i in range(len(graph.nodes))}
    for edge in graph.edges:
        adjacency[edge.start].add(edge.end)
        adjacency[edge.end].add(edge.start)
    seen = {0}
    frontier = [0]
    while frontier:
        node = frontier.pop()
        for other in adjacency[node] - seen:
            seen.add(other)
            frontier.append(other)
    return len(seen) == len(graph.nodes)


class TestBuildRoadGraph:
    """Tests for road tree generation."""

    @pytest.mark.parametrize("seed", range(25))
    def test_graph_is_tree(self, seed: int) -> None:
        """N nodes, N - 1 edges, all connected, no self loops."""
        graph = build_road_graph(16, 16, RandomStream(seed))

        assert 5 <= len(graph.nodes) <= 10
        assert len(graph.edges) == len(graph.nodes) - 1
        assert all(edge.start != edge.end for edge in graph.edges)
        assert _connected(graph)

    @pytest.mark.parametrize("seed", range(10))
    def test_parent_precedes_child(self, seed: int) -> None:
        graph = build_road_graph(0, 0, RandomStream(seed))
        for edge in graph.edges:
            assert edge.start < edge.end

    def test_first_node_is_center(self) -> None:
        graph = build_road_graph(16, 12, RandomStream(3))
        assert graph.nodes[0] == RoadNode(16, 12)

    @pytest.mark.parametrize("seed", range(10))
    def test_nodes_within_radius(self, seed: int) -> None:
        config = RoadConfig()
        graph = build_road_graph(16, 16, RandomStream(seed), config)
        center = graph.nodes[0]
        for node in graph.nodes[1:]:
            # floor() can pull a node up to one tile closer or farther per axis
            distance = node.distance_to(center)
            assert config.min_radius - 2 <= distance <= config.max_radius + 2

    def test_deterministic(self) -> None:
        a = build_road_graph(16, 16, RandomStream(99))
        b = build_road_graph(16, 16, RandomStream(99))
        assert a == b

    def test_fixed_node_count(self) -> None:
        config = RoadConfig(min_nodes=3, max_nodes=3)
        graph = build_road_graph(0, 0, RandomStream(1), config)
        assert len(graph.nodes) == 3

    def test_single_node_has_no_edges(self) -> None:
        config = RoadConfig(min_nodes=1, max_nodes=1)
        graph = build_road_graph(0, 0, RandomStream(1), config)
        assert graph.nodes == [RoadNode(0, 0)]
        assert graph.edges == []

    def test_bounds_include_center(self) -> None:
        graph = RoadGraph(center_x=5, center_y=5, nodes=[RoadNode(2, 9)])
        assert graph.bounds() == (2, 5, 5, 9)


class TestBresenham:
    """Tests for line rasterization."""

    def test_horizontal(self) -> None:
        assert list(bresenham_line(0, 0, 3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]

    def test_vertical_reversed(self) -> None:
        assert list(bresenham_line(0, 2, 0, 0)) == [(0, 2), (0, 1), (0, 0)]

    def test_diagonal(self) -> None:
        assert list(bresenham_line(0, 0, 2, 2)) == [(0, 0), (1, 1), (2, 2)]

    def test_single_point(self) -> None:
        assert list(bresenham_line(4, 4, 4, 4)) == [(4, 4)]

    def test_endpoints_included(self) -> None:
        points = list(bresenham_line(-3, 1, 5, -4))
        assert points[0] == (-3, 1)
        assert points[-1] == (5, -4)
        # Each step moves at most one tile per axis
        for (ax, ay), (bx, by) in zip(points, points[1:]):
            assert max(abs(ax - bx), abs(ay - by)) == 1


class TestRasterizeRoads:
    """Tests for tagging road tiles."""

    def test_width_zero_tags_line_only(self) -> None:
        tiles = _grid(8)
        graph = RoadGraph(
            center_x=0,
            center_y=0,
            nodes=[RoadNode(1, 1), RoadNode(5, 1)],
            edges=[RoadEdge(0, 1)],
        )

        tagged = rasterize_roads(tiles, graph, road_width=0)

        assert tagged == 5
        roads = {(t.world_x, t.world_y) for row in tiles for t in row if t.road}
        assert roads == {(x, 1) for x in range(1, 6)}

    def test_width_one_is_three_wide(self) -> None:
        tiles = _grid(8)
        graph = RoadGraph(
            center_x=0,
            center_y=0,
            nodes=[RoadNode(1, 3), RoadNode(5, 3)],
            edges=[RoadEdge(0, 1)],
        )

        assert rasterize_roads(tiles, graph, road_width=1) == 7 * 3

    def test_idempotent(self) -> None:
        """Rasterizing twice tags nothing new."""
        tiles = _grid(32)
        graph = build_road_graph(16, 16, RandomStream(7))

        first = rasterize_roads(tiles, graph)
        snapshot = [[t.road for t in row] for row in tiles]
        second = rasterize_roads(tiles, graph)

        assert first > 0
        assert second == 0
        assert [[t.road for t in row] for row in tiles] == snapshot

    def test_existing_tag_kept(self) -> None:
        """The first writer of a road tag wins."""
        tiles = _grid(8)
        tiles[1][2].road = "path"
        graph = RoadGraph(
            center_x=0,
            center_y=0,
            nodes=[RoadNode(0, 1), RoadNode(7, 1)],
            edges=[RoadEdge(0, 1)],
        )

        rasterize_roads(tiles, graph, road_width=0, road_type="road")

        assert tiles[1][2].road == "path"
        assert tiles[1][3].road == "road"

    def test_out_of_bounds_skipped(self) -> None:
        tiles = _grid(4)
        graph = RoadGraph(
            center_x=0,
            center_y=0,
            nodes=[RoadNode(-10, 2), RoadNode(20, 2)],
            edges=[RoadEdge(0, 1)],
        )

        assert rasterize_roads(tiles, graph, road_width=0) == 4

    def test_edge_length(self) -> None:
        graph = RoadGraph(
            center_x=0,
            center_y=0,
            nodes=[RoadNode(0, 0), RoadNode(3, 4)],
            edges=[RoadEdge(0, 1)],
        )
        assert math.isclose(graph.edge_length(graph.edges[0]), 5.0)
