"""Unit tests for wayfinder.pathfinding."""

from __future__ import annotations

import numpy as np
import pytest

from wayfinder.map_graph import MapGraph, build_map_graph
from wayfinder.pathfinding import dijkstra, shortest_path


def _graph(node_ids: list[str], edges: list[tuple[str, str, float]]) -> MapGraph:
    nodes = [{"id": node_id, "x": 0, "y": 0, "type": "NORMAL", "name": node_id} for node_id in node_ids]
    adjacency: dict[str, list[dict]] = {}
    for a, b, weight in edges:
        adjacency.setdefault(a, []).append({"targetNodeId": b, "weight": weight})
    return build_map_graph("m", nodes, adjacency)


def _floyd_warshall(n: int, edges: list[tuple[int, int, float]]) -> np.ndarray:
    dist = np.full((n, n), np.inf)
    np.fill_diagonal(dist, 0.0)
    for a, b, weight in edges:
        dist[a, b] = min(dist[a, b], weight)
    for k in range(n):
        dist = np.minimum(dist, dist[:, k, None] + dist[None, k, :])
    return dist


def test_shortest_path_prefers_cheaper_detour(floor1_map: dict) -> None:
    """A-B-C (2+3) beats the direct A-C edge (10)."""
    graph = build_map_graph("floor1", floor1_map["nodes"], floor1_map["adjacencyList"])
    result = shortest_path(graph, "A", "C")

    assert result.success is True
    assert result.node_ids == ("A", "B", "C")
    assert result.total_weight == pytest.approx(5.0)


def test_shortest_path_to_self_is_single_node(floor1_map: dict) -> None:
    """Every node reaches itself with a one-node path of weight 0."""
    graph = build_map_graph("floor1", floor1_map["nodes"], floor1_map["adjacencyList"])

    for node_id in graph.nodes:
        result = shortest_path(graph, node_id, node_id)
        assert result.success is True
        assert result.node_ids == (node_id,)
        assert result.total_weight == 0.0


def test_shortest_path_unknown_node_is_not_an_error(floor1_map: dict) -> None:
    """Absent ids are a normal no-route outcome."""
    graph = build_map_graph("floor1", floor1_map["nodes"], floor1_map["adjacencyList"])

    assert shortest_path(graph, "A", "Z").success is False
    assert shortest_path(graph, "Z", "A").success is False
    assert shortest_path(graph, "Z", "Z").success is False


def test_shortest_path_respects_edge_direction() -> None:
    """A one-way edge does not imply the reverse edge."""
    graph = _graph(["A", "B"], [("A", "B", 1.0)])

    assert shortest_path(graph, "A", "B").success is True
    result = shortest_path(graph, "B", "A")
    assert result.success is False
    assert result.node_ids == ()


def test_equal_cost_paths_break_ties_by_node_id() -> None:
    """With equal distances the lexicographically smaller node wins, regardless of edge order."""
    graph = _graph(
        ["S", "A", "B", "T"],
        [("S", "B", 1.0), ("S", "A", 1.0), ("B", "T", 1.0), ("A", "T", 1.0)],
    )

    assert shortest_path(graph, "S", "T").node_ids == ("S", "A", "T")


def test_dijkstra_accepts_composite_keys() -> None:
    """The generic search works on tuple keys too."""
    adjacency = {
        ("m1", "a"): [(("m1", "b"), 2.0), (("m2", "a"), 1.0)],
        ("m2", "a"): [(("m1", "b"), 0.5)],
    }
    path, distance = dijkstra(("m1", "a"), ("m1", "b"), lambda key: adjacency.get(key, []))

    assert path == [("m1", "a"), ("m2", "a"), ("m1", "b")]
    assert distance == pytest.approx(1.5)


def test_dijkstra_unreachable_returns_empty_path() -> None:
    """No route gives an empty path and infinite distance."""
    path, distance = dijkstra("a", "b", lambda key: [])

    assert path == []
    assert distance == float("inf")


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_shortest_path_matches_brute_force(seed: int) -> None:
    """Dijkstra totals agree with Floyd-Warshall on small random graphs."""
    rng = np.random.default_rng(seed)
    n = 7
    names = [f"n{i}" for i in range(n)]
    edges: list[tuple[int, int, float]] = []
    for a in range(n):
        for b in range(n):
            if a != b and rng.random() < 0.35:
                edges.append((a, b, float(rng.integers(0, 10))))

    graph = _graph(names, [(names[a], names[b], w) for a, b, w in edges])
    dist = _floyd_warshall(n, edges)
    weights = {(names[a], names[b]): w for a, b, w in edges}

    for a in range(n):
        for b in range(n):
            result = shortest_path(graph, names[a], names[b])
            if np.isinf(dist[a, b]):
                assert result.success is False
                continue

            assert result.success is True
            assert result.total_weight == pytest.approx(dist[a, b])
            assert result.node_ids[0] == names[a]
            assert result.node_ids[-1] == names[b]
            hops = zip(result.node_ids, result.node_ids[1:])
            assert sum(weights[hop] for hop in hops) == pytest.approx(result.total_weight)
