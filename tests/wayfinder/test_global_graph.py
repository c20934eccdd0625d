"""Unit tests for wayfinder.global_graph."""

from __future__ import annotations

import pytest

from wayfinder.errors import UNRESOLVED_GATEWAY
from wayfinder.global_graph import GATEWAY, GATEWAY_TRANSITION_WEIGHT, INTRA, compose
from wayfinder.map_graph import build_map_graphs
from wayfinder.pathfinding import dijkstra
from wayfinder.seed import demo_maps


def _demo_graphs() -> dict:
    graphs, _ = build_map_graphs({doc["id"]: doc for doc in demo_maps()})
    return graphs


def test_compose_uses_composite_keys_and_copies_intra_edges(campus_maps: dict) -> None:
    """Every node is keyed by (map_id, node_id) and intra weights are unchanged."""
    graphs, _ = build_map_graphs(campus_maps)
    global_graph = compose(graphs)

    assert set(global_graph.nodes) == {
        ("campus", "gate"),
        ("campus", "entrance_a"),
        ("building_a", "lobby"),
        ("building_a", "room_101"),
    }
    assert (("building_a", "lobby"), ("building_a", "room_101"), 5.0, INTRA) in global_graph.edges()


def test_compose_adds_one_directed_gateway_edge(campus_maps: dict) -> None:
    """A resolved gateway adds a single edge toward its target only."""
    global_graph = compose(build_map_graphs(campus_maps)[0])

    assert global_graph.gateway_edges() == [(("campus", "entrance_a"), ("building_a", "lobby"))]
    gateway_edge = global_graph.neighbors(("campus", "entrance_a"))[-1]
    assert gateway_edge.kind == GATEWAY
    assert gateway_edge.weight == GATEWAY_TRANSITION_WEIGHT
    assert all(edge.kind == INTRA for edge in global_graph.neighbors(("building_a", "lobby")))


def test_unresolved_gateway_contributes_no_edge(campus_maps: dict) -> None:
    """A gateway pointing at a missing node is excluded and reported."""
    campus_maps["campus"]["nodes"][1]["gatewayConfig"]["targetNodeId"] = "basement"
    global_graph = compose(build_map_graphs(campus_maps)[0])

    assert global_graph.gateway_edges() == []
    assert [issue.kind for issue in global_graph.issues] == [UNRESOLVED_GATEWAY]
    path, _ = dijkstra(
        ("campus", "gate"),
        ("building_a", "lobby"),
        global_graph.weighted_neighbors,
    )
    assert path == []


def test_compose_is_deterministic() -> None:
    """Repeated composition yields the same edges and the same shortest paths."""
    graphs = _demo_graphs()
    first = compose(graphs)
    second = compose(graphs)

    assert first.edges() == second.edges()
    assert first == second

    source, goal = ("campus_main", "main_gate"), ("block_a_floor1", "library")
    assert dijkstra(source, goal, first.weighted_neighbors) == dijkstra(source, goal, second.weighted_neighbors)


def test_compose_order_does_not_depend_on_input_order() -> None:
    """Edge insertion order is sorted by map id then node id."""
    graphs = _demo_graphs()
    reversed_graphs = {map_id: graphs[map_id] for map_id in reversed(list(graphs))}

    forward = compose(graphs)
    backward = compose(reversed_graphs)

    assert forward.edges() == backward.edges()
    assert list(forward.adjacency) == sorted(forward.adjacency)


def test_compose_does_not_mutate_inputs() -> None:
    """Composition is a pure function of its input graphs."""
    graphs = _demo_graphs()
    before = {map_id: (dict(g.nodes), dict(g.adjacency)) for map_id, g in graphs.items()}

    compose(graphs)

    assert {map_id: (dict(g.nodes), dict(g.adjacency)) for map_id, g in graphs.items()} == before


@pytest.mark.parametrize("weight", [-1.0, float("nan"), float("inf")])
def test_compose_rejects_unusable_transition_weight(weight: float) -> None:
    """Gateway hops need a finite, non-negative cost."""
    with pytest.raises(ValueError, match="transition_weight"):
        compose(_demo_graphs(), transition_weight=weight)
