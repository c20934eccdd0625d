"""Nearest location lookup by category across all maps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from wayfinder.map_graph import MapGraph, build_map_graphs
from wayfinder.models import Node
from wayfinder.routing import PathResult, route_graphs


@dataclass(frozen=True, slots=True)
class NearestMatch:
    """Closest node of the requested category and the route leading to it."""

    map_id: str
    node_id: str
    name: str
    result: PathResult | None = None


def _candidates(graphs: Mapping[str, MapGraph], category: str) -> list[tuple[str, Node]]:
    return [
        (map_id, node)
        for map_id in sorted(graphs)
        for node in graphs[map_id].nodes.values()
        if node.category == category
    ]


def find_nearest(
    maps: Mapping[str, Mapping[str, Any]],
    category: str,
    source_map_id: str | None = None,
    source_node_id: str | None = None,
) -> NearestMatch | None:
    """Find the node of `category` cheapest to reach from the start point.

    Without a start point, or with a single candidate, the first candidate is
    returned without routing. Candidates are ranked by route weight, then
    node count, then map and node id. Unreachable candidates are skipped.
    """
    graphs, _ = build_map_graphs(maps)
    candidates = _candidates(graphs, category)
    if not candidates:
        return None

    if source_map_id is None or source_node_id is None or len(candidates) == 1:
        map_id, node = candidates[0]
        return NearestMatch(map_id=map_id, node_id=node.id, name=node.name)

    best: tuple[tuple[float, int, str, str], NearestMatch] | None = None
    for map_id, node in candidates:
        result = route_graphs(graphs, source_map_id, source_node_id, map_id, node.id)
        if not result.success:
            continue
        rank = (result.total_weight, result.total_nodes, map_id, node.id)
        if best is None or rank < best[0]:
            best = (rank, NearestMatch(map_id=map_id, node_id=node.id, name=node.name, result=result))

    return best[1] if best is not None else None
