"""Dijkstra shortest paths over weighted node graphs.

Purpose:
- Provide one deterministic Dijkstra used for single-map and stitched multi-map graphs.
- Answer single-map shortest path queries without raising on unknown or unreachable nodes.

Usage example:
    >>> from wayfinder.map_graph import build_map_graph
    >>> from wayfinder.pathfinding import shortest_path
    >>> graph = build_map_graph("floor1", nodes, adjacency)
    >>> shortest_path(graph, "A", "C").node_ids
    ('A', 'B', 'C')
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, TypeVar

from wayfinder.map_graph import MapGraph

K = TypeVar("K", bound=Hashable)

NeighborFn = Callable[[K], Iterable[tuple[K, float]]]


@dataclass(frozen=True, slots=True)
class ShortestPath:
    """Single-map shortest path result."""

    success: bool
    node_ids: tuple[str, ...] = ()
    total_weight: float = 0.0


def dijkstra(source: K, goal: K, neighbors: NeighborFn) -> tuple[list[K], float]:
    """Compute the cheapest path from `source` to `goal`.

    Nodes with equal tentative distance are expanded in ascending key order, so
    results are reproducible for identical graphs.

    Args:
        source: Start node key.
        goal: Goal node key.
        neighbors: Callable returning `(neighbor_key, edge_weight)` pairs.

    Returns:
        Tuple `(path, distance)`. `([], inf)` if goal is unreachable.
    """
    if source == goal:
        return [source], 0.0

    open_heap: list[tuple[float, K]] = [(0.0, source)]
    came_from: dict[K, K] = {}
    g_score: dict[K, float] = {source: 0.0}
    closed: set[K] = set()

    while open_heap:
        dist, current = heapq.heappop(open_heap)

        if current in closed:
            continue

        if current == goal:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path, dist

        closed.add(current)

        for neighbor, weight in neighbors(current):
            if neighbor in closed:
                continue

            tentative = dist + weight
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(open_heap, (tentative, neighbor))

    return [], float("inf")


def shortest_path(graph: MapGraph, source_id: str, dest_id: str) -> ShortestPath:
    """Shortest weighted path between two nodes of one map.

    Unknown ids and unreachable destinations are a normal "no route" outcome
    and yield `ShortestPath(success=False)`.
    """
    if source_id not in graph or dest_id not in graph:
        return ShortestPath(success=False)

    path, distance = dijkstra(
        source_id,
        dest_id,
        lambda node_id: ((edge.target_node_id, edge.weight) for edge in graph.neighbors(node_id)),
    )
    if not path:
        return ShortestPath(success=False)

    return ShortestPath(success=True, node_ids=tuple(path), total_weight=float(distance))
