"""Cross-map routing between any two `(map_id, node_id)` points.

Same-map queries go straight to the single-map router. Cross-map queries run
Dijkstra over the stitched global graph and the resulting waypoints are split
into contiguous per-map segments for rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import groupby
from typing import Any, Iterable, Mapping

from wayfinder.global_graph import GATEWAY_TRANSITION_WEIGHT, check_transition_weight, compose
from wayfinder.map_graph import MapGraph, build_map_graphs
from wayfinder.models import Node, NodeKey, NodeType
from wayfinder.pathfinding import dijkstra, shortest_path

logger = logging.getLogger(__name__)

NO_ROUTE = "no_route"
UNKNOWN_ENDPOINT = "unknown_endpoint"


@dataclass(frozen=True, slots=True)
class Waypoint:
    """One stop on a computed route, annotated with its owning map."""

    map_id: str
    node_id: str
    x: float
    y: float
    type: NodeType
    name: str

    @property
    def key(self) -> NodeKey:
        return self.map_id, self.node_id


@dataclass(frozen=True, slots=True)
class MapSegment:
    """Maximal run of consecutive waypoints on one map."""

    map_id: str
    waypoints: tuple[Waypoint, ...]


@dataclass(frozen=True, slots=True)
class PathResult:
    """Immutable routing answer returned to callers."""

    success: bool
    waypoints: tuple[Waypoint, ...] = ()
    total_weight: float = 0.0
    total_nodes: int = 0
    segments: tuple[MapSegment, ...] = field(default=())
    reason: str | None = None

    @classmethod
    def failure(cls, reason: str) -> "PathResult":
        return cls(success=False, reason=reason)

    @property
    def map_ids(self) -> list[str]:
        return [segment.map_id for segment in self.segments]


def _waypoint(map_id: str, node: Node) -> Waypoint:
    return Waypoint(map_id=map_id, node_id=node.id, x=node.x, y=node.y, type=node.type, name=node.name)


def partition_segments(waypoints: Iterable[Waypoint]) -> tuple[MapSegment, ...]:
    """Group adjacent waypoints sharing a map id into segments, preserving order."""
    return tuple(
        MapSegment(map_id=map_id, waypoints=tuple(run))
        for map_id, run in groupby(waypoints, key=lambda wp: wp.map_id)
    )


def _result(waypoints: list[Waypoint], total_weight: float) -> PathResult:
    return PathResult(
        success=True,
        waypoints=tuple(waypoints),
        total_weight=float(total_weight),
        total_nodes=len(waypoints),
        segments=partition_segments(waypoints),
    )


def route_graphs(
    graphs: Mapping[str, MapGraph],
    source_map_id: str,
    source_node_id: str,
    dest_map_id: str,
    dest_node_id: str,
    transition_weight: float = GATEWAY_TRANSITION_WEIGHT,
) -> PathResult:
    """Route over already built map graphs. See `route`."""
    check_transition_weight(transition_weight)

    source_graph = graphs.get(source_map_id)
    dest_graph = graphs.get(dest_map_id)
    if (
        source_graph is None
        or dest_graph is None
        or source_node_id not in source_graph
        or dest_node_id not in dest_graph
    ):
        logger.info(
            "Unknown route endpoint %s/%s -> %s/%s",
            source_map_id,
            source_node_id,
            dest_map_id,
            dest_node_id,
        )
        return PathResult.failure(UNKNOWN_ENDPOINT)

    if source_map_id == dest_map_id:
        single = shortest_path(source_graph, source_node_id, dest_node_id)
        if not single.success:
            return PathResult.failure(NO_ROUTE)
        waypoints = [_waypoint(source_map_id, source_graph.nodes[node_id]) for node_id in single.node_ids]
        return _result(waypoints, single.total_weight)

    global_graph = compose(graphs, transition_weight=transition_weight)
    path, distance = dijkstra(
        (source_map_id, source_node_id),
        (dest_map_id, dest_node_id),
        global_graph.weighted_neighbors,
    )
    if not path:
        logger.info(
            "No route between %s/%s and %s/%s",
            source_map_id,
            source_node_id,
            dest_map_id,
            dest_node_id,
        )
        return PathResult.failure(NO_ROUTE)

    waypoints = [_waypoint(map_id, global_graph.nodes[(map_id, node_id)]) for map_id, node_id in path]
    return _result(waypoints, distance)


def route(
    maps: Mapping[str, Mapping[str, Any]],
    source_map_id: str,
    source_node_id: str,
    dest_map_id: str,
    dest_node_id: str,
    transition_weight: float = GATEWAY_TRANSITION_WEIGHT,
) -> PathResult:
    """Compute the cheapest route between two points, possibly on different maps.

    Args:
        maps: Map id -> raw map document (`nodes`, `adjacencyList`, ...).
        source_map_id: Map holding the start node.
        source_node_id: Start node id.
        dest_map_id: Map holding the destination node.
        dest_node_id: Destination node id.
        transition_weight: Cost of one gateway hop.

    Returns:
        PathResult. `success` is False when an endpoint is unknown or no
        route connects the endpoints; nothing is raised for those cases.

    Raises:
        ValueError: If `transition_weight` is negative or not finite.
    """
    graphs, _ = build_map_graphs(maps)
    return route_graphs(
        graphs,
        source_map_id,
        source_node_id,
        dest_map_id,
        dest_node_id,
        transition_weight=transition_weight,
    )
