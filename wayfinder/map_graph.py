"""Validated in-memory graph for a single map.

Purpose:
- Turn a raw map document (`nodes` + `adjacencyList`) into typed nodes and edges.
- Drop malformed edges and gateway metadata with a logged warning instead of failing.
- Reject maps whose node ids are not unique or whose shape is unusable.

Usage example:
    >>> graph = build_map_graph("floor1", raw_nodes, raw_adjacency)
    >>> graph.neighbors("A")
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from wayfinder.errors import (
    DANGLING_EDGE,
    INVALID_GRAPH,
    INVALID_WEIGHT,
    STRAY_GATEWAY_CONFIG,
    UNKNOWN_NODE_TYPE,
    UNRESOLVED_GATEWAY,
    GraphIssue,
    InvalidGraph,
)
from wayfinder.models import Edge, GatewayConfig, Node, NodeType

logger = logging.getLogger(__name__)

RawNode = Mapping[str, Any]
RawEdge = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class MapGraph:
    """Nodes and directed weighted adjacency of one map."""

    map_id: str
    nodes: dict[str, Node]
    adjacency: dict[str, tuple[Edge, ...]]
    name: str = ""
    issues: tuple[GraphIssue, ...] = field(default=())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def node(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def neighbors(self, node_id: str) -> tuple[Edge, ...]:
        """Return outgoing edges of `node_id` (empty when it has none)."""
        return self.adjacency.get(node_id, ())

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())

    def gateways(self) -> list[Node]:
        return [node for node in self.nodes.values() if node.is_gateway]


def _record(issues: list[GraphIssue], issue: GraphIssue) -> None:
    logger.warning("%s in map '%s': %s", issue.kind, issue.map_id, issue.message)
    issues.append(issue)


def _parse_gateway(raw: Any) -> GatewayConfig | None:
    if not isinstance(raw, Mapping):
        return None
    target_map = raw.get("targetMapId")
    target_node = raw.get("targetNodeId")
    if not target_map or not target_node:
        return None
    return GatewayConfig(target_map_id=str(target_map), target_node_id=str(target_node))


def _parse_node(map_id: str, raw: RawNode, issues: list[GraphIssue]) -> Node:
    node_id = str(raw["id"])

    raw_type = str(raw.get("type", NodeType.NORMAL.value)).upper()
    try:
        node_type = NodeType(raw_type)
    except ValueError:
        _record(
            issues,
            GraphIssue(UNKNOWN_NODE_TYPE, map_id, f"Unknown node type '{raw_type}', treated as NORMAL", node_id),
        )
        node_type = NodeType.NORMAL

    gateway = _parse_gateway(raw.get("gatewayConfig"))
    if node_type is NodeType.GATEWAY and gateway is None:
        # Without a target the node stays routable inside its own map but teleports nowhere.
        _record(
            issues,
            GraphIssue(UNRESOLVED_GATEWAY, map_id, "Gateway node has no usable gatewayConfig", node_id),
        )
        node_type = NodeType.NORMAL
    elif node_type is not NodeType.GATEWAY and raw.get("gatewayConfig") is not None:
        _record(
            issues,
            GraphIssue(STRAY_GATEWAY_CONFIG, map_id, f"gatewayConfig ignored on {node_type.value} node", node_id),
        )
        gateway = None

    try:
        x = float(raw.get("x", 0.0))
        y = float(raw.get("y", 0.0))
    except (TypeError, ValueError) as exc:
        raise InvalidGraph(map_id, f"node '{node_id}' has invalid coordinates") from exc

    return Node(
        id=node_id,
        x=x,
        y=y,
        type=node_type,
        name=str(raw.get("name") or node_id),
        description=raw.get("description"),
        category=raw.get("category"),
        gateway=gateway,
    )


def _parse_weight(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    try:
        weight = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(weight) or weight < 0:
        return None
    return weight


def build_map_graph(
    map_id: str,
    raw_nodes: Sequence[RawNode],
    raw_adjacency: Mapping[str, Sequence[RawEdge]] | None,
    name: str = "",
) -> MapGraph:
    """Build a validated map graph.

    Args:
        map_id: Identifier of the map the nodes belong to.
        raw_nodes: Node dictionaries as stored in the map document.
        raw_adjacency: Mapping source node id -> list of `{targetNodeId, weight}`.
        name: Human readable map name.

    Returns:
        MapGraph with edges kept in their document order.

    Raises:
        InvalidGraph: If the node list or adjacency is malformed, a node has no id or
            unusable coordinates, or two nodes share an id.
    """
    if isinstance(raw_nodes, (str, bytes)) or not isinstance(raw_nodes, Sequence):
        raise InvalidGraph(map_id, "nodes must be a list")

    issues: list[GraphIssue] = []
    nodes: dict[str, Node] = {}

    for idx, raw in enumerate(raw_nodes):
        if not isinstance(raw, Mapping) or not raw.get("id"):
            raise InvalidGraph(map_id, f"node at index {idx} has no id")
        node_id = str(raw["id"])
        if node_id in nodes:
            raise InvalidGraph(map_id, f"duplicate node id '{node_id}'")
        nodes[node_id] = _parse_node(map_id, raw, issues)

    if raw_adjacency is not None and not isinstance(raw_adjacency, Mapping):
        raise InvalidGraph(map_id, "adjacencyList must map node ids to edge lists")

    adjacency: dict[str, tuple[Edge, ...]] = {}
    for source_id, raw_edges in (raw_adjacency or {}).items():
        source_id = str(source_id)
        if source_id not in nodes:
            _record(
                issues,
                GraphIssue(DANGLING_EDGE, map_id, f"Edges declared for unknown node '{source_id}'", source_id),
            )
            continue

        if raw_edges is None:
            raw_edges = []
        elif isinstance(raw_edges, (str, bytes, Mapping)) or not isinstance(raw_edges, Sequence):
            _record(
                issues,
                GraphIssue(DANGLING_EDGE, map_id, f"Edge list of '{source_id}' is not a list, dropped", source_id),
            )
            continue

        edges: list[Edge] = []
        for raw_edge in raw_edges:
            target_id = str(raw_edge.get("targetNodeId", "")) if isinstance(raw_edge, Mapping) else ""
            if target_id not in nodes:
                _record(
                    issues,
                    GraphIssue(DANGLING_EDGE, map_id, f"Edge to unknown node '{target_id}' dropped", source_id),
                )
                continue

            weight = _parse_weight(raw_edge.get("weight"))
            if weight is None:
                _record(
                    issues,
                    GraphIssue(
                        INVALID_WEIGHT,
                        map_id,
                        f"Edge to '{target_id}' has invalid weight {raw_edge.get('weight')!r}",
                        source_id,
                    ),
                )
                continue

            edges.append(Edge(target_node_id=target_id, weight=weight))

        if edges:
            adjacency[source_id] = tuple(edges)

    return MapGraph(map_id=map_id, nodes=nodes, adjacency=adjacency, name=name, issues=tuple(issues))


def build_map_graphs(maps: Mapping[str, Mapping[str, Any]]) -> tuple[dict[str, MapGraph], list[GraphIssue]]:
    """Build a graph for every map document, skipping maps that are invalid.

    A map raising `InvalidGraph` is excluded and reported; it never aborts the
    construction of the other maps.
    """
    graphs: dict[str, MapGraph] = {}
    issues: list[GraphIssue] = []

    for map_id in sorted(maps):
        doc = maps[map_id]
        try:
            if not isinstance(doc, Mapping):
                raise InvalidGraph(str(map_id), "map document must be an object")
            graph = build_map_graph(
                map_id=str(map_id),
                raw_nodes=doc.get("nodes") or [],
                raw_adjacency=doc.get("adjacencyList") or {},
                name=str(doc.get("name") or map_id),
            )
        except InvalidGraph as exc:
            logger.error("Skipping map '%s': %s", map_id, exc)
            issues.append(GraphIssue(INVALID_GRAPH, str(map_id), str(exc), severity="error"))
            continue

        graphs[graph.map_id] = graph
        issues.extend(graph.issues)

    return graphs, issues
