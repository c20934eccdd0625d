"""Request-scoped graph stitching all map graphs together through gateways.

Node identity is the composite key `(map_id, node_id)`. Two edge kinds exist:
- `intra`: copied verbatim from each map's adjacency, weight unchanged.
- `gateway`: one directed edge from a resolved gateway node to its target,
  weighted by a fixed transition cost.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from wayfinder.errors import UNRESOLVED_GATEWAY, GraphIssue
from wayfinder.gateways import resolve_gateway
from wayfinder.map_graph import MapGraph
from wayfinder.models import Node, NodeKey

logger = logging.getLogger(__name__)

# One gateway hop, expressed in the same unit as map edge weights.
GATEWAY_TRANSITION_WEIGHT = 1.0

INTRA = "intra"
GATEWAY = "gateway"


@dataclass(frozen=True, slots=True)
class GlobalEdge:
    """Directed edge between composite node keys."""

    target: NodeKey
    weight: float
    kind: str = INTRA


@dataclass(frozen=True, slots=True)
class GlobalGraph:
    """Union of all map graphs plus gateway transition edges."""

    nodes: dict[NodeKey, Node]
    adjacency: dict[NodeKey, tuple[GlobalEdge, ...]]
    issues: tuple[GraphIssue, ...] = field(default=())

    def __contains__(self, key: object) -> bool:
        return key in self.nodes

    def neighbors(self, key: NodeKey) -> tuple[GlobalEdge, ...]:
        return self.adjacency.get(key, ())

    def weighted_neighbors(self, key: NodeKey) -> Iterator[tuple[NodeKey, float]]:
        for edge in self.neighbors(key):
            yield edge.target, edge.weight

    def edges(self) -> list[tuple[NodeKey, NodeKey, float, str]]:
        """Flatten adjacency to `(source, target, weight, kind)` tuples in insertion order."""
        return [
            (source, edge.target, edge.weight, edge.kind)
            for source, edges in self.adjacency.items()
            for edge in edges
        ]

    def gateway_edges(self) -> list[tuple[NodeKey, NodeKey]]:
        return [(source, target) for source, target, _, kind in self.edges() if kind == GATEWAY]


def check_transition_weight(transition_weight: float) -> None:
    if not math.isfinite(transition_weight) or transition_weight < 0:
        raise ValueError(f"transition_weight must be a finite number >= 0, got {transition_weight!r}")


def compose(
    graphs: Mapping[str, MapGraph],
    transition_weight: float = GATEWAY_TRANSITION_WEIGHT,
) -> GlobalGraph:
    """Stitch map graphs into one graph keyed by `(map_id, node_id)`.

    Maps and nodes are visited in sorted id order, so the same input always
    yields the same edge insertion order. Gateways that do not resolve add no
    edge and are reported as issues.

    Raises:
        ValueError: If `transition_weight` is negative or not finite.
    """
    check_transition_weight(transition_weight)

    nodes: dict[NodeKey, Node] = {}
    adjacency: dict[NodeKey, tuple[GlobalEdge, ...]] = {}
    issues: list[GraphIssue] = []

    for map_id in sorted(graphs):
        graph = graphs[map_id]
        for node_id in sorted(graph.nodes):
            node = graph.nodes[node_id]
            key: NodeKey = (map_id, node_id)
            nodes[key] = node

            out = [
                GlobalEdge(target=(map_id, edge.target_node_id), weight=edge.weight)
                for edge in graph.neighbors(node_id)
            ]

            if node.gateway is not None:
                target = resolve_gateway(node, graphs)
                if target is None:
                    message = (
                        f"Gateway target '{node.gateway.target_map_id}/{node.gateway.target_node_id}' "
                        "does not exist"
                    )
                    logger.warning("%s in map '%s': %s", UNRESOLVED_GATEWAY, map_id, message)
                    issues.append(GraphIssue(UNRESOLVED_GATEWAY, map_id, message, node_id))
                else:
                    out.append(GlobalEdge(target=target, weight=float(transition_weight), kind=GATEWAY))

            if out:
                adjacency[key] = tuple(out)

    return GlobalGraph(nodes=nodes, adjacency=adjacency, issues=tuple(issues))
