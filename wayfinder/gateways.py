"""Gateway resolution: map a GATEWAY node to its existing target node."""

from __future__ import annotations

from typing import Mapping

from wayfinder.map_graph import MapGraph
from wayfinder.models import Node, NodeKey


def resolve_gateway(node: Node, graphs: Mapping[str, MapGraph]) -> NodeKey | None:
    """Return `(map_id, node_id)` the gateway leads to, or None if it leads nowhere.

    A gateway resolves only when its target map is among `graphs` and that map
    contains the target node. Non-gateway nodes never resolve.
    """
    if not node.is_gateway or node.gateway is None:
        return None

    target_graph = graphs.get(node.gateway.target_map_id)
    if target_graph is None or node.gateway.target_node_id not in target_graph:
        return None

    return node.gateway.target
