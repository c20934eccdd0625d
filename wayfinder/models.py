"""Typed map model: nodes, gateway targets and weighted edges.

Node metadata is a tagged variant over `NodeType`: only GATEWAY nodes carry a
`GatewayConfig`, every other node type has `gateway=None`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """Kinds of map nodes understood by the routing engine."""

    NORMAL = "NORMAL"
    ROOM = "ROOM"
    GATEWAY = "GATEWAY"


NodeKey = tuple[str, str]  # (map_id, node_id)


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Target of a gateway node in another map."""

    target_map_id: str
    target_node_id: str

    @property
    def target(self) -> NodeKey:
        return self.target_map_id, self.target_node_id


@dataclass(frozen=True, slots=True)
class Node:
    """One point on a floor plan.

    Coordinates are percentages of the map image (0-100) and are never
    interpreted by the engine.
    """

    id: str
    x: float
    y: float
    type: NodeType = NodeType.NORMAL
    name: str = ""
    description: str | None = None
    category: str | None = None
    gateway: GatewayConfig | None = None

    def __post_init__(self) -> None:
        if self.type is NodeType.GATEWAY and self.gateway is None:
            raise ValueError(f"Gateway node '{self.id}' requires a gateway target")
        if self.type is not NodeType.GATEWAY and self.gateway is not None:
            raise ValueError(f"Node '{self.id}' of type {self.type.value} cannot carry a gateway target")

    @property
    def is_gateway(self) -> bool:
        return self.type is NodeType.GATEWAY


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed weighted edge stored on its source node."""

    target_node_id: str
    weight: float
