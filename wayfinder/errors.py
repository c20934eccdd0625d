"""Error taxonomy for map graph construction and routing.

Only `InvalidGraph` is raised. Every other problem is recovered from and
recorded as a `GraphIssue` so callers can report it without aborting routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DANGLING_EDGE = "DanglingEdge"
INVALID_WEIGHT = "InvalidWeight"
UNRESOLVED_GATEWAY = "UnresolvedGateway"
STRAY_GATEWAY_CONFIG = "StrayGatewayConfig"
UNKNOWN_NODE_TYPE = "UnknownNodeType"
INVALID_GRAPH = "InvalidGraph"


class InvalidGraph(ValueError):
    """Raised when a map document cannot form a graph (duplicate node ids)."""

    def __init__(self, map_id: str, message: str) -> None:
        super().__init__(f"Map '{map_id}': {message}")
        self.map_id = map_id


@dataclass(frozen=True, slots=True)
class GraphIssue:
    """A recovered problem found while building or composing map graphs."""

    kind: str
    map_id: str
    message: str
    node_id: str | None = None
    severity: str = "warning"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "severity": self.severity,
            "map_id": self.map_id,
            "node_id": self.node_id,
            "message": self.message,
        }
