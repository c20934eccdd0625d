"""Utility helpers shared across wayfinder modules.

Purpose:
- Convert routing results to JSON-friendly payloads in the stored camelCase layout.
- Summarise stored map documents for listings.
"""

from __future__ import annotations

from typing import Any, Iterable

from wayfinder.nearest import NearestMatch
from wayfinder.routing import MapSegment, PathResult, Waypoint


def to_serializable_waypoints(waypoints: Iterable[Waypoint]) -> list[dict[str, Any]]:
    """Convert waypoints to dictionaries consumed by the route renderer."""
    return [
        {
            "mapId": wp.map_id,
            "nodeId": wp.node_id,
            "x": float(wp.x),
            "y": float(wp.y),
            "type": wp.type.value,
            "name": wp.name,
        }
        for wp in waypoints
    ]


def segment_payload(segment: MapSegment) -> dict[str, Any]:
    return {"mapId": segment.map_id, "waypoints": to_serializable_waypoints(segment.waypoints)}


def path_result_payload(result: PathResult) -> dict[str, Any]:
    """Serialize a PathResult; failed results carry an empty path and a reason."""
    return {
        "success": result.success,
        "waypoints": to_serializable_waypoints(result.waypoints),
        "totalWeight": float(result.total_weight),
        "totalNodes": int(result.total_nodes),
        "segments": [segment_payload(segment) for segment in result.segments],
        "reason": result.reason,
    }


def nearest_payload(match: NearestMatch) -> dict[str, Any]:
    return {
        "mapId": match.map_id,
        "nodeId": match.node_id,
        "name": match.name,
        "route": path_result_payload(match.result) if match.result is not None else None,
    }


def map_summary(document: dict[str, Any]) -> dict[str, Any]:
    """Listing entry for a stored map document."""
    return {
        "id": document.get("id"),
        "name": document.get("name"),
        "imageUrl": document.get("imageUrl"),
        "nodeCount": len(document.get("nodes") or []),
    }
