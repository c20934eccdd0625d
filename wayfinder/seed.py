"""Demo map documents: a campus, a block lobby and its first floor.

Gateways are declared on both sides so routes work in either direction.
Corridors are added in both directions because adjacency edges are directed.
"""

from __future__ import annotations

from typing import Any


def _node(
    node_id: str,
    x: float,
    y: float,
    name: str,
    node_type: str = "NORMAL",
    category: str | None = None,
    gateway: tuple[str, str] | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    node: dict[str, Any] = {"id": node_id, "x": x, "y": y, "type": node_type, "name": name}
    if category:
        node["category"] = category
    if description:
        node["description"] = description
    if gateway:
        node["gatewayConfig"] = {"targetMapId": gateway[0], "targetNodeId": gateway[1]}
    return node


def _corridors(links: list[tuple[str, str, float]]) -> dict[str, list[dict[str, Any]]]:
    adjacency: dict[str, list[dict[str, Any]]] = {}
    for a, b, weight in links:
        adjacency.setdefault(a, []).append({"targetNodeId": b, "weight": weight})
        adjacency.setdefault(b, []).append({"targetNodeId": a, "weight": weight})
    return adjacency


def campus_main_map() -> dict[str, Any]:
    return {
        "id": "campus_main",
        "name": "Main Campus",
        "imageUrl": "/maps/campus_main.png",
        "nodes": [
            _node("main_gate", 50.0, 95.0, "Main Gate", "ROOM", category="gate"),
            _node("junction", 50.0, 60.0, "Central Junction"),
            _node("canteen", 20.0, 55.0, "Canteen", "ROOM", category="canteen"),
            _node("parking", 85.0, 85.0, "Parking Lot", "ROOM", category="parking"),
            _node(
                "block_a_entrance",
                50.0,
                25.0,
                "Block A Entrance",
                "GATEWAY",
                gateway=("block_a_lobby", "lobby_entrance"),
            ),
        ],
        "adjacencyList": _corridors(
            [
                ("main_gate", "junction", 35.0),
                ("main_gate", "parking", 36.0),
                ("junction", "canteen", 31.0),
                ("junction", "block_a_entrance", 35.0),
            ]
        ),
    }


def block_a_lobby_map() -> dict[str, Any]:
    return {
        "id": "block_a_lobby",
        "name": "Block A - Ground Floor",
        "imageUrl": "/maps/block_a_lobby.png",
        "nodes": [
            _node(
                "lobby_entrance",
                50.0,
                92.0,
                "Lobby Entrance",
                "GATEWAY",
                gateway=("campus_main", "block_a_entrance"),
            ),
            _node("lobby_hall", 50.0, 60.0, "Lobby Hall"),
            _node("reception", 25.0, 60.0, "Reception", "ROOM", category="office"),
            _node("restroom_g", 80.0, 55.0, "Restroom", "ROOM", category="restroom_general"),
            _node(
                "stairs_up",
                50.0,
                15.0,
                "Stairs to Floor 1",
                "GATEWAY",
                gateway=("block_a_floor1", "stairs_down"),
            ),
        ],
        "adjacencyList": _corridors(
            [
                ("lobby_entrance", "lobby_hall", 32.0),
                ("lobby_hall", "reception", 25.0),
                ("lobby_hall", "restroom_g", 30.0),
                ("lobby_hall", "stairs_up", 45.0),
            ]
        ),
    }


def block_a_floor1_map() -> dict[str, Any]:
    return {
        "id": "block_a_floor1",
        "name": "Block A - Floor 1",
        "imageUrl": "/maps/block_a_floor1.png",
        "nodes": [
            _node(
                "stairs_down",
                50.0,
                15.0,
                "Stairs to Ground Floor",
                "GATEWAY",
                gateway=("block_a_lobby", "stairs_up"),
            ),
            _node("corridor_1", 50.0, 50.0, "Floor 1 Corridor"),
            _node("library", 15.0, 50.0, "Central Library", "ROOM", category="library"),
            _node("lab_101", 85.0, 40.0, "Computer Lab 101", "ROOM", category="computer_lab"),
            _node("restroom_men_f1", 85.0, 75.0, "Boys Restroom", "ROOM", category="restroom_men"),
        ],
        "adjacencyList": _corridors(
            [
                ("stairs_down", "corridor_1", 35.0),
                ("corridor_1", "library", 35.0),
                ("corridor_1", "lab_101", 36.0),
                ("corridor_1", "restroom_men_f1", 43.0),
            ]
        ),
    }


def demo_maps() -> list[dict[str, Any]]:
    """Fresh copies of every demo map document."""
    return [campus_main_map(), block_a_lobby_map(), block_a_floor1_map()]
