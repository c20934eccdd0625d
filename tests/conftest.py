"""Pytest global fixtures and test isolation hooks."""

from __future__ import annotations

from typing import Any

import pytest

from wayfinder.api import STORE


@pytest.fixture(autouse=True)
def reset_map_store() -> None:
    """Empty the in-memory map store before each test."""
    STORE.clear()


@pytest.fixture()
def floor1_map() -> dict[str, Any]:
    """Three-node floor: A-B weight 2, B-C weight 3, A-C weight 10, both directions."""
    return {
        "id": "floor1",
        "name": "Floor 1",
        "imageUrl": "/maps/floor1.png",
        "nodes": [
            {"id": "A", "x": 10.0, "y": 10.0, "type": "ROOM", "name": "Room A"},
            {"id": "B", "x": 50.0, "y": 10.0, "type": "NORMAL", "name": "Hall B"},
            {"id": "C", "x": 90.0, "y": 10.0, "type": "ROOM", "name": "Room C"},
        ],
        "adjacencyList": {
            "A": [{"targetNodeId": "B", "weight": 2}, {"targetNodeId": "C", "weight": 10}],
            "B": [{"targetNodeId": "A", "weight": 2}, {"targetNodeId": "C", "weight": 3}],
            "C": [{"targetNodeId": "B", "weight": 3}, {"targetNodeId": "A", "weight": 10}],
        },
    }


@pytest.fixture()
def campus_maps() -> dict[str, dict[str, Any]]:
    """Campus whose entrance gateway leads into building_a's lobby."""
    campus = {
        "id": "campus",
        "name": "Campus",
        "imageUrl": "/maps/campus.png",
        "nodes": [
            {"id": "gate", "x": 50.0, "y": 95.0, "type": "NORMAL", "name": "Gate"},
            {
                "id": "entrance_a",
                "x": 50.0,
                "y": 20.0,
                "type": "GATEWAY",
                "name": "Block A Entrance",
                "gatewayConfig": {"targetMapId": "building_a", "targetNodeId": "lobby"},
            },
        ],
        "adjacencyList": {
            "gate": [{"targetNodeId": "entrance_a", "weight": 4}],
            "entrance_a": [{"targetNodeId": "gate", "weight": 4}],
        },
    }
    building_a = {
        "id": "building_a",
        "name": "Building A",
        "imageUrl": "/maps/building_a.png",
        "nodes": [
            {"id": "lobby", "x": 50.0, "y": 90.0, "type": "NORMAL", "name": "Lobby"},
            {"id": "room_101", "x": 30.0, "y": 40.0, "type": "ROOM", "name": "Room 101", "category": "office"},
        ],
        "adjacencyList": {
            "lobby": [{"targetNodeId": "room_101", "weight": 5}],
            "room_101": [{"targetNodeId": "lobby", "weight": 5}],
        },
    }
    return {"campus": campus, "building_a": building_a}
