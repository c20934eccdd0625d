"""FastAPI routes for map management and multi-map route computation.

Endpoints:
- Map documents (`/maps`, `/maps/{map_id}`, `/seed`)
- Routing (`/route`, `/nearest`)
- Quality gates (`/validation`, `/health`)

Every routing request reads a fresh snapshot of the stored maps; no graph is
cached between requests.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, model_validator

from wayfinder.documents import MapDocument, MapUpdate
from wayfinder.map_store import MapAlreadyExists, MapNotFound, MapStore
from wayfinder.map_validation import validate_maps
from wayfinder.nearest import find_nearest
from wayfinder.routing import route
from wayfinder.seed import demo_maps
from wayfinder.utils import map_summary, nearest_payload, path_result_payload

logger = logging.getLogger(__name__)

STORE = MapStore()


class RouteRequest(BaseModel):
    """Request payload for a point-to-point route."""

    source_map_id: str = Field(..., min_length=1)
    source_node_id: str = Field(..., min_length=1)
    dest_map_id: str = Field(..., min_length=1)
    dest_node_id: str = Field(..., min_length=1)


class NearestRequest(BaseModel):
    """Request payload for nearest-location-by-category lookups.

    The start point is optional; provide both ids or neither.
    """

    category: str = Field(..., min_length=1)
    source_map_id: str | None = None
    source_node_id: str | None = None

    @model_validator(mode="after")
    def validate_source(self) -> "NearestRequest":
        """Ensure start map and node are supplied together."""
        if (self.source_map_id is None) != (self.source_node_id is None):
            raise ValueError("Provide both source_map_id and source_node_id, or neither")
        return self


class SeedRequest(BaseModel):
    """Custom seed payload; without maps the demo maps are loaded."""

    maps: list[MapDocument] | None = None
    clear_existing: bool = True


def _cors_settings() -> tuple[list[str], bool]:
    raw_origins = os.getenv("WAYFINDER_CORS_ORIGINS", "*").strip()
    if raw_origins == "*":
        return ["*"], False
    return [origin.strip() for origin in raw_origins.split(",") if origin.strip()], True


def create_app(store: MapStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Map document store to serve; defaults to the module-level STORE.
    """
    maps = store if store is not None else STORE

    app = FastAPI(title="Wayfinder API", version="1.0.0")

    cors_origins, allow_credentials = _cors_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if os.getenv("WAYFINDER_SEED_ON_START", "false").lower() == "true" and len(maps) == 0:
        count = maps.replace_all(demo_maps())
        logger.info("Seeded %d demo maps on startup", count)

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with store metadata."""
        return {"status": "ok", "version": app.version, "map_count": len(maps)}

    @app.get("/maps")
    def list_maps() -> dict[str, Any]:
        """Return summary metadata for every stored map."""
        return {"maps": [map_summary(doc) for doc in maps.list_maps()]}

    @app.post("/maps", status_code=status.HTTP_201_CREATED)
    def create_map(payload: MapDocument) -> dict[str, Any]:
        """Store a new map document."""
        try:
            return maps.create(payload.to_document())
        except MapAlreadyExists as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.get("/maps/{map_id}")
    def get_map(map_id: str) -> dict[str, Any]:
        """Return the full stored document for one map."""
        try:
            return maps.get(map_id)
        except MapNotFound as exc:
            raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found") from exc

    @app.put("/maps/{map_id}")
    def update_map(map_id: str, payload: MapUpdate) -> dict[str, Any]:
        """Replace the supplied top-level fields of a stored map."""
        try:
            return maps.update(map_id, payload.changes())
        except MapNotFound as exc:
            raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found") from exc

    @app.delete("/maps/{map_id}")
    def delete_map(map_id: str) -> dict[str, Any]:
        """Delete one stored map."""
        try:
            maps.delete(map_id)
        except MapNotFound as exc:
            raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found") from exc
        return {"message": f"Map '{map_id}' deleted successfully"}

    @app.post("/seed")
    def seed(payload: SeedRequest | None = None) -> dict[str, Any]:
        """Load demo maps, or the supplied maps, into the store."""
        if payload is None or payload.maps is None:
            documents = demo_maps()
            clear_existing = True if payload is None else payload.clear_existing
        else:
            documents = [doc.to_document() for doc in payload.maps]
            clear_existing = payload.clear_existing

        inserted = maps.replace_all(documents, clear_existing=clear_existing)
        logger.info("Seeded %d maps (clear_existing=%s)", inserted, clear_existing)
        return {
            "message": "Database seeded successfully",
            "maps_inserted": inserted,
            "maps": [map_summary(doc) for doc in maps.list_maps()],
        }

    @app.post("/route")
    def find_route(payload: RouteRequest) -> dict[str, Any]:
        """Compute the cheapest route between two map nodes, across maps if needed."""
        try:
            result = route(
                maps.snapshot(),
                payload.source_map_id,
                payload.source_node_id,
                payload.dest_map_id,
                payload.dest_node_id,
            )
        except Exception as exc:
            logger.exception("Routing failed")
            raise HTTPException(status_code=500, detail="Unexpected routing error") from exc

        if not result.success:
            raise HTTPException(status_code=404, detail="No route found")

        return path_result_payload(result)

    @app.post("/nearest")
    def nearest(payload: NearestRequest) -> dict[str, Any]:
        """Find the nearest node of a category from an optional start point."""
        try:
            match = find_nearest(
                maps.snapshot(),
                payload.category,
                source_map_id=payload.source_map_id,
                source_node_id=payload.source_node_id,
            )
        except Exception as exc:
            logger.exception("Nearest lookup failed")
            raise HTTPException(status_code=500, detail="Unexpected lookup error") from exc

        if match is None:
            raise HTTPException(status_code=404, detail=f"No reachable location for category '{payload.category}'")

        return {"category": payload.category, **nearest_payload(match)}

    @app.get("/validation")
    def validation() -> dict[str, Any]:
        """Return the validation report for all stored maps."""
        return validate_maps(maps.snapshot())

    return app
