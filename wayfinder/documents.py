"""Pydantic schema for map documents exchanged with the persistence layer.

Documents keep the stored camelCase field names (`imageUrl`, `adjacencyList`,
`gatewayConfig`, `targetNodeId`) so they can be written back unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wayfinder.models import NodeType


class GatewayConfigModel(BaseModel):
    """Gateway target in another map."""

    model_config = ConfigDict(populate_by_name=True)

    target_map_id: str = Field(..., min_length=1, alias="targetMapId")
    target_node_id: str = Field(..., min_length=1, alias="targetNodeId")


class NodeModel(BaseModel):
    """Node as drawn in the map editor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    x: float = Field(..., ge=0, le=100)
    y: float = Field(..., ge=0, le=100)
    type: NodeType = NodeType.NORMAL
    name: str
    description: str | None = None
    category: str | None = None
    gateway_config: GatewayConfigModel | None = Field(default=None, alias="gatewayConfig")

    @model_validator(mode="after")
    def validate_gateway(self) -> "NodeModel":
        """Require gatewayConfig on GATEWAY nodes and forbid it elsewhere."""
        if self.type is NodeType.GATEWAY and self.gateway_config is None:
            raise ValueError(f"Gateway node '{self.id}' requires gatewayConfig")
        if self.type is not NodeType.GATEWAY and self.gateway_config is not None:
            raise ValueError(f"Node '{self.id}' is not a GATEWAY and cannot have gatewayConfig")
        return self


class EdgeModel(BaseModel):
    """Directed adjacency entry."""

    model_config = ConfigDict(populate_by_name=True)

    target_node_id: str = Field(..., min_length=1, alias="targetNodeId")
    weight: float = Field(..., ge=0)


class MapDocument(BaseModel):
    """Full map document: image, nodes and adjacency list."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1, alias="imageUrl")
    nodes: list[NodeModel] = Field(default_factory=list)
    adjacency_list: dict[str, list[EdgeModel]] = Field(default_factory=dict, alias="adjacencyList")

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "MapDocument":
        """Node ids must be unique within one map."""
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id '{node.id}'")
            seen.add(node.id)
        return self

    def to_document(self) -> dict[str, Any]:
        """Dump in the stored camelCase layout."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class MapUpdate(BaseModel):
    """Partial replacement of a stored map."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(default=None, min_length=1, alias="imageUrl")
    nodes: list[NodeModel] | None = None
    adjacency_list: dict[str, list[EdgeModel]] | None = Field(default=None, alias="adjacencyList")

    def changes(self) -> dict[str, Any]:
        """Return only the top-level fields the caller sent, in stored layout."""
        dumped = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        fields = type(self).model_fields
        keys = [fields[name].alias or name for name in self.model_fields_set]
        return {key: dumped[key] for key in keys if key in dumped}
