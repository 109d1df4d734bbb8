"""Output artifacts handed to external renderers."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from topicmap.models.enums import MindMapDirection


class JsonTreeNode(BaseModel):
    """Generic label/details/children node."""

    label: str
    details: Optional[str] = None
    children: Optional[list["JsonTreeNode"]] = None


class JsonTree(BaseModel):
    """Root of the generic JSON tree format."""

    title: str
    language: str
    nodes: list[JsonTreeNode] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RadialMindMapNode(BaseModel):
    """Node shape consumed by the interactive radial mind-map widget.

    ``direction`` is unset on the root; every other node is placed on the
    left or right side of it.
    """

    model_config = ConfigDict(use_enum_values=True)

    id: str
    topic: str
    root: Optional[bool] = None
    children: Optional[list["RadialMindMapNode"]] = None
    direction: Optional[MindMapDirection] = None
    style: dict[str, Any] = Field(default_factory=dict)
    icons: Optional[list[str]] = None
    notes: Optional[str] = None
    background: str
    expanded: bool = True

    def walk(self):
        yield self
        for child in self.children or []:
            yield from child.walk()


class MindMapData(BaseModel):
    """Widget envelope: the node tree plus free-form links between nodes."""

    model_config = ConfigDict(populate_by_name=True)

    node_data: RadialMindMapNode = Field(..., alias="nodeData")
    link_data: dict[str, Any] = Field(default_factory=dict, alias="linkData")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


JsonTreeNode.model_rebuild()
RadialMindMapNode.model_rebuild()
