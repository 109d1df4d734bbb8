"""Graph structures derived from a topic forest.

Built fresh per invocation by ``topicmap.graph.builder`` and annotated with
positions by ``topicmap.graph.layout``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from topicmap.models.enums import HIERARCHY_EDGE
from topicmap.models.topics import Topic


@dataclass(frozen=True)
class NodeColors:
    background: str
    border: str
    text: str


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class GraphNode:
    id: str
    label: str
    level: int
    data: Topic
    colors: NodeColors
    position: Optional[Position] = None


@dataclass
class GraphEdge:
    source: str
    target: str
    type: str
    label: Optional[str] = None

    @property
    def is_hierarchy(self) -> bool:
        return self.type == HIERARCHY_EDGE


@dataclass
class TopicGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_by_id(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def hierarchy_edges(self) -> list[GraphEdge]:
        return [e for e in self.edges if e.is_hierarchy]

    def cross_edges(self) -> list[GraphEdge]:
        return [e for e in self.edges if not e.is_hierarchy]

    def children_of(self, node_id: str) -> list[str]:
        """Return child ids of a node in build order."""
        return [e.target for e in self.edges if e.is_hierarchy and e.source == node_id]
