"""
Radial mind-map tree for the interactive mind-map widget.

The first topic becomes the root. Its direct subtopics form the first ring
and alternate right/left; every deeper node keeps the side of its ancestor
in the first ring. Background colour and font size are keyed by depth.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence

from topicmap.emitters.icons import split_leading_icon
from topicmap.emitters.json_tree import EMPTY_TITLE
from topicmap.graph.ids import NodeIdGenerator
from topicmap.models import (
    JsonTree,
    JsonTreeNode,
    MindMapData,
    MindMapDirection,
    RadialMindMapNode,
    Topic,
    TopicGraph,
)

logger = logging.getLogger(__name__)

ROOT_ID = "root"
ID_NAMESPACE = "mm"

# Depth 0 is the root; depth 6 and deeper reuse the last entry.
BACKGROUND_RAMP = [
    "#f9f9f9",
    "#e3f2fd",
    "#bbdefb",
    "#90caf9",
    "#64b5f6",
    "#42a5f5",
    "#2196f3",
]
ROOT_STYLE = {"fontSize": 20, "fontWeight": "bold"}
MIN_FONT_SIZE = 14
BASE_FONT_SIZE = 18
EXPANDED_DEPTH = 3


def background_for_depth(depth: int) -> str:
    return BACKGROUND_RAMP[min(max(depth, 0), len(BACKGROUND_RAMP) - 1)]


def font_size_for_depth(depth: int) -> int:
    return max(MIN_FONT_SIZE, BASE_FONT_SIZE - depth)


def ring_direction(index: int) -> MindMapDirection:
    return MindMapDirection.RIGHT if index % 2 == 0 else MindMapDirection.LEFT


def _root(title: str, language: str, fallback_icon: Optional[str] = None) -> RadialMindMapNode:
    icon, text = split_leading_icon(title)
    icon = icon or fallback_icon
    return RadialMindMapNode(
        id=ROOT_ID,
        topic=text,
        root=True,
        icons=[icon] if icon else None,
        expanded=True,
        style=dict(ROOT_STYLE),
        notes=f"Language: {language}",
        background=background_for_depth(0),
    )


class _MindMapBuilder:
    def __init__(self, id_generator: Optional[NodeIdGenerator]):
        self.ids = id_generator or NodeIdGenerator(ID_NAMESPACE)

    def node(
        self,
        label: str,
        notes: Optional[str],
        fallback_icon: Optional[str],
        children: list,
        direction: MindMapDirection,
        depth: int,
        child_fn,
    ) -> RadialMindMapNode:
        icon, text = split_leading_icon(label)
        icon = icon or fallback_icon
        node = RadialMindMapNode(
            id=self.ids.next_id(),
            topic=text,
            direction=direction,
            style={"fontSize": font_size_for_depth(depth)},
            icons=[icon] if icon else None,
            notes=notes or "",
            background=background_for_depth(depth),
            expanded=depth < EXPANDED_DEPTH,
        )
        if children:
            node.children = [child_fn(child, direction, depth + 1) for child in children]
        return node

    def from_topic(self, topic: Topic, direction: MindMapDirection, depth: int) -> RadialMindMapNode:
        return self.node(
            topic.title,
            topic.description,
            topic.icon,
            topic.subtopics,
            direction,
            depth,
            self.from_topic,
        )

    def from_json_node(self, json_node: JsonTreeNode, direction: MindMapDirection, depth: int) -> RadialMindMapNode:
        return self.node(
            json_node.label,
            json_node.details,
            None,
            json_node.children or [],
            direction,
            depth,
            self.from_json_node,
        )


def to_mind_map_tree(
    topics: Sequence[Any],
    language: str = "en",
    id_generator: Optional[NodeIdGenerator] = None,
) -> RadialMindMapNode:
    """Build the radial mind-map tree for the first topic of ``topics``."""
    if not topics:
        return _root(EMPTY_TITLE, language)

    main = topics[0] if isinstance(topics[0], Topic) else Topic.model_validate(topics[0])
    builder = _MindMapBuilder(id_generator)
    root = _root(main.title, language, main.icon)
    if main.subtopics:
        root.children = [
            builder.from_topic(sub, ring_direction(index), 1) for index, sub in enumerate(main.subtopics)
        ]
    return root


def json_tree_to_mind_map(
    tree: JsonTree,
    id_generator: Optional[NodeIdGenerator] = None,
) -> MindMapData:
    """Convert a JSON tree (usually the enhanced one) to mind-map widget data."""
    builder = _MindMapBuilder(id_generator)
    root = _root(tree.title, tree.language)
    if tree.nodes:
        root.children = [
            builder.from_json_node(node, ring_direction(index), 1) for index, node in enumerate(tree.nodes)
        ]
    return MindMapData(node_data=root)


def _links_from_graph(root: RadialMindMapNode, graph: TopicGraph) -> dict[str, Any]:
    """Map cross-reference edges to widget links between mind-map nodes.

    Graph nodes are matched to mind-map nodes by title; the first mind-map
    node with a matching title wins. Edges with an unmatched end are dropped.
    """
    by_title: dict[str, str] = {}
    for node in root.walk():
        by_title.setdefault(node.topic, node.id)

    links: dict[str, Any] = {}
    for index, edge in enumerate(graph.cross_edges()):
        source = graph.node_by_id(edge.source)
        target = graph.node_by_id(edge.target)
        if source is None or target is None:
            continue
        from_id = by_title.get(split_leading_icon(source.data.title)[1])
        to_id = by_title.get(split_leading_icon(target.data.title)[1])
        if from_id is None or to_id is None:
            logger.debug("No mind-map node for link %s -> %s", source.data.title, target.data.title)
            continue
        link_id = f"link_{index}"
        links[link_id] = {"id": link_id, "label": edge.label or "", "from": from_id, "to": to_id}
    return links


def to_mind_map_data(
    topics: Sequence[Any],
    language: str = "en",
    graph: Optional[TopicGraph] = None,
    id_generator: Optional[NodeIdGenerator] = None,
) -> MindMapData:
    """Wrap the mind-map tree with links taken from a built graph's cross-references."""
    root = to_mind_map_tree(topics, language, id_generator=id_generator)
    links = _links_from_graph(root, graph) if graph is not None else {}
    return MindMapData(node_data=root, link_data=links)
