"""Build a TopicGraph from a validated topic forest."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from topicmap.exceptions import GraphConstructionError
from topicmap.graph.ids import NodeIdGenerator
from topicmap.graph.palette import colors_for_level
from topicmap.models import HIERARCHY_EDGE, GraphEdge, GraphNode, Topic, TopicGraph
from topicmap.validation import MAX_DEPTH, inspect_topic, raw_subtopics

logger = logging.getLogger(__name__)

_DEFAULT_MAX_LABEL = 50
_ELLIPSIS = "..."


def truncate_label(title: str, max_length: int = _DEFAULT_MAX_LABEL) -> str:
    if len(title) <= max_length:
        return title
    return title[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def hierarchy_label(child: Topic, parent_level: int) -> str:
    """Human-readable word for a parent -> child hierarchy edge."""
    if parent_level == 0:
        return "contains"
    if parent_level == 1:
        return "includes"
    if child.relationships:
        return _capitalize_first(child.relationships[0].type)
    return "relates to"


class GraphBuilder:
    """
    Depth-first, pre-order builder for one topic forest.

    Malformed subtrees are logged and skipped; the parent and its remaining
    siblings are kept. Cross-references resolve only against nodes built so
    far, so a relationship naming a sibling that comes later is dropped.
    """

    def __init__(
        self,
        namespace: str = "node",
        id_generator: Optional[NodeIdGenerator] = None,
        max_label_length: int = _DEFAULT_MAX_LABEL,
    ):
        self.id_generator = id_generator or NodeIdGenerator(namespace)
        self.max_label_length = max_label_length
        self._used_ids: set[str] = set()
        self._nodes: list[GraphNode] = []
        self._edges: list[GraphEdge] = []

    def build(self, topics: Sequence[Any]) -> TopicGraph:
        if not isinstance(topics, (list, tuple)) or len(topics) == 0:
            raise GraphConstructionError("Invalid or empty topics array")

        self._used_ids = set()
        self._nodes = []
        self._edges = []

        for index, candidate in enumerate(topics):
            self._process(candidate, parent=None, level=0, path=f"$[{index}]")

        logger.info("Built topic graph: %d nodes, %d edges", len(self._nodes), len(self._edges))
        return TopicGraph(nodes=self._nodes, edges=self._edges)

    def _issue_id(self) -> str:
        node_id = self.id_generator.next_id()
        if node_id in self._used_ids:
            raise GraphConstructionError(f"Duplicate node ID detected: {node_id}")
        self._used_ids.add(node_id)
        return node_id

    def _process(
        self,
        candidate: Any,
        parent: Optional[GraphNode],
        level: int,
        path: str,
    ) -> Optional[Topic]:
        if level >= MAX_DEPTH:
            logger.warning("Skipping topic at %s: nesting exceeds %d levels", path, MAX_DEPTH)
            return None
        check = inspect_topic(candidate, recursive=False)
        if not check.ok:
            logger.info("Skipping invalid topic at %s: %s", path, check.violations[0])
            return None

        topic = check.topic
        node = GraphNode(
            id=self._issue_id(),
            label=truncate_label(topic.title, self.max_label_length),
            level=level,
            data=topic,
            colors=colors_for_level(level),
        )
        self._nodes.append(node)

        if parent is not None:
            self._edges.append(
                GraphEdge(
                    source=parent.id,
                    target=node.id,
                    type=HIERARCHY_EDGE,
                    label=hierarchy_label(topic, parent.level),
                )
            )

        accepted: list[Topic] = []
        for index, subtopic in enumerate(raw_subtopics(candidate)):
            child = self._process(subtopic, node, level + 1, f"{path}.subtopics[{index}]")
            if child is not None:
                accepted.append(child)
        topic.subtopics = accepted

        self._resolve_relationships(node)
        return topic

    def _resolve_relationships(self, node: GraphNode) -> None:
        for rel in node.data.relationships:
            target = next((n for n in self._nodes if n.data.title == rel.to), None)
            if target is None:
                logger.debug(
                    "Unresolved relationship %r -> %r: target not built yet",
                    node.data.title,
                    rel.to,
                )
                continue
            self._edges.append(
                GraphEdge(
                    source=node.id,
                    target=target.id,
                    type=rel.type,
                    label=rel.description or _capitalize_first(rel.type),
                )
            )


def build_topic_graph(
    topics: Sequence[Any],
    namespace: str = "node",
    id_generator: Optional[NodeIdGenerator] = None,
    max_label_length: int = _DEFAULT_MAX_LABEL,
) -> TopicGraph:
    """Build the topic graph for one forest.

    Raises:
        GraphConstructionError: if ``topics`` is empty or not a list, or an
            id collision is detected
    """
    builder = GraphBuilder(
        namespace=namespace,
        id_generator=id_generator,
        max_label_length=max_label_length,
    )
    return builder.build(topics)
