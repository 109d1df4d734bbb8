"""Generic label/details/children tree, consumed by outline-style renderers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from topicmap.emitters.icons import ensure_icon
from topicmap.models import JsonTree, JsonTreeNode, Topic

logger = logging.getLogger(__name__)

EMPTY_TITLE = "Empty Mind Map"


def _coerce_topic(candidate: Any) -> Topic:
    if isinstance(candidate, Topic):
        return candidate
    if isinstance(candidate, Mapping):
        return Topic.model_validate(candidate)
    raise TypeError(f"Expected a topic, got {type(candidate).__name__}")


def topic_to_json_node(topic: Topic) -> JsonTreeNode:
    node = JsonTreeNode(label=ensure_icon(topic.title), details=topic.description or None)
    if topic.subtopics:
        node.children = [topic_to_json_node(sub) for sub in topic.subtopics]
    return node


def to_json_tree(topics: Sequence[Any], language: str = "en") -> JsonTree:
    """Convert a topic forest to a JSON tree rooted at its first topic.

    The first topic's title becomes the tree title and its subtopics the
    top-level nodes. Any further top-level topics are not represented.
    """
    if not topics:
        return JsonTree(title=EMPTY_TITLE, language=language, nodes=[])

    if len(topics) > 1:
        logger.debug("JSON tree uses the first of %d top-level topics", len(topics))

    main = _coerce_topic(topics[0])
    return JsonTree(
        title=main.title,
        language=language,
        nodes=[topic_to_json_node(sub) for sub in main.subtopics],
    )


def _validate_node(node: JsonTreeNode) -> bool:
    if not node.label:
        logger.error("JSON tree node is missing a label")
        return False
    if not node.details:
        logger.warning("JSON tree node is missing details: %s", node.label)
    return all(_validate_node(child) for child in node.children or [])


def validate_json_tree(tree: JsonTree) -> bool:
    """Return True iff the tree is complete enough to render.

    Missing ``details`` are reported but do not fail validation.
    """
    if not tree.title or not tree.language:
        logger.error("JSON tree is missing title or language")
        return False
    if not tree.nodes:
        logger.error("JSON tree has no nodes")
        return False
    return all(_validate_node(node) for node in tree.nodes)


def _enhance_node(node: JsonTreeNode) -> None:
    node.label = ensure_icon(node.label)
    if not node.details:
        node.details = f"Additional information about {node.label}"
    for child in node.children or []:
        _enhance_node(child)


def enhance_json_tree(tree: JsonTree) -> JsonTree:
    """Return a copy with icons on every label and placeholder details filled in."""
    enhanced = tree.model_copy(deep=True)
    for node in enhanced.nodes:
        _enhance_node(node)
    return enhanced
