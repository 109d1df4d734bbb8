"""
Structural validation of untrusted topic input.

Input usually comes from an external analysis service as parsed JSON and
cannot be trusted. ``inspect_topic`` walks it and returns a ``TopicCheck``:
either a typed ``Topic`` or an itemized list of violations. ``validate_topic``
is the boolean form used by the graph builder and the pipeline. Neither
raises for any input.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import ValidationError

from topicmap.models import RelationshipType, Topic

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("description", "context", "icon", "color")
_LIST_FIELDS = ("examples", "citations", "relatedTopics")
_MAPPING_FIELDS = ("metadata", "styling")
_RELATIONSHIP_TYPES = frozenset(t.value for t in RelationshipType)
MAX_DEPTH = 256


@dataclass(frozen=True)
class Violation:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class TopicCheck:
    """Outcome of a structural check; ``topic`` is set only when ``ok``."""

    ok: bool
    topic: Optional[Topic] = None
    violations: list[Violation] = field(default_factory=list)


class _ViolationSink:
    def __init__(self, exhaustive: bool):
        self.exhaustive = exhaustive
        self.violations: list[Violation] = []

    def add(self, path: str, message: str) -> None:
        self.violations.append(Violation(path, message))
        logger.warning("Invalid topic structure at %s: %s", path, message)

    @property
    def stopped(self) -> bool:
        return bool(self.violations) and not self.exhaustive


def _as_mapping(candidate: Any) -> Optional[Mapping]:
    if isinstance(candidate, Topic):
        return candidate.to_wire()
    if isinstance(candidate, Mapping):
        return candidate
    return None


def _present(node: Mapping, key: str) -> bool:
    # An explicit null is present and fails the type check.
    return key in node


def _has_value(node: Mapping, key: str) -> bool:
    return node.get(key) is not None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _related_topics_key(node: Mapping) -> str:
    return "related_topics" if "relatedTopics" not in node and "related_topics" in node else "relatedTopics"


def _check_relationships(relationships: Any, path: str, sink: _ViolationSink) -> None:
    if not isinstance(relationships, list):
        sink.add(path, "relationships must be an array if present")
        return
    for index, rel in enumerate(relationships):
        rel_path = f"{path}[{index}]"
        if not isinstance(rel, Mapping):
            sink.add(rel_path, "relationship must be an object")
        else:
            to = rel.get("to")
            if not isinstance(to, str) or not to:
                sink.add(rel_path, 'each relationship must have a valid "to" field')
            elif rel.get("type") not in _RELATIONSHIP_TYPES:
                sink.add(rel_path, f"invalid relationship type: {rel.get('type')!r}")
            elif _has_value(rel, "description") and not isinstance(rel["description"], str):
                sink.add(rel_path, "relationship description must be a string if present")
            elif _has_value(rel, "strength") and not _is_number(rel["strength"]):
                sink.add(rel_path, "relationship strength must be a number if present")
            elif _has_value(rel, "bidirectional") and not isinstance(rel["bidirectional"], bool):
                sink.add(rel_path, "relationship bidirectional flag must be a boolean if present")
        if sink.stopped:
            return


def _check_node(
    candidate: Any,
    path: str,
    sink: _ViolationSink,
    recursive: bool,
    ancestors: tuple[int, ...] = (),
) -> None:
    node = _as_mapping(candidate)
    if node is None:
        sink.add(path, "topic must be an object")
        return
    if id(node) in ancestors:
        sink.add(path, "topic contains itself as a subtopic")
        return
    if len(ancestors) >= MAX_DEPTH:
        sink.add(path, f"topic nesting exceeds {MAX_DEPTH} levels")
        return

    title = node.get("title")
    if not isinstance(title, str) or not title:
        sink.add(f"{path}.title", "topic must have a valid title string")
        if sink.stopped:
            return

    for key in _STRING_FIELDS:
        if _present(node, key) and not isinstance(node[key], str):
            sink.add(f"{path}.{key}", f"{key} must be a string if present")
            if sink.stopped:
                return

    list_keys = [k if k != "relatedTopics" else _related_topics_key(node) for k in _LIST_FIELDS]
    for key in list_keys:
        if _present(node, key) and not isinstance(node[key], list):
            sink.add(f"{path}.{key}", f"{key} must be an array if present")
            if sink.stopped:
                return

    for key in _MAPPING_FIELDS:
        if _present(node, key) and not isinstance(node[key], Mapping):
            sink.add(f"{path}.{key}", f"{key} must be an object if present")
            if sink.stopped:
                return

    if _present(node, "relationships"):
        _check_relationships(node["relationships"], f"{path}.relationships", sink)
        if sink.stopped:
            return

    if _present(node, "subtopics"):
        subtopics = node["subtopics"]
        if not isinstance(subtopics, list):
            sink.add(f"{path}.subtopics", "subtopics must be an array if present")
            return
        if recursive:
            for index, subtopic in enumerate(subtopics):
                _check_node(
                    subtopic,
                    f"{path}.subtopics[{index}]",
                    sink,
                    recursive,
                    ancestors + (id(node),),
                )
                if sink.stopped:
                    return


def inspect_topic(
    candidate: Any,
    recursive: bool = True,
    exhaustive: bool = False,
) -> TopicCheck:
    """
    Check a candidate topic and return a typed result.

    Args:
        candidate: Anything; usually a dict parsed from JSON or a ``Topic``
        recursive: Also check every transitive subtopic. When False only the
            node's own fields are checked and the returned topic carries no
            subtopics.
        exhaustive: Collect every violation instead of stopping at the first

    Returns:
        TopicCheck with ``topic`` set on success, ``violations`` on failure
    """
    sink = _ViolationSink(exhaustive)
    _check_node(candidate, "$", sink, recursive)
    if sink.violations:
        return TopicCheck(ok=False, violations=sink.violations)

    node = dict(_as_mapping(candidate))
    if not recursive:
        node["subtopics"] = []
    try:
        topic = Topic.model_validate(node)
    except ValidationError as exc:
        sink.add("$", f"topic could not be typed: {exc.error_count()} field error(s)")
        return TopicCheck(ok=False, violations=sink.violations)
    return TopicCheck(ok=True, topic=topic)


def raw_subtopics(candidate: Any) -> list:
    """Subtopics of a candidate as given, before any checking."""
    if isinstance(candidate, Topic):
        return list(candidate.subtopics)
    if isinstance(candidate, Mapping):
        subtopics = candidate.get("subtopics")
        return list(subtopics) if isinstance(subtopics, list) else []
    return []


def prune_topic(candidate: Any, path: str = "$", depth: int = 0) -> Optional[Topic]:
    """
    Typed copy of ``candidate`` with every invalid subtree removed.

    Returns None when the node itself is invalid. Siblings of a dropped
    subtree are kept.
    """
    if depth >= MAX_DEPTH:
        logger.warning("Dropping topic at %s: nesting exceeds %d levels", path, MAX_DEPTH)
        return None
    check = inspect_topic(candidate, recursive=False)
    if not check.ok:
        logger.info("Dropping invalid topic at %s: %s", path, check.violations[0])
        return None
    topic = check.topic
    pruned = (
        prune_topic(sub, f"{path}.subtopics[{index}]", depth + 1)
        for index, sub in enumerate(raw_subtopics(candidate))
    )
    topic.subtopics = [sub for sub in pruned if sub is not None]
    return topic


def validate_topic(candidate: Any, recursive: bool = True) -> bool:
    """Return True iff ``candidate`` is a structurally valid topic tree."""
    return inspect_topic(candidate, recursive=recursive).ok


def validate_topics(candidates: Any) -> list[Topic]:
    """Typed copy of a forest with invalid topics and subtrees dropped (and logged)."""
    if not isinstance(candidates, (list, tuple)):
        logger.warning("Expected a list of topics, got %s", type(candidates).__name__)
        return []
    accepted: list[Topic] = []
    for index, candidate in enumerate(candidates):
        topic = prune_topic(candidate, f"$[{index}]")
        if topic is not None:
            accepted.append(topic)
    return accepted
