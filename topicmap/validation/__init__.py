"""Structural validation of untrusted topic input."""

from topicmap.validation.topic_validator import (
    MAX_DEPTH,
    TopicCheck,
    Violation,
    inspect_topic,
    prune_topic,
    raw_subtopics,
    validate_topic,
    validate_topics,
)

__all__ = [
    "MAX_DEPTH",
    "TopicCheck",
    "Violation",
    "inspect_topic",
    "prune_topic",
    "raw_subtopics",
    "validate_topic",
    "validate_topics",
]
