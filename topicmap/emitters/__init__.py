"""Renderer-facing output formats."""

from .flowchart import escape_edge_label, escape_label, fallback_diagram, to_flowchart_syntax
from .icons import (
    DEFAULT_ICON,
    enhance_topic_icons,
    ensure_icon,
    find_icon,
    has_leading_icon,
    icon_for,
    split_leading_icon,
)
from .json_tree import enhance_json_tree, to_json_tree, validate_json_tree
from .mind_map import json_tree_to_mind_map, to_mind_map_data, to_mind_map_tree

__all__ = [
    "DEFAULT_ICON",
    "enhance_json_tree",
    "enhance_topic_icons",
    "ensure_icon",
    "escape_edge_label",
    "escape_label",
    "fallback_diagram",
    "find_icon",
    "has_leading_icon",
    "icon_for",
    "json_tree_to_mind_map",
    "split_leading_icon",
    "to_flowchart_syntax",
    "to_json_tree",
    "to_mind_map_data",
    "to_mind_map_tree",
    "validate_json_tree",
]
