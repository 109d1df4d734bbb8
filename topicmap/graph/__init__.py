"""Topic graph module: build, lay out, and color topic forests."""

from topicmap.graph.builder import GraphBuilder, build_topic_graph, hierarchy_label, truncate_label
from topicmap.graph.ids import NodeIdGenerator, sanitize_identifier
from topicmap.graph.layout import DotLayout, optimize_layout
from topicmap.graph.palette import PALETTE, colors_for_level, tier_for_level

__all__ = [
    "DotLayout",
    "GraphBuilder",
    "NodeIdGenerator",
    "PALETTE",
    "build_topic_graph",
    "colors_for_level",
    "hierarchy_label",
    "optimize_layout",
    "sanitize_identifier",
    "tier_for_level",
    "truncate_label",
]
