"""Flowchart (Mermaid ``graph``) syntax for a TopicGraph.

The emitter never raises: any failure while generating the text is turned
into a small error diagram so the renderer always receives parseable input.
"""

from __future__ import annotations

import logging
import re

from topicmap.graph.ids import sanitize_identifier
from topicmap.graph.palette import PALETTE, tier_for_level
from topicmap.models import RankDirection, TopicGraph

logger = logging.getLogger(__name__)

_HEADER_DIRECTIONS = {
    RankDirection.TB: "TD",
    RankDirection.BT: "BT",
    RankDirection.LR: "LR",
    RankDirection.RL: "RL",
}
_CLASS_STYLES = {
    "root": "stroke-width:3px",
    "level1": "stroke-width:2px",
    "level2": "stroke-width:2px",
    "level3": "stroke-width:2px",
}
_WHITESPACE_BREAKS = re.compile(r"[\r\n\t]+")


def escape_label(text: str) -> str:
    """Make ``text`` safe inside a quoted node label."""
    text = _WHITESPACE_BREAKS.sub(" ", str(text))
    return text.replace('"', "#quot;").strip()


def escape_edge_label(text: str) -> str:
    """Make ``text`` safe between the pipes of an edge label."""
    return escape_label(text).replace("|", "#124;")


def _class_definitions() -> list[str]:
    lines = ["%% Node styles"]
    for tier, colors in PALETTE.items():
        style = (
            f"fill:{colors.background},stroke:{colors.border},"
            f"{_CLASS_STYLES[tier]},color:{colors.text}"
        )
        if tier == "root":
            style += ",font-weight:bold"
        lines.append(f"classDef {tier} {style}")
    return lines


def _header(direction: RankDirection) -> str:
    return f"graph {_HEADER_DIRECTIONS[RankDirection(direction)]}"


def _generate(graph: TopicGraph, direction: RankDirection) -> str:
    lines = [_header(direction)]
    lines.extend(f"  {line}" for line in _class_definitions())

    for node in graph.nodes:
        node_id = sanitize_identifier(node.id)
        icon = node.data.icon or ""
        text = escape_label(f"{icon} {node.label}")
        lines.append(f'  {node_id}["{text}"]')
        lines.append(f"  class {node_id} {tier_for_level(node.level)}")

    for edge in graph.edges:
        arrow = "-->" if edge.is_hierarchy else "-.->"
        label = escape_edge_label(edge.label) if edge.label else ""
        pipe = f"|{label}|" if label else ""
        lines.append(f"  {sanitize_identifier(edge.source)} {arrow}{pipe} {sanitize_identifier(edge.target)}")

    return "\n".join(lines) + "\n"


def fallback_diagram(message: str) -> str:
    """Minimal valid diagram describing a generation error."""
    return (
        "graph TD\n"
        '  error["Error Generating Mind Map"]\n'
        f'  details["{escape_label(message) or "Unknown error"}"]\n'
        "  error --> details\n"
        "  style error fill:#FEE2E2,stroke:#EF4444,stroke-width:2px\n"
        "  style details fill:#FEF3C7,stroke:#D97706,stroke-width:2px\n"
    )


def to_flowchart_syntax(graph: TopicGraph, direction: RankDirection = RankDirection.TB) -> str:
    """Render ``graph`` as flowchart text; fall back to an error diagram on failure."""
    try:
        return _generate(graph, direction)
    except Exception as exc:  # noqa: BLE001
        logger.error("Error generating flowchart syntax: %s", exc, exc_info=True)
        return fallback_diagram(str(exc))
