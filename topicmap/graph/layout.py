"""Layered (hierarchical) layout for a TopicGraph.

The topic graph is collapsed into a weighted ``networkx.DiGraph``, handed
to Graphviz ``dot``, and positions are read back from its JSON output.
Graphviz does the ranking (network simplex), crossing reduction and
coordinate assignment.

Hierarchy edges weigh more than cross-reference edges, so the topic tree
dominates the drawing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Optional

import graphviz  # type: ignore[import-untyped]
import networkx as nx  # type: ignore[import-untyped]

from topicmap.models import GraphEdge, LayoutSettings, Position, RankDirection, TopicGraph

logger = logging.getLogger(__name__)

# Width of a leading icon plus its separating space, in characters.
_ICON_CHARS = 2
_POINTS_PER_INCH = 72.0


def _inches(points: float) -> str:
    return f"{points / _POINTS_PER_INCH:.4f}"


class DotLayout:
    """Single-use layout run over one graph."""

    def __init__(self, graph: TopicGraph, settings: LayoutSettings):
        self.graph = graph
        self.settings = settings
        self.scale = settings.spacing_factor
        self.widths = {node.id: self._node_width(node.label, bool(node.data.icon)) for node in graph.nodes}
        self.digraph = self._weighted_graph()

    def _node_width(self, label: str, has_icon: bool) -> float:
        chars = len(label) + (_ICON_CHARS if has_icon else 0)
        return max(self.settings.min_node_width, chars * self.settings.char_width)

    def edge_weight(self, edge: GraphEdge) -> int:
        weight = self.settings.hierarchy_weight if edge.is_hierarchy else self.settings.cross_weight
        # dot only accepts integer weights
        return max(1, round(weight))

    def _weighted_graph(self) -> nx.DiGraph:
        digraph = nx.DiGraph()
        digraph.add_nodes_from(node.id for node in self.graph.nodes)
        for edge in self.graph.edges:
            source, target = edge.source, edge.target
            if source == target or source not in digraph or target not in digraph:
                continue
            # Parallel and opposite edges collapse into one weighted pair.
            if digraph.has_edge(target, source):
                source, target = target, source
            if digraph.has_edge(source, target):
                digraph[source][target]["weight"] += self.edge_weight(edge)
            else:
                digraph.add_edge(source, target, weight=self.edge_weight(edge))
        return digraph

    def to_dot(self) -> graphviz.Digraph:
        dot = graphviz.Digraph(
            name="topics",
            graph_attr={
                "rankdir": RankDirection(self.settings.rank_dir).value,
                "nodesep": _inches(self.settings.node_sep * self.scale),
                "ranksep": _inches(self.settings.rank_sep * self.scale),
                "ordering": "out",
            },
            node_attr={"shape": "box", "fixedsize": "true", "label": ""},
        )
        height = _inches(self.settings.node_height)
        for node_id in self.digraph.nodes:
            dot.node(node_id, width=_inches(self.widths[node_id]), height=height)
        for source, target, data in self.digraph.edges(data=True):
            dot.edge(source, target, weight=str(data["weight"]))
        return dot

    def parse_positions(self, rendered: str) -> dict[str, Position]:
        """
        Read node centres from ``dot -Tjson`` output.

        Graphviz measures in points with y growing upwards; the result is
        shifted so the bounding box starts at the padding and y grows
        downwards, as the renderers expect.
        """
        payload = json.loads(rendered)
        left, _, _, top = (float(v) for v in payload["bb"].split(","))
        padding = self.settings.padding

        positions: dict[str, Position] = {}
        for obj in payload.get("objects", []):
            name = obj.get("name")
            if name not in self.widths or "pos" not in obj:
                continue
            x, y = (float(v) for v in obj["pos"].split(","))
            positions[name] = Position(x=round(x - left + padding, 2), y=round(top - y + padding, 2))
        return positions

    def run(self) -> dict[str, Position]:
        rendered = self.to_dot().pipe(format="json", encoding="utf-8")
        return self.parse_positions(rendered)


def optimize_layout(graph: TopicGraph, settings: Optional[LayoutSettings] = None) -> TopicGraph:
    """Return a copy of ``graph`` whose nodes carry layered-layout positions.

    Nodes the layout cannot place keep ``position=None``; renderers default them.
    """
    settings = settings or LayoutSettings()
    if not graph.nodes:
        return TopicGraph(nodes=[], edges=list(graph.edges))

    try:
        positions = DotLayout(graph, settings).run()
    except graphviz.ExecutableNotFound:
        logger.warning("Graphviz dot is not installed; leaving node positions unset")
        positions = {}
    except (graphviz.CalledProcessError, KeyError, ValueError) as exc:
        logger.warning("Layout failed (%s); leaving node positions unset", exc)
        positions = {}

    missing = sum(1 for node in graph.nodes if node.id not in positions)
    if missing:
        logger.warning("Layout left %d node(s) without a position", missing)

    nodes = [replace(node, position=positions.get(node.id, node.position)) for node in graph.nodes]
    return TopicGraph(nodes=nodes, edges=list(graph.edges))
