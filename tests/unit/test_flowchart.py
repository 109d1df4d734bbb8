"""
Unit tests for flowchart syntax generation.
"""

import re

import pytest

from topicmap.emitters import enhance_topic_icons, fallback_diagram, find_icon, to_flowchart_syntax
from topicmap.graph import build_topic_graph
from topicmap.models import NodeColors, RankDirection, Topic, TopicGraph
from topicmap.validation import validate_topics

NODE_LINE = re.compile(r'^  [A-Za-z_][A-Za-z0-9_]*\["[^"]*"\]$')


class ExplodingNode:
    """Graph node whose label cannot be read."""

    id = "node_0_1"
    level = 0
    data = Topic(title="Boom")
    colors = NodeColors(background="#fff", border="#000", text="#000")
    position = None

    @property
    def label(self):
        raise RuntimeError("label getter exploded")


def _graph(topics, **kwargs):
    return build_topic_graph(enhance_topic_icons(validate_topics(topics)), **kwargs)


class TestToFlowchartSyntax:
    """Test to_flowchart_syntax."""

    def test_planning_scenario(self, planning_topics, id_generator):
        """Header, class definitions, nodes and edges are emitted in order."""
        text = to_flowchart_syntax(_graph(planning_topics, id_generator=id_generator))
        lines = text.splitlines()

        assert lines[0] == "graph TD"
        assert lines[1] == "  %% Node styles"
        assert (
            "  classDef root fill:#FEF3C7,stroke:#D97706,stroke-width:3px,color:#92400E,font-weight:bold"
            in lines
        )
        assert "  classDef level1 fill:#E0F2FE,stroke:#0EA5E9,stroke-width:2px,color:#0C4A6E" in lines
        assert f'  node_0_1700000000000["{find_icon("planning")} Planning"]' in lines
        assert "  class node_0_1700000000000 root" in lines
        assert "  class node_1_1700000000000 level1" in lines
        assert "  node_0_1700000000000 -->|contains| node_1_1700000000000" in lines
        assert "  node_0_1700000000000 -->|contains| node_2_1700000000000" in lines

    def test_node_lines_match_grammar(self, project_topics):
        """Every node declaration is an identifier followed by a quoted label."""
        text = to_flowchart_syntax(_graph(project_topics))
        declarations = [line for line in text.splitlines() if '["' in line]

        assert len(declarations) == 7
        assert all(NODE_LINE.match(line) for line in declarations)

    def test_cross_edges_are_dotted(self, project_topics):
        """Relationship edges use the dotted arrow and their label."""
        text = to_flowchart_syntax(_graph(project_topics))

        assert "-.->|verifies|" in text
        assert "-.->|Part-of|" in text
        assert text.count("-->|") == 6

    @pytest.mark.parametrize(
        "direction,header",
        [
            (RankDirection.TB, "graph TD"),
            (RankDirection.BT, "graph BT"),
            (RankDirection.LR, "graph LR"),
            ("RL", "graph RL"),
        ],
    )
    def test_direction_header(self, planning_topics, direction, header):
        """The header follows the requested direction."""
        assert to_flowchart_syntax(_graph(planning_topics), direction).startswith(header + "\n")

    def test_special_characters_are_escaped(self):
        """Quotes and newlines never reach the diagram text raw."""
        topics = [
            {
                "title": 'Say "hi"\nthen leave',
                "subtopics": [{"title": "Pipes", "relationships": [{"to": 'Say "hi"\nthen leave', "type": "related", "description": "a|b"}]}],
            }
        ]
        text = to_flowchart_syntax(_graph(topics))

        assert "#quot;hi#quot; then leave" in text
        assert "-.->|a#124;b|" in text
        assert all(NODE_LINE.match(line) for line in text.splitlines() if '["' in line)

    def test_node_without_icon(self, planning_topics, id_generator):
        """Labels without an icon are emitted bare."""
        graph = build_topic_graph(planning_topics, id_generator=id_generator)

        assert '  node_1_1700000000000["Budget"]' in to_flowchart_syntax(graph)

    def test_empty_graph(self):
        """An empty graph still yields a parseable diagram."""
        text = to_flowchart_syntax(TopicGraph())

        assert text.startswith("graph TD\n")
        assert "classDef root" in text

    def test_exploding_label_falls_back(self):
        """A failure while generating returns the error diagram."""
        text = to_flowchart_syntax(TopicGraph(nodes=[ExplodingNode()], edges=[]))

        assert text.startswith("graph TD\n")
        assert 'error["Error Generating Mind Map"]' in text
        assert "label getter exploded" in text
        assert "error --> details" in text


class TestFallbackDiagram:
    """Test fallback_diagram."""

    def test_message_is_escaped(self):
        """Quotes in the error message cannot break the label."""
        text = fallback_diagram('bad "input"')

        assert 'details["bad #quot;input#quot;"]' in text
        assert "style error fill:#FEE2E2,stroke:#EF4444" in text

    def test_empty_message(self):
        """An empty message still produces a details node."""
        assert 'details["Unknown error"]' in fallback_diagram("")
