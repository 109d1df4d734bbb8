"""
Unit tests for node ids and topic graph construction.
"""

import pytest

from topicmap.exceptions import GraphConstructionError
from topicmap.graph import (
    PALETTE,
    GraphBuilder,
    NodeIdGenerator,
    build_topic_graph,
    colors_for_level,
    hierarchy_label,
    sanitize_identifier,
    tier_for_level,
    truncate_label,
)
from topicmap.models import HIERARCHY_EDGE, Topic, TopicRelationship


class ConstantIdGenerator:
    """Generator that always returns the same id."""

    def next_id(self):
        return "node_same"


def _titles(graph):
    return {node.id: node.data.title for node in graph.nodes}


class TestNodeIdGenerator:
    """Test NodeIdGenerator and identifier sanitising."""

    def test_counter_and_clock(self, fixed_clock):
        """Ids combine namespace, counter and timestamp."""
        generator = NodeIdGenerator("node", clock=fixed_clock)

        assert generator.next_id() == "node_0_1700000000000"
        assert generator() == "node_1_1700000000000"

    def test_generators_do_not_share_state(self, fixed_clock):
        """Two generators count independently."""
        first = NodeIdGenerator("a", clock=fixed_clock)
        second = NodeIdGenerator("a", clock=fixed_clock)
        first.next_id()

        assert second.next_id() == "a_0_1700000000000"

    def test_namespace_is_sanitised(self, fixed_clock):
        """Illegal characters in the namespace are replaced."""
        assert NodeIdGenerator("my-map v2", clock=fixed_clock).namespace == "my_map_v2"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("node_1_2", "node_1_2"),
            ("a-b.c", "a_b_c"),
            ("9lives", "n9lives"),
            ("", "node"),
        ],
    )
    def test_sanitize_identifier(self, raw, expected):
        """Only alphanumerics and underscores survive, never a leading digit."""
        assert sanitize_identifier(raw) == expected


class TestLabelsAndPalette:
    """Test label helpers and depth colours."""

    def test_truncate_label(self):
        """Long titles are cut to 47 characters plus an ellipsis."""
        title = "x" * 60

        assert truncate_label(title) == "x" * 47 + "..."
        assert len(truncate_label(title)) == 50
        assert truncate_label("x" * 50) == "x" * 50

    def test_hierarchy_label_by_parent_level(self):
        """Edge wording depends on the parent's depth."""
        plain = Topic(title="Child")
        related = Topic(title="Child", relationships=[TopicRelationship(to="X", type="depends")])

        assert hierarchy_label(plain, 0) == "contains"
        assert hierarchy_label(related, 1) == "includes"
        assert hierarchy_label(related, 2) == "Depends"
        assert hierarchy_label(plain, 3) == "relates to"

    def test_palette_tiers(self):
        """Levels past three reuse the last tier."""
        assert list(PALETTE) == ["root", "level1", "level2", "level3"]
        assert tier_for_level(0) == "root"
        assert tier_for_level(7) == "level3"
        assert colors_for_level(0).background == "#FEF3C7"
        assert colors_for_level(9) == PALETTE["level3"]


class TestBuildTopicGraph:
    """Test build_topic_graph."""

    def test_planning_scenario(self, planning_topics, id_generator):
        """Root with two children gives three nodes and two 'contains' edges."""
        graph = build_topic_graph(planning_topics, id_generator=id_generator)

        assert [node.data.title for node in graph.nodes] == ["Planning", "Budget", "Schedule"]
        assert [node.level for node in graph.nodes] == [0, 1, 1]
        assert graph.nodes[0].colors == PALETTE["root"]
        assert graph.nodes[1].colors == PALETTE["level1"]
        assert all(node.position is None for node in graph.nodes)

        root_id = graph.nodes[0].id
        assert [(e.source, e.type, e.label) for e in graph.edges] == [
            (root_id, HIERARCHY_EDGE, "contains"),
            (root_id, HIERARCHY_EDGE, "contains"),
        ]
        assert graph.children_of(root_id) == [graph.nodes[1].id, graph.nodes[2].id]

    def test_ids_are_unique(self, project_topics):
        """Every node gets a distinct id."""
        graph = build_topic_graph(project_topics)
        ids = [node.id for node in graph.nodes]

        assert len(ids) == 7
        assert len(set(ids)) == len(ids)

    def test_namespace_in_ids(self, planning_topics):
        """Ids carry the requested namespace."""
        graph = build_topic_graph(planning_topics, namespace="doc")

        assert all(node.id.startswith("doc_") for node in graph.nodes)

    def test_hierarchy_fidelity(self, project_topics):
        """Each accepted topic has one hierarchy edge per accepted subtopic."""
        graph = build_topic_graph(project_topics)
        titles = _titles(graph)

        for node in graph.nodes:
            child_titles = [titles[child] for child in graph.children_of(node.id)]
            assert child_titles == [sub.title for sub in node.data.subtopics]

    def test_hierarchy_labels_by_depth(self, project_topics):
        """Root edges say 'contains', level-one edges say 'includes'."""
        graph = build_topic_graph(project_topics)
        titles = _titles(graph)
        labels = {(titles[e.source], titles[e.target]): e.label for e in graph.hierarchy_edges()}

        assert labels[("Project", "Design")] == "contains"
        assert labels[("Design", "Architecture")] == "includes"
        assert labels[("Design", "Interface")] == "includes"

    def test_invalid_subtree_is_skipped(self, id_generator):
        """A malformed subtopic is dropped along with its descendants only."""
        topics = [
            {
                "title": "Root",
                "subtopics": [
                    {"title": 123, "subtopics": [{"title": "Orphan"}]},
                    {"title": "A", "subtopics": [{"title": "A1", "examples": "bad"}, {"title": "A2"}]},
                    {"title": "B"},
                ],
            },
            "not a topic",
        ]
        graph = build_topic_graph(topics, id_generator=id_generator)

        assert [node.data.title for node in graph.nodes] == ["Root", "A", "A2", "B"]
        assert len(graph.hierarchy_edges()) == 3
        assert [sub.title for sub in graph.nodes[0].data.subtopics] == ["A", "B"]

    def test_numeric_citations_keep_subtree(self, id_generator):
        """Arrays of non-strings are still arrays, so the subtopic survives."""
        graph = build_topic_graph(
            [{"title": "Root", "subtopics": [{"title": "Kid", "citations": [2020]}]}],
            id_generator=id_generator,
        )

        assert [node.data.title for node in graph.nodes] == ["Root", "Kid"]
        assert graph.nodes[1].data.citations == ["2020"]

    def test_empty_forest_raises(self):
        """An empty forest is a construction error."""
        with pytest.raises(GraphConstructionError, match="Invalid or empty topics array"):
            build_topic_graph([])

    def test_non_list_raises(self):
        """A forest must be a list."""
        with pytest.raises(GraphConstructionError):
            build_topic_graph({"title": "Planning"})

    def test_duplicate_id_raises(self, planning_topics):
        """An id collision aborts the build."""
        with pytest.raises(GraphConstructionError, match="Duplicate node ID detected: node_same"):
            build_topic_graph(planning_topics, id_generator=ConstantIdGenerator())

    def test_builders_are_independent(self, planning_topics, fixed_clock):
        """Separate builds never collide even with a frozen clock."""
        first = GraphBuilder(id_generator=NodeIdGenerator("node", clock=fixed_clock)).build(planning_topics)
        second = GraphBuilder(id_generator=NodeIdGenerator("node", clock=fixed_clock)).build(planning_topics)

        assert [n.id for n in first.nodes] == [n.id for n in second.nodes]

    def test_long_titles_are_truncated(self):
        """Labels respect the configured maximum length."""
        graph = build_topic_graph([{"title": "A" * 80}], max_label_length=20)

        assert graph.nodes[0].label == "A" * 17 + "..."
        assert graph.nodes[0].data.title == "A" * 80


class TestCrossReferences:
    """Test relationship edges."""

    def test_backward_reference_resolves(self, project_topics):
        """A relationship to an already-built node becomes an edge."""
        graph = build_topic_graph(project_topics)
        titles = _titles(graph)
        cross = [(titles[e.source], titles[e.target], e.type, e.label) for e in graph.cross_edges()]

        assert ("Testing", "Design", "depends", "verifies") in cross
        assert ("Architecture", "Design", "part-of", "Part-of") in cross

    def test_forward_reference_is_dropped(self, project_topics):
        """A relationship to a later sibling is not resolved."""
        graph = build_topic_graph(project_topics)
        titles = _titles(graph)
        pairs = {(titles[e.source], titles[e.target]) for e in graph.cross_edges()}

        assert ("Testing", "Release") not in pairs

    def test_reference_order_between_siblings(self):
        """A -> B is dropped when A precedes B; B -> A is kept."""
        topics = [
            {"title": "A", "relationships": [{"to": "B", "type": "depends"}]},
            {"title": "B", "relationships": [{"to": "A", "type": "related"}]},
        ]
        graph = build_topic_graph(topics)
        titles = _titles(graph)

        assert [(titles[e.source], titles[e.target], e.label) for e in graph.cross_edges()] == [
            ("B", "A", "Related")
        ]

    def test_parent_reference_to_own_child(self):
        """Children are built before their parent's references resolve."""
        graph = build_topic_graph(
            [{"title": "Parent", "relationships": [{"to": "Kid", "type": "influences"}], "subtopics": [{"title": "Kid"}]}]
        )
        titles = _titles(graph)

        assert [(titles[e.source], titles[e.target]) for e in graph.cross_edges()] == [("Parent", "Kid")]

    def test_unknown_target_is_dropped(self):
        """References to titles that never appear produce no edge."""
        graph = build_topic_graph([{"title": "A", "relationships": [{"to": "Nowhere", "type": "related"}]}])

        assert graph.cross_edges() == []
