"""
End-to-end topic map generation.

``process_topics`` runs the synchronous core over an existing forest;
``process_content`` first obtains a forest for raw text through a
``TopicSource`` (analysis service with heuristic fallback).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from topicmap.analysis import TopicSource
from topicmap.emitters import (
    enhance_json_tree,
    enhance_topic_icons,
    fallback_diagram,
    to_flowchart_syntax,
    to_json_tree,
    to_mind_map_data,
    validate_json_tree,
)
from topicmap.exceptions import GraphConstructionError
from topicmap.graph import build_topic_graph, optimize_layout
from topicmap.models import (
    JsonTree,
    MindMapData,
    OutputFormat,
    PipelineSettings,
    Topic,
    TopicGraph,
    TopicOrigin,
)
from topicmap.validation import validate_topics

logger = logging.getLogger(__name__)

NO_TOPICS_MESSAGE = "No topics could be extracted from the content"


@dataclass
class PipelineResult:
    topics: list[Topic]
    language: str
    graph: TopicGraph
    flowchart: Optional[str] = None
    json_tree: Optional[JsonTree] = None
    mind_map: Optional[MindMapData] = None
    origin: Optional[TopicOrigin] = None
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "language": self.language,
            "topics": [topic.to_wire() for topic in self.topics],
        }
        if self.origin is not None:
            result["origin"] = TopicOrigin(self.origin).value
        if self.flowchart is not None:
            result["flowchart"] = self.flowchart
        if self.json_tree is not None:
            result["jsonTree"] = self.json_tree.to_wire()
        if self.mind_map is not None:
            result["mindMap"] = self.mind_map.to_wire()
        return result


def _wants(formats: set[OutputFormat], fmt: OutputFormat) -> bool:
    return OutputFormat.ALL in formats or fmt in formats


def _resolve_formats(formats: Optional[Iterable[Any]], settings: PipelineSettings) -> set[OutputFormat]:
    return {OutputFormat(fmt) for fmt in (formats if formats is not None else settings.output.formats)}


def process_topics(
    topics: Sequence[Any],
    language: Optional[str] = None,
    settings: Optional[PipelineSettings] = None,
    formats: Optional[Iterable[Any]] = None,
) -> PipelineResult:
    """
    Validate, build, lay out and emit a topic forest.

    Args:
        topics: Topic forest; ``Topic`` instances or raw mappings
        language: Content language code (defaults to ``settings.language``)
        settings: Pipeline settings (defaults if None)
        formats: Output formats to produce (defaults to ``settings.output.formats``)

    Returns:
        PipelineResult with the requested artifacts. ``json_tree`` and
        ``mind_map`` stay None when the JSON tree fails validation.

    Raises:
        GraphConstructionError: no valid topics, or an id collision
    """
    settings = settings or PipelineSettings()
    language = language or settings.language
    wanted = _resolve_formats(formats, settings)

    accepted = validate_topics(list(topics))
    if settings.output.enhance_with_icons:
        accepted = enhance_topic_icons(accepted)

    graph = build_topic_graph(
        accepted,
        namespace=settings.graph.namespace,
        max_label_length=settings.graph.max_label_length,
    )
    if settings.layout.enabled:
        graph = optimize_layout(graph, settings.layout)

    result = PipelineResult(topics=accepted, language=language, graph=graph)

    if _wants(wanted, OutputFormat.FLOWCHART):
        result.flowchart = to_flowchart_syntax(graph, settings.layout.rank_dir)

    if _wants(wanted, OutputFormat.JSON) or _wants(wanted, OutputFormat.MIND_MAP):
        tree = to_json_tree(accepted, language)
        if validate_json_tree(tree):
            result.json_tree = enhance_json_tree(tree)
            if _wants(wanted, OutputFormat.MIND_MAP):
                result.mind_map = to_mind_map_data(accepted, language, graph=graph)
        else:
            message = "JSON tree failed validation; skipping JSON and mind-map output"
            logger.warning(message)
            result.notes.append(message)

    logger.info(
        "Processed %d topic(s): %d nodes, %d edges",
        len(accepted),
        len(graph.nodes),
        len(graph.edges),
    )
    return result


async def process_content(
    text: str,
    source: Optional[TopicSource] = None,
    language: Optional[str] = None,
    settings: Optional[PipelineSettings] = None,
    formats: Optional[Iterable[Any]] = None,
) -> PipelineResult:
    """
    Obtain topics for ``text`` and run :func:`process_topics` on them.

    Content that yields no usable topics still produces a result: the
    flowchart is the labelled fallback diagram and a note says why.
    """
    settings = settings or PipelineSettings()
    source = source or TopicSource(settings=settings.analysis)

    fetched = await source.topics_for(text)
    try:
        result = process_topics(fetched.topics, language=language, settings=settings, formats=formats)
    except GraphConstructionError as exc:
        logger.warning("No topic map for this content: %s", exc)
        result = PipelineResult(topics=[], language=language or settings.language, graph=TopicGraph())
        if _wants(_resolve_formats(formats, settings), OutputFormat.FLOWCHART):
            result.flowchart = fallback_diagram(NO_TOPICS_MESSAGE)
        result.notes.append(f"{NO_TOPICS_MESSAGE}: {exc}")
    result.origin = fetched.origin
    if fetched.error:
        result.notes.insert(0, f"Analysis service unavailable: {fetched.error}")
    return result
