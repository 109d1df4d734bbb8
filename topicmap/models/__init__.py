"""Model exports for pipeline stage boundaries."""

from topicmap.models.config import (
    AnalysisSettings,
    GraphSettings,
    LayoutSettings,
    OutputSettings,
    PipelineSettings,
    PreprocessingSettings,
)
from topicmap.models.enums import (
    HIERARCHY_EDGE,
    MindMapDirection,
    OutputFormat,
    RankDirection,
    RelationshipType,
    TopicOrigin,
)
from topicmap.models.graph import GraphEdge, GraphNode, NodeColors, Position, TopicGraph
from topicmap.models.outputs import JsonTree, JsonTreeNode, MindMapData, RadialMindMapNode
from topicmap.models.topics import Topic, TopicRelationship

__all__ = [
    "AnalysisSettings",
    "GraphEdge",
    "GraphNode",
    "GraphSettings",
    "HIERARCHY_EDGE",
    "JsonTree",
    "JsonTreeNode",
    "LayoutSettings",
    "MindMapData",
    "MindMapDirection",
    "NodeColors",
    "OutputFormat",
    "OutputSettings",
    "PipelineSettings",
    "Position",
    "PreprocessingSettings",
    "RadialMindMapNode",
    "RankDirection",
    "RelationshipType",
    "Topic",
    "TopicGraph",
    "TopicOrigin",
    "TopicRelationship",
]
