"""Enum definitions shared by topics, graphs and emitters."""

from enum import Enum


class RelationshipType(str, Enum):
    RELATED = "related"
    DEPENDS = "depends"
    INFLUENCES = "influences"
    PART_OF = "part-of"


class RankDirection(str, Enum):
    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"


class MindMapDirection(str, Enum):
    RIGHT = "right"
    LEFT = "left"


class OutputFormat(str, Enum):
    FLOWCHART = "flowchart"
    JSON = "json"
    MIND_MAP = "mind_map"
    ALL = "all"


class TopicOrigin(str, Enum):
    AI = "ai"
    HEURISTIC = "heuristic"


HIERARCHY_EDGE = "hierarchy"
