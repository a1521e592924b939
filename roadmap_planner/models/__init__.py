"""
Data models package
"""
from .requests import ErrorReport, RelevanceAssessment, RoadmapRequest
from .roadmap import NodeType, Roadmap, RoadmapNode
from .subject import Catalog, Subject, normalize_occupation
from .view import (
    EdgeView,
    LegendEntry,
    NodePosition,
    NodeStyle,
    NodeView,
    ProgressStats,
    RoadmapView,
    SubjectDetail,
)

__all__ = [
    "Catalog",
    "EdgeView",
    "ErrorReport",
    "LegendEntry",
    "NodePosition",
    "NodeStyle",
    "NodeType",
    "NodeView",
    "ProgressStats",
    "RelevanceAssessment",
    "Roadmap",
    "RoadmapNode",
    "RoadmapRequest",
    "RoadmapView",
    "Subject",
    "SubjectDetail",
    "normalize_occupation",
]
