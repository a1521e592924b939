# models/view.py
"""
Render-ready view models for a displayed roadmap
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .requests import ErrorReport
from .roadmap import NodeType


class NodePosition(BaseModel):
    x: int
    y: int


class NodeStyle(BaseModel):
    """Colors used to draw a node or legend swatch"""

    label: str
    background: str
    text: str
    border: str


class NodeView(BaseModel):
    id: str
    name: str
    type: NodeType
    completed: bool
    credits: int
    year: int
    semester: int
    relevance_percent: int
    position: NodePosition
    style: NodeStyle
    selected: bool = False

    @property
    def term_label(self) -> str:
        return f"Y{self.year}S{self.semester}"


class EdgeView(BaseModel):
    source: str
    target: str
    x1: int
    y1: int
    x2: int
    y2: int


class LegendEntry(BaseModel):
    key: str
    style: NodeStyle


class ProgressStats(BaseModel):
    """Progress derived from the current roadmap state"""

    completed: int = 0
    total: int = 0
    completed_credits: int = 0
    total_credits: int = 0
    computed_credits: int = 0

    @property
    def percent_complete(self) -> int:
        if not self.total:
            return 0
        return round(self.completed * 100 / self.total)


class SubjectDetail(BaseModel):
    """Catalog details shown for a selected node"""

    node_id: str
    code: str
    name: str
    credits: int
    year: int
    semester: int
    department: str
    description: str
    syllabus: List[str] = Field(default_factory=list)
    prerequisites: List[str] = Field(default_factory=list)
    learning_outcomes: List[str] = Field(default_factory=list)
    relevance_score: Optional[float] = None
    relevance_reason: Optional[str] = None


class RoadmapView(BaseModel):
    title: str
    description: str
    occupation: str
    reasoning: str
    nodes: List[NodeView]
    edges: List[EdgeView]
    legend: List[LegendEntry]
    progress: ProgressStats
    width: int
    height: int
    selected: Optional[SubjectDetail] = None
    error: Optional[ErrorReport] = None
    warnings: List[str] = Field(default_factory=list)

    def positions(self) -> Dict[str, NodePosition]:
        return {node.id: node.position for node in self.nodes}
