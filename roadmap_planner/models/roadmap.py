# models/roadmap.py
"""
AI-generated roadmap models
"""
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    """Progression role of a subject within a roadmap"""

    FOUNDATION = "foundation"
    CORE = "core"
    SPECIALIZED = "specialized"
    ELECTIVE = "elective"


class RoadmapNode(BaseModel):
    """One subject placed on a roadmap"""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    name: str
    type: NodeType = NodeType.ELECTIVE
    completed: bool = False
    connects: List[str] = Field(default_factory=list)
    credits: int = Field(0, ge=0)
    year: int = 1
    semester: int = 1
    relevance_score: float = 0.0

    # Coordinates proposed by the AI; kept for round-trips, never used for layout
    x: Optional[float] = None
    y: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("connects", mode="before")
    @classmethod
    def _coerce_connects(cls, value):
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return [str(item) for item in value]
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        if isinstance(value, NodeType):
            return value
        if isinstance(value, str):
            try:
                return NodeType(value.strip().lower())
            except ValueError:
                pass
        logger.warning(f"Unknown node type {value!r}, treating as elective")
        return NodeType.ELECTIVE


class Roadmap(BaseModel):
    """A study plan proposed for one occupation"""

    title: str = ""
    description: str = ""
    occupation: str = ""
    nodes: List[RoadmapNode]
    total_credits: int = 0
    reasoning: str = ""

    @property
    def computed_credits(self) -> int:
        """Sum of node credits, independent of the declared total"""
        return sum(node.credits for node in self.nodes)

    @property
    def declared_credits_mismatch(self) -> bool:
        return self.computed_credits != self.total_credits

    def find_node(self, node_id: str) -> Optional[RoadmapNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def with_completion_toggled(self, node_id: str) -> "Roadmap":
        """Return a copy with one node's completed flag flipped.

        Untouched nodes are shared with the original; the toggled node
        and the node list are new objects.
        """
        nodes = [
            node.model_copy(update={"completed": not node.completed})
            if node.id == node_id
            else node
            for node in self.nodes
        ]
        return self.model_copy(update={"nodes": nodes})
