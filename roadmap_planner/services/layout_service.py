# services/layout_service.py
"""
Deterministic grid layout and styling for roadmap flowcharts
"""
import logging
from typing import Dict, List, Optional, Tuple

from ..models.requests import ErrorReport
from ..models.roadmap import NodeType, Roadmap, RoadmapNode
from ..models.view import (
    EdgeView,
    LegendEntry,
    NodePosition,
    NodeStyle,
    NodeView,
    ProgressStats,
    RoadmapView,
    SubjectDetail,
)

logger = logging.getLogger(__name__)

X_START = 100
Y_START = 100
X_STEP = 180
Y_STEP = 120

# Edge anchor relative to a node's top-left corner
EDGE_ANCHOR_X = 60
EDGE_ANCHOR_Y = 20

NODE_WIDTH = 140
NODE_HEIGHT = 80

NODE_STYLES: Dict[NodeType, NodeStyle] = {
    NodeType.FOUNDATION: NodeStyle(
        label="Foundation", background="#dbeafe", text="#1e40af", border="#93c5fd"
    ),
    NodeType.CORE: NodeStyle(
        label="Core", background="#fef9c3", text="#854d0e", border="#fde047"
    ),
    NodeType.SPECIALIZED: NodeStyle(
        label="Specialized", background="#f3e8ff", text="#6b21a8", border="#d8b4fe"
    ),
    NodeType.ELECTIVE: NodeStyle(
        label="Elective", background="#f3f4f6", text="#1f2937", border="#d1d5db"
    ),
}

COMPLETED_STYLE = NodeStyle(
    label="Completed", background="#22c55e", text="#ffffff", border="#16a34a"
)

_missing_styles = set(NodeType) - set(NODE_STYLES)
if _missing_styles:
    raise RuntimeError(f"No style defined for node types: {sorted(_missing_styles)}")


def node_style(node: RoadmapNode) -> NodeStyle:
    if node.completed:
        return COMPLETED_STYLE
    return NODE_STYLES[node.type]


def legend() -> List[LegendEntry]:
    entries = [LegendEntry(key=t.value, style=NODE_STYLES[t]) for t in NodeType]
    entries.append(LegendEntry(key="completed", style=COMPLETED_STYLE))
    return entries


def _unique_nodes(roadmap: Roadmap) -> List[RoadmapNode]:
    seen = set()
    unique = []
    for node in roadmap.nodes:
        if node.id in seen:
            logger.warning(f"Duplicate roadmap node id {node.id!r} skipped in layout")
            continue
        seen.add(node.id)
        unique.append(node)
    return unique


def compute_layout(roadmap: Roadmap) -> Dict[str, NodePosition]:
    """
    Place nodes on a grid: one row per (year, semester) in ascending order,
    one column per node ordered by name within the row.

    Coordinates present on the input nodes are ignored.
    """
    groups: Dict[Tuple[int, int], List[RoadmapNode]] = {}
    for node in _unique_nodes(roadmap):
        groups.setdefault((node.year, node.semester), []).append(node)

    positions: Dict[str, NodePosition] = {}
    for row, term in enumerate(sorted(groups)):
        members = sorted(groups[term], key=lambda node: (node.name, node.id))
        for column, node in enumerate(members):
            positions[node.id] = NodePosition(
                x=X_START + column * X_STEP,
                y=Y_START + row * Y_STEP,
            )
    return positions


def compute_edges(
    roadmap: Roadmap, positions: Dict[str, NodePosition]
) -> List[EdgeView]:
    """Edges for every connection whose target is on the roadmap"""
    edges = []
    for node in _unique_nodes(roadmap):
        origin = positions.get(node.id)
        if origin is None:
            continue
        for target_id in node.connects:
            target = positions.get(target_id)
            if target is None:
                continue
            edges.append(
                EdgeView(
                    source=node.id,
                    target=target_id,
                    x1=origin.x + EDGE_ANCHOR_X,
                    y1=origin.y + EDGE_ANCHOR_Y,
                    x2=target.x + EDGE_ANCHOR_X,
                    y2=target.y + EDGE_ANCHOR_Y,
                )
            )
    return edges


def canvas_size(positions: Dict[str, NodePosition]) -> Tuple[int, int]:
    """Width and height needed to draw every node with a margin"""
    if not positions:
        return X_START * 2, Y_START * 2
    width = max(p.x for p in positions.values()) + NODE_WIDTH + X_START
    height = max(p.y for p in positions.values()) + NODE_HEIGHT + Y_START
    return width, height


def compute_progress(roadmap: Roadmap) -> ProgressStats:
    completed = [node for node in roadmap.nodes if node.completed]
    return ProgressStats(
        completed=len(completed),
        total=len(roadmap.nodes),
        completed_credits=sum(node.credits for node in completed),
        total_credits=roadmap.total_credits,
        computed_credits=roadmap.computed_credits,
    )


def build_view(
    roadmap: Roadmap,
    selected: Optional[SubjectDetail] = None,
    error: Optional[ErrorReport] = None,
) -> RoadmapView:
    """Assemble everything a renderer needs to draw the roadmap"""
    positions = compute_layout(roadmap)
    width, height = canvas_size(positions)
    selected_id = selected.node_id if selected else None

    nodes = [
        NodeView(
            id=node.id,
            name=node.name,
            type=node.type,
            completed=node.completed,
            credits=node.credits,
            year=node.year,
            semester=node.semester,
            relevance_percent=round(node.relevance_score * 100),
            position=positions[node.id],
            style=node_style(node),
            selected=node.id == selected_id,
        )
        for node in _unique_nodes(roadmap)
    ]
    # Rows first, then columns
    nodes.sort(key=lambda view: (view.position.y, view.position.x))

    warnings = []
    if roadmap.declared_credits_mismatch:
        warnings.append(
            f"Declared total of {roadmap.total_credits} credits does not match "
            f"the {roadmap.computed_credits} credits of the listed subjects"
        )

    return RoadmapView(
        title=roadmap.title,
        description=roadmap.description,
        occupation=roadmap.occupation,
        reasoning=roadmap.reasoning,
        nodes=nodes,
        edges=compute_edges(roadmap, positions),
        legend=legend(),
        progress=compute_progress(roadmap),
        width=width,
        height=height,
        selected=selected,
        error=error,
        warnings=warnings,
    )
