"""
Terminal Display Implementation.

Draws the render-ready roadmap view model on a console. This is the only
place in the package that prints; the session and layout code return data.
"""

from itertools import groupby
from typing import Dict, List, Optional

from ..models.requests import ErrorReport
from ..models.roadmap import NodeType
from ..models.subject import Subject
from ..models.view import NodeView, ProgressStats, RoadmapView, SubjectDetail


class TerminalDisplay:
    """Pretty terminal output for roadmaps and catalog listings."""

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"

    TYPE_COLORS: Dict[NodeType, str] = {
        NodeType.FOUNDATION: BLUE,
        NodeType.CORE: YELLOW,
        NodeType.SPECIALIZED: MAGENTA,
        NodeType.ELECTIVE: WHITE,
    }

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_error(cls, error: Optional[ErrorReport]):
        if error is None:
            return
        print(f"\n  {cls.RED}✗ {error.message}{cls.RESET}")

    @classmethod
    def print_warnings(cls, warnings: List[str]):
        for warning in warnings:
            print(f"  {cls.YELLOW}! {warning}{cls.RESET}")

    @classmethod
    def node_label(cls, node: NodeView, index: int) -> str:
        """One flowchart box, e.g. `[3] ✓ Signals (2cr, 85%)`."""
        if node.completed:
            color = f"{cls.BG_GREEN}{cls.WHITE}"
            mark = "✓"
        else:
            color = cls.TYPE_COLORS[node.type]
            mark = "○"
        if node.selected:
            color = f"{cls.BOLD}{color}"
        return (
            f"{color}[{index}] {mark} {node.name}{cls.RESET}"
            f"{cls.DIM} ({node.credits}cr, {node.relevance_percent}%){cls.RESET}"
        )

    @classmethod
    def print_progress(cls, progress: ProgressStats):
        print(
            f"  {cls.BOLD}Progress:{cls.RESET} {progress.completed}/{progress.total} subjects "
            f"({progress.percent_complete}%) • "
            f"{progress.completed_credits}/{progress.total_credits} credits"
        )

    @classmethod
    def print_roadmap(cls, view: RoadmapView):
        """Print the roadmap flowchart, one row per year and semester."""
        cls.print_header(f"{view.title.upper() or 'ROADMAP'}")
        if view.description:
            print(f"  {view.description}")
        if view.occupation:
            print(f"  {cls.BOLD}Occupation:{cls.RESET} {view.occupation}")
        cls.print_progress(view.progress)
        cls.print_warnings(view.warnings)

        if view.reasoning:
            cls.print_subheader("AI Reasoning")
            print(f"  {cls.DIM}{view.reasoning}{cls.RESET}")

        cls.print_subheader("Flowchart")
        numbers = cls.node_numbers(view)
        for _, row in groupby(view.nodes, key=lambda node: node.position.y):
            row = list(row)
            term = row[0].term_label
            labels = "   ".join(cls.node_label(node, numbers[node.id]) for node in row)
            print(f"  {cls.BOLD}{term:<5}{cls.RESET} {labels}")

        if view.edges:
            cls.print_subheader("Connections")
            names = {node.id: node.name for node in view.nodes}
            for edge in view.edges:
                print(
                    f"  {cls.DIM}{names[edge.source]} → {names[edge.target]}{cls.RESET}"
                )

        cls.print_legend(view)

        if view.selected:
            cls.print_subject_detail(view.selected)
        cls.print_error(view.error)

    @classmethod
    def node_numbers(cls, view: RoadmapView) -> Dict[str, int]:
        """Stable 1-based numbers used to pick nodes at the prompt."""
        return {node.id: index for index, node in enumerate(view.nodes, start=1)}

    @classmethod
    def print_legend(cls, view: RoadmapView):
        parts = []
        for entry in view.legend:
            if entry.key == "completed":
                color = cls.GREEN
            else:
                color = cls.TYPE_COLORS[NodeType(entry.key)]
            parts.append(f"{color}■ {entry.style.label}{cls.RESET}")
        print(f"\n  {'  '.join(parts)}")

    @classmethod
    def print_subject_detail(cls, detail: SubjectDetail):
        """Print the catalog entry behind a selected node."""
        title = f"{detail.code}: {detail.name}" if detail.code else detail.name
        cls.print_subheader(title)
        print(
            f"  {cls.BOLD}Credits:{cls.RESET} {detail.credits}   "
            f"{cls.BOLD}Term:{cls.RESET} Year {detail.year}, Semester {detail.semester}"
        )
        if detail.department:
            print(f"  {cls.BOLD}Department:{cls.RESET} {detail.department}")
        if detail.relevance_score is not None:
            print(
                f"  {cls.BOLD}Relevance:{cls.RESET} {round(detail.relevance_score * 100)}%"
            )
        if detail.relevance_reason:
            print(f"  {cls.DIM}{detail.relevance_reason}{cls.RESET}")
        if detail.description:
            print(f"\n  {detail.description}")
        else:
            print(f"\n  {cls.DIM}(not found in the loaded catalog){cls.RESET}")
        if detail.syllabus:
            print(f"\n  {cls.BOLD}Syllabus:{cls.RESET}")
            for topic in detail.syllabus:
                print(f"    • {topic}")
        if detail.learning_outcomes:
            print(f"\n  {cls.BOLD}Learning outcomes:{cls.RESET}")
            for outcome in detail.learning_outcomes:
                print(f"    • {outcome}")
        if detail.prerequisites:
            print(f"\n  {cls.BOLD}Prerequisites:{cls.RESET} {', '.join(detail.prerequisites)}")

    @classmethod
    def print_subjects(cls, subjects: List[Subject], occupation: Optional[str] = None):
        """Print a catalog listing."""
        cls.print_header(f"SYLLABUS CATALOG ({len(subjects)} subjects)")
        print(f"\n  {cls.BOLD}{'CODE':<10} {'NAME':<40} {'CR':>3} {'TERM':<6} {'REL'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
        for subject in subjects:
            relevance = subject.relevance_for(occupation) if occupation else None
            relevance_str = f"{relevance:.2f}" if relevance is not None else "-"
            term = f"Y{subject.year}S{subject.semester}"
            print(
                f"  {subject.code:<10} {subject.name[:40]:<40} "
                f"{subject.credits:>3} {term:<6} {relevance_str}"
            )
