# services/roadmap_session.py
"""
Roadmap session - orchestrates catalog loading, roadmap generation and
node interaction for one user
"""
import asyncio
import logging
import time
from enum import Enum
from typing import List, Optional

from pydantic import ValidationError

from .enrichment_service import EnrichmentService
from .interfaces.llm_interface import LLMServiceInterface
from .layout_service import build_view, compute_progress
from .response_interpreter import interpret_roadmap
from ..core.errors import (
    CatalogNotReadyError,
    EmptyCatalogError,
    EmptyOccupationError,
    EnrichmentUnavailableError,
    MissingCredentialError,
    RoadmapPlannerError,
    TransportError,
)
from ..models.requests import ErrorReport, RoadmapRequest
from ..models.roadmap import Roadmap
from ..models.view import ProgressStats, RoadmapView, SubjectDetail
from ..repositories.interfaces.subject_repository import SubjectRepositoryInterface

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    GENERATING = "generating"
    DISPLAYING = "displaying"


class RoadmapSession:
    """Owns the current roadmap, selection and error banner"""

    def __init__(
        self,
        subject_repository: SubjectRepositoryInterface,
        llm_service: LLMServiceInterface,
        enrichment_service: Optional[EnrichmentService] = None,
    ):
        self.subject_repository = subject_repository
        self.llm_service = llm_service
        self.enrichment_service = enrichment_service

        self.state = SessionState.IDLE
        self.roadmap: Optional[Roadmap] = None
        self.selected: Optional[SubjectDetail] = None
        self.error: Optional[ErrorReport] = None
        self.history: List[str] = []

        # Requests issued while one is in flight wait for it to resolve
        self._generation_lock = asyncio.Lock()

    @property
    def can_generate(self) -> bool:
        return self.llm_service.available() and self.state in (
            SessionState.READY,
            SessionState.DISPLAYING,
        )

    async def start(self) -> None:
        """Load the catalog; failures leave an empty catalog and a banner"""
        if self.state != SessionState.IDLE:
            return

        self.state = SessionState.LOADING
        subjects = await self.subject_repository.load()
        load_error = self.subject_repository.last_error
        if load_error is not None:
            self.error = load_error.to_report()
        logger.info(f"Session ready with {len(subjects)} subjects")
        self.state = SessionState.READY

    async def enrich_catalog(self, occupation: Optional[str] = None) -> int:
        """
        Score every catalog subject for career relevance, one request at a
        time. Returns the number of subjects whose record changed.
        """
        if self.enrichment_service is None:
            self.error = EnrichmentUnavailableError().to_report()
            return 0
        if not self.llm_service.available():
            self.error = MissingCredentialError().to_report()
            return 0
        if self.state in (SessionState.IDLE, SessionState.LOADING):
            self.error = CatalogNotReadyError().to_report()
            return 0

        async with self._generation_lock:
            before = self.subject_repository.subjects
            try:
                after = await self.enrichment_service.enrich_catalog(
                    self.subject_repository, occupation
                )
            except Exception as e:
                logger.error(f"Career relevance update failed: {e}", exc_info=True)
                self.error = TransportError(detail=str(e)).to_report()
                return 0

        return sum(1 for old, new in zip(before, after) if old != new)

    async def generate(self, occupation: str) -> Optional[Roadmap]:
        """
        Request a new roadmap for an occupation.

        Returns the new roadmap, or None when the request was rejected or
        failed; the reason is left in ``self.error``.
        """
        try:
            request = RoadmapRequest(occupation=occupation)
        except ValidationError:
            self.error = EmptyOccupationError().to_report()
            return None

        if self.state in (SessionState.IDLE, SessionState.LOADING):
            self.error = CatalogNotReadyError().to_report()
            return None
        if not self.llm_service.available():
            self.error = MissingCredentialError().to_report()
            return None

        subjects = self.subject_repository.subjects
        if not subjects:
            self.error = EmptyCatalogError().to_report()
            return None

        async with self._generation_lock:
            return await self._generate(request.occupation, subjects)

    async def _generate(self, occupation: str, subjects) -> Optional[Roadmap]:
        self.state = SessionState.GENERATING
        self.error = None
        self.history.append(occupation)
        start_time = time.time()

        try:
            logger.info(
                f"Generating roadmap for {occupation!r} "
                f"from {len(subjects)} subjects"
            )
            text = await self.llm_service.generate_roadmap_text(
                occupation, subjects
            )
            roadmap = interpret_roadmap(text)
        except RoadmapPlannerError as e:
            logger.error(f"Failed to generate roadmap: {e}")
            return self._fail(e)
        except Exception as e:
            logger.error(f"Unexpected error generating roadmap: {e}", exc_info=True)
            return self._fail(TransportError(detail=str(e)))

        self.roadmap = roadmap
        self.selected = None
        self.state = SessionState.DISPLAYING
        logger.info(
            f"Generated roadmap with {len(roadmap.nodes)} nodes "
            f"in {time.time() - start_time:.2f}s"
        )
        return roadmap

    def _fail(self, error: RoadmapPlannerError) -> Optional[Roadmap]:
        self.error = ErrorReport(
            kind=error.kind, message=f"Failed to generate roadmap: {error}"
        )
        if self.roadmap is not None:
            self.state = SessionState.DISPLAYING
        else:
            self.state = SessionState.READY
        return None

    async def select_node(self, node_id: str) -> Optional[SubjectDetail]:
        """Select a node and resolve its catalog subject for the detail panel"""
        if self.roadmap is None:
            return None
        node = self.roadmap.find_node(node_id)
        if node is None:
            return None

        subject = await self.subject_repository.find_by_id(node_id)
        if subject is None:
            logger.info(f"Roadmap node {node_id!r} has no catalog subject")
            self.selected = SubjectDetail(
                node_id=node.id,
                code="",
                name=node.name,
                credits=node.credits,
                year=node.year,
                semester=node.semester,
                department="",
                description="",
                relevance_score=node.relevance_score,
            )
            return self.selected

        reason = None
        if self.roadmap.occupation:
            reason = subject.relevance_reason_for(self.roadmap.occupation)
        self.selected = SubjectDetail(
            node_id=node.id,
            code=subject.code,
            name=subject.name,
            credits=subject.credits,
            year=subject.year,
            semester=subject.semester,
            department=subject.department,
            description=subject.description,
            syllabus=list(subject.syllabus),
            prerequisites=list(subject.prerequisites),
            learning_outcomes=list(subject.learning_outcomes),
            relevance_score=node.relevance_score,
            relevance_reason=reason,
        )
        return self.selected

    def clear_selection(self) -> None:
        self.selected = None

    def toggle_completed(self, node_id: str) -> Optional[Roadmap]:
        """Flip one node's completed flag on a copy of the roadmap"""
        if self.roadmap is None or self.roadmap.find_node(node_id) is None:
            return None
        self.roadmap = self.roadmap.with_completion_toggled(node_id)
        return self.roadmap

    def dismiss_error(self) -> None:
        self.error = None

    @property
    def progress(self) -> ProgressStats:
        if self.roadmap is None:
            return ProgressStats()
        return compute_progress(self.roadmap)

    def view(self) -> Optional[RoadmapView]:
        if self.roadmap is None:
            return None
        return build_view(self.roadmap, selected=self.selected, error=self.error)
