# services/enrichment_service.py
"""
Adds AI-estimated career relevance to catalog subjects
"""
import logging
import time
from typing import List, Optional

from .interfaces.llm_interface import LLMServiceInterface
from .response_interpreter import interpret_relevance
from ..models.subject import Subject
from ..repositories.interfaces.subject_repository import SubjectRepositoryInterface

logger = logging.getLogger(__name__)


class EnrichmentService:
    """Scores subjects one at a time; a failed subject keeps its original record"""

    def __init__(self, llm_service: LLMServiceInterface):
        self.llm_service = llm_service

    async def enrich_subject(
        self, subject: Subject, occupation: Optional[str] = None
    ) -> Subject:
        """Return a copy of the subject with merged relevance scores"""
        text = await self.llm_service.assess_relevance_text(subject, occupation)
        assessment = interpret_relevance(text, occupation)

        relevance = dict(subject.career_relevance or {})
        relevance.update(assessment.scores)
        reasons = dict(subject.career_relevance_reason or {})
        reasons.update(assessment.reasons)

        return subject.model_copy(
            update={
                "career_relevance": relevance,
                "career_relevance_reason": reasons or None,
            }
        )

    async def enrich(
        self, subjects: List[Subject], occupation: Optional[str] = None
    ) -> List[Subject]:
        """Enrich subjects sequentially, in catalog order"""
        if not self.llm_service.available():
            logger.warning("Skipping career relevance update: no API key configured")
            return list(subjects)

        start_time = time.time()
        enriched = []
        failures = 0

        for subject in subjects:
            try:
                enriched.append(await self.enrich_subject(subject, occupation))
            except Exception as e:
                failures += 1
                logger.warning(
                    f"Keeping original record for {subject.id}: {e}"
                )
                enriched.append(subject)

        logger.info(
            f"Enriched {len(subjects) - failures}/{len(subjects)} subjects "
            f"in {time.time() - start_time:.2f}s"
        )
        return enriched

    async def enrich_catalog(
        self,
        repository: SubjectRepositoryInterface,
        occupation: Optional[str] = None,
    ) -> List[Subject]:
        """Enrich the loaded catalog and replace it wholesale"""
        subjects = await repository.load()
        enriched = await self.enrich(subjects, occupation)
        repository.replace_subjects(enriched)
        return enriched
