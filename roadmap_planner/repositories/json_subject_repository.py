# repositories/json_subject_repository.py
"""
Subject repository backed by a static JSON syllabus document
"""
import asyncio
import json
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from .interfaces.subject_repository import SubjectRepositoryInterface
from ..core.errors import CatalogLoadError
from ..models.subject import Catalog, Subject, normalize_occupation

logger = logging.getLogger(__name__)


class JsonSubjectRepository(SubjectRepositoryInterface):
    """Loads the syllabus once and serves read-only queries from memory"""

    def __init__(self, catalog_path: Union[str, Path]):
        self.catalog_path = Path(catalog_path)
        self._subjects: List[Subject] = []
        self._loaded = False
        self._last_error: Optional[CatalogLoadError] = None
        self._load_task: Optional[asyncio.Task] = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def last_error(self) -> Optional[CatalogLoadError]:
        return self._last_error

    @property
    def subjects(self) -> List[Subject]:
        return list(self._subjects)

    async def load(self) -> List[Subject]:
        """Load the catalog; the first call wins and later calls reuse it"""
        if self._loaded:
            return self.subjects

        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self._load())

        await asyncio.shield(self._load_task)
        return self.subjects

    async def _load(self) -> None:
        start_time = time.time()
        try:
            raw = await asyncio.to_thread(self.catalog_path.read_text, encoding="utf-8")
            subjects = self._parse(raw)
            self._subjects = subjects
            logger.info(
                f"Loaded {len(subjects)} subjects from {self.catalog_path} "
                f"in {time.time() - start_time:.3f}s"
            )
        except CatalogLoadError as e:
            self._fail(e)
        except (OSError, UnicodeDecodeError) as e:
            self._fail(CatalogLoadError(detail=str(e)))
        finally:
            self._loaded = True

    def _parse(self, raw: str) -> List[Subject]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(detail=f"malformed JSON ({e})")

        if not isinstance(data, dict) or not isinstance(data.get("subjects"), list):
            raise CatalogLoadError(detail="missing top-level 'subjects' list")

        try:
            return Catalog.model_validate(data).subjects
        except ValidationError as e:
            raise CatalogLoadError(
                detail=f"{e.error_count()} invalid subject field(s)"
            )

    def _fail(self, error: CatalogLoadError) -> None:
        logger.error(f"Error loading syllabus data from {self.catalog_path}: {error}")
        self._subjects = []
        self._last_error = error

    async def filter_by_year(self, year: int) -> List[Subject]:
        subjects = await self.load()
        return [subject for subject in subjects if subject.year == year]

    async def filter_by_year_semester(self, year: int, semester: int) -> List[Subject]:
        subjects = await self.load()
        return [
            subject
            for subject in subjects
            if subject.year == year and subject.semester == semester
        ]

    async def find_by_id(self, subject_id: str) -> Optional[Subject]:
        subjects = await self.load()
        for subject in subjects:
            if subject.id == subject_id:
                return subject
        return None

    async def filter_by_keywords(self, keywords: List[str]) -> List[Subject]:
        subjects = await self.load()
        needles = [keyword.lower() for keyword in keywords if keyword]
        if not needles:
            return []

        def matches(subject: Subject) -> bool:
            fields = [k.lower() for k in subject.keywords]
            fields.append(subject.name.lower())
            fields.append(subject.description.lower())
            return any(needle in field for needle in needles for field in fields)

        return [subject for subject in subjects if matches(subject)]

    async def total_credits(self) -> int:
        subjects = await self.load()
        return sum(subject.credits for subject in subjects)

    async def filter_by_career_relevance(
        self, occupation: str, threshold: float = 0.5
    ) -> List[Subject]:
        subjects = await self.load()
        key = normalize_occupation(occupation)

        scored = [
            (subject, subject.career_relevance[key])
            for subject in subjects
            if subject.career_relevance
            and subject.career_relevance.get(key) is not None
            and subject.career_relevance[key] >= threshold
        ]
        # sorted() is stable, so equal scores keep catalog order
        scored = sorted(scored, key=lambda item: item[1], reverse=True)
        return [subject for subject, _ in scored]

    def replace_subjects(self, subjects: List[Subject]) -> None:
        self._subjects = list(subjects)
        self._loaded = True
        self._last_error = None
