# repositories/interfaces/subject_repository.py
"""
Subject catalog repository interface
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ...core.errors import CatalogLoadError
from ...models.subject import Subject


class SubjectRepositoryInterface(ABC):
    """Abstract interface for syllabus catalog operations"""

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether a load has settled (successfully or not)"""
        pass

    @property
    @abstractmethod
    def last_error(self) -> Optional[CatalogLoadError]:
        """Error from the settled load, if it failed"""
        pass

    @property
    @abstractmethod
    def subjects(self) -> List[Subject]:
        """Snapshot of the loaded subjects (empty before load)"""
        pass

    @abstractmethod
    async def load(self) -> List[Subject]:
        """Load the catalog once; concurrent callers share the same load"""
        pass

    @abstractmethod
    async def filter_by_year(self, year: int) -> List[Subject]:
        """Get all subjects taught in a year"""
        pass

    @abstractmethod
    async def filter_by_year_semester(self, year: int, semester: int) -> List[Subject]:
        """Get all subjects taught in a year and semester"""
        pass

    @abstractmethod
    async def find_by_id(self, subject_id: str) -> Optional[Subject]:
        """Get subject by ID"""
        pass

    @abstractmethod
    async def filter_by_keywords(self, keywords: List[str]) -> List[Subject]:
        """Search subjects by keywords, name and description"""
        pass

    @abstractmethod
    async def total_credits(self) -> int:
        """Sum of credits over every loaded subject"""
        pass

    @abstractmethod
    async def filter_by_career_relevance(
        self, occupation: str, threshold: float = 0.5
    ) -> List[Subject]:
        """Subjects scored at or above threshold for an occupation, best first"""
        pass

    @abstractmethod
    def replace_subjects(self, subjects: List[Subject]) -> None:
        """Replace the loaded catalog wholesale"""
        pass
