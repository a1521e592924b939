# services/interfaces/llm_interface.py
"""
Large Language Model service interface
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...models.subject import Subject


class LLMServiceInterface(ABC):
    """Abstract interface for LLM operations"""

    @abstractmethod
    def available(self) -> bool:
        """Whether a credential is configured and requests can be made"""
        pass

    @abstractmethod
    async def generate_roadmap_text(
        self, occupation: str, subjects: Sequence[Subject]
    ) -> str:
        """Ask the model for a roadmap and return its raw reply"""
        pass

    @abstractmethod
    async def assess_relevance_text(
        self, subject: Subject, occupation: Optional[str] = None
    ) -> str:
        """Ask the model to score one subject for one or all occupations"""
        pass
