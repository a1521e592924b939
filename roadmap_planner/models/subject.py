# models/subject.py
"""
Subject (catalog course) data models
"""
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_OCCUPATION_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_occupation(occupation: str) -> str:
    """Turn a free-text occupation into its relevance lookup key.

    "Software Engineer" -> "software_engineer"
    """
    return _OCCUPATION_SEPARATORS.sub("_", occupation.strip().lower())


class Subject(BaseModel):
    """One syllabus catalog entry"""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    code: str = ""
    name: str
    credits: int = Field(0, ge=0)
    year: int = Field(..., ge=1, le=4)
    semester: int = Field(..., ge=1, le=2)
    department: str = ""

    # Content
    syllabus: List[str] = Field(default_factory=list)
    description: str = ""
    prerequisites: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    learning_outcomes: List[str] = Field(default_factory=list)

    # Career relevance, keyed by normalized occupation
    career_relevance: Optional[Dict[str, float]] = None
    career_relevance_reason: Optional[Dict[str, str]] = None

    @field_validator("career_relevance", "career_relevance_reason", mode="before")
    @classmethod
    def _normalize_keys(cls, value):
        if isinstance(value, dict):
            return {normalize_occupation(str(k)): v for k, v in value.items()}
        return value

    def relevance_for(self, occupation: str) -> Optional[float]:
        """Relevance score for an occupation, None when not scored"""
        if not self.career_relevance:
            return None
        return self.career_relevance.get(normalize_occupation(occupation))

    def relevance_reason_for(self, occupation: str) -> Optional[str]:
        if not self.career_relevance_reason:
            return None
        return self.career_relevance_reason.get(normalize_occupation(occupation))


class Catalog(BaseModel):
    """Top-level shape of the static syllabus document"""

    subjects: List[Subject]
