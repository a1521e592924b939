# models/requests.py
"""
Request, result and error models exchanged with the session
"""
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.errors import ErrorKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoadmapRequest(BaseModel):
    """Request for a roadmap for one occupation"""

    occupation: str = Field(..., min_length=1, max_length=200)

    @field_validator("occupation", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class RelevanceAssessment(BaseModel):
    """Career relevance returned for one subject"""

    model_config = ConfigDict(allow_inf_nan=False)

    scores: Dict[str, float] = Field(default_factory=dict)
    reasons: Dict[str, str] = Field(default_factory=dict)


class ErrorReport(BaseModel):
    """User-facing error message"""

    kind: ErrorKind
    message: str
    timestamp: datetime = Field(default_factory=_utcnow)
