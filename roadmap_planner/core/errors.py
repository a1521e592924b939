"""
Error kinds raised by the planner services and reported to the user
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CATALOG_LOAD_FAILURE = "catalog-load-failure"
    INVALID_AI_RESPONSE = "invalid-ai-response"
    MISSING_CREDENTIAL = "missing-credential"
    EMPTY_CATALOG = "empty-catalog"
    TRANSPORT_FAILURE = "transport-failure"
    EMPTY_OCCUPATION = "empty-occupation"
    CATALOG_NOT_READY = "catalog-not-ready"
    ENRICHMENT_UNAVAILABLE = "enrichment-unavailable"


class RoadmapPlannerError(Exception):
    """Base class for every failure surfaced to the user"""

    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_report(self):
        """Convert to the user-facing error model"""
        from ..models.requests import ErrorReport

        return ErrorReport(kind=self.kind, message=str(self))


class CatalogLoadError(RoadmapPlannerError):
    kind = ErrorKind.CATALOG_LOAD_FAILURE
    default_message = "Failed to load syllabus data"


class InvalidAIResponseError(RoadmapPlannerError):
    kind = ErrorKind.INVALID_AI_RESPONSE
    default_message = "Invalid response received from AI"


class MissingCredentialError(RoadmapPlannerError):
    kind = ErrorKind.MISSING_CREDENTIAL
    default_message = "API key not configured"


class EmptyCatalogError(RoadmapPlannerError):
    kind = ErrorKind.EMPTY_CATALOG
    default_message = (
        "No subjects available. Please check if syllabus data is loading correctly"
    )


class TransportError(RoadmapPlannerError):
    kind = ErrorKind.TRANSPORT_FAILURE
    default_message = "AI request failed"


class EmptyOccupationError(RoadmapPlannerError):
    kind = ErrorKind.EMPTY_OCCUPATION
    default_message = "Please enter an occupation"


class CatalogNotReadyError(RoadmapPlannerError):
    kind = ErrorKind.CATALOG_NOT_READY
    default_message = "Please wait for syllabus data to finish loading"


class EnrichmentUnavailableError(RoadmapPlannerError):
    kind = ErrorKind.ENRICHMENT_UNAVAILABLE
    default_message = "Career relevance scoring is not configured for this session"
