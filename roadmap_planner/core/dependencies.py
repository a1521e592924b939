"""
Dependency wiring for the roadmap planner
Builds each service once and hands explicit instances to the session
"""

import logging
from functools import lru_cache

from .config import BaseSettings, get_settings
from ..repositories.interfaces import SubjectRepositoryInterface
from ..repositories.json_subject_repository import JsonSubjectRepository
from ..services.enrichment_service import EnrichmentService
from ..services.interfaces import CacheServiceInterface, LLMServiceInterface
from ..services.llm_service import LLMService
from ..services.memory_cache_service import MemoryCacheService
from ..services.roadmap_session import RoadmapSession

logger = logging.getLogger(__name__)


# Repository Dependencies
@lru_cache()
def get_subject_repository() -> SubjectRepositoryInterface:
    """Get subject repository instance"""
    settings = get_settings()
    return JsonSubjectRepository(settings.catalog_path)


# Service Dependencies
@lru_cache()
def get_cache_service() -> CacheServiceInterface:
    """Get cache service instance"""
    settings = get_settings()
    return MemoryCacheService(ttl_seconds=settings.cache_ttl_seconds)


@lru_cache()
def get_llm_service() -> LLMServiceInterface:
    """Get LLM service instance"""
    settings = get_settings()
    cache_service = get_cache_service()
    return LLMService(settings, cache_service)


@lru_cache()
def get_enrichment_service() -> EnrichmentService:
    """Get career relevance enrichment service instance"""
    return EnrichmentService(get_llm_service())


def get_roadmap_session() -> RoadmapSession:
    """Create a new session wired to the shared services"""
    return RoadmapSession(
        subject_repository=get_subject_repository(),
        llm_service=get_llm_service(),
        enrichment_service=get_enrichment_service(),
    )


def get_app_settings() -> BaseSettings:
    """Get application settings"""
    return get_settings()


def cleanup_resources():
    """Drop cached service instances"""
    get_subject_repository.cache_clear()
    get_cache_service.cache_clear()
    get_llm_service.cache_clear()
    get_enrichment_service.cache_clear()
    logger.debug("Service caches cleared")


def build_session(settings: BaseSettings) -> RoadmapSession:
    """Create a session with fresh services for explicit settings"""
    subject_repository = JsonSubjectRepository(settings.catalog_path)
    cache_service = MemoryCacheService(ttl_seconds=settings.cache_ttl_seconds)
    llm_service = LLMService(settings, cache_service)
    return RoadmapSession(
        subject_repository=subject_repository,
        llm_service=llm_service,
        enrichment_service=EnrichmentService(llm_service),
    )
