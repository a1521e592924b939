"""
Core configuration management for the course roadmap planner
Supports multiple environments and institution-specific settings
"""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CATALOG_PATH = PACKAGE_DIR / "data" / "syllabus.json"

DEFAULT_OCCUPATIONS = [
    "electrical_engineer",
    "power_engineer",
    "electronics_engineer",
    "communication_engineer",
    "aerospace_engineer",
    "software_engineer",
    "control_engineer",
    "robotics_engineer",
]


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class BaseSettings(PydanticBaseSettings):
    """Base configuration settings"""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = "Course Roadmap Planner"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"

    # Catalog
    catalog_path: Path = DEFAULT_CATALOG_PATH
    institution_name: str = "Tokushima University"
    program_name: str = "Electrical and Electronic System Course"

    # External Services
    openai_api_key: Optional[str] = None
    openai_api_base: Optional[str] = None
    openai_api_version: str = "2024-02-01"

    # Models
    roadmap_model: str = "gpt-4o-mini"
    enrichment_model: str = "gpt-4o-mini"
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(4000, gt=0)

    # Career relevance
    relevance_threshold: float = Field(0.5, ge=0.0, le=1.0)
    occupations: List[str] = Field(default_factory=lambda: list(DEFAULT_OCCUPATIONS))

    # Caching
    cache_ttl_seconds: int = 3600  # 1 hour

    @field_validator("environment", mode="before")
    @classmethod
    def _lower_environment(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())


class DevelopmentSettings(BaseSettings):
    """Development environment settings"""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: str = "DEBUG"


class TestingSettings(BaseSettings):
    """Testing environment settings"""

    __test__ = False

    environment: Environment = Environment.TESTING
    debug: bool = True

    # Fast testing
    cache_ttl_seconds: int = 1


class ProductionSettings(BaseSettings):
    """Production environment settings"""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> BaseSettings:
    """
    Get settings based on environment variable
    Cached for performance
    """
    environment = Environment(os.getenv("ENVIRONMENT", "development").lower())

    if environment == Environment.TESTING:
        return TestingSettings()
    elif environment == Environment.PRODUCTION:
        return ProductionSettings()
    else:
        return DevelopmentSettings()


def validate_configuration(settings: Optional[BaseSettings] = None) -> List[str]:
    """
    Validate the configuration.

    Invalid values raise ValueError. Gaps that only disable features
    (such as a missing API key) are returned as warnings.
    """
    settings = settings or get_settings()
    errors = []
    warnings = []

    if not settings.occupations:
        errors.append("OCCUPATIONS must name at least one occupation")

    if not settings.catalog_path.exists():
        warnings.append(f"Catalog file not found: {settings.catalog_path}")

    if not settings.has_credentials:
        warnings.append(
            "OPENAI_API_KEY is not set; roadmap generation is disabled"
        )

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return warnings
