"""
Service interfaces package
"""
from .cache_interface import CacheServiceInterface
from .llm_interface import LLMServiceInterface

__all__ = [
    "CacheServiceInterface",
    "LLMServiceInterface",
]
