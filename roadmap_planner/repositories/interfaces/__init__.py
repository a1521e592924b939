"""
Repository interfaces package
"""
from .subject_repository import SubjectRepositoryInterface

__all__ = ["SubjectRepositoryInterface"]
