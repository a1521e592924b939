"""
Pytest configuration and fixtures
"""
import json
from typing import Dict, List, Optional, Sequence, Union

import pytest

from roadmap_planner.core.config import TestingSettings
from roadmap_planner.core.errors import TransportError
from roadmap_planner.models.subject import Subject
from roadmap_planner.repositories.json_subject_repository import JsonSubjectRepository
from roadmap_planner.services.interfaces import LLMServiceInterface


def make_subject(subject_id: str, **overrides) -> Subject:
    fields = {
        "id": subject_id,
        "code": subject_id.upper(),
        "name": subject_id.replace("_", " ").title(),
        "credits": 2,
        "year": 1,
        "semester": 1,
        "department": "EEE",
        "description": f"About {subject_id}",
    }
    fields.update(overrides)
    return Subject(**fields)


SUBJECT_RECORDS = [
    {
        "id": "calc1",
        "code": "MA101",
        "name": "Calculus I",
        "credits": 2,
        "year": 1,
        "semester": 1,
        "department": "Mathematics",
        "syllabus": ["Limits", "Derivatives"],
        "description": "Differential calculus for engineers.",
        "prerequisites": [],
        "keywords": ["mathematics", "calculus"],
        "learning_outcomes": ["Differentiate functions"],
        "career_relevance": {"software_engineer": 0.7, "control_engineer": 0.9},
    },
    {
        "id": "prog1",
        "code": "EE102",
        "name": "Introduction to Programming",
        "credits": 3,
        "year": 1,
        "semester": 2,
        "department": "EEE",
        "syllabus": ["Variables", "Functions"],
        "description": "Structured programming in C.",
        "prerequisites": [],
        "keywords": ["programming", "software"],
        "learning_outcomes": ["Write small programs"],
        "career_relevance": {"software_engineer": 0.9},
        "career_relevance_reason": {"software_engineer": "Programming is the daily work."},
    },
    {
        "id": "circuits",
        "code": "EE111",
        "name": "Electric Circuits",
        "credits": 2,
        "year": 1,
        "semester": 2,
        "department": "EEE",
        "syllabus": ["Kirchhoff's laws"],
        "description": "DC circuit analysis.",
        "prerequisites": ["calc1"],
        "keywords": ["circuits"],
        "learning_outcomes": ["Analyse circuits"],
        "career_relevance": {"software_engineer": 0.3, "electrical_engineer": 0.95},
    },
    {
        "id": "digital",
        "code": "EE212",
        "name": "Digital Logic",
        "credits": 2,
        "year": 2,
        "semester": 1,
        "department": "EEE",
        "syllabus": ["Boolean algebra"],
        "description": "Combinational and sequential logic design.",
        "prerequisites": ["prog1"],
        "keywords": ["digital", "hardware"],
        "learning_outcomes": ["Design state machines"],
        "career_relevance": {"software_engineer": 0.7},
    },
    {
        "id": "thesis",
        "code": "EE499",
        "name": "Graduation Research",
        "credits": 6,
        "year": 4,
        "semester": 2,
        "department": "EEE",
        "syllabus": ["Research"],
        "description": "Supervised research project.",
        "prerequisites": [],
        "keywords": ["research"],
        "learning_outcomes": ["Write a thesis"],
    },
]


def roadmap_payload(**overrides) -> dict:
    payload = {
        "title": "Software Engineer Path",
        "description": "From programming basics to digital systems",
        "occupation": "Software Engineer",
        "nodes": [
            {
                "id": "prog1",
                "name": "Introduction to Programming",
                "type": "foundation",
                "completed": False,
                "connects": ["digital"],
                "credits": 3,
                "year": 1,
                "semester": 2,
                "relevance_score": 0.9,
            },
            {
                "id": "calc1",
                "name": "Calculus I",
                "type": "foundation",
                "completed": False,
                "connects": ["circuits", "not_in_plan"],
                "credits": 2,
                "year": 1,
                "semester": 1,
                "relevance_score": 0.7,
            },
            {
                "id": "circuits",
                "name": "Electric Circuits",
                "type": "core",
                "completed": False,
                "connects": [],
                "credits": 2,
                "year": 1,
                "semester": 2,
                "relevance_score": 0.3,
            },
            {
                "id": "digital",
                "name": "Digital Logic",
                "type": "specialized",
                "completed": False,
                "connects": [],
                "credits": 2,
                "year": 2,
                "semester": 1,
                "relevance_score": 0.7,
            },
        ],
        "total_credits": 9,
        "reasoning": "Programming first, then hardware.",
    }
    payload.update(overrides)
    return payload


class FakeLLMService(LLMServiceInterface):
    """Scripted stand-in for the language model"""

    def __init__(
        self,
        roadmap_replies: Optional[List[Union[str, Exception]]] = None,
        relevance_replies: Optional[Dict[str, Union[str, Exception]]] = None,
        available: bool = True,
    ):
        self.roadmap_replies = list(roadmap_replies or [])
        self.relevance_replies = dict(relevance_replies or {})
        self._available = available
        self.roadmap_calls: List[str] = []
        self.relevance_calls: List[tuple] = []

    def available(self) -> bool:
        return self._available

    async def generate_roadmap_text(
        self, occupation: str, subjects: Sequence[Subject]
    ) -> str:
        self.roadmap_calls.append(occupation)
        reply = self.roadmap_replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def assess_relevance_text(
        self, subject: Subject, occupation: Optional[str] = None
    ) -> str:
        self.relevance_calls.append((subject.id, occupation))
        reply = self.relevance_replies.get(subject.id)
        if reply is None:
            raise TransportError(detail="no scripted reply")
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def settings(tmp_path):
    return TestingSettings(
        openai_api_key=None,
        openai_api_base=None,
        catalog_path=tmp_path / "syllabus.json",
    )


@pytest.fixture
def subject_records():
    return [dict(record) for record in SUBJECT_RECORDS]


@pytest.fixture
def catalog_file(tmp_path, subject_records):
    path = tmp_path / "syllabus.json"
    path.write_text(json.dumps({"subjects": subject_records}), encoding="utf-8")
    return path


@pytest.fixture
def repository(catalog_file):
    return JsonSubjectRepository(catalog_file)


@pytest.fixture
def roadmap_json():
    return json.dumps(roadmap_payload())
