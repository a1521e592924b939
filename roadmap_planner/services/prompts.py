# services/prompts.py
"""
Prompt templates sent to the language model
"""
import json
from typing import List, Sequence

from ..models.subject import Subject

ROADMAP_TEMPLATE = """
You are an expert educational advisor at {institution}. Your task is to create a personalized course roadmap for a student aiming to become a {occupation}.

Given the following subjects (with their syllabi and details), select the most relevant subjects for the occupation of {occupation} and generate a roadmap:

{subjects_json}

Requirements:
- Select 8-12 most relevant subjects for the occupation
- Use only subject ids that appear in the list above
- Organize by academic progression (year 1 -> year 4)
- Assign appropriate node types: 'foundation', 'core', 'specialized', 'elective'
- Create logical connections between related subjects (prerequisite -> follow-up)
- Calculate total credits
- Provide detailed reasoning for subject selection

IMPORTANT: Return ONLY a valid JSON object with this exact structure, no markdown formatting, no code fences and no additional text:

{{
  "title": "Roadmap Title",
  "description": "Brief description of the roadmap",
  "occupation": "{occupation}",
  "nodes": [
    {{
      "id": "subject_id",
      "name": "Subject Name",
      "type": "foundation|core|specialized|elective",
      "completed": false,
      "connects": ["connected_subject_id"],
      "credits": 2,
      "year": 1,
      "semester": 1,
      "relevance_score": 0.95
    }}
  ],
  "total_credits": 24,
  "reasoning": "Detailed explanation of why these subjects were selected and how they prepare for the target occupation"
}}

Focus on subjects that directly contribute to the skills and knowledge needed for {occupation}.
"""

RELEVANCE_ALL_TEMPLATE = """
You are an expert educational advisor. Rate how relevant the following subject is to each of these occupations: {occupations}.

Subject:
{subject_json}

Return ONLY a valid JSON object, no markdown formatting and no additional text, with this exact structure:

{{
  "career_relevance": {{{score_example}}},
  "career_relevance_reason": {{{reason_example}}}
}}

Scores are numbers between 0 and 1, where 1 means essential for the occupation.
"""

RELEVANCE_SINGLE_TEMPLATE = """
You are an expert educational advisor. Rate how relevant the following subject is to the occupation of {occupation}.

Subject:
{subject_json}

Return ONLY a valid JSON object, no markdown formatting and no additional text, with this exact structure:

{{
  "relevance_score": 0.8,
  "reason": "One or two sentences explaining the score"
}}

The score is a number between 0 and 1, where 1 means essential for the occupation.
"""


def _subject_payload(subject: Subject) -> dict:
    return subject.model_dump(exclude_none=True)


def build_roadmap_prompt(
    occupation: str, subjects: Sequence[Subject], institution: str
) -> str:
    subjects_json = json.dumps(
        [_subject_payload(subject) for subject in subjects],
        indent=2,
        ensure_ascii=False,
    )
    return ROADMAP_TEMPLATE.format(
        institution=institution,
        occupation=occupation,
        subjects_json=subjects_json,
    )


def build_relevance_prompt(subject: Subject, occupations: List[str]) -> str:
    """Relevance prompt for one occupation or for every known occupation"""
    subject_json = json.dumps(
        {
            "id": subject.id,
            "name": subject.name,
            "description": subject.description,
            "syllabus": subject.syllabus,
            "keywords": subject.keywords,
            "learning_outcomes": subject.learning_outcomes,
        },
        indent=2,
        ensure_ascii=False,
    )

    if len(occupations) == 1:
        return RELEVANCE_SINGLE_TEMPLATE.format(
            occupation=occupations[0], subject_json=subject_json
        )

    score_example = ", ".join(f'"{name}": 0.5' for name in occupations)
    reason_example = ", ".join(f'"{name}": "reason"' for name in occupations)
    return RELEVANCE_ALL_TEMPLATE.format(
        occupations=", ".join(occupations),
        subject_json=subject_json,
        score_example=score_example,
        reason_example=reason_example,
    )
