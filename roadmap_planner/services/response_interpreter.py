# services/response_interpreter.py
"""
Turns raw AI replies into structured roadmap and relevance objects.

Models are asked for bare JSON but regularly wrap it in prose or code
fences, so extraction runs an ordered list of strategies and keeps the
first one that yields a JSON value. Nothing here touches the network.
"""
import json
import logging
import re
from typing import Any, Callable, Iterable, List, Optional

from pydantic import ValidationError

from ..core.errors import InvalidAIResponseError
from ..models.requests import RelevanceAssessment
from ..models.roadmap import Roadmap
from ..models.subject import normalize_occupation

logger = logging.getLogger(__name__)

ExtractionStrategy = Callable[[str], Optional[Any]]

_FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} in JSON")


def _loads(candidate: str) -> Optional[Any]:
    try:
        return json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, TypeError):
        return None


def parse_whole_text(text: str) -> Optional[Any]:
    """The reply is already a JSON document"""
    return _loads(text.strip())


def parse_fenced_block(text: str) -> Optional[Any]:
    """JSON inside a ``` or ```json fenced block"""
    for match in _FENCED_BLOCK.finditer(text):
        parsed = _loads(match.group(1).strip())
        if parsed is not None:
            return parsed
    return None


def _balanced_object_span(text: str, start: int) -> Optional[str]:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def parse_embedded_object(text: str) -> Optional[Any]:
    """The first {...} object embedded in surrounding prose"""
    start = text.find("{")
    if start == -1:
        return None

    span = _balanced_object_span(text, start)
    if span is not None:
        parsed = _loads(span)
        if parsed is not None:
            return parsed

    # Unbalanced braces inside prose: fall back to first "{" .. last "}"
    end = text.rfind("}")
    if end > start:
        return _loads(text[start : end + 1])
    return None


DEFAULT_STRATEGIES: List[ExtractionStrategy] = [
    parse_whole_text,
    parse_fenced_block,
    parse_embedded_object,
]


def extract_json(
    text: str, strategies: Iterable[ExtractionStrategy] = DEFAULT_STRATEGIES
) -> Any:
    """Run extraction strategies in order and return the first success"""
    if not isinstance(text, str) or not text.strip():
        raise InvalidAIResponseError(detail="empty response")

    for strategy in strategies:
        parsed = strategy(text)
        if parsed is not None:
            logger.debug(f"Extracted JSON with {strategy.__name__}")
            return parsed

    raise InvalidAIResponseError(detail="no valid JSON found in response")


def interpret_roadmap(
    text: str, strategies: Iterable[ExtractionStrategy] = DEFAULT_STRATEGIES
) -> Roadmap:
    """Recover a Roadmap from an AI reply or raise InvalidAIResponseError"""
    data = extract_json(text, strategies)

    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        raise InvalidAIResponseError(detail="roadmap has no 'nodes' list")

    try:
        roadmap = Roadmap.model_validate(data)
    except ValidationError as e:
        raise InvalidAIResponseError(detail=_summarize(e))

    if roadmap.declared_credits_mismatch:
        logger.warning(
            f"Declared total_credits {roadmap.total_credits} differs from "
            f"node credit sum {roadmap.computed_credits}"
        )
    return roadmap


def interpret_relevance(
    text: str,
    occupation: Optional[str] = None,
    strategies: Iterable[ExtractionStrategy] = DEFAULT_STRATEGIES,
) -> RelevanceAssessment:
    """Recover a relevance assessment for one subject.

    Accepts the all-occupations shape
    ``{"career_relevance": {...}, "career_relevance_reason": {...}}`` and,
    when ``occupation`` is given, the single-occupation shape
    ``{"relevance_score": 0.8, "reason": "..."}``.
    """
    data = extract_json(text, strategies)
    if not isinstance(data, dict):
        raise InvalidAIResponseError(detail="relevance reply is not an object")

    if "career_relevance" in data:
        payload = {
            "scores": data.get("career_relevance") or {},
            "reasons": data.get("career_relevance_reason") or {},
        }
    elif occupation is not None and "relevance_score" in data:
        key = normalize_occupation(occupation)
        payload = {"scores": {key: data["relevance_score"]}}
        if data.get("reason") is not None:
            payload["reasons"] = {key: data["reason"]}
    else:
        raise InvalidAIResponseError(detail="relevance reply has no scores")

    try:
        assessment = RelevanceAssessment.model_validate(payload)
    except ValidationError as e:
        raise InvalidAIResponseError(detail=_summarize(e))

    return RelevanceAssessment(
        scores={normalize_occupation(k): v for k, v in assessment.scores.items()},
        reasons={normalize_occupation(k): v for k, v in assessment.reasons.items()},
    )


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}"
