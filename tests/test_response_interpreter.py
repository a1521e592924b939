import json

import pytest

from roadmap_planner.core.errors import ErrorKind, InvalidAIResponseError
from roadmap_planner.models.roadmap import NodeType, Roadmap
from roadmap_planner.services.response_interpreter import (
    extract_json,
    interpret_relevance,
    interpret_roadmap,
    parse_embedded_object,
    parse_fenced_block,
)
from tests.conftest import roadmap_payload


def test_plain_json_round_trips(roadmap_json):
    original = Roadmap.model_validate(roadmap_payload())

    roadmap = interpret_roadmap(roadmap_json)

    assert roadmap == original
    assert interpret_roadmap(roadmap.model_dump_json()) == roadmap


@pytest.mark.parametrize("fence", ["```json\n{body}\n```", "```\n{body}\n```", "```JSON {body}```"])
def test_fenced_block_matches_unwrapped(roadmap_json, fence):
    wrapped = "Here is your roadmap:\n" + fence.format(body=roadmap_json) + "\nGood luck!"

    assert interpret_roadmap(wrapped) == interpret_roadmap(roadmap_json)


def test_object_embedded_in_prose(roadmap_json):
    text = f"Sure! {roadmap_json} Let me know if you need changes."

    assert interpret_roadmap(text) == interpret_roadmap(roadmap_json)


def test_embedded_object_stops_at_its_closing_brace():
    text = 'First {"a": 1, "b": "}"} and later {"c": 2}'

    assert parse_embedded_object(text) == {"a": 1, "b": "}"}


def test_fenced_block_skips_unparseable_blocks():
    text = "```\nnot json\n```\n```json\n{\"a\": 1}\n```"

    assert parse_fenced_block(text) == {"a": 1}


@pytest.mark.parametrize("text", ["not json at all", "", "   ", "{broken", "```json\n{nope\n```"])
def test_unparseable_text_is_invalid_ai_response(text):
    with pytest.raises(InvalidAIResponseError) as excinfo:
        interpret_roadmap(text)

    assert excinfo.value.kind == ErrorKind.INVALID_AI_RESPONSE


@pytest.mark.parametrize(
    "text",
    ['{"nodes": "not-a-list"}', '{"title": "no nodes"}', "[1, 2, 3]", '{"nodes": [{"name": "no id"}]}'],
)
def test_wrong_shape_is_invalid_ai_response(text):
    with pytest.raises(InvalidAIResponseError):
        interpret_roadmap(text)


def test_optional_fields_are_tolerated():
    roadmap = interpret_roadmap('{"nodes": [{"id": 7, "name": "Seven", "extra": true}]}')

    node = roadmap.nodes[0]
    assert node.id == "7"
    assert node.type == NodeType.ELECTIVE
    assert node.connects == []
    assert roadmap.title == ""


def test_unknown_node_type_falls_back_to_elective():
    payload = roadmap_payload()
    payload["nodes"][0]["type"] = "capstone"

    roadmap = interpret_roadmap(json.dumps(payload))

    assert roadmap.nodes[0].type == NodeType.ELECTIVE


def test_declared_total_is_kept_even_when_wrong():
    roadmap = interpret_roadmap(json.dumps(roadmap_payload(total_credits=40)))

    assert roadmap.total_credits == 40
    assert roadmap.computed_credits == 9
    assert roadmap.declared_credits_mismatch


def test_custom_strategy_list():
    def parse_yes(text):
        return {"yes": True} if text == "yes" else None

    assert extract_json("yes", strategies=[parse_yes]) == {"yes": True}
    with pytest.raises(InvalidAIResponseError):
        extract_json('{"a": 1}', strategies=[parse_yes])


def test_relevance_for_all_occupations():
    text = json.dumps(
        {
            "career_relevance": {"Software Engineer": 0.8, "power_engineer": 0.1},
            "career_relevance_reason": {"Software Engineer": "Lots of code"},
        }
    )

    assessment = interpret_relevance(f"```json\n{text}\n```")

    assert assessment.scores == {"software_engineer": 0.8, "power_engineer": 0.1}
    assert assessment.reasons == {"software_engineer": "Lots of code"}


def test_relevance_for_single_occupation():
    assessment = interpret_relevance(
        '{"relevance_score": 0.6, "reason": "Useful"}', occupation="Robotics Engineer"
    )

    assert assessment.scores == {"robotics_engineer": 0.6}
    assert assessment.reasons == {"robotics_engineer": "Useful"}


@pytest.mark.parametrize(
    "text",
    ['{"relevance_score": 0.6}', '{"career_relevance": {"x": "high"}}', "nothing"],
)
def test_relevance_without_usable_scores_is_invalid(text):
    with pytest.raises(InvalidAIResponseError):
        interpret_relevance(text)


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_scores_are_invalid_ai_response(constant):
    text = '{"nodes": [{"id": "a", "name": "A", "relevance_score": %s}]}' % constant

    with pytest.raises(InvalidAIResponseError) as exc_info:
        interpret_roadmap(text)

    assert exc_info.value.kind == ErrorKind.INVALID_AI_RESPONSE


def test_non_finite_relevance_is_invalid_ai_response():
    with pytest.raises(InvalidAIResponseError):
        interpret_relevance('{"relevance_score": NaN}', "Software Engineer")
