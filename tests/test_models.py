import pytest
from pydantic import ValidationError

from roadmap_planner.models.roadmap import Roadmap
from roadmap_planner.models.subject import Subject, normalize_occupation
from tests.conftest import make_subject, roadmap_payload


@pytest.mark.parametrize(
    "text, key",
    [
        ("Software Engineer", "software_engineer"),
        ("  robotics   engineer ", "robotics_engineer"),
        ("Power-Engineer", "power_engineer"),
        ("software_engineer", "software_engineer"),
    ],
)
def test_normalize_occupation(text, key):
    assert normalize_occupation(text) == key


def test_subject_relevance_keys_are_normalized():
    subject = make_subject(
        "s",
        career_relevance={"Software Engineer": 0.8},
        career_relevance_reason={"Software Engineer": "code"},
    )

    assert subject.career_relevance == {"software_engineer": 0.8}
    assert subject.relevance_for("software engineer") == 0.8
    assert subject.relevance_reason_for("Software Engineer") == "code"
    assert make_subject("t").relevance_for("software engineer") is None


def test_subject_is_immutable():
    subject = make_subject("s")

    with pytest.raises(ValidationError):
        subject.name = "Changed"


@pytest.mark.parametrize("field, value", [("year", 5), ("semester", 3), ("credits", -1)])
def test_subject_ranges(field, value):
    with pytest.raises(ValidationError):
        make_subject("s", **{field: value})


def test_toggle_copies_only_the_touched_node():
    payload = roadmap_payload()
    payload["nodes"][1]["x"] = 250
    payload["nodes"][1]["y"] = 400
    roadmap = Roadmap.model_validate(payload)

    toggled = roadmap.with_completion_toggled("prog1")

    assert toggled is not roadmap
    assert toggled.nodes is not roadmap.nodes
    assert roadmap.find_node("prog1").completed is False
    assert toggled.find_node("prog1").completed is True
    for before, after in zip(roadmap.nodes[1:], toggled.nodes[1:]):
        assert after is before
    assert toggled.find_node("calc1").x == 250
    assert toggled.find_node("calc1").y == 400
    assert toggled.with_completion_toggled("prog1").find_node("prog1").completed is False


def test_find_node():
    roadmap = Roadmap.model_validate(roadmap_payload())

    assert roadmap.find_node("digital").name == "Digital Logic"
    assert roadmap.find_node("nope") is None


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_relevance_is_rejected(value):
    payload = roadmap_payload()
    payload["nodes"][0]["relevance_score"] = value

    with pytest.raises(ValidationError):
        Roadmap.model_validate(payload)
    with pytest.raises(ValidationError):
        make_subject("a", career_relevance={"software_engineer": value})
