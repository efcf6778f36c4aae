"""Tests for the response parser."""

import json

import pytest

from creative_assistant.assessment.rubrics import DESIGN_CRITERIA_KEYS, criteria_keys
from creative_assistant.contracts.builder import (
    build_assessment_request,
    build_image_request,
    build_idea_request,
)
from creative_assistant.contracts.parser import (
    load_json,
    new_idea_id,
    parse_assessment,
    parse_design_assessment,
    parse_ideas,
    parse_images,
    parse_response,
    parse_script,
    strip_code_fences,
)
from creative_assistant.core.enums import MediaType
from creative_assistant.core.errors import MalformedPayload, OutOfRangeScore, SchemaViolation
from creative_assistant.generation.models import Idea

from helpers import assessment_payload, idea_payload, script_payload

FILM_KEYS = criteria_keys(MediaType.FILM)


class TestLoadJson:
    """Tests for JSON decoding."""

    @pytest.mark.parametrize("raw", ["", "   ", "not json", "{'single': 'quotes'}", '{"open": '])
    def test_malformed(self, raw):
        with pytest.raises(MalformedPayload):
            load_json(raw)

    def test_non_object_is_schema_violation(self):
        with pytest.raises(SchemaViolation):
            load_json("[1, 2, 3]")

    def test_code_fence_is_stripped(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert load_json('```\n{"a": 1}\n```') == {"a": 1}


class TestParseIdeas:
    """Tests for parse_ideas."""

    @pytest.mark.parametrize("count", [1, 3, 5])
    def test_any_positive_count(self, count):
        """N well-formed ideas give N records with distinct ids."""
        ideas = parse_ideas(idea_payload(count))
        assert len(ideas) == count
        assert len({idea.id for idea in ideas}) == count
        assert all(isinstance(idea, Idea) for idea in ideas)

    def test_ids_never_collide_across_calls(self):
        first = parse_ideas(idea_payload(3))
        second = parse_ideas(idea_payload(3))
        assert not {i.id for i in first} & {i.id for i in second}

    def test_ids_are_local_not_from_response(self):
        payload = json.loads(idea_payload(2))
        for item in payload["ideas"]:
            item["id"] = "from-ai"
        ideas = parse_ideas(json.dumps(payload))
        assert all(idea.id != "from-ai" for idea in ideas)
        assert all(idea.id.startswith("idea-") for idea in ideas)

    def test_fields_and_order(self):
        ideas = parse_ideas(idea_payload(2))
        assert [idea.concept_name for idea in ideas] == ["Idea 1", "Idea 2"]
        assert ideas[0].hook == "Hook 1"
        assert ideas[0].image_url is None
        assert ideas[0].script is None

    def test_empty_list_is_schema_violation(self):
        with pytest.raises(SchemaViolation):
            parse_ideas('{"ideas": []}')

    def test_missing_field_is_schema_violation(self):
        payload = json.loads(idea_payload(2))
        del payload["ideas"][1]["hook"]
        with pytest.raises(SchemaViolation):
            parse_ideas(json.dumps(payload))

    def test_missing_ideas_key(self):
        with pytest.raises(SchemaViolation):
            parse_ideas('{"concepts": []}')

    def test_duplicate_ids_from_factory_rejected(self):
        with pytest.raises(SchemaViolation):
            parse_ideas(idea_payload(2), id_factory=lambda: "same")

    def test_new_idea_id_format(self):
        parts = new_idea_id().split("-")
        assert parts[0] == "idea"
        assert parts[1].isdigit() and parts[2].isdigit()


class TestParseScript:
    """Tests for parse_script."""

    def test_scenes_in_order(self):
        scenes = parse_script(script_payload(3))
        assert [s.scene for s in scenes] == ["1", "2", "3"]
        assert scenes[0].camera_angle == "Eye level"
        assert scenes[2].visual_description == "Scene 3 visual v1"

    def test_missing_field(self):
        payload = json.loads(script_payload(1))
        del payload["script"][0]["approxDuration"]
        with pytest.raises(SchemaViolation):
            parse_script(json.dumps(payload))

    def test_empty_script(self):
        with pytest.raises(SchemaViolation):
            parse_script('{"script": []}')


class TestParseAssessment:
    """Tests for parse_assessment."""

    def test_valid(self):
        result = parse_assessment(assessment_payload(FILM_KEYS, 8), FILM_KEYS)
        assert list(result.scores) == list(FILM_KEYS)
        assert set(result.scores.values()) == {8}
        assert result.feedback.strengths == "Strong hook"
        assert result.average_score == 8

    def test_scores_follow_rubric_order(self):
        reversed_payload = assessment_payload(tuple(reversed(FILM_KEYS)))
        result = parse_assessment(reversed_payload, FILM_KEYS)
        assert list(result.scores) == list(FILM_KEYS)

    def test_missing_key(self):
        with pytest.raises(SchemaViolation, match="missing"):
            parse_assessment(assessment_payload(FILM_KEYS[:-1]), FILM_KEYS)

    def test_extra_key(self):
        with pytest.raises(SchemaViolation, match="extra"):
            parse_assessment(assessment_payload(FILM_KEYS, bonus=9), FILM_KEYS)

    @pytest.mark.parametrize("score", [0, 11, -3, 100])
    def test_out_of_range(self, score):
        payload = assessment_payload(FILM_KEYS, 7, cinematography=score)
        with pytest.raises(OutOfRangeScore) as exc_info:
            parse_assessment(payload, FILM_KEYS)
        assert exc_info.value.key == "cinematography"
        assert exc_info.value.value == score

    @pytest.mark.parametrize("score", [1, 10])
    def test_bounds_are_inclusive(self, score):
        result = parse_assessment(assessment_payload(FILM_KEYS, score), FILM_KEYS)
        assert set(result.scores.values()) == {score}

    @pytest.mark.parametrize("score", ["7", 7.5, True, None])
    def test_non_integer_score(self, score):
        with pytest.raises(SchemaViolation) as exc_info:
            parse_assessment(assessment_payload(FILM_KEYS, 7, cinematography=score), FILM_KEYS)
        assert not isinstance(exc_info.value, OutOfRangeScore)

    def test_integral_float_accepted(self):
        result = parse_assessment(assessment_payload(FILM_KEYS, 7.0), FILM_KEYS)
        assert result.scores["cinematography"] == 7

    def test_missing_feedback(self):
        raw = json.dumps({"scores": {key: 5 for key in FILM_KEYS}})
        with pytest.raises(SchemaViolation):
            parse_assessment(raw, FILM_KEYS)

    def test_missing_scores(self):
        with pytest.raises(SchemaViolation):
            parse_assessment('{"feedback": {"strengths": "a", "improvements": "b"}}', FILM_KEYS)


class TestParseDesignAssessment:
    """Tests for parse_design_assessment."""

    def test_valid(self):
        result = parse_design_assessment(assessment_payload(DESIGN_CRITERIA_KEYS, 6))
        assert result.scores.visualAppeal == 6
        assert result.average_score == 6

    @pytest.mark.parametrize("score", [0, 11])
    def test_out_of_range(self, score):
        payload = assessment_payload(DESIGN_CRITERIA_KEYS, 6, originality=score)
        with pytest.raises(OutOfRangeScore) as exc_info:
            parse_design_assessment(payload)
        assert exc_info.value.key == "originality"

    def test_extra_key(self):
        with pytest.raises(SchemaViolation):
            parse_design_assessment(assessment_payload(DESIGN_CRITERIA_KEYS, 6, typography=5))

    def test_missing_key(self):
        with pytest.raises(SchemaViolation):
            parse_design_assessment(assessment_payload(DESIGN_CRITERIA_KEYS[1:], 6))


class TestParseImagesAndDispatch:
    """Tests for parse_images and parse_response."""

    def test_data_url(self):
        assert parse_images([b"abc"], "image/jpeg") == "data:image/jpeg;base64,YWJj"

    def test_no_images(self):
        with pytest.raises(MalformedPayload):
            parse_images([], "image/jpeg")

    def test_response_uses_request_schema_keys(self):
        request = build_assessment_request("text", "goal", MediaType.PHOTOGRAPHY)
        keys = criteria_keys(MediaType.PHOTOGRAPHY)
        result = parse_response(assessment_payload(keys), request)
        assert tuple(result.scores) == keys
        with pytest.raises(SchemaViolation):
            parse_response(assessment_payload(FILM_KEYS), request)

    def test_response_for_ideas(self):
        ideas = parse_response(idea_payload(2), build_idea_request("t", "a", "g"))
        assert len(ideas) == 2

    def test_image_request_has_no_text_response(self):
        idea = parse_ideas(idea_payload(1))[0]
        with pytest.raises(ValueError):
            parse_response("{}", build_image_request(idea))
