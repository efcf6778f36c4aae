"""Tests for the request builders."""

import pytest

from creative_assistant.assessment.rubrics import DESIGN_CRITERIA_KEYS, criteria_keys
from creative_assistant.contracts import prompts
from creative_assistant.contracts.builder import (
    IDEA_FIELDS,
    SCRIPT_FIELDS,
    build_assessment_request,
    build_design_assessment_request,
    build_idea_request,
    build_image_request,
    build_script_request,
    score_keys_from_schema,
)
from creative_assistant.core.enums import MediaType, OperationKind
from creative_assistant.generation.models import Idea


@pytest.fixture
def idea() -> Idea:
    return Idea(
        id="idea-1-1",
        conceptName="Morning Ritual",
        format="POV",
        shortPlot="A barista wakes the city",
        visualAudioDirection="Warm tones, lo-fi beat",
        hook="What if coffee could talk?",
    )


class TestBuildIdeaRequest:
    """Tests for build_idea_request."""

    def test_prompt_contains_inputs(self):
        request = build_idea_request("Cold brew", "Office workers", "Awareness", language="Thai")
        assert request.kind is OperationKind.IDEAS
        assert "Cold brew" in request.prompt_text
        assert "Office workers" in request.prompt_text
        assert "Awareness" in request.prompt_text
        assert "Thai" in request.prompt_text
        assert "3 unique ideas" in request.prompt_text

    def test_duration_line_only_when_given(self):
        without = build_idea_request("t", "a", "g")
        with_duration = build_idea_request("t", "a", "g", "30 seconds")
        assert "Desired video length" not in without.prompt_text
        assert "- Desired video length: 30 seconds" in with_duration.prompt_text

    def test_schema_requires_every_idea_field(self):
        schema = build_idea_request("t", "a", "g").expected_schema
        assert schema["required"] == ["ideas"]
        items = schema["properties"]["ideas"]["items"]
        assert schema["properties"]["ideas"]["type"] == "ARRAY"
        assert items["required"] == list(IDEA_FIELDS)
        assert all(items["properties"][field]["type"] == "STRING" for field in IDEA_FIELDS)

    def test_idea_count_is_prompt_only(self):
        schema = build_idea_request("t", "a", "g", idea_count=5).expected_schema
        assert "minItems" not in schema["properties"]["ideas"]
        assert "5 unique ideas" in build_idea_request("t", "a", "g", idea_count=5).prompt_text


class TestBuildImageAndScriptRequests:
    """Tests for build_image_request and build_script_request."""

    def test_image_request(self, idea):
        request = build_image_request(idea, aspect_ratio="9:16", output_mime_type="image/jpeg")
        assert request.kind is OperationKind.IMAGE
        assert request.expected_schema is None
        assert request.image_options.count == 1
        assert request.image_options.aspect_ratio == "9:16"
        assert idea.visual_audio_direction in request.prompt_text
        assert idea.short_plot in request.prompt_text

    def test_script_request(self, idea):
        request = build_script_request(idea, language="English")
        assert request.kind is OperationKind.SCRIPT
        assert '"Morning Ritual"' in request.prompt_text
        assert "English" in request.prompt_text
        items = request.expected_schema["properties"]["script"]["items"]
        assert items["required"] == list(SCRIPT_FIELDS)


class TestBuildAssessmentRequest:
    """Tests for build_assessment_request."""

    @pytest.mark.parametrize("media_type", list(MediaType))
    def test_schema_keys_match_rubric(self, media_type):
        """Outbound schema keys are exactly the rubric keys, in order."""
        request = build_assessment_request("A story", "Win a prize", media_type)
        scores = request.expected_schema["properties"]["scores"]
        assert tuple(scores["required"]) == criteria_keys(media_type)
        assert list(scores["properties"]) == list(criteria_keys(media_type))
        assert all(prop["type"] == "INTEGER" for prop in scores["properties"].values())
        assert score_keys_from_schema(request.expected_schema) == criteria_keys(media_type)

    def test_feedback_is_required(self):
        schema = build_assessment_request("text", "goal", "film").expected_schema
        assert schema["required"] == ["scores", "feedback"]
        assert schema["properties"]["feedback"]["required"] == ["strengths", "improvements"]

    def test_text_work_is_quoted_without_attachments(self):
        request = build_assessment_request("My poem", "Move people", "fine-art")
        assert '"""My poem"""' in request.prompt_text
        assert request.attachments == ()

    def test_attachment_replaces_text_with_placeholder(self, make_media):
        video = make_media(b"\x00\x01", "video/mp4", "cut.mp4")
        request = build_assessment_request("", "Festival", "short-film", video)
        assert request.attachments == (video,)
        assert prompts.ATTACHMENT_PLACEHOLDERS["video"] in request.prompt_text
        assert '"""' not in request.prompt_text

    def test_image_attachment_placeholder(self, make_media):
        request = build_assessment_request("", "Sell", "photography", make_media())
        assert prompts.ATTACHMENT_PLACEHOLDERS["image"] in request.prompt_text

    def test_text_and_attachment_are_exclusive(self, make_media):
        with pytest.raises(ValueError):
            build_assessment_request("some text", "goal", "film", make_media())

    def test_unknown_media_type_uses_fallback_rubric(self):
        request = build_assessment_request("text", "goal", "podcast")
        assert score_keys_from_schema(request.expected_schema) == criteria_keys(MediaType.OTHER)
        assert '"other"' in request.prompt_text


class TestBuildDesignAssessmentRequest:
    """Tests for build_design_assessment_request."""

    def test_fixed_schema_and_images(self, make_media):
        images = [make_media(name="p1.png"), make_media(name="p2.png")]
        request = build_design_assessment_request("Eco brochure", "Families", "Explain recycling", images)
        assert request.kind is OperationKind.DESIGN_ASSESSMENT
        assert score_keys_from_schema(request.expected_schema) == DESIGN_CRITERIA_KEYS
        assert request.attachments == tuple(images)
        assert '"Eco brochure"' in request.prompt_text
        assert "1. Visual Appeal (visualAppeal)" in request.prompt_text
