"""
Request Builder - turns user input into AI service request descriptors.

Every builder is pure: it only formats prompt text and assembles the
expected response schema. Nothing here talks to the network.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from creative_assistant.assessment.rubrics import (
    DESIGN_CRITERIA,
    DESIGN_CRITERIA_KEYS,
    criteria_for,
    criteria_keys,
    resolve_media_type,
)
from creative_assistant.contracts import prompts
from creative_assistant.core.encoding import EncodedMedia
from creative_assistant.core.enums import MediaType, OperationKind
from creative_assistant.core.llm import ImageOptions
from creative_assistant.generation.models import Idea

IDEA_FIELDS = ("conceptName", "format", "shortPlot", "visualAudioDirection", "hook")
SCRIPT_FIELDS = (
    "scene",
    "shot",
    "cameraAngle",
    "cameraMovement",
    "visualDescription",
    "audio",
    "approxDuration",
)


@dataclass(frozen=True)
class ServiceRequest:
    """Everything needed to make one AI service call."""

    kind: OperationKind
    prompt_text: str
    expected_schema: Optional[Dict[str, Any]] = None
    attachments: Tuple[EncodedMedia, ...] = ()
    image_options: Optional[ImageOptions] = None


# --- Schema helpers ---

def _string(description: Optional[str] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "STRING"}
    if description:
        schema["description"] = description
    return schema


def _object(properties: Dict[str, Any], required: Sequence[str]) -> Dict[str, Any]:
    return {"type": "OBJECT", "properties": properties, "required": list(required)}


def _string_record(fields: Sequence[str]) -> Dict[str, Any]:
    return _object({name: _string() for name in fields}, fields)


def _feedback_schema() -> Dict[str, Any]:
    return _object(
        {
            "strengths": _string(prompts.STRENGTHS_DESCRIPTION),
            "improvements": _string(prompts.IMPROVEMENTS_DESCRIPTION),
        },
        ["strengths", "improvements"],
    )


def score_schema(keys: Sequence[str], labels: Dict[str, str]) -> Dict[str, Any]:
    """
    Build the scores object schema: one required integer per criterion key.

    Args:
        keys: Ordered criterion keys
        labels: Human-facing label per key, used in the property description

    Returns:
        Schema dict for the "scores" object
    """
    properties = {
        key: {
            "type": "INTEGER",
            "description": prompts.SCORE_DESCRIPTION.format(label=labels.get(key, key)),
        }
        for key in keys
    }
    return _object(properties, keys)


def _assessment_schema(keys: Sequence[str], labels: Dict[str, str]) -> Dict[str, Any]:
    return _object(
        {"scores": score_schema(keys, labels), "feedback": _feedback_schema()},
        ["scores", "feedback"],
    )


def score_keys_from_schema(schema: Dict[str, Any]) -> Tuple[str, ...]:
    """Read the required score keys back out of an assessment schema."""
    return tuple(schema["properties"]["scores"]["required"])


# --- Builders ---

def build_idea_request(
    topic: str,
    audience: str,
    goal: str,
    duration: Optional[str] = None,
    *,
    language: str = "Thai",
    idea_count: int = 3,
) -> ServiceRequest:
    """
    Build the idea generation request.

    The idea count is an instruction in the prompt only; the schema accepts
    any number of ideas.

    Args:
        topic: Topic or product
        audience: Target audience
        goal: Goal of the content
        duration: Optional desired video length
        language: Language the ideas must be written in
        idea_count: Number of ideas to ask for

    Returns:
        ServiceRequest with prompt and ideas schema
    """
    duration_line = prompts.IDEA_DURATION_LINE.format(duration=duration) if duration else ""
    prompt = prompts.IDEA_PROMPT_TEMPLATE.format(
        idea_count=idea_count,
        language=language,
        topic=topic,
        audience=audience,
        goal=goal,
        duration_line=duration_line,
    )
    schema = _object(
        {"ideas": {"type": "ARRAY", "items": _string_record(IDEA_FIELDS)}},
        ["ideas"],
    )
    return ServiceRequest(kind=OperationKind.IDEAS, prompt_text=prompt, expected_schema=schema)


def build_image_request(
    idea: Idea,
    *,
    aspect_ratio: str = "9:16",
    output_mime_type: str = "image/jpeg",
) -> ServiceRequest:
    """Build the preview image request for an idea (one portrait image, no schema)."""
    prompt = prompts.IMAGE_PROMPT_TEMPLATE.format(
        visual_audio_direction=idea.visual_audio_direction,
        short_plot=idea.short_plot,
    )
    return ServiceRequest(
        kind=OperationKind.IMAGE,
        prompt_text=prompt,
        image_options=ImageOptions(count=1, output_mime_type=output_mime_type, aspect_ratio=aspect_ratio),
    )


def build_script_request(idea: Idea, *, language: str = "Thai") -> ServiceRequest:
    """Build the shooting script request for an idea."""
    prompt = prompts.SCRIPT_PROMPT_TEMPLATE.format(
        language=language,
        concept_name=idea.concept_name,
        hook=idea.hook,
        short_plot=idea.short_plot,
        visual_audio_direction=idea.visual_audio_direction,
    )
    schema = _object(
        {"script": {"type": "ARRAY", "items": _string_record(SCRIPT_FIELDS)}},
        ["script"],
    )
    return ServiceRequest(kind=OperationKind.SCRIPT, prompt_text=prompt, expected_schema=schema)


def build_assessment_request(
    work_text: str,
    goal: str,
    media_type: Union[str, MediaType],
    attachment: Optional[EncodedMedia] = None,
    *,
    language: str = "Thai",
) -> ServiceRequest:
    """
    Build a media assessment request scored against the media type's rubric.

    The scores schema is generated from criteria_keys(media_type); the parser
    reads the same keys back from the schema, so the two cannot drift.

    Args:
        work_text: Pasted text of the work (must be blank when attachment is given)
        goal: Goal of the work
        media_type: Media type identifier; unknown values use the "other" rubric
        attachment: Optional encoded video or image of the work
        language: Language the feedback must be written in

    Returns:
        ServiceRequest with dynamic scores schema

    Raises:
        ValueError: If both work text and an attachment are supplied
    """
    if attachment is not None and work_text.strip():
        raise ValueError("Work text and attachment are mutually exclusive")

    resolved = resolve_media_type(media_type)
    criteria = criteria_for(resolved)
    keys = criteria_keys(resolved)
    labels = {criterion.key: criterion.label for criterion in criteria}

    if attachment is not None:
        work = prompts.ATTACHMENT_PLACEHOLDERS.get(attachment.kind, prompts.ATTACHMENT_PLACEHOLDER_DEFAULT)
    else:
        work = prompts.ASSESSMENT_WORK_TEXT.format(text=work_text)

    criteria_text = "\n".join(
        prompts.ASSESSMENT_CRITERION_LINE.format(label=criterion.label, key=criterion.key)
        for criterion in criteria
    )
    prompt = prompts.ASSESSMENT_PROMPT_TEMPLATE.format(
        language=language,
        media_type=resolved.value,
        work=work,
        goal=goal,
        criteria=criteria_text,
    )
    return ServiceRequest(
        kind=OperationKind.ASSESSMENT,
        prompt_text=prompt,
        expected_schema=_assessment_schema(keys, labels),
        attachments=(attachment,) if attachment is not None else (),
    )


def build_design_assessment_request(
    concept: str,
    audience: str,
    goal: str,
    images: Sequence[EncodedMedia],
    *,
    language: str = "Thai",
) -> ServiceRequest:
    """Build a design assessment request with the fixed five-criterion schema."""
    criteria_text = "\n".join(
        prompts.DESIGN_CRITERION_LINE.format(
            number=number, label=criterion.label, key=criterion.key, guidance=guidance
        )
        for number, (criterion, guidance) in enumerate(DESIGN_CRITERIA, 1)
    )
    prompt = prompts.DESIGN_ASSESSMENT_PROMPT_TEMPLATE.format(
        language=language,
        concept=concept,
        audience=audience,
        goal=goal,
        criteria=criteria_text,
    )
    labels = {criterion.key: criterion.label for criterion, _ in DESIGN_CRITERIA}
    return ServiceRequest(
        kind=OperationKind.DESIGN_ASSESSMENT,
        prompt_text=prompt,
        expected_schema=_assessment_schema(DESIGN_CRITERIA_KEYS, labels),
        attachments=tuple(images),
    )
