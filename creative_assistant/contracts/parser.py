"""
Response Parser/Validator - turns raw AI output into typed domain records.

The AI service is asked for schema-constrained JSON but is not trusted:
every response is re-validated here and nothing partial is returned.
"""

import base64
import itertools
import json
import logging
import time
from typing import Any, Callable, Dict, List, Sequence, Union

from pydantic import ValidationError

from creative_assistant.assessment.models import (
    MAX_SCORE,
    MIN_SCORE,
    AssessmentResult,
    DesignAssessmentResult,
    Feedback,
)
from creative_assistant.contracts.builder import ServiceRequest, score_keys_from_schema
from creative_assistant.core.enums import OperationKind
from creative_assistant.core.errors import MalformedPayload, OutOfRangeScore, SchemaViolation
from creative_assistant.generation.models import Idea, IdeationOutput, ScriptOutput, ScriptScene

logger = logging.getLogger(__name__)

_id_counter = itertools.count(1)

_RANGE_ERROR_TYPES = {"greater_than_equal", "less_than_equal"}


def new_idea_id() -> str:
    """
    Issue a fresh idea identifier.

    Combines the wall clock with a process-wide counter, so identifiers stay
    unique across batches held in memory at the same time.
    """
    return f"idea-{int(time.time() * 1000)}-{next(_id_counter)}"


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence the model may wrap around JSON."""
    txt = text.strip()
    if "```json" in txt:
        txt = txt.split("```json", 1)[1].split("```", 1)[0].strip()
    elif txt.startswith("```"):
        txt = txt[3:].split("```", 1)[0].strip()
    return txt


def load_json(raw: str) -> Dict[str, Any]:
    """
    Decode a raw response into a JSON object.

    Raises:
        MalformedPayload: If the text is not JSON at all
        SchemaViolation: If it is JSON but not an object
    """
    if raw is None or not raw.strip():
        raise MalformedPayload("Empty response")
    try:
        data = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise MalformedPayload(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SchemaViolation(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or '<root>'}: {e['msg']}" for e in error.errors()
    )


def parse_ideas(raw: str, id_factory: Callable[[], str] = new_idea_id) -> List[Idea]:
    """
    Parse an idea generation response.

    Any number of ideas (at least one) is accepted; the requested count is
    advisory. Identifiers are always issued locally, never read from the
    response.

    Args:
        raw: Raw response text
        id_factory: Source of fresh identifiers

    Returns:
        Ideas in response order, each with a distinct id

    Raises:
        MalformedPayload: If the response is not JSON
        SchemaViolation: If required fields are missing or no ideas were returned
    """
    data = load_json(raw)
    try:
        output = IdeationOutput.model_validate(data)
    except ValidationError as e:
        raise SchemaViolation(f"Invalid ideas payload: {_describe(e)}") from e
    if not output.ideas:
        raise SchemaViolation("Response contained no ideas")

    ideas = [Idea(id=id_factory(), **draft.model_dump()) for draft in output.ideas]
    if len({idea.id for idea in ideas}) != len(ideas):
        raise SchemaViolation("Identifier factory produced duplicate ids")
    logger.debug("Parsed %d ideas", len(ideas))
    return ideas


def parse_script(raw: str) -> List[ScriptScene]:
    """
    Parse a script generation response.

    Raises:
        MalformedPayload: If the response is not JSON
        SchemaViolation: If a scene lacks a field or the script is empty
    """
    data = load_json(raw)
    try:
        output = ScriptOutput.model_validate(data)
    except ValidationError as e:
        raise SchemaViolation(f"Invalid script payload: {_describe(e)}") from e
    if not output.script:
        raise SchemaViolation("Response contained no scenes")
    return output.script


def _parse_feedback(data: Dict[str, Any]) -> Feedback:
    try:
        return Feedback.model_validate(data.get("feedback"))
    except ValidationError as e:
        raise SchemaViolation(f"Invalid feedback: {_describe(e)}") from e


def _as_score(key: str, value: Any) -> int:
    # bool is an int subclass but never a valid score
    if isinstance(value, bool):
        raise SchemaViolation(f"Score for '{key}' must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise SchemaViolation(f"Score for '{key}' must be an integer, got {value!r}")
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise OutOfRangeScore(key, value)
    return value


def parse_assessment(raw: str, expected_keys: Sequence[str]) -> AssessmentResult:
    """
    Parse a media assessment response against the rubric that built it.

    Args:
        raw: Raw response text
        expected_keys: Criterion keys of the rubric active when the request was built

    Returns:
        AssessmentResult with scores ordered like the rubric

    Raises:
        MalformedPayload: If the response is not JSON
        SchemaViolation: If the score key set differs from expected_keys, a
            score is not an integer, or feedback is incomplete
        OutOfRangeScore: If a score is outside 1-10
    """
    data = load_json(raw)
    scores = data.get("scores")
    if not isinstance(scores, dict):
        raise SchemaViolation("Missing 'scores' object")

    expected = set(expected_keys)
    actual = set(scores)
    if actual != expected:
        missing = sorted(expected - actual)
        extra = sorted(actual - expected)
        raise SchemaViolation(f"Score keys do not match rubric (missing={missing}, extra={extra})")

    ordered = {key: _as_score(key, scores[key]) for key in expected_keys}
    return AssessmentResult(scores=ordered, feedback=_parse_feedback(data))


def parse_design_assessment(raw: str) -> DesignAssessmentResult:
    """
    Parse a design assessment response (fixed five-criterion shape).

    Raises:
        MalformedPayload: If the response is not JSON
        SchemaViolation: If fields are missing, extra, or not integers
        OutOfRangeScore: If a score is outside 1-10
    """
    data = load_json(raw)
    try:
        return DesignAssessmentResult.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        range_errors = [err for err in errors if err["type"] in _RANGE_ERROR_TYPES]
        if range_errors and len(range_errors) == len(errors):
            first = range_errors[0]
            raise OutOfRangeScore(str(first["loc"][-1]), first["input"]) from e
        raise SchemaViolation(f"Invalid design assessment: {_describe(e)}") from e


def parse_images(images: Sequence[bytes], mime_type: str) -> str:
    """
    Turn generated image bytes into a data: URL for the first image.

    Raises:
        MalformedPayload: If no image was returned
    """
    if not images or not images[0]:
        raise MalformedPayload("Image service returned no image")
    encoded = base64.b64encode(images[0]).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


ParsedRecord = Union[List[Idea], List[ScriptScene], AssessmentResult, DesignAssessmentResult]


def parse_response(raw: str, request: ServiceRequest) -> ParsedRecord:
    """
    Parse a structured text response for the request that produced it.

    Assessment key sets are read from the request's own schema.

    Raises:
        ValueError: For image requests, which have no text response
    """
    if request.kind is OperationKind.IDEAS:
        return parse_ideas(raw)
    if request.kind is OperationKind.SCRIPT:
        return parse_script(raw)
    if request.kind is OperationKind.ASSESSMENT:
        return parse_assessment(raw, score_keys_from_schema(request.expected_schema))
    if request.kind is OperationKind.DESIGN_ASSESSMENT:
        return parse_design_assessment(raw)
    raise ValueError(f"{request.kind.value} requests have no structured text response")
