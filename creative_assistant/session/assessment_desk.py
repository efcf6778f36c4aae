"""
Assessment Desk - orchestrates media and design assessments.
"""

import logging
from typing import Optional, Union

from creative_assistant.assessment.models import AssessmentResult, DesignAssessmentResult
from creative_assistant.assessment.rubrics import resolve_media_type
from creative_assistant.contracts.builder import (
    ServiceRequest,
    build_assessment_request,
    build_design_assessment_request,
)
from creative_assistant.contracts.parser import parse_response
from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.enums import MediaType, OperationKind
from creative_assistant.core.errors import CreativeAssistantError
from creative_assistant.core.llm import AIService
from creative_assistant.session.forms import AssessmentForm, DesignAssessmentForm
from creative_assistant.session.state import FAILURE_MESSAGES, OperationState, OperationTracker, Ticket

logger = logging.getLogger(__name__)

MEDIA = "media"
DESIGN = "design"


class AssessmentDesk:
    """
    Session state for assessments.

    Holds the latest successful result per target; a failed reassessment
    leaves it unchanged.
    """

    def __init__(self, service: AIService, config: Optional[AssistantConfig] = None):
        self.service = service
        self.config = config or AssistantConfig()
        self.tracker = OperationTracker()
        self.result: Optional[AssessmentResult] = None
        self.result_media_type: Optional[MediaType] = None
        self.design_result: Optional[DesignAssessmentResult] = None

    def state(self, kind: OperationKind) -> OperationState:
        target = DESIGN if kind is OperationKind.DESIGN_ASSESSMENT else MEDIA
        return self.tracker.state(kind, target)

    def set_media_type(self, form: AssessmentForm, media_type: Union[str, MediaType]) -> MediaType:
        """
        Change the form's media type.

        A different media type means a different rubric, so the current
        result is cleared and any in-flight assessment is discarded.
        """
        resolved = resolve_media_type(media_type)
        if resolved is not form.media_type:
            form.media_type = resolved
            self.result = None
            self.result_media_type = None
            self.tracker.reset(OperationKind.ASSESSMENT, MEDIA)
            logger.debug("Media type changed to %s, cleared assessment", resolved.value)
        return resolved

    async def _run(self, ticket: Ticket, request: ServiceRequest):
        try:
            raw = await self.service.generate_structured_text(
                request.prompt_text, request.expected_schema, request.attachments
            )
            parsed = parse_response(raw, request)
        except CreativeAssistantError as e:
            logger.error(
                "%s operation failed: %s", ticket.kind.value, e, exc_info=True
            )
            self.tracker.fail(ticket, FAILURE_MESSAGES[ticket.kind])
            return None
        if not self.tracker.succeed(ticket):
            return None
        return parsed

    async def assess_work(self, form: AssessmentForm) -> bool:
        """
        Assess a piece of media against its media type's rubric.

        Returns:
            True if a new result replaced the current one

        Raises:
            InputValidationError: If the goal or the work is missing
        """
        form.validate()
        request = build_assessment_request(
            form.text,
            form.goal,
            form.media_type,
            form.attachment,
            language=self.config.output_language,
        )
        ticket = self.tracker.begin(OperationKind.ASSESSMENT, MEDIA)
        logger.info(
            "Assessing %s work (%s)",
            form.media_type.value,
            "attachment" if form.attachment is not None else "text",
        )

        result = await self._run(ticket, request)
        if result is None:
            return False
        self.result = result
        self.result_media_type = form.media_type
        logger.info("Assessment complete, average score %.1f", result.average_score)
        return True

    async def assess_design(self, form: DesignAssessmentForm) -> bool:
        """
        Assess a set of design images against the five design criteria.

        Returns:
            True if a new result replaced the current one

        Raises:
            InputValidationError: If the brief is incomplete or no images are attached
        """
        form.validate()
        request = build_design_assessment_request(
            form.concept,
            form.audience,
            form.goal,
            form.images,
            language=self.config.output_language,
        )
        ticket = self.tracker.begin(OperationKind.DESIGN_ASSESSMENT, DESIGN)
        logger.info("Assessing design '%s' (%d images)", form.concept, len(form.images))

        result = await self._run(ticket, request)
        if result is None:
            return False
        self.design_result = result
        logger.info("Design assessment complete, average score %.1f", result.average_score)
        return True
