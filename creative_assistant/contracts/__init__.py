"""
Request/response contracts with the AI service.

Builders turn user input into prompt + schema; parsers validate what comes back.
"""

from creative_assistant.contracts.builder import (
    ServiceRequest,
    build_assessment_request,
    build_design_assessment_request,
    build_idea_request,
    build_image_request,
    build_script_request,
)
from creative_assistant.contracts.parser import (
    parse_assessment,
    parse_design_assessment,
    parse_ideas,
    parse_images,
    parse_response,
    parse_script,
)

__all__ = [
    "ServiceRequest",
    "build_assessment_request",
    "build_design_assessment_request",
    "build_idea_request",
    "build_image_request",
    "build_script_request",
    "parse_assessment",
    "parse_design_assessment",
    "parse_ideas",
    "parse_images",
    "parse_response",
    "parse_script",
]
