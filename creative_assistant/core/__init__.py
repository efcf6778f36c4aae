"""
Core infrastructure for the Creative Assistant.

Configuration, errors, media encoding and AI service providers.
"""

from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.encoding import (
    EncodedMedia,
    classify,
    encode,
    encode_bytes,
    read_text,
)
from creative_assistant.core.enums import MediaType, OperationKind, OperationStatus
from creative_assistant.core.errors import (
    CreativeAssistantError,
    EncodingError,
    InputValidationError,
    MalformedPayload,
    OutOfRangeScore,
    SchemaViolation,
    ServiceCallFailure,
)
from creative_assistant.core.llm import (
    AIService,
    BaseAIService,
    GeminiService,
    ImageOptions,
    OpenAIService,
    create_service_from_model,
)

__all__ = [
    "AssistantConfig",
    "EncodedMedia",
    "classify",
    "encode",
    "encode_bytes",
    "read_text",
    "MediaType",
    "OperationKind",
    "OperationStatus",
    "CreativeAssistantError",
    "EncodingError",
    "InputValidationError",
    "MalformedPayload",
    "OutOfRangeScore",
    "SchemaViolation",
    "ServiceCallFailure",
    "AIService",
    "BaseAIService",
    "GeminiService",
    "ImageOptions",
    "OpenAIService",
    "create_service_from_model",
]
