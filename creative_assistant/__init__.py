"""
Creative Assistant - idea, image and script generation plus media and
design assessment on top of a generative AI service.
"""

from creative_assistant.assistant import CreativeAssistant
from creative_assistant.assessment import (
    AssessmentResult,
    DesignAssessmentResult,
    criteria_for,
    criteria_keys,
)
from creative_assistant.core import (
    AIService,
    AssistantConfig,
    CreativeAssistantError,
    GeminiService,
    InputValidationError,
    MediaType,
    OpenAIService,
    create_service_from_model,
)
from creative_assistant.generation import Idea, ScriptScene
from creative_assistant.session import (
    AssessmentDesk,
    AssessmentForm,
    CreativeCorner,
    DesignAssessmentForm,
    IdeaForm,
    LoginForm,
)

__all__ = [
    # Main class
    "CreativeAssistant",
    # Core
    "AIService",
    "AssistantConfig",
    "CreativeAssistantError",
    "GeminiService",
    "InputValidationError",
    "MediaType",
    "OpenAIService",
    "create_service_from_model",
    # Models
    "AssessmentResult",
    "DesignAssessmentResult",
    "Idea",
    "ScriptScene",
    "criteria_for",
    "criteria_keys",
    # Session
    "AssessmentDesk",
    "AssessmentForm",
    "CreativeCorner",
    "DesignAssessmentForm",
    "IdeaForm",
    "LoginForm",
]
