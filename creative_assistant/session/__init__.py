"""
Session layer: forms, operation state, persistence, export, narration and login.
"""

from creative_assistant.session.assessment_desk import AssessmentDesk
from creative_assistant.session.creative_corner import CreativeCorner
from creative_assistant.session.forms import (
    AssessmentForm,
    DesignAssessmentForm,
    IdeaForm,
    LoginForm,
)
from creative_assistant.session.login import ActivityLogger, LoginManager
from creative_assistant.session.narration import NarrationPlayer, SpeechEngine, Voice
from creative_assistant.session.state import OperationState, OperationTracker
from creative_assistant.session.storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    UserProfile,
)

__all__ = [
    "AssessmentDesk",
    "CreativeCorner",
    "AssessmentForm",
    "DesignAssessmentForm",
    "IdeaForm",
    "LoginForm",
    "ActivityLogger",
    "LoginManager",
    "NarrationPlayer",
    "SpeechEngine",
    "Voice",
    "OperationState",
    "OperationTracker",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "UserProfile",
]
