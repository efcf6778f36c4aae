"""
Creative Assistant - wires the AI service, storage and session components.

Two workspaces share one service and one store:
- Creative Corner: ideas -> preview images / shooting scripts -> narration, export
- Assessment Desk: media assessment and design assessment
"""

import logging
from typing import Optional

from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.llm import AIService, create_service_from_model
from creative_assistant.session.assessment_desk import AssessmentDesk
from creative_assistant.session.creative_corner import CreativeCorner
from creative_assistant.session.login import ActivityLogger, LoginManager
from creative_assistant.session.narration import NarrationPlayer, SpeechEngine
from creative_assistant.session.storage import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)


class CreativeAssistant:
    """
    Facade over the Creative Assistant session components.

    Args:
        config: Assistant configuration (defaults from AssistantConfig())
        service: AI service implementation. If omitted, one is created from
                 config.text_model / config.image_model.
        store: Key-value store; defaults to a JsonFileStore in config.storage_dir
        speech_engine: Optional speech backend enabling scene narration
        api_key: Optional API key (used only when the service is created here)
    """

    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        service: Optional[AIService] = None,
        store: Optional[KeyValueStore] = None,
        speech_engine: Optional[SpeechEngine] = None,
        api_key: Optional[str] = None,
    ):
        self.config = config or AssistantConfig()

        if service is None:
            service = create_service_from_model(
                self.config.text_model, self.config.image_model, api_key
            )
        self.service = service
        self.store = store if store is not None else JsonFileStore(self.config.storage_dir)

        narration = None
        if speech_engine is not None:
            narration = NarrationPlayer(speech_engine, lang=self.config.narration_lang)

        self.corner = CreativeCorner(self.service, self.store, self.config, narration)
        self.desk = AssessmentDesk(self.service, self.config)
        self.login = LoginManager(
            self.store,
            ActivityLogger(self.config.activity_log_url, self.config.activity_log_timeout),
        )
        logger.debug("Creative Assistant ready (text model: %s)", self.config.text_model)

    def restore(self) -> None:
        """Restore the saved idea list."""
        self.corner.restore()
