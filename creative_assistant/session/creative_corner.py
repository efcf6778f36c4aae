"""
Creative Corner - orchestrates ideas, preview images, scripts and narration.

Every per-idea operation is keyed by the idea id, never by list position,
so regenerating the idea list cannot redirect an in-flight result onto a
different idea.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from creative_assistant.contracts.builder import (
    build_idea_request,
    build_image_request,
    build_script_request,
)
from creative_assistant.contracts.parser import parse_ideas, parse_images, parse_script
from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.enums import OperationKind
from creative_assistant.core.errors import CreativeAssistantError
from creative_assistant.core.llm import AIService
from creative_assistant.generation.models import Idea, ScriptScene
from creative_assistant.session import export
from creative_assistant.session.forms import IdeaForm
from creative_assistant.session.narration import NarrationPlayer
from creative_assistant.session.state import (
    FAILURE_MESSAGES,
    OperationState,
    OperationTracker,
    Ticket,
)
from creative_assistant.session.storage import KeyValueStore, load_ideas, save_ideas

logger = logging.getLogger(__name__)

BATCH = "batch"


class CreativeCorner:
    """
    Session state for idea generation.

    Args:
        service: AI service used for text and image generation
        store: Local store for the idea list snapshot
        config: Assistant configuration
        narration: Optional narration player for scene playback
    """

    def __init__(
        self,
        service: AIService,
        store: KeyValueStore,
        config: Optional[AssistantConfig] = None,
        narration: Optional[NarrationPlayer] = None,
    ):
        self.service = service
        self.store = store
        self.config = config or AssistantConfig()
        self.narration = narration
        self.tracker = OperationTracker()
        self.ideas: List[Idea] = []
        self.active_script_id: Optional[str] = None

    # --- Lookup ---

    def _index_of(self, idea_id: str) -> Optional[int]:
        for i, idea in enumerate(self.ideas):
            if idea.id == idea_id:
                return i
        return None

    def get_idea(self, idea_id: str) -> Idea:
        """
        Get an idea by id.

        Raises:
            ValueError: If no idea with that id is in the current list
        """
        index = self._index_of(idea_id)
        if index is None:
            raise ValueError(f"Unknown idea id: {idea_id}")
        return self.ideas[index]

    def state(self, kind: OperationKind, idea_id: str = BATCH) -> OperationState:
        return self.tracker.state(kind, idea_id)

    @property
    def active_script(self) -> Optional[List[ScriptScene]]:
        if self.active_script_id is None:
            return None
        index = self._index_of(self.active_script_id)
        return self.ideas[index].script if index is not None else None

    # --- Helpers ---

    def _fail(self, ticket: Ticket, error: Exception) -> bool:
        logger.error(
            "%s operation for %s failed: %s", ticket.kind.value, ticket.target, error, exc_info=True
        )
        self.tracker.fail(ticket, FAILURE_MESSAGES[ticket.kind])
        return False

    def _replace(self, ticket: Ticket, **update) -> Optional[Idea]:
        """Apply a successful per-idea result, unless it was superseded or the idea is gone."""
        index = self._index_of(ticket.target)
        if index is None:
            logger.info(
                "Idea %s is no longer listed, discarding %s result", ticket.target, ticket.kind.value
            )
            self.tracker.reset(ticket.kind, ticket.target)
            return None
        if not self.tracker.succeed(ticket):
            return None
        updated = self.ideas[index].model_copy(update=update)
        self.ideas[index] = updated
        self._persist()
        return updated

    def _persist(self) -> None:
        """Snapshot the idea list; a failed write never fails the operation."""
        try:
            save_ideas(self.store, self.ideas)
        except OSError as e:
            logger.warning("Could not save the idea list: %s", e, exc_info=True)

    def _forget(self, ideas: List[Idea]) -> None:
        """Drop per-idea operation state for ideas that are no longer listed."""
        kept = {idea.id for idea in self.ideas}
        for idea in ideas:
            if idea.id not in kept:
                self.tracker.reset(OperationKind.IMAGE, idea.id)
                self.tracker.reset(OperationKind.SCRIPT, idea.id)

    def _activate(self, idea_id: Optional[str]) -> None:
        if idea_id != self.active_script_id:
            self.stop_narration()
        self.active_script_id = idea_id

    # --- Operations ---

    async def generate_ideas(self, form: IdeaForm) -> bool:
        """
        Generate a new idea list.

        The previous list stays in place until the new one has been parsed,
        so a failed regeneration loses nothing.

        Args:
            form: Idea form (validated before any service call)

        Returns:
            True if the idea list was replaced

        Raises:
            InputValidationError: If the form is incomplete
        """
        form.validate()
        request = build_idea_request(
            form.topic,
            form.audience,
            form.goal,
            form.duration or None,
            language=self.config.output_language,
            idea_count=self.config.idea_count,
        )
        ticket = self.tracker.begin(OperationKind.IDEAS, BATCH)
        logger.info("Generating ideas for topic '%s'", form.topic)

        try:
            raw = await self.service.generate_structured_text(
                request.prompt_text, request.expected_schema, request.attachments
            )
            ideas = parse_ideas(raw)
        except CreativeAssistantError as e:
            return self._fail(ticket, e)

        if not self.tracker.succeed(ticket):
            return False
        previous, self.ideas = self.ideas, ideas
        self._forget(previous)
        self._activate(None)
        self._persist()
        logger.info("Generated %d ideas", len(ideas))
        return True

    async def generate_image(self, idea_id: str) -> bool:
        """
        Generate (or regenerate) the preview image of one idea.

        Returns:
            True if the idea's image was replaced

        Raises:
            ValueError: If the idea id is unknown
        """
        idea = self.get_idea(idea_id)
        request = build_image_request(
            idea,
            aspect_ratio=self.config.image_aspect_ratio,
            output_mime_type=self.config.image_mime_type,
        )
        ticket = self.tracker.begin(OperationKind.IMAGE, idea_id)
        logger.info("Generating image for idea '%s'", idea.concept_name)

        try:
            images = await self.service.generate_images(
                request.prompt_text, request.image_options, request.attachments
            )
            image_url = parse_images(images, request.image_options.output_mime_type)
        except CreativeAssistantError as e:
            return self._fail(ticket, e)

        return self._replace(ticket, image_url=image_url) is not None

    async def generate_script(self, idea_id: str) -> bool:
        """
        Generate (or regenerate) the shooting script of one idea.

        On success the script replaces any earlier one and becomes the
        active script. On failure the earlier script is kept.

        Returns:
            True if the idea's script was replaced

        Raises:
            ValueError: If the idea id is unknown
        """
        idea = self.get_idea(idea_id)
        request = build_script_request(idea, language=self.config.output_language)
        ticket = self.tracker.begin(OperationKind.SCRIPT, idea_id)
        logger.info("Generating script for idea '%s'", idea.concept_name)

        try:
            raw = await self.service.generate_structured_text(
                request.prompt_text, request.expected_schema, request.attachments
            )
            scenes = parse_script(raw)
        except CreativeAssistantError as e:
            return self._fail(ticket, e)

        if self._replace(ticket, script=scenes) is None:
            return False
        self._activate(idea_id)
        logger.info("Generated %d scenes for idea %s", len(scenes), idea_id)
        return True

    def select_script(self, idea_id: str) -> List[ScriptScene]:
        """
        Make an idea's existing script the active one.

        Raises:
            ValueError: If the idea is unknown or has no script yet
        """
        idea = self.get_idea(idea_id)
        if not idea.script:
            raise ValueError(f"Idea {idea_id} has no script yet")
        self._activate(idea_id)
        return idea.script

    def play_scene(self, index: int) -> bool:
        """
        Toggle narration of one scene of the active script.

        Returns:
            True if playback started, False if it was stopped

        Raises:
            RuntimeError: If no narration player is configured
            ValueError: If there is no active script
            IndexError: If the scene index is out of range
        """
        if self.narration is None:
            raise RuntimeError("Narration is not available")
        scenes = self.active_script
        if not scenes:
            raise ValueError("No active script")
        if not 0 <= index < len(scenes):
            raise IndexError(f"Scene index {index} out of range (0-{len(scenes) - 1})")
        return self.narration.toggle(scenes[index], index)

    def stop_narration(self) -> None:
        if self.narration is not None:
            self.narration.stop()

    async def export_script(self, idea_id: str, directory: Union[str, Path]) -> Path:
        """
        Export an idea's script as a text file.

        Raises:
            ValueError: If the idea is unknown or has no script
        """
        return await export.export_script(self.get_idea(idea_id), directory)

    def restore(self) -> List[Idea]:
        """Load the saved idea list; a missing or unreadable snapshot gives an empty list."""
        self.ideas = load_ideas(self.store)
        self.active_script_id = None
        logger.info("Restored %d ideas", len(self.ideas))
        return self.ideas
