"""
Scene narration.

NarrationPlayer owns the only playback slot: starting a scene cancels
whatever is playing, and callbacks from a cancelled utterance are ignored.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from creative_assistant.generation.models import ScriptScene

logger = logging.getLogger(__name__)

NARRATION_TEMPLATE = "Visual: {visual} Sound: {audio}"
PLAYBACK_ERROR_MESSAGE = "Audio playback failed."


@dataclass(frozen=True)
class Voice:
    """An installed speech voice."""

    name: str
    lang: str


class SpeechEngine(Protocol):
    """Protocol for a text-to-speech backend."""

    def voices(self) -> Sequence[Voice]:
        ...

    def speak(
        self,
        text: str,
        voice: Optional[Voice],
        lang: str,
        on_start: Callable[[], None],
        on_end: Callable[[], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        ...

    def cancel(self) -> None:
        ...


def narration_text(scene: ScriptScene) -> str:
    return NARRATION_TEMPLATE.format(visual=scene.visual_description, audio=scene.audio)


def pick_voice(voices: Sequence[Voice], lang: str) -> Optional[Voice]:
    """First voice whose language matches exactly, else None (engine default)."""
    return next((voice for voice in voices if voice.lang == lang), None)


class NarrationPlayer:
    """
    Plays one scene at a time.

    Args:
        engine: Speech backend
        lang: Preferred narration language, e.g. "th-TH"
    """

    def __init__(self, engine: SpeechEngine, lang: str = "th-TH"):
        self.engine = engine
        self.lang = lang
        self.playing_index: Optional[int] = None
        self.error: Optional[str] = None
        self._utterances = itertools.count(1)
        self._current: Optional[int] = None

    @property
    def is_playing(self) -> bool:
        return self.playing_index is not None

    def toggle(self, scene: ScriptScene, index: int) -> bool:
        """
        Play a scene, or stop it if it is the one already playing.

        Returns:
            True if playback was started
        """
        if self.playing_index == index:
            self.stop()
            return False
        self.play(scene, index)
        return True

    def play(self, scene: ScriptScene, index: int) -> None:
        """Cancel any current utterance and start narrating a scene."""
        self.stop()
        self.error = None
        utterance = next(self._utterances)
        self._current = utterance

        def on_start() -> None:
            if self._current == utterance:
                self.playing_index = index

        def on_end() -> None:
            if self._current == utterance:
                self.playing_index = None
                self._current = None

        def on_error(error: Exception) -> None:
            if self._current == utterance:
                logger.warning("Narration of scene %d failed: %s", index, error)
                self.playing_index = None
                self._current = None
                self.error = PLAYBACK_ERROR_MESSAGE

        voice = pick_voice(list(self.engine.voices()), self.lang)
        if voice is None:
            logger.debug("No %s voice installed, using engine default", self.lang)
        try:
            self.engine.speak(narration_text(scene), voice, self.lang, on_start, on_end, on_error)
        except Exception as e:
            on_error(e)

    def stop(self) -> None:
        """Release the playback slot."""
        self._current = None
        self.playing_index = None
        self.engine.cancel()
