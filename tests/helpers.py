"""Test doubles and canned AI responses."""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from creative_assistant.session.narration import Voice


class FakeAIService:
    """
    AI service double.

    Responses are queued and handed out in call order. A response may be a
    string (text), a list of bytes (images) or an exception to raise. When a
    gate is given the call waits for the event before completing.
    """

    def __init__(self):
        self.text_responses: List[Tuple[Any, Optional[asyncio.Event]]] = []
        self.image_responses: List[Tuple[Any, Optional[asyncio.Event]]] = []
        self.text_calls: List[Dict[str, Any]] = []
        self.image_calls: List[Dict[str, Any]] = []

    def queue_text(self, response: Any, gate: Optional[asyncio.Event] = None) -> None:
        self.text_responses.append((response, gate))

    def queue_images(self, response: Any, gate: Optional[asyncio.Event] = None) -> None:
        self.image_responses.append((response, gate))

    @staticmethod
    async def _complete(response: Any, gate: Optional[asyncio.Event]) -> Any:
        if gate is not None:
            await gate.wait()
        if isinstance(response, Exception):
            raise response
        return response

    async def generate_structured_text(self, prompt, schema, attachments=()):
        self.text_calls.append({"prompt": prompt, "schema": schema, "attachments": tuple(attachments)})
        response, gate = self.text_responses.pop(0)
        return await self._complete(response, gate)

    async def generate_images(self, prompt, options, attachments=()):
        self.image_calls.append({"prompt": prompt, "options": options, "attachments": tuple(attachments)})
        response, gate = self.image_responses.pop(0)
        return await self._complete(response, gate)


class FakeSpeechEngine:
    """Speech engine double that records utterances and lets tests fire callbacks."""

    def __init__(self, voices: Sequence[Voice] = ()):
        self._voices = list(voices)
        self.utterances: List[Dict[str, Any]] = []
        self.cancel_count = 0

    def voices(self):
        return self._voices

    def speak(self, text, voice, lang, on_start, on_end, on_error):
        self.utterances.append({
            "text": text,
            "voice": voice,
            "lang": lang,
            "on_start": on_start,
            "on_end": on_end,
            "on_error": on_error,
        })

    def cancel(self):
        self.cancel_count += 1

    @property
    def last(self) -> Dict[str, Any]:
        return self.utterances[-1]


def idea_payload(count: int = 3, tag: str = "Idea") -> str:
    """Idea generation response with `count` ideas."""
    return json.dumps({
        "ideas": [
            {
                "conceptName": f"{tag} {i}",
                "format": "POV skit",
                "shortPlot": f"Plot {i}",
                "visualAudioDirection": f"Bright colors, upbeat music {i}",
                "hook": f"Hook {i}",
            }
            for i in range(1, count + 1)
        ]
    })


def script_payload(count: int = 2, tag: str = "v1") -> str:
    """Script generation response with `count` scenes."""
    return json.dumps({
        "script": [
            {
                "scene": str(i),
                "shot": f"{i}A",
                "cameraAngle": "Eye level",
                "cameraMovement": "Static",
                "visualDescription": f"Scene {i} visual {tag}",
                "audio": f"Scene {i} audio {tag}",
                "approxDuration": "5 seconds",
            }
            for i in range(1, count + 1)
        ]
    })


def assessment_payload(keys: Sequence[str], score: Any = 7, **overrides: Any) -> str:
    """Assessment response scoring every key with the same value."""
    scores = {key: score for key in keys}
    scores.update(overrides)
    return json.dumps({
        "scores": scores,
        "feedback": {"strengths": "Strong hook", "improvements": "Tighter pacing"},
    })


async def settle() -> None:
    """Let every started task run until it blocks."""
    for _ in range(5):
        await asyncio.sleep(0)
