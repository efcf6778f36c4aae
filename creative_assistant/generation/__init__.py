"""
Generation module.

Idea and shooting script models.
"""

from creative_assistant.generation.models import (
    Idea,
    IdeaDraft,
    IdeationOutput,
    ScriptOutput,
    ScriptScene,
)

__all__ = [
    "Idea",
    "IdeaDraft",
    "IdeationOutput",
    "ScriptOutput",
    "ScriptScene",
]
