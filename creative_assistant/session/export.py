"""
Plain-text shooting script export.

The rendered format can be read back with parse_script_text. Field values
must not contain newlines, and a scene label must not contain " / ".
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import List, Tuple, Union

from creative_assistant.generation.models import Idea, ScriptScene

logger = logging.getLogger(__name__)

HEADER_PREFIX = "Shooting Script for: "
HEADER_RULE = "=" * 50
SCENE_RULE = "-" * 40
FOOTER = "Generated by AI Creativity Tool"
FILENAME_SUFFIX = "_script.txt"

# Label of each line in a scene block, after the "Scene Shot" line.
_SCENE_LINES = (
    ("Camera Angle", "camera_angle"),
    ("Camera Movement", "camera_movement"),
    ("Descript", "visual_description"),
    ("Sound", "audio"),
    ("Time", "approx_duration"),
)


def script_filename(concept_name: str) -> str:
    """File name for an exported script: whitespace runs -> "_", lowercased."""
    return re.sub(r"\s+", "_", concept_name).lower() + FILENAME_SUFFIX


def render_script_text(concept_name: str, scenes: List[ScriptScene]) -> str:
    """
    Render a script in the export format.

    Args:
        concept_name: Concept name used in the header
        scenes: Scenes in shooting order

    Returns:
        Export text (no trailing newline after the footer)
    """
    parts = [f"{HEADER_PREFIX}{concept_name}\n", f"{HEADER_RULE}\n\n"]
    for scene in scenes:
        parts.append(f"Scene Shot: {scene.scene} / {scene.shot}\n")
        parts.append(f"{SCENE_RULE}\n")
        for label, attr in _SCENE_LINES:
            parts.append(f"{label}: {getattr(scene, attr)}\n")
        parts.append("\n")
    parts.append(FOOTER)
    return "".join(parts)


def _take(lines: List[str], index: int, prefix: str) -> str:
    if index >= len(lines) or not lines[index].startswith(prefix):
        found = lines[index] if index < len(lines) else "<end of file>"
        raise ValueError(f"Line {index + 1}: expected '{prefix}', found {found!r}")
    return lines[index][len(prefix):]


def parse_script_text(text: str) -> Tuple[str, List[ScriptScene]]:
    """
    Read an exported script back.

    Returns:
        (concept name, scenes in file order)

    Raises:
        ValueError: If the text does not follow the export format
    """
    lines = text.split("\n")
    concept_name = _take(lines, 0, HEADER_PREFIX)
    _take(lines, 1, HEADER_RULE)
    _take(lines, 2, "")

    scenes = []
    i = 3
    while i < len(lines) and lines[i] != FOOTER:
        scene_shot = _take(lines, i, "Scene Shot: ")
        scene, sep, shot = scene_shot.partition(" / ")
        if not sep:
            raise ValueError(f"Line {i + 1}: scene and shot must be separated by ' / '")
        _take(lines, i + 1, SCENE_RULE)
        values = {"scene": scene, "shot": shot}
        for offset, (label, attr) in enumerate(_SCENE_LINES, 2):
            values[attr] = _take(lines, i + offset, f"{label}: ")
        _take(lines, i + 2 + len(_SCENE_LINES), "")
        scenes.append(ScriptScene(**values))
        i += 3 + len(_SCENE_LINES)

    if i >= len(lines):
        raise ValueError("Missing footer")
    return concept_name, scenes


async def export_script(idea: Idea, directory: Union[str, Path]) -> Path:
    """
    Write an idea's script to <directory>/<script_filename>.

    Raises:
        ValueError: If the idea has no script
    """
    if not idea.script:
        raise ValueError(f"Idea {idea.id} has no script to export")
    directory = Path(directory)
    path = directory / script_filename(idea.concept_name)
    content = render_script_text(idea.concept_name, idea.script)

    def _write() -> None:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    await asyncio.to_thread(_write)
    logger.info("Exported script for '%s' to %s", idea.concept_name, path)
    return path
