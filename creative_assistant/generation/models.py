"""
Data models for idea, image and script generation.

Field aliases are the camelCase names used in the AI response contract
and in the persisted session snapshot.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IdeaDraft(BaseModel):
    """One idea exactly as the AI service returns it (no identity yet)."""

    model_config = ConfigDict(populate_by_name=True)

    concept_name: str = Field(..., alias="conceptName", description="Short concept name")
    format: str = Field(..., description="Video format, e.g. POV skit or tutorial")
    short_plot: str = Field(..., alias="shortPlot", description="Brief plot summary")
    visual_audio_direction: str = Field(
        ..., alias="visualAudioDirection", description="Visual and audio direction"
    )
    hook: str = Field(..., description="Attention hook for the opening seconds")


class ScriptScene(BaseModel):
    """A single scene of a shooting script."""

    model_config = ConfigDict(populate_by_name=True)

    scene: str
    shot: str
    camera_angle: str = Field(..., alias="cameraAngle")
    camera_movement: str = Field(..., alias="cameraMovement")
    visual_description: str = Field(..., alias="visualDescription")
    audio: str
    approx_duration: str = Field(..., alias="approxDuration")


class Idea(IdeaDraft):
    """A short-video idea with a locally assigned identity."""

    id: str = Field(..., description="Locally generated identifier, never taken from the AI")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="data: URL of the preview image")
    script: Optional[List[ScriptScene]] = None


class IdeationOutput(BaseModel):
    """Output of the idea generation call."""

    ideas: List[IdeaDraft]


class ScriptOutput(BaseModel):
    """Output of the script generation call."""

    script: List[ScriptScene]
