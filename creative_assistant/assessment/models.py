"""
Data models for work assessment.

Media assessment scores are keyed dynamically by the rubric of the chosen
media type; design assessment uses a fixed five-criterion shape.
"""

from dataclasses import dataclass
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

MIN_SCORE = 1
MAX_SCORE = 10


@dataclass(frozen=True)
class RubricCriterion:
    """A single scoring criterion."""

    key: str  # Machine identifier used in the response schema
    label: str  # Human-facing description embedded in the prompt


class Feedback(BaseModel):
    """Qualitative feedback returned with every assessment."""

    strengths: str = Field(..., description="Strengths of the work")
    improvements: str = Field(..., description="Suggestions for improvement")


class AssessmentResult(BaseModel):
    """Result of a media assessment, scored against a media-type rubric."""

    scores: Dict[str, int] = Field(..., description="Score per criterion key, 1-10")
    feedback: Feedback

    @property
    def average_score(self) -> float:
        """Mean of all criterion scores."""
        if not self.scores:
            return 0.0
        return sum(self.scores.values()) / len(self.scores)


class DesignScores(BaseModel):
    """Fixed score set for design assessment."""

    model_config = ConfigDict(extra="forbid", strict=True)

    visualAppeal: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    usabilityClarity: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    originality: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    designComposition: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    alignmentWithGoal: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)


class DesignAssessmentResult(BaseModel):
    """Result of a design assessment."""

    scores: DesignScores
    feedback: Feedback

    @property
    def average_score(self) -> float:
        """Mean of the five design scores."""
        values = list(self.scores.model_dump().values())
        return sum(values) / len(values)
