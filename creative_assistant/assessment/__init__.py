"""
Assessment module.

Rubrics per media type and the assessment result models.
"""

from creative_assistant.assessment.models import (
    AssessmentResult,
    DesignAssessmentResult,
    DesignScores,
    Feedback,
    RubricCriterion,
)
from creative_assistant.assessment.rubrics import (
    DESIGN_CRITERIA,
    DESIGN_CRITERIA_KEYS,
    RUBRIC_REGISTRY,
    criteria_for,
    criteria_keys,
    criteria_labels,
    resolve_media_type,
)

__all__ = [
    "AssessmentResult",
    "DesignAssessmentResult",
    "DesignScores",
    "Feedback",
    "RubricCriterion",
    "DESIGN_CRITERIA",
    "DESIGN_CRITERIA_KEYS",
    "RUBRIC_REGISTRY",
    "criteria_for",
    "criteria_keys",
    "criteria_labels",
    "resolve_media_type",
]
