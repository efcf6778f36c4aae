"""
Rubric Registry - Maps MediaType to its ordered scoring criteria.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple, Union

from creative_assistant.assessment.models import RubricCriterion
from creative_assistant.core.enums import MediaType

FALLBACK_MEDIA_TYPE = MediaType.OTHER
DEFAULT_MEDIA_TYPE = MediaType.GENERAL_VIDEO_CONTENT


def _rubric(*pairs: Tuple[str, str]) -> Tuple[RubricCriterion, ...]:
    criteria = tuple(RubricCriterion(key=key, label=label) for key, label in pairs)
    keys = [c.key for c in criteria]
    if len(set(keys)) != len(keys):
        raise ValueError(f"Duplicate criterion keys in rubric: {keys}")
    return criteria


_RUBRICS: Dict[MediaType, Tuple[RubricCriterion, ...]] = {
    MediaType.FILM: _rubric(
        ("plotAndNarrative", "Plot & Narrative"),
        ("characterDevelopment", "Character Development"),
        ("cinematography", "Cinematography"),
        ("editingAndPacing", "Editing & Pacing"),
        ("soundDesign", "Sound Design & Music Score"),
        ("themeAndMessage", "Theme & Message"),
    ),
    MediaType.SHORT_FILM: _rubric(
        ("conceptAndOriginality", "Concept & Originality"),
        ("storytellingEfficiency", "Storytelling Efficiency within a limited runtime"),
        ("visualStorytelling", "Visual Storytelling"),
        ("emotionalImpact", "Emotional Impact"),
        ("technicalExecution", "Technical Execution"),
    ),
    MediaType.AD_SPOT: _rubric(
        ("brandMessageClarity", "Brand Message Clarity"),
        ("callToAction", "CTA Effectiveness"),
        ("memorabilityAndHook", "Memorability & Hook"),
        ("targetAudienceAlignment", "Target Audience Alignment"),
        ("persuasion", "Persuasion"),
    ),
    MediaType.GENERAL_VIDEO_CONTENT: _rubric(
        ("engagementHook", "Engagement Hook in the opening seconds"),
        ("valueDelivery", "Value Delivery (information or entertainment)"),
        ("visualAndAudioQuality", "Visual & Audio Quality"),
        ("pacingAndEditing", "Pacing & Editing"),
        ("viewerRetention", "Viewer Retention"),
    ),
    MediaType.MOTION_VIDEO: _rubric(
        ("visualDesignAndAesthetics", "Visual Design & Aesthetics"),
        ("animationQuality", "Animation Quality & Fluidity"),
        ("clarityOfMessage", "Clarity of Message"),
        ("pacingAndRhythm", "Pacing & Rhythm"),
        ("soundIntegration", "Sound Integration"),
    ),
    MediaType.ANIMATION: _rubric(
        ("storytelling", "Storytelling & Structure"),
        ("artDirectionAndStyle", "Art Direction & Style"),
        ("characterDesignAndAppeal", "Character Design & Appeal"),
        ("animationPrinciples", "Application of Animation Principles"),
        ("soundDesign", "Sound & Music Design"),
    ),
    MediaType.DOCUMENTARY: _rubric(
        ("researchAndCredibility", "Research & Credibility"),
        ("narrativeStructure", "Narrative Structure & Flow"),
        ("visualEvidenceAndStorytelling", "Visual Evidence & Storytelling"),
        ("pointOfView", "Point of View & Objectivity"),
        ("emotionalAndIntellectualImpact", "Emotional & Intellectual Impact"),
    ),
    MediaType.MUSIC_VIDEO: _rubric(
        ("conceptAndOriginality", "Concept & Originality"),
        ("visualInterpretationOfMusic", "Visual Interpretation of Music"),
        ("cinematographyAndEditing", "Cinematography & Editing"),
        ("artistPerformance", "Artist Performance & Representation"),
        ("aestheticAndStyle", "Aesthetics & Style"),
    ),
    MediaType.PHOTOGRAPHY: _rubric(
        ("composition", "Composition"),
        ("lighting", "Lighting"),
        ("subjectAndStorytelling", "Subject & Storytelling"),
        ("technicalQuality", "Technical Quality"),
        ("emotionalImpact", "Emotional Impact"),
    ),
    MediaType.FINE_ART: _rubric(
        ("conceptAndOriginality", "Concept & Originality"),
        ("techniqueAndExecution", "Technique & Execution"),
        ("compositionAndForm", "Composition & Form"),
        ("emotionalExpression", "Emotional Expression"),
        ("viewerInterpretation", "Openness to Viewer Interpretation"),
    ),
    MediaType.OTHER: _rubric(
        ("creativity", "Creativity"),
        ("clarity", "Clarity of Communication"),
        ("engagement", "Audience Engagement"),
        ("goalAlignment", "Alignment with Goal"),
    ),
}

# Read-only view; the table never changes at runtime.
RUBRIC_REGISTRY: Mapping[MediaType, Tuple[RubricCriterion, ...]] = MappingProxyType(_RUBRICS)


# Design assessment: fixed criteria, each with the guidance embedded in the prompt.
DESIGN_CRITERIA: Tuple[Tuple[RubricCriterion, str], ...] = (
    (RubricCriterion("visualAppeal", "Visual Appeal"),
     "use of color, style and overall aesthetics"),
    (RubricCriterion("usabilityClarity", "Usability & Clarity"),
     "how easy the design is to understand and use"),
    (RubricCriterion("originality", "Originality"),
     "novelty and how distinctive the design is"),
    (RubricCriterion("designComposition", "Composition"),
     "layout, information hierarchy, balance and use of whitespace"),
    (RubricCriterion("alignmentWithGoal", "Goal Alignment"),
     "how well the design serves the stated goal"),
)

DESIGN_CRITERIA_KEYS: Tuple[str, ...] = tuple(criterion.key for criterion, _ in DESIGN_CRITERIA)


def resolve_media_type(media_type: Union[str, MediaType]) -> MediaType:
    """
    Resolve a media type identifier, falling back to MediaType.OTHER.

    Args:
        media_type: MediaType or its string value (e.g., "short-film")

    Returns:
        The matching MediaType, or the fallback for unknown identifiers
    """
    if isinstance(media_type, MediaType):
        return media_type
    try:
        return MediaType(media_type)
    except ValueError:
        return FALLBACK_MEDIA_TYPE


def criteria_for(media_type: Union[str, MediaType]) -> Tuple[RubricCriterion, ...]:
    """
    Get the ordered rubric for a media type.

    Unknown media types get the general "other" rubric instead of an error;
    the forms only ever offer registered types.
    """
    return RUBRIC_REGISTRY[resolve_media_type(media_type)]


def criteria_keys(media_type: Union[str, MediaType]) -> Tuple[str, ...]:
    """Ordered criterion keys for a media type."""
    return tuple(criterion.key for criterion in criteria_for(media_type))


def criteria_labels(media_type: Union[str, MediaType]) -> Dict[str, str]:
    """Map criterion key to label, in rubric order."""
    return {criterion.key: criterion.label for criterion in criteria_for(media_type)}
