"""
Prompt templates for every AI service request.
"""

IDEA_PROMPT_TEMPLATE = """You are a social media content strategist. Create {idea_count} unique ideas for short-form videos (such as TikTok or Instagram Reels) based on the information below. Write all output in {language}.
- Topic/Product: {topic}
- Target audience: {audience}
- Content goal: {goal}
{duration_line}For each idea, provide a concept name (conceptName), a format (format), a short plot (shortPlot), visual and audio direction (visualAudioDirection), and an attention-grabbing hook (hook)."""

IDEA_DURATION_LINE = "- Desired video length: {duration}\n"

IMAGE_PROMPT_TEMPLATE = (
    "Preview frame for a short video, cinematic style, highly detailed. "
    "Style: {visual_audio_direction} Scene: {short_plot}"
)

SCRIPT_PROMPT_TEMPLATE = """You are a professional scriptwriter. Create a shooting script for a short video from the idea below. Write all output in {language}.
- Concept name: "{concept_name}"
- Hook: "{hook}"
- Plot: "{short_plot}"
- Visual and audio direction: "{visual_audio_direction}"
Write a detailed, production-ready script. The output must be a JSON array of scenes in shooting order, and the values of every property (scene, shot, cameraAngle, cameraMovement, visualDescription, audio, approxDuration) must be written in {language}."""

ASSESSMENT_PROMPT_TEMPLATE = """You are an expert in analyzing and assessing creative work. Assess the following work against the criteria defined specifically for this media type. Score each criterion from 1 to 10 and give feedback on strengths and suggestions for improvement. Write all output in {language}.

- Media type: "{media_type}"
- Work to assess: {work}
- Goal of the work: "{goal}"

Assessment criteria:
{criteria}

Respond in JSON only."""

ASSESSMENT_CRITERION_LINE = "- {label} (key: {key})"

ASSESSMENT_WORK_TEXT = '"""{text}"""'

# Stands in for the work description when the work itself is attached.
ATTACHMENT_PLACEHOLDERS = {
    "video": "[Analyze the attached video file]",
    "image": "[Analyze the attached image file]",
}
ATTACHMENT_PLACEHOLDER_DEFAULT = "[Analyze the attached file]"

DESIGN_ASSESSMENT_PROMPT_TEMPLATE = """You are a design and UX/UI expert. Assess the attached design work as a single set (for example a multi-page brochure, a book, or a series of social posts) against the criteria below. Score each criterion from 1 to 10 and give feedback on strengths and suggestions for improvement. Write all output in {language}. Consider the following information:

- Design concept: "{concept}"
- Target audience: "{audience}"
- Design goal: "{goal}"

Assessment criteria:
{criteria}

Respond in JSON only."""

DESIGN_CRITERION_LINE = "{number}. {label} ({key}): {guidance}"

SCORE_DESCRIPTION = "Score for {label} (1-10)"
STRENGTHS_DESCRIPTION = "Strengths of the work"
IMPROVEMENTS_DESCRIPTION = "Suggestions for improvement"
