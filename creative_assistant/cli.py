"""
Command line entry point for the Creative Assistant.

Usage:
    creative-assistant login --user "Nok" --email nok@example.com
    creative-assistant ideas --topic "Cold brew coffee" --audience "Office workers" --goal "Brand awareness"
    creative-assistant image idea-1718000000000-1
    creative-assistant script idea-1718000000000-1 --export scripts/
    creative-assistant show idea-1718000000000-1
    creative-assistant assess --media-type short-film --goal "Festival entry" --file cut.mp4
    creative-assistant assess-design --concept "Eco brochure" --audience "Families" --goal "Explain recycling" page1.png page2.png
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from creative_assistant.assessment.rubrics import DEFAULT_MEDIA_TYPE, criteria_labels
from creative_assistant.assistant import CreativeAssistant
from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.enums import MediaType, OperationKind
from creative_assistant.core.errors import CreativeAssistantError, InputValidationError
from creative_assistant.generation.models import Idea
from creative_assistant.session.export import render_script_text
from creative_assistant.session.forms import (
    AssessmentForm,
    DesignAssessmentForm,
    IdeaForm,
    LoginForm,
)
from creative_assistant.session.login import ActivityLogger, LoginManager
from creative_assistant.session.storage import JsonFileStore, load_ideas

logger = logging.getLogger("creative_assistant_cli")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def _print_idea(idea: Idea) -> None:
    print(f"[{idea.id}] {idea.concept_name}")
    print(f"  Format: {idea.format}")
    print(f"  Hook: {idea.hook}")
    print(f"  Plot: {idea.short_plot}")
    print(f"  Visual & Audio: {idea.visual_audio_direction}")
    print(f"  Image: {'yes' if idea.image_url else 'no'} | Script: {len(idea.script or [])} scenes")


def _build_config(args: argparse.Namespace) -> AssistantConfig:
    config = AssistantConfig.from_env()
    if args.model:
        config.text_model = args.model
    if args.image_model:
        config.image_model = args.image_model
    if args.language:
        config.output_language = args.language
    if args.storage_dir:
        config.storage_dir = args.storage_dir
    return config


# --- Commands that do not need the AI service ---

async def cmd_login(args: argparse.Namespace, config: AssistantConfig) -> int:
    manager = LoginManager(
        JsonFileStore(config.storage_dir),
        ActivityLogger(config.activity_log_url, config.activity_log_timeout),
    )
    profile = await manager.login(LoginForm(user=args.user, email=args.email))
    print(f"Logged in as {profile.user} <{profile.email}>")
    return 0


async def cmd_logout(args: argparse.Namespace, config: AssistantConfig) -> int:
    LoginManager(JsonFileStore(config.storage_dir)).logout()
    print("Logged out")
    return 0


async def cmd_show(args: argparse.Namespace, config: AssistantConfig) -> int:
    ideas = load_ideas(JsonFileStore(config.storage_dir))
    if not ideas:
        print("No saved ideas. Run 'creative-assistant ideas' first.")
        return 0
    if args.idea_id is None:
        for idea in ideas:
            _print_idea(idea)
        return 0
    matches = [idea for idea in ideas if idea.id == args.idea_id]
    if not matches:
        logger.error("Unknown idea id: %s", args.idea_id)
        return 1
    idea = matches[0]
    _print_idea(idea)
    if idea.script:
        print()
        print(render_script_text(idea.concept_name, idea.script))
    return 0


# --- Commands that call the AI service ---

async def cmd_ideas(args: argparse.Namespace, assistant: CreativeAssistant) -> int:
    form = IdeaForm(topic=args.topic, audience=args.audience, goal=args.goal, duration=args.duration or "")
    if not await assistant.corner.generate_ideas(form):
        print(assistant.corner.state(OperationKind.IDEAS).error)
        return 1
    for idea in assistant.corner.ideas:
        _print_idea(idea)
    return 0


async def cmd_image(args: argparse.Namespace, assistant: CreativeAssistant) -> int:
    assistant.restore()
    if not await assistant.corner.generate_image(args.idea_id):
        print(assistant.corner.state(OperationKind.IMAGE, args.idea_id).error)
        return 1
    print(f"Image saved for {args.idea_id}")
    return 0


async def cmd_script(args: argparse.Namespace, assistant: CreativeAssistant) -> int:
    assistant.restore()
    if not await assistant.corner.generate_script(args.idea_id):
        print(assistant.corner.state(OperationKind.SCRIPT, args.idea_id).error)
        return 1
    idea = assistant.corner.get_idea(args.idea_id)
    print(render_script_text(idea.concept_name, idea.script))
    if args.export:
        path = await assistant.corner.export_script(args.idea_id, args.export)
        print(f"\nScript exported to {path}")
    return 0


async def cmd_assess(args: argparse.Namespace, assistant: CreativeAssistant) -> int:
    form = AssessmentForm(media_type=args.media_type, goal=args.goal)
    if args.file:
        await form.load_file(args.file)
    else:
        form.set_text(args.text or "")

    desk = assistant.desk
    if not await desk.assess_work(form):
        print(desk.state(OperationKind.ASSESSMENT).error)
        return 1

    labels = criteria_labels(form.media_type)
    print(f"Assessment ({form.media_type.value}) - average {desk.result.average_score:.1f}/10")
    for key, score in desk.result.scores.items():
        print(f"  {labels.get(key, key)}: {score}/10")
    print(f"\nStrengths:\n{desk.result.feedback.strengths}")
    print(f"\nImprovements:\n{desk.result.feedback.improvements}")
    return 0


async def cmd_assess_design(args: argparse.Namespace, assistant: CreativeAssistant) -> int:
    form = DesignAssessmentForm(concept=args.concept, audience=args.audience, goal=args.goal)
    await form.load_images(args.images)

    desk = assistant.desk
    if not await desk.assess_design(form):
        print(desk.state(OperationKind.DESIGN_ASSESSMENT).error)
        return 1

    result = desk.design_result
    print(f"Design assessment - average {result.average_score:.1f}/10")
    for key, score in result.scores.model_dump().items():
        print(f"  {key}: {score}/10")
    print(f"\nStrengths:\n{result.feedback.strengths}")
    print(f"\nImprovements:\n{result.feedback.improvements}")
    return 0


LOCAL_COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "show": cmd_show,
}

SERVICE_COMMANDS = {
    "ideas": cmd_ideas,
    "image": cmd_image,
    "script": cmd_script,
    "assess": cmd_assess,
    "assess-design": cmd_assess_design,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Creative Assistant: ideas, scripts and assessments")
    parser.add_argument("--model", help="Text model (e.g., gemini-2.5-flash, gpt-4o)")
    parser.add_argument("--image-model", help="Image model (e.g., imagen-4.0-generate-001)")
    parser.add_argument("--language", help="Language the AI must answer in (default: Thai)")
    parser.add_argument("--storage-dir", help="Directory for saved session data")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Log in")
    p.add_argument("--user", required=True, help="User name")
    p.add_argument("--email", required=True, help="Email address")

    sub.add_parser("logout", help="Log out")

    p = sub.add_parser("show", help="Show saved ideas, or one idea with its script")
    p.add_argument("idea_id", nargs="?", help="Idea id")

    p = sub.add_parser("ideas", help="Generate a new idea list")
    p.add_argument("--topic", required=True, help="Topic or product")
    p.add_argument("--audience", required=True, help="Target audience")
    p.add_argument("--goal", required=True, help="Content goal")
    p.add_argument("--duration", help="Desired video length (e.g., 30 seconds)")

    p = sub.add_parser("image", help="Generate a preview image for an idea")
    p.add_argument("idea_id", help="Idea id")

    p = sub.add_parser("script", help="Generate a shooting script for an idea")
    p.add_argument("idea_id", help="Idea id")
    p.add_argument("--export", metavar="DIR", help="Also export the script as a text file into DIR")

    p = sub.add_parser("assess", help="Assess a piece of media")
    p.add_argument(
        "--media-type",
        default=DEFAULT_MEDIA_TYPE.value,
        choices=[m.value for m in MediaType],
        help="Media type (selects the rubric)",
    )
    p.add_argument("--goal", required=True, help="Goal of the work")
    work = p.add_mutually_exclusive_group(required=True)
    work.add_argument("--text", help="Text of the work")
    work.add_argument("--file", help="Text, video or image file of the work")

    p = sub.add_parser("assess-design", help="Assess a set of design images")
    p.add_argument("--concept", required=True, help="Design concept")
    p.add_argument("--audience", required=True, help="Target audience")
    p.add_argument("--goal", required=True, help="Design goal")
    p.add_argument("images", nargs="+", help="Design image files")

    return parser


async def run(args: argparse.Namespace) -> int:
    """Run one CLI command and return the process exit code."""
    config = _build_config(args)
    if args.command in LOCAL_COMMANDS:
        return await LOCAL_COMMANDS[args.command](args, config)

    assistant = CreativeAssistant(config=config)
    return await SERVICE_COMMANDS[args.command](args, assistant)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        code = asyncio.run(run(args))
    except InputValidationError as e:
        logger.error("Invalid input: %s", e)
        sys.exit(2)
    except (CreativeAssistantError, ValueError) as e:
        logger.error("Command failed: %s", e)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
