"""
Form boundary.

Forms hold raw user input and reject incomplete or malformed input with
InputValidationError before anything is sent to the AI service.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from creative_assistant.assessment.rubrics import DEFAULT_MEDIA_TYPE, resolve_media_type
from creative_assistant.core.encoding import EncodedMedia, classify, encode, guess_mime_type, read_text
from creative_assistant.core.enums import MediaType
from creative_assistant.core.errors import InputValidationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _require(**fields: str) -> None:
    missing = [name for name, value in fields.items() if not (value or "").strip()]
    if missing:
        raise InputValidationError(f"Please fill in all required fields: {', '.join(missing)}")


@dataclass
class IdeaForm:
    """Input for idea generation."""

    topic: str = ""
    audience: str = ""
    goal: str = ""
    duration: str = ""

    def validate(self) -> None:
        """Raise InputValidationError unless topic, audience and goal are filled in."""
        _require(topic=self.topic, audience=self.audience, goal=self.goal)


class AssessmentForm:
    """
    Input for a media assessment.

    The work is either pasted text or an attached video/image, never both:
    whichever was set most recently wins and the other is cleared.
    """

    def __init__(self, media_type: Union[str, MediaType] = DEFAULT_MEDIA_TYPE, goal: str = ""):
        self.media_type = resolve_media_type(media_type)
        self.goal = goal
        self._text = ""
        self._attachment: Optional[EncodedMedia] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def attachment(self) -> Optional[EncodedMedia]:
        return self._attachment

    def set_text(self, text: str) -> None:
        """Set the pasted work text and drop any attachment."""
        self._text = text
        if self._attachment is not None:
            logger.debug("Work text set, clearing attachment %s", self._attachment.name)
        self._attachment = None

    def attach(self, media: EncodedMedia) -> None:
        """
        Attach an encoded video or image of the work and drop any pasted text.

        Raises:
            InputValidationError: If the media is not a video or an image
        """
        if media.kind not in ("video", "image"):
            raise InputValidationError(
                f"Unsupported attachment type '{media.mime_type}'. Please upload a video or an image."
            )
        self._attachment = media
        self._text = ""

    def clear_work(self) -> None:
        self._text = ""
        self._attachment = None

    async def load_file(self, path: Union[str, Path]) -> None:
        """
        Load an uploaded file into the form.

        Text files fill the work text; video and image files become the
        attachment.

        Raises:
            InputValidationError: For any other file type
            EncodingError: If the file cannot be read
        """
        mime_type = guess_mime_type(path)
        kind = classify(mime_type)
        if kind == "text":
            self.set_text(await read_text(path))
        elif kind in ("video", "image"):
            self.attach(await encode(path, mime_type))
        else:
            raise InputValidationError(
                f"Unsupported file type '{mime_type}'. Please upload a text, video or image file."
            )

    def validate(self) -> None:
        """Raise InputValidationError unless a goal and a work (text or attachment) are present."""
        _require(goal=self.goal)
        if not self._text.strip() and self._attachment is None:
            raise InputValidationError("Please paste the work or attach a file to assess")


@dataclass
class DesignAssessmentForm:
    """Input for a design assessment: brief plus one or more design images."""

    concept: str = ""
    audience: str = ""
    goal: str = ""
    images: List[EncodedMedia] = field(default_factory=list)

    def add_images(self, media: Iterable[EncodedMedia]) -> int:
        """
        Add design images, skipping anything that is not an image.

        Returns:
            Number of images added

        Raises:
            InputValidationError: If the selection contained no images at all
        """
        selection = list(media)
        accepted = [item for item in selection if item.kind == "image"]
        for item in selection:
            if item.kind != "image":
                logger.warning("Skipping non-image file %s (%s)", item.name, item.mime_type)
        if selection and not accepted:
            raise InputValidationError("Please select image files only")
        self.images.extend(accepted)
        return len(accepted)

    async def load_images(self, paths: Iterable[Union[str, Path]]) -> int:
        """Encode image files and add them; non-image paths are skipped without being read."""
        selection = []
        for path in paths:
            mime_type = guess_mime_type(path)
            if classify(mime_type) != "image":
                logger.warning("Skipping non-image file %s (%s)", path, mime_type)
                continue
            selection.append(await encode(path, mime_type))
        if not selection:
            raise InputValidationError("Please select image files only")
        return self.add_images(selection)

    def remove_image(self, index: int) -> EncodedMedia:
        """
        Remove one image by position.

        Raises:
            InputValidationError: If the index is out of range
        """
        if not 0 <= index < len(self.images):
            raise InputValidationError(f"No image at position {index}")
        return self.images.pop(index)

    def validate(self) -> None:
        """Raise InputValidationError unless the brief is complete and at least one image is attached."""
        _require(concept=self.concept, audience=self.audience, goal=self.goal)
        if not self.images:
            raise InputValidationError("Please upload at least one design image")


@dataclass
class LoginForm:
    """Input for login."""

    user: str = ""
    email: str = ""

    def validate(self) -> None:
        """Raise InputValidationError unless both fields are present and the email looks valid."""
        _require(user=self.user, email=self.email)
        if not EMAIL_PATTERN.search(self.email):
            raise InputValidationError("Please enter a valid email address")
