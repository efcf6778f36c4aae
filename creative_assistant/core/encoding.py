"""
Media encoding utilities.

Converts files into base64 payloads that can be attached inline to an
AI service request.
"""

import asyncio
import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from creative_assistant.core.errors import EncodingError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class EncodedMedia:
    """A base64 payload plus its content type."""
    
    data: str
    mime_type: str
    name: str = ""
    
    @property
    def kind(self) -> Optional[str]:
        """Top-level media kind: "text", "video", "image" or None."""
        return classify(self.mime_type)
    
    def to_bytes(self) -> bytes:
        """Decode the payload back into raw bytes."""
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError(f"Invalid base64 payload for {self.name or 'attachment'}: {e}")


def classify(mime_type: Optional[str]) -> Optional[str]:
    """
    Map a content type onto the upload categories the forms understand.
    
    Args:
        mime_type: Content type such as "video/mp4"
    
    Returns:
        "text", "video", "image", or None for anything else
    """
    if not mime_type:
        return None
    for prefix in ("text", "video", "image"):
        if mime_type.startswith(prefix + "/"):
            return prefix
    return None


def guess_mime_type(path: Union[str, Path]) -> str:
    """Guess a content type from the file name."""
    return mimetypes.guess_type(str(path))[0] or DEFAULT_MIME_TYPE


def encode_bytes(data: bytes, mime_type: str, name: str = "") -> EncodedMedia:
    """Encode an in-memory payload."""
    return EncodedMedia(
        data=base64.b64encode(data).decode("ascii"),
        mime_type=mime_type,
        name=name,
    )


async def encode(path: Union[str, Path], mime_type: Optional[str] = None) -> EncodedMedia:
    """
    Read a file and encode it for inline upload.
    
    The read runs in a worker thread so the event loop stays responsive
    while large videos are loaded.
    
    Args:
        path: File to encode
        mime_type: Optional content type; guessed from the file name if omitted
    
    Returns:
        EncodedMedia with the base64 payload and content type
    
    Raises:
        EncodingError: If the file cannot be read
    """
    path = Path(path)
    try:
        raw = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise EncodingError(f"Failed to read {path}: {e}")
    
    media = encode_bytes(raw, mime_type or guess_mime_type(path), name=path.name)
    logger.debug("Encoded %s (%s, %d bytes)", path.name, media.mime_type, len(raw))
    return media


async def read_text(path: Union[str, Path]) -> str:
    """
    Read a text upload as UTF-8.
    
    Raises:
        EncodingError: If the file cannot be read or is not valid UTF-8
    """
    path = Path(path)
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EncodingError(f"Failed to read text from {path}: {e}")
