"""
AI service abstraction for multi-provider support.

The rest of the package only sees two capabilities: structured text
generation constrained by a response schema, and image generation.
"""

import base64
import copy
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from creative_assistant.core.encoding import EncodedMedia
from creative_assistant.core.errors import ServiceCallFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageOptions:
    """Options for an image generation call."""

    count: int = 1
    output_mime_type: str = "image/jpeg"
    aspect_ratio: str = "9:16"


class AIService(Protocol):
    """Protocol defining the interface for generative AI services."""

    async def generate_structured_text(
        self,
        prompt: str,
        schema: Dict[str, Any],
        attachments: Sequence[EncodedMedia] = (),
    ) -> str:
        """
        Generate JSON text constrained by a response schema.

        Args:
            prompt: Prompt text
            schema: JSON-schema-like descriptor using Gemini type names
            attachments: Optional inline media sent alongside the prompt

        Returns:
            Raw response text, expected to be JSON matching the schema
        """
        ...

    async def generate_images(
        self,
        prompt: str,
        options: ImageOptions,
        attachments: Sequence[EncodedMedia] = (),
    ) -> List[bytes]:
        """
        Generate images from a prompt.

        Returns:
            Raw image bytes, one entry per generated image
        """
        ...


class BaseAIService(ABC):
    """Abstract base class for AI service implementations."""

    def __init__(self, text_model: str, image_model: str, api_key: Optional[str] = None):
        """
        Initialize the service.

        Args:
            text_model: Model used for structured text generation
            image_model: Model used for image generation
            api_key: API key for authentication (if required)
        """
        self.text_model = text_model
        self.image_model = image_model
        self.api_key = api_key

    @abstractmethod
    async def generate_structured_text(
        self,
        prompt: str,
        schema: Dict[str, Any],
        attachments: Sequence[EncodedMedia] = (),
    ) -> str:
        """Generate schema-constrained JSON text."""
        pass

    @abstractmethod
    async def generate_images(
        self,
        prompt: str,
        options: ImageOptions,
        attachments: Sequence[EncodedMedia] = (),
    ) -> List[bytes]:
        """Generate images."""
        pass


class GeminiService(BaseAIService):
    """Google Gemini / Imagen implementation using the google-genai SDK."""

    def __init__(
        self,
        text_model: str = "gemini-2.5-flash",
        image_model: str = "imagen-4.0-generate-001",
        api_key: Optional[str] = None,
    ):
        """
        Initialize Gemini service.

        Args:
            text_model: Gemini model name (e.g., "gemini-2.5-flash")
            image_model: Imagen model name (e.g., "imagen-4.0-generate-001")
            api_key: Google API key (defaults to GEMINI_API_KEY or GOOGLE_API_KEY env var)

        Raises:
            ValueError: If API key is not provided
        """
        api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ValueError(
                "Google API key is required. "
                "Set GEMINI_API_KEY environment variable or pass api_key parameter."
            )
        super().__init__(text_model, image_model, api_key)
        from google import genai
        from google.genai import types
        self.client = genai.Client(api_key=self.api_key)
        self.types = types

    def _contents(self, prompt: str, attachments: Sequence[EncodedMedia]) -> Any:
        if not attachments:
            return prompt
        parts = [self.types.Part.from_text(text=prompt)]
        for media in attachments:
            parts.append(self.types.Part.from_bytes(data=media.to_bytes(), mime_type=media.mime_type))
        return parts

    async def generate_structured_text(
        self,
        prompt: str,
        schema: Dict[str, Any],
        attachments: Sequence[EncodedMedia] = (),
    ) -> str:
        """Generate structured output using Gemini's JSON mode."""
        contents = self._contents(prompt, attachments)
        config = self.types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
        )
        logger.debug("Gemini generate_content: model=%s, attachments=%d", self.text_model, len(attachments))
        try:
            response = await self.client.aio.models.generate_content(
                model=self.text_model,
                contents=contents,
                config=config,
            )
            text = response.text
        except Exception as e:
            raise ServiceCallFailure(f"Gemini generate_content failed: {e}") from e

        if not text:
            raise ServiceCallFailure("Gemini returned an empty response")
        return text

    async def generate_images(
        self,
        prompt: str,
        options: ImageOptions,
        attachments: Sequence[EncodedMedia] = (),
    ) -> List[bytes]:
        """Generate images using Imagen."""
        if attachments:
            raise ServiceCallFailure("Imagen does not accept inline attachments")
        config = self.types.GenerateImagesConfig(
            number_of_images=options.count,
            output_mime_type=options.output_mime_type,
            aspect_ratio=options.aspect_ratio,
        )
        logger.debug("Imagen generate_images: model=%s, count=%d", self.image_model, options.count)
        try:
            response = await self.client.aio.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=config,
            )
        except Exception as e:
            raise ServiceCallFailure(f"Imagen generate_images failed: {e}") from e

        return [
            generated.image.image_bytes
            for generated in (response.generated_images or [])
            if generated.image and generated.image.image_bytes
        ]


# Portrait and landscape ratios map onto the closest size the OpenAI image API offers.
_OPENAI_IMAGE_SIZES = {
    "1:1": "1024x1024",
    "3:4": "1024x1536",
    "9:16": "1024x1536",
    "4:3": "1536x1024",
    "16:9": "1536x1024",
}


def to_json_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a Gemini-style schema into a strict JSON Schema.

    Type names are lower-cased and every object is closed with
    additionalProperties=false, which OpenAI's strict mode requires.
    """
    converted = copy.deepcopy(schema)
    if "type" in converted:
        converted["type"] = converted["type"].lower()
    if converted.get("type") == "object":
        converted["additionalProperties"] = False
        converted["properties"] = {
            key: to_json_schema(value) for key, value in converted.get("properties", {}).items()
        }
    if "items" in converted:
        converted["items"] = to_json_schema(converted["items"])
    return converted


class OpenAIService(BaseAIService):
    """OpenAI API implementation."""

    def __init__(
        self,
        text_model: str = "gpt-4o",
        image_model: str = "gpt-image-1",
        api_key: Optional[str] = None,
    ):
        """
        Initialize OpenAI service.

        Args:
            text_model: OpenAI chat model name (e.g., "gpt-4o")
            image_model: OpenAI image model name (e.g., "gpt-image-1")
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)

        Raises:
            ValueError: If API key is not provided
        """
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "OpenAI API key is required. "
                "Set OPENAI_API_KEY environment variable or pass api_key parameter."
            )
        super().__init__(text_model, image_model, api_key)
        from openai import AsyncOpenAI
        self.client = AsyncOpenAI(api_key=self.api_key)

    async def generate_structured_text(
        self,
        prompt: str,
        schema: Dict[str, Any],
        attachments: Sequence[EncodedMedia] = (),
    ) -> str:
        """Generate structured output using a strict json_schema response format."""
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for media in attachments:
            if media.kind != "image":
                raise ServiceCallFailure(
                    f"OpenAI chat completions cannot take {media.mime_type} attachments"
                )
            content.append({
                "type": "image_url",
                "image_url": {"url": f"data:{media.mime_type};base64,{media.data}"},
            })

        try:
            response = await self.client.chat.completions.create(
                model=self.text_model,
                messages=[{"role": "user", "content": content}],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "structured_response",
                        "schema": to_json_schema(schema),
                        "strict": True,
                    },
                },
            )
        except Exception as e:
            raise ServiceCallFailure(f"OpenAI chat completion failed: {e}") from e

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise ServiceCallFailure("OpenAI returned an empty response")
        return text

    async def generate_images(
        self,
        prompt: str,
        options: ImageOptions,
        attachments: Sequence[EncodedMedia] = (),
    ) -> List[bytes]:
        """Generate images using the OpenAI images endpoint."""
        if attachments:
            raise ServiceCallFailure("OpenAI image generation does not accept inline attachments")
        try:
            response = await self.client.images.generate(
                model=self.image_model,
                prompt=prompt,
                n=options.count,
                size=_OPENAI_IMAGE_SIZES.get(options.aspect_ratio, "1024x1024"),
                output_format=options.output_mime_type.split("/", 1)[1],
            )
        except Exception as e:
            raise ServiceCallFailure(f"OpenAI image generation failed: {e}") from e

        return [base64.b64decode(item.b64_json) for item in (response.data or []) if item.b64_json]


def create_service_from_model(
    model: str,
    image_model: Optional[str] = None,
    api_key: Optional[str] = None,
) -> BaseAIService:
    """
    Automatically create the appropriate AI service based on model name.

    Args:
        model: Text model name (e.g., "gemini-2.5-flash", "gpt-4o")
        image_model: Optional image model; each service has its own default
        api_key: Optional API key (if not provided, uses environment variables)

    Returns:
        Appropriate service instance

    Raises:
        ValueError: If model name doesn't match any known provider pattern
    """
    model_lower = model.lower()

    # Gemini models: gemini-*
    if model_lower.startswith("gemini-"):
        if image_model:
            return GeminiService(text_model=model, image_model=image_model, api_key=api_key)
        return GeminiService(text_model=model, api_key=api_key)

    # OpenAI models: gpt-*, o1-*
    elif model_lower.startswith("gpt-") or model_lower.startswith("o1-"):
        # Imagen model names are meaningless to OpenAI
        if image_model and not image_model.lower().startswith("imagen-"):
            return OpenAIService(text_model=model, image_model=image_model, api_key=api_key)
        return OpenAIService(text_model=model, api_key=api_key)

    else:
        raise ValueError(
            f"Unknown model: {model}. "
            "Supported model prefixes: 'gemini-' (Google), 'gpt-', 'o1-' (OpenAI)"
        )
