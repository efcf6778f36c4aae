"""Tests for the AI service providers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from creative_assistant.contracts.builder import build_idea_request
from creative_assistant.core.errors import ServiceCallFailure
from creative_assistant.core.llm import (
    GeminiService,
    ImageOptions,
    OpenAIService,
    create_service_from_model,
    to_json_schema,
)


@pytest.fixture
def gemini(monkeypatch) -> GeminiService:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    service = GeminiService()
    service.client = MagicMock()
    return service


@pytest.fixture
def openai_service(monkeypatch) -> OpenAIService:
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    service = OpenAIService()
    service.client = MagicMock()
    return service


class TestCreateServiceFromModel:
    """Tests for create_service_from_model."""

    def test_gemini(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        service = create_service_from_model("gemini-2.5-flash", "imagen-4.0-generate-001")
        assert isinstance(service, GeminiService)
        assert service.image_model == "imagen-4.0-generate-001"

    def test_openai_ignores_imagen_model(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        service = create_service_from_model("gpt-4o", "imagen-4.0-generate-001")
        assert isinstance(service, OpenAIService)
        assert service.image_model == "gpt-image-1"

    def test_unknown_prefix(self):
        with pytest.raises(ValueError, match="Unknown model"):
            create_service_from_model("llama-3")

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="API key"):
            GeminiService()


class TestToJsonSchema:
    """Tests for to_json_schema."""

    def test_lowercases_and_closes_objects(self):
        schema = to_json_schema(build_idea_request("t", "a", "g").expected_schema)
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False
        items = schema["properties"]["ideas"]["items"]
        assert items["type"] == "object"
        assert items["additionalProperties"] is False
        assert items["properties"]["hook"]["type"] == "string"

    def test_does_not_mutate_input(self):
        original = build_idea_request("t", "a", "g").expected_schema
        to_json_schema(original)
        assert original["type"] == "OBJECT"


class TestGeminiService:
    """Tests for GeminiService with a mocked client."""

    @pytest.mark.asyncio
    async def test_structured_text(self, gemini):
        gemini.client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text='{"ideas": []}'))
        text = await gemini.generate_structured_text("prompt", {"type": "OBJECT"})
        assert text == '{"ideas": []}'
        kwargs = gemini.client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_attachments_become_parts(self, gemini, make_media):
        gemini.client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="{}"))
        await gemini.generate_structured_text("prompt", {"type": "OBJECT"}, [make_media(b"img")])
        contents = gemini.client.aio.models.generate_content.call_args.kwargs["contents"]
        assert len(contents) == 2
        assert contents[1].inline_data.data == b"img"
        assert contents[1].inline_data.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_service_failure(self, gemini):
        gemini.client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("503"))
        with pytest.raises(ServiceCallFailure):
            await gemini.generate_structured_text("prompt", {"type": "OBJECT"})

    @pytest.mark.asyncio
    async def test_blocked_response_becomes_service_failure(self, gemini):
        class BlockedResponse:
            @property
            def text(self):
                raise ValueError("response has no candidates")

        gemini.client.aio.models.generate_content = AsyncMock(return_value=BlockedResponse())
        with pytest.raises(ServiceCallFailure):
            await gemini.generate_structured_text("prompt", {"type": "OBJECT"})

    @pytest.mark.asyncio
    async def test_empty_response(self, gemini):
        gemini.client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=None))
        with pytest.raises(ServiceCallFailure):
            await gemini.generate_structured_text("prompt", {"type": "OBJECT"})

    @pytest.mark.asyncio
    async def test_images(self, gemini):
        generated = [SimpleNamespace(image=SimpleNamespace(image_bytes=b"jpeg"))]
        gemini.client.aio.models.generate_images = AsyncMock(
            return_value=SimpleNamespace(generated_images=generated)
        )
        images = await gemini.generate_images("prompt", ImageOptions(aspect_ratio="9:16"))
        assert images == [b"jpeg"]
        config = gemini.client.aio.models.generate_images.call_args.kwargs["config"]
        assert config.aspect_ratio == "9:16"
        assert config.number_of_images == 1


class TestOpenAIService:
    """Tests for OpenAIService with a mocked client."""

    @pytest.mark.asyncio
    async def test_structured_text(self, openai_service):
        message = SimpleNamespace(content='{"script": []}')
        openai_service.client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)])
        )
        text = await openai_service.generate_structured_text("prompt", {"type": "OBJECT", "properties": {}})
        assert text == '{"script": []}'
        response_format = openai_service.client.chat.completions.create.call_args.kwargs["response_format"]
        assert response_format["json_schema"]["strict"] is True
        assert response_format["json_schema"]["schema"]["type"] == "object"

    @pytest.mark.asyncio
    async def test_video_attachment_rejected(self, openai_service, make_media):
        with pytest.raises(ServiceCallFailure):
            await openai_service.generate_structured_text(
                "prompt", {"type": "OBJECT"}, [make_media(mime_type="video/mp4")]
            )

    @pytest.mark.asyncio
    async def test_images(self, openai_service):
        openai_service.client.images.generate = AsyncMock(
            return_value=SimpleNamespace(data=[SimpleNamespace(b64_json="anBlZw==")])
        )
        images = await openai_service.generate_images("prompt", ImageOptions())
        assert images == [b"jpeg"]
        kwargs = openai_service.client.images.generate.call_args.kwargs
        assert kwargs["size"] == "1024x1536"
        assert kwargs["output_format"] == "jpeg"
