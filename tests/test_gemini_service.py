import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from google.genai import types

from meeting_analytics.gemini_service import GeminiService


def _service(response):
    with patch("meeting_analytics.gemini_service.genai.Client") as client_cls:
        client_cls.return_value.aio.models.generate_content = AsyncMock(return_value=response)
        service = GeminiService("test-key", model="gemini-test")
    client_cls.assert_called_once_with(api_key="test-key")
    return service


class TestGeminiService:
    @pytest.mark.asyncio
    async def test_sends_media_then_prompt(self):
        service = _service(SimpleNamespace(text='{"transcript": "hi"}'))

        text = await service.analyze(b"\x00\x01media", "video/mp4", "Describe the meeting")

        assert text == '{"transcript": "hi"}'
        call = service.client.aio.models.generate_content.await_args
        assert call.kwargs["model"] == "gemini-test"
        (content,) = call.kwargs["contents"]
        assert content.role == "user"
        media, prompt = content.parts
        assert media.inline_data.data == b"\x00\x01media"
        assert media.inline_data.mime_type == "video/mp4"
        assert prompt.text == "Describe the meeting"

    @pytest.mark.asyncio
    async def test_joins_candidate_parts_when_text_is_empty(self):
        response = SimpleNamespace(
            text=None,
            candidates=[
                SimpleNamespace(content=types.Content(
                    role="model",
                    parts=[types.Part.from_text(text="part one, "), types.Part.from_text(text="part two")],
                )),
            ],
        )
        service = _service(response)

        assert await service.analyze(b"x", "audio/mpeg", "p") == "part one, part two"

    @pytest.mark.asyncio
    async def test_empty_reply_is_empty_string(self):
        service = _service(SimpleNamespace(text=None, candidates=[]))

        assert await service.analyze(b"x", "audio/mpeg", "p") == ""

    @pytest.mark.asyncio
    async def test_api_errors_propagate(self):
        service = _service(None)
        service.client.aio.models.generate_content.side_effect = RuntimeError("503 UNAVAILABLE")

        with pytest.raises(RuntimeError, match="UNAVAILABLE"):
            await service.analyze(b"x", "video/mp4", "p")
