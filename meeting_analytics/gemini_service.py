"""This module contains the class that manages the Gemini communication"""

import logging
from time import perf_counter
from typing import Any, Optional

from google import genai
from google.genai import types

from .config import DEFAULT_MODEL

logger = logging.getLogger(__name__)


def _reply_text(response: Any) -> Optional[str]:
    """Return response.text, joining the first candidate's text parts when it is empty."""
    text = getattr(response, "text", None)
    if text:
        return text
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [p.text for p in parts if getattr(p, "text", None)]
    return "".join(texts) if texts else None


class GeminiService:
    """Sends one uploaded media file plus an instruction to a Gemini model."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL) -> None:
        self.client = genai.Client(api_key=api_key)
        self.model = model

    async def analyze(self, media: bytes, mime_type: str, prompt: str) -> str:
        """Run a single generate_content call and return the reply text ("" if none)."""
        contents = [
            types.Content(
                role="user",
                parts=[
                    # The SDK base64-encodes inline data when serializing the request
                    types.Part.from_bytes(data=media, mime_type=mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
        ]

        t0 = perf_counter()
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
        )
        latency_ms = int((perf_counter() - t0) * 1000)

        prompt_feedback = getattr(response, "prompt_feedback", None)
        if prompt_feedback is not None and getattr(prompt_feedback, "block_reason", None):
            logger.warning("Gemini prompt blocked: reason=%s", prompt_feedback.block_reason)

        text = _reply_text(response) or ""
        logger.info(
            "Gemini reply model=%s bytes=%d latency=%dms chars=%d",
            self.model, len(media), latency_ms, len(text),
        )
        logger.debug("Raw API response: %s", text)
        return text
