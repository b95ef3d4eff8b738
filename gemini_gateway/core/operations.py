"""High-level operations API for the Gemini gateway library."""

import base64
import logging
from typing import Any

from gemini_gateway.core.client import GeminiClient
from gemini_gateway.core.config import GatewayConfig
from gemini_gateway.core.models import ModelResponse, TokenUsage, UploadedAudio

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"


def response_text(payload: dict[str, Any]) -> str:
    """
    Concatenate the text parts of the first candidate.

    Thought parts are skipped. Returns an empty string when the provider
    sent no candidates or no text.
    """
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""

    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str) and not part.get("thought")
    ]
    return "".join(texts)


class ModelGateway:
    """Transcription and prompting on top of a single Gemini model.

    Holds only the client handle and the fixed model identifier; every call
    is independent, so one instance serves all requests.
    """

    def __init__(self, client: GeminiClient, config: GatewayConfig):
        self.client = client
        self.config = config

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "ModelGateway":
        return cls(GeminiClient(config), config)

    @property
    def model(self) -> str:
        return self.config.model

    async def transcribe(self, audio: UploadedAudio) -> str:
        """Transcribe audio and return text transcript ("" when Gemini returns none)."""
        b64_audio = base64.b64encode(audio.data).decode("ascii")

        contents: list[dict[str, Any]] = [
            {
                "role": "user",
                "parts": [
                    {"inlineData": {"mimeType": audio.mime_type, "data": b64_audio}},
                    {"text": self.config.transcription_prompt},
                ],
            }
        ]

        logger.debug("Transcribing %d bytes of %s", audio.size_bytes, audio.mime_type)
        payload = await self.client.generate_content(self.model, contents)
        return response_text(payload)

    async def generate_prompt(self, text: str) -> ModelResponse:
        """Send a text prompt with the fixed generation parameters."""
        contents: list[dict[str, Any]] = [
            {"role": "user", "parts": [{"text": text}]},
        ]
        generation_config = {
            "temperature": self.config.temperature,
            "maxOutputTokens": self.config.max_output_tokens,
        }

        payload = await self.client.generate_content(self.model, contents, generation_config)
        return ModelResponse(
            text=response_text(payload) or NO_RESPONSE_TEXT,
            usage=TokenUsage.from_metadata(payload.get("usageMetadata")),
        )
