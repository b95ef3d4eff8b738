"""Gemini REST client for the generateContent method."""

import json
import logging
from typing import Any

import httpx

from gemini_gateway.core.config import GatewayConfig
from gemini_gateway.core.exceptions import (
    InvalidResponseError,
    ProviderError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Gemini error body."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text or f"Gemini returned HTTP {response.status_code}"

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"Gemini returned HTTP {response.status_code}"


class GeminiClient:
    """Thin async wrapper around ``models.generateContent``.

    A new ``httpx.AsyncClient`` is opened per call, so one instance can be
    shared by concurrent requests without locking.
    """

    def __init__(self, config: GatewayConfig):
        self.config = config

    def _url(self, model: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/v1beta/models/{model}:generateContent"

    async def generate_content(
        self,
        model: str,
        contents: list[dict[str, Any]],
        generation_config: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send a generateContent request and return the decoded response body.

        Args:
            model: Gemini model identifier
            contents: List of content turns (role + parts)
            generation_config: Optional generation parameters

        Returns:
            Parsed JSON response from Gemini

        Raises:
            ProviderError: If Gemini answers with a non-2xx status
            UpstreamUnreachableError: If connection to Gemini fails
            UpstreamTimeoutError: If Gemini does not respond in time
            InvalidResponseError: If the response body is not a JSON object
        """
        url = self._url(model)
        request_body: dict[str, Any] = {"contents": contents}
        if generation_config:
            request_body["generationConfig"] = generation_config

        timeout = httpx.Timeout(
            self.config.timeout_s,
            connect=self.config.connect_timeout_s,
        )

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                logger.debug("Sending generateContent to %s", url)
                response = await client.post(
                    url,
                    json=request_body,
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.config.api_key,
                    },
                )

        except httpx.TimeoutException as e:
            logger.error("Timeout calling Gemini model %s: %s", model, e)
            raise UpstreamTimeoutError(
                "Gemini did not respond in time",
                upstream=self.config.base_url,
            ) from e

        except (httpx.ConnectError, httpx.NetworkError) as e:
            logger.error("Connection error calling Gemini model %s: %s", model, e)
            raise UpstreamUnreachableError(
                f"Connection to Gemini failed: {str(e)}",
                upstream=self.config.base_url,
            ) from e

        if response.status_code >= 400:
            raise ProviderError.from_status(response.status_code, _error_message(response))

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise InvalidResponseError("Gemini returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise InvalidResponseError("Gemini returned an unexpected response structure")
        return payload
