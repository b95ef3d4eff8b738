"""Gemini Gateway - audio transcription and prompting over Google Gemini.

A small Python library that wraps the Gemini ``generateContent`` REST method
with two operations: transcribing an in-memory audio upload and answering a
plain text prompt. Provider failures surface as ``ProviderError`` with an
explicit ``ProviderErrorKind``.

Usage:
    >>> from gemini_gateway import GatewayConfig, ModelGateway, UploadedAudio
    >>>
    >>> gateway = ModelGateway.from_config(GatewayConfig(api_key="..."))
    >>> audio = UploadedAudio(mime_type="audio/wav", data=open("clip.wav", "rb").read())
    >>> print(await gateway.transcribe(audio))
"""

__version__ = "0.1.0"

# Public library API exports
from gemini_gateway.core.client import GeminiClient
from gemini_gateway.core.config import GatewayConfig
from gemini_gateway.core.models import ModelResponse, TokenUsage, UploadedAudio
from gemini_gateway.core.operations import ModelGateway

# Export exceptions for library users
from gemini_gateway.core.exceptions import (
    GatewayError,
    InvalidResponseError,
    ProviderError,
    ProviderErrorKind,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

__all__ = [
    "__version__",
    # Configuration
    "GatewayConfig",
    # Client and operations
    "GeminiClient",
    "ModelGateway",
    # Data types
    "UploadedAudio",
    "ModelResponse",
    "TokenUsage",
    # Exceptions
    "GatewayError",
    "InvalidResponseError",
    "ProviderError",
    "ProviderErrorKind",
    "UpstreamTimeoutError",
    "UpstreamUnreachableError",
]
