"""Request-scoped data types passed between the API layer and the gateway."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedAudio:
    """An accepted audio upload held in memory for one request."""

    mime_type: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class TokenUsage:
    """Token counters reported by the provider for one generation."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_metadata(cls, metadata: dict | None) -> "TokenUsage":
        """Read a Gemini ``usageMetadata`` object; absent counters become 0."""
        if not isinstance(metadata, dict):
            return cls()
        return cls(
            prompt_tokens=metadata.get("promptTokenCount") or 0,
            completion_tokens=metadata.get("candidatesTokenCount") or 0,
            total_tokens=metadata.get("totalTokenCount") or 0,
        )


@dataclass(frozen=True)
class ModelResponse:
    """Text produced by the model plus optional usage counters."""

    text: str
    usage: TokenUsage | None = None
