"""Simple configuration for core library usage."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2048

TRANSCRIPTION_PROMPT = (
    "Transcribe this audio file. "
    "Return only the transcribed text without any additional commentary or formatting."
)


@dataclass
class GatewayConfig:
    """Configuration for the Gemini gateway core library.

    This is a simplified config suitable for library usage without
    environment variable loading.

    Args:
        api_key: Gemini API key sent with every provider request
        model: Gemini model identifier used for both operations
        base_url: Base URL of the Gemini REST API
        timeout_s: Read timeout for provider requests in seconds
        connect_timeout_s: Connection timeout for provider requests in seconds
        temperature: Sampling temperature for prompt generation
        max_output_tokens: Output token cap for prompt generation
        transcription_prompt: Instruction sent alongside audio for transcription
    """

    api_key: str
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 300.0
    connect_timeout_s: float = 10.0

    # Generation settings
    temperature: float = TEMPERATURE
    max_output_tokens: int = MAX_OUTPUT_TOKENS

    # Prompt settings
    transcription_prompt: str = TRANSCRIPTION_PROMPT
