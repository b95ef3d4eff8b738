"""Per-endpoint validation profiles.

Each profile runs every check that applies to its endpoint and returns the
full list of failures, at most one per field.
"""

import re
from typing import Any

from app.schemas import FieldError
from app.uploads import UploadGateResult

AUDIO_REQUIRED_MESSAGE = "Audio file is required"
PROMPT_REQUIRED_MESSAGE = "Prompt is required"
PROMPT_TYPE_MESSAGE = "Prompt must be a string"

# C0/C1 control characters except tab, newline and carriage return
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

# Characters escaped by validator.js escape()
_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#x27;",
        "<": "&lt;",
        ">": "&gt;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)


def sanitize_prompt(text: str) -> str:
    """Trim, drop control characters and escape markup-significant characters."""
    return _CONTROL_CHARS.sub("", text).strip().translate(_ESCAPES)


def validate_transcription(gate: UploadGateResult) -> list[FieldError]:
    """Transcription profile: the audio file must be present and of an allowed type."""
    if not gate.received:
        return [FieldError(msg=AUDIO_REQUIRED_MESSAGE, path=gate.field)]
    if gate.error:
        return [FieldError(msg=gate.error, path=gate.field)]
    return []


def validate_prompt(body: dict[str, Any]) -> tuple[str, list[FieldError]]:
    """
    Prompting profile: ``prompt`` must be a non-blank string.

    Returns:
        The sanitized prompt (empty when invalid) and the list of failures.
    """
    value = body.get("prompt")

    if value is None:
        return "", [FieldError(msg=PROMPT_REQUIRED_MESSAGE, path="prompt")]

    if not isinstance(value, str):
        return "", [FieldError(msg=PROMPT_TYPE_MESSAGE, path="prompt")]

    if not value.strip():
        return "", [FieldError(msg=PROMPT_REQUIRED_MESSAGE, path="prompt", value=value)]

    sanitized = sanitize_prompt(value)
    if not sanitized:
        # nothing but control characters
        return "", [FieldError(msg=PROMPT_REQUIRED_MESSAGE, path="prompt", value=value)]
    return sanitized, []
