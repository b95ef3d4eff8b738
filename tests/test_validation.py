"""Tests for the per-endpoint validation profiles."""

import pytest

from app.uploads import UNSUPPORTED_FORMAT_MESSAGE, UploadGateResult
from app.validation import sanitize_prompt, validate_prompt, validate_transcription
from gemini_gateway import UploadedAudio


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("hello", "hello"),
        ("  padded\n", "padded"),
        ("<script>alert('x')</script>", "&lt;script&gt;alert(&#x27;x&#x27;)&lt;&#x2F;script&gt;"),
        ('a & "b"', "a &amp; &quot;b&quot;"),
        ("bell\x07 and null\x00", "bell and null"),
        ("keeps\ttabs\nand newlines", "keeps\ttabs\nand newlines"),
        ("a/b\\c`d", "a&#x2F;b&#x5C;c&#96;d"),
    ],
)
def test_sanitize_prompt(raw, expected):
    assert sanitize_prompt(raw) == expected


def test_validate_prompt_returns_sanitized_value():
    text, errors = validate_prompt({"prompt": " <i>hi</i> "})

    assert errors == []
    assert text == "&lt;i&gt;hi&lt;&#x2F;i&gt;"


def test_validate_prompt_blank_keeps_offending_value():
    text, errors = validate_prompt({"prompt": "   "})

    assert text == ""
    assert [(e.path, e.msg, e.value) for e in errors] == [("prompt", "Prompt is required", "   ")]


def test_validate_prompt_control_characters_only():
    _, errors = validate_prompt({"prompt": "\x00\x01"})

    assert errors[0].msg == "Prompt is required"


def test_validate_prompt_missing():
    _, errors = validate_prompt({})

    assert len(errors) == 1
    assert errors[0].msg == "Prompt is required"
    assert errors[0].value is None


def test_validate_prompt_wrong_type():
    _, errors = validate_prompt({"prompt": 3})

    assert errors[0].msg == "Prompt must be a string"


def test_validate_transcription_accepts_file():
    gate = UploadGateResult(field="audio", received=True, audio=UploadedAudio("audio/ogg", b"x"))

    assert validate_transcription(gate) == []


def test_validate_transcription_missing_file():
    errors = validate_transcription(UploadGateResult(field="audio"))

    assert [(e.path, e.msg) for e in errors] == [("audio", "Audio file is required")]


def test_validate_transcription_refused_file():
    gate = UploadGateResult(field="audio", received=True, error=UNSUPPORTED_FORMAT_MESSAGE)

    errors = validate_transcription(gate)
    assert [(e.path, e.msg) for e in errors] == [("audio", UNSUPPORTED_FORMAT_MESSAGE)]


def test_field_error_serialization():
    _, errors = validate_prompt({"prompt": ""})

    assert errors[0].model_dump(exclude_none=True) == {
        "type": "field",
        "msg": "Prompt is required",
        "path": "prompt",
        "location": "body",
        "value": "",
    }
