"""Tests for configuration management."""

import tempfile
from pathlib import Path

import pytest

from app.config import ALLOWED_MIME_TYPES, MAX_FILE_SIZE_BYTES, Settings, get_settings
from gemini_gateway.core.config import MAX_OUTPUT_TOKENS, TEMPERATURE, TRANSCRIPTION_PROMPT


def test_settings_defaults(monkeypatch):
    """Defaults apply when no environment variables are set."""
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "FRONTEND_BASE_URL", "PORT", "VERCEL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.gemini_api_key == ""
    assert settings.gemini_model == "gemini-2.5-flash"
    assert settings.frontend_base_url == "http://localhost:3000"
    assert settings.port == 3001
    assert settings.is_serverless is False
    assert settings.log_level == "INFO"


def test_settings_loads_from_env_file(monkeypatch):
    """Settings are read from a .env file."""
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "FRONTEND_BASE_URL", "PORT"):
        monkeypatch.delenv(name, raising=False)

    with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
        f.write("""GEMINI_API_KEY=from-file
GEMINI_MODEL=gemini-2.0-flash
FRONTEND_BASE_URL=https://app.example.com/
PORT=8080
""")
        env_file = f.name

    try:
        settings = Settings(_env_file=env_file)
        assert settings.gemini_api_key == "from-file"
        assert settings.gemini_model == "gemini-2.0-flash"
        # trailing slash is stripped
        assert settings.frontend_base_url == "https://app.example.com"
        assert settings.port == 8080
    finally:
        Path(env_file).unlink()


def test_settings_reads_environment(monkeypatch):
    """Environment variables are matched case-insensitively."""
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("vercel", "1")

    settings = Settings(_env_file=None)
    assert settings.gemini_api_key == "env-key"
    assert settings.is_serverless is True


def test_settings_validates_port_range():
    """Test that port numbers are validated."""
    with pytest.raises(ValueError, match="port must be between 1 and 65535"):
        Settings(port=0, _env_file=None)

    with pytest.raises(ValueError, match="port must be between 1 and 65535"):
        Settings(port=65536, _env_file=None)


def test_settings_validates_url_format():
    """Test that URLs are validated for proper format."""
    with pytest.raises(ValueError, match="URL must use http or https scheme"):
        Settings(frontend_base_url="ftp://example.com", _env_file=None)

    with pytest.raises(ValueError, match="URL must have a valid host"):
        Settings(gemini_base_url="https://", _env_file=None)


def test_settings_validates_timeouts():
    with pytest.raises(ValueError, match="Timeout must be positive"):
        Settings(upstream_timeout_s=0, _env_file=None)


def test_settings_rejects_blank_model():
    with pytest.raises(ValueError, match="gemini_model must not be empty"):
        Settings(gemini_model="   ", _env_file=None)


def test_settings_validates_log_level():
    """Test that log level is validated and normalized."""
    with pytest.raises(ValueError, match="log_level must be one of"):
        Settings(log_level="INVALID", _env_file=None)

    assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"


@pytest.mark.parametrize("value, expected", [("1", True), ("0", False), ("", False), (" 1 ", True)])
def test_is_serverless(value, expected):
    assert Settings(vercel=value, _env_file=None).is_serverless is expected


def test_to_gateway_config():
    """Library config carries the provider settings and the fixed generation parameters."""
    settings = Settings(
        gemini_api_key="secret",
        gemini_model="gemini-test",
        gemini_base_url="http://127.0.0.1:9000",
        upstream_timeout_s=30,
        upstream_connect_timeout_s=2,
        _env_file=None,
    )

    config = settings.to_gateway_config()
    assert config.api_key == "secret"
    assert config.model == "gemini-test"
    assert config.base_url == "http://127.0.0.1:9000"
    assert config.timeout_s == 30
    assert config.connect_timeout_s == 2
    assert config.temperature == TEMPERATURE == 0.7
    assert config.max_output_tokens == MAX_OUTPUT_TOKENS == 2048
    assert config.transcription_prompt == TRANSCRIPTION_PROMPT


def test_upload_constants():
    assert set(ALLOWED_MIME_TYPES) == {"audio/mpeg", "audio/wav", "audio/ogg", "audio/webm"}
    assert MAX_FILE_SIZE_BYTES == 25 * 1024 * 1024


def test_get_settings_singleton():
    """Test that get_settings returns a singleton."""
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
