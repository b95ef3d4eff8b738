"""Configuration management - loads environment variables into typed settings."""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_gateway import GatewayConfig
from gemini_gateway.core.config import DEFAULT_BASE_URL, DEFAULT_MODEL

ALLOWED_MIME_TYPES = (
    "audio/mpeg",
    "audio/wav",
    "audio/ogg",
    "audio/webm",
)

MAX_FILE_SIZE_BYTES = 25 * 1024 * 1024  # 25MB


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Host for the server to listen on")
    port: int = Field(default=3001, description="Port for the server to listen on")
    vercel: str = Field(
        default="",
        description="Set to '1' by Vercel; the server then does not start its own listener",
    )

    # Gemini Configuration
    gemini_api_key: str = Field(
        default="",
        description="Gemini API key (required for real provider calls)",
    )
    gemini_model: str = Field(default=DEFAULT_MODEL, description="Gemini model identifier")
    gemini_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Gemini REST API",
    )

    # Timeout Configuration
    upstream_timeout_s: float = Field(
        default=300.0,
        description="Read timeout for Gemini requests (seconds)",
    )
    upstream_connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for Gemini requests (seconds)",
    )

    # CORS Configuration
    frontend_base_url: str = Field(
        default="http://localhost:3000",
        description="The only origin allowed to call the API (credentials permitted)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"port must be between 1 and 65535, got {v}")
        return v

    @field_validator("upstream_timeout_s", "upstream_connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("gemini_base_url", "frontend_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v.rstrip("/")

    @field_validator("gemini_model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Validate the model identifier is not blank."""
        if not v.strip():
            raise ValueError("gemini_model must not be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @property
    def is_serverless(self) -> bool:
        """True when an external serverless host invokes the app."""
        return self.vercel.strip() == "1"

    def to_gateway_config(self) -> GatewayConfig:
        """Build the library configuration used by the model gateway."""
        return GatewayConfig(
            api_key=self.gemini_api_key,
            model=self.gemini_model,
            base_url=self.gemini_base_url,
            timeout_s=self.upstream_timeout_s,
            connect_timeout_s=self.upstream_connect_timeout_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are present but invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and ensure all settings are valid."
        ) from e
