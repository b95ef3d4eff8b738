"""Structured logging setup with per-request context."""

import logging
import sys
import uuid
from contextvars import ContextVar

# Set by the service for the duration of one HTTP request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
request_path_var: ContextVar[str] = ContextVar("request_path", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s %(request_path)s] %(name)s - %(message)s"


class RequestContextFilter(logging.Filter):
    """Stamp every record with the ID and path of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        record.request_path = request_path_var.get()  # type: ignore[attr-defined]
        return True


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:12]


def setup_logging(level: str = "INFO") -> None:
    """Send all logging to stderr with request context.

    Gemini calls and multipart parsing are only logged at WARNING and
    above unless ``level`` is stricter. uvicorn's loggers propagate to the
    root handler instead of printing on their own.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore", "multipart", "python_multipart"):
        logging.getLogger(noisy).setLevel(max(numeric_level, logging.WARNING))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
