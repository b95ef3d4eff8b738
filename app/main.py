"""FastAPI application entry point for the Gemini Gateway."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api import create_router
from app.config import MAX_FILE_SIZE_BYTES, Settings, get_settings
from app.errors import (
    UploadTooLargeError,
    ValidationFailed,
    request_validation_handler,
    upload_too_large_handler,
    validation_failed_handler,
)
from app.middleware import RequestIDMiddleware
from app.uploads import MaxBodySizeMiddleware, upload_paths
from gemini_gateway import ModelGateway
from gemini_gateway.core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    gateway: ModelGateway | None = None,
    max_upload_bytes: int = MAX_FILE_SIZE_BYTES,
) -> FastAPI:
    """
    Build and return the FastAPI application with all middleware configured.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        gateway: Model gateway to serve requests with; built from settings
            when omitted
        max_upload_bytes: Size ceiling for uploaded files
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if gateway is None:
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set; provider calls will be rejected")
        gateway = ModelGateway.from_config(settings.to_gateway_config())

    application = FastAPI(
        title="Gemini Gateway",
        description="Audio transcription and text prompting backed by Google Gemini",
        version=__version__,
    )
    application.state.settings = settings
    application.state.gateway = gateway

    router = create_router(max_upload_bytes=max_upload_bytes)
    application.include_router(router)

    application.add_exception_handler(ValidationFailed, validation_failed_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(UploadTooLargeError, upload_too_large_handler)

    # Middleware stack: the last one added is outermost and runs first
    # 1. Size guard for the routes that declare an upload
    application.add_middleware(
        MaxBodySizeMiddleware,
        max_bytes=max_upload_bytes,
        guarded_paths=upload_paths(router.routes),
    )

    # 2. CORS, limited to the configured frontend
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_base_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 3. Request ID, assigned before anything else
    application.add_middleware(RequestIDMiddleware)

    return application


app = create_app()


def run() -> None:
    """Serve the app with uvicorn unless a serverless host invokes it."""
    settings = get_settings()
    if settings.is_serverless:
        logger.info("Serverless host detected; not starting a listener")
        return

    logger.info("Server starting on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
