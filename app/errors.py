"""Map provider failures and rejected requests to JSON error responses."""

import logging
from dataclasses import dataclass

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas import ErrorResponse, FieldError, ValidationErrorResponse
from gemini_gateway import ProviderError, ProviderErrorKind

logger = logging.getLogger(__name__)

INVALID_API_KEY_MESSAGE = "Invalid Gemini API key"
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
INVALID_REQUEST_MESSAGE = "Invalid request to Gemini"


class ValidationFailed(Exception):
    """Raised by a route when its validation profile reports problems."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(error.msg for error in errors))


class UploadTooLargeError(Exception):
    """Raised when an uploaded file exceeds the configured ceiling."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        if max_bytes % (1024 * 1024) == 0:
            limit = f"{max_bytes // (1024 * 1024)}MB"
        else:
            limit = f"{max_bytes} bytes"
        self.message = f"File too large. Maximum size is {limit}"
        super().__init__(self.message)


@dataclass(frozen=True)
class EndpointErrors:
    """How one endpoint reports provider failures."""

    label: str
    generic_message: str
    forward_bad_request: bool = False


TRANSCRIBE_ERRORS = EndpointErrors(
    label="Transcription error",
    generic_message="Transcription failed. Please try again.",
)

PROMPT_ERRORS = EndpointErrors(
    label="Prompt processing error",
    generic_message="Prompt processing failed. Please try again.",
    forward_bad_request=True,
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def validation_response(errors: list[FieldError]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ValidationErrorResponse(errors=errors).model_dump(exclude_none=True),
    )


def provider_error_response(error: ProviderError, endpoint: EndpointErrors) -> JSONResponse:
    """
    Convert a provider failure into the endpoint's HTTP error response.

    Args:
        error: Failure raised by the model gateway
        endpoint: Error policy of the endpoint that made the call

    Returns:
        401 for auth failures, 429 for rate limits, 400 for rejected prompts
        (when the endpoint forwards them), otherwise 500 with the endpoint's
        generic message.
    """
    logger.error("%s: %s", endpoint.label, error.message)

    if error.kind is ProviderErrorKind.AUTH:
        return error_response(401, INVALID_API_KEY_MESSAGE)

    if error.kind is ProviderErrorKind.RATE_LIMIT:
        return error_response(429, RATE_LIMIT_MESSAGE)

    if error.kind is ProviderErrorKind.BAD_REQUEST and endpoint.forward_bad_request:
        return error_response(400, error.message or INVALID_REQUEST_MESSAGE)

    return error_response(500, endpoint.generic_message)


def unexpected_error_response(error: Exception, endpoint: EndpointErrors) -> JSONResponse:
    """500 response for any failure that is not a classified provider error."""
    logger.error("%s: %s", endpoint.label, error)
    return error_response(500, endpoint.generic_message)


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return validation_response(exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI body parsing failures in the same shape as profile checks."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(FieldError(msg=err.get("msg", "Invalid request body"), path=".".join(loc)))
    return validation_response(errors)


async def upload_too_large_handler(request: Request, exc: UploadTooLargeError) -> JSONResponse:
    logger.warning("Rejected upload: %s", exc.message)
    return error_response(413, exc.message)
