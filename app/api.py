"""HTTP routes: audio transcription and text prompting."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from app import __version__
from app.config import MAX_FILE_SIZE_BYTES
from app.errors import (
    PROMPT_ERRORS,
    TRANSCRIBE_ERRORS,
    ValidationFailed,
    error_response,
    provider_error_response,
    unexpected_error_response,
)
from app.schemas import (
    PromptData,
    PromptResponse,
    TranscribeResponse,
    TranscriptionData,
    Usage,
)
from app.uploads import UploadGate, UploadGateResult
from app.validation import validate_prompt, validate_transcription
from gemini_gateway import ModelGateway, ProviderError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_gateway(request: Request) -> ModelGateway:
    """Return the model gateway built at startup."""
    return request.app.state.gateway


async def prompt_body(request: Request) -> dict[str, Any]:
    """Read a prompt request sent as JSON or as a urlencoded form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        form = await request.form()
        return dict(form)

    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
        )
    if not isinstance(body, dict):
        raise RequestValidationError(
            [{"type": "dict_type", "loc": ("body",), "msg": "Input should be a valid dictionary", "input": body}]
        )
    return body


def create_router(max_upload_bytes: int = MAX_FILE_SIZE_BYTES) -> APIRouter:
    """Build the API router; the audio upload gate is declared on /transcribe only."""
    router = APIRouter()
    audio_upload = UploadGate("audio", max_bytes=max_upload_bytes)

    @router.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        """Liveness check."""
        return "API is Running"

    @router.get("/health")
    async def health():
        """Health check endpoint."""
        return {"ok": True, "version": __version__}

    @router.post("/transcribe", response_model=TranscribeResponse)
    async def transcribe(
        upload: UploadGateResult = Depends(audio_upload),
        gateway: ModelGateway = Depends(get_gateway),
    ):
        """
        Transcribe the uploaded ``audio`` file.

        The language is detected by the model, so the response always reports
        ``"auto-detected"``.
        """
        errors = validate_transcription(upload)
        if errors:
            raise ValidationFailed(errors)

        if upload.audio is None or not upload.audio.data:
            return error_response(400, "No audio file provided")

        try:
            text = await gateway.transcribe(upload.audio)
        except ProviderError as e:
            return provider_error_response(e, TRANSCRIBE_ERRORS)
        except Exception as e:
            return unexpected_error_response(e, TRANSCRIBE_ERRORS)

        return TranscribeResponse(data=TranscriptionData(text=text))

    @router.post("/prompt", response_model=PromptResponse)
    async def prompt(
        body: dict[str, Any] = Depends(prompt_body),
        gateway: ModelGateway = Depends(get_gateway),
    ):
        """Answer a text prompt (JSON or form body) with the configured model."""
        text, errors = validate_prompt(body)
        if errors:
            raise ValidationFailed(errors)

        try:
            result = await gateway.generate_prompt(text)
        except ProviderError as e:
            return provider_error_response(e, PROMPT_ERRORS)
        except Exception as e:
            return unexpected_error_response(e, PROMPT_ERRORS)

        usage = result.usage
        return PromptResponse(
            data=PromptData(
                response=result.text,
                model=gateway.model,
                usage=Usage(
                    prompt_tokens=usage.prompt_tokens if usage else 0,
                    completion_tokens=usage.completion_tokens if usage else 0,
                    total_tokens=usage.total_tokens if usage else 0,
                ),
            )
        )

    return router
