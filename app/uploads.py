"""Upload gate: MIME allow-list and size ceiling for routes that accept a file."""

import logging
from dataclasses import dataclass

from starlette.datastructures import Headers, UploadFile
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import ALLOWED_MIME_TYPES, MAX_FILE_SIZE_BYTES
from app.errors import UploadTooLargeError, error_response
from gemini_gateway import UploadedAudio

logger = logging.getLogger(__name__)

# Multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported audio format. Supported formats: mp3, wav, ogg, webm"


def normalize_mime_type(content_type: str | None) -> str:
    """Strip parameters such as ``;codecs=opus`` and lowercase the type."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@dataclass
class UploadGateResult:
    """Outcome of the gate for one request.

    ``received`` is true when the field carried a file at all; ``audio`` is
    set only when the file passed every check. ``error`` holds the reason a
    received file was refused.
    """

    field: str
    received: bool = False
    audio: UploadedAudio | None = None
    error: str | None = None


class UploadGate:
    """FastAPI dependency that reads one file field from a multipart body.

    Routes opt in by declaring ``Depends(UploadGate("audio"))``; nothing is
    parsed for routes that do not. Oversized files raise
    ``UploadTooLargeError``. Files of a disallowed type are not an error
    here; the refusal is recorded on the result for the validation layer.
    """

    def __init__(
        self,
        field: str,
        allowed_mime_types: tuple[str, ...] = ALLOWED_MIME_TYPES,
        max_bytes: int = MAX_FILE_SIZE_BYTES,
    ) -> None:
        self.field = field
        self.allowed_mime_types = allowed_mime_types
        self.max_bytes = max_bytes

    async def __call__(self, request: Request) -> UploadGateResult:
        result = UploadGateResult(field=self.field)

        content_type = request.headers.get("content-type", "")
        if not content_type.startswith("multipart/form-data"):
            return result

        form = await request.form()
        upload = form.get(self.field)
        if not isinstance(upload, UploadFile):
            return result

        result.received = True
        try:
            if upload.size is not None and upload.size > self.max_bytes:
                raise UploadTooLargeError(self.max_bytes)

            mime_type = normalize_mime_type(upload.content_type)
            if mime_type not in self.allowed_mime_types:
                logger.info("Refusing upload %r with type %r", upload.filename, upload.content_type)
                result.error = UNSUPPORTED_FORMAT_MESSAGE
                return result

            data = await upload.read()
            if len(data) > self.max_bytes:
                raise UploadTooLargeError(self.max_bytes)

            result.audio = UploadedAudio(mime_type=mime_type, data=data)
            return result
        finally:
            await upload.close()


class MaxBodySizeMiddleware:
    """Cap the request body on the paths given in ``guarded_paths``.

    A declared ``Content-Length`` over the ceiling is refused before any of
    the body is read. Bodies without one (chunked uploads) are counted as
    they arrive and the request is stopped at the first chunk that crosses
    the ceiling, so nothing past it is buffered or spooled to disk.
    """

    def __init__(self, app: ASGIApp, max_bytes: int, guarded_paths: set[str]) -> None:
        self.app = app
        self.max_bytes = max_bytes
        self.limit = max_bytes + MULTIPART_OVERHEAD_BYTES
        self.guarded_paths = set(guarded_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST" or scope["path"] not in self.guarded_paths:
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                too_large = int(content_length) > self.limit
            except ValueError:
                too_large = False  # non-integer content-length; count the body instead
            if too_large:
                await self._reject(scope, receive, send, "before reading body")
                return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.limit:
                    raise UploadTooLargeError(self.max_bytes)
            return message

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracking_send)
        except UploadTooLargeError:
            # the app had no handler for it; answer here if we still can
            if response_started:
                raise
            await self._reject(scope, receive, send, f"after {received} bytes")

    async def _reject(self, scope: Scope, receive: Receive, send: Send, when: str) -> None:
        error = UploadTooLargeError(self.max_bytes)
        logger.warning("Rejected %s %s: %s", scope["path"], when, error.message)
        await error_response(413, error.message)(scope, receive, send)


def upload_paths(routes) -> set[str]:  # noqa: ANN001
    """Paths of the routes that declare an ``UploadGate`` dependency."""
    paths = set()
    for route in routes:
        dependant = getattr(route, "dependant", None)
        if dependant is None:
            continue
        if any(isinstance(dep.call, UploadGate) for dep in dependant.dependencies):
            paths.add(route.path)
    return paths
