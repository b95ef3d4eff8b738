"""Request ID middleware."""

import logging
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gemini_gateway.core.logging import generate_request_id, request_id_var, request_path_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def resolve_request_id(request: Request) -> str:
    """Reuse a well-formed incoming request ID, otherwise mint a new one."""
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return generate_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID, log its outcome and echo the ID back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = resolve_request_id(request)
        request.state.request_id = rid
        id_token = request_id_var.set(rid)
        path_token = request_path_var.set(request.url.path)
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        try:
            response = await call_next(request)
            logger.info(
                "%s %s from %s -> %s (%.0f ms)",
                request.method,
                request.url.path,
                client,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            request_path_var.reset(path_token)
            request_id_var.reset(id_token)
