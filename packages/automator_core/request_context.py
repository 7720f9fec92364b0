"""Per-request logging context and access logging middleware."""

from __future__ import annotations

from time import perf_counter
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from packages.automator_shared.logging import fields, get_logger, log_context

_LOGGER = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id for every log line and emit one access log entry."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER, "").strip() or uuid4().hex
        started = perf_counter()
        with log_context(
            {
                fields.REQUEST_ID: request_id,
                fields.HTTP_METHOD: request.method,
                fields.HTTP_PATH: request.url.path,
            }
        ):
            response = await call_next(request)
            with log_context(
                {
                    fields.EVENT: fields.HTTP_REQUEST_EVENT,
                    fields.STATUS_CODE: response.status_code,
                    fields.DURATION_MS: round((perf_counter() - started) * 1000.0, 3),
                }
            ):
                _LOGGER.info("HTTP request completed")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
