"""Request gate guarding dashboard pages and protected API prefixes."""

from __future__ import annotations

from http import HTTPStatus
from typing import Iterable
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from packages.automator_shared.http import UNAUTHORIZED_MESSAGE
from packages.automator_shared.logging import get_logger

from .session import resolve_identity

_LOGGER = get_logger(__name__)

PROTECTED_API_RESOURCES: tuple[str, ...] = (
    "tasks",
    "calendar",
    "automate",
    "notifications",
    "reports",
)


def protected_api_prefixes(api_prefix: str) -> tuple[str, ...]:
    """Return the protected API path prefixes under one API mount prefix."""
    return tuple(f"{api_prefix}/{resource}" for resource in PROTECTED_API_RESOURCES)


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Redirect anonymous page loads to login and reject anonymous API calls."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        login_path: str,
        page_prefixes: Iterable[str],
        api_prefixes: Iterable[str],
    ) -> None:
        super().__init__(app)
        self._login_path = login_path
        self._page_prefixes = tuple(page_prefixes)
        self._api_prefixes = tuple(api_prefixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        is_page = _matches(path, self._page_prefixes)
        is_api = not is_page and _matches(path, self._api_prefixes)
        if not (is_page or is_api):
            return await call_next(request)

        if resolve_identity(request) is not None:
            return await call_next(request)

        if is_page:
            _LOGGER.debug("redirecting anonymous page request: path=%s", path)
            query = urlencode({"callbackUrl": path})
            return RedirectResponse(
                url=f"{self._login_path}?{query}",
                status_code=HTTPStatus.TEMPORARY_REDIRECT,
            )
        return JSONResponse(
            status_code=HTTPStatus.UNAUTHORIZED,
            content={"error": UNAUTHORIZED_MESSAGE},
        )


def _matches(path: str, prefixes: tuple[str, ...]) -> bool:
    """Return whether ``path`` equals or sits below one of ``prefixes``."""
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in prefixes)
