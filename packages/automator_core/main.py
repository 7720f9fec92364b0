"""Application factory and process entrypoint for the Task Automator API."""

from __future__ import annotations

from http import HTTPStatus
from typing import Mapping

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from packages.automator_shared.config import AutomatorSettings, load_settings
from packages.automator_shared.errors import codes
from packages.automator_shared.http import (
    INTERNAL_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    InvalidBodyError,
    UnauthenticatedError,
    create_app,
    run_app,
)
from packages.automator_shared.logging import configure_logging, get_logger
from packages.automator_shared.manifest import get_registry

from .components import (
    build_components,
    import_component_modules,
    resolve_http_registrar,
)
from .gate import SessionGateMiddleware, protected_api_prefixes
from .health import evaluate_health
from .request_context import RequestContextMiddleware
from .session import SessionResolver, StarletteSessionResolver

_LOGGER = get_logger(__name__)

APP_VERSION = "0.1.0"


def create_application(
    settings: AutomatorSettings | None = None,
    *,
    components: Mapping[str, object] | None = None,
    session_resolver: SessionResolver | None = None,
) -> FastAPI:
    """Build the fully wired HTTP application.

    ``components`` may pre-supply instances by component id; anything
    registered but not supplied is built from ``settings``.
    """
    settings = settings or load_settings()
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )

    import_component_modules()
    registry = get_registry()
    registry.assert_valid()
    built = build_components(settings, prebuilt=components)

    app = create_app(title=settings.http.title, version=APP_VERSION)
    app.state.settings = settings
    app.state.components = built
    app.state.session_resolver = session_resolver or StarletteSessionResolver()
    _install_exception_handlers(app)

    router = APIRouter(prefix=settings.http.api_prefix)
    registered: list[str] = []
    for manifest in registry.list_services():
        registrar = resolve_http_registrar(manifest)
        if registrar is None:
            continue
        registrar(router=router, service=built[str(manifest.id)])
        registered.append(str(manifest.id))
    app.include_router(router)

    @app.get("/health")
    async def health() -> JSONResponse:
        result = evaluate_health(built)
        return JSONResponse(
            status_code=HTTPStatus.OK
            if result.ready
            else HTTPStatus.SERVICE_UNAVAILABLE,
            content=result.model_dump(),
        )

    # Last added runs first: sessions load before the gate reads them.
    app.add_middleware(
        SessionGateMiddleware,
        login_path=settings.session.login_path,
        page_prefixes=settings.session.page_prefixes,
        api_prefixes=protected_api_prefixes(settings.http.api_prefix),
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
        max_age=settings.session.max_age_seconds,
        same_site=settings.session.same_site,
        https_only=settings.session.https_only,
    )

    _LOGGER.info(
        "application assembled: registered_services=%s", ",".join(registered)
    )
    return app


def _install_exception_handlers(app: FastAPI) -> None:
    """Map transport-level failures to the shared JSON error shape."""

    @app.exception_handler(UnauthenticatedError)
    async def _unauthenticated(
        request: Request, exc: UnauthenticatedError
    ) -> JSONResponse:
        del request, exc
        return JSONResponse(
            status_code=HTTPStatus.UNAUTHORIZED,
            content={"error": UNAUTHORIZED_MESSAGE},
        )

    @app.exception_handler(InvalidBodyError)
    async def _invalid_body(request: Request, exc: InvalidBodyError) -> JSONResponse:
        del request
        return JSONResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            content={
                "error": VALIDATION_ERROR_MESSAGE,
                "details": [
                    {
                        "field": "body",
                        "message": exc.message,
                        "code": codes.INVALID_ARGUMENT,
                    }
                ],
            },
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        _LOGGER.error(
            "unhandled exception: path=%s exception_type=%s",
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )


def main() -> None:
    """Load settings, assemble the application and serve it with uvicorn."""
    settings = load_settings()
    app = create_application(settings)
    run_app(
        app,
        host=settings.http.host,
        port=settings.http.port,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
