from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .logging_config import configure_logging, logger
from .routes import include_routers
from .services import AppContext, build_context
from .utils import error_response


# Register global exception handlers for consistent error responses across the API
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        decode_error = next((error for error in errors if error.get("type") == "json_invalid"), None)
        if decode_error is not None:
            # Unparseable bodies get the same bare {"error"} 500 as any other failure
            message = (decode_error.get("ctx") or {}).get("error") or decode_error.get("msg") or "Invalid JSON"
            logger.warning("malformed JSON body", extra={"path": str(request.url), "error": message})
            return error_response(str(message), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.debug("validation error", extra={"errors": errors, "path": str(request.url)})
        return error_response(
            "Invalid request",
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return error_response(detail, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return error_response(str(exc) or "Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def _log_request(request: Request, call_next):
        logger.info(
            f"{request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path},
        )
        return await call_next(request)


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    """Build the FastAPI application with its own stores and janitor."""
    settings = settings or get_settings()
    context = context or build_context(settings)

    # Run the periodic store sweeps for as long as the app is serving
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await context.janitor.start()
        logger.info(
            f"{settings.app_name} v{settings.app_version} ready",
            extra={"mode": settings.mode, "port": settings.server_port},
        )
        try:
            yield
        finally:
            await context.janitor.stop()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.resolved_docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_request_logging(app)
    register_exception_handlers(app)
    include_routers(app, settings)

    return app


configure_logging()

app = create_app()


__all__ = ["app", "create_app"]
