"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import build_context
from app.core.errors import AppError, RequestValidationFailed
from app.core.logging_setup import configure_logging
from app.core.validation import issues_from_errors

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render any AppError as its status code and {error, message} body."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render framework-level validation failures (e.g. malformed JSON) in the same 400 shape."""
    failed = RequestValidationFailed(issues_from_errors(list(exc.errors())))
    return JSONResponse(status_code=failed.status_code, content=failed.to_content())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full error server-side; answer without internal detail."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "Something went wrong"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one AppContext (settings, engine, session factory)."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="User Records API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.context = build_context(settings)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            ms,
        )
        return response

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(api_router)
    return app


app = create_app()
