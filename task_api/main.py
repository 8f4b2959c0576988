"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.config import Settings, load_settings
from task_api.database import make_engine
from task_api.errors import FieldError, MalformedInputError, TaskApiError
from task_api.logging_setup import setup_logging
from task_api.models import API_VERSION, ErrorEnvelope, HealthResponse
from task_api.routes import router
from task_api.service import TaskService
from task_api.store import InMemoryTaskStore, SqlTaskStore, TaskStore

logger = logging.getLogger(__name__)


def error_response(
    status_code: int, message: str, errors: list[FieldError] | None = None
) -> JSONResponse:
    body = ErrorEnvelope(
        statusCode=status_code,
        message=message,
        errors=None if errors is None else [e.to_dict() for e in errors],
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _malformed(error: dict) -> FieldError:
    loc = error.get("loc", ())
    if loc and loc[0] == "path":
        field = "id" if loc[-1] == "task_id" else str(loc[-1])
        return FieldError(field=field, reason="malformed", message=f"{field} must be an integer")
    return FieldError(field="body", reason="malformed", message="body must be valid JSON")


async def handle_task_api_error(request: Request, exc: TaskApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, getattr(exc, "detail", exc))
    return error_response(exc.status_code, exc.message, exc.errors)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = MalformedInputError([_malformed(e) for e in exc.errors()])
    return error_response(error.status_code, error.message, error.errors)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def build_store(settings: Settings) -> TaskStore:
    if settings.uses_memory_store:
        return InMemoryTaskStore()
    return SqlTaskStore(make_engine(settings.database_url, echo=settings.sql_echo))


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application. Without arguments everything comes from the environment."""
    settings = settings or load_settings()
    store = store if store is not None else build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if isinstance(store, SqlTaskStore):
            store.create_schema()
        logger.info("Task API ready (store: %s)", type(store).__name__)
        yield

    app = FastAPI(
        title="Task API",
        description="Create, list, update and delete tasks.",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = TaskService(store)

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskApiError, handle_task_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get(f"{settings.api_prefix}/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse()

    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
