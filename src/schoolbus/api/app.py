"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schoolbus.api.dependencies import close_student_service, init_student_service
from schoolbus.api.models import APIResponse
from schoolbus.api.routes import filters, stats, students
from schoolbus.logging import get_logger
from schoolbus.students import (
    InvalidStudentDataError,
    StudentExistsError,
    StudentNotFoundError,
    StudentStoreError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    db_path = app.state.db_path if hasattr(app.state, "db_path") else "schoolbus.db"
    init_student_service(db_path)
    logger.info("Student service started (db=%s)", db_path)
    yield
    close_student_service()
    logger.info("Student service stopped")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Name the first violated field and its message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    return f"{field}: {first['msg']}" if field else str(first["msg"])


def create_app(db_path: str = "schoolbus.db") -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="School Bus Service API",
        description="CRUD API for managing school bus students",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(InvalidStudentDataError)
    async def invalid_data_handler(_request: Request, exc: InvalidStudentDataError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(StudentNotFoundError)
    async def student_not_found_handler(
        _request: Request, _exc: StudentNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, "Student not found")

    @app.exception_handler(StudentExistsError)
    async def student_exists_handler(_request: Request, exc: StudentExistsError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StudentStoreError)
    async def student_store_error_handler(
        request: Request, exc: StudentStoreError
    ) -> JSONResponse:
        logger.error("Unhandled store error on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # Static paths before /students/{pk}
    app.include_router(filters.router, prefix="/api/v1")
    app.include_router(stats.router, prefix="/api/v1")
    app.include_router(students.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
