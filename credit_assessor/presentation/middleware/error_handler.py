"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from credit_assessor.domain.exceptions import (
    DomainException,
    InvalidApplicationException,
    MissingApplicationDataException,
    ScoringException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses:
        MissingApplicationDataException -> 400
        InvalidApplicationException     -> 400
        RequestValidationError          -> 422
        ScoringException                -> 500
        anything else                   -> 500
    """

    @app.exception_handler(MissingApplicationDataException)
    async def missing_input_handler(
        request: Request,
        exc: MissingApplicationDataException,
    ) -> JSONResponse:
        """Handle missing input sections."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(InvalidApplicationException)
    async def invalid_application_handler(
        request: Request,
        exc: InvalidApplicationException,
    ) -> JSONResponse:
        """Handle applications that fail validation."""
        logger.info(
            "invalid_application",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed request bodies."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", "Invalid request body")
        message = f"{location}: {detail}" if location else detail
        return _error_response(422, "VALIDATION_ERROR", message)

    @app.exception_handler(ScoringException)
    async def scoring_error_handler(
        request: Request,
        exc: ScoringException,
    ) -> JSONResponse:
        """Handle failures inside the scoring engine."""
        logger.error(
            "scoring_error",
            request_id=get_request_id(),
            operation=exc.operation,
        )
        return _error_response(500, exc.code, exc.message)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
