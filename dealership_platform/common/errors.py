"""
Exception handlers shared by every service.

Controllers report expected failures as ``Failure`` values. ``ServiceError``
exists for the few places that must abort request handling from inside a
dependency (the authorization gate); everything else that escapes a route is
logged and turned into a generic 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .results import ErrorKind, Failure, internal_failure, to_response

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Carries a ``Failure`` out of a FastAPI dependency."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


def first_error_message(errors) -> str:
    """Render the first validation error as ``field: message``."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
    message = error.get("msg", "Invalid value")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
        return to_response(exc.failure)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return to_response(Failure(ErrorKind.VALIDATION, first_error_message(exc.errors())))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return to_response(internal_failure())
