"""
FastAPI exception handlers for errors that escape the member endpoints.

Registration failures never get here. `RegistrationService` returns them
as Outcomes. These handlers cover the read endpoints and request parsing:
    - NotFoundError          -> 404, empty body
    - RepositoryError        -> exc.http_status(), exc.to_payload()
    - RequestValidationError -> 400, {"error": "Malformed JSON body"}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
import logging
from member_registry.exceptions.base import RepositoryError, NotFoundError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return Response(status_code=exc.http_status())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Fallback for storage failures on the read endpoints. The message is
    already sanitized by the repository layer.
    """
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    The POST body could not be parsed as JSON at all. A body that parses to
    something other than an object (including `null`) is reported by
    FieldValidator instead, so this only covers unreadable input.
    """
    logger.info("Unreadable request body for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"error": "Malformed JSON body"})


def register_exception_handlers(app: FastAPI) -> None:
    # Most specific first
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
