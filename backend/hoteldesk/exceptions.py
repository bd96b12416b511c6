"""Domain error taxonomy shared by services and the API layer.

Services raise these; ``register_exception_handlers`` turns them into JSON
responses so routers never need to translate them by hand.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HotelDeskError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationFailedError(HotelDeskError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(HotelDeskError):
    """A referenced booking, room, customer or other entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(HotelDeskError):
    """Availability overlap, double checkout, or another state conflict."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(HotelDeskError):
    """The database failed (connectivity, constraint, lock timeout)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def _hoteldesk_error_handler(request: Request, exc: HotelDeskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info("%s %s malformed input: %d error(s)", request.method, request.url.path, len(errors))
    return JSONResponse(
        {"detail": [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in errors]},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain and request-validation handlers to ``app``."""
    app.add_exception_handler(HotelDeskError, _hoteldesk_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
