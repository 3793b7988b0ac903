"""Booking errors and the FastAPI handlers that map them to responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class of every business-rule failure raised by the booking service."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "No result for this search!"):
        super().__init__(message)


class ForbiddenError(BookingError):
    status_code = status.HTTP_403_FORBIDDEN


class CapacityReachedError(BookingError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "This room is full"):
        super().__init__(message)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed identifiers are refused as forbidden, never as 422.
    logger.warning("Rejected request on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": "Invalid booking request"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
