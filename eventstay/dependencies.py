"""Reusable FastAPI dependencies for auth, database access and the booking service."""
from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session as DbSession

from .auth import decode_token
from .booking_service import BookingService
from .database import get_db
from .models import Session
from .repositories import (
    BookingRepository,
    EnrollmentRepository,
    SqlAlchemyBookingRepository,
    SqlAlchemyEnrollmentRepository,
    SqlAlchemyTicketRepository,
    TicketRepository,
)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: DbSession = Depends(get_db),
) -> int:
    if credentials is None:
        raise _unauthorized("Missing bearer token")
    token = credentials.credentials
    payload = decode_token(token)
    if not isinstance(payload.get("userId"), int):
        raise _unauthorized("Missing user in token")
    session = db.query(Session).filter(Session.token == token).first()
    if not session:
        raise _unauthorized("No active session for token")
    return session.user_id


def get_booking_repository(db: DbSession = Depends(get_db)) -> BookingRepository:
    return SqlAlchemyBookingRepository(db)


def get_enrollment_repository(db: DbSession = Depends(get_db)) -> EnrollmentRepository:
    return SqlAlchemyEnrollmentRepository(db)


def get_ticket_repository(db: DbSession = Depends(get_db)) -> TicketRepository:
    return SqlAlchemyTicketRepository(db)


def get_booking_service(
    bookings: BookingRepository = Depends(get_booking_repository),
    enrollments: EnrollmentRepository = Depends(get_enrollment_repository),
    tickets: TicketRepository = Depends(get_ticket_repository),
) -> BookingService:
    return BookingService(bookings, enrollments, tickets)
