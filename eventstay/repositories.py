"""Data access for bookings, rooms, enrollments and tickets."""
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from .models import Booking, Enrollment, Room, Ticket


class BookingRepository(ABC):
    """Bookings and the rooms they reference.

    ``create`` and ``delete`` stage their changes; nothing is persisted until
    ``commit`` is called, so a replacement is all-or-nothing.
    """

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_room(self, room_id: int, lock: bool = False) -> Optional[Room]:
        """Return the room, taking a row lock on it when ``lock`` is set."""
        raise NotImplementedError

    @abstractmethod
    def count_by_room(self, room_id: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def create(self, user_id: int, room_id: int) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class EnrollmentRepository(ABC):
    @abstractmethod
    def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        raise NotImplementedError


class TicketRepository(ABC):
    @abstractmethod
    def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        raise NotImplementedError


class SqlAlchemyBookingRepository(BookingRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.room))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.id)
            .first()
        )

    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.room))
            .filter(Booking.id == booking_id)
            .first()
        )

    def find_room(self, room_id: int, lock: bool = False) -> Optional[Room]:
        stmt = select(Room).where(Room.id == room_id)
        if lock:
            # Ignored by SQLite, which serializes writers instead.
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def count_by_room(self, room_id: int) -> int:
        return self.db.query(func.count(Booking.id)).filter(Booking.room_id == room_id).scalar() or 0

    def create(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        self.db.flush()
        return booking

    def delete(self, booking_id: int) -> None:
        self.db.query(Booking).filter(Booking.id == booking_id).delete(synchronize_session="fetch")
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()


class SqlAlchemyEnrollmentRepository(EnrollmentRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        return self.db.query(Enrollment).filter(Enrollment.user_id == user_id).first()


class SqlAlchemyTicketRepository(TicketRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        return (
            self.db.query(Ticket)
            .options(joinedload(Ticket.ticket_type))
            .filter(Ticket.enrollment_id == enrollment_id)
            .first()
        )
