"""Booking rules: who may hold a room and how a booking moves between rooms."""
import logging

from .errors import CapacityReachedError, ForbiddenError, NotFoundError
from .models import Booking, Room, TicketStatus
from .repositories import BookingRepository, EnrollmentRepository, TicketRepository

logger = logging.getLogger(__name__)


class BookingService:
    """Reads, creates and replaces a user's hotel room booking.

    Each write runs count-then-insert inside one transaction opened by a
    locked read of the room row. On PostgreSQL this serializes concurrent
    bookings of the same room; SQLite ignores the lock and can still let two
    simultaneous requests overbook a room.
    """

    def __init__(
        self,
        bookings: BookingRepository,
        enrollments: EnrollmentRepository,
        tickets: TicketRepository,
    ) -> None:
        self.bookings = bookings
        self.enrollments = enrollments
        self.tickets = tickets

    def get_booking(self, user_id: int) -> Booking:
        booking = self.bookings.find_by_user_id(user_id)
        if not booking:
            raise NotFoundError("User has no booking")
        return booking

    def create_booking(self, user_id: int, room_id: int) -> Booking:
        try:
            room = self._get_room(room_id)
            self._ensure_hotel_ticket(user_id)
            self._ensure_vacancy(room)
            booking = self.bookings.create(user_id, room_id)
            self.bookings.commit()
        except Exception:
            self.bookings.rollback()
            raise
        logger.info("User %s booked room %s (booking %s)", user_id, room_id, booking.id)
        return booking

    def replace_booking(self, user_id: int, booking_id: int, room_id: int) -> Booking:
        try:
            room = self._get_room(room_id)
            self._ensure_vacancy(room)
            old_booking = self.bookings.find_by_id(booking_id)
            if not old_booking:
                raise ForbiddenError("Cannot find booking")
            if old_booking.user_id != user_id:
                raise ForbiddenError("Booking does not belong to user")
            self.bookings.delete(booking_id)
            booking = self.bookings.create(user_id, room_id)
            self.bookings.commit()
        except Exception:
            self.bookings.rollback()
            raise
        logger.info("User %s moved booking %s to room %s (booking %s)", user_id, booking_id, room_id, booking.id)
        return booking

    def _get_room(self, room_id: int) -> Room:
        room = self.bookings.find_room(room_id, lock=True)
        if not room:
            raise NotFoundError("Room not found")
        return room

    def _ensure_hotel_ticket(self, user_id: int) -> None:
        enrollment = self.enrollments.find_by_user_id(user_id)
        if not enrollment:
            raise ForbiddenError("Cannot find user enrollment")
        ticket = self.tickets.find_by_enrollment_id(enrollment.id)
        if not ticket:
            raise ForbiddenError("Cannot find user ticket")
        if ticket.status != TicketStatus.PAID:
            raise ForbiddenError("Ticket payment not finished")
        if ticket.ticket_type.is_remote:
            raise ForbiddenError("This ticket is remote")
        if not ticket.ticket_type.includes_hotel:
            raise ForbiddenError("This ticket does not include hotel")

    def _ensure_vacancy(self, room: Room) -> None:
        if self.bookings.count_by_room(room.id) >= room.capacity:
            raise CapacityReachedError()
