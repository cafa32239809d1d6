"""
Booking service - booking lifecycle
Creates and edits bookings, derives the total amount and keeps the room
status in step with the booking status

Rules:
1. nights = ceil((check_out - check_in) / 1 day), total = room rate x nights
2. a new booking is active and flips its room to occupied, in one commit
3. the total is recomputed only when the room or the dates change
4. status changes go through the booking lifecycle:
   active -> completed | cancelled; nothing leaves a terminal state
5. leaving 'active' releases the room
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from frontdesk.engine.lifecycles import BOOKING_LIFECYCLE
from frontdesk.errors import BusinessRuleError, NotFoundError, ValidationError
from frontdesk.models.ontology import (
    Booking, BookingStatus, Guest, PaymentStatus, Room, RoomStatus
)
from frontdesk.models.schemas import BookingCreate, BookingUpdate
from frontdesk.services.guest_service import GuestService
from frontdesk.services.room_service import RoomService

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def calculate_nights(check_in: datetime, check_out: datetime) -> int:
    """Whole nights between two timestamps, any part of a day counts as one"""
    days, remainder = divmod(check_out - check_in, ONE_DAY)
    return days + (1 if remainder else 0)


def calculate_total_amount(rate, check_in: datetime, check_out: datetime) -> Decimal:
    return Decimal(rate) * calculate_nights(check_in, check_out)


class BookingService:
    """Booking lifecycle manager"""

    def __init__(self, db: Session):
        self.db = db
        self.room_service = RoomService(db)
        self.guest_service = GuestService(db)
        self.lifecycle = BOOKING_LIFECYCLE

    # ---------- queries ----------

    def get_bookings(self, status: Optional[BookingStatus] = None,
                     search: Optional[str] = None) -> List[Booking]:
        """List bookings, newest first; search matches guest name or room number"""
        query = self.db.query(Booking).join(Guest).join(Room)
        if status:
            query = query.filter(Booking.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Guest.full_name.ilike(pattern),
                Room.room_number.ilike(pattern),
            ))
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    def get_active_bookings(self) -> List[Booking]:
        return self.get_bookings(status=BookingStatus.ACTIVE)

    def get_recent_bookings(self, limit: int = 5) -> List[Booking]:
        return self.db.query(Booking).order_by(
            Booking.created_at.desc(), Booking.id.desc()
        ).limit(limit).all()

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def get_booking_or_404(self, booking_id: int) -> Booking:
        booking = self.get_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def has_overlap(self, room_id: int, check_in: datetime, check_out: datetime,
                    exclude_booking_id: Optional[int] = None) -> bool:
        """Whether an active booking on the room intersects [check_in, check_out)"""
        query = self.db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.status == BookingStatus.ACTIVE,
            Booking.check_in < check_out,
            Booking.check_out > check_in,
        )
        if exclude_booking_id is not None:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.count() > 0

    # ---------- commands ----------

    def create_booking(self, data: BookingCreate, created_by: Optional[int] = None) -> Booking:
        """Assign a guest to a room"""
        room = self.room_service.get_room_or_404(data.room_id)
        guest = self.guest_service.get_guest_or_404(data.guest_id)
        self._validate_dates(data.check_in, data.check_out)

        if room.status != RoomStatus.AVAILABLE:
            raise BusinessRuleError(f"Room {room.room_number} is not available")
        if self.has_overlap(room.id, data.check_in, data.check_out):
            raise BusinessRuleError(f"Room {room.room_number} already has a booking for these dates")

        booking = Booking(
            room_id=room.id,
            guest_id=guest.id,
            check_in=data.check_in,
            check_out=data.check_out,
            total_amount=calculate_total_amount(room.rate, data.check_in, data.check_out),
            status=BookingStatus.ACTIVE,
            payment_status=data.payment_status,
            created_by=created_by,
        )
        self.db.add(booking)
        self.db.flush()

        room.status = RoomStatus.OCCUPIED

        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Booking {booking.id} created: room {room.room_number}, total {booking.total_amount}")
        return booking

    def update_booking(self, booking_id: int, data: BookingUpdate) -> Booking:
        """Edit room/guest/dates/status/payment status of a booking"""
        booking = self.get_booking_or_404(booking_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        current_status = booking.status
        target_status = update_data.pop('status', current_status)
        status_changes = target_status != current_status
        if status_changes:
            self.lifecycle.validate(current_status.value, target_status.value)

        old_room = booking.room
        new_room = old_room
        if 'room_id' in update_data and update_data['room_id'] != booking.room_id:
            new_room = self.room_service.get_room_or_404(update_data['room_id'])
        if 'guest_id' in update_data:
            self.guest_service.get_guest_or_404(update_data['guest_id'])

        check_in = update_data.get('check_in', booking.check_in)
        check_out = update_data.get('check_out', booking.check_out)
        dates_change = check_in != booking.check_in or check_out != booking.check_out
        room_changes = new_room.id != old_room.id

        if (room_changes or dates_change or 'guest_id' in update_data) \
                and current_status != BookingStatus.ACTIVE:
            raise BusinessRuleError(
                f"A {current_status.value} booking cannot be edited, only its payment status"
            )

        if dates_change:
            self._validate_dates(check_in, check_out)
        stays_active = target_status == BookingStatus.ACTIVE
        if room_changes and stays_active and new_room.status != RoomStatus.AVAILABLE:
            raise BusinessRuleError(f"Room {new_room.room_number} is not available")
        if (room_changes or dates_change) and stays_active and self.has_overlap(
                new_room.id, check_in, check_out, exclude_booking_id=booking.id):
            raise BusinessRuleError(f"Room {new_room.room_number} already has a booking for these dates")

        for key, value in update_data.items():
            setattr(booking, key, value)
        booking.status = target_status

        if room_changes or dates_change:
            booking.total_amount = calculate_total_amount(new_room.rate, check_in, check_out)

        if current_status == BookingStatus.ACTIVE and (room_changes or not stays_active):
            self._release_room(old_room, booking.id)
        if room_changes and stays_active:
            new_room.status = RoomStatus.OCCUPIED

        self.db.commit()
        self.db.refresh(booking)
        if status_changes:
            logger.info(f"Booking {booking.id}: {current_status.value} -> {target_status.value}")
        return booking

    def complete_booking(self, booking_id: int) -> Booking:
        return self.update_booking(booking_id, BookingUpdate(status=BookingStatus.COMPLETED))

    def cancel_booking(self, booking_id: int) -> Booking:
        return self.update_booking(booking_id, BookingUpdate(status=BookingStatus.CANCELLED))

    def set_payment_status(self, booking_id: int, payment_status: PaymentStatus) -> Booking:
        return self.update_booking(booking_id, BookingUpdate(payment_status=payment_status))

    # ---------- helpers ----------

    @staticmethod
    def _validate_dates(check_in: datetime, check_out: datetime) -> None:
        if check_out <= check_in:
            raise ValidationError("Check-out must be after check-in")

    def _release_room(self, room: Room, booking_id: int) -> None:
        """Free a room the booking was holding unless another active booking holds it"""
        if room.status != RoomStatus.OCCUPIED:
            return
        if not self.room_service.has_active_booking(room.id, exclude_booking_id=booking_id):
            room.status = RoomStatus.AVAILABLE

    def get_booking_detail(self, booking: Booking) -> dict:
        """Flatten a booking with its room and guest"""
        return {
            'id': booking.id,
            'room_id': booking.room_id,
            'room_number': booking.room.room_number,
            'room_type': booking.room.type,
            'room_rate': booking.room.rate,
            'guest_id': booking.guest_id,
            'guest_name': booking.guest.full_name,
            'guest_phone': booking.guest.phone,
            'check_in': booking.check_in,
            'check_out': booking.check_out,
            'nights': calculate_nights(booking.check_in, booking.check_out),
            'total_amount': booking.total_amount,
            'status': booking.status,
            'payment_status': booking.payment_status,
            'created_at': booking.created_at,
        }
