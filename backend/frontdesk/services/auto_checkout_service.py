"""
Auto-checkout sweep
Closes out active bookings whose check-out time has passed and frees
their rooms

The sweep is a conditional update ("completed where still active and
check_out <= now"), so a booking a member of staff moved out of 'active'
in the meantime is left alone, and running it twice changes nothing.
Bookings and rooms are updated in one transaction. Failures are logged
and swallowed; the next tick retries.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from frontdesk.config import settings
from frontdesk.models.ontology import Booking, BookingStatus, Room, RoomStatus

logger = logging.getLogger(__name__)

AUTO_CHECKOUT_JOB_ID = "auto_checkout"


@dataclass
class SweepResult:
    ran_at: datetime
    completed_booking_ids: List[int] = field(default_factory=list)
    released_room_ids: List[int] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AutoCheckoutService:
    """Expired-booking sweep"""

    def __init__(self, db: Session):
        self.db = db

    def sweep(self, now: Optional[datetime] = None) -> SweepResult:
        now = now or datetime.now()
        result = SweepResult(ran_at=now)
        try:
            completed = self.db.execute(
                update(Booking)
                .where(Booking.status == BookingStatus.ACTIVE, Booking.check_out <= now)
                .values(status=BookingStatus.COMPLETED)
                .returning(Booking.id, Booking.room_id)
                .execution_options(synchronize_session=False)
            ).all()

            if completed:
                room_ids = sorted({row.room_id for row in completed})
                still_held = select(Booking.room_id).where(Booking.status == BookingStatus.ACTIVE)
                released = self.db.execute(
                    update(Room)
                    .where(
                        Room.id.in_(room_ids),
                        Room.status == RoomStatus.OCCUPIED,
                        Room.id.not_in(still_held),
                    )
                    .values(status=RoomStatus.AVAILABLE)
                    .returning(Room.id)
                    .execution_options(synchronize_session=False)
                ).scalars().all()

                result.completed_booking_ids = sorted(row.id for row in completed)
                result.released_room_ids = sorted(released)

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error in auto-checkout sweep")
            result.error = str(e)
            return result

        if result.completed_booking_ids:
            logger.info(
                f"Auto-checkout completed bookings {result.completed_booking_ids}, "
                f"released rooms {result.released_room_ids}"
            )
        return result


def run_auto_checkout(session_factory: Callable[[], Session] = None) -> SweepResult:
    """Scheduler entry point: one sweep on a fresh session"""
    if session_factory is None:
        from frontdesk.database import SessionLocal
        session_factory = SessionLocal

    db = session_factory()
    try:
        return AutoCheckoutService(db).sweep()
    finally:
        db.close()


def schedule_auto_checkout(backend, session_factory: Callable[[], Session] = None,
                           interval_minutes: Optional[int] = None) -> None:
    """Register the sweep on `backend`: every N minutes, first run immediately"""
    minutes = interval_minutes or settings.AUTO_CHECKOUT_INTERVAL_MINUTES
    backend.add_job(
        AUTO_CHECKOUT_JOB_ID,
        lambda: run_auto_checkout(session_factory),
        "interval",
        minutes=minutes,
        next_run_time=datetime.now(),
        name="Auto-checkout sweep",
    )
