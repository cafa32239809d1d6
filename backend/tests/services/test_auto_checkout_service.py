"""
Tests for frontdesk/services/auto_checkout_service.py
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from frontdesk.models.ontology import Booking, BookingStatus, RoomStatus
from frontdesk.models.schemas import BookingCreate
from frontdesk.services.auto_checkout_service import (
    AUTO_CHECKOUT_JOB_ID, AutoCheckoutService, run_auto_checkout, schedule_auto_checkout
)
from frontdesk.services.booking_service import BookingService


@pytest.fixture
def expired_booking(db_session, sample_room, sample_guest):
    """Active booking whose check-out was yesterday"""
    now = datetime.now().replace(microsecond=0)
    return BookingService(db_session).create_booking(BookingCreate(
        room_id=sample_room.id,
        guest_id=sample_guest.id,
        check_in=now - timedelta(days=3),
        check_out=now - timedelta(days=1),
    ))


class TestSweep:

    def test_expired_booking_is_completed_and_room_freed(self, db_session, expired_booking, sample_room):
        assert sample_room.status == RoomStatus.OCCUPIED

        result = AutoCheckoutService(db_session).sweep()

        assert result.ok
        assert result.completed_booking_ids == [expired_booking.id]
        assert result.released_room_ids == [sample_room.id]
        db_session.refresh(expired_booking)
        db_session.refresh(sample_room)
        assert expired_booking.status == BookingStatus.COMPLETED
        assert sample_room.status == RoomStatus.AVAILABLE

    def test_current_booking_is_left_alone(self, db_session, active_booking):
        result = AutoCheckoutService(db_session).sweep()

        assert result.completed_booking_ids == []
        db_session.refresh(active_booking)
        assert active_booking.status == BookingStatus.ACTIVE
        assert active_booking.room.status == RoomStatus.OCCUPIED

    def test_check_out_exactly_now_counts_as_expired(self, db_session, active_booking):
        result = AutoCheckoutService(db_session).sweep(now=active_booking.check_out)

        assert result.completed_booking_ids == [active_booking.id]

    def test_second_run_changes_nothing(self, db_session, expired_booking):
        service = AutoCheckoutService(db_session)
        first = service.sweep()
        second = service.sweep()

        assert first.completed_booking_ids == [expired_booking.id]
        assert second.completed_booking_ids == []
        assert second.released_room_ids == []

    def test_cancelled_booking_is_not_overwritten(self, db_session, expired_booking):
        BookingService(db_session).cancel_booking(expired_booking.id)

        result = AutoCheckoutService(db_session).sweep()

        assert result.completed_booking_ids == []
        db_session.refresh(expired_booking)
        assert expired_booking.status == BookingStatus.CANCELLED

    def test_room_held_by_another_active_booking_stays_occupied(
            self, db_session, expired_booking, sample_room, sample_guest):
        now = datetime.now()
        db_session.add(Booking(
            room_id=sample_room.id,
            guest_id=sample_guest.id,
            check_in=now,
            check_out=now + timedelta(days=1),
            total_amount=Decimal("20000"),
            status=BookingStatus.ACTIVE,
        ))
        db_session.commit()

        result = AutoCheckoutService(db_session).sweep()

        assert result.completed_booking_ids == [expired_booking.id]
        assert result.released_room_ids == []
        db_session.refresh(sample_room)
        assert sample_room.status == RoomStatus.OCCUPIED

    def test_store_failure_is_logged_not_raised(self, caplog):
        db = MagicMock(spec=Session)
        db.execute.side_effect = OperationalError("UPDATE bookings", {}, Exception("database is down"))

        result = AutoCheckoutService(db).sweep()

        assert not result.ok
        assert "database is down" in result.error
        db.rollback.assert_called_once()
        db.commit.assert_not_called()
        assert "Error in auto-checkout sweep" in caplog.text


class TestScheduling:

    def test_run_auto_checkout_uses_a_fresh_session(self, db_session, expired_booking):
        factory = MagicMock(return_value=db_session)

        result = run_auto_checkout(factory)

        factory.assert_called_once()
        assert result.completed_booking_ids == [expired_booking.id]

    def test_schedule_registers_interval_job(self):
        backend = MagicMock()

        schedule_auto_checkout(backend, interval_minutes=7)

        args, kwargs = backend.add_job.call_args
        assert args[0] == AUTO_CHECKOUT_JOB_ID
        assert args[2] == "interval"
        assert kwargs["minutes"] == 7
        assert kwargs["next_run_time"] is not None

    def test_scheduled_job_runs_the_sweep(self, db_session, expired_booking):
        backend = MagicMock()
        schedule_auto_checkout(backend, session_factory=lambda: db_session)

        job = backend.add_job.call_args[0][1]
        result = job()

        assert result.completed_booking_ids == [expired_booking.id]
