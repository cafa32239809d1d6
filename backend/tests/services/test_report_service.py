"""
Tests for frontdesk/services/report_service.py
Covers: get_booking_report (stats, revenue by room type, occupancy),
        get_dashboard_stats, occupancy_csv
"""
import pytest
from datetime import date, datetime
from decimal import Decimal

from frontdesk.models.ontology import Booking, BookingStatus, Room, RoomType
from frontdesk.services.report_service import ReportService, occupancy_csv, occupancy_rate


# ── helpers ──────────────────────────────────────────────────────────

def _make_booking(db, room, guest, check_in, check_out, total,
                  status=BookingStatus.ACTIVE):
    b = Booking(
        room_id=room.id,
        guest_id=guest.id,
        check_in=check_in,
        check_out=check_out,
        total_amount=Decimal(total),
        status=status,
    )
    db.add(b)
    db.flush()
    return b


@pytest.fixture
def january_bookings(db_session, sample_room, sample_room_102, sample_guest):
    """Deluxe 101 active Jan 1-3, standard 102 cancelled Jan 2-4, one in February"""
    _make_booking(db_session, sample_room, sample_guest,
                  datetime(2024, 1, 1, 12), datetime(2024, 1, 3, 10), "40000")
    _make_booking(db_session, sample_room_102, sample_guest,
                  datetime(2024, 1, 2, 12), datetime(2024, 1, 4, 10), "30000",
                  status=BookingStatus.CANCELLED)
    _make_booking(db_session, sample_room_102, sample_guest,
                  datetime(2024, 2, 1, 12), datetime(2024, 2, 2, 10), "15000",
                  status=BookingStatus.COMPLETED)
    db_session.commit()


class TestBookingReport:

    def test_empty_range_has_zero_average(self, db_session):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 1), date(2024, 1, 2))

        stats = report['stats']
        assert stats['total_bookings'] == 0
        assert stats['total_revenue'] == Decimal("0")
        assert stats['average_booking_value'] == Decimal("0")
        assert report['revenue_by_room_type'] == []

    def test_no_rooms_means_zero_occupancy(self, db_session):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 1), date(2024, 1, 3))

        assert len(report['occupancy']) == 3
        for row in report['occupancy']:
            assert row['total_rooms'] == 0
            assert row['occupancy_rate'] == 0

    def test_stats(self, db_session, january_bookings):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 1), date(2024, 1, 5))

        stats = report['stats']
        assert stats['total_bookings'] == 2
        assert stats['active_bookings'] == 1
        assert stats['completed_bookings'] == 0
        assert stats['cancelled_bookings'] == 1
        assert stats['total_revenue'] == Decimal("70000")
        assert stats['average_booking_value'] == Decimal("35000.00")

    def test_revenue_by_room_type(self, db_session, january_bookings):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 1), date(2024, 1, 5))

        rows = {r['type']: r for r in report['revenue_by_room_type']}
        assert set(rows) == {RoomType.STANDARD.value, RoomType.DELUXE.value}
        assert rows['deluxe']['revenue'] == Decimal("40000")
        assert rows['standard']['bookings'] == 1

    def test_daily_occupancy_skips_cancelled(self, db_session, january_bookings):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 1), date(2024, 1, 5))

        occupied = [(r['date'], r['occupied_rooms'], r['occupancy_rate']) for r in report['occupancy']]
        assert occupied == [
            (date(2024, 1, 1), 1, 50.0),
            (date(2024, 1, 2), 1, 50.0),
            (date(2024, 1, 3), 1, 50.0),
            (date(2024, 1, 4), 0, 0.0),
            (date(2024, 1, 5), 0, 0.0),
        ]

    def test_overlapping_booking_is_included(self, db_session, january_bookings):
        """A stay that starts before the range still counts"""
        report = ReportService(db_session).get_booking_report(date(2024, 1, 3), date(2024, 1, 3))

        assert report['stats']['total_bookings'] == 2

    def test_reversed_range_is_swapped(self, db_session, january_bookings):
        report = ReportService(db_session).get_booking_report(date(2024, 1, 5), date(2024, 1, 1))

        assert report['start_date'] == date(2024, 1, 1)
        assert report['end_date'] == date(2024, 1, 5)

    def test_occupancy_rate(self):
        assert occupancy_rate(3, 4) == 75.0
        assert occupancy_rate(0, 0) == 0


class TestDashboard:

    def test_dashboard_counts(self, db_session, active_booking, sample_room_102):
        stats = ReportService(db_session).get_dashboard_stats()

        assert stats['total_rooms'] == 2
        assert stats['occupied_rooms'] == 1
        assert stats['total_guests'] == 1
        assert stats['active_bookings'] == 1
        assert len(stats['recent_bookings']) == 1
        assert stats['recent_bookings'][0]['room_number'] == "101"

    def test_recent_bookings_capped_at_five(self, db_session, sample_guest):
        for i in range(7):
            room = Room(room_number=f"50{i}", type=RoomType.STANDARD, rate=Decimal("10000"))
            db_session.add(room)
            db_session.flush()
            _make_booking(db_session, room, sample_guest,
                          datetime(2024, 3, 1), datetime(2024, 3, 2), "10000")
        db_session.commit()

        stats = ReportService(db_session).get_dashboard_stats()
        assert len(stats['recent_bookings']) == 5


class TestOccupancyCsv:

    def test_columns_and_percentage(self):
        text = occupancy_csv([
            {'date': date(2024, 1, 1), 'occupied_rooms': 1, 'total_rooms': 3, 'occupancy_rate': 100 / 3},
            {'date': date(2024, 1, 2), 'occupied_rooms': 0, 'total_rooms': 0, 'occupancy_rate': 0},
        ])

        lines = text.strip().splitlines()
        assert lines[0] == "Date,Occupied Rooms,Total Rooms,Occupancy Rate"
        assert lines[1] == "2024-01-01,1,3,33.33%"
        assert lines[2] == "2024-01-02,0,0,0.00%"
