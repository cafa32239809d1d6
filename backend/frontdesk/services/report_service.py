"""
Report service - read-only rollups
Booking statistics, revenue by room type and daily occupancy over a date
range, plus the dashboard counters
"""
import csv
import io
from collections import OrderedDict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List
from sqlalchemy.orm import Session
from frontdesk.models.ontology import (
    Booking, BookingStatus, Guest, Room, RoomStatus, RoomType
)
from frontdesk.services.booking_service import BookingService

OCCUPANCY_CSV_HEADER = ["Date", "Occupied Rooms", "Total Rooms", "Occupancy Rate"]


def occupancy_rate(occupied_rooms: int, total_rooms: int) -> float:
    return (occupied_rooms / total_rooms * 100) if total_rooms > 0 else 0.0


class ReportService:
    """Report service"""

    def __init__(self, db: Session):
        self.db = db

    def get_bookings_in_range(self, start_date: date, end_date: date) -> List[Booking]:
        """Bookings whose stay overlaps [start_date, end_date], both days inclusive"""
        range_start = datetime.combine(start_date, datetime.min.time())
        range_end = datetime.combine(end_date + timedelta(days=1), datetime.min.time())
        return self.db.query(Booking).filter(
            Booking.check_in < range_end,
            Booking.check_out >= range_start
        ).order_by(Booking.check_in).all()

    def get_booking_report(self, start_date: date, end_date: date) -> dict:
        if end_date < start_date:
            start_date, end_date = end_date, start_date

        bookings = self.get_bookings_in_range(start_date, end_date)
        total_rooms = self.db.query(Room).count()

        return {
            'start_date': start_date,
            'end_date': end_date,
            'stats': self._booking_stats(bookings),
            'revenue_by_room_type': self._revenue_by_room_type(bookings),
            'occupancy': self._daily_occupancy(bookings, start_date, end_date, total_rooms),
        }

    def get_dashboard_stats(self) -> dict:
        booking_service = BookingService(self.db)
        return {
            'total_rooms': self.db.query(Room).count(),
            'occupied_rooms': self.db.query(Room).filter(
                Room.status == RoomStatus.OCCUPIED
            ).count(),
            'total_guests': self.db.query(Guest).count(),
            'active_bookings': self.db.query(Booking).filter(
                Booking.status == BookingStatus.ACTIVE
            ).count(),
            'recent_bookings': [
                booking_service.get_booking_detail(b)
                for b in booking_service.get_recent_bookings(limit=5)
            ],
        }

    # ---------- rollups ----------

    @staticmethod
    def _booking_stats(bookings: List[Booking]) -> dict:
        total = len(bookings)
        revenue = sum((Decimal(b.total_amount) for b in bookings), Decimal('0'))
        average = (revenue / total).quantize(Decimal('0.01')) if total else Decimal('0')

        def count(status: BookingStatus) -> int:
            return len([b for b in bookings if b.status == status])

        return {
            'total_bookings': total,
            'active_bookings': count(BookingStatus.ACTIVE),
            'completed_bookings': count(BookingStatus.COMPLETED),
            'cancelled_bookings': count(BookingStatus.CANCELLED),
            'total_revenue': revenue,
            'average_booking_value': average,
        }

    @staticmethod
    def _revenue_by_room_type(bookings: List[Booking]) -> List[dict]:
        groups = OrderedDict((rt, {'bookings': 0, 'revenue': Decimal('0')}) for rt in RoomType)
        for booking in bookings:
            group = groups[booking.room.type]
            group['bookings'] += 1
            group['revenue'] += Decimal(booking.total_amount)

        return [
            {'type': rt.value, 'bookings': g['bookings'], 'revenue': g['revenue']}
            for rt, g in groups.items() if g['bookings']
        ]

    @staticmethod
    def _daily_occupancy(bookings: List[Booking], start_date: date, end_date: date,
                         total_rooms: int) -> List[dict]:
        # a day counts when it falls within [date(check_in), date(check_out)]
        live = [b for b in bookings if b.status != BookingStatus.CANCELLED]
        result = []
        current = start_date
        while current <= end_date:
            occupied = len({
                b.room_id for b in live
                if b.check_in.date() <= current <= b.check_out.date()
            })
            result.append({
                'date': current,
                'occupied_rooms': occupied,
                'total_rooms': total_rooms,
                'occupancy_rate': occupancy_rate(occupied, total_rooms),
            })
            current += timedelta(days=1)
        return result


def occupancy_csv(rows: Iterable[dict]) -> str:
    """Occupancy rows as CSV text; the rate is a percentage with two decimals"""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(OCCUPANCY_CSV_HEADER)
    for row in rows:
        writer.writerow([
            row['date'].isoformat(),
            row['occupied_rooms'],
            row['total_rooms'],
            f"{row['occupancy_rate']:.2f}%",
        ])
    return output.getvalue()
