"""
Room service
Room inventory and direct staff edits of room status
"""
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from frontdesk.errors import BusinessRuleError, NotFoundError
from frontdesk.models.ontology import Room, RoomType, RoomStatus, Booking, BookingStatus
from frontdesk.models.schemas import RoomCreate, RoomUpdate


class RoomService:
    """Room service"""

    def __init__(self, db: Session):
        self.db = db

    def get_rooms(self, search: Optional[str] = None,
                  room_type: Optional[RoomType] = None,
                  status: Optional[RoomStatus] = None,
                  min_rate: Optional[Decimal] = None,
                  max_rate: Optional[Decimal] = None) -> List[Room]:
        query = self.db.query(Room)

        if search:
            query = query.filter(Room.room_number.ilike(f"%{search}%"))
        if room_type:
            query = query.filter(Room.type == room_type)
        if status:
            query = query.filter(Room.status == status)
        if min_rate is not None:
            query = query.filter(Room.rate >= min_rate)
        if max_rate is not None:
            query = query.filter(Room.rate <= max_rate)

        return query.order_by(Room.room_number).all()

    def get_available_rooms(self) -> List[Room]:
        return self.get_rooms(status=RoomStatus.AVAILABLE)

    def get_room(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def get_room_or_404(self, room_id: int) -> Room:
        room = self.get_room(room_id)
        if not room:
            raise NotFoundError("Room not found")
        return room

    def get_room_by_number(self, room_number: str) -> Optional[Room]:
        return self.db.query(Room).filter(Room.room_number == room_number).first()

    def create_room(self, data: RoomCreate) -> Room:
        if self.get_room_by_number(data.room_number):
            raise BusinessRuleError(f"Room {data.room_number} already exists")

        room = Room(
            room_number=data.room_number,
            type=data.type,
            rate=data.rate,
            status=data.status,
        )
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        return room

    def update_room(self, room_id: int, data: RoomUpdate) -> Room:
        """Edit a room; status is set as given, it is never inferred from bookings"""
        room = self.get_room_or_404(room_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        new_number = update_data.get('room_number')
        if new_number and new_number != room.room_number:
            existing = self.get_room_by_number(new_number)
            if existing:
                raise BusinessRuleError(f"Room {new_number} already exists")

        for key, value in update_data.items():
            setattr(room, key, value)

        self.db.commit()
        self.db.refresh(room)
        return room

    def delete_room(self, room_id: int) -> None:
        room = self.get_room_or_404(room_id)
        has_bookings = self.db.query(Booking).filter(Booking.room_id == room_id).count()
        if has_bookings:
            raise BusinessRuleError("Room has bookings and cannot be deleted")
        self.db.delete(room)
        self.db.commit()

    def has_active_booking(self, room_id: int, exclude_booking_id: Optional[int] = None) -> bool:
        query = self.db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.status == BookingStatus.ACTIVE
        )
        if exclude_booking_id is not None:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.count() > 0
