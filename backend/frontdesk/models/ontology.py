"""
Domain entities
Rooms, guests, bookings, kitchen/bar orders, the drinks catalogue and staff
identity (auth principal, staff record, issued sessions)
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text,
    Enum as SQLEnum, Boolean, Numeric
)
from sqlalchemy.orm import relationship
from frontdesk.database import Base


# ============== Enums ==============

class RoomType(str, Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"
    EXECUTIVE = "executive"


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class BookingStatus(str, Enum):
    ACTIVE = "active"          # ongoing stay
    COMPLETED = "completed"    # stay ended normally
    CANCELLED = "cancelled"    # stay ended abnormally


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class KitchenOrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    COMPLETED = "completed"


class BarOrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"


class GuestType(str, Enum):
    LODGED = "lodged"
    WALK_IN = "walk_in"


class BillingType(str, Enum):
    ROOM_BILL = "room_bill"    # charged to the guest's unpaid booking
    SEPARATE = "separate"      # settled on the spot


class StaffRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"
    KITCHEN = "kitchen"
    BAR = "bar"


# ============== Rooms & guests ==============

class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)
    type = Column(SQLEnum(RoomType), nullable=False, default=RoomType.STANDARD)
    rate = Column(Numeric(12, 2), nullable=False)              # nightly rate
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    bookings = relationship("Booking", back_populates="room")


class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100))
    phone = Column(String(20))
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    bookings = relationship("Booking", back_populates="guest")


class Booking(Base):
    """
    A guest's stay in one room
    total_amount = room rate x ceil(nights), fixed when room or dates change
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False)
    check_in = Column(DateTime, nullable=False)
    check_out = Column(DateTime, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.ACTIVE)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.UNPAID)
    created_by = Column(Integer, ForeignKey("staff.id"))
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    room = relationship("Room", back_populates="bookings")
    guest = relationship("Guest", back_populates="bookings")
    creator = relationship("Staff", foreign_keys=[created_by])


# ============== Kitchen & bar ==============

class KitchenOrder(Base):
    __tablename__ = "kitchen_orders"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True)  # null for walk-ins
    room_number = Column(String(10))
    guest_name = Column(String(100), nullable=False)
    guest_type = Column(SQLEnum(GuestType), nullable=False, default=GuestType.WALK_IN)
    food_name = Column(String(100), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)             # unit price
    quantity = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(SQLEnum(KitchenOrderStatus), nullable=False, default=KitchenOrderStatus.PENDING)
    notes = Column(Text)
    billing_type = Column(SQLEnum(BillingType), nullable=False, default=BillingType.SEPARATE)
    created_by = Column(Integer, ForeignKey("staff.id"))
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    booking = relationship("Booking")

    @property
    def item_name(self) -> str:
        return self.food_name

    @property
    def unit_price(self) -> Decimal:
        return self.price


class DrinkCategory(Base):
    __tablename__ = "drink_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)

    drinks = relationship("Drink", back_populates="category")


class Drink(Base):
    __tablename__ = "drinks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("drink_categories.id"))
    is_available = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.now)

    category = relationship("DrinkCategory", back_populates="drinks")


class BarOrder(Base):
    __tablename__ = "bar_orders"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True)
    room_number = Column(String(10))
    guest_name = Column(String(100), nullable=False)
    guest_type = Column(SQLEnum(GuestType), nullable=False, default=GuestType.WALK_IN)
    drink_id = Column(Integer, ForeignKey("drinks.id"), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(SQLEnum(BarOrderStatus), nullable=False, default=BarOrderStatus.PENDING)
    notes = Column(Text)
    billing_type = Column(SQLEnum(BillingType), nullable=False, default=BillingType.SEPARATE)
    created_by = Column(Integer, ForeignKey("staff.id"))
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    booking = relationship("Booking")
    drink = relationship("Drink")

    @property
    def item_name(self) -> str:
        return self.drink.name if self.drink else ""


# ============== Identity ==============

class AuthAccount(Base):
    """
    Authentication principal (email + password)
    A staff record links to it one-to-one by sharing its id
    """
    __tablename__ = "auth_accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    staff = relationship("Staff", back_populates="account", uselist=False)
    sessions = relationship("StaffSession", back_populates="account")


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, ForeignKey("auth_accounts.id"), primary_key=True)
    email = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(100), nullable=False)
    role = Column(SQLEnum(StaffRole), nullable=False, default=StaffRole.RECEPTIONIST)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    account = relationship("AuthAccount", back_populates="staff")


class StaffSession(Base):
    """An issued sign-in session; revoked on sign-out"""
    __tablename__ = "staff_sessions"

    id = Column(String(36), primary_key=True)
    account_id = Column(Integer, ForeignKey("auth_accounts.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime)

    account = relationship("AuthAccount", back_populates="sessions")

    @property
    def is_open(self) -> bool:
        return self.revoked_at is None and self.expires_at > datetime.now()
