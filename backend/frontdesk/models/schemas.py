"""
Pydantic schemas
Request/response validation for the HTTP API
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator
from frontdesk.models.ontology import (
    RoomType, RoomStatus, BookingStatus, PaymentStatus, KitchenOrderStatus,
    BarOrderStatus, GuestType, BillingType, StaffRole
)


# ============== Auth / staff ==============

class SignUpRequest(BaseModel):
    email: str = Field(..., max_length=100)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1, max_length=100)
    role: StaffRole = StaffRole.RECEPTIONIST

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class SignInRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class StaffResponse(BaseModel):
    id: int
    email: str
    full_name: str
    role: StaffRole
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class SignInResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    staff: StaffResponse


class ProfileUpdate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)
    confirm_password: str


# ============== Rooms ==============

class RoomBase(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=10)
    type: RoomType = RoomType.STANDARD
    rate: Decimal = Field(..., ge=0)


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(None, min_length=1, max_length=10)
    type: Optional[RoomType] = None
    rate: Optional[Decimal] = Field(None, ge=0)
    status: Optional[RoomStatus] = None


class RoomResponse(RoomBase):
    id: int
    status: RoomStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Guests ==============

class GuestBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class GuestCreate(GuestBase):
    pass


class GuestUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class GuestResponse(GuestBase):
    id: int
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Bookings ==============

def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive local time; convert aware input to match"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class BookingCreate(BaseModel):
    room_id: int
    guest_id: int
    check_in: datetime
    check_out: datetime
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    @field_validator("check_in", "check_out")
    @classmethod
    def local_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)


class BookingUpdate(BaseModel):
    room_id: Optional[int] = None
    guest_id: Optional[int] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None

    @field_validator("check_in", "check_out")
    @classmethod
    def local_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(v)


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class BookingResponse(BaseModel):
    id: int
    room_id: int
    room_number: str
    room_type: RoomType
    room_rate: Decimal
    guest_id: int
    guest_name: str
    guest_phone: Optional[str] = None
    check_in: datetime
    check_out: datetime
    nights: int
    total_amount: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    created_at: datetime


# ============== Drinks ==============

class DrinkCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class DrinkCategoryResponse(DrinkCategoryCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


class DrinkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    category_id: Optional[int] = None
    is_available: bool = True


class DrinkUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[int] = None
    is_available: Optional[bool] = None


class DrinkResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    is_available: bool


# ============== Orders ==============

class OrderCreateBase(BaseModel):
    guest_type: GuestType = GuestType.WALK_IN
    booking_id: Optional[int] = None      # required for lodged guests
    guest_name: Optional[str] = Field(None, max_length=100)  # required for walk-ins
    quantity: int = Field(default=1, ge=1)
    notes: Optional[str] = None


class KitchenOrderCreate(OrderCreateBase):
    food_name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)


class BarOrderCreate(OrderCreateBase):
    drink_id: int


class OrderStatusUpdate(BaseModel):
    status: str


class OrderResponse(BaseModel):
    id: int
    booking_id: Optional[int] = None
    room_number: Optional[str] = None
    guest_name: str
    guest_type: GuestType
    item_name: str
    unit_price: Decimal
    quantity: int
    total_amount: Decimal
    status: str
    next_status: Optional[str] = None
    notes: Optional[str] = None
    billing_type: BillingType
    created_at: datetime


class RoomBillResponse(BaseModel):
    """Orders charged to a booking's room bill"""
    booking_id: int
    kitchen_orders: List[OrderResponse]
    bar_orders: List[OrderResponse]
    total_amount: Decimal


# ============== Reports ==============

class BookingStats(BaseModel):
    total_bookings: int
    active_bookings: int
    completed_bookings: int
    cancelled_bookings: int
    total_revenue: Decimal
    average_booking_value: Decimal


class RevenueByRoomType(BaseModel):
    type: str
    bookings: int
    revenue: Decimal


class OccupancyRow(BaseModel):
    date: date
    occupied_rooms: int
    total_rooms: int
    occupancy_rate: float


class BookingReport(BaseModel):
    start_date: date
    end_date: date
    stats: BookingStats
    revenue_by_room_type: List[RevenueByRoomType]
    occupancy: List[OccupancyRow]


class DashboardStats(BaseModel):
    total_rooms: int
    occupied_rooms: int
    total_guests: int
    active_bookings: int
    recent_bookings: List[BookingResponse]


# ============== Auto-checkout ==============

class SweepResponse(BaseModel):
    ran_at: datetime
    completed_booking_ids: List[int]
    released_room_ids: List[int]
    error: Optional[str] = None
