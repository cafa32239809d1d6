"""
Booking routes
"""
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.ontology import BookingStatus
from frontdesk.models.schemas import (
    BookingCreate, BookingUpdate, BookingResponse, PaymentStatusUpdate, RoomBillResponse
)
from frontdesk.services.booking_service import BookingService
from frontdesk.services.order_service import KitchenOrderService, BarOrderService
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """List bookings, newest first; search matches guest name or room number"""
    service = BookingService(db)
    return [service.get_booking_detail(b) for b in service.get_bookings(status, search)]


@router.get("/active", response_model=List[BookingResponse])
def list_active_bookings(
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """Active bookings, for charging orders to a lodged guest"""
    service = BookingService(db)
    return [service.get_booking_detail(b) for b in service.get_active_bookings()]


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    return service.get_booking_detail(service.get_booking_or_404(booking_id))


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    booking = service.create_booking(data, created_by=current.staff_id)
    return service.get_booking_detail(booking)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    return service.get_booking_detail(service.update_booking(booking_id, data))


@router.post("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    return service.get_booking_detail(service.complete_booking(booking_id))


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    return service.get_booking_detail(service.cancel_booking(booking_id))


@router.put("/{booking_id}/payment", response_model=BookingResponse)
def set_payment_status(
    booking_id: int,
    data: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = BookingService(db)
    return service.get_booking_detail(service.set_payment_status(booking_id, data.payment_status))


@router.get("/{booking_id}/room-bill", response_model=RoomBillResponse)
def get_room_bill(
    booking_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """Kitchen and bar orders charged to the booking"""
    BookingService(db).get_booking_or_404(booking_id)
    kitchen = KitchenOrderService(db)
    bar = BarOrderService(db)
    kitchen_orders = kitchen.get_room_bill_orders(booking_id)
    bar_orders = bar.get_room_bill_orders(booking_id)
    total = sum((Decimal(o.total_amount) for o in kitchen_orders + bar_orders), Decimal('0'))
    return {
        'booking_id': booking_id,
        'kitchen_orders': [kitchen.get_order_detail(o) for o in kitchen_orders],
        'bar_orders': [bar.get_order_detail(o) for o in bar_orders],
        'total_amount': total,
    }
