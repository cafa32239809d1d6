"""
Receipt routes - printable HTML
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.services.booking_service import BookingService
from frontdesk.services.order_service import KitchenOrderService, BarOrderService
from frontdesk.services.receipt_service import build_receipt, render_receipt, render_order_ticket
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/receipts", tags=["Receipts"])

LAYOUT_QUERY = Query(default="full", description="full or compact")


@router.get("/bookings/{booking_id}", response_class=HTMLResponse)
def booking_receipt(
    booking_id: int,
    layout: str = LAYOUT_QUERY,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    booking = BookingService(db).get_booking_or_404(booking_id)
    return HTMLResponse(render_receipt(build_receipt(booking), layout))


@router.get("/kitchen-orders/{order_id}", response_class=HTMLResponse)
def kitchen_receipt(
    order_id: int,
    layout: str = LAYOUT_QUERY,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    order = KitchenOrderService(db).get_order_or_404(order_id)
    return HTMLResponse(render_receipt(build_receipt(order), layout))


@router.get("/bar-orders/{order_id}", response_class=HTMLResponse)
def bar_receipt(
    order_id: int,
    layout: str = LAYOUT_QUERY,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    order = BarOrderService(db).get_order_or_404(order_id)
    return HTMLResponse(render_receipt(build_receipt(order), layout))


@router.get("/kitchen-orders/{order_id}/ticket", response_class=HTMLResponse)
def kitchen_ticket(
    order_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    order = KitchenOrderService(db).get_order_or_404(order_id)
    return HTMLResponse(render_order_ticket(order))


@router.get("/bar-orders/{order_id}/ticket", response_class=HTMLResponse)
def bar_ticket(
    order_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    order = BarOrderService(db).get_order_or_404(order_id)
    return HTMLResponse(render_order_ticket(order))
