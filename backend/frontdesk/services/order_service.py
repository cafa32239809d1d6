"""
Kitchen and bar order services

Both share one flow:
1. resolve the customer: a lodged guest through an active booking, or a
   walk-in by name
2. billing type: room_bill when the booking is still unpaid, else separate
3. total = unit price x quantity (VAT is only added on receipts)
4. status moves strictly forward one step at a time, checked by the
   order lifecycle on every request
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session
from frontdesk.engine.lifecycles import KITCHEN_ORDER_LIFECYCLE, BAR_ORDER_LIFECYCLE
from frontdesk.engine.state_machine import StateMachine
from frontdesk.errors import BusinessRuleError, NotFoundError, ValidationError
from frontdesk.models.ontology import (
    BarOrder, BarOrderStatus, BillingType, Booking, BookingStatus, Drink,
    GuestType, KitchenOrder, KitchenOrderStatus, PaymentStatus
)
from frontdesk.models.schemas import OrderCreateBase, KitchenOrderCreate, BarOrderCreate

logger = logging.getLogger(__name__)


class OrderService:
    """Order manager shared by the kitchen and the bar"""

    model = None
    status_enum = None
    lifecycle: StateMachine = None

    def __init__(self, db: Session):
        self.db = db

    # ---------- queries ----------

    def get_orders(self, status: Optional[str] = None,
                   guest_type: Optional[GuestType] = None,
                   search: Optional[str] = None) -> List:
        model = self.model
        query = self.db.query(model)
        if status:
            query = query.filter(model.status == self._parse_status(status))
        if guest_type:
            query = query.filter(model.guest_type == guest_type)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                model.guest_name.ilike(pattern),
                model.room_number.ilike(pattern),
            ))
        return query.order_by(model.created_at.desc(), model.id.desc()).all()

    def get_order(self, order_id: int):
        return self.db.query(self.model).filter(self.model.id == order_id).first()

    def get_order_or_404(self, order_id: int):
        order = self.get_order(order_id)
        if not order:
            raise NotFoundError(f"{self.lifecycle.name} not found")
        return order

    def get_room_bill_orders(self, booking_id: int) -> List:
        """Orders charged to a booking's room bill"""
        return self.db.query(self.model).filter(
            self.model.booking_id == booking_id,
            self.model.billing_type == BillingType.ROOM_BILL
        ).order_by(self.model.created_at).all()

    def next_status_for(self, order) -> Optional[str]:
        return self.lifecycle.next_state(order.status.value)

    # ---------- commands ----------

    def create_order(self, data: OrderCreateBase, created_by: Optional[int] = None):
        booking, guest_name, guest_type = self._resolve_customer(data)
        unit_price, item_fields = self._resolve_item(data)

        if booking is not None and booking.payment_status == PaymentStatus.UNPAID:
            billing_type = BillingType.ROOM_BILL
        else:
            billing_type = BillingType.SEPARATE

        order = self.model(
            booking_id=booking.id if booking else None,
            room_number=booking.room.room_number if booking else None,
            guest_name=guest_name,
            guest_type=guest_type,
            quantity=data.quantity,
            total_amount=Decimal(unit_price) * data.quantity,
            status=self.status_enum(self.lifecycle.initial_state),
            notes=data.notes,
            billing_type=billing_type,
            created_by=created_by,
            **item_fields,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info(
            f"{self.lifecycle.name} {order.id} created for {guest_name}: "
            f"{order.total_amount} ({billing_type.value})"
        )
        return order

    def advance_status(self, order_id: int, next_status: str):
        """Move an order to `next_status`; only the single forward step is legal"""
        order = self.get_order_or_404(order_id)
        target = self._parse_status(next_status)
        self.lifecycle.validate(order.status.value, target.value)
        order.status = target
        self.db.commit()
        self.db.refresh(order)
        return order

    def advance(self, order_id: int):
        """Move an order one step forward"""
        order = self.get_order_or_404(order_id)
        target = self.next_status_for(order)
        if target is None:
            raise BusinessRuleError(f"{self.lifecycle.name} {order.id} is already {order.status.value}")
        return self.advance_status(order_id, target)

    # ---------- helpers ----------

    def _parse_status(self, value: str):
        try:
            return self.status_enum(value)
        except ValueError:
            allowed = ", ".join(s.value for s in self.status_enum)
            raise ValidationError(f"Unknown status '{value}', expected one of: {allowed}")

    def _resolve_customer(self, data: OrderCreateBase) -> Tuple[Optional[Booking], str, GuestType]:
        if data.booking_id is None:
            if data.guest_type == GuestType.LODGED:
                raise ValidationError("Select the booking of the lodged guest")
            name = (data.guest_name or "").strip()
            if not name:
                raise ValidationError("Guest name is required for walk-in orders")
            return None, name, GuestType.WALK_IN

        booking = self.db.query(Booking).filter(Booking.id == data.booking_id).first()
        if not booking:
            raise NotFoundError("Booking not found")
        if booking.status != BookingStatus.ACTIVE:
            raise BusinessRuleError("Orders can only be charged to an active booking")
        return booking, booking.guest.full_name, GuestType.LODGED

    def _resolve_item(self, data) -> Tuple[Decimal, dict]:
        raise NotImplementedError

    def get_order_detail(self, order) -> dict:
        return {
            'id': order.id,
            'booking_id': order.booking_id,
            'room_number': order.room_number,
            'guest_name': order.guest_name,
            'guest_type': order.guest_type,
            'item_name': order.item_name,
            'unit_price': order.unit_price,
            'quantity': order.quantity,
            'total_amount': order.total_amount,
            'status': order.status.value,
            'next_status': self.next_status_for(order),
            'notes': order.notes,
            'billing_type': order.billing_type,
            'created_at': order.created_at,
        }


class KitchenOrderService(OrderService):
    """Kitchen orders: food name and unit price are entered by staff"""

    model = KitchenOrder
    status_enum = KitchenOrderStatus
    lifecycle = KITCHEN_ORDER_LIFECYCLE

    def _resolve_item(self, data: KitchenOrderCreate) -> Tuple[Decimal, dict]:
        return data.price, {'food_name': data.food_name.strip(), 'price': data.price}


class BarOrderService(OrderService):
    """Bar orders: the drink and its price come from the catalogue"""

    model = BarOrder
    status_enum = BarOrderStatus
    lifecycle = BAR_ORDER_LIFECYCLE

    def _resolve_item(self, data: BarOrderCreate) -> Tuple[Decimal, dict]:
        drink = self.db.query(Drink).filter(Drink.id == data.drink_id).first()
        if not drink:
            raise NotFoundError("Drink not found")
        if not drink.is_available:
            raise BusinessRuleError(f"{drink.name} is not available")
        return drink.price, {'drink_id': drink.id, 'unit_price': drink.price}
