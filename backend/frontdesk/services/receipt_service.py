"""
Receipt service - printable documents
Maps a booking or a kitchen/bar order to one ReceiptDocument and renders it
as HTML with a selectable layout

VAT = subtotal x VAT_RATE and grand total = subtotal + VAT, both computed
here for display only and never written back. Booking receipts carry the
room charge without VAT.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import List, Optional, Tuple
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from frontdesk.config import settings
from frontdesk.errors import ValidationError
from frontdesk.models.ontology import BarOrder, Booking, GuestType, KitchenOrder, PaymentStatus
from frontdesk.services.booking_service import calculate_nights

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

LAYOUTS = {
    "full": "receipts/receipt_full.html.j2",
    "compact": "receipts/receipt_compact.html.j2",
}
TICKET_TEMPLATE = "receipts/ticket.html.j2"
CENT = Decimal("0.01")


@dataclass
class ReceiptLine:
    description: str
    quantity: int
    unit_price: Decimal
    amount: Decimal
    note: Optional[str] = None


@dataclass
class ReceiptDocument:
    title: str
    reference: str
    issued_at: datetime
    details: List[Tuple[str, str]]
    lines: List[ReceiptLine]
    subtotal: Decimal
    vat_rate: Optional[Decimal] = None
    footer: List[str] = field(default_factory=list)
    paid: bool = False

    @property
    def vat(self) -> Optional[Decimal]:
        if self.vat_rate is None:
            return None
        return self.subtotal * self.vat_rate

    @property
    def grand_total(self) -> Decimal:
        return self.subtotal + (self.vat or Decimal("0"))


def format_money(amount) -> str:
    value = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{settings.CURRENCY_SYMBOL}{value:,.2f}"


def format_percent(rate) -> str:
    return f"{(Decimal(rate) * 100).normalize():f}%"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        undefined=StrictUndefined,
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters["money"] = format_money
    env.filters["percent"] = format_percent
    env.filters["datetime"] = lambda value: value.strftime("%d %b %Y %H:%M")
    return env


_env = _environment()


# ---------- mapping ----------

def build_receipt(entity) -> ReceiptDocument:
    """One data contract for every receipt type"""
    if isinstance(entity, Booking):
        return _booking_receipt(entity)
    if isinstance(entity, KitchenOrder):
        return _order_receipt(entity, "Kitchen Receipt")
    if isinstance(entity, BarOrder):
        return _order_receipt(entity, "Bar Receipt")
    raise ValidationError(f"No receipt for {type(entity).__name__}")


def _booking_receipt(booking: Booking) -> ReceiptDocument:
    room = booking.room
    nights = calculate_nights(booking.check_in, booking.check_out)
    return ReceiptDocument(
        title="Booking Receipt",
        reference=f"BK-{booking.id}",
        issued_at=datetime.now(),
        details=[
            ("Guest", booking.guest.full_name),
            ("Room", room.room_number),
            ("Check-In", booking.check_in.strftime("%d/%m/%Y %H:%M")),
            ("Check-Out", booking.check_out.strftime("%d/%m/%Y %H:%M")),
            ("Status", booking.status.value),
            ("Payment", booking.payment_status.value),
        ],
        lines=[ReceiptLine(
            description=f"{room.type.value.title()} room {room.room_number}",
            quantity=nights,
            unit_price=Decimal(room.rate),
            amount=Decimal(booking.total_amount),
            note=f"{nights} night{'s' if nights != 1 else ''}",
        )],
        subtotal=Decimal(booking.total_amount),
        footer=["Thank you for your patronage"],
        paid=booking.payment_status == PaymentStatus.PAID,
    )


def _order_receipt(order, title: str) -> ReceiptDocument:
    if order.guest_type == GuestType.LODGED:
        customer_type = "Lodged Guest"
    else:
        customer_type = "Walk-in Customer"
    details = [
        ("Date", order.created_at.strftime("%d %b %Y %H:%M")),
        ("Customer", order.guest_name),
        ("Type", customer_type),
    ]
    if order.room_number:
        details.append(("Room", order.room_number))

    return ReceiptDocument(
        title=title,
        reference=f"{'KO' if isinstance(order, KitchenOrder) else 'BO'}-{order.id}",
        issued_at=datetime.now(),
        details=details,
        lines=[ReceiptLine(
            description=order.item_name,
            quantity=order.quantity,
            unit_price=Decimal(order.unit_price),
            amount=Decimal(order.total_amount),
            note=order.notes,
        )],
        subtotal=Decimal(order.total_amount),
        vat_rate=settings.VAT_RATE,
        footer=[
            "Thank you for your patronage!",
            "For inquiries, please contact our front desk",
        ],
        paid=True,
    )


# ---------- rendering ----------

def render_receipt(document: ReceiptDocument, layout: str = "full") -> str:
    template_name = LAYOUTS.get(layout)
    if template_name is None:
        raise ValidationError(f"Unknown receipt layout '{layout}', expected one of: {', '.join(LAYOUTS)}")
    return _env.get_template(template_name).render(
        hotel_name=settings.HOTEL_NAME,
        logo_url=settings.HOTEL_LOGO_URL,
        receipt=document,
    )


def render_order_ticket(order) -> str:
    """Preparation ticket for the kitchen or the bar; no prices"""
    return _env.get_template(TICKET_TEMPLATE).render(
        hotel_name=settings.HOTEL_NAME,
        station="Kitchen" if isinstance(order, KitchenOrder) else "Bar",
        order=order,
        printed_at=datetime.now(),
    )
