# API Routers
from frontdesk.routers import (
    auth, staff, rooms, guests, bookings, orders, drinks, reports, receipts, auto_checkout
)

__all__ = [
    'auth', 'staff', 'rooms', 'guests', 'bookings', 'orders', 'drinks', 'reports',
    'receipts', 'auto_checkout'
]
