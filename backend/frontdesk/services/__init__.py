# Business Services
from frontdesk.services.room_service import RoomService
from frontdesk.services.guest_service import GuestService
from frontdesk.services.booking_service import BookingService
from frontdesk.services.order_service import KitchenOrderService, BarOrderService
from frontdesk.services.drink_service import DrinkService
from frontdesk.services.staff_service import StaffService
from frontdesk.services.report_service import ReportService
from frontdesk.services.auto_checkout_service import AutoCheckoutService

__all__ = [
    'RoomService', 'GuestService', 'BookingService',
    'KitchenOrderService', 'BarOrderService', 'DrinkService',
    'StaffService', 'ReportService', 'AutoCheckoutService'
]
