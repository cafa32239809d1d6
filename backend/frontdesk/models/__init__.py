# Domain models
from frontdesk.models.ontology import (
    Room, Guest, Booking, KitchenOrder, BarOrder,
    Drink, DrinkCategory, AuthAccount, Staff, StaffSession
)

__all__ = [
    'Room', 'Guest', 'Booking', 'KitchenOrder', 'BarOrder',
    'Drink', 'DrinkCategory', 'AuthAccount', 'Staff', 'StaffSession'
]
