"""
Seed data script
Creates rooms, the drinks catalogue and a first administrator

Default account (change the password after first sign-in):
  admin@frontdesk.local   Administrator   admin   password: admin123
"""
import logging
from decimal import Decimal
from frontdesk.database import SessionLocal, init_db
from frontdesk.models.ontology import (
    Drink, DrinkCategory, Room, RoomStatus, RoomType, StaffRole
)
from frontdesk.models.schemas import SignUpRequest
from frontdesk.services.staff_service import StaffService

logger = logging.getLogger(__name__)

ROOMS = [
    ("101", RoomType.STANDARD, Decimal("15000")),
    ("102", RoomType.STANDARD, Decimal("15000")),
    ("103", RoomType.STANDARD, Decimal("15000")),
    ("201", RoomType.DELUXE, Decimal("20000")),
    ("202", RoomType.DELUXE, Decimal("20000")),
    ("301", RoomType.SUITE, Decimal("35000")),
    ("401", RoomType.EXECUTIVE, Decimal("50000")),
]

DRINKS = {
    "Soft Drinks": [("Coca-Cola", Decimal("500")), ("Bottled Water", Decimal("300"))],
    "Beer": [("Star Lager", Decimal("1000")), ("Heineken", Decimal("1500"))],
    "Spirits": [("Hennessy VS (shot)", Decimal("3500"))],
    "Wine": [("House Red (glass)", Decimal("2500"))],
}


def init_rooms(db):
    created = 0
    for number, room_type, rate in ROOMS:
        if not db.query(Room).filter(Room.room_number == number).first():
            db.add(Room(room_number=number, type=room_type, rate=rate, status=RoomStatus.AVAILABLE))
            created += 1
    db.commit()
    logger.info(f"Rooms: {created} created")


def init_drinks(db):
    created = 0
    for category_name, drinks in DRINKS.items():
        category = db.query(DrinkCategory).filter(DrinkCategory.name == category_name).first()
        if not category:
            category = DrinkCategory(name=category_name)
            db.add(category)
            db.flush()
        for name, price in drinks:
            if not db.query(Drink).filter(Drink.name == name).first():
                db.add(Drink(name=name, price=price, category_id=category.id, is_available=True))
                created += 1
    db.commit()
    logger.info(f"Drinks: {created} created")


def init_admin(db):
    service = StaffService(db)
    if service.get_staff_by_email("admin@frontdesk.local"):
        return
    service.sign_up(SignUpRequest(
        email="admin@frontdesk.local",
        password="admin123",
        full_name="Administrator",
        role=StaffRole.ADMIN,
    ))
    logger.info("Administrator created: admin@frontdesk.local")


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    init_db()
    db = SessionLocal()
    try:
        init_rooms(db)
        init_drinks(db)
        init_admin(db)
    finally:
        db.close()


if __name__ == '__main__':
    main()
