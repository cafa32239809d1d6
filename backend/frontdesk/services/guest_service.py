"""
Guest service
"""
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from frontdesk.errors import BusinessRuleError, NotFoundError
from frontdesk.models.ontology import Guest, Booking
from frontdesk.models.schemas import GuestCreate, GuestUpdate


class GuestService:

    def __init__(self, db: Session):
        self.db = db

    def get_guests(self, search: Optional[str] = None) -> List[Guest]:
        """List guests, optionally matching name/email/phone"""
        query = self.db.query(Guest)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Guest.full_name.ilike(pattern),
                Guest.email.ilike(pattern),
                Guest.phone.ilike(pattern),
            ))
        return query.order_by(Guest.created_at.desc(), Guest.id.desc()).all()

    def get_guest(self, guest_id: int) -> Optional[Guest]:
        return self.db.query(Guest).filter(Guest.id == guest_id).first()

    def get_guest_or_404(self, guest_id: int) -> Guest:
        guest = self.get_guest(guest_id)
        if not guest:
            raise NotFoundError("Guest not found")
        return guest

    def create_guest(self, data: GuestCreate) -> Guest:
        guest = Guest(**data.model_dump())
        self.db.add(guest)
        self.db.commit()
        self.db.refresh(guest)
        return guest

    def update_guest(self, guest_id: int, data: GuestUpdate) -> Guest:
        guest = self.get_guest_or_404(guest_id)
        update_data = data.model_dump(exclude_unset=True)
        # contact fields can be cleared, the name cannot
        if update_data.get("full_name", "") is None:
            del update_data["full_name"]
        for key, value in update_data.items():
            setattr(guest, key, value)
        self.db.commit()
        self.db.refresh(guest)
        return guest

    def delete_guest(self, guest_id: int) -> None:
        guest = self.get_guest_or_404(guest_id)
        if self.db.query(Booking).filter(Booking.guest_id == guest_id).count():
            raise BusinessRuleError("Guest has bookings and cannot be deleted")
        self.db.delete(guest)
        self.db.commit()
