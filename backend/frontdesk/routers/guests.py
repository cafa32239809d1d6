"""
Guest routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.schemas import GuestCreate, GuestUpdate, GuestResponse
from frontdesk.services.guest_service import GuestService
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("", response_model=List[GuestResponse])
def list_guests(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """List guests; search matches name, email or phone"""
    return GuestService(db).get_guests(search)


@router.get("/{guest_id}", response_model=GuestResponse)
def get_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return GuestService(db).get_guest_or_404(guest_id)


@router.post("", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def create_guest(
    data: GuestCreate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return GuestService(db).create_guest(data)


@router.put("/{guest_id}", response_model=GuestResponse)
def update_guest(
    guest_id: int,
    data: GuestUpdate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return GuestService(db).update_guest(guest_id, data)


@router.delete("/{guest_id}")
def delete_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    GuestService(db).delete_guest(guest_id)
    return {"message": "Guest deleted"}
