"""
Staff routes (managers)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.errors import NotFoundError
from frontdesk.models.ontology import StaffRole
from frontdesk.models.schemas import StaffResponse
from frontdesk.services.staff_service import StaffService
from frontdesk.security.auth import SessionContext, require_manager

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("", response_model=List[StaffResponse])
def list_staff(
    role: Optional[StaffRole] = None,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(require_manager)
):
    return StaffService(db).list_staff(role)


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(
    staff_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(require_manager)
):
    staff = StaffService(db).get_staff(staff_id)
    if not staff:
        raise NotFoundError("Staff not found")
    return staff
