"""
Auth routes - sign-up, sign-in, sign-out and the settings screen
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.schemas import (
    SignUpRequest, SignInRequest, SignInResponse, StaffResponse,
    ProfileUpdate, PasswordChange
)
from frontdesk.services.staff_service import StaffService
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """Register a staff member"""
    return StaffService(db).sign_up(data)


@router.post("/signin", response_model=SignInResponse)
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    """Sign in; fails and signs out at once when no staff record exists"""
    return StaffService(db).sign_in(data.email, data.password)


@router.post("/signout")
def sign_out(
    current: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    StaffService(db).sign_out(current)
    return {"message": "Signed out"}


@router.get("/me", response_model=StaffResponse)
def get_me(
    current: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    return StaffService(db).get_staff(current.staff_id)


@router.put("/profile", response_model=StaffResponse)
def update_profile(
    data: ProfileUpdate,
    current: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    return StaffService(db).update_profile(current.staff_id, data.full_name)


@router.post("/password")
def change_password(
    data: PasswordChange,
    current: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    StaffService(db).change_password(current.staff_id, data)
    return {"message": "Password updated"}
