"""
Room routes
"""
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.ontology import RoomStatus, RoomType
from frontdesk.models.schemas import RoomCreate, RoomUpdate, RoomResponse
from frontdesk.services.room_service import RoomService
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    search: Optional[str] = None,
    type: Optional[RoomType] = None,
    status: Optional[RoomStatus] = None,
    min_rate: Optional[Decimal] = None,
    max_rate: Optional[Decimal] = None,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """List rooms, filtered by number, type, status and rate range"""
    return RoomService(db).get_rooms(search, type, status, min_rate, max_rate)


@router.get("/available", response_model=List[RoomResponse])
def list_available_rooms(
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return RoomService(db).get_available_rooms()


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return RoomService(db).get_room_or_404(room_id)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    data: RoomCreate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return RoomService(db).create_room(data)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: int,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return RoomService(db).update_room(room_id, data)


@router.delete("/{room_id}")
def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    RoomService(db).delete_room(room_id)
    return {"message": "Room deleted"}
