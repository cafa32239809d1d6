"""
Drinks catalogue routes
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.schemas import (
    DrinkCategoryCreate, DrinkCategoryResponse, DrinkCreate, DrinkUpdate, DrinkResponse
)
from frontdesk.services.drink_service import DrinkService
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/drinks", tags=["Drinks"])


@router.get("/categories", response_model=List[DrinkCategoryResponse])
def list_categories(
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return DrinkService(db).get_categories()


@router.post("/categories", response_model=DrinkCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: DrinkCategoryCreate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return DrinkService(db).create_category(data.name)


@router.get("", response_model=List[DrinkResponse])
def list_drinks(
    available_only: bool = False,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = DrinkService(db)
    return [service.get_drink_detail(d) for d in service.get_drinks(available_only)]


@router.post("", response_model=DrinkResponse, status_code=status.HTTP_201_CREATED)
def create_drink(
    data: DrinkCreate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = DrinkService(db)
    return service.get_drink_detail(service.create_drink(data))


@router.put("/{drink_id}", response_model=DrinkResponse)
def update_drink(
    drink_id: int,
    data: DrinkUpdate,
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    service = DrinkService(db)
    return service.get_drink_detail(service.update_drink(drink_id, data))
