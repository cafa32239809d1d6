"""
Kitchen and bar order routes

Both stations expose the same resource shape, so one factory builds both
routers from the station's service and create schema.
"""
from typing import List, Optional, Type
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.ontology import GuestType
from frontdesk.models.schemas import (
    KitchenOrderCreate, BarOrderCreate, OrderResponse, OrderStatusUpdate
)
from frontdesk.services.order_service import OrderService, KitchenOrderService, BarOrderService
from frontdesk.security.auth import SessionContext, get_current_session


def build_order_router(prefix: str, tag: str, service_class: Type[OrderService],
                       create_schema) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=List[OrderResponse])
    def list_orders(
        status: Optional[str] = None,
        guest_type: Optional[GuestType] = None,
        search: Optional[str] = None,
        db: Session = Depends(get_db),
        current: SessionContext = Depends(get_current_session)
    ):
        service = service_class(db)
        return [service.get_order_detail(o) for o in service.get_orders(status, guest_type, search)]

    @router.get("/{order_id}", response_model=OrderResponse)
    def get_order(
        order_id: int,
        db: Session = Depends(get_db),
        current: SessionContext = Depends(get_current_session)
    ):
        service = service_class(db)
        return service.get_order_detail(service.get_order_or_404(order_id))

    @router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
    def create_order(
        data: create_schema,
        db: Session = Depends(get_db),
        current: SessionContext = Depends(get_current_session)
    ):
        service = service_class(db)
        return service.get_order_detail(service.create_order(data, created_by=current.staff_id))

    @router.put("/{order_id}/status", response_model=OrderResponse)
    def update_order_status(
        order_id: int,
        data: OrderStatusUpdate,
        db: Session = Depends(get_db),
        current: SessionContext = Depends(get_current_session)
    ):
        """Move the order to its next status; any other target is refused"""
        service = service_class(db)
        return service.get_order_detail(service.advance_status(order_id, data.status))

    @router.post("/{order_id}/advance", response_model=OrderResponse)
    def advance_order(
        order_id: int,
        db: Session = Depends(get_db),
        current: SessionContext = Depends(get_current_session)
    ):
        service = service_class(db)
        return service.get_order_detail(service.advance(order_id))

    return router


kitchen_router = build_order_router("/kitchen-orders", "Kitchen", KitchenOrderService, KitchenOrderCreate)
bar_router = build_order_router("/bar-orders", "Bar", BarOrderService, BarOrderCreate)
