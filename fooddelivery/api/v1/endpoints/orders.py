"""Order endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fooddelivery.db.session import get_db
from fooddelivery.models import Order, OrderItem
from fooddelivery.schemas.order import (
    OrderCreate,
    OrderItemCreate,
    OrderItemRead,
    OrderItemUpdate,
    OrderRead,
    OrderStatusUpdate,
    RiderAssignment,
)
from fooddelivery.schemas.report import OrderSummary
from fooddelivery.services import order_service, reporting

router: APIRouter = APIRouter()


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)) -> Order:
    return order_service.create_order(
        db,
        customer_id=payload.customer_id,
        restaurant_id=payload.restaurant_id,
        address_id=payload.address_id,
    )


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)) -> Order:
    return order_service.get_order(db, order_id)


@router.get("/{order_id}/summary", response_model=OrderSummary)
def get_order_summary(order_id: int, db: Session = Depends(get_db)) -> OrderSummary:
    return reporting.order_summary(db, order_id)


@router.post("/{order_id}/items", response_model=OrderItemRead, status_code=status.HTTP_201_CREATED)
def add_order_item(order_id: int, payload: OrderItemCreate, db: Session = Depends(get_db)) -> OrderItem:
    return order_service.add_order_item(db, order_id, payload.menu_item_id, payload.quantity)


@router.patch("/items/{order_item_id}", response_model=OrderItemRead)
def update_order_item(order_item_id: int, payload: OrderItemUpdate, db: Session = Depends(get_db)) -> OrderItem:
    return order_service.update_order_item(db, order_item_id, payload.quantity)


@router.delete("/items/{order_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_order_item(order_item_id: int, db: Session = Depends(get_db)) -> None:
    order_service.remove_order_item(db, order_item_id)


@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)) -> Order:
    return order_service.update_order_status(db, order_id, payload.status)


@router.post("/{order_id}/rider", response_model=OrderRead)
def assign_rider(order_id: int, payload: RiderAssignment, db: Session = Depends(get_db)) -> Order:
    return order_service.assign_rider(db, order_id, payload.rider_id)
