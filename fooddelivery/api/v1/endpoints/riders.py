"""Rider endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fooddelivery.db.session import get_db
from fooddelivery.models import Order, Rider
from fooddelivery.schemas.order import OrderRead
from fooddelivery.schemas.rider import RiderRead
from fooddelivery.services import reporting, rider_service

router: APIRouter = APIRouter()


@router.get("/{rider_id}", response_model=RiderRead)
def get_rider(rider_id: int, db: Session = Depends(get_db)) -> Rider:
    return rider_service.get_rider(db, rider_id)


@router.get("/{rider_id}/orders", response_model=list[OrderRead])
def list_active_orders(rider_id: int, db: Session = Depends(get_db)) -> list[Order]:
    """Return the rider's orders still in progress."""
    rider_service.get_rider(db, rider_id)
    return reporting.list_rider_active_orders(db, rider_id)
