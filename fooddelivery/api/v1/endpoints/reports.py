"""Read-only report endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fooddelivery.db.session import get_db
from fooddelivery.models import MenuItem, Order
from fooddelivery.schemas.menu import MenuItemRead
from fooddelivery.schemas.order import OrderRead
from fooddelivery.schemas.report import PopularItem, RestaurantRating, RestaurantRevenue
from fooddelivery.services import reporting
from fooddelivery.utils.time import as_utc

router: APIRouter = APIRouter()


@router.get("/customers/{customer_id}/orders", response_model=list[OrderRead])
def customer_orders(customer_id: int, db: Session = Depends(get_db)) -> list[Order]:
    return reporting.list_customer_orders(db, customer_id)


@router.get("/categories/{category_id}/items", response_model=list[MenuItemRead])
def category_items(category_id: int, db: Session = Depends(get_db)) -> list[MenuItem]:
    return reporting.list_available_items(db, category_id)


@router.get("/restaurants/ratings", response_model=list[RestaurantRating])
def ratings(db: Session = Depends(get_db)) -> list[RestaurantRating]:
    return reporting.restaurant_ratings(db)


@router.get("/restaurants/{restaurant_id}/rating", response_model=RestaurantRating)
def rating(restaurant_id: int, db: Session = Depends(get_db)) -> RestaurantRating:
    return reporting.restaurant_rating(db, restaurant_id)


@router.get("/restaurants/revenue", response_model=list[RestaurantRevenue])
def revenue(
    start: datetime = Query(...),
    end: datetime = Query(...),
    db: Session = Depends(get_db),
) -> list[RestaurantRevenue]:
    if as_utc(end) <= as_utc(start):
        raise HTTPException(status_code=400, detail="end must be after start")
    return reporting.restaurant_revenue(db, start, end)


@router.get("/items/popular", response_model=list[PopularItem])
def popular(limit: int = Query(default=10, ge=1, le=100), db: Session = Depends(get_db)) -> list[PopularItem]:
    return reporting.popular_items(db, limit=limit)
