"""Restaurant reviews."""

from sqlalchemy.orm import Session

from fooddelivery.core.errors import ReferentialViolation
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Customer, Restaurant, Review
from fooddelivery.services.validation import require_rating


def submit_review(
    db: Session,
    customer_id: int,
    restaurant_id: int,
    rating: int,
    comment: str | None = None,
) -> Review:
    with UnitOfWork(db):
        if db.get(Customer, customer_id) is None:
            raise ReferentialViolation(f"Customer {customer_id} does not exist.")
        if db.get(Restaurant, restaurant_id) is None:
            raise ReferentialViolation(f"Restaurant {restaurant_id} does not exist.")
        review = Review(
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            rating=require_rating(rating),
            comment=comment,
        )
        db.add(review)
        db.flush()
    return review
