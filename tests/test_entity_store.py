"""Entity registration rules and database-level integrity checks."""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from fooddelivery.core.errors import ConstraintViolation, NotFound, ReferentialViolation
from fooddelivery.core.security import get_password_hash, verify_password
from fooddelivery.db.base import Base
from fooddelivery.db.session import build_engine
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Address, Customer, MenuItem, OrderItem, Payment, Review
from fooddelivery.services.account_service import (
    add_address,
    get_customer_by_email,
    get_default_address,
    register_customer,
)
from fooddelivery.services.menu_service import add_category, add_menu_item, get_menu_item
from fooddelivery.services.order_service import add_order_item, create_order
from fooddelivery.services.payment_service import record_payment
from fooddelivery.services.restaurant_service import (
    list_active_restaurants,
    register_restaurant,
    set_restaurant_active,
)
from fooddelivery.services.review_service import submit_review
from fooddelivery.services.rider_service import get_rider, register_rider


def _build_session_local(tmp_path: Path, name: str):
    engine = build_engine(f"sqlite:///{tmp_path / name}")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _register_default_customer(db) -> Customer:
    return register_customer(
        db, name="Zara Shah", email="Zara@Example.com", phone="03001234567", password="secret123"
    )


def test_customer_email_is_normalized_and_unique(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_customer_unique.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        assert customer.email == "zara@example.com"
        assert get_customer_by_email(db, " ZARA@example.com ").id == customer.id

        with pytest.raises(ConstraintViolation):
            register_customer(db, name="Other", email="zara@example.com", phone="03007654321", password="pw12345")
        assert len(db.scalars(select(Customer)).all()) == 1


def test_customer_password_is_hashed(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_password.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        assert customer.password_hash != "secret123"
        assert verify_password("secret123", customer.password_hash)
        assert not verify_password("wrong", customer.password_hash)


def test_empty_password_cannot_be_hashed() -> None:
    with pytest.raises(ValueError):
        get_password_hash("")


@pytest.mark.parametrize("password", ["", "   "])
def test_blank_password_is_a_constraint_violation(tmp_path: Path, password: str) -> None:
    session_local = _build_session_local(tmp_path, f"store_blank_password_{len(password)}.db")

    with session_local() as db:
        with pytest.raises(ConstraintViolation):
            register_customer(db, name="Blank", email="blank@example.com", phone="03001234567", password=password)
        assert db.scalars(select(Customer)).all() == []


@pytest.mark.parametrize("phone", ["12345", "0300123456789012"])
def test_phone_length_is_enforced(tmp_path: Path, phone: str) -> None:
    session_local = _build_session_local(tmp_path, f"store_phone_{len(phone)}.db")

    with session_local() as db:
        with pytest.raises(ConstraintViolation):
            register_customer(db, name="Short", email="short@example.com", phone=phone, password="secret123")
        with pytest.raises(ConstraintViolation):
            register_rider(db, name="Short", email="rider@example.com", phone=phone, vehicle_type="Bike")


def test_invalid_email_is_rejected(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_email.db")

    with session_local() as db:
        with pytest.raises(ConstraintViolation):
            register_restaurant(db, name="Nowhere", location="Lahore", email="not-an-email")


def test_rider_vehicle_type_must_be_known(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_vehicle.db")

    with session_local() as db:
        with pytest.raises(ConstraintViolation):
            register_rider(db, name="Truck", email="truck@example.com", phone="03001234567", vehicle_type="Truck")
        rider = register_rider(db, name="Biker", email="biker@example.com", phone="03001234567", vehicle_type="Car")
        assert get_rider(db, rider.id).is_available is True
        with pytest.raises(NotFound):
            get_rider(db, rider.id + 1)


def test_new_default_address_replaces_previous(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_address.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        first = add_address(db, customer.id, street="1 Main", city="Lahore", postal_code="54000", is_default=True)
        assert first.country == "Pakistan"
        second = add_address(
            db, customer.id, street="2 Side", city="Multan", postal_code="60000", country="PK", is_default=True
        )

        defaults = db.scalars(select(Address).where(Address.customer_id == customer.id, Address.is_default.is_(True)))
        assert [address.id for address in defaults] == [second.id]
        assert get_default_address(db, customer.id).id == second.id

        with pytest.raises(ReferentialViolation):
            add_address(db, 999, street="3 Lost", city="Quetta", postal_code="87300")


def test_menu_price_must_be_positive_decimal(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_price.db")

    with session_local() as db:
        restaurant = register_restaurant(db, name="Price Check", location="Lahore", email="price@example.com")
        category = add_category(db, restaurant.id, "Mains")
        for bad_price in (Decimal("0"), Decimal("-1.00"), 4.5, "abc"):
            with pytest.raises(ConstraintViolation):
                add_menu_item(db, category.id, name="Bad", price=bad_price)

        item = add_menu_item(db, category.id, name="Kebab", price="7.5")
        assert get_menu_item(db, item.id).price == Decimal("7.50")

        with pytest.raises(ReferentialViolation):
            add_category(db, 999, "Ghost")
        with pytest.raises(ReferentialViolation):
            add_menu_item(db, 999, name="Ghost", price=Decimal("1.00"))


def test_create_order_checks_references(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_order_refs.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        other = register_customer(db, name="Other", email="other@example.com", phone="03007654321", password="pw1234")
        address = add_address(db, customer.id, street="1 Main", city="Lahore", postal_code="54000")
        foreign_address = add_address(db, other.id, street="9 Else", city="Lahore", postal_code="54000")
        restaurant = register_restaurant(db, name="Refs", location="Lahore", email="refs@example.com")

        with pytest.raises(ReferentialViolation):
            create_order(db, 999, restaurant.id, address.id)
        with pytest.raises(ReferentialViolation):
            create_order(db, customer.id, 999, address.id)
        with pytest.raises(ReferentialViolation):
            create_order(db, customer.id, restaurant.id, 999)
        with pytest.raises(ReferentialViolation):
            create_order(db, customer.id, restaurant.id, foreign_address.id)

        set_restaurant_active(db, restaurant.id, False)
        assert list_active_restaurants(db) == []
        with pytest.raises(ConstraintViolation):
            create_order(db, customer.id, restaurant.id, address.id)


def test_database_constraints_are_translated(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_db_checks.db")

    with session_local() as db:
        restaurant = register_restaurant(db, name="Direct", location="Lahore", email="direct@example.com")
        category = add_category(db, restaurant.id, "Mains")

        with pytest.raises(ConstraintViolation):
            with UnitOfWork(db):
                db.add(MenuItem(category_id=category.id, name="Free", price=Decimal("0.00")))

        with pytest.raises(ReferentialViolation):
            with UnitOfWork(db):
                db.add(MenuItem(category_id=4242, name="Orphan", price=Decimal("3.00")))

        with pytest.raises(ReferentialViolation):
            with UnitOfWork(db):
                db.add(OrderItem(order_id=4242, menu_item_id=4242, quantity=1, unit_price=Decimal("1.00")))

        assert db.scalars(select(MenuItem)).all() == []


def test_review_rating_range(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_reviews.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        restaurant = register_restaurant(db, name="Rated", location="Lahore", email="rated@example.com")
        for bad_rating in (0, 6, True):
            with pytest.raises(ConstraintViolation):
                submit_review(db, customer.id, restaurant.id, bad_rating)

        review = submit_review(db, customer.id, restaurant.id, 5, "Excellent nihari")
        assert review.review_date is not None
        with pytest.raises(ReferentialViolation):
            submit_review(db, customer.id, 999, 4)
        assert len(db.scalars(select(Review)).all()) == 1


def test_payment_defaults_to_order_total_and_is_unique(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "store_payment.db")

    with session_local() as db:
        customer = _register_default_customer(db)
        address = add_address(db, customer.id, street="1 Main", city="Lahore", postal_code="54000")
        restaurant = register_restaurant(db, name="Payable", location="Lahore", email="pay@example.com")
        category = add_category(db, restaurant.id, "Mains")
        item = add_menu_item(db, category.id, name="Pulao", price=Decimal("12.00"))
        order = create_order(db, customer.id, restaurant.id, address.id)

        with pytest.raises(ConstraintViolation):
            record_payment(db, order.id, method="JazzCash")

        add_order_item(db, order.id, item.id, 2)
        with pytest.raises(ConstraintViolation):
            record_payment(db, order.id, method="Bitcoin")

        payment = record_payment(db, order.id, method="Cash on Delivery")
        assert payment.amount == Decimal("24.00")
        assert payment.status == "Paid"

        with pytest.raises(ConstraintViolation):
            record_payment(db, order.id, method="PayPal")
        with pytest.raises(NotFound):
            record_payment(db, 999, method="PayPal")
        assert len(db.scalars(select(Payment)).all()) == 1
