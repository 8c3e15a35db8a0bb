"""Rider availability follows order assignment and completion."""

from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

from fooddelivery.core.errors import ConstraintViolation, InvalidTransition, ReferentialViolation
from fooddelivery.db.base import Base
from fooddelivery.db.session import build_engine
from fooddelivery.models import Order, Rider
from fooddelivery.services.account_service import add_address, register_customer
from fooddelivery.services.order_service import assign_rider, create_order, update_order_status
from fooddelivery.services.reporting import list_rider_active_orders
from fooddelivery.services.restaurant_service import register_restaurant
from fooddelivery.services.rider_service import list_available_riders, register_rider


def _build_session_local(tmp_path: Path, name: str):
    engine = build_engine(f"sqlite:///{tmp_path / name}")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _seed(session_local, order_count: int = 1) -> dict[str, object]:
    with session_local() as db:
        customer = register_customer(
            db, name="Sana Malik", email="sana@example.com", phone="03331234567", password="secret123"
        )
        address = add_address(db, customer.id, street="3 Gulberg", city="Lahore", postal_code="54660")
        restaurant = register_restaurant(db, name="Chai Point", location="Lahore", email="chai@example.com")
        rider = register_rider(db, name="Usman Rider", email="usman@example.com", phone="03451112222", vehicle_type="Bike")
        order_ids = [create_order(db, customer.id, restaurant.id, address.id).id for _ in range(order_count)]
        return {"rider_id": rider.id, "order_ids": order_ids}


def _rider_available(session_local, rider_id: int) -> bool:
    with session_local() as db:
        return db.get(Rider, rider_id).is_available


def test_assignment_marks_rider_unavailable_and_delivery_frees_them(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_cycle.db")
    ids = _seed(session_local)
    order_id = ids["order_ids"][0]

    with session_local() as db:
        order = assign_rider(db, order_id, ids["rider_id"])
        assert order.rider_id == ids["rider_id"]
    assert _rider_available(session_local, ids["rider_id"]) is False

    with session_local() as db:
        update_order_status(db, order_id, "Out for Delivery")
    assert _rider_available(session_local, ids["rider_id"]) is False

    with session_local() as db:
        update_order_status(db, order_id, "Delivered")
    assert _rider_available(session_local, ids["rider_id"]) is True


def test_cancellation_frees_the_rider(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_cancel.db")
    ids = _seed(session_local)
    order_id = ids["order_ids"][0]

    with session_local() as db:
        assign_rider(db, order_id, ids["rider_id"])
        update_order_status(db, order_id, "Cancelled")

    assert _rider_available(session_local, ids["rider_id"]) is True


def test_rejected_transition_leaves_rider_untouched(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_rejected.db")
    ids = _seed(session_local, order_count=2)
    first, second = ids["order_ids"]

    with session_local() as db:
        assign_rider(db, first, ids["rider_id"])
        update_order_status(db, first, "Delivered")
        assign_rider(db, second, ids["rider_id"])
        assert _rider_available(session_local, ids["rider_id"]) is False

        with pytest.raises(InvalidTransition):
            update_order_status(db, first, "Cancelled")

    assert _rider_available(session_local, ids["rider_id"]) is False


def test_same_status_write_on_finished_order_does_not_free_rider(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_same_status.db")
    ids = _seed(session_local, order_count=2)
    first, second = ids["order_ids"]

    with session_local() as db:
        assign_rider(db, first, ids["rider_id"])
        update_order_status(db, first, "Delivered")
        assign_rider(db, second, ids["rider_id"])
        update_order_status(db, first, "Delivered")

    assert _rider_available(session_local, ids["rider_id"]) is False


def test_unavailable_rider_cannot_take_second_order(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_busy.db")
    ids = _seed(session_local, order_count=2)
    first, second = ids["order_ids"]

    with session_local() as db:
        assign_rider(db, first, ids["rider_id"])
        with pytest.raises(ConstraintViolation):
            assign_rider(db, second, ids["rider_id"])

    with session_local() as db:
        assert db.get(Order, second).rider_id is None


def test_order_with_rider_cannot_be_reassigned(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_reassign.db")
    ids = _seed(session_local)
    order_id = ids["order_ids"][0]

    with session_local() as db:
        other = register_rider(db, name="Hamza", email="hamza@example.com", phone="03009998877", vehicle_type="Car")
        assign_rider(db, order_id, ids["rider_id"])
        with pytest.raises(ConstraintViolation):
            assign_rider(db, order_id, other.id)
        assert db.get(Rider, other.id).is_available is True


def test_terminal_order_cannot_take_a_rider(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_terminal.db")
    ids = _seed(session_local)
    order_id = ids["order_ids"][0]

    with session_local() as db:
        update_order_status(db, order_id, "Cancelled")
        with pytest.raises(ConstraintViolation):
            assign_rider(db, order_id, ids["rider_id"])

    assert _rider_available(session_local, ids["rider_id"]) is True


def test_missing_rider_is_a_referential_violation(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_missing.db")
    ids = _seed(session_local)

    with session_local() as db:
        with pytest.raises(ReferentialViolation):
            assign_rider(db, ids["order_ids"][0], 4242)


def test_active_orders_and_available_riders_reports(tmp_path: Path) -> None:
    session_local = _build_session_local(tmp_path, "rider_reports.db")
    ids = _seed(session_local, order_count=2)
    first, second = ids["order_ids"]

    with session_local() as db:
        assign_rider(db, first, ids["rider_id"])
        assert [order.id for order in list_rider_active_orders(db, ids["rider_id"])] == [first]
        assert list_available_riders(db) == []

        update_order_status(db, first, "Delivered")
        assert list_rider_active_orders(db, ids["rider_id"]) == []
        assert [rider.id for rider in list_available_riders(db)] == [ids["rider_id"]]

        assign_rider(db, second, ids["rider_id"])
        assert [order.id for order in list_rider_active_orders(db, ids["rider_id"])] == [second]
