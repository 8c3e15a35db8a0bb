"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from fooddelivery.models import customer as _customer  # noqa: E402,F401
from fooddelivery.models import menu as _menu  # noqa: E402,F401
from fooddelivery.models import order as _order  # noqa: E402,F401
from fooddelivery.models import payment as _payment  # noqa: E402,F401
from fooddelivery.models import restaurant as _restaurant  # noqa: E402,F401
from fooddelivery.models import review as _review  # noqa: E402,F401
from fooddelivery.models import rider as _rider  # noqa: E402,F401
