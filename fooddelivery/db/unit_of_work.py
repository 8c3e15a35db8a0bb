"""Atomic unit of work with explicit before-commit hooks.

A unit of work wraps one SQLAlchemy transaction. The primary mutation runs in
the ``with`` body; derived updates (order totals, rider availability) are
registered with :meth:`UnitOfWork.before_commit` and run right before the
flush and commit. Any failure rolls the whole unit back, so the primary write
and its derived updates land together or not at all.

Writers serialize per order and per rider through :mod:`fooddelivery.db.locks`.
Locks are always taken order first, then rider.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import ExitStack
from types import TracebackType

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from fooddelivery.core.config import settings
from fooddelivery.core.errors import (
    ConcurrentConflict,
    ConstraintViolation,
    DeliveryError,
    ReferentialViolation,
)
from fooddelivery.db.locks import order_locks, rider_locks

logger = logging.getLogger(__name__)

SERIALIZATION_PGCODES: frozenset[str] = frozenset({"40001", "40P01"})


def translate_db_error(exc: SQLAlchemyError) -> DeliveryError | None:
    """Map a database error to the matching domain error, if there is one."""
    if isinstance(exc, StaleDataError):
        return ConcurrentConflict("Row was modified by a concurrent operation; retry the operation.")

    detail = str(getattr(exc, "orig", exc))
    lowered = detail.lower()
    if isinstance(exc, IntegrityError):
        if "foreign key" in lowered:
            return ReferentialViolation(f"Reference check failed: {detail}")
        return ConstraintViolation(f"Constraint check failed: {detail}")

    if isinstance(exc, OperationalError):
        pgcode = getattr(getattr(exc, "orig", None), "pgcode", None)
        if pgcode in SERIALIZATION_PGCODES or "database is locked" in lowered or "deadlock" in lowered:
            return ConcurrentConflict(f"Concurrent write detected: {detail}")
    return None


class UnitOfWork:
    """Context manager committing one atomic operation on ``db``."""

    def __init__(self, db: Session, *, lock_timeout: float | None = None) -> None:
        self.db = db
        self.lock_timeout = settings.lock_timeout_seconds if lock_timeout is None else lock_timeout
        self._hooks: list[Callable[[], None]] = []
        self._held = ExitStack()
        self._order_ids: set[int] = set()
        self._rider_ids: set[int] = set()

    def __enter__(self) -> UnitOfWork:
        return self

    def lock_order(self, order_id: int) -> None:
        """Serialize this unit against other writers of the same order."""
        if order_id in self._order_ids:
            return
        if self._rider_ids:
            raise RuntimeError("Order locks must be taken before rider locks.")
        self._held.enter_context(order_locks.hold(order_id, self.lock_timeout))
        self._order_ids.add(order_id)

    def lock_rider(self, rider_id: int) -> None:
        """Serialize this unit against other writers of the same rider."""
        if rider_id in self._rider_ids:
            return
        self._held.enter_context(rider_locks.hold(rider_id, self.lock_timeout))
        self._rider_ids.add(rider_id)

    def before_commit(self, hook: Callable[[], None]) -> None:
        """Register a derived update that must commit with the primary write."""
        self._hooks.append(hook)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        try:
            if exc is not None:
                self.db.rollback()
                if isinstance(exc, SQLAlchemyError):
                    translated = translate_db_error(exc)
                    if translated is not None:
                        raise translated from exc
                return False
            self._commit()
        finally:
            self._held.close()
        return False

    def _commit(self) -> None:
        try:
            for hook in self._hooks:
                hook()
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            translated = translate_db_error(exc)
            if translated is None:
                raise
            logger.info("[UOW] Rolled back: %s", translated.message)
            raise translated from exc
        except BaseException:
            self.db.rollback()
            raise
