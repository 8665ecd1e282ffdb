"""Persistence helpers enforcing the retry policy for store failures.

Idempotent reads are retried once on a transient error; writes are never
retried so a failed vote cannot be applied twice behind the caller's back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from open_court.services.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_with_retry(db: Session, fn: Callable[[], T]) -> T:
    """Run an idempotent read, retrying exactly once on a transient failure."""
    try:
        return fn()
    except OperationalError as exc:
        logger.warning("Transient store error on read, retrying once: %s", exc)
        db.rollback()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError() from exc

    try:
        return fn()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError() from exc


def commit_or_raise(db: Session) -> None:
    """Commit the current transaction, surfacing failures as ``StoreError``."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store commit failed: %s", exc)
        raise StoreError() from exc
