"""Module: store."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from groomdesk.core.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def committing(db: Session, action: str) -> Iterator[Session]:
    """Commit the unit of work, or roll back and raise one generic StoreError."""
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store write failed: %s", action)
        raise StoreError(f"Failed to {action}") from exc
