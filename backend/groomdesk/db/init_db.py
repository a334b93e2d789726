"""Module: init_db."""

from groomdesk.db.base import Base
from groomdesk.db.session import engine

# Registers every model on Base.metadata before create_all runs.
import groomdesk.db.models  # noqa: F401


def init_db() -> None:
    # Idempotent: existing tables are left untouched; schema changes go through Alembic.
    Base.metadata.create_all(bind=engine)
