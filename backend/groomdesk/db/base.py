"""Module: base."""

from sqlalchemy.orm import DeclarativeBase


# Every GroomDesk table registers here; create_all and Alembic autogenerate both read Base.metadata.
class Base(DeclarativeBase):
    pass
