import pytest
from sqlalchemy import select

from groomdesk.core.errors import StoreError
from groomdesk.core.security import hash_password, new_loyalty_card_number, verify_password
from groomdesk.db.models.user import User
from groomdesk.db.session import SessionLocal
from groomdesk.db.store import committing


def test_failed_write_rolls_back_with_generic_error():
    with SessionLocal() as session:
        with committing(session, "create account"):
            session.add(User(email="dup@example.com", password_hash="x"))

        with pytest.raises(StoreError) as info:
            with committing(session, "create account"):
                session.add(User(email="dup@example.com", password_hash="y"))

        assert info.value.detail == "Failed to create account"
        assert info.value.status_code == 500
        emails = session.execute(select(User.email)).scalars().all()
        assert emails == ["dup@example.com"]


def test_password_hashing():
    stored = hash_password("secret123")
    assert stored.startswith("pbkdf2_sha256$")
    assert verify_password("secret123", stored)
    assert not verify_password("secret124", stored)
    assert not verify_password("secret123", "secret123")


def test_loyalty_card_number_format():
    number = new_loyalty_card_number("PG")
    prefix, digits = number.split("-")
    assert prefix == "PG"
    assert len(digits) == 8 and digits.isdigit()
