import os

# Point the app at a private in-memory database before anything imports settings.
os.environ["DATABASE_URL"] = "sqlite://"

import uuid
from datetime import date, time, timedelta

import pytest
from fastapi.testclient import TestClient

import groomdesk.db.models  # noqa: F401
from groomdesk.core.enums import Role
from groomdesk.db.base import Base
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.groomer import Groomer
from groomdesk.db.models.service import Service
from groomdesk.db.session import SessionLocal, engine
from groomdesk.main import app
from groomdesk.services.identity import grant_role

API = "/api/v1"
PASSWORD = "secret123"


def open_day(days_ahead=7):
    """A bookable date at least ``days_ahead`` days out, skipping Sundays."""
    day = date.today() + timedelta(days=days_ahead)
    if day.weekday() == 6:
        day += timedelta(days=1)
    return day


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def register(client):
    """Create a customer account and return its Authorization headers."""

    def _register(email="jamie@example.com", full_name="Jamie Cruz", password=PASSWORD):
        res = client.post(
            f"{API}/auth/register",
            json={"email": email, "password": password, "full_name": full_name},
        )
        assert res.status_code == 201, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _register


@pytest.fixture
def customer_headers(register):
    return register()


@pytest.fixture
def admin_headers(register):
    headers = register(email="admin@groomdesk.test", full_name="Shop Admin")
    with SessionLocal() as session:
        grant_role(session, "admin@groomdesk.test", Role.ADMIN)
    return headers


@pytest.fixture
def make_service():
    def _make(
        name="Full Groom",
        category="grooming",
        price_min=400,
        price_max=600,
        duration_minutes=90,
        is_active=True,
    ):
        with SessionLocal() as session:
            service = Service(
                name=name,
                category=category,
                price_min=price_min,
                price_max=price_max,
                duration_minutes=duration_minutes,
                is_active=is_active,
            )
            session.add(service)
            session.commit()
            return str(service.service_id)

    return _make


@pytest.fixture
def make_groomer():
    def _make(name="Ana Reyes", is_available=True):
        with SessionLocal() as session:
            groomer = Groomer(name=name, specialty="Large breeds", is_available=is_available)
            session.add(groomer)
            session.commit()
            return str(groomer.groomer_id)

    return _make


@pytest.fixture
def make_pet(client):
    def _make(headers, name="Biscuit", species="dog"):
        res = client.post(f"{API}/pets", json={"name": name, "species": species}, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()["id"]

    return _make


@pytest.fixture
def book(client):
    """Book an appointment a week out; extra keyword args override the payload."""

    def _book(headers, pet_id, service_id, **overrides):
        payload = {
            "pet_id": pet_id,
            "service_id": service_id,
            "service_type": "walk-in",
            "appointment_date": open_day().isoformat(),
            "start_time": "10:00",
        }
        payload.update(overrides)
        return client.post(f"{API}/appointments", json=payload, headers=headers)

    return _book


@pytest.fixture
def insert_appointment(client):
    """Write an appointment row directly, for dates the booking endpoint refuses."""

    def _insert(headers, pet_id, service_id, appointment_date, status="pending", total_price=400):
        customer_id = client.get(f"{API}/auth/me", headers=headers).json()["user_id"]
        with SessionLocal() as session:
            appointment = Appointment(
                customer_id=uuid.UUID(customer_id),
                pet_id=uuid.UUID(pet_id),
                service_id=uuid.UUID(service_id),
                service_type="walk-in",
                appointment_date=appointment_date,
                start_time=time(10, 0),
                status=status,
                total_price=total_price,
            )
            session.add(appointment)
            session.commit()
            return str(appointment.appointment_id)

    return _insert
