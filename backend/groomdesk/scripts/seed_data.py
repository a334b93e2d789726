"""Module: seed_data."""

import random
import string
from datetime import date, time, timedelta

from faker import Faker
from sqlalchemy import delete, select

from groomdesk.core.config import settings
from groomdesk.core.enums import AppointmentStatus, PetSpecies, Role, ServiceType
from groomdesk.db.init_db import init_db
from groomdesk.db.session import SessionLocal

from groomdesk.db.models.user import User
from groomdesk.db.models.profile import Profile
from groomdesk.db.models.user_role import UserRole
from groomdesk.db.models.auth_session import AuthSession
from groomdesk.db.models.pet import Pet
from groomdesk.db.models.service import Service
from groomdesk.db.models.groomer import Groomer
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.service_history import ServiceHistory
from groomdesk.db.models.audit_log import AdminAuditLog

from groomdesk.core.security import hash_password, new_loyalty_card_number
from groomdesk.services.appointments import CLOSED_WEEKDAY, TIME_SLOTS, record_completion

fake = Faker()

# (name, category, price_min, price_max, duration_minutes, description)
SERVICE_CATALOG = [
    ("Full Groom", "grooming", 400, 600, 90, "Bath, haircut, nail trim and ear cleaning."),
    ("Bath & Brush", "grooming", 250, 350, 60, "Shampoo, blow-dry and brush-out."),
    ("Nail Trim", "grooming", 100, 150, 15, None),
    ("Ear Cleaning", "grooming", 100, 150, 15, None),
    ("De-shedding Treatment", "grooming", 350, 500, 75, "Undercoat removal for heavy shedders."),
    ("Day Boarding", "boarding", 300, 450, 480, "Supervised daytime stay."),
    ("Overnight Boarding", "boarding", 600, 900, 1440, "Overnight stay with evening walk."),
]

GROOMERS = [
    ("Ana Reyes", "Large breeds"),
    ("Marco Cruz", "Cats and small pets"),
    ("Liza Santos", "Creative cuts"),
    ("Jun Villanueva", None),
]

BREEDS = {
    PetSpecies.DOG: ["Shih Tzu", "Poodle", "Golden Retriever", "Aspin", "Pomeranian"],
    PetSpecies.CAT: ["Persian", "Siamese", "Puspin"],
    PetSpecies.RABBIT: ["Holland Lop", "Lionhead"],
    PetSpecies.BIRD: ["Cockatiel", "Lovebird"],
    PetSpecies.OTHER: [None],
}


# Shared helpers used by multiple seed builders.
def generate_password(length: int = 12) -> str:
    chars = string.ascii_letters + string.digits
    return "".join(random.choice(chars) for _ in range(length))


def reset_db(session) -> None:
    # Children first so foreign keys never block the wipe.
    for model in (
        AdminAuditLog, ServiceHistory, Appointment, Pet, Groomer, Service,
        AuthSession, UserRole, Profile, User,
    ):
        session.execute(delete(model))
    session.commit()


def _create_account(session, email: str, password: str, full_name: str, role: Role) -> User:
    user = User(email=email, password_hash=hash_password(password))
    session.add(user)
    session.flush()
    session.add(
        Profile(
            user_id=user.user_id,
            full_name=full_name,
            phone=fake.phone_number(),
            address=fake.address().replace("\n", ", "),
            loyalty_card_number=new_loyalty_card_number(settings.loyalty_card_prefix),
            loyalty_points=0,
        )
    )
    session.add(UserRole(user_id=user.user_id, role=role.value))
    return user


def seed_admin(session) -> User:
    admin = _create_account(
        session, settings.admin_email, settings.admin_password, "Shop Administrator", Role.ADMIN
    )
    session.commit()
    return admin


def seed_services(session) -> list[Service]:
    services = []
    for name, category, price_min, price_max, duration, description in SERVICE_CATALOG:
        service = Service(
            name=name,
            category=category,
            price_min=price_min,
            price_max=price_max,
            duration_minutes=duration,
            description=description,
            is_active=True,
        )
        session.add(service)
        services.append(service)
    session.commit()
    return services


def seed_groomers(session) -> list[Groomer]:
    groomers = [Groomer(name=name, specialty=specialty, is_available=True) for name, specialty in GROOMERS]
    session.add_all(groomers)
    session.commit()
    return groomers


def seed_customers(session, n: int) -> list[tuple[User, str]]:
    customers = []
    for _ in range(n):
        email = fake.unique.email().lower()
        password = generate_password()
        user = _create_account(session, email, password, fake.name(), Role.CUSTOMER)
        customers.append((user, password))
    session.commit()
    return customers


def seed_pets(session, customers) -> list[Pet]:
    pets = []
    for user, _ in customers:
        for _ in range(random.randint(1, 3)):
            species = random.choice(list(PetSpecies))
            pet = Pet(
                owner_id=user.user_id,
                name=fake.first_name(),
                species=species.value,
                breed=random.choice(BREEDS[species]),
                age=random.randint(0, 15),
                weight=round(random.uniform(0.5, 35.0), 1),
                notes=None,
            )
            session.add(pet)
            pets.append(pet)
    session.commit()
    return pets


def seed_appointment(session, pet, service, groomer, day: date, slot: str, status: AppointmentStatus) -> Appointment:
    hour, minute = (int(p) for p in slot.split(":"))
    appointment = Appointment(
        customer_id=pet.owner_id,
        pet_id=pet.pet_id,
        service_id=service.service_id,
        groomer_id=groomer.groomer_id if groomer else None,
        service_type=random.choice(list(ServiceType)).value,
        appointment_date=day,
        start_time=time(hour, minute),
        status=status.value,
        total_price=service.price_min,
        discount_applied=0,
    )
    session.add(appointment)
    session.flush()
    # Completed visits get the same history row and loyalty credit as an admin completion.
    if status == AppointmentStatus.COMPLETED:
        record_completion(session, appointment)
    return appointment


def seed_appointments(session, pets, services, groomers) -> int:
    # Past bookings end completed/cancelled, future ones stay open.
    today = date.today()
    count = 0
    for pet in pets:
        for _ in range(random.randint(0, 2)):
            offset = random.randint(-60, 30)
            day = today + timedelta(days=offset)
            if day.weekday() == CLOSED_WEEKDAY:
                day += timedelta(days=1)
            if day < today:
                status = random.choice([AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED])
            else:
                status = random.choice([AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED])
            seed_appointment(
                session,
                pet,
                random.choice(services),
                random.choice(groomers) if random.random() < 0.8 else None,
                day,
                random.choice(TIME_SLOTS),
                status,
            )
            count += 1
    session.commit()
    return count


if __name__ == "__main__":
    # Full reseed pipeline: python -m groomdesk.scripts.seed_data
    init_db()
    session = SessionLocal()
    try:
        print("Resetting tables...")
        reset_db(session)

        print("Seeding admin account...")
        seed_admin(session)

        print("Seeding services...")
        services = seed_services(session)

        print("Seeding groomers...")
        groomers = seed_groomers(session)

        print("Seeding customers (25)...")
        customers = seed_customers(session, 25)

        print("Seeding pets...")
        pets = seed_pets(session, customers)

        print("Seeding appointments...")
        appointment_n = seed_appointments(session, pets, services, groomers)

        accounts = session.execute(select(User.user_id)).scalars().all()
        print(
            f"Done. accounts={len(accounts)}, services={len(services)}, groomers={len(groomers)}, "
            f"pets={len(pets)}, appointments={appointment_n}"
        )
        print(f"Admin login: {settings.admin_email}")
    finally:
        session.close()
