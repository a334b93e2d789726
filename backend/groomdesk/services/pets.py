"""Module: pets."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from groomdesk.core.access import SessionContext
from groomdesk.core.enums import PetSpecies
from groomdesk.core.errors import Conflict, NotFound, ValidationFailed
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.pet import Pet
from groomdesk.db.store import committing

logger = logging.getLogger(__name__)


def _normalize_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned if cleaned else None


def format_pet(pet: Pet) -> dict:
    return {
        "id": str(pet.pet_id),
        "owner_id": str(pet.owner_id),
        "name": pet.name,
        "species": pet.species,
        "breed": pet.breed,
        "age": pet.age,
        "weight": float(pet.weight) if pet.weight is not None else None,
        "notes": pet.notes,
        "photo_url": pet.photo_url,
        "created_at": pet.created_at,
    }


def _pet_fields(name, species, breed, age, weight, notes) -> dict:
    cleaned_name = (name or "").strip()
    if not cleaned_name:
        raise ValidationFailed("Pet name is required")
    try:
        species_value = PetSpecies(species).value
    except ValueError:
        raise ValidationFailed("Species must be one of: dog, cat, bird, rabbit, other")
    if age is not None and age < 0:
        raise ValidationFailed("Age must not be negative")
    if weight is not None and weight < 0:
        raise ValidationFailed("Weight must not be negative")

    return {
        "name": cleaned_name,
        "species": species_value,
        "breed": _normalize_optional(breed),
        "age": age,
        "weight": weight,
        "notes": _normalize_optional(notes),
    }


def get_owned_pet(db: Session, ctx: SessionContext, pet_id: uuid.UUID) -> Pet:
    pet = db.execute(
        select(Pet).where(Pet.pet_id == pet_id, Pet.owner_id == ctx.user_id)
    ).scalar_one_or_none()
    if not pet:
        raise NotFound("Pet not found")
    return pet


def list_pets(db: Session, ctx: SessionContext) -> list[dict]:
    rows = db.execute(
        select(Pet)
        .where(Pet.owner_id == ctx.user_id)
        .order_by(Pet.created_at.desc())
    ).scalars().all()
    return [format_pet(p) for p in rows]


def create_pet(
    db: Session,
    ctx: SessionContext,
    name: str,
    species: str,
    breed: str | None = None,
    age: int | None = None,
    weight: float | None = None,
    notes: str | None = None,
) -> dict:
    values = _pet_fields(name, species, breed, age, weight, notes)
    with committing(db, "add pet"):
        pet = Pet(owner_id=ctx.user_id, **values)
        db.add(pet)

    db.refresh(pet)
    logger.info("Pet %s added for %s", pet.pet_id, ctx.user_id)
    return format_pet(pet)


def update_pet(
    db: Session,
    ctx: SessionContext,
    pet_id: uuid.UUID,
    name: str,
    species: str,
    breed: str | None = None,
    age: int | None = None,
    weight: float | None = None,
    notes: str | None = None,
) -> dict:
    values = _pet_fields(name, species, breed, age, weight, notes)
    pet = get_owned_pet(db, ctx, pet_id)
    with committing(db, "update pet"):
        for key, value in values.items():
            setattr(pet, key, value)

    db.refresh(pet)
    return format_pet(pet)


def delete_pet(db: Session, ctx: SessionContext, pet_id: uuid.UUID) -> None:
    pet = get_owned_pet(db, ctx, pet_id)
    # Appointments keep their pet reference for history.
    booked = db.execute(select(Appointment.appointment_id).where(Appointment.pet_id == pet_id).limit(1)).first()
    if booked:
        raise Conflict("Pet has appointments and cannot be deleted")

    with committing(db, "delete pet"):
        db.delete(pet)
    logger.info("Pet %s deleted by %s", pet_id, ctx.user_id)
