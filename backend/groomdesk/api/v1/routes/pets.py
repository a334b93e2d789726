"""Module: pets."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import customer_session, get_db, parse_uuid
from groomdesk.core.access import SessionContext
from groomdesk.services import pets as pet_service

router = APIRouter()


class PetPayload(BaseModel):
    name: str
    species: str
    breed: str | None = None
    age: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    notes: str | None = None


# -------------------------
# Endpoints
# -------------------------

@router.get("", summary="List the caller's pets (newest first)")
def list_pets(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    return pet_service.list_pets(db, ctx)


@router.post("", status_code=201, summary="Add a pet")
def create_pet(
    payload: PetPayload,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    return pet_service.create_pet(db, ctx, **payload.model_dump())


@router.get("/{pet_id}", summary="Get pet detail")
def get_pet(pet_id: str, ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    pet = pet_service.get_owned_pet(db, ctx, parse_uuid(pet_id, "pet_id"))
    return pet_service.format_pet(pet)


@router.put("/{pet_id}", summary="Update pet details")
def update_pet(
    pet_id: str,
    payload: PetPayload,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    return pet_service.update_pet(db, ctx, parse_uuid(pet_id, "pet_id"), **payload.model_dump())


@router.delete("/{pet_id}", status_code=204, summary="Delete a pet")
def delete_pet(pet_id: str, ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    pet_service.delete_pet(db, ctx, parse_uuid(pet_id, "pet_id"))
