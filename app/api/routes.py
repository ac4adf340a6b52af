"""FastAPI routes for petshop registration and pet management.

Pet routes depend on ``get_current_petshop``; domain errors raised by the
resolver or the services are turned into ``{"error": ...}`` responses by
the handlers registered in ``main.py``.
"""
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.auth import get_current_petshop
from app.core.logging import get_logger, LogTimer
from app.domain.petshop import Pet, PetInput, Petshop, PetshopCreate
from app.infrastructure.store import PetshopStore, get_store
from app.services import pets as pet_service
from app.services.petshops import register_petshop

logger = get_logger(__name__)
router = APIRouter()


# -----------------
# PETSHOPS
# -----------------

@router.post("/petshops", response_model=Petshop, status_code=status.HTTP_201_CREATED)
def create_petshop(req: PetshopCreate, store: PetshopStore = Depends(get_store)):
    """Register a petshop.

    Example:
        POST /petshops
        {"name": "Bicho Feliz", "cnpj": "11.222.333/0001-44"}
    """
    with LogTimer(logger, "create_petshop"):
        return register_petshop(store, req)


# -----------------
# PETS
# -----------------

@router.post("/pets", response_model=Pet, status_code=status.HTTP_201_CREATED)
def create_pet(
    req: PetInput,
    petshop: Petshop = Depends(get_current_petshop),
    store: PetshopStore = Depends(get_store)
):
    """Register a pet under the petshop identified by the request headers."""
    with LogTimer(logger, "create_pet"):
        return pet_service.register_pet(store, petshop, req)


@router.get("/pets", response_model=List[Pet])
def list_pets(
    petshop: Petshop = Depends(get_current_petshop),
    store: PetshopStore = Depends(get_store)
):
    """List every pet of the petshop, in registration order."""
    return pet_service.list_pets(store, petshop)


@router.put("/pets/{id}", response_model=Pet)
def update_pet(
    id: str,
    req: PetInput,
    petshop: Petshop = Depends(get_current_petshop),
    store: PetshopStore = Depends(get_store)
):
    """Replace a pet's name, type, description and vaccination deadline."""
    with LogTimer(logger, f"update_pet:{id}"):
        return pet_service.update_pet(store, petshop, id, req)


@router.patch("/pets/{id}/vaccinated", response_model=Pet)
def vaccinate_pet(
    id: str,
    petshop: Petshop = Depends(get_current_petshop),
    store: PetshopStore = Depends(get_store)
):
    """Mark a pet as vaccinated."""
    with LogTimer(logger, f"vaccinate_pet:{id}"):
        return pet_service.mark_vaccinated(store, petshop, id)


@router.delete("/pets/{id}", response_model=List[Pet])
def delete_pet(
    id: str,
    petshop: Petshop = Depends(get_current_petshop),
    store: PetshopStore = Depends(get_store)
):
    """Delete a pet and return the pets left in the petshop."""
    with LogTimer(logger, f"delete_pet:{id}"):
        return pet_service.delete_pet(store, petshop, id)
