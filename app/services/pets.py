"""Pet lifecycle operations scoped to a resolved petshop.

Every function receives the petshop already resolved from the request
headers and raises ``PetNotFoundError`` when the pet id does not belong to
it.
"""
from typing import List

from app.core.errors import PetNotFoundError
from app.core.logging import get_logger
from app.domain.petshop import Pet, PetInput, Petshop
from app.infrastructure.store import PetshopStore


def _logger(petshop: Petshop):
    return get_logger(__name__, {"petshop_id": petshop.id})


def register_pet(store: PetshopStore, petshop: Petshop, data: PetInput) -> Pet:
    """Create an unvaccinated pet and append it to the petshop."""
    pet = Pet(
        name=data.name,
        type=data.type,
        description=data.description,
        deadline_vaccination=data.deadline_vaccination,
    )
    store.add_pet(petshop, pet)

    _logger(petshop).info(f"Pet registered: {pet.name}", extra={"pet_id": pet.id})
    return pet


def list_pets(store: PetshopStore, petshop: Petshop) -> List[Pet]:
    return store.list_pets(petshop)


def update_pet(store: PetshopStore, petshop: Petshop, pet_id: str, data: PetInput) -> Pet:
    """Replace name, type, description and vaccination deadline.

    ``vaccinated`` and ``created_at`` are left untouched.
    """
    def apply(pet: Pet) -> None:
        pet.name = data.name
        pet.type = data.type
        pet.description = data.description
        pet.deadline_vaccination = data.deadline_vaccination

    pet = store.update_pet(petshop, pet_id, apply)
    if pet is None:
        _raise_missing(petshop, pet_id)

    _logger(petshop).info(f"Pet updated: {pet_id}", extra={"pet_id": pet_id})
    return pet


def mark_vaccinated(store: PetshopStore, petshop: Petshop, pet_id: str) -> Pet:
    """Set ``vaccinated`` to True. Calling it again is a no-op."""
    def apply(pet: Pet) -> None:
        pet.vaccinated = True

    pet = store.update_pet(petshop, pet_id, apply)
    if pet is None:
        _raise_missing(petshop, pet_id)

    _logger(petshop).info(f"Pet vaccinated: {pet_id}", extra={"pet_id": pet_id})
    return pet


def delete_pet(store: PetshopStore, petshop: Petshop, pet_id: str) -> List[Pet]:
    """Remove a pet and return the petshop's remaining pets."""
    remaining = store.remove_pet(petshop, pet_id)
    if remaining is None:
        _raise_missing(petshop, pet_id)

    _logger(petshop).info(f"Pet deleted: {pet_id}", extra={"pet_id": pet_id})
    return remaining


def _raise_missing(petshop: Petshop, pet_id: str) -> None:
    _logger(petshop).warning(f"Pet not found: {pet_id}", extra={"pet_id": pet_id})
    raise PetNotFoundError(pet_id)
