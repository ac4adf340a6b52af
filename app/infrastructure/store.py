"""In-memory storage for petshops and their pets.

The store is an owned object: the application creates one instance at
startup and hands it to the routes through ``app.state``. Nothing is
persisted; data is lost when the process exits.

Route handlers run in a worker threadpool, so registration is serialized by
a store-wide lock and every pet read/write goes through a per-petshop lock.
"""
import threading
from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from fastapi import Request

from app.core.logging import get_logger
from app.domain.petshop import Pet, Petshop

logger = get_logger(__name__)


class PetshopStore:
    """Ordered collection of petshops, keyed by CNPJ.

    Example:
        >>> store = PetshopStore()
        >>> shop = store.add_petshop(Petshop(name="Bicho Feliz", cnpj="11.222.333/0001-44"))
        >>> store.get_by_cnpj("11.222.333/0001-44") is shop
        True
    """

    def __init__(self):
        self._petshops: "OrderedDict[str, Petshop]" = OrderedDict()
        self._lock = threading.Lock()
        self._pet_locks: Dict[str, threading.RLock] = {}

    def __len__(self) -> int:
        return len(self._petshops)

    def _pet_lock(self, petshop: Petshop) -> threading.RLock:
        with self._lock:
            return self._pet_locks.setdefault(petshop.id, threading.RLock())

    # -----------------
    # PETSHOPS
    # -----------------

    def get_by_cnpj(self, cnpj: str) -> Optional[Petshop]:
        """Exact, case-sensitive lookup by CNPJ."""
        with self._lock:
            return self._petshops.get(cnpj)

    def add_petshop(self, petshop: Petshop) -> Optional[Petshop]:
        """Insert a petshop unless its CNPJ is taken.

        The uniqueness check and the insertion happen under one lock.

        Returns:
            The stored petshop, or None if the CNPJ already exists
        """
        with self._lock:
            if petshop.cnpj in self._petshops:
                return None
            self._petshops[petshop.cnpj] = petshop
            self._pet_locks[petshop.id] = threading.RLock()

        logger.debug(f"Petshop stored: {petshop.id}", extra={"petshop_id": petshop.id})
        return petshop

    # -----------------
    # PETS
    # -----------------

    def list_pets(self, petshop: Petshop) -> List[Pet]:
        """Snapshot of the petshop's pets, in registration order."""
        with self._pet_lock(petshop):
            return list(petshop.pets)

    def add_pet(self, petshop: Petshop, pet: Pet) -> Pet:
        with self._pet_lock(petshop):
            petshop.pets.append(pet)
        return pet

    def find_pet(self, petshop: Petshop, pet_id: str) -> Optional[Pet]:
        """Linear search for a pet by id within one petshop."""
        with self._pet_lock(petshop):
            return next((pet for pet in petshop.pets if pet.id == pet_id), None)

    def update_pet(
        self,
        petshop: Petshop,
        pet_id: str,
        apply: Callable[[Pet], None]
    ) -> Optional[Pet]:
        """Apply an in-place change to a pet while holding the petshop lock.

        Args:
            petshop: Owning petshop
            pet_id: Pet identifier
            apply: Callable mutating the pet

        Returns:
            The updated pet, or None if no pet has that id
        """
        with self._pet_lock(petshop):
            pet = self.find_pet(petshop, pet_id)
            if pet is None:
                return None
            apply(pet)
            return pet

    def remove_pet(self, petshop: Petshop, pet_id: str) -> Optional[List[Pet]]:
        """Remove one pet, keeping the order of the others.

        Returns:
            Snapshot of the remaining pets, or None if no pet has that id
        """
        with self._pet_lock(petshop):
            pet = self.find_pet(petshop, pet_id)
            if pet is None:
                return None
            petshop.pets.remove(pet)
            return list(petshop.pets)


def get_store(request: Request) -> PetshopStore:
    """FastAPI dependency returning the store owned by the running app."""
    return request.app.state.store
