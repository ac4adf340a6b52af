"""Domain models for petshops and their pets."""
import re
import uuid
from datetime import date, datetime, timezone
from typing import List
from pydantic import BaseModel, Field


CNPJ_PATTERN = re.compile(r"^[0-9]{2}\.[0-9]{3}\.[0-9]{3}/0001-[0-9]{2}$")


def is_cnpj_format_valid(cnpj: object) -> bool:
    """Check a CNPJ against the XX.XXX.XXX/0001-XX layout.

    Only ASCII digits count. Verification digits are not validated.

    Examples:
        >>> is_cnpj_format_valid("11.222.333/0001-44")
        True
        >>> is_cnpj_format_valid("11.222.333/0002-44")
        False
    """
    if not isinstance(cnpj, str):
        return False
    return CNPJ_PATTERN.fullmatch(cnpj) is not None


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pet(BaseModel):
    """A pet owned by exactly one petshop.

    Attributes:
        id: Unique identifier within the owning petshop
        name: Pet name
        type: Free-form species or category
        description: Free-form description
        vaccinated: Whether the pet was vaccinated (only ever set to True)
        deadline_vaccination: Vaccination due date
        created_at: Registration timestamp (UTC)
    """
    id: str = Field(default_factory=new_id)
    name: str
    type: str
    description: str
    vaccinated: bool = False
    deadline_vaccination: date
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        validate_assignment = True


class Petshop(BaseModel):
    """A petshop account, identified by its CNPJ.

    Attributes:
        id: Unique identifier generated at registration
        name: Petshop name
        cnpj: Brazilian tax id, unique across all petshops
        pets: Pets owned by the shop, in registration order
    """
    id: str = Field(default_factory=new_id)
    name: str
    cnpj: str
    pets: List[Pet] = Field(default_factory=list)


class PetshopCreate(BaseModel):
    """Petshop registration request body."""
    name: str
    cnpj: str

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Bicho Feliz",
                "cnpj": "11.222.333/0001-44"
            }
        }


class PetInput(BaseModel):
    """Pet fields accepted on registration and on full update."""
    name: str
    type: str
    description: str
    deadline_vaccination: date

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Rex",
                "type": "cachorro",
                "description": "Vira-lata caramelo",
                "deadline_vaccination": "2025-03-10"
            }
        }
