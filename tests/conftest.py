"""Pytest configuration and shared fixtures."""
import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.domain.petshop import Petshop, PetInput
from app.infrastructure.store import PetshopStore


VALID_CNPJ = "11.222.333/0001-44"
OTHER_CNPJ = "55.666.777/0001-88"


@pytest.fixture
def store():
    """Fresh, empty store for each test."""
    return PetshopStore()


@pytest.fixture
def petshop(store):
    """Petshop registered in the test store."""
    return store.add_petshop(Petshop(name="Bicho Feliz", cnpj=VALID_CNPJ))


@pytest.fixture
def pet_input():
    """Valid pet payload."""
    return PetInput(
        name="Rex",
        type="cachorro",
        description="Vira-lata caramelo",
        deadline_vaccination="2025-03-10",
    )


@pytest.fixture
def test_settings():
    """Settings with the username header required."""
    return Settings(ENVIRONMENT="test", REQUIRE_USERNAME=True)


@pytest.fixture
def test_client(store, test_settings):
    """FastAPI test client bound to the test store."""
    from main import create_app
    return TestClient(create_app(store=store, app_settings=test_settings))


@pytest.fixture
def auth_headers():
    """Headers identifying the fixture petshop."""
    return {"cnpj": VALID_CNPJ, "username": "maria"}


@pytest.fixture
def pet_payload():
    """Valid pet request body."""
    return {
        "name": "Rex",
        "type": "cachorro",
        "description": "Vira-lata caramelo",
        "deadline_vaccination": "2025-03-10",
    }
