"""Integration tests for API routes."""
from unittest.mock import patch

from fastapi import status
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.infrastructure.store import PetshopStore


class TestPetshopRoutes:
    """Test petshop registration endpoint."""

    def test_create_petshop(self, test_client, store):
        response = test_client.post(
            "/petshops",
            json={"name": "Patas", "cnpj": "98.765.432/0001-10"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Patas"
        assert data["cnpj"] == "98.765.432/0001-10"
        assert data["pets"] == []
        assert data["id"]
        assert len(store) == 1

    def test_create_petshop_invalid_cnpj(self, test_client, store):
        response = test_client.post(
            "/petshops",
            json={"name": "Patas", "cnpj": "98.765.432/0002-10"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "error": "O CNPJ informado não está no formato correto (XX.XXX.XXX/0001-XX)."
        }
        assert len(store) == 0

    def test_create_petshop_non_ascii_digits(self, test_client, store):
        response = test_client.post(
            "/petshops",
            json={"name": "Patas", "cnpj": "١١.٢٢٢.٣٣٣/0001-٤٤"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "formato correto" in response.json()["error"]
        assert len(store) == 0

    def test_create_petshop_duplicate(self, test_client, store, petshop):
        response = test_client.post(
            "/petshops",
            json={"name": "Outro", "cnpj": petshop.cnpj}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Já existe um petshop com o CNPJ informado."}
        assert len(store) == 1

    def test_create_petshop_missing_field(self, test_client, store):
        response = test_client.post("/petshops", json={"name": "Patas"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error"] == "Dados da requisição inválidos."
        assert any(d["field"].endswith("cnpj") for d in data["details"])
        assert len(store) == 0


class TestAccountResolution:
    """Test header-based petshop resolution on pet routes."""

    def test_missing_cnpj_header(self, test_client):
        response = test_client.get("/pets", headers={"username": "maria"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Informe o CNPJ no header da requisição corretamente."}

    def test_missing_username_header(self, test_client, petshop):
        response = test_client.get("/pets", headers={"cnpj": petshop.cnpj})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Informe o username no header da requisição corretamente."}

    def test_invalid_cnpj_header(self, test_client):
        response = test_client.get("/pets", headers={"cnpj": "112223330001-44", "username": "maria"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "formato correto" in response.json()["error"]

    def test_unknown_petshop(self, test_client):
        response = test_client.get(
            "/pets",
            headers={"cnpj": "55.666.777/0001-88", "username": "maria"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        error = response.json()["error"]
        assert "maria" in error
        assert "55.666.777/0001-88" in error

    def test_header_checked_before_body(self, test_client):
        response = test_client.post("/pets", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Informe o CNPJ no header da requisição corretamente."}

    def test_username_not_required(self, store, petshop):
        client = TestClient(_create_app(store, Settings(ENVIRONMENT="test", REQUIRE_USERNAME=False)))

        response = client.get("/pets", headers={"cnpj": petshop.cnpj})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []


class TestPetRoutes:
    """Test pet CRUD endpoints."""

    def test_create_and_list_pet(self, test_client, petshop, auth_headers, pet_payload):
        created = test_client.post("/pets", json=pet_payload, headers=auth_headers)

        assert created.status_code == status.HTTP_201_CREATED
        pet = created.json()
        assert pet["name"] == "Rex"
        assert pet["vaccinated"] is False
        assert pet["deadline_vaccination"] == "2025-03-10"
        assert "created_at" in pet

        listed = test_client.get("/pets", headers=auth_headers)

        assert listed.status_code == status.HTTP_200_OK
        assert listed.json() == [pet]

    def test_create_pet_invalid_body(self, test_client, petshop, auth_headers, pet_payload):
        pet_payload["deadline_vaccination"] = "not-a-date"

        response = test_client.post("/pets", json=pet_payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert petshop.pets == []

    def test_pets_are_scoped_to_petshop(self, test_client, petshop, auth_headers, pet_payload):
        test_client.post("/petshops", json={"name": "Patas", "cnpj": "98.765.432/0001-10"})
        test_client.post("/pets", json=pet_payload, headers=auth_headers)

        response = test_client.get(
            "/pets",
            headers={"cnpj": "98.765.432/0001-10", "username": "joao"}
        )

        assert response.json() == []

    def test_other_petshop_cannot_touch_pet(self, test_client, petshop, auth_headers, pet_payload):
        pet = test_client.post("/pets", json=pet_payload, headers=auth_headers).json()
        test_client.post("/petshops", json={"name": "Patas", "cnpj": "98.765.432/0001-10"})
        other_headers = {"cnpj": "98.765.432/0001-10", "username": "joao"}

        updated = test_client.put(
            f"/pets/{pet['id']}",
            json=pet_payload | {"name": "Thor"},
            headers=other_headers,
        )
        vaccinated = test_client.patch(f"/pets/{pet['id']}/vaccinated", headers=other_headers)
        deleted = test_client.delete(f"/pets/{pet['id']}", headers=other_headers)

        assert updated.status_code == status.HTTP_404_NOT_FOUND
        assert vaccinated.status_code == status.HTTP_404_NOT_FOUND
        assert deleted.status_code == status.HTTP_404_NOT_FOUND
        assert test_client.get("/pets", headers=auth_headers).json() == [pet]
        assert petshop.pets[0].name == "Rex"
        assert petshop.pets[0].vaccinated is False

    def test_update_pet(self, test_client, petshop, auth_headers, pet_payload):
        pet = test_client.post("/pets", json=pet_payload, headers=auth_headers).json()

        response = test_client.put(
            f"/pets/{pet['id']}",
            json={
                "name": "Thor",
                "type": "cachorro",
                "description": "Pastor alemão",
                "deadline_vaccination": "2026-01-15",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == pet["id"]
        assert data["name"] == "Thor"
        assert data["deadline_vaccination"] == "2026-01-15"
        assert data["vaccinated"] is False
        assert data["created_at"] == pet["created_at"]

    def test_update_missing_pet(self, test_client, petshop, auth_headers, pet_payload):
        test_client.post("/pets", json=pet_payload, headers=auth_headers)

        response = test_client.put("/pets/missing", json=pet_payload | {"name": "Thor"}, headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Não foi possível encontrar o pet informado."}
        assert petshop.pets[0].name == "Rex"

    def test_vaccinate_pet_twice(self, test_client, petshop, auth_headers, pet_payload):
        pet = test_client.post("/pets", json=pet_payload, headers=auth_headers).json()

        first = test_client.patch(f"/pets/{pet['id']}/vaccinated", headers=auth_headers)
        second = test_client.patch(f"/pets/{pet['id']}/vaccinated", headers=auth_headers)

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_200_OK
        assert first.json()["vaccinated"] is True
        assert second.json()["vaccinated"] is True

    def test_vaccinate_missing_pet(self, test_client, petshop, auth_headers):
        response = test_client.patch("/pets/missing/vaccinated", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_pet(self, test_client, petshop, auth_headers, pet_payload):
        ids = [
            test_client.post("/pets", json=pet_payload | {"name": name}, headers=auth_headers).json()["id"]
            for name in ("A", "B", "C")
        ]

        response = test_client.delete(f"/pets/{ids[1]}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.json()] == ["A", "C"]
        assert [p.id for p in petshop.pets] == [ids[0], ids[2]]

    def test_delete_missing_pet(self, test_client, petshop, auth_headers, pet_payload):
        test_client.post("/pets", json=pet_payload, headers=auth_headers)

        response = test_client.delete("/pets/missing", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert len(petshop.pets) == 1


class TestServiceRoutes:
    """Test service info, health and error plumbing."""

    def test_root(self, test_client):
        response = test_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health(self, test_client, petshop):
        response = test_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["checks"]["petshops"] == 1

    def test_request_id_header(self, test_client):
        response = test_client.get("/health")

        assert "X-Request-ID" in response.headers

    def test_unexpected_error_returns_500(self, test_client, petshop, auth_headers):
        with patch("app.services.pets.list_pets", side_effect=RuntimeError("boom")):
            response = test_client.get("/pets", headers=auth_headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["error"] == "Erro interno do servidor."
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_api_prefix(self, store):
        client = TestClient(_create_app(store, Settings(ENVIRONMENT="test", API_PREFIX="/api/v1")))

        response = client.post("/api/v1/petshops", json={"name": "Patas", "cnpj": "98.765.432/0001-10"})

        assert response.status_code == status.HTTP_201_CREATED

    def test_debug_setting(self, store):
        app = _create_app(store, Settings(ENVIRONMENT="test", DEBUG=True))

        assert app.debug is True

    def test_apps_do_not_share_state(self):
        first = TestClient(_create_app(PetshopStore(), Settings(ENVIRONMENT="test")))
        second = TestClient(_create_app(PetshopStore(), Settings(ENVIRONMENT="test")))

        first.post("/petshops", json={"name": "Patas", "cnpj": "98.765.432/0001-10"})
        response = second.post("/petshops", json={"name": "Patas", "cnpj": "98.765.432/0001-10"})

        assert response.status_code == status.HTTP_201_CREATED


def _create_app(store, app_settings):
    from main import create_app
    return create_app(store=store, app_settings=app_settings)
