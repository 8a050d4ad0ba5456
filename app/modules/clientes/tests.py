"""
Tests para el módulo de Clientes
"""

from uuid import uuid4

import pytest
from fastapi import HTTPException

from app.modules.auth.models import User
from app.modules.clientes.models import Cliente
from app.modules.clientes.schemas import ClienteCreate
from app.modules.clientes.service import ClienteService


def crear_cliente(client, headers, **overrides):
    payload = {"nombre": "Cliente de Prueba", "nit": "1020304050", "tipo": "natural"}
    payload.update(overrides)
    return client.post("/api/clientes", json=payload, headers=headers)


class TestCreateCliente:

    def test_create_cliente(self, client, auth_headers):
        response = crear_cliente(
            client, auth_headers,
            nombre="María Pérez", nit="52123456", email="maria@example.com", telefono="3157654321"
        )
        assert response.status_code == 201
        data = response.json()
        assert data["nombre"] == "María Pérez"
        assert data["nit"] == "52123456"
        assert data["tipo"] == "natural"
        assert data["email"] == "maria@example.com"
        assert "userId" in data
        assert "createdAt" in data

    def test_tipo_defaults_to_natural(self, client, auth_headers):
        response = client.post("/api/clientes", json={"nombre": "Sin Tipo", "nit": "111"}, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["tipo"] == "natural"

    def test_duplicate_nit_rejected(self, client, auth_headers, cliente):
        response = crear_cliente(client, auth_headers, nombre="Otro nombre", nit=cliente["nit"])
        assert response.status_code == 400
        assert response.json()["detail"] == "Ya existe un cliente con este NIT"

    def test_duplicate_nit_ignores_surrounding_spaces(self, client, auth_headers, cliente):
        response = crear_cliente(client, auth_headers, nit=f"  {cliente['nit']} ")
        assert response.status_code == 400

    def test_same_nit_allowed_for_other_user(self, client, other_headers, cliente):
        response = crear_cliente(client, other_headers, nit=cliente["nit"])
        assert response.status_code == 201

    def test_invalid_email(self, client, auth_headers):
        response = crear_cliente(client, auth_headers, email="no-es-email")
        assert response.status_code == 400

    def test_invalid_tipo(self, client, auth_headers):
        response = crear_cliente(client, auth_headers, tipo="empresa")
        assert response.status_code == 400

    def test_missing_nombre(self, client, auth_headers):
        response = client.post("/api/clientes", json={"nit": "123"}, headers=auth_headers)
        assert response.status_code == 400
        assert "detail" in response.json()


class TestListClientes:

    def test_sorted_by_nombre(self, client, auth_headers):
        for nombre, nit in [("Zapatería Luna", "1"), ("Almacén Sol", "2"), ("Mercado Estrella", "3")]:
            crear_cliente(client, auth_headers, nombre=nombre, nit=nit)

        response = client.get("/api/clientes", headers=auth_headers)
        assert response.status_code == 200
        nombres = [c["nombre"] for c in response.json()]
        assert nombres == ["Almacén Sol", "Mercado Estrella", "Zapatería Luna"]

    def test_scoped_by_user(self, client, auth_headers, other_headers, cliente):
        response = client.get("/api/clientes", headers=other_headers)
        assert response.status_code == 200
        assert response.json() == []


class TestGetCliente:

    def test_get_by_id(self, client, auth_headers, cliente):
        response = client.get(f"/api/clientes/{cliente['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["nit"] == cliente["nit"]

    def test_unknown_id(self, client, auth_headers):
        response = client.get(f"/api/clientes/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_foreign_id_is_not_found(self, client, other_headers, cliente):
        response = client.get(f"/api/clientes/{cliente['id']}", headers=other_headers)
        assert response.status_code == 404


class TestSearchClientes:

    def test_search_by_nombre_nit_and_email(self, client, auth_headers, cliente):
        for q in ["tornillo", "900123", "compras@"]:
            response = client.get("/api/clientes/search", params={"q": q}, headers=auth_headers)
            assert response.status_code == 200
            assert [c["id"] for c in response.json()] == [cliente["id"]]

    def test_search_is_case_insensitive(self, client, auth_headers, cliente):
        response = client.get("/api/clientes/search", params={"q": "EL TORNILLO"}, headers=auth_headers)
        assert len(response.json()) == 1

    def test_search_has_no_minimum_length(self, client, auth_headers, cliente):
        response = client.get("/api/clientes/search", params={"q": "9"}, headers=auth_headers)
        assert len(response.json()) == 1

    def test_search_treats_wildcards_literally(self, client, auth_headers, cliente):
        response = client.get("/api/clientes/search", params={"q": "%"}, headers=auth_headers)
        assert response.json() == []

    def test_search_capped_at_10(self, client, auth_headers):
        for i in range(12):
            crear_cliente(client, auth_headers, nombre=f"Distribuidora {i:02d}", nit=f"800{i:03d}")

        response = client.get("/api/clientes/search", params={"q": "distribuidora"}, headers=auth_headers)
        assert len(response.json()) == 10

    def test_search_scoped_by_user(self, client, other_headers, cliente):
        response = client.get("/api/clientes/search", params={"q": "tornillo"}, headers=other_headers)
        assert response.json() == []


class TestClienteServiceConcurrency:

    def test_nit_inserted_after_precheck_is_rejected(self, db_session, monkeypatch):
        """El NIT lo registra otro request entre la verificación y el insert"""
        user = User(username="concurrente", password="x", role="user")
        db_session.add(user)
        db_session.commit()
        db_session.add(Cliente(nombre="Primero", nit="800555111", tipo="natural", user_id=user.id))
        db_session.commit()

        service = ClienteService(db_session)
        monkeypatch.setattr(service, "find_by_nit", lambda user_id, nit: None)

        with pytest.raises(HTTPException) as exc_info:
            service.create_cliente(ClienteCreate(nombre="Segundo", nit="800555111"), user.id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Ya existe un cliente con este NIT"
        assert db_session.query(Cliente).filter(Cliente.user_id == user.id).count() == 1
