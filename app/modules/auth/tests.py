"""
Tests para el módulo de autenticación

Cubren registro, login, perfil y la validación del token en rutas protegidas.
"""

import time
from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException

from app.core.config import settings
from app.modules.auth.models import User
from app.modules.auth.utils import (
    hash_password, verify_password, create_access_token, create_user_token, verify_token
)


# ===== TESTS DE UTILIDADES =====

class TestPasswordHashing:

    def test_hash_is_salted(self):
        """Dos hashes de la misma contraseña son distintos (sal aleatoria)"""
        first = hash_password("secreto123")
        second = hash_password("secreto123")
        assert first != second
        assert verify_password("secreto123", first)
        assert verify_password("secreto123", second)

    def test_verify_wrong_password(self):
        hashed = hash_password("secreto123")
        assert not verify_password("otra", hashed)
        assert not verify_password("secreto123", "")


class TestTokens:

    def test_user_token_claims(self):
        token = create_user_token("5f1c7e9a-0000-4000-8000-000000000001", "ana", "contador")
        payload = verify_token(token)
        assert payload["id"] == "5f1c7e9a-0000-4000-8000-000000000001"
        assert payload["username"] == "ana"
        assert payload["role"] == "contador"

    def test_token_expires_in_24_hours(self):
        token = create_user_token("5f1c7e9a-0000-4000-8000-000000000001", "ana", "user")
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM], options={"verify_exp": False})
        lifetime = payload["exp"] - int(time.time())
        assert 23 * 3600 < lifetime <= 24 * 3600

    def test_expired_token_rejected(self):
        token = create_access_token({"id": "x", "username": "ana"}, expires_delta=timedelta(seconds=-10))
        with pytest.raises(HTTPException) as exc_info:
            verify_token(token)
        assert exc_info.value.status_code == 400

    def test_foreign_secret_rejected(self):
        token = jwt.encode({"id": "x", "username": "ana"}, "otro-secreto", algorithm="HS256")
        with pytest.raises(HTTPException) as exc_info:
            verify_token(token)
        assert exc_info.value.status_code == 400


# ===== TESTS DE ENDPOINTS =====

class TestRegister:

    def test_register_returns_decodable_token(self, client):
        response = client.post("/api/register", json={
            "username": "ana", "password": "secreto123", "role": "contador"
        })
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Registro exitoso"
        assert data["user"]["username"] == "ana"
        assert data["user"]["role"] == "contador"

        payload = verify_token(data["token"])
        assert payload["username"] == "ana"
        assert payload["role"] == "contador"
        assert payload["id"] == data["user"]["id"]

    def test_register_default_role(self, client):
        response = client.post("/api/register", json={"username": "beto", "password": "clave"})
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    def test_password_stored_hashed(self, client, db_session):
        client.post("/api/register", json={"username": "ana", "password": "secreto123"})
        user = db_session.query(User).filter(User.username == "ana").first()
        assert user.password != "secreto123"
        assert verify_password("secreto123", user.password)

    def test_register_duplicate_username(self, client):
        client.post("/api/register", json={"username": "ana", "password": "secreto123"})
        response = client.post("/api/register", json={"username": "ana", "password": "otra"})
        assert response.status_code == 400
        assert response.json()["detail"] == "El usuario ya existe"

    def test_register_invalid_role(self, client):
        response = client.post("/api/register", json={
            "username": "ana", "password": "secreto123", "role": "superadmin"
        })
        assert response.status_code == 400

    def test_register_missing_password(self, client):
        response = client.post("/api/register", json={"username": "ana"})
        assert response.status_code == 400


class TestLogin:

    def test_login_success(self, client, register):
        register("ana", password="secreto123")
        response = client.post("/api/login", json={"username": "ana", "password": "secreto123"})
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login exitoso"
        assert verify_token(data["token"])["username"] == "ana"

    def test_login_unknown_user(self, client):
        response = client.post("/api/login", json={"username": "nadie", "password": "x"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Usuario no encontrado"

    def test_login_wrong_password(self, client, register):
        register("ana", password="secreto123")
        response = client.post("/api/login", json={"username": "ana", "password": "mala"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Contraseña incorrecta"


class TestProfile:

    def test_profile(self, client, register):
        data = register("ana", nombre="Ana Gómez", email="ana@example.com", telefono="3001234567")
        response = client.get("/api/user/profile", headers={"Authorization": f"Bearer {data['token']}"})
        assert response.status_code == 200
        profile = response.json()
        assert profile["username"] == "ana"
        assert profile["nombre"] == "Ana Gómez"
        assert profile["email"] == "ana@example.com"
        assert profile["telefono"] == "3001234567"
        assert "createdAt" in profile
        assert "password" not in profile

    def test_profile_of_unknown_user(self, client, db_session):
        token = create_user_token("5f1c7e9a-0000-4000-8000-000000000001", "fantasma", "user")
        response = client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404


class TestProtectedRoutes:

    @pytest.mark.parametrize("path", [
        "/api/user/profile",
        "/api/search/global?q=fa",
        "/api/movimientos",
        "/api/resumen",
        "/api/facturas",
        "/api/clientes",
        "/api/cotizaciones",
        "/api/remisiones",
        "/api/facturas-app",
    ])
    def test_missing_token_is_401(self, client, path):
        response = client.get(path)
        assert response.status_code == 401

    def test_tampered_token_is_400(self, client, auth_headers):
        token = auth_headers["Authorization"].split(" ")[1]
        tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")
        response = client.get("/api/facturas", headers={"Authorization": f"Bearer {tampered}"})
        assert response.status_code == 400

    def test_garbage_token_is_400(self, client, db_session):
        response = client.get("/api/clientes", headers={"Authorization": "Bearer no-es-un-jwt"})
        assert response.status_code == 400

    def test_health_is_public(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"
