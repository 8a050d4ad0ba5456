"""
Fixtures compartidas para los tests de los módulos.

Los tests corren sobre SQLite en memoria; las variables de entorno se fijan
antes de importar la aplicación para que Settings las lea.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from app.database.database import Base, SessionLocal, engine, init_db
from app.main import app


@pytest.fixture
def db_session():
    """Sesión sobre un esquema recién creado; se destruye al terminar el test"""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Registra un usuario y devuelve el cuerpo de la respuesta (token, user)"""
    def _register(username: str, password: str = "secreto123", **extra) -> dict:
        response = client.post("/api/register", json={"username": username, "password": password, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    """Headers de un usuario registrado"""
    return bearer(register("contadora")["token"])


@pytest.fixture
def other_headers(register):
    """Headers de un segundo usuario, para probar el aislamiento entre usuarios"""
    return bearer(register("otro_usuario")["token"])


@pytest.fixture
def cliente(client, auth_headers):
    response = client.post("/api/clientes", json={
        "nombre": "Ferretería El Tornillo S.A.S.",
        "nit": "900123456-1",
        "telefono": "3101234567",
        "email": "compras@eltornillo.com",
        "direccion": "Carrera 7 # 32-16",
        "tipo": "juridico",
    }, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()
