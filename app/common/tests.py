"""
Tests de los manejadores de errores, filtros y esquemas comunes
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError

from app.common.errors import register_error_handlers
from app.common.filters import escape_like, contains_any
from app.common.schemas import ItemDocumento, items_to_json
from app.modules.clientes.models import Cliente


class Payload(BaseModel):
    nombre: str


@pytest.fixture
def error_client():
    app = FastAPI()
    register_error_handlers(app)

    @app.post("/validar")
    def validar(payload: Payload):
        return payload

    @app.get("/duplicado")
    def duplicado():
        raise IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))

    @app.get("/falla")
    def falla():
        raise RuntimeError("conexión perdida con detalles internos")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:

    def test_validation_error_is_400(self, error_client):
        response = error_client.post("/validar", json={})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Datos inválidos")

    def test_integrity_error_is_400(self, error_client):
        response = error_client.get("/duplicado")
        assert response.status_code == 400

    def test_unhandled_error_hides_details(self, error_client):
        response = error_client.get("/falla")
        assert response.status_code == 500
        assert response.json() == {"detail": "Error en el servidor"}


class TestFilters:

    def test_escape_like(self):
        assert escape_like("100%") == "100\\%"
        assert escape_like("a_b") == "a\\_b"
        assert escape_like("c:\\tmp") == "c:\\\\tmp"
        assert escape_like("tornillo") == "tornillo"

    def test_contains_any_without_term(self):
        assert contains_any([Cliente.nombre], None) is None
        assert contains_any([Cliente.nombre], "") is None

    def test_contains_any_builds_or(self):
        condition = contains_any([Cliente.nombre, Cliente.nit], "abc")
        compiled = str(condition)
        assert "clientes.nombre" in compiled
        assert "clientes.nit" in compiled
        assert " OR " in compiled


class TestItemDocumento:

    def test_total_defaults(self):
        item = ItemDocumento(descripcion="Tornillo", cantidad=3, precioUnitario=0.1)
        assert item.total == 0.3

    def test_explicit_total_kept(self):
        item = ItemDocumento(descripcion="Descuento", cantidad=2, precioUnitario=100, total=150)
        assert item.total == 150

    def test_cantidad_must_be_positive(self):
        with pytest.raises(ValidationError):
            ItemDocumento(descripcion="X", cantidad=0, precioUnitario=1)

    def test_items_to_json_uses_api_names(self):
        items = [ItemDocumento(descripcion="X", cantidad=1, precio_unitario=5)]
        assert items_to_json(items) == [{"descripcion": "X", "cantidad": 1.0, "precioUnitario": 5.0, "total": 5.0}]
