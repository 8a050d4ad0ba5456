"""
Tests para el módulo de Facturas
"""

import logging
from uuid import uuid4

import pytest
from sqlalchemy import event

from app.database.database import engine


def factura_payload(cliente_id, **overrides):
    payload = {
        "clienteId": cliente_id,
        "subtotal": 100000,
        "iva": 19000,
        "total": 119000,
        "items": [
            {"descripcion": "Tornillos 1/4", "cantidad": 100, "precioUnitario": 500},
            {"descripcion": "Tuercas", "cantidad": 50, "precioUnitario": 1000, "total": 50000},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def crear_factura(client, auth_headers, cliente):
    def _crear(**overrides):
        response = client.post("/api/facturas", json=factura_payload(cliente["id"], **overrides), headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _crear


class TestCreateFactura:

    def test_create_factura(self, crear_factura, cliente):
        factura = crear_factura()
        assert factura["numero"] == "FAC-0001"
        assert factura["clienteId"] == cliente["id"]
        assert factura["clienteNombre"] == cliente["nombre"]
        assert factura["estado"] == "pendiente"
        assert factura["total"] == 119000
        assert factura["fecha"]

    def test_item_total_defaults_to_cantidad_por_precio(self, crear_factura):
        items = crear_factura()["items"]
        assert items[0]["total"] == 50000
        assert items[0]["precioUnitario"] == 500
        assert items[1]["total"] == 50000

    def test_iva_defaults_to_zero(self, client, auth_headers, cliente):
        payload = factura_payload(cliente["id"], total=100000)
        del payload["iva"]
        response = client.post("/api/facturas", json=payload, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["iva"] == 0

    def test_consecutive_numbers(self, crear_factura):
        numeros = [crear_factura()["numero"] for _ in range(3)]
        assert numeros == ["FAC-0001", "FAC-0002", "FAC-0003"]

    def test_numbering_is_per_user(self, client, crear_factura, other_headers):
        crear_factura()
        crear_factura()
        otro_cliente = client.post(
            "/api/clientes", json={"nombre": "Cliente B", "nit": "777"}, headers=other_headers
        ).json()
        response = client.post("/api/facturas", json=factura_payload(otro_cliente["id"]), headers=other_headers)
        assert response.status_code == 201
        assert response.json()["numero"] == "FAC-0001"

    def test_cliente_nombre_snapshot_can_be_overridden(self, crear_factura):
        factura = crear_factura(clienteNombre="Ferretería El Tornillo (sede norte)")
        assert factura["clienteNombre"] == "Ferretería El Tornillo (sede norte)"

    def test_unknown_cliente_rejected(self, client, auth_headers):
        response = client.post("/api/facturas", json=factura_payload(str(uuid4())), headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "El cliente especificado no existe"

    def test_foreign_cliente_rejected(self, client, other_headers, cliente):
        response = client.post("/api/facturas", json=factura_payload(cliente["id"]), headers=other_headers)
        assert response.status_code == 400

    def test_missing_cliente_id(self, client, auth_headers):
        payload = factura_payload(None)
        del payload["clienteId"]
        response = client.post("/api/facturas", json=payload, headers=auth_headers)
        assert response.status_code == 400

    def test_negative_total_rejected(self, client, auth_headers, cliente):
        response = client.post("/api/facturas", json=factura_payload(cliente["id"], total=-1), headers=auth_headers)
        assert response.status_code == 400

    def test_invalid_estado_rejected(self, client, auth_headers, cliente):
        response = client.post(
            "/api/facturas", json=factura_payload(cliente["id"], estado="cobrada"), headers=auth_headers
        )
        assert response.status_code == 400

    def test_vencimiento_before_fecha_rejected(self, client, auth_headers, cliente):
        payload = factura_payload(cliente["id"], fecha="2024-03-10T10:00:00", fechaVencimiento="2024-03-01T10:00:00")
        response = client.post("/api/facturas", json=payload, headers=auth_headers)
        assert response.status_code == 400

    def test_item_with_zero_cantidad_rejected(self, client, auth_headers, cliente):
        payload = factura_payload(cliente["id"], items=[{"descripcion": "X", "cantidad": 0, "precioUnitario": 10}])
        response = client.post("/api/facturas", json=payload, headers=auth_headers)
        assert response.status_code == 400


class TestListFacturas:

    def test_sorted_by_fecha_desc(self, client, auth_headers, crear_factura):
        crear_factura(fecha="2024-01-10T09:00:00")
        crear_factura(fecha="2024-03-10T09:00:00")
        crear_factura(fecha="2024-02-10T09:00:00")

        response = client.get("/api/facturas", headers=auth_headers)
        assert response.status_code == 200
        assert [f["numero"] for f in response.json()] == ["FAC-0002", "FAC-0003", "FAC-0001"]

    def test_embeds_cliente_summary(self, client, auth_headers, crear_factura, cliente):
        crear_factura()
        factura = client.get("/api/facturas", headers=auth_headers).json()[0]
        assert factura["cliente"] == {"id": cliente["id"], "nombre": cliente["nombre"], "nit": cliente["nit"]}

    def test_scoped_by_user(self, client, other_headers, crear_factura):
        crear_factura()
        assert client.get("/api/facturas", headers=other_headers).json() == []


class TestGetFactura:

    def test_detail_embeds_full_cliente(self, client, auth_headers, crear_factura, cliente):
        factura = crear_factura()
        response = client.get(f"/api/facturas/{factura['id']}", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["numero"] == "FAC-0001"
        assert data["cliente"]["email"] == cliente["email"]
        assert data["cliente"]["direccion"] == cliente["direccion"]
        assert len(data["items"]) == 2

    def test_unknown_id(self, client, auth_headers):
        response = client.get(f"/api/facturas/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Factura no encontrada"

    def test_foreign_id(self, client, other_headers, crear_factura):
        factura = crear_factura()
        response = client.get(f"/api/facturas/{factura['id']}", headers=other_headers)
        assert response.status_code == 404

    def test_not_found_is_not_logged_as_database_error(self, client, auth_headers, caplog):
        with caplog.at_level(logging.ERROR, logger="app.database.database"):
            response = client.get(f"/api/facturas/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404
        assert not [r for r in caplog.records if r.name == "app.database.database"]

    def test_malformed_id(self, client, auth_headers):
        response = client.get("/api/facturas/no-es-uuid", headers=auth_headers)
        assert response.status_code == 400


class TestSearchFacturas:

    def test_search_by_numero(self, client, auth_headers, crear_factura):
        crear_factura()
        crear_factura()
        response = client.get("/api/facturas/search", params={"q": "FAC-0002"}, headers=auth_headers)
        assert [f["numero"] for f in response.json()] == ["FAC-0002"]

    def test_search_by_cliente_nombre(self, client, auth_headers, crear_factura):
        crear_factura()
        response = client.get("/api/facturas/search", params={"q": "tornillo"}, headers=auth_headers)
        assert len(response.json()) == 1

    def test_search_capped_at_10(self, client, auth_headers, crear_factura):
        for _ in range(12):
            crear_factura()
        response = client.get("/api/facturas/search", params={"q": "FAC"}, headers=auth_headers)
        assert len(response.json()) == 10


class TestFacturasApp:

    @pytest.fixture
    def facturas(self, crear_factura):
        return [
            crear_factura(fecha="2024-03-01T10:00:00", estado="pagada"),
            crear_factura(fecha="2024-03-15T23:30:00"),
            crear_factura(fecha="2024-04-02T08:00:00", clienteNombre="Depósito Central"),
        ]

    def get(self, client, headers, **params):
        response = client.get("/api/facturas-app", params=params, headers=headers)
        assert response.status_code == 200, response.text
        return [f["numero"] for f in response.json()]

    def test_no_filters_sorted_desc(self, client, auth_headers, facturas):
        assert self.get(client, auth_headers) == ["FAC-0003", "FAC-0002", "FAC-0001"]

    def test_filter_by_estado(self, client, auth_headers, facturas):
        assert self.get(client, auth_headers, estado="pagada") == ["FAC-0001"]
        assert self.get(client, auth_headers, estado="pendiente") == ["FAC-0003", "FAC-0002"]

    def test_estado_todos_is_ignored(self, client, auth_headers, facturas):
        assert len(self.get(client, auth_headers, estado="todos")) == 3

    def test_date_range_includes_whole_end_day(self, client, auth_headers, facturas):
        result = self.get(client, auth_headers, fechaInicio="2024-03-01", fechaFin="2024-03-15")
        assert result == ["FAC-0002", "FAC-0001"]

    def test_date_range_needs_both_ends(self, client, auth_headers, facturas):
        assert len(self.get(client, auth_headers, fechaInicio="2024-04-01")) == 3
        assert len(self.get(client, auth_headers, fechaFin="2024-03-02")) == 3

    def test_search(self, client, auth_headers, facturas):
        assert self.get(client, auth_headers, search="depósito") == ["FAC-0003"]
        assert self.get(client, auth_headers, search="0002") == ["FAC-0002"]

    def test_filters_are_combined(self, client, auth_headers, facturas):
        result = self.get(
            client, auth_headers,
            estado="pendiente", fechaInicio="2024-03-01", fechaFin="2024-03-31", search="tornillo"
        )
        assert result == ["FAC-0002"]

    def test_invalid_date(self, client, auth_headers):
        response = client.get("/api/facturas-app", params={"fechaInicio": "ayer"}, headers=auth_headers)
        assert response.status_code == 400


class TestClienteLoading:
    """Los listados cargan los clientes embebidos en una sola consulta"""

    @pytest.fixture
    def facturas_varios_clientes(self, client, auth_headers):
        for i in range(3):
            cliente = client.post("/api/clientes", json={
                "nombre": f"Cliente {i}", "nit": f"90000000{i}"
            }, headers=auth_headers).json()
            response = client.post("/api/facturas", json=factura_payload(cliente["id"]), headers=auth_headers)
            assert response.status_code == 201

    @pytest.fixture
    def selects(self, facturas_varios_clientes):
        """SELECTs emitidos después de crear los datos"""
        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith("SELECT"):
                statements.append(statement)

        event.listen(engine, "before_cursor_execute", record)
        yield statements
        event.remove(engine, "before_cursor_execute", record)

    @pytest.mark.parametrize("path,params", [
        ("/api/facturas-app", {}),
        ("/api/facturas/search", {"q": "FAC"}),
        ("/api/facturas", {}),
    ])
    def test_two_selects_regardless_of_clientes(self, client, auth_headers, selects, path, params):
        response = client.get(path, params=params, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert {f["cliente"]["nombre"] for f in data} == {"Cliente 0", "Cliente 1", "Cliente 2"}
        assert len(selects) == 2
