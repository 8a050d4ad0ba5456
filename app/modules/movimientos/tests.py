"""
Tests para el módulo de Movimientos (caja)
"""


def registrar(client, headers, **overrides):
    payload = {"descripcion": "Venta de contado", "monto": 100, "tipo": "ingreso"}
    payload.update(overrides)
    response = client.post("/api/movimientos", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestMovimientos:

    def test_create_defaults(self, client, auth_headers):
        movimiento = registrar(client, auth_headers)
        assert movimiento["categoria"] == "General"
        assert movimiento["tipo"] == "ingreso"
        assert movimiento["monto"] == 100
        assert movimiento["fecha"]

    def test_invalid_tipo(self, client, auth_headers):
        response = client.post("/api/movimientos", json={
            "descripcion": "Préstamo", "monto": 10, "tipo": "transferencia"
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_negative_monto_rejected(self, client, auth_headers):
        response = client.post("/api/movimientos", json={
            "descripcion": "Error", "monto": -5, "tipo": "gasto"
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_list_sorted_by_fecha_desc(self, client, auth_headers):
        registrar(client, auth_headers, descripcion="Enero", fecha="2024-01-15T10:00:00")
        registrar(client, auth_headers, descripcion="Marzo", fecha="2024-03-15T10:00:00")
        registrar(client, auth_headers, descripcion="Febrero", fecha="2024-02-15T10:00:00")

        response = client.get("/api/movimientos", headers=auth_headers)
        assert [m["descripcion"] for m in response.json()] == ["Marzo", "Febrero", "Enero"]


class TestResumen:

    def test_empty_resumen(self, client, auth_headers):
        response = client.get("/api/resumen", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"saldo": 0, "ingresos": 0, "gastos": 0}

    def test_resumen(self, client, auth_headers):
        registrar(client, auth_headers, monto=100, tipo="ingreso")
        registrar(client, auth_headers, descripcion="Arriendo", monto=30, tipo="gasto", categoria="Arriendo")

        response = client.get("/api/resumen", headers=auth_headers)
        assert response.json() == {"saldo": 70, "ingresos": 100, "gastos": 30}

    def test_resumen_with_cents(self, client, auth_headers):
        registrar(client, auth_headers, monto=1500.75, tipo="ingreso")
        registrar(client, auth_headers, monto=250.25, tipo="ingreso")
        registrar(client, auth_headers, monto=1000.5, tipo="gasto")

        data = client.get("/api/resumen", headers=auth_headers).json()
        assert data == {"saldo": 750.5, "ingresos": 1751.0, "gastos": 1000.5}

    def test_negative_saldo(self, client, auth_headers):
        registrar(client, auth_headers, monto=40, tipo="gasto")
        assert client.get("/api/resumen", headers=auth_headers).json()["saldo"] == -40

    def test_resumen_scoped_by_user(self, client, auth_headers, other_headers):
        registrar(client, auth_headers, monto=500, tipo="ingreso")
        assert client.get("/api/resumen", headers=other_headers).json()["ingresos"] == 0
