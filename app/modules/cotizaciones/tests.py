"""
Tests para el módulo de Cotizaciones
"""

from uuid import uuid4


def cotizacion_payload(cliente_id, **overrides):
    payload = {
        "clienteId": cliente_id,
        "subtotal": 250000,
        "iva": 47500,
        "total": 297500,
        "fechaVencimiento": "2099-12-31T00:00:00",
        "items": [{"descripcion": "Instalación eléctrica", "cantidad": 1, "precioUnitario": 250000}],
    }
    payload.update(overrides)
    return payload


class TestCotizaciones:

    def test_create_cotizacion(self, client, auth_headers, cliente):
        response = client.post("/api/cotizaciones", json=cotizacion_payload(cliente["id"]), headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["numero"] == "COT-0001"
        assert data["clienteNombre"] == cliente["nombre"]
        assert data["items"][0]["total"] == 250000
        assert "estado" not in data

    def test_numbering_independent_from_facturas(self, client, auth_headers, cliente):
        client.post("/api/facturas", json={
            "clienteId": cliente["id"], "subtotal": 1, "total": 1
        }, headers=auth_headers)
        numeros = [
            client.post("/api/cotizaciones", json=cotizacion_payload(cliente["id"]), headers=auth_headers).json()["numero"]
            for _ in range(2)
        ]
        assert numeros == ["COT-0001", "COT-0002"]

    def test_unknown_cliente_rejected(self, client, auth_headers):
        response = client.post("/api/cotizaciones", json=cotizacion_payload(str(uuid4())), headers=auth_headers)
        assert response.status_code == 400

    def test_missing_totals_rejected(self, client, auth_headers, cliente):
        response = client.post("/api/cotizaciones", json={"clienteId": cliente["id"]}, headers=auth_headers)
        assert response.status_code == 400

    def test_list_sorted_by_fecha_desc(self, client, auth_headers, cliente):
        for fecha in ["2024-05-01T08:00:00", "2024-06-01T08:00:00"]:
            client.post(
                "/api/cotizaciones", json=cotizacion_payload(cliente["id"], fecha=fecha), headers=auth_headers
            )
        response = client.get("/api/cotizaciones", headers=auth_headers)
        assert response.status_code == 200
        assert [c["numero"] for c in response.json()] == ["COT-0002", "COT-0001"]

    def test_list_scoped_by_user(self, client, auth_headers, other_headers, cliente):
        client.post("/api/cotizaciones", json=cotizacion_payload(cliente["id"]), headers=auth_headers)
        assert client.get("/api/cotizaciones", headers=other_headers).json() == []

    def test_search(self, client, auth_headers, cliente):
        client.post("/api/cotizaciones", json=cotizacion_payload(cliente["id"]), headers=auth_headers)
        client.post(
            "/api/cotizaciones",
            json=cotizacion_payload(cliente["id"], clienteNombre="Obra Calle 80"),
            headers=auth_headers,
        )
        response = client.get("/api/cotizaciones/search", params={"q": "calle 80"}, headers=auth_headers)
        assert [c["numero"] for c in response.json()] == ["COT-0002"]

        response = client.get("/api/cotizaciones/search", params={"q": "COT-"}, headers=auth_headers)
        assert len(response.json()) == 2
