"""
Tests para el módulo de Remisiones
"""

from uuid import uuid4


class TestRemisiones:

    def test_create_with_cliente(self, client, auth_headers, cliente):
        response = client.post("/api/remisiones", json={
            "clienteId": cliente["id"],
            "direccionEntrega": "Bodega 4, Zona Franca",
            "items": [{"descripcion": "Cemento gris 50kg", "cantidad": 20, "precioUnitario": 32000}],
        }, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["numero"] == "REM-0001"
        assert data["clienteNombre"] == cliente["nombre"]
        assert data["estado"] == "pendiente"
        assert data["direccionEntrega"] == "Bodega 4, Zona Franca"
        assert data["items"][0]["total"] == 640000

    def test_create_without_cliente_id(self, client, auth_headers):
        response = client.post("/api/remisiones", json={
            "clienteNombre": "Cliente de mostrador",
            "estado": "entregada",
        }, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["clienteId"] is None
        assert data["clienteNombre"] == "Cliente de mostrador"
        assert data["estado"] == "entregada"

    def test_requires_cliente_id_or_nombre(self, client, auth_headers):
        response = client.post("/api/remisiones", json={"items": []}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Se requiere clienteId o clienteNombre"

    def test_blank_cliente_nombre_rejected(self, client, auth_headers):
        response = client.post("/api/remisiones", json={"clienteNombre": "   "}, headers=auth_headers)
        assert response.status_code == 400

    def test_unknown_cliente_rejected(self, client, auth_headers):
        response = client.post("/api/remisiones", json={"clienteId": str(uuid4())}, headers=auth_headers)
        assert response.status_code == 400

    def test_invalid_estado(self, client, auth_headers):
        response = client.post("/api/remisiones", json={
            "clienteNombre": "X", "estado": "pagada"
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_consecutive_numbers_and_listing(self, client, auth_headers):
        for fecha in ["2024-01-01T12:00:00", "2024-01-02T12:00:00", "2024-01-03T12:00:00"]:
            client.post("/api/remisiones", json={"clienteNombre": "Obra", "fecha": fecha}, headers=auth_headers)

        response = client.get("/api/remisiones", headers=auth_headers)
        assert response.status_code == 200
        assert [r["numero"] for r in response.json()] == ["REM-0003", "REM-0002", "REM-0001"]

    def test_search_scoped_by_user(self, client, auth_headers, other_headers):
        client.post("/api/remisiones", json={"clienteNombre": "Constructora Andina"}, headers=auth_headers)

        response = client.get("/api/remisiones/search", params={"q": "andina"}, headers=auth_headers)
        assert len(response.json()) == 1
        response = client.get("/api/remisiones/search", params={"q": "andina"}, headers=other_headers)
        assert response.json() == []
