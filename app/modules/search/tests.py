"""
Tests de la búsqueda global
"""

import pytest

from app.modules.search.service import SearchService


@pytest.fixture
def poblar(client, auth_headers, cliente):
    """Un documento de cada tipo cuyo texto contiene 'tornillo'"""
    client.post("/api/facturas", json={
        "clienteId": cliente["id"], "subtotal": 1000, "total": 1000
    }, headers=auth_headers)
    client.post("/api/cotizaciones", json={
        "clienteId": cliente["id"], "subtotal": 2000, "total": 2000
    }, headers=auth_headers)
    client.post("/api/remisiones", json={"clienteId": cliente["id"]}, headers=auth_headers)


def buscar(client, headers, q):
    response = client.get("/api/search/global", params={"q": q}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestGlobalSearch:

    @pytest.mark.parametrize("q", ["", "t"])
    def test_short_query_returns_empty(self, client, auth_headers, poblar, q):
        assert buscar(client, auth_headers, q) == []

    def test_missing_query_returns_empty(self, client, auth_headers, poblar):
        response = client.get("/api/search/global", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_short_query_does_not_hit_database(self):
        # Sin sesión: si se consultara la base de datos fallaría
        assert SearchService(db=None).global_search(user_id=None, q="a") == []

    def test_results_tagged_in_fixed_order(self, client, auth_headers, poblar, cliente):
        results = buscar(client, auth_headers, "tornillo")
        assert [r["tipo"] for r in results] == ["factura", "cliente", "cotizacion", "remision"]

        factura, cliente_result, cotizacion, remision = results
        assert factura["numero"] == "FAC-0001"
        assert factura["cliente"] == cliente["nombre"]
        assert factura["monto"] == 1000
        assert cliente_result["nit"] == cliente["nit"]
        assert cotizacion["numero"] == "COT-0001"
        assert cotizacion["monto"] == 2000
        assert remision["numero"] == "REM-0001"

    def test_case_insensitive(self, client, auth_headers, poblar):
        assert len(buscar(client, auth_headers, "TORNILLO")) == 4

    def test_at_most_five_per_kind(self, client, auth_headers, cliente):
        for _ in range(7):
            client.post("/api/facturas", json={
                "clienteId": cliente["id"], "subtotal": 1, "total": 1
            }, headers=auth_headers)
            client.post("/api/remisiones", json={"clienteNombre": "Tornillos Express"}, headers=auth_headers)

        results = buscar(client, auth_headers, "tornillo")
        tipos = [r["tipo"] for r in results]
        assert tipos.count("factura") == 5
        assert tipos.count("remision") == 5
        assert tipos.count("cliente") == 1
        assert tipos == ["factura"] * 5 + ["cliente"] + ["remision"] * 5

    def test_matches_by_numero(self, client, auth_headers, poblar):
        results = buscar(client, auth_headers, "cot-00")
        assert [r["tipo"] for r in results] == ["cotizacion"]

    def test_cliente_matches_by_email(self, client, auth_headers, poblar):
        results = buscar(client, auth_headers, "compras@")
        assert [r["tipo"] for r in results] == ["cliente"]

    def test_scoped_by_user(self, client, other_headers, poblar):
        assert buscar(client, other_headers, "tornillo") == []

    def test_requires_token(self, client):
        response = client.get("/api/search/global", params={"q": "tornillo"})
        assert response.status_code == 401
