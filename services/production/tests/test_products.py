from sqlalchemy.exc import OperationalError
from fastapi.testclient import TestClient
from app.main import app
from app.application.service import ProductService

def test_list_products_empty(client):
    resp = client.get('/products/')
    assert resp.status_code == 200
    assert resp.json() == []

def test_create_product_uppercases_part_number(client):
    resp = client.post('/products/', json={"part_number": "ab123", "product_type": "OIL_FILTER"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["part_number"] == "AB123"
    assert body["product_type"] == "OIL_FILTER"
    assert body["description"] is None
    assert body["id"] > 0
    assert body["created_at"]

def test_create_product_missing_fields(client):
    resp = client.post('/products/', json={"description": "no part"})
    assert resp.status_code == 400
    body = resp.json()
    assert [e["field"] for e in body["errors"]] == ["part_number", "product_type"]
    assert "Part number is required" in body["error"]

def test_create_product_invalid_type(client):
    resp = client.post('/products/', json={"part_number": "AB123", "product_type": "air_filter"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "product_type"

def test_create_product_wrong_json_type_is_400(client):
    resp = client.post('/products/', json={"part_number": 123, "product_type": "AIR_FILTER"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "part_number"

def test_duplicate_part_number_case_insensitive(client):
    first = client.post('/products/', json={"part_number": "ab123", "product_type": "AIR_FILTER"})
    second = client.post('/products/', json={"part_number": "AB123", "product_type": "OIL_FILTER"})
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "Part number already exists"}
    assert len(client.get('/products/').json()) == 1

def test_list_products_in_insertion_order(client):
    for part in ("zz-1", "aa-2", "mm-3"):
        client.post('/products/', json={"part_number": part, "product_type": "AIR_OIL_SEPARATOR"})
    assert [p["part_number"] for p in client.get('/products/').json()] == ["ZZ-1", "AA-2", "MM-3"]

def test_search_products(client):
    client.post('/products/', json={"part_number": "AF 100", "product_type": "AIR_FILTER"})
    client.post('/products/', json={"part_number": "OF200", "product_type": "OIL_FILTER", "description": "Spin-on oil filter"})

    by_part = client.get('/products/', params={"search": "af1 00"}).json()
    assert [p["part_number"] for p in by_part] == ["AF 100"]

    by_type = client.get('/products/', params={"search": "oil_filter"}).json()
    assert [p["part_number"] for p in by_type] == ["OF200"]

    by_description = client.get('/products/', params={"search": "SPIN-ON"}).json()
    assert [p["part_number"] for p in by_description] == ["OF200"]

def test_get_product(client, product):
    resp = client.get(f'/products/{product["id"]}')
    assert resp.status_code == 200
    assert resp.json()["part_number"] == "AB123"

    missing = client.get('/products/999')
    assert missing.status_code == 404
    assert missing.json() == {"error": "Product not found"}

def test_store_failure_is_500(client, monkeypatch):
    def broken(self, search=None):
        raise OperationalError("SELECT", {}, Exception("database is unavailable"))

    monkeypatch.setattr(ProductService, "list", broken)
    resp = client.get('/products/')
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}

def test_unexpected_error_is_json_500(client, monkeypatch):
    def broken(self, search=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(ProductService, "list", broken)
    # ServerErrorMiddleware re-raises after sending the handler response
    quiet_client = TestClient(app, raise_server_exceptions=False)
    resp = quiet_client.get('/products/')
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
