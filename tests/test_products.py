import pytest
from bson import ObjectId

CATALOG = [
    {"name": "Velvet Lipstick", "category": "Makeup", "price": 18.5, "brand": "Luxe", "gender": "female"},
    {"name": "Hydra Balm", "category": "Lip Care", "price": 9.0, "brand": "Dew", "gender": "unisex"},
    {"name": "Night Face Cream", "category": "Skincare", "price": 32.0, "brand": "Dew", "gender": "unisex"},
    {"name": "Beard Oil", "category": "Grooming", "price": 14.0, "brand": "Oak", "gender": "male"},
]


@pytest.fixture
def catalog(db):
    db.product.insert_many([dict(product) for product in CATALOG])
    return db.product


def test_list_products(client, catalog):
    response = client.get("/product")

    assert response.status_code == 200
    assert len(response.get_json()) == len(CATALOG)


def test_list_products_with_exact_filter(client, catalog):
    response = client.get("/product?brand=Dew")

    assert sorted(product["name"] for product in response.get_json()) == ["Hydra Balm", "Night Face Cream"]


def test_search_matches_name_or_category_case_insensitively(client, catalog):
    response = client.get("/products?query=lip")

    names = sorted(product["name"] for product in response.get_json())
    assert names == ["Hydra Balm", "Velvet Lipstick"]


def test_search_treats_query_as_literal_text(client, catalog):
    response = client.get("/products?query=(")

    assert response.status_code == 200
    assert response.get_json() == []


def test_get_product_by_id(client, catalog):
    product_id = catalog.find_one({"name": "Beard Oil"})["_id"]

    body = client.get(f"/product/{product_id}").get_json()

    assert body["_id"] == str(product_id)
    assert body["category"] == "Grooming"


def test_get_missing_product_returns_null(client):
    response = client.get(f"/product/{ObjectId()}")

    assert response.status_code == 200
    assert response.get_json() is None


def test_create_product_requires_admin(client, customer_headers, db):
    response = client.post("/product", json=dict(CATALOG[0]), headers=customer_headers)

    assert response.status_code == 403
    assert db.product.count_documents({}) == 0


def test_admin_creates_product(client, admin_headers, db):
    response = client.post("/product", json=dict(CATALOG[0]), headers=admin_headers)

    assert response.status_code == 200
    stored = db.product.find_one({"_id": ObjectId(response.get_json()["insertedId"])})
    assert stored["name"] == "Velvet Lipstick"


def test_create_product_rejects_unknown_fields(client, admin_headers, db):
    response = client.post("/product", json={**CATALOG[0], "discount": 50}, headers=admin_headers)

    assert response.status_code == 400
    assert any(error["field"] == "discount" for error in response.get_json()["errors"])
    assert db.product.count_documents({}) == 0


def test_update_product_replaces_whitelisted_fields(client, catalog):
    product_id = catalog.find_one({"name": "Beard Oil"})["_id"]

    response = client.patch(f"/product/{product_id}", json={"name": "Cedar Beard Oil", "category": "Grooming", "price": 16})

    assert response.get_json()["modifiedCount"] == 1
    stored = catalog.find_one({"_id": product_id})
    assert stored["name"] == "Cedar Beard Oil"
    assert stored["price"] == 16
    assert stored["brand"] is None


def test_delete_product(client, catalog, admin_headers):
    product_id = catalog.find_one({"name": "Hydra Balm"})["_id"]

    response = client.delete(f"/product/{product_id}", headers=admin_headers)

    assert response.get_json()["deletedCount"] == 1
    assert catalog.count_documents({}) == len(CATALOG) - 1
