"""
HTTP tests: authentication, role checks, catalog routes, sales routes
and the mapping of sale errors to status codes.
"""
from datetime import timedelta
from decimal import Decimal

from pos_api.core.jwt import create_access_token
from pos_api.models.accounts import AccountRole
from pos_api.models.products import Product
from pos_api.models.sales import Sale


# =============================================================================
# AUTH
# =============================================================================

def test_health_check(client):
    assert client.get("/").status_code == 200


def test_login_returns_bearer_token(client, cashier):
    response = client.post("/auth/login", data={"username": "cashier", "password": "secret-pass"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "cashier"


def test_login_with_wrong_password(client, cashier):
    response = client.post("/auth/login", data={"username": "cashier", "password": "nope"})

    assert response.status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/products").status_code == 401


def test_expired_token_is_rejected(client, cashier):
    token = create_access_token(cashier.id, cashier.role.value, expires_delta=timedelta(minutes=-1))

    response = client.get("/products", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_manager_creates_accounts(client, manager_headers):
    response = client.post(
        "/auth/accounts",
        json={"username": "till-2", "password": "pw", "role": "cashier"},
        headers=manager_headers,
    )

    assert response.status_code == 201
    assert response.json()["role"] == "cashier"

    duplicate = client.post(
        "/auth/accounts",
        json={"username": "till-2", "password": "pw"},
        headers=manager_headers,
    )
    assert duplicate.status_code == 409


def test_cashier_cannot_create_accounts(client, cashier_headers):
    response = client.post(
        "/auth/accounts",
        json={"username": "x", "password": "pw"},
        headers=cashier_headers,
    )

    assert response.status_code == 403


def test_unknown_role_is_rejected(client, manager_headers):
    response = client.post(
        "/auth/accounts",
        json={"username": "x", "password": "pw", "role": "Owner"},
        headers=manager_headers,
    )

    assert response.status_code == 422


def test_bootstrap_manager_only_once(client):
    payload = {"username": "boss", "password": "pw"}

    denied = client.post("/internal/bootstrap-manager", params={"secret": "wrong"}, json=payload)
    assert denied.status_code == 403

    created = client.post(
        "/internal/bootstrap-manager",
        params={"secret": "test-internal-secret"},
        json=payload,
    )
    assert created.status_code == 201
    assert created.json()["role"] == AccountRole.MANAGER.value

    again = client.post(
        "/internal/bootstrap-manager",
        params={"secret": "test-internal-secret"},
        json={"username": "boss-2", "password": "pw"},
    )
    assert again.status_code == 409


# =============================================================================
# PRODUCTS
# =============================================================================

def test_manager_product_crud(client, manager_headers):
    created = client.post(
        "/products",
        json={"id": 7, "name": "Soap", "category": "home", "quantity": 5, "price": "10.00"},
        headers=manager_headers,
    )
    assert created.status_code == 201
    assert Decimal(created.json()["price"]) == Decimal("10.00")

    updated = client.put("/products/7", json={"price": "12.50"}, headers=manager_headers)
    assert updated.status_code == 200
    assert Decimal(updated.json()["price"]) == Decimal("12.50")

    listed = client.get("/products", headers=manager_headers)
    assert [p["id"] for p in listed.json()] == [7]

    deleted = client.delete("/products/7", headers=manager_headers)
    assert deleted.status_code == 204
    assert client.get("/products/7", headers=manager_headers).status_code == 404


def test_duplicate_product_id_or_name(client, manager_headers, make_product):
    make_product(product_id=7, name="Soap")

    same_id = client.post(
        "/products",
        json={"id": 7, "name": "Other", "price": "1.00"},
        headers=manager_headers,
    )
    same_name = client.post(
        "/products",
        json={"id": 8, "name": "Soap", "price": "1.00"},
        headers=manager_headers,
    )

    assert same_id.status_code == 409
    assert same_name.status_code == 409


def test_negative_product_values_are_rejected(client, manager_headers):
    response = client.post(
        "/products",
        json={"id": 9, "name": "Bad", "quantity": -1, "price": "1.00"},
        headers=manager_headers,
    )

    assert response.status_code == 422


def test_blank_product_names_are_rejected(client, manager_headers, make_product, db):
    make_product(product_id=7, name="Soap")

    created = client.post(
        "/products",
        json={"id": 1, "name": "   ", "price": "1.00"},
        headers=manager_headers,
    )
    assert created.status_code == 422

    renamed = client.put("/products/7", json={"name": "  "}, headers=manager_headers)
    assert renamed.status_code == 422

    db.expire_all()
    assert db.get(Product, 1) is None
    assert db.get(Product, 7).name == "Soap"


def test_product_names_are_stored_trimmed(client, manager_headers):
    response = client.post(
        "/products",
        json={"id": 1, "name": "  Soap ", "price": "1.00"},
        headers=manager_headers,
    )

    assert response.status_code == 201
    assert response.json()["name"] == "Soap"


def test_cashier_can_search_but_not_edit(client, cashier_headers, make_product):
    make_product(product_id=7, name="Soap", category="home")

    found = client.get("/products/search", params={"q": "soap"}, headers=cashier_headers)
    assert found.status_code == 200
    assert [p["id"] for p in found.json()] == [7]

    edit = client.put("/products/7", json={"price": "1.00"}, headers=cashier_headers)
    assert edit.status_code == 403


def test_sold_product_cannot_be_deleted(client, manager_headers, cashier_headers, make_product):
    make_product(product_id=7, quantity=5, price="10.00")
    client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 1}], "payment": "10.00"},
        headers=cashier_headers,
    )

    response = client.delete("/products/7", headers=manager_headers)

    assert response.status_code == 409


def test_restock(client, manager_headers, cashier_headers, make_product):
    make_product(product_id=7, quantity=2)

    response = client.post("/inventory/7/restock", json={"quantity": 8}, headers=manager_headers)
    assert response.status_code == 200
    assert response.json() == {"product_id": 7, "quantity": 10}

    missing = client.post("/inventory/99/restock", json={"quantity": 1}, headers=manager_headers)
    assert missing.status_code == 404

    forbidden = client.post("/inventory/7/restock", json={"quantity": 1}, headers=cashier_headers)
    assert forbidden.status_code == 403


# =============================================================================
# SALES
# =============================================================================

def test_create_sale_uses_catalog_price_by_default(client, cashier, cashier_headers, make_product, db):
    make_product(product_id=7, quantity=5, price="10.00")

    response = client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 3}], "payment": "30.00"},
        headers=cashier_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["total"]) == Decimal("30.00")
    assert Decimal(body["balance"]) == Decimal("0.00")
    assert body["cashier_id"] == cashier.id
    assert len(body["items"]) == 1
    assert body["items"][0]["product_id"] == 7
    assert body["items"][0]["quantity"] == 3
    assert Decimal(body["items"][0]["price"]) == Decimal("10.00")

    db.expire_all()
    assert db.get(Product, 7).quantity == 2

    fetched = client.get(f"/sales/{body['id']}", headers=cashier_headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


def test_create_sale_insufficient_stock(client, cashier_headers, make_product, db):
    make_product(product_id=7, quantity=2, price="10.00")

    response = client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 3, "unit_price": "10.00"}], "payment": "30.00"},
        headers=cashier_headers,
    )

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "InsufficientStockError"
    assert body["product_id"] == 7
    assert body["available"] == 2

    db.expire_all()
    assert db.get(Product, 7).quantity == 2
    assert db.query(Sale).count() == 0


def test_create_sale_validation_errors(client, cashier_headers, make_product):
    make_product(product_id=7, quantity=5, price="10.00")

    empty = client.post("/sales", json={"items": [], "payment": "0"}, headers=cashier_headers)
    assert empty.status_code == 422
    assert empty.json()["detail"] == "empty sale"

    mismatch = client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 1}], "payment": "10.00", "total": "9.00"},
        headers=cashier_headers,
    )
    assert mismatch.status_code == 422
    assert mismatch.json()["detail"] == "total mismatch"


def test_create_sale_unknown_product(client, cashier_headers):
    response = client.post(
        "/sales",
        json={"items": [{"product_id": 404, "quantity": 1}], "payment": "1.00"},
        headers=cashier_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


def test_list_sales_newest_first(client, cashier_headers, make_product):
    make_product(product_id=7, quantity=5, price="1.00")
    ids = []
    for _ in range(2):
        response = client.post(
            "/sales",
            json={"items": [{"product_id": 7, "quantity": 1}], "payment": "1.00"},
            headers=cashier_headers,
        )
        ids.append(response.json()["id"])

    listed = client.get("/sales", headers=cashier_headers)

    assert [s["id"] for s in listed.json()] == list(reversed(ids))


def test_get_unknown_sale(client, cashier_headers):
    response = client.get("/sales/999", headers=cashier_headers)

    assert response.status_code == 404


def test_create_sale_rejects_sub_cent_unit_price(client, cashier_headers, make_product, db):
    make_product(product_id=7, quantity=5, price="10.00")

    response = client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 3, "unit_price": "0.333"}], "payment": "1.00"},
        headers=cashier_headers,
    )

    assert response.status_code == 422
    db.expire_all()
    assert db.query(Sale).count() == 0
    assert db.get(Product, 7).quantity == 5


def test_create_sale_rejects_out_of_range_amounts(client, cashier_headers, make_product, db):
    make_product(product_id=7, quantity=5, price="10.00")
    item = {"product_id": 7, "quantity": 1}

    huge_payment = client.post(
        "/sales", json={"items": [item], "payment": "1e30"}, headers=cashier_headers
    )
    assert huge_payment.status_code == 422

    huge_total = client.post(
        "/sales",
        json={"items": [item], "payment": "10.00", "total": "100000000"},
        headers=cashier_headers,
    )
    assert huge_total.status_code == 422

    huge_line = client.post(
        "/sales",
        json={"items": [{"product_id": 7, "quantity": 5, "unit_price": "99999999.00"}], "payment": "10.00"},
        headers=cashier_headers,
    )
    assert huge_line.status_code == 422
    assert huge_line.json()["detail"] == "amount out of range"

    db.expire_all()
    assert db.query(Sale).count() == 0
