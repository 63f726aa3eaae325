from conftest import sign_in


def test_anonymous_cart_is_empty(client, catalog):
    assert client.get("/api/cart").json() == []


def test_anonymous_add_keeps_item_locally(client, catalog):
    response = client.post("/api/cart", json={"productId": catalog["table"], "quantity": 2})
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get("/api/cart").json() == []


def test_adding_same_product_increments_quantity(client, catalog):
    sign_in(client)
    client.post("/api/cart", json={"productId": catalog["table"]})
    response = client.post("/api/cart", json={"productId": catalog["table"], "quantity": 2})
    assert response.status_code == 200
    assert response.json()["quantity"] == 3

    items = client.get("/api/cart").json()
    assert len(items) == 1
    assert items[0]["product"]["name"] == "Classic Teak Dining Table"


def test_unknown_product_is_404(client, catalog):
    sign_in(client)
    assert client.post("/api/cart", json={"productId": 4242}).status_code == 404


def test_zero_quantity_is_rejected(client, catalog):
    sign_in(client)
    response = client.post("/api/cart", json={"productId": catalog["table"], "quantity": 0})
    assert response.status_code == 400


def test_update_and_remove_item(client, catalog):
    sign_in(client)
    item = client.post("/api/cart", json={"productId": catalog["chairs"]}).json()

    updated = client.put(f"/api/cart/{item['id']}", json={"quantity": 4})
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 4

    assert client.delete(f"/api/cart/{item['id']}").status_code == 200
    assert client.get("/api/cart").json() == []


def test_items_of_other_users_are_not_found(client, catalog):
    sign_in(client, email="asha@indosaga.in")
    item = client.post("/api/cart", json={"productId": catalog["chairs"]}).json()

    sign_in(client, email="ravi@indosaga.in", name="Ravi")
    assert client.put(f"/api/cart/{item['id']}", json={"quantity": 2}).status_code == 404
    assert client.delete(f"/api/cart/{item['id']}").status_code == 404


def test_clear_cart(client, catalog):
    sign_in(client)
    client.post("/api/cart", json={"productId": catalog["chairs"]})
    client.post("/api/cart", json={"productId": catalog["table"]})

    assert client.delete("/api/cart").status_code == 200
    assert client.get("/api/cart").json() == []


def test_update_requires_session(client, catalog):
    assert client.put("/api/cart/1", json={"quantity": 2}).status_code == 401


def test_sign_in_migrates_local_cart_and_skips_bad_entries(client, catalog):
    sign_in(client, local_cart_items=[
        {"productId": catalog["table"], "quantity": 2},
        {"id": catalog["chairs"]},
        {"productId": 9999, "quantity": 1},
        {"productId": catalog["deal"], "quantity": 0},
        {"productId": "not-a-number"},
    ])

    items = {item["productId"]: item["quantity"] for item in client.get("/api/cart").json()}
    assert items == {catalog["table"]: 2, catalog["chairs"]: 1}


def test_migration_merges_with_existing_cart(client, catalog):
    sign_in(client)
    client.post("/api/cart", json={"productId": catalog["table"], "quantity": 1})
    client.post("/api/auth/logout")

    sign_in(client, local_cart_items=[{"productId": catalog["table"], "quantity": 2}])
    items = client.get("/api/cart").json()
    assert [(i["productId"], i["quantity"]) for i in items] == [(catalog["table"], 3)]
