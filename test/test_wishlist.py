from conftest import sign_in


def test_anonymous_wishlist(client, catalog):
    assert client.get("/api/wishlist").json() == []
    assert client.post("/api/wishlist", json={"productId": catalog["table"]}).status_code == 401
    assert client.delete(f"/api/wishlist/{catalog['table']}").status_code == 401


def test_add_is_idempotent(client, catalog):
    sign_in(client)
    first = client.post("/api/wishlist", json={"productId": catalog["table"]}).json()
    second = client.post("/api/wishlist", json={"productId": catalog["table"]}).json()
    assert first["id"] == second["id"]

    items = client.get("/api/wishlist").json()
    assert len(items) == 1
    assert items[0]["product"]["id"] == catalog["table"]


def test_remove_from_wishlist(client, catalog):
    sign_in(client)
    client.post("/api/wishlist", json={"productId": catalog["chairs"]})
    assert client.delete(f"/api/wishlist/{catalog['chairs']}").status_code == 200
    assert client.get("/api/wishlist").json() == []


def test_unknown_product_is_404(client, catalog):
    sign_in(client)
    assert client.post("/api/wishlist", json={"productId": 9999}).status_code == 404
