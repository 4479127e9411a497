def _add(client, **body):
    return client.post("/api/v1/cart/items", json=body)


def test_empty_cart(client):
    res = client.get("/api/v1/cart")
    assert res.status_code == 200
    data = res.json()
    assert data["lines"] == []
    assert data["total_quantity"] == 0
    assert data["shipping"]["amount"] == 0
    assert data["total"] == 0


def test_add_resolves_price_from_catalog_and_merges(client):
    _add(client, id="box-a", quantity=1, options={"package": "deluxe"})
    res = _add(client, id="box-a", quantity=2, options={"package": ["deluxe"]})
    assert res.status_code == 200
    data = res.json()
    assert len(data["lines"]) == 1
    line = data["lines"][0]
    assert line["price"] == 45
    assert line["quantity"] == 3
    assert line["options_text"] == "package: deluxe"
    assert data["subtotal"] == 135
    assert data["shipping"] == {"per_delivery": 11.0, "deliveries": 1, "amount": 11.0}
    assert data["total"] == 146


def test_cart_persists_in_session(client):
    _add(client, id="holiday-cheer")
    data = client.get("/api/v1/cart", params={"deliveries": 2}).json()
    assert data["total_quantity"] == 1
    assert data["shipping"] == {"per_delivery": 8.0, "deliveries": 2, "amount": 16.0}


def test_add_errors(client):
    res = _add(client, id="ghost")
    assert res.status_code == 400
    assert res.json()["error"] == "UnknownProduct"

    res = _add(client, id="box-a")
    assert res.status_code == 400
    assert res.json()["error"] == "MissingSelection"
    assert res.json()["message"] == "Please pick a package first"

    res = _add(client, id="box-a", options={"package": "sample"})
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidPrice"

    res = _add(client, id="card", quantity=0)
    assert res.status_code == 422
    assert res.json()["error"] == "InvalidRequest"

    assert client.get("/api/v1/cart").json()["lines"] == []


def test_quantity_controls(client):
    ref = _add(client, id="card", quantity=2).json()["lines"][0]["ref"]

    data = client.post(f"/api/v1/cart/items/{ref}/increment").json()
    assert data["lines"][0]["quantity"] == 3

    data = client.patch(f"/api/v1/cart/items/{ref}", json={"quantity": 1}).json()
    assert data["lines"][0]["quantity"] == 1

    data = client.post(f"/api/v1/cart/items/{ref}/decrement").json()
    assert data["lines"] == []

    # Référence disparue: sans effet
    res = client.post(f"/api/v1/cart/items/{ref}/decrement")
    assert res.status_code == 200
    assert res.json()["lines"] == []


def test_remove_and_clear(client):
    ref = _add(client, id="card").json()["lines"][0]["ref"]
    _add(client, id="holiday-cheer")

    data = client.delete(f"/api/v1/cart/items/{ref}").json()
    assert [l["id"] for l in data["lines"]] == ["holiday-cheer"]

    data = client.delete("/api/v1/cart").json()
    assert data["lines"] == []
    assert client.get("/api/v1/cart").json()["total_quantity"] == 0


def test_cart_responses_are_not_cached(client):
    res = client.get("/api/v1/cart")
    assert "no-store" in res.headers["cache-control"]
