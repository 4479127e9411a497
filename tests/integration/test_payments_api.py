def _body(**kwargs):
    body = {
        "cart": [{"id": "box-a", "options": {"package": "deluxe"}, "quantity": 2, "price": 0.01}],
        "deliveryCount": 1,
        "deliverySpeed": "standard",
        "deliveryDate": "2030-01-15",
    }
    body.update(kwargs)
    return body


def test_checkout_returns_session_url(client, stripe_calls):
    res = client.post("/api/v1/payments/checkout", json=_body(), headers={"origin": "https://shop.example"})
    assert res.status_code == 200
    assert res.json() == {"id": "cs_test_123", "url": "https://example.test/checkout"}

    sent = stripe_calls["create"][0]
    assert sent["success_url"] == "https://shop.example/checkout/success?session_id={CHECKOUT_SESSION_ID}"
    assert sent["cancel_url"] == "https://shop.example/checkout/cancel"
    total = sum(i["quantity"] * i["price_data"]["unit_amount"] for i in sent["line_items"])
    assert total == 10100


def test_checkout_without_origin_uses_request_base_url(client, stripe_calls):
    res = client.post("/api/v1/payments/checkout", json=_body())
    assert res.status_code == 200
    assert stripe_calls["create"][0]["success_url"].startswith("http://testserver/checkout/success")


def test_checkout_rejected_cart_never_reaches_stripe(client, stripe_calls):
    res = client.post("/api/v1/payments/checkout", json=_body(cart=[{"id": "ghost", "quantity": 1}]))
    assert res.status_code == 400
    assert res.json()["error"] == "UnknownProduct"
    assert stripe_calls["create"] == []


def test_checkout_provider_failure(client, monkeypatch):
    import stripe

    def _boom(**kwargs):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(stripe.checkout.Session, "create", _boom)
    res = client.post("/api/v1/payments/checkout", json=_body())
    assert res.status_code == 502
    assert res.json()["error"] == "PaymentProviderError"


def test_verify_session(client):
    res = client.get("/api/v1/payments/session", params={"session_id": "cs_test_123"})
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "complete"
    assert data["delivery"]["deliveries_count"] == 1
    assert data["delivery"]["addresses"] == "provider-collected"


def test_verify_session_requires_id(client):
    res = client.get("/api/v1/payments/session")
    assert res.status_code == 400
    assert res.json() == {"error": "Missing session_id"}
