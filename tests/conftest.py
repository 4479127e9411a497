import os
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest
import stripe
from fastapi.testclient import TestClient

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

# Environnement de test: à poser AVANT l'import de storefront (config lue à l'import)
os.environ["CATALOG_PATH"] = str(FIXTURES_DIR / "catalog.json")
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")

from storefront.app import app as fastapi_app  # noqa: E402
from storefront.catalog import load_catalog  # noqa: E402


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


@pytest.fixture(scope="session")
def app():
    return fastapi_app


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def catalog():
    return load_catalog(FIXTURES_DIR / "catalog.json")


# Mocks Stripe: aucune requête réseau, les appels sont enregistrés pour les assertions
@pytest.fixture(autouse=True)
def stripe_calls(monkeypatch) -> Dict[str, List[Dict[str, Any]]]:
    calls: Dict[str, List[Dict[str, Any]]] = {"create": [], "retrieve": []}

    def _fake_create(**kwargs):
        calls["create"].append(kwargs)
        return {"id": "cs_test_123", "url": "https://example.test/checkout"}

    def _fake_retrieve(session_id, **kwargs):
        calls["retrieve"].append({"id": session_id, **kwargs})
        return {
            "id": session_id,
            "status": "complete",
            "payment_status": "paid",
            "amount_total": 10100,
            "currency": "gbp",
            "metadata": {
                "deliveries_count": "1",
                "delivery_speed": "standard",
                "delivery_date": "2030-01-15",
                "addresses": "provider-collected",
                "cart": '[{"id":"box-a","quantity":2,"options":{"package":"deluxe"}}]',
            },
        }

    monkeypatch.setattr(stripe.checkout.Session, "create", _fake_create, raising=True)
    monkeypatch.setattr(stripe.checkout.Session, "retrieve", _fake_retrieve, raising=True)
    return calls
