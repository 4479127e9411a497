import json

import pytest

from storefront.cart import CART_KEY, Cart, CartLine, clear_cart, dumps_cart, load_cart, loads_cart, save_cart


def test_save_then_load_preserves_lines_and_order():
    store = {}
    cart = Cart([
        CartLine(id="box-a", name="Box A", price=45, quantity=2, options={"package": "deluxe"}),
        CartLine(id="card", name="Card", price=4, note="Happy birthday"),
    ])
    save_cart(store, cart)
    assert CART_KEY in store

    restored = load_cart(store)
    assert [l.id for l in restored] == ["box-a", "card"]
    assert restored.lines()[0].quantity == 2
    assert restored.lines()[1].note == "Happy birthday"


@pytest.mark.parametrize("raw", [None, "", "{not json", "{}", '[{"id": ""}]', '[{"id": "x", "quantity": 0}]', 42])
def test_malformed_content_gives_empty_cart(raw):
    assert len(loads_cart(raw)) == 0


def test_duplicates_in_storage_are_merged():
    raw = json.dumps([
        {"id": "card", "quantity": 1},
        {"id": "card", "quantity": 2},
    ])
    cart = loads_cart(raw)
    assert len(cart) == 1
    assert cart.total_quantity == 3


def test_dumps_omits_empty_note():
    data = json.loads(dumps_cart(Cart([CartLine(id="card", price=4)])))
    assert data == [{"id": "card", "name": "Item", "price": 4.0, "quantity": 1, "options": {}}]


def test_clear_cart_is_idempotent():
    store = {CART_KEY: "[]"}
    clear_cart(store)
    clear_cart(store)
    assert store == {}
