import json

import pytest

from storefront.catalog import (
    BasePlusProduct,
    FixedProduct,
    LookupProduct,
    catalog_currency,
    get_product,
    load_catalog,
    normalize_product,
    parse_catalog,
)
from storefront.errors import CatalogError


def test_load_fixture_catalog(catalog):
    assert isinstance(catalog["holiday-cheer"], FixedProduct)
    assert isinstance(catalog["box-a"], LookupProduct)
    assert isinstance(catalog["hamper"], BasePlusProduct)
    assert catalog_currency(catalog) == "gbp"


def test_mode_defaults_to_fixed_and_id_comes_from_key():
    catalog = parse_catalog({"products": {"mug": {"name": "Mug", "price": 9}}})
    assert isinstance(catalog["mug"], FixedProduct)
    assert catalog["mug"].id == "mug"
    assert catalog["mug"].currency == "gbp"


def test_get_product_strips_identifier(catalog):
    assert get_product(catalog, "  card ").id == "card"
    assert get_product(catalog, "nope") is None
    assert get_product(catalog, None) is None


def test_mixed_currencies_are_rejected():
    data = {
        "currency": "gbp",
        "products": {"a": {"price": 1}, "b": {"price": 2, "currency": "eur"}},
    }
    with pytest.raises(CatalogError):
        parse_catalog(data)


@pytest.mark.parametrize("data", [
    [],
    {"products": {}},
    {"products": {"a": "not-an-object"}},
    {"products": {"a": {"mode": "lookup", "prices": {"x": 1}}}},
    {"products": {"a": {"price": -3}}},
    {"products": {"a": {"mode": "tiered", "price": 3}}},
])
def test_invalid_entries_raise_catalog_error(data):
    with pytest.raises(CatalogError):
        parse_catalog(data)


def test_missing_file_raises_catalog_error(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "absent.json")


def test_invalid_json_raises_catalog_error(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_reads_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"currency": "GBP", "products": {"mug": {"price": 9}}}), encoding="utf-8")
    catalog = load_catalog(path)
    assert catalog["mug"].currency == "gbp"


def test_normalize_product_per_mode(catalog):
    assert normalize_product(catalog["card"]) == {
        "id": "card", "name": "Card", "currency": "gbp", "mode": "fixed", "price": 4.0,
    }
    lookup = normalize_product(catalog["box-a"])
    assert lookup["option"] == "package"
    assert lookup["prices"]["deluxe"] == 45
    base_plus = normalize_product(catalog["hamper"])
    assert base_plus["price"] == 40
    assert base_plus["surcharges"]["extras"] == {"wine": 12, "chocolate": 6}
