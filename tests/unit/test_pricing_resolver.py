import pytest

from storefront.catalog import BasePlusProduct, FixedProduct, LookupProduct
from storefront.errors import MissingSelection
from storefront.pricing import resolve_price, selected_values


def _lookup():
    return LookupProduct(id="box-a", mode="lookup", option="package", prices={"standard": 25, "deluxe": 45})


def _base_plus():
    return BasePlusProduct(
        id="hamper",
        mode="basePlus",
        price=40,
        surcharges={"wrap": {"gift": 5}, "extras": {"wine": 12, "chocolate": 6}},
    )


@pytest.mark.parametrize("options", [None, {}, {"size": "L"}, {"package": ["a", "b"]}])
def test_fixed_price_ignores_options(options):
    product = FixedProduct(id="card", price=4)
    assert resolve_price(product, options) == 4.0


def test_lookup_returns_price_of_selected_value():
    assert resolve_price(_lookup(), {"package": "deluxe"}) == 45.0
    assert resolve_price(_lookup(), {"package": ["standard"]}) == 25.0


@pytest.mark.parametrize("options", [None, {}, {"other": "deluxe"}, {"package": ""}, {"package": []}])
def test_lookup_without_selection_raises(options):
    with pytest.raises(MissingSelection) as exc:
        resolve_price(_lookup(), options)
    assert exc.value.details == {"product_id": "box-a", "option": "package"}
    assert exc.value.message == "Please pick a package first"


def test_lookup_unknown_value_resolves_to_zero():
    assert resolve_price(_lookup(), {"package": "mystery"}) == 0.0


def test_lookup_multiple_values_match_nothing():
    assert resolve_price(_lookup(), {"package": ["standard", "deluxe"]}) == 0.0


def test_base_plus_without_options_is_base_price():
    assert resolve_price(_base_plus(), {}) == 40.0


def test_base_plus_sums_surcharges_across_groups_and_values():
    options = {"wrap": "gift", "extras": ["wine", "chocolate"]}
    assert resolve_price(_base_plus(), options) == 40 + 5 + 12 + 6


def test_base_plus_ignores_unknown_groups_and_values():
    options = {"wrap": "paper", "engraving": "yes", "extras": ["wine", "caviar"]}
    assert resolve_price(_base_plus(), options) == 52.0


def test_unknown_product_type_is_rejected():
    with pytest.raises(TypeError):
        resolve_price(object(), {})


def test_selected_values_normalizes_inputs():
    assert selected_values("  deluxe ") == ["deluxe"]
    assert selected_values(["a", " ", None, "b"]) == ["a", "b"]
    assert selected_values(None) == []
    assert selected_values("") == []
