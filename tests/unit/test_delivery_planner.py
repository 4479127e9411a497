from datetime import date

import pytest

from storefront.delivery import (
    Address,
    DeliveryRequest,
    SpeedTier,
    add_business_days,
    address_errors,
    address_report,
    earliest_date,
    satisfies_floor,
    validate_addresses,
)
from storefront.errors import DeliveryCountMismatch, IncompleteAddress

FRIDAY = date(2026, 10, 16)
VALID = {"name": "Ada Lovelace", "phone": "07700900123", "line1": "12 High Street", "city": "Leeds", "postcode": "LS1 4AP"}


def test_standard_floor_from_friday_skips_weekend():
    assert earliest_date(SpeedTier.STANDARD, FRIDAY) == date(2026, 10, 21)
    assert earliest_date("standard", FRIDAY).weekday() == 2


def test_express_floor_from_friday_is_monday():
    assert earliest_date("express", FRIDAY) == date(2026, 10, 19)


def test_floor_from_saturday_counts_from_monday():
    assert add_business_days(date(2026, 10, 17), 1) == date(2026, 10, 19)


def test_satisfies_floor_reports_without_correcting():
    too_early = date(2026, 10, 20)
    assert satisfies_floor(too_early, "standard", FRIDAY) is False
    assert satisfies_floor(date(2026, 10, 21), "standard", FRIDAY) is True
    assert satisfies_floor(too_early, "express", FRIDAY) is True


def test_valid_addresses_pass_and_are_normalized():
    padded = {k: f"  {v}  " for k, v in VALID.items()}
    result = validate_addresses([VALID, padded], expected_count=2)
    assert len(result) == 2
    assert all(isinstance(a, Address) for a in result)
    assert result[1].postcode == "LS1 4AP"


def test_count_mismatch():
    with pytest.raises(DeliveryCountMismatch) as exc:
        validate_addresses([VALID], expected_count=2)
    assert exc.value.details == {"expected": 2, "received": 1}


def test_first_invalid_address_is_reported_with_its_fields():
    bad = dict(VALID, postcode="LS1")
    with pytest.raises(IncompleteAddress) as exc:
        validate_addresses([VALID, bad], expected_count=2)
    assert exc.value.index == 1
    assert exc.value.fields == ["postcode"]


def test_validation_stops_at_first_failure():
    with pytest.raises(IncompleteAddress) as exc:
        validate_addresses([dict(VALID, name="A"), dict(VALID, city="")], expected_count=2)
    assert exc.value.index == 0
    assert exc.value.fields == ["name"]


def test_address_errors_lists_every_short_field():
    assert address_errors({}) == ["name", "phone", "line1", "city", "postcode"]
    assert address_errors(dict(VALID, phone="123 45", line1="1 A")) == ["phone", "line1"]


def test_address_report_covers_all_addresses():
    report = address_report([dict(VALID, city="X"), VALID, dict(VALID, postcode="")])
    assert report == [{"index": 0, "fields": ["city"]}, {"index": 2, "fields": ["postcode"]}]


def test_address_aliases_are_accepted():
    addr = Address.model_validate({"name": "Bo", "phone": "0123456", "address1": "1 Elm Rd", "city": "York", "postCode": "YO1 7"})
    assert addr.line1 == "1 Elm Rd"
    assert addr.postcode == "YO1 7"
    assert address_errors(addr) == []


def test_delivery_request_multi_address_mode():
    assert DeliveryRequest(count=1).multi_address is False
    assert DeliveryRequest(count=2).multi_address is True
    assert DeliveryRequest(count=1, addresses=[VALID]).multi_address is True


def test_delivery_request_normalizes_inputs():
    req = DeliveryRequest.model_validate({"count": "0", "speed": "EXPRESS", "delivery_date": " ", "addresses": None})
    assert req.count == 1
    assert req.speed is SpeedTier.EXPRESS
    assert req.delivery_date is None
    assert req.addresses == []
