"""
Module 'delivery': paliers de rapidité, dates plancher en jours ouvrés, validation des adresses.
"""
from .models import PROVIDER_COLLECTED, Address, DeliveryRequest, SpeedTier, normalize_delivery_count
from .planner import (
    ADDRESS_MIN_LENGTHS,
    BUSINESS_DAYS,
    add_business_days,
    address_errors,
    address_report,
    earliest_date,
    is_business_day,
    satisfies_floor,
    validate_addresses,
)

__all__ = [
    "PROVIDER_COLLECTED",
    "Address",
    "DeliveryRequest",
    "SpeedTier",
    "normalize_delivery_count",
    "ADDRESS_MIN_LENGTHS",
    "BUSINESS_DAYS",
    "add_business_days",
    "address_errors",
    "address_report",
    "earliest_date",
    "is_business_day",
    "satisfies_floor",
    "validate_addresses",
]
