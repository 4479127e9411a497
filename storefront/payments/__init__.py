"""
Module 'payments' (feature-first): point d'entrée public.
Réunit conversion manifeste -> Stripe, metadata Stripe, client Stripe et services.
"""

from .line_items import MAX_METADATA_VALUE, make_metadata, to_line_items, to_minor_units
from .metadata import extract_metadata_from_session
from .stripe_client import create_session, get_session, require_stripe
from .service import checkout_urls, process_checkout, verify_session

__all__ = [
    # line items
    "MAX_METADATA_VALUE",
    "make_metadata",
    "to_line_items",
    "to_minor_units",
    # metadata
    "extract_metadata_from_session",
    # stripe
    "require_stripe",
    "create_session",
    "get_session",
    # services
    "checkout_urls",
    "process_checkout",
    "verify_session",
]
