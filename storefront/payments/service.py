"""
Cas d'usage 'payments': orchestre checkout (manifeste), line_items, stripe, metadata.
"""
import logging
from typing import Any, Dict, Tuple

from storefront import config
from storefront.catalog.models import Catalog
from storefront.checkout import CheckoutRequest, build_order
from storefront.shipping import ShippingRates
from . import line_items as line_items_logic
from . import stripe_client
from .metadata import extract_metadata_from_session

logger = logging.getLogger(__name__)


def checkout_urls(origin: str) -> Tuple[str, str]:
    """URLs absolues de succès/annulation construites depuis l'origine de la requête."""
    base = (origin or config.BASE_URL).rstrip("/")
    success_path = config.CHECKOUT_SUCCESS_PATH
    sep = "&" if "?" in success_path else "?"
    success_url = f"{base}{success_path}{sep}session_id={{CHECKOUT_SESSION_ID}}"
    cancel_url = f"{base}{config.CHECKOUT_CANCEL_PATH}"
    return success_url, cancel_url


def process_checkout(
    *,
    catalog: Catalog,
    request: CheckoutRequest,
    success_url: str,
    cancel_url: str,
) -> Dict[str, Any]:
    """
    Prépare la session Stripe à partir d'un panier client non fiable.
    success_url et cancel_url doivent être fournis par l'appelant (vue).
    Le panier de l'appelant n'est jamais modifié, même si Stripe échoue.
    """
    manifest = build_order(catalog, request.cart, request.to_delivery(), ShippingRates.from_config())
    line_items = line_items_logic.to_line_items(manifest)
    metadata = line_items_logic.make_metadata(manifest)
    session = stripe_client.create_session(
        line_items=line_items,
        mode="payment",
        success_url=success_url,
        cancel_url=cancel_url,
        metadata=metadata,
    )
    logger.info("payments.checkout session_id=%s total=%.2f", session.get("id"), manifest.total)
    return {"id": session.get("id"), "url": session.get("url"), "manifest": manifest}


def verify_session(session_id: str) -> Dict[str, Any]:
    """
    Lit une session Stripe et renvoie son état + les métadonnées de livraison décodées.
    """
    session = stripe_client.get_session(session_id)
    return {
        "id": session.get("id"),
        "status": session.get("status"),
        "payment_status": session.get("payment_status"),
        "amount_total": session.get("amount_total"),
        "currency": session.get("currency"),
        "delivery": extract_metadata_from_session(session),
    }
