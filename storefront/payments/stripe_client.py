"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import logging
from typing import Any, Dict, List

import stripe

from storefront import config
from storefront.errors import PaymentProviderError

logger = logging.getLogger(__name__)


# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - PaymentProviderError si la clé est absente (aucun appel ne pourrait aboutir).
    """
    if not config.STRIPE_SECRET_KEY:
        raise PaymentProviderError("STRIPE_SECRET_KEY manquant")
    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe


def _as_dict(obj: Any) -> Dict[str, Any]:
    # Les objets Stripe exposent to_dict(); les mocks de tests renvoient des dicts
    if isinstance(obj, dict):
        return obj
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)


def create_session(
    *,
    line_items: List[Dict[str, Any]],
    mode: str,
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout.
    - line_items: lignes Stripe (price_data + quantity)
    - mode: généralement "payment"
    - success_url / cancel_url: URLs absolues de redirection
    - metadata: livraison, adresses, panier compact
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
    """
    require_stripe()
    try:
        session = stripe.checkout.Session.create(
            line_items=line_items,
            mode=mode,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
            payment_method_types=["card"],
        )
    except stripe.StripeError as e:
        logger.exception("payments.stripe_client.create_session failed")
        raise PaymentProviderError("Checkout failed", reason=getattr(e, "user_message", None) or str(e)) from e
    return _as_dict(session)


def get_session(session_id: str) -> Dict[str, Any]:
    """
    Récupère une session Stripe Checkout par son identifiant.
    Retour: dict session incluant "id", "status", "payment_status", "amount_total", "metadata", etc.
    """
    require_stripe()
    try:
        session = stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as e:
        logger.exception("payments.stripe_client.get_session failed session_id=%s", session_id)
        raise PaymentProviderError("Session introuvable", reason=str(e)) from e
    return _as_dict(session)
