"""
Désérialisation des métadonnées de session Stripe (livraison, adresses, panier compact).
"""
import json
from typing import Any, Dict, List, Union

from storefront.delivery.models import PROVIDER_COLLECTED, normalize_delivery_count


def _parse_cart(raw: Any) -> List[Dict[str, Any]]:
    try:
        cart = json.loads(raw) if raw else []
    except (TypeError, ValueError):
        # Panier tronqué à 500 caractères => JSON potentiellement invalide
        cart = []
    return cart if isinstance(cart, list) else []


# module storefront.payments.metadata
def extract_metadata_from_session(session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extrait les informations de livraison depuis session["metadata"].
    - Tolérant: valeurs absentes => défauts (1 livraison, standard, adresses collectées par le prestataire).
    """
    meta = (session or {}).get("metadata", {}) if isinstance(session, dict) else {}
    meta = meta or {}
    count = normalize_delivery_count(meta.get("deliveries_count"))
    raw_addresses = meta.get("addresses") or PROVIDER_COLLECTED
    addresses: Union[str, List[str]]
    if raw_addresses == PROVIDER_COLLECTED:
        addresses = PROVIDER_COLLECTED
    else:
        addresses = [meta[k] for k in (f"address_{i}" for i in range(1, count + 1)) if meta.get(k)]
    return {
        "deliveries_count": count,
        "delivery_speed": meta.get("delivery_speed") or "standard",
        "delivery_date": meta.get("delivery_date"),
        "addresses": addresses,
        "cart": _parse_cart(meta.get("cart")),
    }
