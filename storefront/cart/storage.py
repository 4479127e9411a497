"""
Sérialisation du panier vers/depuis un stockage clé-valeur opaque
(session signée côté serveur, localStorage côté client...).
Tolérant aux erreurs: un contenu absent, illisible ou invalide donne un panier vide.
"""
import json
import logging
from typing import Any, List, MutableMapping

from pydantic import TypeAdapter, ValidationError

from .models import Cart, CartLine

logger = logging.getLogger(__name__)

CART_KEY = "storefront_cart_v1"

_lines_adapter = TypeAdapter(List[CartLine])


def dumps_cart(cart: Cart) -> str:
    return json.dumps([line.model_dump(exclude_none=True) for line in cart.lines()])


def loads_cart(raw: Any) -> Cart:
    """
    Reconstruit un Cart depuis un JSON (str/bytes) ou une liste déjà décodée.
    - Retourne Cart() vide si raw est vide, non-JSON, pas une liste ou contient une ligne invalide.
    """
    if not raw:
        return Cart()
    try:
        data = json.loads(raw) if isinstance(raw, (str, bytes, bytearray)) else raw
        if not isinstance(data, list):
            return Cart()
        return Cart(_lines_adapter.validate_python(data))
    except (ValueError, TypeError, ValidationError):
        logger.warning("cart.storage contenu invalide, panier réinitialisé")
        return Cart()


# module storefront.cart.storage
def load_cart(store: MutableMapping[str, Any], key: str = CART_KEY) -> Cart:
    try:
        raw = store.get(key)
    except Exception:
        logger.exception("cart.storage lecture impossible key=%s", key)
        return Cart()
    return loads_cart(raw)


def save_cart(store: MutableMapping[str, Any], cart: Cart, key: str = CART_KEY) -> None:
    store[key] = dumps_cart(cart)


def clear_cart(store: MutableMapping[str, Any], key: str = CART_KEY) -> None:
    store.pop(key, None)
