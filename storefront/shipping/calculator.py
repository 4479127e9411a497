"""
Calcul des frais de port (logique pure).

Deux grilles indépendantes:
- grille standard/exception: tarif réduit uniquement si TOUTES les lignes sont des SKU d'exception
  (tout ou rien par panier, pas par ligne);
- grille par palier de rapidité: l'express a son propre tarif forfaitaire s'il est configuré.
L'express configuré l'emporte; sinon (standard ou express non configuré) la grille
standard/exception s'applique.
"""
from typing import Any, Iterable, Optional, Union

from storefront import config
from storefront.delivery.models import SpeedTier, normalize_delivery_count


class ShippingRates:
    def __init__(
        self,
        standard: float = 11.0,
        exception: float = 8.0,
        exception_ids: Iterable[str] = ("holiday-cheer", "joyful-baskets"),
        express: Optional[float] = None,
    ):
        self.standard = float(standard)
        self.exception = float(exception)
        self.exception_ids = frozenset(str(i).strip().lower() for i in exception_ids)
        self.express = float(express) if express is not None else None

    @classmethod
    def from_config(cls) -> "ShippingRates":
        return cls(
            standard=config.SHIPPING_STANDARD_RATE,
            exception=config.SHIPPING_EXCEPTION_RATE,
            exception_ids=config.SHIPPING_EXCEPTION_IDS,
            express=config.SHIPPING_EXPRESS_RATE,
        )

    def __repr__(self) -> str:
        return (
            f"ShippingRates(standard={self.standard}, exception={self.exception}, "
            f"exception_ids={sorted(self.exception_ids)}, express={self.express})"
        )


def _line_id(item: Any) -> str:
    if isinstance(item, dict):
        raw = item.get("id")
    else:
        raw = getattr(item, "id", None)
    return str(raw or "").strip().lower()


def cart_has_only_exception_items(cart: Iterable[Any], rates: Optional[ShippingRates] = None) -> bool:
    rates = rates or ShippingRates.from_config()
    ids = [_line_id(item) for item in cart or []]
    if not ids:
        return False
    return all(i in rates.exception_ids for i in ids)


# module storefront.shipping.calculator
def shipping_per_delivery(
    cart: Iterable[Any],
    speed: Union[SpeedTier, str, None] = SpeedTier.STANDARD,
    rates: Optional[ShippingRates] = None,
) -> float:
    """
    Frais pour UNE livraison.
    - express configuré -> tarif express
    - sinon: tarif exception si le panier (non vide) ne contient que des SKU d'exception, tarif standard sinon
    """
    rates = rates or ShippingRates.from_config()
    tier = SpeedTier.parse(speed)
    if tier is SpeedTier.EXPRESS and rates.express is not None:
        return rates.express
    return rates.exception if cart_has_only_exception_items(cart, rates) else rates.standard


def total_shipping(
    cart: Iterable[Any],
    delivery_count: Any = 1,
    speed: Union[SpeedTier, str, None] = SpeedTier.STANDARD,
    rates: Optional[ShippingRates] = None,
) -> float:
    """Frais par livraison x max(1, nombre de livraisons)."""
    return shipping_per_delivery(cart, speed, rates) * normalize_delivery_count(delivery_count)
