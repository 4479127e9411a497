"""
API panier: le modèle Cart persisté dans la session signée (stockage clé-valeur opaque).
Les prix stockés sont des instantanés d'affichage; le checkout re-tarife toujours.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from storefront.catalog.models import Catalog
from storefront.catalog.repository import get_product
from storefront.catalog.views import get_catalog
from storefront.delivery.models import SpeedTier, normalize_delivery_count
from storefront.errors import InvalidPrice, UnknownProduct
from storefront.pricing import resolve_price
from storefront.shipping import ShippingRates, shipping_per_delivery
from .models import Cart, CartLine
from .storage import clear_cart, load_cart, save_cart

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])


class AddItemRequest(BaseModel):
    id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    options: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    note: Optional[str] = None


class SetQuantityRequest(BaseModel):
    quantity: int


def cart_payload(cart: Cart, deliveries: Any = 1, speed: Any = None) -> Dict[str, Any]:
    """Vue du panier pour l'UI: lignes, badge (quantité totale), sous-total et estimation du port."""
    count = normalize_delivery_count(deliveries)
    per_delivery = shipping_per_delivery(cart, speed, ShippingRates.from_config())
    shipping = per_delivery * count if len(cart) else 0.0
    return {
        "lines": [
            {
                "ref": line.ref,
                "id": line.id,
                "name": line.name,
                "price": line.price,
                "quantity": line.quantity,
                "options": line.options,
                "options_text": line.options_text,
                "note": line.note,
                "line_total": round(line.line_total, 2),
            }
            for line in cart.lines()
        ],
        "total_quantity": cart.total_quantity,
        "subtotal": round(cart.subtotal, 2),
        "shipping": {"per_delivery": per_delivery, "deliveries": count, "amount": round(shipping, 2)},
        "total": round(cart.subtotal + shipping, 2),
    }


# module storefront.cart.views
@router.get("")
def read_cart(request: Request, deliveries: int = 1, speed: SpeedTier = SpeedTier.STANDARD):
    return cart_payload(load_cart(request.session), deliveries, speed)


@router.post("/items")
def add_item(body: AddItemRequest, request: Request, catalog: Catalog = Depends(get_catalog)):
    """
    Ajoute un article: prix résolu depuis le catalogue au moment de l'ajout (instantané).
    - 400 UnknownProduct / MissingSelection ("choisissez un forfait") / InvalidPrice.
    - Même produit + mêmes options => quantités fusionnées.
    """
    product = get_product(catalog, body.id)
    if product is None:
        raise UnknownProduct(body.id)
    price = resolve_price(product, body.options)
    if price <= 0:
        raise InvalidPrice(product.id, price)

    cart = load_cart(request.session)
    line = cart.add(CartLine(
        id=product.id,
        name=product.name,
        price=price,
        quantity=body.quantity,
        options=body.options,
        note=body.note,
    ))
    save_cart(request.session, cart)
    logger.info("cart.add product_id=%s quantity=%s lines=%s", product.id, line.quantity, len(cart))
    return cart_payload(cart)


@router.patch("/items/{ref}")
def set_item_quantity(ref: str, body: SetQuantityRequest, request: Request):
    """Fixe la quantité exacte; <= 0 supprime la ligne; référence inconnue = sans effet."""
    cart = load_cart(request.session)
    line = cart.find(ref)
    if line is not None:
        cart.set_quantity(line.key, body.quantity)
        save_cart(request.session, cart)
    return cart_payload(cart)


@router.post("/items/{ref}/increment")
def increment_item(ref: str, request: Request):
    cart = load_cart(request.session)
    line = cart.find(ref)
    if line is not None:
        cart.increment(line.key)
        save_cart(request.session, cart)
    return cart_payload(cart)


@router.post("/items/{ref}/decrement")
def decrement_item(ref: str, request: Request):
    cart = load_cart(request.session)
    line = cart.find(ref)
    if line is not None:
        cart.decrement(line.key)
        save_cart(request.session, cart)
    return cart_payload(cart)


@router.delete("/items/{ref}")
def remove_item(ref: str, request: Request):
    cart = load_cart(request.session)
    line = cart.find(ref)
    if line is not None:
        cart.remove(line.key)
        save_cart(request.session, cart)
    return cart_payload(cart)


@router.delete("")
def clear(request: Request):
    clear_cart(request.session)
    return cart_payload(Cart())
