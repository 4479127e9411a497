"""
Orchestrateur de checkout: frontière de confiance entre le panier client et le prestataire de paiement.

- Les prix envoyés par le client sont ignorés: chaque ligne est re-tarifée depuis le catalogue.
- Les identifiants produits soumis servent à router la règle d'exception des frais de port.
- Construction tout-ou-rien: la moindre erreur interrompt la commande, aucun manifeste partiel.
- Ne modifie jamais les objets reçus; ne contacte jamais le prestataire.
"""
import logging
from typing import Any, Iterable, Optional

from storefront import config
from storefront.cart.models import CartLine, options_text
from storefront.catalog.models import Catalog
from storefront.catalog.repository import catalog_currency, get_product
from storefront.delivery.models import PROVIDER_COLLECTED, DeliveryRequest
from storefront.delivery.planner import validate_addresses
from storefront.errors import EmptyCart, InvalidPrice, MissingDeliveryDate, TooManyDeliveries, UnknownProduct
from storefront.pricing import resolve_price
from storefront.shipping import ShippingRates, shipping_per_delivery
from .models import CheckoutLine, DeliveryInfo, ManifestLine, OrderManifest, ShippingLine

logger = logging.getLogger(__name__)


def shipping_label(delivery_count: int) -> str:
    return f"Shipping ({delivery_count} {'delivery' if delivery_count == 1 else 'deliveries'})"


def _as_line(line: Any) -> CheckoutLine:
    if isinstance(line, CheckoutLine):
        return line
    if isinstance(line, CartLine):
        return CheckoutLine.from_cart_line(line)
    return CheckoutLine.model_validate(line)


# module storefront.checkout.orchestrator
def build_order(
    catalog: Catalog,
    cart_lines: Iterable[Any],
    delivery: Any,
    rates: Optional[ShippingRates] = None,
) -> OrderManifest:
    """
    Construit le manifeste faisant foi à partir d'un panier et d'une demande de livraison non fiables.
    Étapes:
      1) panier vide -> EmptyCart
      2) pour chaque ligne: produit inconnu -> UnknownProduct; prix re-résolu (MissingSelection possible);
         prix <= 0 -> InvalidPrice
      3) frais de port (composition soumise, nombre de livraisons, palier)
      4) date de livraison absente -> MissingDeliveryDate (le plancher en jours ouvrés n'est pas vérifié ici)
      5) nombre de livraisons > MAX_DELIVERIES -> TooManyDeliveries
      6) mode multi-adresses -> DeliveryCountMismatch / IncompleteAddress(index, champs)
    """
    lines = [_as_line(line) for line in cart_lines or []]
    if not lines:
        raise EmptyCart()

    request = delivery if isinstance(delivery, DeliveryRequest) else DeliveryRequest.model_validate(delivery or {})

    priced = []
    for line in lines:
        product = get_product(catalog, line.id)
        if product is None:
            raise UnknownProduct(line.id)
        unit_price = resolve_price(product, line.options)
        if unit_price <= 0:
            raise InvalidPrice(product.id, unit_price)
        priced.append(ManifestLine(
            product_id=product.id,
            name=product.name,
            options=dict(line.options),
            options_text=options_text(line.options),
            note=line.note,
            unit_price=unit_price,
            quantity=line.quantity,
        ))

    per_delivery = shipping_per_delivery(lines, request.speed, rates)
    shipping = ShippingLine(
        name=shipping_label(request.count),
        per_delivery=per_delivery,
        delivery_count=request.count,
    )

    if request.delivery_date is None:
        raise MissingDeliveryDate()

    if request.count > config.MAX_DELIVERIES:
        raise TooManyDeliveries(maximum=config.MAX_DELIVERIES, received=request.count)

    if request.multi_address:
        addresses = validate_addresses(request.addresses, request.count)
    else:
        addresses = PROVIDER_COLLECTED

    manifest = OrderManifest(
        currency=catalog_currency(catalog),
        lines=priced,
        shipping=shipping,
        delivery=DeliveryInfo(
            speed=request.speed,
            date=request.delivery_date.isoformat(),
            count=request.count,
            addresses=addresses,
        ),
    )
    logger.info(
        "checkout.build_order lines=%s deliveries=%s speed=%s subtotal=%.2f shipping=%.2f total=%.2f",
        len(priced), request.count, request.speed.value, manifest.subtotal, shipping.amount, manifest.total,
    )
    return manifest
