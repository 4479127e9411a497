"""
Conversion manifeste -> line_items/metadata Stripe (pas d'appel Stripe, pas d'E/S).
Seul endroit où les montants passent en unités mineures (pence).
"""
import json
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from storefront.checkout.models import OrderManifest
from storefront.delivery.models import PROVIDER_COLLECTED

# Limite Stripe: 500 caractères par valeur de metadata
MAX_METADATA_VALUE = 500


def to_minor_units(amount: float) -> int:
    """Montant en livres -> pence, demi-penny arrondi au supérieur (10.125 -> 1013)."""
    return int(Decimal(str(amount)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _line_name(name: str, options_text: str) -> str:
    return f"{name} ({options_text})" if options_text else name


# module storefront.payments.line_items
def to_line_items(manifest: OrderManifest) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe à partir du manifeste:
    - une ligne par article (prix serveur, quantité), nom enrichi des options;
    - une ligne "Shipping (N deliveries)" de quantité 1 (tarif x nombre de livraisons).
    """
    currency = manifest.currency
    line_items: List[Dict[str, Any]] = []
    for line in manifest.lines:
        product_data: Dict[str, Any] = {
            "name": _line_name(line.name, line.options_text),
            "metadata": {"product_id": line.product_id},
        }
        if line.note:
            product_data["description"] = line.note[:MAX_METADATA_VALUE]
        line_items.append({
            "quantity": line.quantity,
            "price_data": {
                "currency": currency,
                "unit_amount": to_minor_units(line.unit_price),
                "product_data": product_data,
            },
        })

    shipping = manifest.shipping
    line_items.append({
        "quantity": 1,
        "price_data": {
            "currency": currency,
            "unit_amount": to_minor_units(shipping.amount),
            "product_data": {
                "name": shipping.name,
                "metadata": {
                    f"shipping_per_delivery_{currency}": str(shipping.per_delivery),
                    "deliveries_count": str(shipping.delivery_count),
                },
            },
        },
    })
    return line_items


def make_metadata(manifest: OrderManifest) -> Dict[str, str]:
    """
    Sérialise les métadonnées de session:
    - deliveries_count, delivery_speed, delivery_date, shipping_per_delivery_<devise>
    - addresses: "provider-collected" ou nombre d'adresses, puis address_1..address_N (une clé par livraison)
    - cart: JSON compact [{id, quantity, options}] tronqué à 500 caractères
    """
    currency = manifest.currency
    delivery = manifest.delivery
    metadata: Dict[str, str] = {
        "deliveries_count": str(delivery.count),
        "delivery_speed": delivery.speed.value,
        "delivery_date": delivery.date,
        f"shipping_per_delivery_{currency}": str(manifest.shipping.per_delivery),
    }
    if isinstance(delivery.addresses, str):
        metadata["addresses"] = PROVIDER_COLLECTED
    else:
        metadata["addresses"] = str(len(delivery.addresses))
        for i, address in enumerate(delivery.addresses, start=1):
            metadata[f"address_{i}"] = address.one_line()[:MAX_METADATA_VALUE]

    cart_meta = [
        {"id": line.product_id, "quantity": line.quantity, "options": line.options}
        for line in manifest.lines
    ]
    metadata["cart"] = json.dumps(cart_meta, separators=(",", ":"))[:MAX_METADATA_VALUE]
    return metadata
