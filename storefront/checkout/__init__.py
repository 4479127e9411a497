"""
Module 'checkout': re-tarification faisant foi et manifeste de commande.
"""
from .models import CheckoutLine, CheckoutRequest, DeliveryInfo, ManifestLine, OrderManifest, ShippingLine
from .orchestrator import build_order, shipping_label

__all__ = [
    "CheckoutLine",
    "CheckoutRequest",
    "DeliveryInfo",
    "ManifestLine",
    "OrderManifest",
    "ShippingLine",
    "build_order",
    "shipping_label",
]
