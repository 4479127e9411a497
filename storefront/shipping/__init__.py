from .calculator import ShippingRates, cart_has_only_exception_items, shipping_per_delivery, total_shipping

__all__ = ["ShippingRates", "cart_has_only_exception_items", "shipping_per_delivery", "total_shipping"]
