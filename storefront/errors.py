"""
Taxonomie des erreurs métier (panier, tarification, checkout).

- StorefrontError: base commune (code stable, statut HTTP, détails structurés).
- Erreurs de checkout: détectées de façon synchrone pendant la construction de la commande,
  jamais relancées automatiquement, jamais remplacées par une valeur par défaut.
- CatalogError: erreur de configuration fatale (catalogue absent/illisible), distincte
  des erreurs par requête.
"""
from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    code = "StorefrontError"
    status_code = 400

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.code
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class CheckoutError(StorefrontError):
    code = "CheckoutError"


class MissingSelection(CheckoutError):
    """Le mode de prix exige une option pas encore choisie ("choisissez un forfait")."""
    code = "MissingSelection"

    def __init__(self, product_id: str, option: str):
        super().__init__(
            f"Please pick a {option} first",
            product_id=product_id,
            option=option,
        )


class InvalidPrice(CheckoutError):
    code = "InvalidPrice"

    def __init__(self, product_id: str, price: float):
        super().__init__(f"Invalid price for item: {product_id}", product_id=product_id, price=price)


class UnknownProduct(CheckoutError):
    code = "UnknownProduct"

    def __init__(self, product_id: str):
        super().__init__(f"Unknown product: {product_id}", product_id=product_id)


class EmptyCart(CheckoutError):
    code = "EmptyCart"

    def __init__(self):
        super().__init__("Cart is empty")


class MissingDeliveryDate(CheckoutError):
    code = "MissingDeliveryDate"

    def __init__(self):
        super().__init__("Delivery date is required")


class DeliveryCountMismatch(CheckoutError):
    code = "DeliveryCountMismatch"

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"Expected {expected} addresses, got {received}",
            expected=expected,
            received=received,
        )


class TooManyDeliveries(CheckoutError):
    """Une adresse par livraison doit tenir dans les métadonnées de session (50 clés max chez Stripe)."""
    code = "TooManyDeliveries"

    def __init__(self, maximum: int, received: int):
        super().__init__(
            f"At most {maximum} deliveries per order, got {received}",
            maximum=maximum,
            received=received,
        )


class IncompleteAddress(CheckoutError):
    code = "IncompleteAddress"

    def __init__(self, index: int, fields: List[str]):
        self.index = index
        self.fields = list(fields)
        super().__init__(
            f"Address {index + 1} is incomplete: {', '.join(self.fields)}",
            index=index,
            fields=self.fields,
        )


class PaymentProviderError(StorefrontError):
    code = "PaymentProviderError"
    status_code = 502


class CatalogError(Exception):
    """Catalogue introuvable ou invalide: fatal pour le processus."""
