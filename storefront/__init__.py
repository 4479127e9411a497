"""Boutique: tarification du panier et orchestration du checkout (Stripe)."""

__version__ = "1.0.0"
