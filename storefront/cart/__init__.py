"""
Module 'cart' (feature-first): modèle de panier, signature de fusion, stockage clé-valeur.
"""
from .models import ANNOTATION_FIELDS, Cart, CartKey, CartLine, canonical_options, key_ref, line_key, options_text
from .storage import CART_KEY, clear_cart, dumps_cart, load_cart, loads_cart, save_cart

__all__ = [
    # modèle
    "ANNOTATION_FIELDS",
    "Cart",
    "CartKey",
    "CartLine",
    "canonical_options",
    "key_ref",
    "line_key",
    "options_text",
    # stockage
    "CART_KEY",
    "clear_cart",
    "dumps_cart",
    "load_cart",
    "loads_cart",
    "save_cart",
]
