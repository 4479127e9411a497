# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env (les variables déjà exportées restent prioritaires)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose le chemin du catalogue et la devise
- Expose les grilles de frais de port (standard, exception, express)
- Normalise les secrets Stripe et les chemins de redirection du checkout
- Sécurité cookies, CORS/hosts
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _float_env(name: str, default: float | None) -> float | None:
    raw = _clean_env(os.getenv(name, ""))
    if not raw:
        return default
    if raw.lower() in ("none", "off", "disabled"):
        return None
    return float(raw)

# Catalogue: fichier JSON chargé au démarrage (absence = erreur fatale)
CATALOG_PATH = Path(_clean_env(os.getenv("CATALOG_PATH") or "") or BASE_DIR / "data" / "catalog.json")
CURRENCY = _clean_env(os.getenv("CURRENCY") or "gbp").lower()

# Frais de port par livraison (en livres, pas en pence)
SHIPPING_STANDARD_RATE = _float_env("SHIPPING_STANDARD_RATE", 11.0)
SHIPPING_EXCEPTION_RATE = _float_env("SHIPPING_EXCEPTION_RATE", 8.0)
SHIPPING_EXCEPTION_IDS = frozenset(
    i.strip().lower()
    for i in os.getenv("SHIPPING_EXCEPTION_IDS", "holiday-cheer,joyful-baskets").split(",")
    if i.strip()
)
# Tarif express: "none" pour désactiver (l'express retombe alors sur la grille standard)
SHIPPING_EXPRESS_RATE = _float_env("SHIPPING_EXPRESS_RATE", 15.0)

# Cookies / session (le panier serveur vit dans la session signée)
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
SESSION_SECRET_KEY = _clean_env(os.getenv("SESSION_SECRET_KEY") or "replace_me_with_a_long_random_secret")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Stripe: clés publiques/privées
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")

# Pages de succès/annulation du checkout (relatives à l'origine de la requête)
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/checkout/success")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/checkout/cancel")

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")

# Plafond du nombre de livraisons: 50 clés de metadata Stripe, dont 6 fixes + une par adresse
MAX_DELIVERIES = min(44, int(_clean_env(os.getenv("MAX_DELIVERIES") or "") or 40))
