"""
Accès au catalogue (fichier JSON statique, chargé au déploiement).

Format attendu:
    {
      "currency": "gbp",
      "products": {
        "box-a": {"name": "...", "mode": "lookup", "option": "package", "prices": {"deluxe": 45}},
        ...
      }
    }
Toute anomalie (fichier absent, JSON invalide, entrée invalide, devises mélangées)
lève CatalogError: c'est une erreur de configuration fatale, pas une erreur de commande.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from storefront.errors import CatalogError
from .models import Catalog, Product

logger = logging.getLogger(__name__)

_product_adapter = TypeAdapter(Product)


# module storefront.catalog.repository
def parse_catalog(data: Dict[str, Any], default_currency: str = "gbp") -> Catalog:
    """
    Construit le dict {id: produit} depuis le contenu JSON déjà décodé.
    - L'identifiant est la clé de la table "products".
    - La devise d'un produit retombe sur la devise globale du fichier.
    - mode absent => "fixed".
    """
    if not isinstance(data, dict):
        raise CatalogError("Catalogue invalide: objet JSON attendu")
    currency = str(data.get("currency") or default_currency).lower()
    raw_products = data.get("products")
    if not isinstance(raw_products, dict) or not raw_products:
        raise CatalogError("Catalogue invalide: table 'products' vide ou absente")

    catalog: Catalog = {}
    for product_id, entry in raw_products.items():
        if not isinstance(entry, dict):
            raise CatalogError(f"Produit invalide: {product_id}")
        payload = {"mode": "fixed", "currency": currency, **entry, "id": str(product_id)}
        payload["currency"] = str(payload["currency"]).lower()
        try:
            product = _product_adapter.validate_python(payload)
        except ValidationError as e:
            raise CatalogError(f"Produit invalide: {product_id}: {e}") from e
        if product.currency != currency:
            raise CatalogError(
                f"Devise incohérente pour {product_id}: {product.currency} (catalogue: {currency})"
            )
        catalog[product.id] = product
    return catalog


def load_catalog(path: Path, default_currency: str = "gbp") -> Catalog:
    """
    Lit et valide le fichier catalogue.
    Erreurs: CatalogError si le fichier est absent ou illisible.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Catalogue introuvable: {path}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalogue JSON invalide: {path}: {e}") from e
    catalog = parse_catalog(data, default_currency=default_currency)
    logger.info("catalog.load path=%s products=%s", path, len(catalog))
    return catalog


def catalog_currency(catalog: Catalog, default: str = "gbp") -> str:
    for product in catalog.values():
        return product.currency
    return default


def get_product(catalog: Catalog, product_id: str) -> Optional[Product]:
    return catalog.get(str(product_id or "").strip())


def normalize_product(product: Product) -> Dict[str, Any]:
    """Vue publique d'un produit pour hydrater l'UI (prix affichés = indicatifs)."""
    out: Dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "currency": product.currency,
        "mode": product.mode,
    }
    if product.mode == "fixed":
        out["price"] = product.price
    elif product.mode == "lookup":
        out["option"] = product.option
        out["prices"] = dict(product.prices)
    else:
        out["price"] = product.price
        out["surcharges"] = {g: dict(v) for g, v in product.surcharges.items()}
    return out
