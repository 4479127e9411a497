"""
Module 'catalog': schéma des produits et chargement du fichier catalogue.
"""
from .models import BasePlusProduct, Catalog, FixedProduct, LookupProduct, Product
from .repository import catalog_currency, get_product, load_catalog, normalize_product, parse_catalog

__all__ = [
    "BasePlusProduct",
    "Catalog",
    "FixedProduct",
    "LookupProduct",
    "Product",
    "catalog_currency",
    "get_product",
    "load_catalog",
    "normalize_product",
    "parse_catalog",
]
