from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from storefront.pricing import resolve_price
from .models import Catalog
from .repository import get_product, normalize_product

router = APIRouter(prefix="/api/v1/catalog", tags=["Catalog API"])


class PricePreviewRequest(BaseModel):
    options: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)


def get_catalog(request: Request) -> Catalog:
    """Catalogue chargé une fois au démarrage (lifespan), partagé en lecture seule."""
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(status_code=503, detail="Catalogue non chargé")
    return catalog


# module storefront.catalog.views
@router.get("")
def list_products(catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    """Produits normalisés pour hydrater l'UI (prix indicatifs, le checkout re-tarife)."""
    return {"products": [normalize_product(p) for p in catalog.values()]}


@router.get("/{product_id}")
def get_one(product_id: str, catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    product = get_product(catalog, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return normalize_product(product)


@router.post("/{product_id}/price")
def preview_price(
    product_id: str,
    body: PricePreviewRequest,
    catalog: Catalog = Depends(get_catalog),
) -> Dict[str, Any]:
    """
    Prix unitaire pour les options choisies (affichage sous les pastilles).
    - 400 MissingSelection si le groupe de prix n'est pas encore choisi.
    - valid=False si la valeur choisie n'a pas de prix (refusée au checkout).
    """
    product = get_product(catalog, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    price = resolve_price(product, body.options)
    return {"id": product.id, "price": price, "currency": product.currency, "valid": price > 0}
