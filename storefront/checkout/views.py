from fastapi import APIRouter, Depends

from storefront.catalog.models import Catalog
from storefront.catalog.views import get_catalog
from storefront.shipping import ShippingRates
from .models import CheckoutRequest
from .orchestrator import build_order

router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout API"])


# module storefront.checkout.views
@router.post("/quote")
def quote(body: CheckoutRequest, catalog: Catalog = Depends(get_catalog)):
    """
    Manifeste faisant foi (prix serveur, port, livraison) sans créer de session de paiement.
    Même validation que /api/v1/payments/checkout: 400 {error, details} en cas de refus.
    """
    manifest = build_order(catalog, body.cart, body.to_delivery(), ShippingRates.from_config())
    return manifest.model_dump(mode="json")
