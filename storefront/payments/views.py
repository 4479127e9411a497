import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.catalog.models import Catalog
from storefront.catalog.views import get_catalog
from storefront.checkout import CheckoutRequest
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/payments", tags=["Payments API"])


def _request_origin(request: Request) -> str:
    origin = request.headers.get("origin")
    if origin and origin != "null":
        return origin
    return str(request.base_url).rstrip("/")


# module storefront.payments.views
@router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_checkout_session(
    body: CheckoutRequest,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
):
    """
    Crée une session Checkout Stripe pour le panier soumis.
    - Entrée JSON: { "cart": [...], "deliveryCount", "deliverySpeed", "deliveryDate", "addresses"? }
    - Étapes:
      1) Re-tarifer le panier depuis le catalogue (prix client ignorés) -> manifeste
      2) Construire line_items + metadata
      3) Créer la session Stripe et renvoyer {id, url}
    - Erreurs: 400 {error, details} pour un panier/une livraison invalide, 502 si Stripe échoue
    """
    success_url, cancel_url = payments_service.checkout_urls(_request_origin(request))
    result = payments_service.process_checkout(
        catalog=catalog,
        request=body,
        success_url=success_url,
        cancel_url=cancel_url,
    )
    return JSONResponse({"id": result["id"], "url": result["url"]})


@router.get("/session")
def get_checkout_session(session_id: Optional[str] = None):
    """
    Vérifie une session Checkout (page de succès).
    - Retour: {id, status, payment_status, amount_total, currency, delivery}
    - Erreurs: 400 si session_id manquant, 502 si Stripe échoue
    """
    if not session_id:
        raise HTTPException(status_code=400, detail="Missing session_id")
    return payments_service.verify_session(session_id)
